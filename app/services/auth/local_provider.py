"""Local password-based authentication provider."""
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Request
from sqlalchemy.orm import Session as DBSession

from app.config import settings
from app.models.session import Session
from app.models.user import USER_TYPE_ADMIN, USER_TYPE_USER, User
from app.services.auth.base import AuthProvider


class LocalAuthProvider(AuthProvider):
    """
    Password hashes (bcrypt) and sessions kept in the application database.
    """

    def _hash_password(self, password: str) -> str:
        return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')

    def _verify_password(self, plain_password: str, hashed_password: str) -> bool:
        return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))

    def _generate_session_token(self) -> str:
        return secrets.token_urlsafe(32)

    async def authenticate(self, db: DBSession, email: str, password: str) -> Optional[User]:
        user = db.query(User).filter(User.email == email.lower()).first()
        if not user or not user.password_hash:
            return None
        if not self._verify_password(password, user.password_hash):
            return None
        return user

    async def create_user(
        self,
        db: DBSession,
        email: str,
        password: str,
        name: Optional[str] = None,
        phone_number: Optional[str] = None,
        is_admin: bool = False,
    ) -> User:
        user = User(
            email=email.lower(),
            name=name,
            phone_number=phone_number,
            password_hash=self._hash_password(password),
            user_type=USER_TYPE_ADMIN if is_admin else USER_TYPE_USER,
        )
        db.add(user)
        db.commit()
        db.refresh(user)
        return user

    async def get_user_from_request(self, db: DBSession, request: Request) -> Optional[User]:
        token = request.cookies.get(settings.session_cookie_name)
        if not token:
            return None

        session = db.query(Session).filter(Session.token == token).first()
        if not session or _as_utc(session.expires_at) <= datetime.now(timezone.utc):
            return None

        return session.user

    async def create_session(self, db: DBSession, user: User, request: Request) -> str:
        token = self._generate_session_token()
        expires_at = datetime.now(timezone.utc) + timedelta(seconds=settings.session_max_age)

        session = Session(
            user_id=user.id,
            token=token,
            expires_at=expires_at,
            user_agent=request.headers.get("user-agent", "")[:512],
            ip_address=request.client.host if request.client else None,
        )
        db.add(session)
        db.commit()

        return token

    async def revoke_session(self, db: DBSession, token: str) -> bool:
        session = db.query(Session).filter(Session.token == token).first()
        if not session:
            return False
        db.delete(session)
        db.commit()
        return True


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# Singleton instance
local_auth_provider = LocalAuthProvider()
