"""Abstract base class for authentication providers."""
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Request
from sqlalchemy.orm import Session as DBSession

from app.models.user import User


class AuthProvider(ABC):
    """
    Authentication provider interface.

    The feedback flows only ever see the SessionContext built from the user
    this returns; how users and sessions are stored is up to the provider.
    """

    @abstractmethod
    async def authenticate(self, db: DBSession, email: str, password: str) -> Optional[User]:
        """Return the User if the credentials are valid, None otherwise."""
        pass

    @abstractmethod
    async def create_user(
        self,
        db: DBSession,
        email: str,
        password: str,
        name: Optional[str] = None,
        phone_number: Optional[str] = None,
        is_admin: bool = False,
    ) -> User:
        """Create and return a new user."""
        pass

    @abstractmethod
    async def get_user_from_request(self, db: DBSession, request: Request) -> Optional[User]:
        """Resolve the user behind the request's session cookie, if any."""
        pass

    @abstractmethod
    async def create_session(self, db: DBSession, user: User, request: Request) -> str:
        """Start a session and return the token to store in the cookie."""
        pass

    @abstractmethod
    async def revoke_session(self, db: DBSession, token: str) -> bool:
        """Invalidate a session. Returns False if it did not exist."""
        pass
