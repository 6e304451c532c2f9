"""FastAPI dependencies for authentication and the feedback session context."""
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.user import User
from app.services.auth import get_auth_provider
from app.services.auth.context import SessionContext


async def get_optional_user(
    request: Request,
    db: Session = Depends(get_db)
) -> Optional[User]:
    """The current user if authenticated, None otherwise."""
    auth_provider = get_auth_provider()
    return await auth_provider.get_user_from_request(db, request)


async def get_current_user(
    user: Optional[User] = Depends(get_optional_user)
) -> User:
    """The current user. Raises 401 if not authenticated."""
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated"
        )
    return user


async def get_optional_session(
    user: Optional[User] = Depends(get_optional_user)
) -> Optional[SessionContext]:
    """
    Session context for flows that decide themselves what to do without one.

    The submission flow raises AuthRequiredError on None, which the app turns
    into a login redirect.
    """
    return SessionContext.from_user(user) if user else None


async def get_session(
    user: User = Depends(get_current_user)
) -> SessionContext:
    return SessionContext.from_user(user)


async def require_admin_session(
    session: SessionContext = Depends(get_session)
) -> SessionContext:
    """Session context of an admin. Raises 403 for everyone else."""
    if not session.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return session
