"""
Authentication service package.

Supplies the session context consumed by the feedback flows. The provider
is pluggable; the local password provider is the only one today.

Usage:
    from app.services.auth.dependencies import get_session, require_admin_session

    @router.get("/mine")
    async def mine(session: SessionContext = Depends(get_session)):
        ...
"""
from app.services.auth.base import AuthProvider
from app.services.auth.context import SessionContext
from app.services.auth.local_provider import local_auth_provider


def get_auth_provider() -> AuthProvider:
    """The configured auth provider (local password auth)."""
    return local_auth_provider


__all__ = [
    "AuthProvider",
    "SessionContext",
    "get_auth_provider",
    "local_auth_provider",
]
