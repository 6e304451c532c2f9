"""Authentication routes: registration, login, logout and the current session."""

from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.user import User
from app.services.auth import get_auth_provider
from app.services.auth.context import SessionContext
from app.services.auth.dependencies import get_optional_user, get_session


router = APIRouter(prefix="/auth", tags=["auth"])


def _set_session_cookie(response: Response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.session_cookie_secure,
    )


def _safe_next(next: Optional[str]) -> str:
    # Only same-site relative paths
    return next if next and next.startswith("/") and not next.startswith("//") else "/"


# =============================================================================
# Login / Logout
# =============================================================================


@router.get("/login")
async def login_page(
    next: Optional[str] = Query(None),
    error: Optional[str] = Query(None),
    user: Optional[User] = Depends(get_optional_user),
):
    """Login landing. Redirects home if already logged in."""
    if user:
        return RedirectResponse(url="/", status_code=303)
    return {"detail": "Login required", "next": next, "error": error}


@router.post("/login")
async def login(
    request: Request,
    email: str = Form(...),
    password: str = Form(...),
    next: Optional[str] = Form(None),
    db: Session = Depends(get_db),
):
    """Process login form."""
    auth_provider = get_auth_provider()
    user = await auth_provider.authenticate(db, email, password)

    if not user:
        return RedirectResponse(url="/auth/login?error=invalid", status_code=303)

    token = await auth_provider.create_session(db, user, request)

    response = RedirectResponse(url=_safe_next(next), status_code=303)
    _set_session_cookie(response, token)
    return response


@router.post("/logout")
async def logout(request: Request, db: Session = Depends(get_db)):
    """Logout and clear session."""
    token = request.cookies.get(settings.session_cookie_name)
    if token:
        await get_auth_provider().revoke_session(db, token)

    response = RedirectResponse(url="/auth/login", status_code=303)
    response.delete_cookie(settings.session_cookie_name)
    return response


# =============================================================================
# Registration
# =============================================================================


@router.post("/register")
async def register(
    request: Request,
    name: str = Form(...),
    email: str = Form(...),
    phone_number: str = Form(...),
    password: str = Form(...),
    password_confirm: str = Form(...),
    db: Session = Depends(get_db),
):
    """Create a regular user account and log it in."""
    if password != password_confirm:
        return JSONResponse(status_code=400, content={"detail": "Passwords do not match"})

    if len(password) < 8:
        return JSONResponse(
            status_code=400, content={"detail": "Password must be at least 8 characters"}
        )

    if db.query(User).filter(User.email == email.lower()).first():
        return JSONResponse(status_code=400, content={"detail": "Email already registered"})

    auth_provider = get_auth_provider()
    user = await auth_provider.create_user(
        db, email, password, name=name.strip(), phone_number=phone_number.strip()
    )
    token = await auth_provider.create_session(db, user, request)

    response = JSONResponse(
        status_code=201,
        content={"message": "Account created", "user_id": str(user.id)},
    )
    _set_session_cookie(response, token)
    return response


# =============================================================================
# Current session
# =============================================================================


@router.get("/me")
async def me(session: SessionContext = Depends(get_session)):
    """The session context the feedback flows see for this user."""
    return {
        "userId": session.user_id,
        "userName": session.user_name,
        "phoneNumber": session.phone_number,
        "userType": session.user_type,
    }
