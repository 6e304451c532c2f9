import logging
from typing import Optional
from urllib.parse import urlparse

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import HTTPException
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.middleware.base import BaseHTTPMiddleware

from app.api import admin_feedback, auth, feedback
from app.config import settings
from app.services.auth.context import SessionContext
from app.services.auth.dependencies import get_optional_session
from app.services.feedback.exceptions import (
    AuthRequiredError,
    FeedbackNotFoundError,
    InvalidTransitionError,
    PermissionDeniedError,
    ValidationError,
)
from app.services.store.exceptions import StoreError

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="News Pulse", version="0.1.0")


# =============================================================================
# CSRF Origin Validation Middleware
# =============================================================================


class CSRFOriginMiddleware(BaseHTTPMiddleware):
    """
    Reject state-changing requests whose Origin/Referer host is not ours.

    GET, HEAD and OPTIONS pass through, as does the health check. A POST,
    PUT, PATCH or DELETE without either header is rejected.
    """

    SAFE_METHODS = {"GET", "HEAD", "OPTIONS"}
    EXEMPT_PATHS = {"/health"}

    async def dispatch(self, request: Request, call_next):
        if request.method in self.SAFE_METHODS or request.url.path in self.EXEMPT_PATHS:
            return await call_next(request)

        expected_host = request.headers.get("host", "")
        source = request.headers.get("origin") or request.headers.get("referer")

        if source and urlparse(source).netloc == expected_host:
            return await call_next(request)

        logger.warning(
            "CSRF origin check failed: source=%s, expected=%s, method=%s, path=%s",
            source,
            expected_host,
            request.method,
            request.url.path,
        )
        return JSONResponse(
            status_code=403,
            content={"detail": "Origin validation failed"},
        )


app.add_middleware(CSRFOriginMiddleware)


# =============================================================================
# Error handling
# =============================================================================


def _login_redirect(request: Request) -> Optional[RedirectResponse]:
    """Login redirect for browser page requests; None for API calls."""
    if "text/html" not in request.headers.get("accept", ""):
        return None

    return_url = str(request.url.path)
    if request.url.query:
        return_url += f"?{request.url.query}"
    return RedirectResponse(
        url=f"/auth/login?next={return_url}",
        status_code=status.HTTP_303_SEE_OTHER,
    )


@app.exception_handler(HTTPException)
async def auth_exception_handler(request: Request, exc: HTTPException):
    """Redirect browsers to login on 401; everything else keeps its JSON error."""
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        redirect = _login_redirect(request)
        if redirect:
            return redirect
    return JSONResponse(
        status_code=exc.status_code, content={"detail": exc.detail}, headers=exc.headers
    )


@app.exception_handler(AuthRequiredError)
async def auth_required_handler(request: Request, exc: AuthRequiredError):
    redirect = _login_redirect(request)
    if redirect:
        return redirect
    return JSONResponse(status_code=401, content={"detail": "Not authenticated"})


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(PermissionDeniedError)
async def permission_denied_handler(request: Request, exc: PermissionDeniedError):
    return JSONResponse(status_code=403, content={"detail": str(exc)})


@app.exception_handler(InvalidTransitionError)
async def invalid_transition_handler(request: Request, exc: InvalidTransitionError):
    return JSONResponse(status_code=409, content={"detail": str(exc)})


@app.exception_handler(FeedbackNotFoundError)
async def not_found_handler(request: Request, exc: FeedbackNotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Store failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=503,
        content={"detail": "The data store is unavailable. Please try again."},
    )


# Include routers
app.include_router(auth.router)
app.include_router(feedback.router)
app.include_router(admin_feedback.router)


@app.get("/")
async def home(session: Optional[SessionContext] = Depends(get_optional_session)):
    """Entry point: who is signed in and where the feedback screens live."""
    return {
        "app": "News Pulse",
        "user": session.user_name if session else None,
        "links": {
            "feedback": "/feedback",
            "my_feedback": "/feedback/mine",
            "admin": "/admin/feedback" if session and session.is_admin else None,
        },
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
