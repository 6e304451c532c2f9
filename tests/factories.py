"""
Factory functions for creating test data.

These factories create rows with sensible defaults and flush (not commit),
so they disappear with the test transaction.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from sqlalchemy.orm import Session

from app.models import User, Session as UserSession, TreeNode
from app.models.user import USER_TYPE_ADMIN, USER_TYPE_USER
from app.services.feedback.models import FeedbackRecord
from app.services.store.push_id import generate_push_id

FEEDBACK_PATH = "NewsSentimentAnalysis/feedback"


# =============================================================================
# User Factory
# =============================================================================


def create_user(
    db: Session,
    email: Optional[str] = None,
    password: str = "testpassword123",
    is_admin: bool = False,
    **overrides,
) -> User:
    """
    Create a test user with hashed password.

    Args:
        db: Database session
        email: User email (auto-generated if not provided)
        password: Plain text password to hash
        is_admin: Whether the user gets the admin user_type
        **overrides: Additional fields to override

    Returns:
        Created User object
    """
    if email is None:
        email = f"testuser_{secrets.token_hex(4)}@example.com"

    password_hash = bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode(
        "utf-8"
    )

    defaults = {
        "email": email.lower(),
        "password_hash": password_hash,
        "user_type": USER_TYPE_ADMIN if is_admin else USER_TYPE_USER,
    }
    defaults.update(overrides)

    user = User(**defaults)
    db.add(user)
    db.flush()
    return user


# =============================================================================
# Session Factory
# =============================================================================


def create_session(
    db: Session,
    user: User,
    expires_in: timedelta = timedelta(days=7),
    **overrides,
) -> UserSession:
    """Create a login session for user. A negative expires_in gives an expired one."""
    defaults = {
        "user_id": user.id,
        "token": secrets.token_urlsafe(32),
        "expires_at": datetime.now(timezone.utc) + expires_in,
        "user_agent": "pytest-test-client",
        "ip_address": "127.0.0.1",
    }
    defaults.update(overrides)

    session = UserSession(**defaults)
    db.add(session)
    db.flush()
    return session


# =============================================================================
# Feedback Factories
# =============================================================================


def create_feedback(
    db: Session,
    user: Optional[User] = None,
    feedback: str = "Great coverage of local news",
    rating: Any = 4,
    category: Any = "general",
    status: Any = "pending",
    timestamp: Optional[int] = None,
    **overrides,
) -> str:
    """
    Store a feedback record directly in the tree and return its id.

    Any field may be given a malformed value; nothing is validated here, the
    same as records written by older clients. Fields set to None are left out.
    """
    if timestamp is None:
        timestamp = int(datetime.now(timezone.utc).timestamp() * 1000)

    value = {
        "userId": str(user.id) if user else "anonymous",
        "userName": (user.name or user.email) if user else "Anonymous",
        "phoneNumber": user.phone_number if user else None,
        "feedback": feedback,
        "rating": rating,
        "category": category,
        "status": status,
        "timestamp": timestamp,
    }
    value.update(overrides)
    value = {k: v for k, v in value.items() if v is not None}

    key = generate_push_id()
    db.add(TreeNode(parent_path=FEEDBACK_PATH, key=key, value=value))
    db.flush()
    return key


def make_record(feedback_id: str = "fb", **fields) -> FeedbackRecord:
    """In-memory FeedbackRecord for pure-function tests."""
    defaults = {
        "feedback": "text",
        "rating": 5,
        "category": "general",
        "status": "pending",
        "timestamp": 0,
    }
    defaults.update(fields)
    return FeedbackRecord(id=feedback_id, **defaults)
