"""Feedback submission: validate the form, write the record, manage form state."""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Optional

from app.config import settings
from app.services.auth.context import SessionContext
from app.services.feedback.exceptions import AuthRequiredError, ValidationError
from app.services.feedback.models import (
    CATEGORIES,
    DEFAULT_CATEGORY,
    DEFAULT_RATING,
    MAX_RATING,
    MIN_RATING,
)
from app.services.feedback.store import FeedbackStore
from app.services.store import StoreWriteError

logger = logging.getLogger(__name__)


@dataclass
class FeedbackForm:
    """
    What the user has typed, plus the form's display state.

    After a successful submit the form is cleared and shows a confirmation
    until confirmed_until; after a failed submit the input stays and error
    holds the message.
    """

    feedback: str = ""
    rating: Optional[int] = DEFAULT_RATING
    category: Optional[str] = DEFAULT_CATEGORY
    error: Optional[str] = None
    confirmed_until: Optional[float] = None

    def reset(self) -> None:
        self.feedback = ""
        self.rating = DEFAULT_RATING
        self.category = DEFAULT_CATEGORY
        self.error = None

    def is_confirmed(self, now: float) -> bool:
        """True while the confirmation message should be shown."""
        return self.confirmed_until is not None and now < self.confirmed_until

    def state(self, now: float) -> str:
        return "confirmed" if self.is_confirmed(now) else "idle"


def _validated_rating(rating: Any) -> int:
    if rating is None:
        return DEFAULT_RATING
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise ValidationError("invalid rating")
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ValidationError(f"Rating must be between {MIN_RATING} and {MAX_RATING}")
    return rating


def _validated_category(category: Any) -> str:
    if category is None or category == "":
        return DEFAULT_CATEGORY
    if category not in CATEGORIES:
        raise ValidationError(f"Invalid category. Must be one of: {list(CATEGORIES)}")
    return category


class FeedbackSubmissionFlow:
    """Turns a filled-in FeedbackForm into a stored FeedbackRecord."""

    def __init__(
        self,
        store: FeedbackStore,
        confirmation_seconds: Optional[float] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.store = store
        self.confirmation_seconds = (
            confirmation_seconds
            if confirmation_seconds is not None
            else settings.feedback_confirmation_seconds
        )
        self.clock = clock

    def submit(self, session: Optional[SessionContext], form: FeedbackForm) -> str:
        """
        Validate and store the form's feedback.

        Raises:
            AuthRequiredError: no session; nothing is written
            ValidationError: empty text, bad rating or category; nothing is written
            StoreWriteError: the store rejected the write; the form keeps its input

        Returns:
            The new feedback id
        """
        if session is None:
            raise AuthRequiredError("Login required to submit feedback")

        text = (form.feedback or "").strip()
        if not text:
            form.error = "Please enter your feedback"
            raise ValidationError("empty feedback")

        try:
            rating = _validated_rating(form.rating)
            category = _validated_category(form.category)
        except ValidationError as e:
            form.error = str(e)
            raise

        record = {
            "userId": session.user_id,
            "userName": session.user_name,
            "phoneNumber": session.phone_number,
            "feedback": text,
            "rating": rating,
            "category": category,
        }

        try:
            feedback_id = self.store.submit(record)
        except StoreWriteError as e:
            logger.error("Feedback submission failed for user %s: %s", session.user_id, e)
            form.error = "Failed to submit feedback. Please try again."
            raise

        form.reset()
        form.confirmed_until = self.clock() + self.confirmation_seconds
        return feedback_id
