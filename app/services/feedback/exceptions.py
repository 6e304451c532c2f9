"""Errors raised by the feedback flows."""
from app.services.store.exceptions import StoreWriteError


class FeedbackError(Exception):
    """Base class for feedback flow errors."""

    pass


class ValidationError(FeedbackError):
    """Bad user input. Shown inline next to the form."""

    pass


class AuthRequiredError(FeedbackError):
    """No session present. The caller should redirect to login."""

    pass


class PermissionDeniedError(FeedbackError):
    """The session is not allowed to perform an admin action."""

    pass


class InvalidTransitionError(FeedbackError):
    """A status change that the feedback lifecycle does not allow."""

    def __init__(self, current: str, target: str):
        self.current = current
        self.target = target
        super().__init__(f"Cannot move feedback from '{current}' to '{target}'")


class FeedbackNotFoundError(FeedbackError, StoreWriteError):
    """No feedback record exists under the given id."""

    def __init__(self, feedback_id: str):
        self.feedback_id = feedback_id
        super().__init__(f"Feedback '{feedback_id}' not found")
