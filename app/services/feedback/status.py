"""Feedback status lifecycle: pending -> reviewed -> responded."""
from typing import Any, Dict, FrozenSet

from app.services.feedback.exceptions import InvalidTransitionError
from app.services.feedback.models import FeedbackStatus

PENDING = FeedbackStatus.PENDING.value
REVIEWED = FeedbackStatus.REVIEWED.value
RESPONDED = FeedbackStatus.RESPONDED.value

# responded -> responded lets an admin edit an existing response.
# Nothing moves back to pending, and responded -> reviewed is not allowed.
ALLOWED_TRANSITIONS: Dict[str, FrozenSet[str]] = {
    PENDING: frozenset({REVIEWED, RESPONDED}),
    REVIEWED: frozenset({RESPONDED}),
    RESPONDED: frozenset({RESPONDED}),
}


def normalize_status(status: Any) -> str:
    """Map a stored status to a lifecycle state. Unrecognised values count as pending."""
    if isinstance(status, str) and status in ALLOWED_TRANSITIONS:
        return status
    return PENDING


def can_transition(current: Any, target: str) -> bool:
    return target in ALLOWED_TRANSITIONS[normalize_status(current)]


def validate_transition(current: Any, target: str) -> None:
    """Raise InvalidTransitionError unless current -> target is allowed."""
    if target not in ALLOWED_TRANSITIONS:
        raise InvalidTransitionError(str(current), str(target))
    if not can_transition(current, target):
        raise InvalidTransitionError(normalize_status(current), target)
