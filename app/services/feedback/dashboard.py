"""Admin feedback dashboard: query/filter layer and admin actions."""
import logging
import math
from dataclasses import dataclass, field
from numbers import Real
from typing import Any, Dict, List, Optional

from app.services.auth.context import SessionContext
from app.services.feedback.exceptions import PermissionDeniedError, ValidationError
from app.services.feedback.models import FeedbackRecord, FeedbackStats
from app.services.feedback.stats import category_chart, compute_feedback_stats, rating_chart
from app.services.feedback.status import PENDING, RESPONDED, REVIEWED, validate_transition
from app.services.feedback.store import FeedbackStore

logger = logging.getLogger(__name__)

FILTER_ALL = "all"
SORT_NEWEST = "newest"
SORT_OLDEST = "oldest"
SORT_HIGHEST_RATING = "highest-rating"
SORT_LOWEST_RATING = "lowest-rating"
SORT_PENDING = "pending"
SORT_OPTIONS = (SORT_NEWEST, SORT_OLDEST, SORT_HIGHEST_RATING, SORT_LOWEST_RATING, SORT_PENDING)


def _sort_number(value: Any) -> float:
    # Missing or malformed keys sort as the lowest value
    if isinstance(value, bool) or not isinstance(value, Real):
        return -math.inf
    number = float(value)
    return number if not math.isnan(number) else -math.inf


def _by_timestamp(record: FeedbackRecord) -> float:
    return _sort_number(record.timestamp)


def _by_rating(record: FeedbackRecord) -> float:
    return _sort_number(record.rating)


def filter_and_sort(
    records: List[FeedbackRecord], filter: str = FILTER_ALL, sort_by: str = SORT_NEWEST
) -> List[FeedbackRecord]:
    """
    Display-ordered subset of records.

    All sorts are stable: records with equal keys keep their input order.
    Unknown sort_by values fall back to newest first.
    """
    if filter and filter != FILTER_ALL:
        records = [r for r in records if r.category == filter]

    if sort_by == SORT_OLDEST:
        return sorted(records, key=_by_timestamp)
    if sort_by == SORT_HIGHEST_RATING:
        return sorted(records, key=_by_rating, reverse=True)
    if sort_by == SORT_LOWEST_RATING:
        return sorted(records, key=_by_rating)
    if sort_by == SORT_PENDING:
        newest_first = sorted(records, key=_by_timestamp, reverse=True)
        return sorted(newest_first, key=lambda r: 0 if r.status == PENDING else 1)
    return sorted(records, key=_by_timestamp, reverse=True)


@dataclass
class DashboardView:
    """One snapshot of the dashboard: display records, stats and chart series."""

    feedback: List[FeedbackRecord]
    stats: FeedbackStats
    charts: Dict[str, Dict[str, List]] = field(default_factory=dict)


class FeedbackDashboard:
    """Admin operations over the feedback collection."""

    def __init__(self, store: FeedbackStore, session: Optional[SessionContext]):
        if session is None or not session.is_admin:
            raise PermissionDeniedError("Admin access required")
        self.store = store
        self.session = session

    def load(self, filter: str = FILTER_ALL, sort_by: str = SORT_NEWEST) -> DashboardView:
        """Re-read the whole collection and recompute everything from it."""
        records = self.store.list_all()
        stats = compute_feedback_stats(records)
        return DashboardView(
            feedback=filter_and_sort(records, filter, sort_by),
            stats=stats,
            charts={"rating": rating_chart(stats), "category": category_chart(stats)},
        )

    def stats(self) -> FeedbackStats:
        return compute_feedback_stats(self.store.list_all())

    def mark_reviewed(self, feedback_id: str) -> None:
        record = self.store.get(feedback_id)
        validate_transition(record.status, REVIEWED)
        self.store.update_status(feedback_id, REVIEWED)
        logger.info("Admin %s marked feedback %s reviewed", self.session.user_id, feedback_id)

    def respond(self, feedback_id: str, response: Optional[str]) -> None:
        text = (response or "").strip()
        if not text:
            raise ValidationError("empty response")
        record = self.store.get(feedback_id)
        validate_transition(record.status, RESPONDED)
        self.store.update_status(feedback_id, RESPONDED, admin_response=text)
        logger.info("Admin %s responded to feedback %s", self.session.user_id, feedback_id)

    def delete(self, feedback_id: str) -> None:
        # Confirmation ("are you sure?") is the caller's job
        self.store.delete(feedback_id)
        logger.info("Admin %s deleted feedback %s", self.session.user_id, feedback_id)
