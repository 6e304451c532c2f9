"""
Feedback statistics.

compute_feedback_stats() is total over any input: unknown categories and
statuses get their own buckets, out-of-range ratings skip the rating
histogram, and non-numeric ratings are left out of the average's numerator.
Stats are recomputed from the full collection on every call.
"""
import math
from decimal import Decimal, ROUND_HALF_UP
from numbers import Real
from typing import Any, Dict, Iterable, List, Optional

from app.services.feedback.models import (
    FeedbackRecord,
    FeedbackStats,
    FeedbackStatus,
    MAX_RATING,
    MIN_RATING,
    category_label,
)

UNKNOWN_BUCKET = "unknown"


def _bucket_key(value: Any) -> str:
    if value is None:
        return UNKNOWN_BUCKET
    if isinstance(value, str):
        return value
    return str(value)


def _finite_rating(value: Any) -> Optional[float]:
    """The rating as a number, or None if it is not a finite real number."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return None
    number = float(value)
    if not math.isfinite(number):
        return None
    return number


def _round_one_decimal(value: float) -> float:
    return float(Decimal(str(value)).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def compute_feedback_stats(records: Iterable[FeedbackRecord]) -> FeedbackStats:
    """Aggregate counts and average rating over the full record list."""
    total = 0
    by_category: Dict[str, int] = {}
    by_rating: Dict[int, int] = {r: 0 for r in range(MIN_RATING, MAX_RATING + 1)}
    by_status: Dict[str, int] = {s.value: 0 for s in FeedbackStatus}
    rating_sum = 0.0

    for record in records:
        total += 1

        category = _bucket_key(record.category)
        by_category[category] = by_category.get(category, 0) + 1

        rating = _finite_rating(record.rating)
        if rating is not None:
            rating_sum += rating
            if rating.is_integer() and MIN_RATING <= rating <= MAX_RATING:
                by_rating[int(rating)] += 1

        status = _bucket_key(record.status)
        by_status[status] = by_status.get(status, 0) + 1

    average = _round_one_decimal(rating_sum / total) if total > 0 else 0.0

    return FeedbackStats(
        total=total,
        by_category=by_category,
        by_rating=by_rating,
        by_status=by_status,
        average_rating=average,
    )


def rating_chart(stats: FeedbackStats) -> Dict[str, List]:
    """Bar chart series for the rating distribution."""
    ratings = range(MIN_RATING, MAX_RATING + 1)
    return {
        "labels": [f"{r} Star" if r == 1 else f"{r} Stars" for r in ratings],
        "data": [stats.by_rating.get(r, 0) for r in ratings],
    }


def category_chart(stats: FeedbackStats) -> Dict[str, List]:
    """Doughnut chart series for feedback by category."""
    return {
        "labels": [category_label(c) for c in stats.by_category],
        "data": list(stats.by_category.values()),
    }
