"""
Feedback service package.

- store: FeedbackStore, the adapter over the key-value tree
- stats: compute_feedback_stats and chart series
- status: the pending -> reviewed -> responded lifecycle
- submission: FeedbackSubmissionFlow for users
- dashboard: FeedbackDashboard for admins
"""
from app.services.feedback.dashboard import FeedbackDashboard, DashboardView, filter_and_sort
from app.services.feedback.exceptions import (
    AuthRequiredError,
    FeedbackError,
    FeedbackNotFoundError,
    InvalidTransitionError,
    PermissionDeniedError,
    ValidationError,
)
from app.services.feedback.models import (
    CATEGORIES,
    CATEGORY_LABELS,
    FeedbackRecord,
    FeedbackStats,
    FeedbackStatus,
)
from app.services.feedback.stats import compute_feedback_stats
from app.services.feedback.store import FeedbackStore
from app.services.feedback.submission import FeedbackForm, FeedbackSubmissionFlow

__all__ = [
    "AuthRequiredError",
    "CATEGORIES",
    "CATEGORY_LABELS",
    "DashboardView",
    "FeedbackDashboard",
    "FeedbackError",
    "FeedbackForm",
    "FeedbackNotFoundError",
    "FeedbackRecord",
    "FeedbackStats",
    "FeedbackStatus",
    "FeedbackStore",
    "FeedbackSubmissionFlow",
    "InvalidTransitionError",
    "PermissionDeniedError",
    "ValidationError",
    "compute_feedback_stats",
    "filter_and_sort",
]
