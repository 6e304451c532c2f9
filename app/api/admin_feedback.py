"""Admin feedback dashboard endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query

from app.services.auth.context import SessionContext
from app.services.auth.dependencies import require_admin_session
from app.services.feedback import FeedbackDashboard, FeedbackStore
from app.services.feedback.dashboard import FILTER_ALL, SORT_NEWEST
from app.services.feedback.dependencies import get_feedback_store


router = APIRouter(prefix="/admin/feedback", tags=["admin"])


def get_dashboard(
    session: SessionContext = Depends(require_admin_session),
    store: FeedbackStore = Depends(get_feedback_store),
) -> FeedbackDashboard:
    return FeedbackDashboard(store, session)


@router.get("")
def list_feedback(
    filter: str = Query(FILTER_ALL),
    sort_by: str = Query(SORT_NEWEST),
    dashboard: FeedbackDashboard = Depends(get_dashboard),
):
    """
    Dashboard snapshot: filtered and sorted feedback, statistics and chart data.

    Everything is recomputed from a fresh read of the whole collection.
    """
    view = dashboard.load(filter=filter, sort_by=sort_by)
    return {
        "feedback": [r.model_dump(by_alias=True) for r in view.feedback],
        "stats": view.stats.model_dump(by_alias=True),
        "charts": view.charts,
    }


@router.get("/stats")
def feedback_stats(dashboard: FeedbackDashboard = Depends(get_dashboard)):
    return dashboard.stats().model_dump(by_alias=True)


@router.post("/{feedback_id}/review")
def mark_reviewed(
    feedback_id: str,
    dashboard: FeedbackDashboard = Depends(get_dashboard),
):
    dashboard.mark_reviewed(feedback_id)
    return {"message": "Feedback marked as reviewed"}


@router.post("/{feedback_id}/respond")
def respond(
    feedback_id: str,
    response: Optional[str] = Form(None),
    dashboard: FeedbackDashboard = Depends(get_dashboard),
):
    dashboard.respond(feedback_id, response)
    return {"message": "Response sent"}


@router.delete("/{feedback_id}")
def delete_feedback(
    feedback_id: str,
    dashboard: FeedbackDashboard = Depends(get_dashboard),
):
    """Delete a feedback record permanently. The client confirms before calling."""
    dashboard.delete(feedback_id)
    return {"message": "Feedback deleted"}
