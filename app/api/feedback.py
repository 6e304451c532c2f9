"""Feedback endpoints for signed-in users."""
from typing import Optional

from fastapi import APIRouter, Depends, Form, status

from app.services.auth.context import SessionContext
from app.services.auth.dependencies import get_optional_session, get_session
from app.services.feedback import (
    CATEGORY_LABELS,
    FeedbackForm,
    FeedbackStore,
    FeedbackSubmissionFlow,
    filter_and_sort,
)
from app.services.feedback.dependencies import get_feedback_store


router = APIRouter(prefix="/feedback", tags=["feedback"])


@router.post("", status_code=status.HTTP_201_CREATED)
def submit_feedback(
    feedback: str = Form(""),
    rating: Optional[int] = Form(None),
    category: Optional[str] = Form(None),
    session: Optional[SessionContext] = Depends(get_optional_session),
    store: FeedbackStore = Depends(get_feedback_store),
):
    """
    Submit a new feedback record.

    Rating defaults to 5 and category to "general". Validation and store
    errors are turned into responses by the app's exception handlers.
    """
    flow = FeedbackSubmissionFlow(store)
    form = FeedbackForm(feedback=feedback, rating=rating, category=category)
    feedback_id = flow.submit(session, form)

    return {
        "message": "Thank you for your feedback! We appreciate your input.",
        "feedback_id": feedback_id,
        "confirmation_seconds": flow.confirmation_seconds,
    }


@router.get("/mine")
def my_feedback(
    session: SessionContext = Depends(get_session),
    store: FeedbackStore = Depends(get_feedback_store),
):
    """The caller's own feedback, newest first, including admin responses."""
    records = filter_and_sort(store.list_by_user(session.user_id))
    return {"feedback": [r.model_dump(by_alias=True) for r in records]}


@router.get("/categories")
async def categories():
    return {
        "categories": [
            {"value": value, "label": label} for value, label in CATEGORY_LABELS.items()
        ]
    }
