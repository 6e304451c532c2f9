"""FastAPI dependencies for the feedback services."""
from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.services.feedback.store import FeedbackStore
from app.services.store import get_tree_store


def get_feedback_store(db: Session = Depends(get_db)) -> FeedbackStore:
    """FeedbackStore over the configured tree backend."""
    return FeedbackStore(get_tree_store(db))
