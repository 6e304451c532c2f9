"""
Key-value tree store package.

Two interchangeable backends sit behind TreeStore:
- SQLTreeStore: rows in the application database (default)
- FirebaseTreeStore: a hosted Realtime Database via firebase-admin

Usage:
    from app.services.store import get_tree_store

    store = get_tree_store(db)
    key = store.push("NewsSentimentAnalysis/feedback", {...})
"""
from sqlalchemy.orm import Session

from app.config import settings
from app.services.store.base import TreeStore, join_path
from app.services.store.exceptions import StoreError, StoreReadError, StoreWriteError
from app.services.store.firebase_store import FirebaseTreeStore
from app.services.store.sql_store import SQLTreeStore


def get_tree_store(db: Session) -> TreeStore:
    """Build the store configured by settings.store_backend."""
    if settings.store_backend == "firebase":
        return FirebaseTreeStore(
            settings.firebase_database_url,
            credentials_path=settings.firebase_credentials_path,
            timeout=settings.store_timeout_seconds,
        )
    if settings.store_backend == "sql":
        return SQLTreeStore(db)
    raise ValueError(f"Unknown store_backend: {settings.store_backend!r}")


__all__ = [
    "TreeStore",
    "SQLTreeStore",
    "FirebaseTreeStore",
    "StoreError",
    "StoreReadError",
    "StoreWriteError",
    "get_tree_store",
    "join_path",
]
