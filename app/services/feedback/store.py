"""Feedback records in the key-value tree."""
import logging
import time
from typing import Any, Callable, List, Optional

from app.config import settings
from app.services.feedback.exceptions import FeedbackNotFoundError
from app.services.feedback.models import FeedbackRecord, FeedbackStatus
from app.services.store import StoreReadError, StoreWriteError, TreeStore, join_path

logger = logging.getLogger(__name__)

FEEDBACK_COLLECTION = "feedback"

# Characters the Realtime Database does not allow in keys; "/" would also
# address a different node.
FORBIDDEN_KEY_CHARS = frozenset("/.#$[]")


def now_ms() -> int:
    """Current time in epoch milliseconds, the unit stored in timestamp fields."""
    return int(time.time() * 1000)


class FeedbackStore:
    """
    Read/write primitives for feedback/{id}.

    Every method is one or two remote calls; nothing is retried. Read
    failures surface as StoreReadError and write failures as StoreWriteError.
    """

    def __init__(
        self,
        tree: TreeStore,
        root: Optional[str] = None,
        clock: Callable[[], int] = now_ms,
    ):
        self.tree = tree
        self.collection_path = join_path(
            root if root is not None else settings.store_root, FEEDBACK_COLLECTION
        )
        self.clock = clock

    @staticmethod
    def is_valid_id(feedback_id: Any) -> bool:
        """True if feedback_id names a single child of the collection."""
        return (
            isinstance(feedback_id, str)
            and bool(feedback_id.strip())
            and not FORBIDDEN_KEY_CHARS.intersection(feedback_id)
        )

    def _record_path(self, feedback_id: str) -> str:
        # An empty or path-like id would resolve to the collection itself
        if not self.is_valid_id(feedback_id):
            raise FeedbackNotFoundError(str(feedback_id))
        return join_path(self.collection_path, feedback_id)

    def submit(self, record: dict) -> str:
        """
        Persist a new record with timestamp=now and status=pending.

        Args:
            record: Stored-form fields (userId, feedback, rating, category, ...)

        Returns:
            The generated feedback id
        """
        data = {k: v for k, v in record.items() if k != "id"}
        data["timestamp"] = self.clock()
        data["status"] = FeedbackStatus.PENDING.value
        feedback_id = self.tree.push(self.collection_path, data)
        logger.info("Feedback %s submitted by user %s", feedback_id, data.get("userId"))
        return feedback_id

    def list_all(self) -> List[FeedbackRecord]:
        """All records in store order (not sorted by time)."""
        children = self.tree.get(self.collection_path)
        if not isinstance(children, dict):
            return []
        return [FeedbackRecord.from_store(key, value) for key, value in children.items()]

    def list_by_user(self, user_id: str) -> List[FeedbackRecord]:
        children = self.tree.query(self.collection_path, "userId", user_id)
        return [FeedbackRecord.from_store(key, value) for key, value in children.items()]

    def get(self, feedback_id: str) -> FeedbackRecord:
        value = self.tree.get(self._record_path(feedback_id))
        if value is None:
            raise FeedbackNotFoundError(feedback_id)
        return FeedbackRecord.from_store(feedback_id, value)

    def exists(self, feedback_id: str) -> bool:
        if not self.is_valid_id(feedback_id):
            return False
        return self.tree.get(self._record_path(feedback_id)) is not None

    def _require_for_write(self, feedback_id: str) -> None:
        try:
            found = self.exists(feedback_id)
        except StoreReadError as e:
            raise StoreWriteError(str(e)) from e
        if not found:
            raise FeedbackNotFoundError(feedback_id)

    def update_status(
        self, feedback_id: str, status: str, admin_response: Optional[str] = None
    ) -> None:
        """
        Merge status, updatedAt and (optionally) adminResponse into a record.

        The transition itself is not checked here; see status.validate_transition.
        """
        # A merge into a missing path would create a partial record
        self._require_for_write(feedback_id)

        updates = {"status": status, "updatedAt": self.clock()}
        if admin_response:
            updates["adminResponse"] = admin_response
        self.tree.update(self._record_path(feedback_id), updates)
        logger.info("Feedback %s status set to %s", feedback_id, status)

    def delete(self, feedback_id: str) -> None:
        self._require_for_write(feedback_id)
        self.tree.remove(self._record_path(feedback_id))
        logger.info("Feedback %s deleted", feedback_id)
