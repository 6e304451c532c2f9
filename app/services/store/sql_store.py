"""Key-value tree store kept in a SQL table."""
import logging
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models.tree_node import TreeNode
from app.services.store.base import TreeStore, join_path
from app.services.store.exceptions import StoreReadError, StoreWriteError
from app.services.store.push_id import generate_push_id

logger = logging.getLogger(__name__)


def _split(path: str) -> Tuple[str, str]:
    """Split 'a/b/c' into ('a/b', 'c')."""
    path = join_path(path)
    parent, _, key = path.rpartition("/")
    return parent, key


class SQLTreeStore(TreeStore):
    """
    TreeStore backed by the tree_nodes table.

    Every child of a collection is one row holding a JSON object, so the
    store addresses collection paths and child paths only. Each write
    commits immediately; there are no multi-operation transactions.
    """

    def __init__(self, db: Session):
        self.db = db

    def _node(self, path: str) -> Optional[TreeNode]:
        parent, key = _split(path)
        return (
            self.db.query(TreeNode)
            .filter(TreeNode.parent_path == parent, TreeNode.key == key)
            .first()
        )

    def _children(self, path: str) -> Dict[str, Any]:
        rows = (
            self.db.query(TreeNode)
            .filter(TreeNode.parent_path == join_path(path))
            .order_by(TreeNode.key)
            .all()
        )
        return {row.key: row.value for row in rows}

    def push(self, path: str, value: Dict[str, Any]) -> str:
        key = generate_push_id()
        try:
            self.db.add(TreeNode(parent_path=join_path(path), key=key, value=dict(value)))
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Push to %s failed: %s", path, e)
            raise StoreWriteError(f"Could not write to {path}") from e
        return key

    def get(self, path: str) -> Optional[Any]:
        try:
            node = self._node(path)
            if node is not None:
                return node.value
            children = self._children(path)
        except SQLAlchemyError as e:
            logger.error("Read of %s failed: %s", path, e)
            raise StoreReadError(f"Could not read {path}") from e
        return children or None

    def update(self, path: str, values: Dict[str, Any]) -> None:
        try:
            node = self._node(path)
            if node is None:
                parent, key = _split(path)
                self.db.add(TreeNode(parent_path=parent, key=key, value=dict(values)))
            else:
                # Assign a new dict so the JSON column registers the change
                merged = dict(node.value or {})
                merged.update(values)
                node.value = merged
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Update of %s failed: %s", path, e)
            raise StoreWriteError(f"Could not update {path}") from e

    def remove(self, path: str) -> None:
        path = join_path(path)
        parent, key = _split(path)
        try:
            self.db.query(TreeNode).filter(
                TreeNode.parent_path == parent, TreeNode.key == key
            ).delete(synchronize_session=False)
            self.db.query(TreeNode).filter(
                (TreeNode.parent_path == path)
                | TreeNode.parent_path.startswith(path + "/", autoescape=True)
            ).delete(synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Remove of %s failed: %s", path, e)
            raise StoreWriteError(f"Could not remove {path}") from e

    def query(self, path: str, field: str, equal_to: Any) -> Dict[str, Any]:
        try:
            children = self._children(path)
        except SQLAlchemyError as e:
            logger.error("Query of %s failed: %s", path, e)
            raise StoreReadError(f"Could not read {path}") from e
        return {
            key: value
            for key, value in children.items()
            if isinstance(value, dict) and value.get(field) == equal_to
        }
