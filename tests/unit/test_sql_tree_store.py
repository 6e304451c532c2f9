"""Unit tests for the SQL-backed key-value tree store."""
from unittest.mock import MagicMock

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from app.models import TreeNode
from app.services.store import SQLTreeStore, StoreReadError, StoreWriteError


ROOT = "NewsSentimentAnalysis/feedback"


class TestSQLTreeStore:

    def test_push_returns_key_and_stores_value(self, db: Session):
        store = SQLTreeStore(db)

        key = store.push(ROOT, {"feedback": "hello"})

        assert len(key) == 20
        assert store.get(f"{ROOT}/{key}") == {"feedback": "hello"}

    def test_get_collection_returns_children(self, db: Session):
        store = SQLTreeStore(db)
        first = store.push(ROOT, {"n": 1})
        second = store.push(ROOT, {"n": 2})

        children = store.get(ROOT)

        assert children == {first: {"n": 1}, second: {"n": 2}}

    def test_get_missing_returns_none(self, db: Session):
        store = SQLTreeStore(db)

        assert store.get(f"{ROOT}/nope") is None
        assert store.get("Other/collection") is None

    def test_paths_are_normalized(self, db: Session):
        store = SQLTreeStore(db)
        key = store.push(f"/{ROOT}/", {"n": 1})

        assert store.get(f"{ROOT}/{key}/") == {"n": 1}

    def test_update_merges_fields(self, db: Session):
        store = SQLTreeStore(db)
        key = store.push(ROOT, {"status": "pending", "rating": 4})

        store.update(f"{ROOT}/{key}", {"status": "reviewed", "updatedAt": 123})

        db.expire_all()
        assert store.get(f"{ROOT}/{key}") == {
            "status": "reviewed",
            "rating": 4,
            "updatedAt": 123,
        }

    def test_update_missing_path_creates_it(self, db: Session):
        store = SQLTreeStore(db)

        store.update(f"{ROOT}/manual", {"status": "pending"})

        assert store.get(f"{ROOT}/manual") == {"status": "pending"}

    def test_remove_only_touches_target(self, db: Session):
        store = SQLTreeStore(db)
        keep = store.push(ROOT, {"n": 1})
        drop = store.push(ROOT, {"n": 2})

        store.remove(f"{ROOT}/{drop}")

        assert store.get(f"{ROOT}/{drop}") is None
        assert store.get(ROOT) == {keep: {"n": 1}}

    def test_remove_collection_removes_children(self, db: Session):
        store = SQLTreeStore(db)
        store.push(ROOT, {"n": 1})
        other = store.push("NewsSentimentAnalysis/news", {"title": "t"})

        store.remove(ROOT)

        assert store.get(ROOT) is None
        assert store.get(f"NewsSentimentAnalysis/news/{other}") == {"title": "t"}

    def test_remove_missing_is_noop(self, db: Session):
        store = SQLTreeStore(db)
        store.push(ROOT, {"n": 1})

        store.remove(f"{ROOT}/missing")

        assert db.query(TreeNode).filter(TreeNode.parent_path == ROOT).count() == 1

    def test_query_filters_by_field(self, db: Session):
        store = SQLTreeStore(db)
        mine = store.push(ROOT, {"userId": "u1"})
        store.push(ROOT, {"userId": "u2"})

        assert store.query(ROOT, "userId", "u1") == {mine: {"userId": "u1"}}

    def test_write_failure_rolls_back_and_raises(self):
        db = MagicMock()
        db.commit.side_effect = OperationalError("stmt", {}, Exception("down"))
        store = SQLTreeStore(db)

        with pytest.raises(StoreWriteError):
            store.push(ROOT, {"n": 1})
        db.rollback.assert_called_once()

    def test_read_failure_raises_store_read_error(self):
        db = MagicMock()
        db.query.side_effect = OperationalError("stmt", {}, Exception("down"))
        store = SQLTreeStore(db)

        with pytest.raises(StoreReadError):
            store.get(ROOT)
