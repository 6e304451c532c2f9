"""TreeNode model backing the SQL key-value tree store."""
from sqlalchemy import Column, Integer, String, DateTime, JSON, Index, UniqueConstraint
from sqlalchemy.sql import func

from app.database import Base


class TreeNode(Base):
    """
    One child of a collection in the key-value tree.

    A record stored at ``NewsSentimentAnalysis/feedback/-Nx1...`` is a row with
    ``parent_path="NewsSentimentAnalysis/feedback"`` and ``key="-Nx1..."``.
    The record's fields live in ``value`` as a JSON object.
    """

    __tablename__ = "tree_nodes"

    id = Column(Integer, primary_key=True)
    parent_path = Column(String(512), nullable=False)
    key = Column(String(128), nullable=False)
    value = Column(JSON, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    __table_args__ = (
        Index("idx_tree_nodes_parent", "parent_path"),
        UniqueConstraint("parent_path", "key", name="uq_tree_nodes_path"),
    )

    def __repr__(self):
        return f"<TreeNode(path={self.parent_path}/{self.key})>"
