"""
Database models for News Pulse.

Import all models here so Alembic can detect them for migrations.
"""

from app.database import Base
from app.models.user import User
from app.models.session import Session
from app.models.tree_node import TreeNode

__all__ = [
    "Base",
    "User",
    "Session",
    "TreeNode",
]
