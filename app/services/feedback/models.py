"""
Feedback records and derived statistics.

Records are stored in the key-value tree with camelCase keys. Stored values
are not schema-enforced, so every field that comes back from the store is
accepted as-is; validation happens at submission time, and the statistics
engine copes with whatever is stored.
"""
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class FeedbackStatus(str, Enum):
    PENDING = "pending"
    REVIEWED = "reviewed"
    RESPONDED = "responded"


CATEGORY_LABELS = {
    "general": "General Feedback",
    "bug": "Bug Report",
    "feature": "Feature Request",
    "content": "Content Quality",
    "sentiment": "Sentiment Analysis",
}
CATEGORIES = tuple(CATEGORY_LABELS)

DEFAULT_RATING = 5
DEFAULT_CATEGORY = "general"
MIN_RATING = 1
MAX_RATING = 5


def category_label(category: Any) -> str:
    """Display label for a category; unknown categories show their raw value."""
    if isinstance(category, str):
        return CATEGORY_LABELS.get(category, category)
    return str(category)


class FeedbackRecord(BaseModel):
    """A single feedback submission as stored under feedback/{id}."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    user_id: Optional[str] = Field(None, alias="userId")
    user_name: Optional[str] = Field(None, alias="userName")
    phone_number: Optional[str] = Field(None, alias="phoneNumber")
    feedback: Any = None
    rating: Any = None
    category: Any = None
    status: Any = None
    admin_response: Any = Field(None, alias="adminResponse")
    timestamp: Any = None
    updated_at: Any = Field(None, alias="updatedAt")

    @field_validator("user_id", "user_name", "phone_number", mode="before")
    @classmethod
    def _identifier_as_str(cls, value: Any) -> Optional[str]:
        # Older records use the phone number (a number) as userId
        if value is None:
            return None
        return str(value)

    @classmethod
    def from_store(cls, key: str, value: Any) -> "FeedbackRecord":
        """Build a record from a stored child; non-object values yield an empty record."""
        data = value if isinstance(value, dict) else {}
        data = {k: v for k, v in data.items() if k != "id"}
        return cls(id=key, **data)

    def to_store(self) -> Dict[str, Any]:
        """Serialize to the stored (camelCase) form, without the id."""
        return self.model_dump(by_alias=True, exclude={"id"}, exclude_none=True)


class FeedbackStats(BaseModel):
    """Aggregates derived from the full feedback collection. Never persisted."""

    model_config = ConfigDict(populate_by_name=True)

    total: int = 0
    by_category: Dict[str, int] = Field(default_factory=dict, alias="byCategory")
    by_rating: Dict[int, int] = Field(default_factory=dict, alias="byRating")
    by_status: Dict[str, int] = Field(default_factory=dict, alias="byStatus")
    average_rating: float = Field(0, alias="averageRating")
