"""Session context handed explicitly to the feedback flows."""
from dataclasses import dataclass
from typing import Optional

from app.models.user import USER_TYPE_ADMIN, User


@dataclass(frozen=True)
class SessionContext:
    """Identity of the acting user, captured from the authenticated session."""

    user_id: str
    user_name: Optional[str]
    phone_number: Optional[str]
    user_type: str

    @property
    def is_admin(self) -> bool:
        return self.user_type == USER_TYPE_ADMIN

    @classmethod
    def from_user(cls, user: User) -> "SessionContext":
        return cls(
            user_id=str(user.id),
            user_name=user.name or user.email,
            phone_number=user.phone_number,
            user_type=user.user_type,
        )
