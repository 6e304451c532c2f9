from sqlalchemy import Column, String, DateTime, Uuid
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid

from app.database import Base


USER_TYPE_USER = "user"
USER_TYPE_ADMIN = "admin"


class User(Base):
    """Portal account. Identity source for the feedback session context."""

    __tablename__ = "users"

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    email = Column(String(255), unique=True, nullable=False)
    name = Column(String(100), nullable=True)
    phone_number = Column(String(20), nullable=True)
    password_hash = Column(String(255), nullable=True)
    user_type = Column(String(20), default=USER_TYPE_USER, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    # Relationships
    sessions = relationship(
        "Session", back_populates="user", cascade="all, delete-orphan"
    )

    @property
    def is_admin(self) -> bool:
        return self.user_type == USER_TYPE_ADMIN

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, type={self.user_type})>"
