from sqlalchemy import JSON, Boolean, Column, DateTime, String, Text
from sqlalchemy.sql import func

from dog_rentals.models.base import Base


class Notification(Base):
    """ORM model for a user-addressed message about a rental event."""

    __tablename__ = "notifications"

    id = Column(String(40), primary_key=True)
    recipient_user_id = Column(String(128), nullable=False, index=True)
    kind = Column(String(32), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    payload = Column(JSON, nullable=False, default=dict)
    read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=True, index=True)
