from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class NotificationRecord(BaseModel):
    id: str
    recipient_user_id: str
    kind: str
    title: str
    message: str
    payload: dict[str, Any] = Field(default_factory=dict)
    read: bool = False
    created_at: datetime
    expires_at: Optional[datetime] = None


class UnreadCount(BaseModel):
    unread: int
