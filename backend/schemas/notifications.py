from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class NotificationCreate(BaseModel):
    user_id: str
    type: Optional[str] = None
    title: Optional[str] = None
    message: Optional[str] = None
    related_item_id: Optional[int] = None


class Notification(NotificationCreate):
    id: int
    is_read: bool
    created_at: datetime

    class Config:
        from_attributes = True


class UnreadCount(BaseModel):
    count: int
