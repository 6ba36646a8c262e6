"""Notification schemas."""

from datetime import datetime
from typing import List, Optional

from .common import CamelModel


class NotificationResponse(CamelModel):
    id: str
    user_id: str
    data_room_id: Optional[str] = None
    type: str
    title: str
    message: Optional[str] = None
    is_read: bool
    created_at: Optional[datetime] = None


class NotificationReadRequest(CamelModel):
    notification_ids: List[str]


class NotificationReadResponse(CamelModel):
    updated: int
