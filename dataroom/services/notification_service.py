"""Notifications: short messages for users about activity in their rooms."""

import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from ..database import utcnow
from ..models import Notification, RoomPermission

logger = logging.getLogger(__name__)


def notify(
    db: Session,
    user_id: str,
    type: str,
    title: str,
    room_id: Optional[str] = None,
    message: Optional[str] = None,
    commit: bool = True,
) -> Notification:
    """Queue a notification for *user_id*."""
    notification = Notification(
        user_id=user_id,
        data_room_id=room_id,
        type=type,
        title=title,
        message=message,
    )
    db.add(notification)
    if commit:
        db.commit()
    else:
        db.flush()
    return notification


def notify_room_members(
    db: Session,
    room_id: str,
    type: str,
    title: str,
    message: Optional[str] = None,
    exclude_user_id: Optional[str] = None,
) -> int:
    """Notify every member with live view access. Joins the caller's transaction."""
    now = utcnow()
    member_ids = [
        row[0]
        for row in db.query(RoomPermission.user_id)
        .filter(RoomPermission.data_room_id == room_id, RoomPermission.can_view.is_(True))
        .filter(or_(RoomPermission.expires_at.is_(None), RoomPermission.expires_at > now))
        .all()
        if row[0] != exclude_user_id
    ]
    for member_id in member_ids:
        notify(db, member_id, type, title, room_id=room_id, message=message, commit=False)
    return len(member_ids)


def get_unread(db: Session, user_id: str) -> list[Notification]:
    return (
        db.query(Notification)
        .filter(Notification.user_id == user_id, Notification.is_read.is_(False))
        .order_by(Notification.created_at.desc())
        .all()
    )


def mark_as_read(db: Session, user_id: str, notification_ids: list[str]) -> int:
    """Mark the given notifications read. Ids belonging to other users are ignored."""
    if not notification_ids:
        return 0
    updated = (
        db.query(Notification)
        .filter(Notification.id.in_(notification_ids), Notification.user_id == user_id)
        .update({Notification.is_read: True}, synchronize_session=False)
    )
    db.commit()
    return updated
