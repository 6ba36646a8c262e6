"""File access log: append-only audit trail of views, downloads, uploads and deletes.

Entries are immutable. The module offers a write interface for the service
layer and read helpers for room owners.

Unlike general application logging, a failed write here is NOT swallowed:
an operation that cannot be audited must not silently succeed.

Usage in service layer:
    access_log_service.record(db, user_id="u1", file_id=f.id, room_id=f.data_room_id,
                              action="view", client=client, commit=False)
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from ..database import utcnow
from ..models.access_log import ACCESS_ACTIONS, FileAccessLog

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClientInfo:
    """Request metadata stored alongside each access log entry."""

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


def record(
    db: Session,
    user_id: str,
    file_id: str,
    room_id: str,
    action: str,
    client: Optional[ClientInfo] = None,
    commit: bool = True,
) -> FileAccessLog:
    """Append one access log entry.

    With ``commit=False`` the entry joins the caller's transaction and is
    persisted (or rolled back) together with the operation it describes.
    """
    if action not in ACCESS_ACTIONS:
        raise ValueError(f"Unknown access action: {action}")

    client = client or ClientInfo()
    entry = FileAccessLog(
        user_id=user_id,
        file_id=file_id,
        data_room_id=room_id,
        action=action,
        ip_address=client.ip_address,
        user_agent=client.user_agent[:512] if client.user_agent else None,
    )
    db.add(entry)
    if commit:
        db.commit()
    else:
        db.flush()
    logger.debug(
        "Access logged",
        extra={"action": action, "file_id": file_id, "room_id": room_id, "user_id": user_id},
    )
    return entry


def get_for_file(db: Session, file_id: str, limit: int = 100) -> list[FileAccessLog]:
    """Entries for one file, oldest first."""
    return (
        db.query(FileAccessLog)
        .filter(FileAccessLog.file_id == file_id)
        .order_by(FileAccessLog.created_at, FileAccessLog.id)
        .limit(limit)
        .all()
    )


def get_for_room(
    db: Session,
    room_id: str,
    action: Optional[str] = None,
    file_id: Optional[str] = None,
    limit: int = 100,
) -> list[FileAccessLog]:
    """Most recent entries for a room, optionally narrowed by action or file."""
    query = db.query(FileAccessLog).filter(FileAccessLog.data_room_id == room_id)
    if action:
        query = query.filter(FileAccessLog.action == action)
    if file_id:
        query = query.filter(FileAccessLog.file_id == file_id)
    return query.order_by(FileAccessLog.created_at.desc()).limit(limit).all()


def get_for_user(db: Session, user_id: str, limit: int = 100) -> list[FileAccessLog]:
    """Most recent entries recorded for a user."""
    return (
        db.query(FileAccessLog)
        .filter(FileAccessLog.user_id == user_id)
        .order_by(FileAccessLog.created_at.desc())
        .limit(limit)
        .all()
    )


def count_since(db: Session, since: Optional[datetime] = None) -> int:
    """Entries recorded after *since* (default: the last 24 hours)."""
    since = since or (utcnow() - timedelta(hours=24))
    return db.query(FileAccessLog).filter(FileAccessLog.created_at > since).count()
