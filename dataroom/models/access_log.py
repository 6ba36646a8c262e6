"""File access log: the append-only audit trail of per-file actions.

Rows are written by services/access_log_service.py and never modified or
deleted. The ORM hooks below turn any attempt to do so into an error.
"""

from sqlalchemy import Column, Index, String, DateTime, ForeignKey, event

from ..database import Base, new_id, utcnow

ACCESS_ACTIONS = ("view", "download", "upload", "delete")


class FileAccessLog(Base):
    """Immutable record of one view/download/upload/delete of a file."""

    __tablename__ = "file_access_logs"
    __table_args__ = (
        Index("ix_access_logs_file_id", "file_id"),
        Index("ix_access_logs_data_room_id", "data_room_id"),
        Index("ix_access_logs_created_at", "created_at"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    file_id = Column(String(36), ForeignKey("files.id"), nullable=False)
    data_room_id = Column(String(36), ForeignKey("data_rooms.id"), nullable=False)
    action = Column(String(20), nullable=False)
    ip_address = Column(String(45), nullable=True)
    user_agent = Column(String(512), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)


@event.listens_for(FileAccessLog, "before_update")
def _reject_update(mapper, connection, target):
    raise RuntimeError("file_access_logs is append-only: rows cannot be updated")


@event.listens_for(FileAccessLog, "before_delete")
def _reject_delete(mapper, connection, target):
    raise RuntimeError("file_access_logs is append-only: rows cannot be deleted")
