"""Per-(user, room) permission rows.

The composite primary key guarantees at most one row per pair. ``role`` is a
display label; the ``can_*`` / ``ai_access`` flags are what authorization
checks read (see services/permission_service.py).
"""

from enum import Enum

from sqlalchemy import Column, Index, String, DateTime, Boolean, ForeignKey

from ..database import Base, utcnow


class Role(str, Enum):
    """Display label for a permission row. Each role has a default capability set."""

    CREATOR = "Creator"
    EDITOR = "Editor"
    CONTRIBUTOR = "Contributor"
    VIEWER = "Viewer"


class RoomPermission(Base):
    """Capabilities granted to one user on one data room."""

    __tablename__ = "user_data_room_permissions"
    __table_args__ = (
        Index("ix_permissions_data_room_id", "data_room_id"),
    )

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    data_room_id = Column(String(36), ForeignKey("data_rooms.id", ondelete="CASCADE"), primary_key=True)

    role = Column(String(20), nullable=False)

    can_view = Column(Boolean, nullable=False, default=True)
    can_upload = Column(Boolean, nullable=False, default=False)
    can_download = Column(Boolean, nullable=False, default=False)
    can_edit = Column(Boolean, nullable=False, default=False)
    can_delete = Column(Boolean, nullable=False, default=False)
    ai_access = Column(Boolean, nullable=False, default=False)

    watermark_required = Column(Boolean, nullable=False, default=True)
    # NULL = never expires
    expires_at = Column(DateTime(timezone=True), nullable=True)

    created_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)
