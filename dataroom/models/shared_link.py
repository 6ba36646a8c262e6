"""Shared link model: token-based, read-only access to a room."""

from sqlalchemy import Column, String, Text, Integer, DateTime, Boolean, ForeignKey, JSON

from ..database import Base, new_id, utcnow


class SharedLink(Base):
    """A revocable link granting ``rights`` (view/download) on a room."""

    __tablename__ = "shared_links"

    id = Column(String(36), primary_key=True, default=new_id)
    data_room_id = Column(String(36), ForeignKey("data_rooms.id", ondelete="CASCADE"), nullable=False)
    token = Column(String(64), nullable=False, unique=True)
    password_hash = Column(Text, nullable=True)
    max_uses = Column(Integer, nullable=True)  # NULL = unlimited
    current_uses = Column(Integer, nullable=False, default=0)
    expires_at = Column(DateTime(timezone=True), nullable=True)
    rights = Column(JSON, nullable=False, default=lambda: ["view"])
    created_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    last_used_at = Column(DateTime(timezone=True), nullable=True)
