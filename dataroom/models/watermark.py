"""Watermark templates applied to documents viewed in a room."""

from sqlalchemy import Column, String, Text, Float, DateTime, Boolean, ForeignKey

from ..database import Base, new_id, utcnow


class Watermark(Base):
    """Template text with ``{name}``, ``{email}``, ``{room}``, ``{date}`` placeholders.

    At most one active template per room; older ones are deactivated, not deleted.
    """

    __tablename__ = "watermarks"

    id = Column(String(36), primary_key=True, default=new_id)
    data_room_id = Column(String(36), ForeignKey("data_rooms.id", ondelete="CASCADE"), nullable=False)
    template = Column(Text, nullable=False)
    position = Column(String(20), nullable=False, default="center")
    opacity = Column(Float, nullable=False, default=0.3)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
