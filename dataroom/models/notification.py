"""In-app notifications."""

from sqlalchemy import Column, Index, String, Text, DateTime, Boolean, ForeignKey

from ..database import Base, new_id, utcnow


class Notification(Base):
    """Message shown to a user, e.g. ``file_uploaded`` or ``access_granted``."""

    __tablename__ = "notifications"
    __table_args__ = (
        Index("ix_notifications_user_id", "user_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    data_room_id = Column(String(36), ForeignKey("data_rooms.id", ondelete="CASCADE"), nullable=True)
    type = Column(String(50), nullable=False)
    title = Column(String(255), nullable=False)
    message = Column(Text, nullable=True)
    is_read = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
