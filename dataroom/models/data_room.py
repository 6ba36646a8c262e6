"""Data room, tag, and the room/tag join table."""

from sqlalchemy import Column, Index, String, Text, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from ..database import Base, new_id, utcnow


class DataRoom(Base):
    """A named, permissioned container for folders and files.

    ``last_modified`` is bumped by the service layer whenever a folder or
    file inside the room changes; room listings are ordered by it.
    """

    __tablename__ = "data_rooms"
    __table_args__ = (
        Index("ix_data_rooms_last_modified", "last_modified"),
        Index("ix_data_rooms_created_by", "created_by"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)
    last_modified = Column(DateTime(timezone=True), default=utcnow)

    tags = relationship("Tag", secondary="data_room_tags", order_by="Tag.name", lazy="selectin")
    creator = relationship("User", foreign_keys=[created_by])


class Tag(Base):
    """Room classification label. Names are unique and matched case-sensitively."""

    __tablename__ = "tags"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(100), nullable=False, unique=True)
    color = Column(String(7), nullable=True)  # hex, e.g. #10B981
    created_at = Column(DateTime(timezone=True), default=utcnow)


class DataRoomTag(Base):
    """Many-to-many link between rooms and tags (no identity of its own)."""

    __tablename__ = "data_room_tags"

    data_room_id = Column(
        String(36), ForeignKey("data_rooms.id", ondelete="CASCADE"), primary_key=True
    )
    tag_id = Column(
        String(36), ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True
    )
