"""Folder model: self-referential tree inside a data room."""

from sqlalchemy import Column, Index, String, DateTime, ForeignKey

from ..database import Base, new_id, utcnow


class Folder(Base):
    """A folder in a room's tree.

    ``parent_folder_id`` NULL means the folder sits at the room root. The
    schema cannot prevent cycles; FolderService walks ancestors before
    accepting a new parent.
    """

    __tablename__ = "folders"
    __table_args__ = (
        Index("ix_folders_data_room_id", "data_room_id"),
        Index("ix_folders_parent_folder_id", "parent_folder_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    data_room_id = Column(String(36), ForeignKey("data_rooms.id", ondelete="CASCADE"), nullable=False)
    parent_folder_id = Column(String(36), ForeignKey("folders.id", ondelete="CASCADE"), nullable=True)
    created_by = Column(String(36), ForeignKey("users.id"), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)
