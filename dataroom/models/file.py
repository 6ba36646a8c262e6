"""File metadata model.

Only metadata lives here; ``file_path`` points at where the bytes would be
stored. Files are soft-deleted (``is_active = False``) so their access log
history stays attached.
"""

from sqlalchemy import Column, Index, String, Text, Integer, DateTime, Boolean, ForeignKey
from sqlalchemy.orm import relationship

from ..database import Base, new_id, utcnow


class File(Base):
    """Uploaded document metadata.

    Lifecycle: active (on upload) -> inactive (on delete). Never reactivated.
    """

    __tablename__ = "files"
    __table_args__ = (
        Index("ix_files_data_room_id", "data_room_id"),
        Index("ix_files_folder_id", "folder_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(255), nullable=False)
    original_name = Column(String(255), nullable=False)
    file_type = Column(String(20), nullable=False)
    file_size = Column(Integer, nullable=False)  # bytes
    file_path = Column(Text, nullable=False)
    mime_type = Column(String(255), nullable=True)
    checksum = Column(String(128), nullable=True)

    data_room_id = Column(String(36), ForeignKey("data_rooms.id", ondelete="CASCADE"), nullable=False)
    folder_id = Column(String(36), ForeignKey("folders.id", ondelete="SET NULL"), nullable=True)
    uploaded_by = Column(String(36), ForeignKey("users.id"), nullable=False)

    version_number = Column(Integer, nullable=False, default=1)
    is_active = Column(Boolean, nullable=False, default=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow)

    uploader = relationship("User", foreign_keys=[uploaded_by])
