"""AI query records.

Status transitions: pending -> processing -> completed | failed.
No processing pipeline runs in this service; an external worker drives the
transitions through AiQueryService.
"""

from sqlalchemy import Column, Index, String, Text, Integer, DateTime, ForeignKey, JSON

from ..database import Base, new_id, utcnow

QUERY_STATUSES = ("pending", "processing", "completed", "failed")


class AiQuery(Base):
    """A question asked about a room's documents."""

    __tablename__ = "ai_queries"
    __table_args__ = (
        Index("ix_ai_queries_data_room_id", "data_room_id"),
    )

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    data_room_id = Column(String(36), ForeignKey("data_rooms.id", ondelete="CASCADE"), nullable=False)
    query_text = Column(Text, nullable=False)
    response_text = Column(Text, nullable=True)
    files_referenced = Column(JSON, nullable=True)  # list of file ids
    processing_status = Column(String(20), nullable=False, default="pending")
    processing_time_ms = Column(Integer, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
