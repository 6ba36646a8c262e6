"""AI query records and their status lifecycle.

No model is called here. Queries are stored as ``pending`` and an external
worker moves them along:

    pending -> processing -> completed
                          -> failed
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..database import utcnow
from ..exceptions import AiQueryNotFoundError, ConflictError
from ..models import AiQuery
from ..repositories import RoomRepository
from ..schemas.ai_query import AiQueryCreate
from . import permission_service
from .permission_service import Capability

logger = logging.getLogger(__name__)

ALLOWED_TRANSITIONS = {
    "pending": ("processing",),
    "processing": ("completed", "failed"),
    "completed": (),
    "failed": (),
}


def submit_query(db: Session, room_id: str, data: AiQueryCreate) -> AiQuery:
    RoomRepository(db).get_by_id(room_id)
    permission_service.require_capability(
        db, data.user_id, room_id, Capability.AI_ACCESS, "use AI features"
    )
    query = AiQuery(
        user_id=data.user_id,
        data_room_id=room_id,
        query_text=data.query_text,
        processing_status="pending",
        created_at=utcnow(),
    )
    db.add(query)
    db.commit()
    db.refresh(query)
    logger.info("AI query submitted", extra={"query_id": query.id, "room_id": room_id, "user_id": data.user_id})
    return query


def list_queries(db: Session, room_id: str, user_id: str) -> List[AiQuery]:
    """The caller's own queries in the room, newest first."""
    RoomRepository(db).get_by_id(room_id)
    permission_service.require_capability(
        db, user_id, room_id, Capability.AI_ACCESS, "use AI features"
    )
    return (
        db.query(AiQuery)
        .filter(AiQuery.data_room_id == room_id, AiQuery.user_id == user_id)
        .order_by(AiQuery.created_at.desc())
        .all()
    )


def get_query(db: Session, query_id: str) -> AiQuery:
    query = db.query(AiQuery).filter(AiQuery.id == query_id).first()
    if query is None:
        raise AiQueryNotFoundError(query_id)
    return query


def _transition(db: Session, query_id: str, status: str) -> AiQuery:
    query = get_query(db, query_id)
    if status not in ALLOWED_TRANSITIONS[query.processing_status]:
        raise ConflictError(
            f"Cannot move AI query from {query.processing_status} to {status}",
            details={"query_id": query_id, "status": query.processing_status},
        )
    query.processing_status = status
    return query


def mark_processing(db: Session, query_id: str) -> AiQuery:
    query = _transition(db, query_id, "processing")
    db.commit()
    db.refresh(query)
    return query


def complete_query(
    db: Session,
    query_id: str,
    response_text: str,
    files_referenced: Optional[List[str]] = None,
    processing_time_ms: Optional[int] = None,
) -> AiQuery:
    query = _transition(db, query_id, "completed")
    query.response_text = response_text
    query.files_referenced = files_referenced or []
    query.processing_time_ms = processing_time_ms
    db.commit()
    db.refresh(query)
    logger.info("AI query completed", extra={"query_id": query_id, "processing_time_ms": processing_time_ms})
    return query


def fail_query(db: Session, query_id: str, reason: Optional[str] = None) -> AiQuery:
    query = _transition(db, query_id, "failed")
    query.response_text = reason
    db.commit()
    db.refresh(query)
    logger.error("AI query failed", extra={"query_id": query_id, "reason": reason})
    return query
