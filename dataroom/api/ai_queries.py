"""AI query records for a room. Answers are filled in by an external worker."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.ai_query import AiQueryCreate, AiQueryResponse
from ..services import ai_query_service

router = APIRouter(prefix="/api/data-rooms/{room_id}/ai-queries", tags=["ai-queries"])


@router.post("", response_model=AiQueryResponse, status_code=201)
def submit_query(room_id: str, data: AiQueryCreate, db: Session = Depends(get_db)):
    return ai_query_service.submit_query(db, room_id, data)


@router.get("", response_model=List[AiQueryResponse])
def list_queries(
    room_id: str,
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
):
    return ai_query_service.list_queries(db, room_id, user_id)
