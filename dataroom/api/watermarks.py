"""Watermark template API."""

from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..repositories import RoomRepository
from ..schemas.watermark import WatermarkResponse, WatermarkSet
from ..services import watermark_service

router = APIRouter(prefix="/api/data-rooms/{room_id}/watermark", tags=["watermarks"])


@router.put("", response_model=WatermarkResponse)
def set_watermark(room_id: str, data: WatermarkSet, db: Session = Depends(get_db)):
    return watermark_service.set_watermark(db, room_id, data)


@router.get("", response_model=Optional[WatermarkResponse])
def get_watermark(room_id: str, db: Session = Depends(get_db)):
    """The room's active template, or null when none is set."""
    RoomRepository(db).get_by_id(room_id)
    return watermark_service.get_active_watermark(db, room_id)
