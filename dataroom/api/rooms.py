"""Data room API: listings, details, create, update and statistics.

Endpoints are thin; RoomService owns the transaction and permission rules.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.room import (
    DashboardStats,
    RoomCreate,
    RoomCreateResponse,
    RoomDetails,
    RoomStats,
    RoomSummary,
    RoomUpdate,
)
from ..services import RoomService

router = APIRouter(prefix="/api", tags=["data-rooms"])


@router.get("/data-rooms", response_model=List[RoomSummary])
def list_all_rooms(db: Session = Depends(get_db)):
    return RoomService(db).list_all_rooms()


@router.get("/data-rooms/{user_id}", response_model=List[RoomSummary])
def list_rooms_for_user(user_id: str, db: Session = Depends(get_db)):
    """Rooms the user holds a live permission on, most recently modified first."""
    return RoomService(db).list_rooms_for_user(user_id)


@router.post("/data-rooms", response_model=RoomCreateResponse, status_code=201)
def create_room(data: RoomCreate, db: Session = Depends(get_db)):
    room = RoomService(db).create_room(data)
    return RoomCreateResponse(id=room.id, message="Data room created successfully")


@router.get("/data-room/{room_id}", response_model=RoomDetails)
def get_room(
    room_id: str,
    user_id: Optional[str] = Query(None, alias="userId"),
    db: Session = Depends(get_db),
):
    return RoomService(db).get_room_details(room_id, user_id)


@router.put("/data-room/{room_id}", response_model=RoomSummary)
def update_room(room_id: str, data: RoomUpdate, db: Session = Depends(get_db)):
    service = RoomService(db)
    service.update_room(room_id, data)
    return service.get_room_summary(room_id)


@router.get("/data-room/{room_id}/stats", response_model=RoomStats)
def get_room_stats(room_id: str, db: Session = Depends(get_db)):
    return RoomService(db).get_room_stats(room_id)


@router.get("/stats", response_model=DashboardStats)
def get_dashboard_stats(db: Session = Depends(get_db)):
    return RoomService(db).get_dashboard_stats()
