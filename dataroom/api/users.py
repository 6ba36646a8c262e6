"""User accounts and their notifications."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.notification import (
    NotificationReadRequest,
    NotificationReadResponse,
    NotificationResponse,
)
from ..schemas.user import UserCreate, UserResponse
from ..services import notification_service, user_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return user_service.list_users(db)


@router.post("", response_model=UserResponse, status_code=201)
def create_user(data: UserCreate, db: Session = Depends(get_db)):
    return user_service.create_user(db, data)


@router.get("/{user_id}/notifications", response_model=List[NotificationResponse])
def get_notifications(user_id: str, db: Session = Depends(get_db)):
    """Unread notifications, newest first."""
    user_service.get_user(db, user_id)
    return notification_service.get_unread(db, user_id)


@router.post("/{user_id}/notifications/read", response_model=NotificationReadResponse)
def mark_notifications_read(
    user_id: str,
    data: NotificationReadRequest,
    db: Session = Depends(get_db),
):
    updated = notification_service.mark_as_read(db, user_id, data.notification_ids)
    return NotificationReadResponse(updated=updated)
