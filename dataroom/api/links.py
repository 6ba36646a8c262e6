"""Shared link API: create and list links for a room, redeem and deactivate by token or id."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import SharedLink
from ..schemas.link import (
    SharedLinkAccess,
    SharedLinkAccessResponse,
    SharedLinkCreate,
    SharedLinkResponse,
)
from ..services import share_link_service

router = APIRouter(prefix="/api", tags=["links"])


def _to_response(link: SharedLink) -> SharedLinkResponse:
    response = SharedLinkResponse.model_validate(link)
    response.password_protected = link.password_hash is not None
    return response


@router.post("/data-rooms/{room_id}/links", response_model=SharedLinkResponse, status_code=201)
def create_link(room_id: str, data: SharedLinkCreate, db: Session = Depends(get_db)):
    return _to_response(share_link_service.create_link(db, room_id, data))


@router.get("/data-rooms/{room_id}/links", response_model=List[SharedLinkResponse])
def list_links(
    room_id: str,
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
):
    return [_to_response(link) for link in share_link_service.list_links(db, room_id, user_id)]


@router.post("/links/{token}/access", response_model=SharedLinkAccessResponse)
def redeem_link(token: str, data: SharedLinkAccess, db: Session = Depends(get_db)):
    """Use a link: counts one use and returns what the holder may see."""
    link, room = share_link_service.redeem_link(db, token, data.password)
    return SharedLinkAccessResponse(
        data_room_id=room.id,
        name=room.name,
        description=room.description,
        rights=link.rights,
    )


@router.delete("/links/{link_id}", response_model=SharedLinkResponse)
def deactivate_link(
    link_id: str,
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
):
    return _to_response(share_link_service.deactivate_link(db, link_id, user_id))
