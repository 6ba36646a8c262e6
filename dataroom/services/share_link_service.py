"""Shared links: token-based, read-only access to a room for people without an account.

A link never grants more than its creator holds: every right it carries
(view, download) must be one of the creator's own capabilities at the
time of creation.
"""

import logging
import secrets
from typing import List, Optional, Tuple

from passlib.hash import bcrypt
from sqlalchemy.orm import Session

from ..database import utcnow
from ..exceptions import PermissionDeniedError, SharedLinkNotFoundError, ValidationError
from ..models import DataRoom, SharedLink
from ..repositories import RoomRepository
from ..schemas.link import SharedLinkCreate
from . import permission_service
from .permission_service import Capability, as_utc

logger = logging.getLogger(__name__)

RIGHT_CAPABILITIES = {
    "view": Capability.VIEW,
    "download": Capability.DOWNLOAD,
}


def create_link(db: Session, room_id: str, data: SharedLinkCreate) -> SharedLink:
    RoomRepository(db).get_by_id(room_id)
    permission = permission_service.resolve_permission(db, data.created_by, room_id)
    for right in data.rights:
        if not permission_service.check_capability(permission, RIGHT_CAPABILITIES[right]):
            logger.warning(
                "Permission denied: link right exceeds caller",
                extra={"user_id": data.created_by, "room_id": room_id, "right": right},
            )
            raise PermissionDeniedError(f"Insufficient permissions to share '{right}' access")
    if data.expires_at is not None and as_utc(data.expires_at) <= utcnow():
        raise ValidationError("Expiry must be in the future", field="expiresAt")

    link = SharedLink(
        data_room_id=room_id,
        token=secrets.token_urlsafe(32),
        password_hash=bcrypt.hash(data.password) if data.password else None,
        max_uses=data.max_uses,
        current_uses=0,
        expires_at=as_utc(data.expires_at),
        rights=list(data.rights),
        created_by=data.created_by,
        is_active=True,
        created_at=utcnow(),
    )
    db.add(link)
    db.commit()
    db.refresh(link)
    logger.info(
        "Shared link created",
        extra={"link_id": link.id, "room_id": room_id, "user_id": data.created_by, "rights": link.rights},
    )
    return link


def list_links(db: Session, room_id: str, user_id: str) -> List[SharedLink]:
    RoomRepository(db).get_by_id(room_id)
    permission_service.require_capability(db, user_id, room_id, Capability.EDIT, "manage shared links")
    return (
        db.query(SharedLink)
        .filter(SharedLink.data_room_id == room_id)
        .order_by(SharedLink.created_at.desc())
        .all()
    )


def redeem_link(db: Session, token: str, password: Optional[str] = None) -> Tuple[SharedLink, DataRoom]:
    """Use a link once. Raises PermissionDeniedError if it cannot be used."""
    link = db.query(SharedLink).filter(SharedLink.token == token).first()
    if link is None:
        raise SharedLinkNotFoundError()

    now = utcnow()
    if not link.is_active:
        raise PermissionDeniedError("This link has been deactivated")
    expires_at = as_utc(link.expires_at)
    if expires_at is not None and expires_at <= now:
        raise PermissionDeniedError("This link has expired")
    if link.max_uses is not None and link.current_uses >= link.max_uses:
        raise PermissionDeniedError("This link has reached its usage limit")
    if link.password_hash and not (password and bcrypt.verify(password, link.password_hash)):
        logger.warning("Shared link password rejected", extra={"link_id": link.id})
        raise PermissionDeniedError("Invalid link password")

    link.current_uses = link.current_uses + 1
    link.last_used_at = now
    db.commit()
    db.refresh(link)
    room = RoomRepository(db).get_by_id(link.data_room_id)
    logger.info("Shared link redeemed", extra={"link_id": link.id, "room_id": room.id})
    return link, room


def deactivate_link(db: Session, link_id: str, user_id: str) -> SharedLink:
    """Switch a link off. Allowed for its creator and the room owner."""
    link = db.query(SharedLink).filter(SharedLink.id == link_id).first()
    if link is None:
        raise SharedLinkNotFoundError()
    room = RoomRepository(db).get_by_id(link.data_room_id)
    if user_id not in (link.created_by, room.created_by):
        logger.warning(
            "Permission denied: cannot deactivate link",
            extra={"link_id": link_id, "user_id": user_id},
        )
        raise PermissionDeniedError("Only the link creator or the room owner can deactivate this link")

    link.is_active = False
    db.commit()
    db.refresh(link)
    logger.info("Shared link deactivated", extra={"link_id": link_id, "user_id": user_id})
    return link
