"""Watermark templates: one active template per room, rendered per viewer."""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ..database import utcnow
from ..models import DataRoom, User, Watermark
from ..repositories import RoomRepository
from ..schemas.watermark import WatermarkSet
from . import permission_service
from .permission_service import Capability

logger = logging.getLogger(__name__)

TEMPLATE_FIELDS = ("name", "email", "room", "date")


def get_active_watermark(db: Session, room_id: str) -> Optional[Watermark]:
    return (
        db.query(Watermark)
        .filter(Watermark.data_room_id == room_id, Watermark.is_active.is_(True))
        .order_by(Watermark.created_at.desc())
        .first()
    )


def set_watermark(db: Session, room_id: str, data: WatermarkSet) -> Watermark:
    """Replace the room's active template. Previous templates are deactivated."""
    RoomRepository(db).get_by_id(room_id)
    permission_service.require_capability(
        db, data.user_id, room_id, Capability.EDIT, "configure watermarks"
    )

    db.query(Watermark).filter(
        Watermark.data_room_id == room_id, Watermark.is_active.is_(True)
    ).update({Watermark.is_active: False}, synchronize_session=False)

    watermark = Watermark(
        data_room_id=room_id,
        template=data.template,
        position=data.position,
        opacity=data.opacity,
        is_active=True,
        created_at=utcnow(),
    )
    db.add(watermark)
    db.commit()
    db.refresh(watermark)
    logger.info("Watermark set", extra={"room_id": room_id, "user_id": data.user_id})
    return watermark


def render_watermark(template: str, user: User, room: DataRoom) -> str:
    """Fill ``{name}``, ``{email}``, ``{room}`` and ``{date}`` for one viewer.

    Unknown placeholders and stray braces are left as written.
    """
    values = {
        "name": user.name,
        "email": user.email,
        "room": room.name,
        "date": utcnow().strftime("%Y-%m-%d"),
    }
    text = template
    for key in TEMPLATE_FIELDS:
        text = text.replace("{" + key + "}", values[key])
    return text
