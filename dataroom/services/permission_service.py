"""Permission resolution and granting: the one place authorization rules live.

Design:
    - One permission row per (user, room); no row = no access.
    - A row whose ``expires_at`` has passed also counts as no access.
    - Roles (Creator, Editor, Contributor, Viewer) are display labels that
      pick the DEFAULT capability flags at grant time.
    - Every authorization check reads the capability flags, never the role.
    - Granting and revoking access is reserved to the room's creator.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields
from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from sqlalchemy.orm import Session

from ..database import utcnow
from ..exceptions import PermissionDeniedError, ValidationError
from ..models import DataRoom, RoomPermission, Role
from ..repositories import PermissionRepository, RoomRepository, UserRepository

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    """Actions a permission row can allow. Values are the model column names."""

    VIEW = "can_view"
    UPLOAD = "can_upload"
    DOWNLOAD = "can_download"
    EDIT = "can_edit"
    DELETE = "can_delete"
    AI_ACCESS = "ai_access"


@dataclass(frozen=True)
class CapabilitySet:
    """The six capability flags of a permission row as one value."""

    can_view: bool = False
    can_upload: bool = False
    can_download: bool = False
    can_edit: bool = False
    can_delete: bool = False
    ai_access: bool = False

    @classmethod
    def of(cls, permission: RoomPermission) -> "CapabilitySet":
        return cls(**{f.name: bool(getattr(permission, f.name)) for f in fields(cls)})

    def allows(self, capability: Capability) -> bool:
        return getattr(self, capability.value)

    def override(self, **flags: Optional[bool]) -> "CapabilitySet":
        """Copy with the given flags replaced; None leaves a flag unchanged."""
        current = {f.name: getattr(self, f.name) for f in fields(self)}
        current.update({k: v for k, v in flags.items() if v is not None})
        return CapabilitySet(**current)

    def as_columns(self) -> dict[str, bool]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


ALL_CAPABILITIES = CapabilitySet(True, True, True, True, True, True)

ROLE_DEFAULTS: dict[Role, CapabilitySet] = {
    Role.CREATOR: ALL_CAPABILITIES,
    Role.EDITOR: CapabilitySet(
        can_view=True, can_upload=True, can_download=True, can_edit=True, can_delete=True,
    ),
    Role.CONTRIBUTOR: CapabilitySet(can_view=True, can_upload=True),
    Role.VIEWER: CapabilitySet(can_view=True),
}


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """SQLite hands datetimes back naive; every stored value is UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_expired(permission: RoomPermission, now: Optional[datetime] = None) -> bool:
    expires_at = as_utc(permission.expires_at)
    if expires_at is None:
        return False
    return expires_at <= (now or utcnow())


def check_capability(permission: Optional[RoomPermission], capability: Capability) -> bool:
    """Pure check: does *permission* allow *capability*?

    ``None`` (no row) and expired rows allow nothing.
    """
    if permission is None or is_expired(permission):
        return False
    return CapabilitySet.of(permission).allows(capability)


def resolve_permission(db: Session, user_id: str, room_id: str) -> Optional[RoomPermission]:
    """Return the user's live permission row for the room, or None for no access."""
    permission = PermissionRepository(db).get(user_id, room_id)
    if permission is None or is_expired(permission):
        return None
    return permission


def require_capability(
    db: Session,
    user_id: str,
    room_id: str,
    capability: Capability,
    action: str,
) -> RoomPermission:
    """Resolve the user's permission and insist on *capability*.

    Args:
        action: Human-readable verb used in the error message ("upload files").

    Raises:
        PermissionDeniedError: no row, expired row, or flag not set.
    """
    permission = resolve_permission(db, user_id, room_id)
    if not check_capability(permission, capability):
        logger.warning(
            "Permission denied",
            extra={"user_id": user_id, "room_id": room_id, "capability": capability.value},
        )
        raise PermissionDeniedError(f"Insufficient permissions to {action}")
    return permission


def require_room_owner(room: DataRoom, user_id: str, action: str) -> None:
    """Only the room's creator may manage who has access to it."""
    if room.created_by != user_id:
        logger.warning(
            "Permission denied: not room owner",
            extra={"user_id": user_id, "room_id": room.id},
        )
        raise PermissionDeniedError(f"Only the room owner can {action}")


def grant_access(
    db: Session,
    room_id: str,
    user_id: str,
    role: Role,
    granted_by: str,
    overrides: Optional[dict[str, Optional[bool]]] = None,
    watermark_required: bool = True,
    expires_at: Optional[datetime] = None,
    commit: bool = True,
) -> RoomPermission:
    """Create or overwrite the (user, room) permission row (last write wins).

    Flags start from the role's defaults; *overrides* replace individual ones.
    The owner's own Creator row cannot be replaced through this path.
    """
    room = RoomRepository(db).get_by_id(room_id)
    require_room_owner(room, granted_by, "grant access")
    UserRepository(db).get_by_id(user_id)
    if user_id == room.created_by:
        raise ValidationError("The room owner's access cannot be changed", field="userId")
    if expires_at is not None and as_utc(expires_at) <= utcnow():
        raise ValidationError("Expiry must be in the future", field="expiresAt")

    capabilities = ROLE_DEFAULTS[role].override(**(overrides or {}))
    permission = _upsert(
        db, room_id, user_id, role, capabilities, granted_by,
        watermark_required=watermark_required,
        expires_at=as_utc(expires_at),
    )

    from .notification_service import notify
    notify(
        db,
        user_id=user_id,
        room_id=room_id,
        type="access_granted",
        title=f"Access granted to {room.name}",
        message=f"You were given the {role.value} role.",
        commit=False,
    )

    if commit:
        db.commit()
        db.refresh(permission)
    logger.info(
        "Access granted",
        extra={"room_id": room_id, "user_id": user_id, "role": role.value, "granted_by": granted_by},
    )
    return permission


def grant_creator_access(db: Session, room_id: str, creator_id: str) -> RoomPermission:
    """Give a room's creator the Creator role with every flag set. Does not commit."""
    return _upsert(db, room_id, creator_id, Role.CREATOR, ALL_CAPABILITIES, creator_id)


def _upsert(
    db: Session,
    room_id: str,
    user_id: str,
    role: Role,
    capabilities: CapabilitySet,
    granted_by: str,
    watermark_required: bool = True,
    expires_at: Optional[datetime] = None,
) -> RoomPermission:
    repo = PermissionRepository(db)
    permission = repo.get(user_id, room_id)
    if permission is None:
        permission = RoomPermission(user_id=user_id, data_room_id=room_id)
        db.add(permission)

    permission.role = role.value
    for column, value in capabilities.as_columns().items():
        setattr(permission, column, value)
    permission.watermark_required = watermark_required
    permission.expires_at = expires_at
    permission.created_by = granted_by
    permission.updated_at = utcnow()
    db.flush()
    return permission


def revoke_access(db: Session, room_id: str, user_id: str, revoked_by: str) -> bool:
    """Delete the (user, room) row. Returns False if there was none."""
    room = RoomRepository(db).get_by_id(room_id)
    require_room_owner(room, revoked_by, "revoke access")
    if user_id == room.created_by:
        raise ValidationError("The room owner's access cannot be revoked", field="userId")

    repo = PermissionRepository(db)
    permission = repo.get(user_id, room_id)
    if permission is None:
        return False
    repo.delete(permission)
    db.commit()
    logger.info(
        "Access revoked",
        extra={"room_id": room_id, "user_id": user_id, "revoked_by": revoked_by},
    )
    return True


def list_room_permissions(db: Session, room_id: str, requested_by: str) -> list[RoomPermission]:
    """All permission rows of a room. Members who can view the room may list them."""
    RoomRepository(db).get_by_id(room_id)
    require_capability(db, requested_by, room_id, Capability.VIEW, "view room members")
    return PermissionRepository(db).list_by_room(room_id)
