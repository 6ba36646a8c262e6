"""Room membership API: list, grant and revoke per-user access."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.common import MessageResponse
from ..schemas.permission import PermissionGrant, PermissionResponse
from ..services import permission_service

router = APIRouter(prefix="/api/data-rooms/{room_id}/permissions", tags=["permissions"])


@router.get("", response_model=List[PermissionResponse])
def list_permissions(
    room_id: str,
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
):
    return permission_service.list_room_permissions(db, room_id, user_id)


@router.post("", response_model=PermissionResponse)
def grant_permission(room_id: str, data: PermissionGrant, db: Session = Depends(get_db)):
    """Create or overwrite a member's access. Unset flags take the role's defaults."""
    overrides = data.model_dump(
        include={"can_view", "can_upload", "can_download", "can_edit", "can_delete", "ai_access"}
    )
    return permission_service.grant_access(
        db,
        room_id=room_id,
        user_id=data.user_id,
        role=data.role,
        granted_by=data.granted_by,
        overrides=overrides,
        watermark_required=data.watermark_required,
        expires_at=data.expires_at,
    )


@router.delete("/{user_id}", response_model=MessageResponse)
def revoke_permission(
    room_id: str,
    user_id: str,
    revoked_by: str = Query(..., alias="revokedBy"),
    db: Session = Depends(get_db),
):
    """Remove a member's access. Revoking a missing grant is a no-op."""
    revoked = permission_service.revoke_access(db, room_id, user_id, revoked_by)
    message = "Access revoked successfully" if revoked else "User had no access to revoke"
    return MessageResponse(message=message)
