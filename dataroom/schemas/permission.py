"""Permission and access log schemas."""

from datetime import datetime
from typing import Optional

from ..models.permission import Role
from .common import CamelModel


class PermissionGrant(CamelModel):
    """Grant (or overwrite) a user's access to a room.

    Capability flags left as None take the role's default.
    """
    user_id: str
    granted_by: str
    role: Role
    can_view: Optional[bool] = None
    can_upload: Optional[bool] = None
    can_download: Optional[bool] = None
    can_edit: Optional[bool] = None
    can_delete: Optional[bool] = None
    ai_access: Optional[bool] = None
    watermark_required: bool = True
    expires_at: Optional[datetime] = None


class PermissionResponse(CamelModel):
    user_id: str
    data_room_id: str
    role: str
    can_view: bool
    can_upload: bool
    can_download: bool
    can_edit: bool
    can_delete: bool
    ai_access: bool
    watermark_required: bool
    expires_at: Optional[datetime] = None
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class AccessLogResponse(CamelModel):
    id: str
    user_id: str
    file_id: str
    data_room_id: str
    action: str
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: Optional[datetime] = None
