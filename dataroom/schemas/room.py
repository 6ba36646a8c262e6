"""Data room schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import field_validator

from .common import CamelModel, strip_required
from .file import FileResponse
from .folder import FolderResponse


def _clean_tags(v: Optional[List[str]]) -> Optional[List[str]]:
    if v is None:
        return None
    return [t.strip() for t in v if t and t.strip()]


class RoomCreate(CamelModel):
    """Create a room. Tag names are matched exactly; unknown ones are created."""
    name: str
    description: Optional[str] = None
    tags: List[str] = []
    creator_id: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v)

    @field_validator('tags')
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return _clean_tags(v)


class RoomUpdate(CamelModel):
    """Partial room update. ``tags`` replaces the whole tag set when given."""
    user_id: str
    name: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[List[str]] = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return strip_required(v) if v is not None else None

    @field_validator('tags')
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(v)


class RoomCreateResponse(CamelModel):
    id: str
    message: str


class RoomSummary(CamelModel):
    """Room card as shown on the dashboard.

    ``role`` is only set for per-user listings.
    """
    id: str
    name: str
    description: Optional[str] = None
    created_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    created_by: str
    creator_id: str
    role: Optional[str] = None
    file_count: int = 0
    folder_count: int = 0
    tags: List[str] = []


class RoomDetails(CamelModel):
    """Room with its folders and active files.

    ``role`` falls back to "Viewer" when the user has no permission row;
    that default is a display value only and grants nothing.
    """
    id: str
    name: str
    description: Optional[str] = None
    created_by: str
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    last_modified: Optional[datetime] = None
    role: str
    tags: List[str] = []
    folders: List[FolderResponse] = []
    files: List[FileResponse] = []


class RoomStats(CamelModel):
    document_count: int
    user_count: int
    folder_count: int


class DashboardStats(CamelModel):
    total_rooms: int
    total_files: int
    total_users: int
    recent_activity: int
