"""Folder schemas."""

from datetime import datetime
from typing import Optional

from pydantic import field_validator

from .common import CamelModel, strip_required


class FolderCreate(CamelModel):
    """Create a folder; ``parent_folder_id`` None places it at the room root."""
    name: str
    parent_folder_id: Optional[str] = None
    created_by: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v)


class FolderRename(CamelModel):
    new_name: str
    user_id: str

    @field_validator('new_name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v)


class FolderMove(CamelModel):
    parent_folder_id: Optional[str] = None
    user_id: str


class FolderResponse(CamelModel):
    id: str
    name: str
    data_room_id: str
    parent_folder_id: Optional[str] = None
    created_by: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FolderCreateResponse(CamelModel):
    id: str
    message: str
    folder: FolderResponse


class FolderDeleteResponse(CamelModel):
    """Result of a cascading folder delete."""
    message: str
    deleted_folders: int
    deleted_files: int
