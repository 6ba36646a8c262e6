"""File metadata schemas."""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from .common import CamelModel, strip_required


class FileUploadRequest(CamelModel):
    """Metadata describing an uploaded file.

    The allow-list check on ``file_type`` lives in FileService so that it
    applies to every caller, not only HTTP requests.
    """
    original_name: str
    file_name: str
    file_size: int = Field(..., gt=0)
    mime_type: str
    file_type: str
    uploaded_by: str
    folder_id: Optional[str] = None
    checksum: Optional[str] = None

    @field_validator('original_name', 'file_name', 'mime_type', 'file_type', 'uploaded_by')
    @classmethod
    def validate_required(cls, v: str) -> str:
        return strip_required(v)

    @field_validator('file_name')
    @classmethod
    def validate_plain_file_name(cls, v: str) -> str:
        # file_name becomes the last segment of the storage path
        if "/" in v or "\\" in v or v in (".", "..") or "\x00" in v:
            raise ValueError("must be a plain file name without path separators")
        return v


class FileRename(CamelModel):
    new_name: str
    user_id: str

    @field_validator('new_name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v)


class FileMove(CamelModel):
    """Move a file; ``folder_id`` None moves it to the room root."""
    folder_id: Optional[str] = None
    user_id: str


class FileResponse(CamelModel):
    id: str
    name: str
    original_name: str
    file_type: str
    file_size: int
    file_path: str
    mime_type: Optional[str] = None
    checksum: Optional[str] = None
    data_room_id: str
    folder_id: Optional[str] = None
    uploaded_by: str
    version_number: int
    is_active: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class FileUploadResponse(CamelModel):
    id: str
    message: str
    file: FileResponse


class FileViewResponse(CamelModel):
    """File metadata plus a preview placeholder (no content extraction)."""
    id: str
    name: str
    original_name: str
    file_type: str
    file_size: int
    mime_type: Optional[str] = None
    uploaded_by: str
    created_at: Optional[datetime] = None
    content: str
    watermark: Optional[str] = None


class FileDownloadResponse(CamelModel):
    """Where the bytes for a file live; serving them is left to the storage layer."""
    id: str
    name: str
    file_type: str
    file_size: int
    mime_type: Optional[str] = None
    file_path: str
    checksum: Optional[str] = None
    watermark: Optional[str] = None
