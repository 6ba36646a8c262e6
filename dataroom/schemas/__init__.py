"""Pydantic schemas for API validation."""

from .common import CamelModel, MessageResponse
from .user import UserCreate, UserResponse
from .room import (
    RoomCreate,
    RoomUpdate,
    RoomCreateResponse,
    RoomSummary,
    RoomDetails,
    RoomStats,
    DashboardStats,
)
from .folder import (
    FolderCreate,
    FolderRename,
    FolderMove,
    FolderResponse,
    FolderCreateResponse,
    FolderDeleteResponse,
)
from .file import (
    FileUploadRequest,
    FileRename,
    FileMove,
    FileResponse,
    FileUploadResponse,
    FileViewResponse,
    FileDownloadResponse,
)
from .permission import PermissionGrant, PermissionResponse, AccessLogResponse

__all__ = [
    "CamelModel",
    "MessageResponse",
    "UserCreate",
    "UserResponse",
    "RoomCreate",
    "RoomUpdate",
    "RoomCreateResponse",
    "RoomSummary",
    "RoomDetails",
    "RoomStats",
    "DashboardStats",
    "FolderCreate",
    "FolderRename",
    "FolderMove",
    "FolderResponse",
    "FolderCreateResponse",
    "FolderDeleteResponse",
    "FileUploadRequest",
    "FileRename",
    "FileMove",
    "FileResponse",
    "FileUploadResponse",
    "FileViewResponse",
    "FileDownloadResponse",
    "PermissionGrant",
    "PermissionResponse",
    "AccessLogResponse",
]
