"""Data access repositories."""

from .base import BaseRepository
from .user_repository import UserRepository
from .room_repository import RoomRepository
from .folder_repository import FolderRepository
from .file_repository import FileRepository
from .permission_repository import PermissionRepository
from .tag_repository import TagRepository

__all__ = [
    "BaseRepository",
    "UserRepository",
    "RoomRepository",
    "FolderRepository",
    "FileRepository",
    "PermissionRepository",
    "TagRepository",
]
