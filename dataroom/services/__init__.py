"""Business logic services."""

from .file_service import FileService
from .folder_service import FolderService
from .room_service import RoomService

__all__ = ["FileService", "FolderService", "RoomService"]
