"""Database models."""

from .user import User
from .data_room import DataRoom, Tag, DataRoomTag
from .permission import RoomPermission, Role
from .folder import Folder
from .file import File
from .access_log import FileAccessLog, ACCESS_ACTIONS
from .shared_link import SharedLink
from .ai_query import AiQuery, QUERY_STATUSES
from .notification import Notification
from .watermark import Watermark

__all__ = [
    "User", "DataRoom", "Tag", "DataRoomTag", "RoomPermission", "Role",
    "Folder", "File", "FileAccessLog", "ACCESS_ACTIONS",
    "SharedLink", "AiQuery", "QUERY_STATUSES",
    "Notification", "Watermark",
]
