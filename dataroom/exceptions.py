"""Custom exception hierarchy for the data room API."""

from enum import Enum
from typing import Optional, Dict, Any


class ErrorCode(str, Enum):
    """Standardized error codes for API responses."""

    # Resource errors
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    FOLDER_NOT_FOUND = "FOLDER_NOT_FOUND"
    FILE_NOT_FOUND = "FILE_NOT_FOUND"
    USER_NOT_FOUND = "USER_NOT_FOUND"
    LINK_NOT_FOUND = "LINK_NOT_FOUND"
    AI_QUERY_NOT_FOUND = "AI_QUERY_NOT_FOUND"

    # Folder tree errors
    CIRCULAR_FOLDER = "CIRCULAR_FOLDER"

    # Validation errors
    VALIDATION_ERROR = "VALIDATION_ERROR"
    FILE_TYPE_NOT_ALLOWED = "FILE_TYPE_NOT_ALLOWED"

    # Authorization
    PERMISSION_DENIED = "PERMISSION_DENIED"

    # State errors
    CONFLICT = "CONFLICT"

    # Database errors
    DATABASE_ERROR = "DATABASE_ERROR"

    # Generic errors
    INTERNAL_ERROR = "INTERNAL_ERROR"


class DataRoomError(Exception):
    """
    Base exception for all data room errors.

    Provides structured error responses with:
    - Human-readable message
    - Machine-readable error code
    - HTTP status code
    - Optional additional details
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {
            "error": self.error_code.value,
            "message": self.message,
            "details": self.details
        }


class RoomNotFoundError(DataRoomError):
    """Data room not found in database."""

    def __init__(self, room_id: str):
        super().__init__(
            f"Data room not found: {room_id}",
            ErrorCode.ROOM_NOT_FOUND,
            status_code=404,
            details={"room_id": room_id}
        )


class FolderNotFoundError(DataRoomError):
    """Folder not found in database."""

    def __init__(self, folder_id: str):
        super().__init__(
            f"Folder not found: {folder_id}",
            ErrorCode.FOLDER_NOT_FOUND,
            status_code=404,
            details={"folder_id": folder_id}
        )


class FileRecordNotFoundError(DataRoomError):
    """File metadata row not found in database."""

    def __init__(self, file_id: str):
        super().__init__(
            f"File not found: {file_id}",
            ErrorCode.FILE_NOT_FOUND,
            status_code=404,
            details={"file_id": file_id}
        )


class UserNotFoundError(DataRoomError):
    """User not found in database."""

    def __init__(self, user_id: str):
        super().__init__(
            f"User not found: {user_id}",
            ErrorCode.USER_NOT_FOUND,
            status_code=404,
            details={"user_id": user_id}
        )


class SharedLinkNotFoundError(DataRoomError):
    """Shared link token or id does not resolve."""

    def __init__(self):
        super().__init__(
            "Shared link not found",
            ErrorCode.LINK_NOT_FOUND,
            status_code=404,
        )


class AiQueryNotFoundError(DataRoomError):
    """AI query record not found in database."""

    def __init__(self, query_id: str):
        super().__init__(
            f"AI query not found: {query_id}",
            ErrorCode.AI_QUERY_NOT_FOUND,
            status_code=404,
            details={"query_id": query_id}
        )


class ValidationError(DataRoomError):
    """Validation failed for user input."""

    def __init__(self, message: str, field: Optional[str] = None):
        details = {"field": field} if field else {}
        super().__init__(
            message,
            ErrorCode.VALIDATION_ERROR,
            status_code=400,
            details=details
        )


class FileTypeNotAllowedError(ValidationError):
    """Uploaded file type is not on the allow-list."""

    def __init__(self, file_type: str, allowed: list[str]):
        super().__init__(
            f"File type {file_type} not allowed. Allowed types: {', '.join(allowed)}",
            field="fileType",
        )
        self.error_code = ErrorCode.FILE_TYPE_NOT_ALLOWED
        self.details["allowed"] = allowed


class CircularFolderError(ValidationError):
    """Moving a folder under itself or one of its descendants."""

    def __init__(self, folder_id: str, parent_id: str):
        super().__init__(
            f"Folder {folder_id} cannot be placed inside its own subtree ({parent_id})",
            field="parentFolderId",
        )
        self.error_code = ErrorCode.CIRCULAR_FOLDER


class PermissionDeniedError(DataRoomError):
    """Caller lacks the capability required for the requested action.

    Also raised for unknown folder/file ids so that existence is not
    revealed to callers without access.
    """

    def __init__(self, message: str = "Insufficient permissions"):
        super().__init__(
            message,
            ErrorCode.PERMISSION_DENIED,
            status_code=403,
        )


class ConflictError(DataRoomError):
    """Requested state transition is not allowed from the current state."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(
            message,
            ErrorCode.CONFLICT,
            status_code=409,
            details=details
        )


class DatabaseError(DataRoomError):
    """Database operation failed."""

    def __init__(self, message: str = "Database operation failed"):
        super().__init__(
            message,
            ErrorCode.DATABASE_ERROR,
            status_code=500,
        )
