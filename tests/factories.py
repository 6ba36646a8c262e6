"""Factories shared by the service and API tests."""

from typing import Optional

from dataroom.models import DataRoom, File, Role, User
from dataroom.schemas.file import FileUploadRequest
from dataroom.services import FileService, permission_service


def grant(db, room: DataRoom, user: User, role: Role = Role.VIEWER, **flags):
    """Give *user* access to *room* on behalf of its owner."""
    return permission_service.grant_access(
        db,
        room_id=room.id,
        user_id=user.id,
        role=role,
        granted_by=room.created_by,
        overrides=flags or None,
    )


def make_upload(
    user: User,
    original_name: str = "report.pdf",
    file_type: str = "pdf",
    folder_id: Optional[str] = None,
    **overrides,
) -> FileUploadRequest:
    """Factory for upload metadata."""
    payload = {
        "original_name": original_name,
        "file_name": original_name,
        "file_size": 2048,
        "mime_type": "application/pdf",
        "file_type": file_type,
        "uploaded_by": user.id,
        "folder_id": folder_id,
    }
    payload.update(overrides)
    return FileUploadRequest(**payload)


def upload(db, room: DataRoom, user: User, **kwargs) -> File:
    return FileService(db).upload_file(room.id, make_upload(user, **kwargs))


def upload_payload(user_id: str, original_name: str = "report.pdf", file_type: str = "pdf", **overrides) -> dict:
    """Factory for upload request bodies (camelCase, as the API expects)."""
    payload = {
        "originalName": original_name,
        "fileName": original_name,
        "fileSize": 2048,
        "mimeType": "application/pdf",
        "fileType": file_type,
        "uploadedBy": user_id,
    }
    payload.update(overrides)
    return payload
