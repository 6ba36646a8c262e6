"""File API: upload metadata, list, rename, move, delete, view, download and audit trail.

Every endpoint names the acting user explicitly (``uploadedBy`` / ``userId``);
FileService checks that user's capability flags for the file's room.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.common import MessageResponse
from ..schemas.file import (
    FileDownloadResponse,
    FileMove,
    FileRename,
    FileResponse,
    FileUploadRequest,
    FileUploadResponse,
    FileViewResponse,
)
from ..schemas.permission import AccessLogResponse
from ..services import FileService
from ..services.access_log_service import ClientInfo
from .client import client_info

router = APIRouter(prefix="/api", tags=["files"])


@router.post("/data-rooms/{room_id}/files", response_model=FileUploadResponse)
def upload_file(
    room_id: str,
    data: FileUploadRequest,
    db: Session = Depends(get_db),
    client: ClientInfo = Depends(client_info),
):
    file = FileService(db).upload_file(room_id, data, client)
    return FileUploadResponse(
        id=file.id,
        message="File uploaded successfully",
        file=FileResponse.model_validate(file),
    )


@router.get("/data-rooms/{room_id}/files", response_model=List[FileResponse])
def list_files(
    room_id: str,
    user_id: str = Query(..., alias="userId"),
    folder_id: Optional[str] = Query(None, alias="folderId"),
    db: Session = Depends(get_db),
):
    """Active files in the room, or in one folder of it when ``folderId`` is given."""
    service = FileService(db)
    if folder_id:
        return service.list_files_in_folder(room_id, folder_id, user_id)
    return service.list_files_in_room(room_id, user_id)


@router.put("/files/{file_id}", response_model=FileResponse)
def rename_file(file_id: str, data: FileRename, db: Session = Depends(get_db)):
    return FileService(db).rename_file(file_id, data)


@router.put("/files/{file_id}/move", response_model=FileResponse)
def move_file(file_id: str, data: FileMove, db: Session = Depends(get_db)):
    return FileService(db).move_file(file_id, data)


@router.delete("/files/{file_id}", response_model=MessageResponse)
def delete_file(
    file_id: str,
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
    client: ClientInfo = Depends(client_info),
):
    FileService(db).delete_file(file_id, user_id, client)
    return MessageResponse(message="File deleted successfully")


@router.get("/files/{file_id}/view", response_model=FileViewResponse)
def view_file(
    file_id: str,
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
    client: ClientInfo = Depends(client_info),
):
    return FileService(db).view_file(file_id, user_id, client)


@router.get("/files/{file_id}/download", response_model=FileDownloadResponse)
def download_file(
    file_id: str,
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
    client: ClientInfo = Depends(client_info),
):
    return FileService(db).download_file(file_id, user_id, client)


@router.get("/data-rooms/{room_id}/access-logs", response_model=List[AccessLogResponse])
def get_access_logs(
    room_id: str,
    user_id: str = Query(..., alias="userId"),
    file_id: Optional[str] = Query(None, alias="fileId"),
    action: Optional[str] = Query(None),
    limit: int = Query(100, ge=1, le=1000),
    db: Session = Depends(get_db),
):
    """Room audit trail, newest first. Only the room owner may read it."""
    return FileService(db).get_access_logs(room_id, user_id, file_id=file_id, action=action, limit=limit)
