"""Folder API: create, rename, move and cascading delete.

Single router for all folder operations. Delegates to FolderService.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..schemas.folder import (
    FolderCreate,
    FolderCreateResponse,
    FolderDeleteResponse,
    FolderMove,
    FolderRename,
    FolderResponse,
)
from ..services import FolderService
from ..services.access_log_service import ClientInfo
from .client import client_info

router = APIRouter(prefix="/api", tags=["folders"])


@router.post("/data-rooms/{room_id}/folders", response_model=FolderCreateResponse)
def create_folder(room_id: str, data: FolderCreate, db: Session = Depends(get_db)):
    folder = FolderService(db).create_folder(room_id, data)
    return FolderCreateResponse(
        id=folder.id,
        message="Folder created successfully",
        folder=FolderResponse.model_validate(folder),
    )


@router.put("/folders/{folder_id}", response_model=FolderResponse)
def rename_folder(folder_id: str, data: FolderRename, db: Session = Depends(get_db)):
    return FolderService(db).rename_folder(folder_id, data)


@router.put("/folders/{folder_id}/move", response_model=FolderResponse)
def move_folder(folder_id: str, data: FolderMove, db: Session = Depends(get_db)):
    return FolderService(db).move_folder(folder_id, data)


@router.delete("/folders/{folder_id}", response_model=FolderDeleteResponse)
def delete_folder(
    folder_id: str,
    user_id: str = Query(..., alias="userId"),
    db: Session = Depends(get_db),
    client: ClientInfo = Depends(client_info),
):
    """Delete the folder and everything below it. Contained files are soft-deleted."""
    deleted_folders, deleted_files = FolderService(db).delete_folder(folder_id, user_id, client)
    return FolderDeleteResponse(
        message="Folder deleted successfully",
        deleted_folders=deleted_folders,
        deleted_files=deleted_files,
    )
