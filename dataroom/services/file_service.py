"""File metadata operations: upload, rename, move, delete, view and download.

Every access to a file that reads or removes it leaves a row in the access
log. Unknown and soft-deleted file ids are answered with PermissionDeniedError,
exactly like a caller who lacks the capability.
"""

import logging
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from ..core.config import settings
from ..database import new_id, utcnow
from ..exceptions import FileTypeNotAllowedError, PermissionDeniedError, ValidationError
from ..models import File, FileAccessLog, RoomPermission
from ..repositories import FileRepository, FolderRepository, RoomRepository, UserRepository
from ..schemas.file import (
    FileDownloadResponse,
    FileMove,
    FileRename,
    FileUploadRequest,
    FileViewResponse,
)
from . import access_log_service, notification_service, permission_service, watermark_service
from .access_log_service import ClientInfo
from .permission_service import Capability

logger = logging.getLogger(__name__)


def normalize_file_type(file_type: str) -> str:
    return file_type.strip().lower().lstrip(".")


class FileService:
    """File operations inside a data room.

    Public methods:
        upload_file         -- record metadata for a new file (upload)
        rename_file         -- change the display name (edit)
        move_file           -- change the containing folder (edit)
        delete_file         -- soft-delete after logging the attempt (delete)
        view_file           -- logged preview with optional watermark (view)
        download_file       -- logged storage location (download)
        list_files_in_room  -- active files, newest first (view)
        list_files_in_folder
        get_access_logs     -- audit trail, room owner only
    """

    def __init__(self, db: Session):
        self.db = db
        self.file_repo = FileRepository(db)
        self.folder_repo = FolderRepository(db)
        self.room_repo = RoomRepository(db)
        self.user_repo = UserRepository(db)

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def upload_file(
        self,
        room_id: str,
        data: FileUploadRequest,
        client: Optional[ClientInfo] = None,
    ) -> File:
        file_type = normalize_file_type(data.file_type)
        allowed = settings.get_allowed_extensions()
        if file_type not in allowed:
            raise FileTypeNotAllowedError(file_type, allowed)

        room = self.room_repo.get_by_id(room_id)
        permission_service.require_capability(
            self.db, data.uploaded_by, room_id, Capability.UPLOAD, "upload files"
        )
        if data.folder_id is not None:
            folder = self.folder_repo.get_by_id_optional(data.folder_id)
            if folder is None or folder.data_room_id != room_id:
                raise ValidationError("Folder does not belong to this data room", field="folderId")

        file_id = new_id()
        now = utcnow()
        try:
            file = File(
                id=file_id,
                name=data.file_name,
                original_name=data.original_name,
                file_type=file_type,
                file_size=data.file_size,
                file_path=f"{settings.upload_root}/{room_id}/{file_id}_{data.file_name}",
                mime_type=data.mime_type,
                checksum=data.checksum,
                data_room_id=room_id,
                folder_id=data.folder_id,
                uploaded_by=data.uploaded_by,
                version_number=1,
                is_active=True,
                created_at=now,
                updated_at=now,
            )
            self.file_repo.add(file)
            access_log_service.record(
                self.db, data.uploaded_by, file_id, room_id, "upload", client=client, commit=False
            )
            self.room_repo.touch(room, now)
            notification_service.notify_room_members(
                self.db,
                room_id,
                type="file_uploaded",
                title=f"New file in {room.name}",
                message=f"{data.original_name} was uploaded.",
                exclude_user_id=data.uploaded_by,
            )
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(file)
        logger.info(
            "File uploaded",
            extra={
                "file_id": file_id,
                "room_id": room_id,
                "user_id": data.uploaded_by,
                "file_type": file_type,
                "file_size": data.file_size,
            },
        )
        return file

    def rename_file(self, file_id: str, data: FileRename) -> File:
        file, _ = self._authorized_file(file_id, data.user_id, Capability.EDIT, "rename files")
        file.name = data.new_name
        file.updated_at = utcnow()
        self.db.commit()
        self.db.refresh(file)
        logger.info("File renamed", extra={"file_id": file_id, "user_id": data.user_id})
        return file

    def move_file(self, file_id: str, data: FileMove) -> File:
        file, _ = self._authorized_file(file_id, data.user_id, Capability.EDIT, "move files")
        if data.folder_id is not None:
            folder = self.folder_repo.get_by_id_optional(data.folder_id)
            if folder is None or folder.data_room_id != file.data_room_id:
                raise ValidationError("Folder does not belong to this data room", field="folderId")

        now = utcnow()
        file.folder_id = data.folder_id
        file.updated_at = now
        self.room_repo.touch(self.room_repo.get_by_id(file.data_room_id), now)
        self.db.commit()
        self.db.refresh(file)
        logger.info(
            "File moved",
            extra={"file_id": file_id, "folder_id": data.folder_id, "user_id": data.user_id},
        )
        return file

    def delete_file(self, file_id: str, user_id: str, client: Optional[ClientInfo] = None) -> None:
        """Soft-delete a file. The ``delete`` log entry is committed first."""
        file, _ = self._authorized_file(file_id, user_id, Capability.DELETE, "delete files")
        room_id = file.data_room_id

        access_log_service.record(self.db, user_id, file_id, room_id, "delete", client=client)

        now = utcnow()
        file.is_active = False
        file.updated_at = now
        self.room_repo.touch(self.room_repo.get_by_id(room_id), now)
        self.db.commit()
        logger.info("File deleted", extra={"file_id": file_id, "room_id": room_id, "user_id": user_id})

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def view_file(
        self, file_id: str, user_id: str, client: Optional[ClientInfo] = None
    ) -> FileViewResponse:
        file, permission = self._authorized_file(file_id, user_id, Capability.VIEW, "view files")
        watermark = self._watermark_for(file, permission, user_id)
        access_log_service.record(
            self.db, user_id, file_id, file.data_room_id, "view", client=client
        )
        return FileViewResponse(
            id=file.id,
            name=file.name,
            original_name=file.original_name,
            file_type=file.file_type,
            file_size=file.file_size,
            mime_type=file.mime_type,
            uploaded_by=file.uploaded_by,
            created_at=file.created_at,
            content=f"This is a preview of {file.name}. Full content extraction is not available.",
            watermark=watermark,
        )

    def download_file(
        self, file_id: str, user_id: str, client: Optional[ClientInfo] = None
    ) -> FileDownloadResponse:
        file, permission = self._authorized_file(
            file_id, user_id, Capability.DOWNLOAD, "download files"
        )
        watermark = self._watermark_for(file, permission, user_id)
        access_log_service.record(
            self.db, user_id, file_id, file.data_room_id, "download", client=client
        )
        return FileDownloadResponse(
            id=file.id,
            name=file.name,
            file_type=file.file_type,
            file_size=file.file_size,
            mime_type=file.mime_type,
            file_path=file.file_path,
            checksum=file.checksum,
            watermark=watermark,
        )

    def list_files_in_room(self, room_id: str, user_id: str) -> List[File]:
        permission_service.require_capability(
            self.db, user_id, room_id, Capability.VIEW, "list files"
        )
        return self.file_repo.list_by_room(room_id)

    def list_files_in_folder(self, room_id: str, folder_id: str, user_id: str) -> List[File]:
        permission_service.require_capability(
            self.db, user_id, room_id, Capability.VIEW, "list files"
        )
        folder = self.folder_repo.get_by_id_optional(folder_id)
        if folder is None or folder.data_room_id != room_id:
            raise PermissionDeniedError("Insufficient permissions to list files")
        return self.file_repo.list_by_folder(folder_id)

    def get_access_logs(
        self,
        room_id: str,
        user_id: str,
        file_id: Optional[str] = None,
        action: Optional[str] = None,
        limit: int = 100,
    ) -> List[FileAccessLog]:
        room = self.room_repo.get_by_id(room_id)
        permission_service.require_room_owner(room, user_id, "read access logs")
        return access_log_service.get_for_room(
            self.db, room_id, action=action, file_id=file_id, limit=limit
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _authorized_file(
        self, file_id: str, user_id: str, capability: Capability, action: str
    ) -> Tuple[File, RoomPermission]:
        file = self.file_repo.get_by_id_optional(file_id)
        if file is None:
            logger.warning(
                "Permission denied: unknown file",
                extra={"file_id": file_id, "user_id": user_id},
            )
            raise PermissionDeniedError(f"Insufficient permissions to {action}")
        permission = permission_service.require_capability(
            self.db, user_id, file.data_room_id, capability, action
        )
        return file, permission

    def _watermark_for(self, file: File, permission: RoomPermission, user_id: str) -> Optional[str]:
        if not permission.watermark_required:
            return None
        template = watermark_service.get_active_watermark(self.db, file.data_room_id)
        if template is None:
            return None
        return watermark_service.render_watermark(
            template.template,
            self.user_repo.get_by_id(user_id),
            self.room_repo.get_by_id(file.data_room_id),
        )
