"""Folder operations inside a data room: create, rename, move and cascading delete.

Every public method authorizes against the caller's capability flags for the
folder's room. An unknown folder id is reported as PermissionDeniedError, the
same answer a caller without access gets, so ids cannot be probed.
"""

import logging
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from ..database import utcnow
from ..exceptions import CircularFolderError, PermissionDeniedError, ValidationError
from ..models import Folder
from ..repositories import FileRepository, FolderRepository, RoomRepository
from ..schemas.folder import FolderCreate, FolderMove, FolderRename
from . import access_log_service, permission_service
from .access_log_service import ClientInfo
from .permission_service import Capability

logger = logging.getLogger(__name__)


class FolderService:
    """Folder tree operations.

    Public methods:
        create_folder -- new folder at the room root or under a parent (edit)
        rename_folder -- change the display name only (edit)
        move_folder   -- re-parent, refusing cycles (edit)
        delete_folder -- remove the subtree and soft-delete its files (delete)
    """

    def __init__(self, db: Session):
        self.db = db
        self.folder_repo = FolderRepository(db)
        self.file_repo = FileRepository(db)
        self.room_repo = RoomRepository(db)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def create_folder(self, room_id: str, data: FolderCreate) -> Folder:
        room = self.room_repo.get_by_id(room_id)
        permission_service.require_capability(
            self.db, data.created_by, room_id, Capability.EDIT, "create folders"
        )
        if data.parent_folder_id is not None:
            self._require_folder_in_room(data.parent_folder_id, room_id, "parentFolderId")

        now = utcnow()
        folder = Folder(
            name=data.name,
            data_room_id=room_id,
            parent_folder_id=data.parent_folder_id,
            created_by=data.created_by,
            created_at=now,
            updated_at=now,
        )
        self.folder_repo.add(folder)
        self.room_repo.touch(room, now)
        self.db.commit()
        self.db.refresh(folder)
        logger.info(
            "Folder created",
            extra={"folder_id": folder.id, "room_id": room_id, "user_id": data.created_by},
        )
        return folder

    def rename_folder(self, folder_id: str, data: FolderRename) -> Folder:
        folder = self._authorized_folder(folder_id, data.user_id, Capability.EDIT, "rename folders")

        now = utcnow()
        folder.name = data.new_name
        folder.updated_at = now
        self.room_repo.touch(self.room_repo.get_by_id(folder.data_room_id), now)
        self.db.commit()
        self.db.refresh(folder)
        logger.info("Folder renamed", extra={"folder_id": folder_id, "user_id": data.user_id})
        return folder

    def move_folder(self, folder_id: str, data: FolderMove) -> Folder:
        folder = self._authorized_folder(folder_id, data.user_id, Capability.EDIT, "move folders")

        new_parent = data.parent_folder_id
        if new_parent is not None:
            self._require_folder_in_room(new_parent, folder.data_room_id, "parentFolderId")
            if folder.id in self.folder_repo.ancestor_ids(new_parent):
                raise CircularFolderError(folder.id, new_parent)

        now = utcnow()
        folder.parent_folder_id = new_parent
        folder.updated_at = now
        self.room_repo.touch(self.room_repo.get_by_id(folder.data_room_id), now)
        self.db.commit()
        self.db.refresh(folder)
        logger.info(
            "Folder moved",
            extra={"folder_id": folder_id, "parent_folder_id": new_parent, "user_id": data.user_id},
        )
        return folder

    def delete_folder(
        self,
        folder_id: str,
        user_id: str,
        client: Optional[ClientInfo] = None,
    ) -> Tuple[int, int]:
        """Delete a folder, its descendants, and soft-delete every file inside.

        One ``delete`` access log entry is written per active file before
        anything is removed.

        Returns:
            (deleted_folders, deleted_files)
        """
        folder = self._authorized_folder(folder_id, user_id, Capability.DELETE, "delete folders")
        room_id = folder.data_room_id

        subtree = self.folder_repo.subtree_ids(folder)
        files = self.file_repo.list_in_folders(subtree)

        for file in files:
            access_log_service.record(
                self.db, user_id, file.id, room_id, "delete", client=client, commit=False
            )
        self.db.commit()

        now = utcnow()
        try:
            for file in files:
                file.is_active = False
                file.folder_id = None
                file.updated_at = now
            self.db.flush()
            deleted_folders = self.folder_repo.delete_many(subtree)
            self.room_repo.touch(self.room_repo.get_by_id(room_id), now)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.expire_all()
        logger.info(
            "Folder deleted",
            extra={
                "folder_id": folder_id,
                "room_id": room_id,
                "user_id": user_id,
                "deleted_folders": deleted_folders,
                "deleted_files": len(files),
            },
        )
        return deleted_folders, len(files)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _authorized_folder(
        self, folder_id: str, user_id: str, capability: Capability, action: str
    ) -> Folder:
        folder = self.folder_repo.get_by_id_optional(folder_id)
        if folder is None:
            logger.warning(
                "Permission denied: unknown folder",
                extra={"folder_id": folder_id, "user_id": user_id},
            )
            raise PermissionDeniedError(f"Insufficient permissions to {action}")
        permission_service.require_capability(
            self.db, user_id, folder.data_room_id, capability, action
        )
        return folder

    def _require_folder_in_room(self, folder_id: str, room_id: str, field: str) -> Folder:
        folder = self.folder_repo.get_by_id_optional(folder_id)
        if folder is None or folder.data_room_id != room_id:
            raise ValidationError("Folder does not belong to this data room", field=field)
        return folder
