"""Repository for file metadata.

``get_by_id`` and the list helpers only see active files.
"""

from typing import List

from sqlalchemy.orm import Query

from ..exceptions import FileRecordNotFoundError
from ..models.file import File
from .base import BaseRepository


class FileRepository(BaseRepository[File]):
    model_class = File
    not_found_error = FileRecordNotFoundError

    def _base_query(self) -> Query:
        return self.db.query(File).filter(File.is_active.is_(True))

    def list_by_room(self, room_id: str) -> List[File]:
        return (
            self._base_query()
            .filter(File.data_room_id == room_id)
            .order_by(File.created_at.desc())
            .all()
        )

    def list_by_folder(self, folder_id: str) -> List[File]:
        return (
            self._base_query()
            .filter(File.folder_id == folder_id)
            .order_by(File.created_at.desc())
            .all()
        )

    def list_in_folders(self, folder_ids: List[str]) -> List[File]:
        if not folder_ids:
            return []
        return self._base_query().filter(File.folder_id.in_(folder_ids)).all()

    def count_active(self) -> int:
        return self._base_query().count()
