"""Repository for the per-room folder tree."""

from typing import Dict, List, Optional

from ..exceptions import FolderNotFoundError
from ..models.folder import Folder
from .base import BaseRepository


class FolderRepository(BaseRepository[Folder]):
    model_class = Folder
    not_found_error = FolderNotFoundError

    def list_by_room(self, room_id: str) -> List[Folder]:
        return (
            self.db.query(Folder)
            .filter(Folder.data_room_id == room_id)
            .order_by(Folder.name)
            .all()
        )

    def _children_by_parent(self, room_id: str) -> Dict[Optional[str], List[str]]:
        rows = (
            self.db.query(Folder.id, Folder.parent_folder_id)
            .filter(Folder.data_room_id == room_id)
            .all()
        )
        children: Dict[Optional[str], List[str]] = {}
        for folder_id, parent_id in rows:
            children.setdefault(parent_id, []).append(folder_id)
        return children

    def subtree_ids(self, folder: Folder) -> List[str]:
        """Ids of *folder* and all its descendants, parents before children."""
        children = self._children_by_parent(folder.data_room_id)
        ordered: List[str] = []
        queue = [folder.id]
        seen = set()
        while queue:
            current = queue.pop(0)
            if current in seen:
                continue
            seen.add(current)
            ordered.append(current)
            queue.extend(children.get(current, []))
        return ordered

    def ancestor_ids(self, folder_id: Optional[str]) -> List[str]:
        """Ids from *folder_id* up to the room root, starting with *folder_id*.

        Stops on a repeated id, so a corrupted tree cannot loop forever.
        """
        chain: List[str] = []
        current = folder_id
        while current is not None and current not in chain:
            chain.append(current)
            row = self.db.query(Folder.parent_folder_id).filter(Folder.id == current).first()
            current = row[0] if row else None
        return chain

    def delete_many(self, folder_ids: List[str]) -> int:
        if not folder_ids:
            return 0
        return (
            self.db.query(Folder)
            .filter(Folder.id.in_(folder_ids))
            .delete(synchronize_session=False)
        )
