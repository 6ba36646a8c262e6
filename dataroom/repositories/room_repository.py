"""Repository for data rooms and their per-room aggregates.

Counts and tag names are fetched for a whole batch of rooms in one query
each, so listing N rooms costs a constant number of queries.
"""

from datetime import datetime
from typing import Dict, Iterable, List, Tuple

from sqlalchemy import func, or_

from ..exceptions import RoomNotFoundError
from ..models import DataRoom, DataRoomTag, File, Folder, RoomPermission, Tag
from .base import BaseRepository


class RoomRepository(BaseRepository[DataRoom]):
    model_class = DataRoom
    not_found_error = RoomNotFoundError

    def list_all(self) -> List[DataRoom]:
        return self.db.query(DataRoom).order_by(DataRoom.last_modified.desc()).all()

    def list_for_user(self, user_id: str, now: datetime) -> List[Tuple[DataRoom, str]]:
        """Rooms the user holds an unexpired permission row for, with its role."""
        return (
            self.db.query(DataRoom, RoomPermission.role)
            .join(RoomPermission, RoomPermission.data_room_id == DataRoom.id)
            .filter(RoomPermission.user_id == user_id)
            .filter(or_(RoomPermission.expires_at.is_(None), RoomPermission.expires_at > now))
            .order_by(DataRoom.last_modified.desc())
            .all()
        )

    def active_file_counts(self, room_ids: Iterable[str]) -> Dict[str, int]:
        room_ids = list(room_ids)
        if not room_ids:
            return {}
        rows = (
            self.db.query(File.data_room_id, func.count(File.id))
            .filter(File.data_room_id.in_(room_ids), File.is_active.is_(True))
            .group_by(File.data_room_id)
            .all()
        )
        return dict(rows)

    def folder_counts(self, room_ids: Iterable[str]) -> Dict[str, int]:
        room_ids = list(room_ids)
        if not room_ids:
            return {}
        rows = (
            self.db.query(Folder.data_room_id, func.count(Folder.id))
            .filter(Folder.data_room_id.in_(room_ids))
            .group_by(Folder.data_room_id)
            .all()
        )
        return dict(rows)

    def tag_names(self, room_ids: Iterable[str]) -> Dict[str, List[str]]:
        room_ids = list(room_ids)
        result: Dict[str, List[str]] = {rid: [] for rid in room_ids}
        if not room_ids:
            return result
        rows = (
            self.db.query(DataRoomTag.data_room_id, Tag.name)
            .join(Tag, Tag.id == DataRoomTag.tag_id)
            .filter(DataRoomTag.data_room_id.in_(room_ids))
            .order_by(Tag.name)
            .all()
        )
        for room_id, name in rows:
            result[room_id].append(name)
        return result

    def member_count(self, room_id: str) -> int:
        return (
            self.db.query(RoomPermission)
            .filter(RoomPermission.data_room_id == room_id)
            .count()
        )

    def count(self) -> int:
        return self.db.query(DataRoom).count()

    def touch(self, room: DataRoom, now: datetime) -> None:
        """Record that something inside the room changed."""
        room.last_modified = now
        room.updated_at = now
