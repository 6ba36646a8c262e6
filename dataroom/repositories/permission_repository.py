"""Repository for (user, room) permission rows."""

from typing import List, Optional

from ..models.permission import RoomPermission


class PermissionRepository:
    """Data access for the composite-keyed permission table."""

    def __init__(self, db):
        self.db = db

    def get(self, user_id: str, room_id: str) -> Optional[RoomPermission]:
        return self.db.get(RoomPermission, (user_id, room_id))

    def list_by_room(self, room_id: str) -> List[RoomPermission]:
        return (
            self.db.query(RoomPermission)
            .filter(RoomPermission.data_room_id == room_id)
            .order_by(RoomPermission.created_at)
            .all()
        )

    def delete(self, permission: RoomPermission) -> None:
        self.db.delete(permission)
