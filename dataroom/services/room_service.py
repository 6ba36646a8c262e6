"""Room service: data room lifecycle, listings and statistics.

Creating a room is one transaction: the room row, the creator's Creator
permission and the tag links either all exist afterwards or none do.
"""

import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from ..database import utcnow
from ..models import DataRoom, Role
from ..repositories import (
    FileRepository,
    FolderRepository,
    RoomRepository,
    UserRepository,
)
from ..schemas.file import FileResponse
from ..schemas.folder import FolderResponse
from ..schemas.room import (
    DashboardStats,
    RoomCreate,
    RoomDetails,
    RoomStats,
    RoomSummary,
    RoomUpdate,
)
from . import access_log_service, permission_service, tag_service
from .permission_service import Capability

logger = logging.getLogger(__name__)


class RoomService:
    """Data room operations.

    Public methods:
        create_room         -- room + creator grant + tags, atomically
        list_rooms_for_user -- rooms with a live permission row, newest first
        list_all_rooms      -- every room, newest first
        get_room_summary    -- one room card, without role
        get_room_details    -- room, display role, tags, folders, active files
        update_room         -- name / description / tag set (edit capability)
        get_room_stats      -- per-room counts
        get_dashboard_stats -- global counts
    """

    def __init__(self, db: Session):
        self.db = db
        self.room_repo = RoomRepository(db)
        self.user_repo = UserRepository(db)
        self.folder_repo = FolderRepository(db)
        self.file_repo = FileRepository(db)

    def create_room(self, data: RoomCreate) -> DataRoom:
        self.user_repo.get_by_id(data.creator_id)

        now = utcnow()
        try:
            room = DataRoom(
                name=data.name,
                description=data.description,
                created_by=data.creator_id,
                created_at=now,
                updated_at=now,
                last_modified=now,
            )
            self.room_repo.add(room)
            permission_service.grant_creator_access(self.db, room.id, data.creator_id)
            room.tags = tag_service.resolve_tags(self.db, data.tags)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(room)
        logger.info(
            "Room created",
            extra={"room_id": room.id, "creator_id": data.creator_id, "tags": data.tags},
        )
        return room

    def list_rooms_for_user(self, user_id: str) -> List[RoomSummary]:
        rows = self.room_repo.list_for_user(user_id, utcnow())
        return self._summaries([room for room, _ in rows], roles={room.id: role for room, role in rows})

    def list_all_rooms(self) -> List[RoomSummary]:
        return self._summaries(self.room_repo.list_all())

    def get_room_summary(self, room_id: str) -> RoomSummary:
        return self._summaries([self.room_repo.get_by_id(room_id)])[0]

    def get_room_details(self, room_id: str, user_id: Optional[str] = None) -> RoomDetails:
        room = self.room_repo.get_by_id(room_id)
        permission = (
            permission_service.resolve_permission(self.db, user_id, room_id) if user_id else None
        )
        # Display default only; it does not grant Viewer capabilities.
        role = permission.role if permission is not None else Role.VIEWER.value

        return RoomDetails(
            id=room.id,
            name=room.name,
            description=room.description,
            created_by=room.created_by,
            is_active=room.is_active,
            created_at=room.created_at,
            updated_at=room.updated_at,
            last_modified=room.last_modified,
            role=role,
            tags=[tag.name for tag in room.tags],
            folders=[FolderResponse.model_validate(f) for f in self.folder_repo.list_by_room(room_id)],
            files=[FileResponse.model_validate(f) for f in self.file_repo.list_by_room(room_id)],
        )

    def update_room(self, room_id: str, data: RoomUpdate) -> DataRoom:
        room = self.room_repo.get_by_id(room_id)
        permission_service.require_capability(
            self.db, data.user_id, room_id, Capability.EDIT, "edit this data room"
        )

        if data.name is not None:
            room.name = data.name
        if data.description is not None:
            room.description = data.description
        if data.tags is not None:
            room.tags = tag_service.resolve_tags(self.db, data.tags)
        self.room_repo.touch(room, utcnow())
        self.db.commit()
        self.db.refresh(room)
        logger.info("Room updated", extra={"room_id": room_id, "user_id": data.user_id})
        return room

    def get_room_stats(self, room_id: str) -> RoomStats:
        self.room_repo.get_by_id(room_id)
        return RoomStats(
            document_count=self.room_repo.active_file_counts([room_id]).get(room_id, 0),
            user_count=self.room_repo.member_count(room_id),
            folder_count=self.room_repo.folder_counts([room_id]).get(room_id, 0),
        )

    def get_dashboard_stats(self) -> DashboardStats:
        return DashboardStats(
            total_rooms=self.room_repo.count(),
            total_files=self.file_repo.count_active(),
            total_users=self.user_repo.count(),
            recent_activity=access_log_service.count_since(self.db),
        )

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _summaries(self, rooms: List[DataRoom], roles: Optional[dict] = None) -> List[RoomSummary]:
        room_ids = [room.id for room in rooms]
        file_counts = self.room_repo.active_file_counts(room_ids)
        folder_counts = self.room_repo.folder_counts(room_ids)
        tag_names = self.room_repo.tag_names(room_ids)

        return [
            RoomSummary(
                id=room.id,
                name=room.name,
                description=room.description,
                created_at=room.created_at,
                last_modified=room.last_modified,
                created_by=room.created_by,
                creator_id=room.created_by,
                role=roles.get(room.id) if roles is not None else None,
                file_count=file_counts.get(room.id, 0),
                folder_count=folder_counts.get(room.id, 0),
                tags=tag_names.get(room.id, []),
            )
            for room in rooms
        ]
