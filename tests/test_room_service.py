"""Unit tests for RoomService: atomic creation, listings, details and statistics."""

import pytest

from dataroom.exceptions import PermissionDeniedError, RoomNotFoundError, UserNotFoundError
from dataroom.models import DataRoom, RoomPermission, Role, Tag
from dataroom.schemas.room import RoomCreate, RoomUpdate
from dataroom.services import FileService, RoomService, tag_service
from dataroom.services.permission_service import ALL_CAPABILITIES, CapabilitySet
from tests.factories import grant, upload


class TestCreateRoom:

    def test_creator_gets_creator_row_with_all_flags(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)

        row = db.get(RoomPermission, (owner.id, room.id))
        assert row.role == Role.CREATOR.value
        assert CapabilitySet.of(row) == ALL_CAPABILITIES
        assert row.expires_at is None

    def test_tags_are_found_or_created_once(self, db, make_user, make_room):
        owner = make_user()
        make_room(owner, name="First", tags=["Legal"])
        room = make_room(owner, name="Second", tags=["Legal", "Tax", "Legal"])

        assert [t.name for t in room.tags] == ["Legal", "Tax"]
        assert db.query(Tag).count() == 2

    def test_tag_names_are_case_sensitive(self, db, make_user, make_room):
        owner = make_user()
        make_room(owner, tags=["legal", "Legal"])
        assert db.query(Tag).count() == 2

    def test_unknown_creator_creates_nothing(self, db):
        with pytest.raises(UserNotFoundError):
            RoomService(db).create_room(RoomCreate(name="Ghost", creator_id="missing"))
        assert db.query(DataRoom).count() == 0
        assert db.query(RoomPermission).count() == 0


class TestListings:

    def test_user_sees_only_rooms_with_a_row(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        shared = make_room(owner, name="Shared")
        make_room(owner, name="Private")
        grant(db, shared, member, Role.VIEWER)

        rooms = RoomService(db).list_rooms_for_user(member.id)
        assert [(r.name, r.role) for r in rooms] == [("Shared", "Viewer")]

    def test_most_recently_modified_first(self, db, make_user, make_room):
        owner = make_user()
        older = make_room(owner, name="Older")
        make_room(owner, name="Newer")
        upload(db, older, owner)

        names = [r.name for r in RoomService(db).list_rooms_for_user(owner.id)]
        assert names == ["Older", "Newer"]

    def test_counts_only_active_files(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner, tags=["Financial"])
        kept = upload(db, room, owner, original_name="a.pdf")
        gone = upload(db, room, owner, original_name="b.pdf")
        FileService(db).delete_file(gone.id, owner.id)

        summary = RoomService(db).list_rooms_for_user(owner.id)[0]
        assert summary.file_count == 1
        assert summary.tags == ["Financial"]
        assert kept.is_active

    def test_list_all_rooms_has_no_role(self, db, make_user, make_room):
        owner = make_user()
        make_room(owner)
        summaries = RoomService(db).list_all_rooms()
        assert len(summaries) == 1
        assert summaries[0].role is None
        assert summaries[0].creator_id == owner.id


class TestDetails:

    def test_role_defaults_to_viewer_for_display(self, db, make_user, make_room):
        owner, stranger = make_user(), make_user()
        room = make_room(owner)

        assert RoomService(db).get_room_details(room.id, stranger.id).role == "Viewer"
        assert RoomService(db).get_room_details(room.id, owner.id).role == "Creator"

    def test_details_list_only_active_files(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        upload(db, room, owner, original_name="keep.pdf")
        doomed = upload(db, room, owner, original_name="drop.pdf")
        FileService(db).delete_file(doomed.id, owner.id)

        details = RoomService(db).get_room_details(room.id, owner.id)
        assert [f.name for f in details.files] == ["keep.pdf"]

    def test_missing_room_is_404(self, db):
        with pytest.raises(RoomNotFoundError):
            RoomService(db).get_room_details("missing")


class TestUpdateAndStats:

    def test_editor_can_update_tags(self, db, make_user, make_room):
        owner, editor = make_user(), make_user()
        room = make_room(owner, tags=["Legal"])
        grant(db, room, editor, Role.EDITOR)

        updated = RoomService(db).update_room(
            room.id, RoomUpdate(user_id=editor.id, name="Renamed", tags=["Tax"])
        )
        assert updated.name == "Renamed"
        assert [t.name for t in updated.tags] == ["Tax"]

    def test_viewer_cannot_update(self, db, make_user, make_room):
        owner, viewer = make_user(), make_user()
        room = make_room(owner)
        grant(db, room, viewer, Role.VIEWER)

        with pytest.raises(PermissionDeniedError):
            RoomService(db).update_room(room.id, RoomUpdate(user_id=viewer.id, name="Nope"))

    def test_room_stats(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        grant(db, room, member, Role.VIEWER)
        upload(db, room, owner)

        stats = RoomService(db).get_room_stats(room.id)
        assert (stats.document_count, stats.user_count, stats.folder_count) == (1, 2, 0)

    def test_dashboard_stats(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        upload(db, room, owner)

        stats = RoomService(db).get_dashboard_stats()
        assert stats.total_rooms == 1
        assert stats.total_files == 1
        assert stats.total_users == 1
        assert stats.recent_activity == 1


class TestTags:

    def test_list_tags_sorted_with_colors(self, db, make_user, make_room):
        owner = make_user()
        tag_service.find_or_create(db, "Tax", "#F59E0B")
        db.commit()
        make_room(owner, tags=["Legal", "Tax"])

        tags = tag_service.list_tags(db)
        assert [(t.name, t.color) for t in tags] == [("Legal", None), ("Tax", "#F59E0B")]
        assert tag_service.list_tag_names(db) == ["Legal", "Tax"]
