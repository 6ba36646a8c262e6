"""Unit tests for permission resolution, role defaults and grant/revoke rules."""

from datetime import timedelta

import pytest

from dataroom.database import utcnow
from dataroom.exceptions import PermissionDeniedError, UserNotFoundError, ValidationError
from dataroom.models import Notification, RoomPermission, Role
from dataroom.services import permission_service
from dataroom.services.permission_service import (
    ALL_CAPABILITIES,
    ROLE_DEFAULTS,
    Capability,
    CapabilitySet,
    check_capability,
)
from tests.factories import grant


class TestRoleDefaults:

    def test_creator_has_every_capability(self):
        assert ROLE_DEFAULTS[Role.CREATOR] == ALL_CAPABILITIES

    def test_editor_lacks_only_ai_access(self):
        editor = ROLE_DEFAULTS[Role.EDITOR]
        assert editor.can_edit and editor.can_delete and editor.can_download
        assert not editor.ai_access

    def test_contributor_can_view_and_upload(self):
        assert ROLE_DEFAULTS[Role.CONTRIBUTOR] == CapabilitySet(can_view=True, can_upload=True)

    def test_viewer_can_only_view(self):
        assert ROLE_DEFAULTS[Role.VIEWER] == CapabilitySet(can_view=True)

    def test_override_ignores_none(self):
        caps = ROLE_DEFAULTS[Role.VIEWER].override(can_download=True, can_edit=None)
        assert caps.can_download is True
        assert caps.can_edit is False


class TestCheckCapability:

    def test_no_row_allows_nothing(self):
        for capability in Capability:
            assert check_capability(None, capability) is False

    def test_flags_decide_not_role(self):
        # A row labelled Viewer with the delete flag set may delete.
        row = RoomPermission(role="Viewer", can_view=True, can_delete=True)
        assert check_capability(row, Capability.DELETE) is True
        assert check_capability(row, Capability.EDIT) is False

    def test_expired_row_allows_nothing(self):
        row = RoomPermission(role="Creator", can_view=True, expires_at=utcnow() - timedelta(minutes=1))
        assert check_capability(row, Capability.VIEW) is False


class TestGrantAccess:

    def test_grant_uses_role_defaults(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        permission = grant(db, room, member, Role.CONTRIBUTOR)
        assert permission.role == "Contributor"
        assert permission.can_upload is True
        assert permission.can_download is False

    def test_grant_applies_overrides(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        permission = grant(db, room, member, Role.VIEWER, can_download=True)
        assert permission.can_view is True
        assert permission.can_download is True
        assert permission.can_upload is False

    def test_regrant_updates_single_row(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        grant(db, room, member, Role.VIEWER)
        grant(db, room, member, Role.EDITOR)

        rows = db.query(RoomPermission).filter_by(user_id=member.id, data_room_id=room.id).all()
        assert len(rows) == 1
        assert rows[0].role == "Editor"
        assert rows[0].can_edit is True

    def test_only_owner_can_grant(self, db, make_user, make_room):
        owner, editor, outsider = make_user(), make_user(), make_user()
        room = make_room(owner)
        grant(db, room, editor, Role.EDITOR)

        with pytest.raises(PermissionDeniedError):
            permission_service.grant_access(
                db, room_id=room.id, user_id=outsider.id, role=Role.VIEWER, granted_by=editor.id
            )

    def test_owner_row_cannot_be_replaced(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        with pytest.raises(ValidationError):
            permission_service.grant_access(
                db, room_id=room.id, user_id=owner.id, role=Role.VIEWER, granted_by=owner.id
            )

    def test_unknown_grantee_is_404(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        with pytest.raises(UserNotFoundError):
            permission_service.grant_access(
                db, room_id=room.id, user_id="nobody", role=Role.VIEWER, granted_by=owner.id
            )

    def test_past_expiry_rejected(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        with pytest.raises(ValidationError):
            permission_service.grant_access(
                db,
                room_id=room.id,
                user_id=member.id,
                role=Role.VIEWER,
                granted_by=owner.id,
                expires_at=utcnow() - timedelta(hours=1),
            )

    def test_grantee_is_notified(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner, name="Finance")
        grant(db, room, member, Role.VIEWER)

        notes = db.query(Notification).filter_by(user_id=member.id).all()
        assert [n.type for n in notes] == ["access_granted"]
        assert "Finance" in notes[0].title


class TestResolvePermission:

    def test_expired_grant_resolves_to_none(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        permission = grant(db, room, member, Role.EDITOR)
        permission.expires_at = utcnow() - timedelta(days=1)
        db.commit()

        assert permission_service.resolve_permission(db, member.id, room.id) is None
        with pytest.raises(PermissionDeniedError):
            permission_service.require_capability(db, member.id, room.id, Capability.VIEW, "view")

    def test_future_expiry_still_valid(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        permission_service.grant_access(
            db,
            room_id=room.id,
            user_id=member.id,
            role=Role.VIEWER,
            granted_by=owner.id,
            expires_at=utcnow() + timedelta(days=7),
        )
        assert permission_service.resolve_permission(db, member.id, room.id) is not None


class TestRevokeAndList:

    def test_revoke_removes_row(self, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        grant(db, room, member, Role.VIEWER)

        assert permission_service.revoke_access(db, room.id, member.id, owner.id) is True
        assert permission_service.resolve_permission(db, member.id, room.id) is None
        assert permission_service.revoke_access(db, room.id, member.id, owner.id) is False

    def test_owner_cannot_be_revoked(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        with pytest.raises(ValidationError):
            permission_service.revoke_access(db, room.id, owner.id, owner.id)

    def test_members_can_list_outsiders_cannot(self, db, make_user, make_room):
        owner, member, outsider = make_user(), make_user(), make_user()
        room = make_room(owner)
        grant(db, room, member, Role.VIEWER)

        rows = permission_service.list_room_permissions(db, room.id, member.id)
        assert {r.user_id for r in rows} == {owner.id, member.id}
        with pytest.raises(PermissionDeniedError):
            permission_service.list_room_permissions(db, room.id, outsider.id)
