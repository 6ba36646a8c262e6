"""Tests for AI query records and their status lifecycle."""

import pytest

from dataroom.exceptions import AiQueryNotFoundError, ConflictError, PermissionDeniedError
from dataroom.models import Role
from dataroom.schemas.ai_query import AiQueryCreate
from dataroom.services import ai_query_service
from tests.factories import grant


def _submit(db, room, user, text="Summarise the Q3 numbers"):
    return ai_query_service.submit_query(db, room.id, AiQueryCreate(user_id=user.id, query_text=text))


class TestSubmit:

    def test_creator_submits_pending_query(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        query = _submit(db, room, owner)
        assert query.processing_status == "pending"
        assert [q.id for q in ai_query_service.list_queries(db, room.id, owner.id)] == [query.id]

    def test_editor_without_ai_access_denied(self, db, make_user, make_room):
        owner, editor = make_user(), make_user()
        room = make_room(owner)
        grant(db, room, editor, Role.EDITOR)
        with pytest.raises(PermissionDeniedError):
            _submit(db, room, editor)

    def test_ai_access_can_be_granted_explicitly(self, db, make_user, make_room):
        owner, viewer = make_user(), make_user()
        room = make_room(owner)
        grant(db, room, viewer, Role.VIEWER, ai_access=True)
        assert _submit(db, room, viewer).user_id == viewer.id


class TestLifecycle:

    def test_happy_path(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        query = _submit(db, room, owner)

        ai_query_service.mark_processing(db, query.id)
        done = ai_query_service.complete_query(
            db, query.id, "Revenue grew 12%.", files_referenced=["f1"], processing_time_ms=840
        )
        assert done.processing_status == "completed"
        assert done.files_referenced == ["f1"]

    def test_cannot_complete_pending_query(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        query = _submit(db, room, owner)
        with pytest.raises(ConflictError):
            ai_query_service.complete_query(db, query.id, "too early")

    def test_finished_query_is_final(self, db, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        query = _submit(db, room, owner)
        ai_query_service.mark_processing(db, query.id)
        ai_query_service.fail_query(db, query.id, "model unavailable")

        with pytest.raises(ConflictError):
            ai_query_service.mark_processing(db, query.id)

    def test_unknown_query(self, db):
        with pytest.raises(AiQueryNotFoundError):
            ai_query_service.mark_processing(db, "missing")
