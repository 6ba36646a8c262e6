"""API tests for permissions, shared links, notifications, AI queries and watermarks."""

from dataroom.models import Role
from tests.factories import grant, upload


class TestPermissionsApi:

    def test_grant_list_revoke(self, client, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)

        granted = client.post(
            f"/api/data-rooms/{room.id}/permissions",
            json={"userId": member.id, "grantedBy": owner.id, "role": "Contributor", "canDownload": True},
        )
        assert granted.status_code == 200
        body = granted.json()
        assert (body["role"], body["canUpload"], body["canDownload"], body["canEdit"]) == (
            "Contributor", True, True, False,
        )

        listed = client.get(f"/api/data-rooms/{room.id}/permissions", params={"userId": member.id})
        assert {p["userId"] for p in listed.json()} == {owner.id, member.id}

        revoked = client.delete(
            f"/api/data-rooms/{room.id}/permissions/{member.id}", params={"revokedBy": owner.id}
        )
        assert revoked.status_code == 200
        assert client.get(f"/api/data-rooms/{member.id}").json() == []

    def test_unknown_role_is_400(self, client, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        resp = client.post(
            f"/api/data-rooms/{room.id}/permissions",
            json={"userId": member.id, "grantedBy": owner.id, "role": "Admin"},
        )
        assert resp.status_code == 400

    def test_non_owner_grant_is_403(self, client, db, make_user, make_room):
        owner, editor, other = make_user(), make_user(), make_user()
        room = make_room(owner)
        grant(db, room, editor, Role.EDITOR)
        resp = client.post(
            f"/api/data-rooms/{room.id}/permissions",
            json={"userId": other.id, "grantedBy": editor.id, "role": "Viewer"},
        )
        assert resp.status_code == 403


class TestNotificationsApi:

    def test_read_notifications(self, client, db, make_user, make_room):
        owner, member = make_user(), make_user()
        room = make_room(owner)
        grant(db, room, member, Role.VIEWER)
        upload(db, room, owner)

        unread = client.get(f"/api/users/{member.id}/notifications").json()
        assert {n["type"] for n in unread} == {"access_granted", "file_uploaded"}

        resp = client.post(
            f"/api/users/{member.id}/notifications/read",
            json={"notificationIds": [n["id"] for n in unread]},
        )
        assert resp.json() == {"updated": 2}
        assert client.get(f"/api/users/{member.id}/notifications").json() == []


class TestLinksApi:

    def test_create_redeem_deactivate(self, client, make_user, make_room):
        owner = make_user()
        room = make_room(owner, name="Finance")

        created = client.post(
            f"/api/data-rooms/{room.id}/links",
            json={"createdBy": owner.id, "rights": ["view", "download"], "password": "letmein"},
        )
        assert created.status_code == 201
        link = created.json()
        assert link["passwordProtected"] is True

        denied = client.post(f"/api/links/{link['token']}/access", json={"password": "nope"})
        assert denied.status_code == 403

        access = client.post(f"/api/links/{link['token']}/access", json={"password": "letmein"})
        assert access.status_code == 200
        assert access.json()["name"] == "Finance"
        assert access.json()["rights"] == ["download", "view"]

        listed = client.get(f"/api/data-rooms/{room.id}/links", params={"userId": owner.id})
        assert listed.json()[0]["currentUses"] == 1

        off = client.delete(f"/api/links/{link['id']}", params={"userId": owner.id})
        assert off.status_code == 200
        assert off.json()["isActive"] is False

    def test_unknown_token_is_404(self, client):
        resp = client.post("/api/links/not-a-token/access", json={})
        assert resp.status_code == 404


class TestAiQueriesApi:

    def test_submit_and_list(self, client, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        created = client.post(
            f"/api/data-rooms/{room.id}/ai-queries",
            json={"userId": owner.id, "queryText": "Which contracts expire this year?"},
        )
        assert created.status_code == 201
        assert created.json()["processingStatus"] == "pending"

        listed = client.get(f"/api/data-rooms/{room.id}/ai-queries", params={"userId": owner.id})
        assert len(listed.json()) == 1

    def test_without_ai_access_is_403(self, client, db, make_user, make_room):
        owner, editor = make_user(), make_user()
        room = make_room(owner)
        grant(db, room, editor, Role.EDITOR)
        resp = client.post(
            f"/api/data-rooms/{room.id}/ai-queries",
            json={"userId": editor.id, "queryText": "Anything?"},
        )
        assert resp.status_code == 403


class TestWatermarkApi:

    def test_set_and_get(self, client, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        assert client.get(f"/api/data-rooms/{room.id}/watermark").json() is None

        first = client.put(
            f"/api/data-rooms/{room.id}/watermark",
            json={"userId": owner.id, "template": "Draft {date}"},
        )
        assert first.status_code == 200
        client.put(
            f"/api/data-rooms/{room.id}/watermark",
            json={"userId": owner.id, "template": "Confidential {name}", "position": "diagonal", "opacity": 0.5},
        )

        active = client.get(f"/api/data-rooms/{room.id}/watermark").json()
        assert active["template"] == "Confidential {name}"
        assert active["position"] == "diagonal"

    def test_missing_room_is_404(self, client):
        assert client.get("/api/data-rooms/missing/watermark").status_code == 404

    def test_viewer_cannot_set(self, client, db, make_user, make_room):
        owner, viewer = make_user(), make_user()
        room = make_room(owner)
        grant(db, room, viewer, Role.VIEWER)
        resp = client.put(
            f"/api/data-rooms/{room.id}/watermark",
            json={"userId": viewer.id, "template": "Mine"},
        )
        assert resp.status_code == 403
