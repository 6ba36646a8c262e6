"""API tests for data room, tag, user and stats endpoints."""


class TestCreateRoom:

    def test_create_room_returns_201(self, client, make_user):
        owner = make_user()
        resp = client.post(
            "/api/data-rooms",
            json={"name": "Finance", "description": "Q3", "tags": ["Financial"], "creatorId": owner.id},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["id"]
        assert body["message"]

    def test_missing_name_is_400(self, client, make_user):
        owner = make_user()
        resp = client.post("/api/data-rooms", json={"creatorId": owner.id})
        assert resp.status_code == 400
        assert resp.json()["error"] == "VALIDATION_ERROR"

    def test_unknown_creator_is_404(self, client):
        resp = client.post("/api/data-rooms", json={"name": "X", "creatorId": "nobody"})
        assert resp.status_code == 404
        assert resp.json()["error"] == "USER_NOT_FOUND"


class TestReadRooms:

    def test_user_room_list_in_camel_case(self, client, make_user, make_room):
        owner = make_user()
        make_room(owner, name="Finance", tags=["Financial"])

        resp = client.get(f"/api/data-rooms/{owner.id}")
        assert resp.status_code == 200
        [room] = resp.json()
        assert room["name"] == "Finance"
        assert room["role"] == "Creator"
        assert room["tags"] == ["Financial"]
        assert room["fileCount"] == 0
        assert "lastModified" in room

    def test_all_rooms(self, client, make_user, make_room):
        owner = make_user()
        make_room(owner, name="A")
        make_room(owner, name="B")
        resp = client.get("/api/data-rooms")
        assert resp.status_code == 200
        assert {r["name"] for r in resp.json()} == {"A", "B"}

    def test_details_default_role(self, client, make_user, make_room):
        owner, stranger = make_user(), make_user()
        room = make_room(owner)
        resp = client.get(f"/api/data-room/{room.id}", params={"userId": stranger.id})
        assert resp.status_code == 200
        assert resp.json()["role"] == "Viewer"
        assert resp.json()["files"] == []

    def test_details_missing_room_is_404(self, client):
        resp = client.get("/api/data-room/missing")
        assert resp.status_code == 404
        assert resp.json()["error"] == "ROOM_NOT_FOUND"

    def test_room_and_dashboard_stats(self, client, make_user, make_room):
        owner = make_user()
        room = make_room(owner)
        stats = client.get(f"/api/data-room/{room.id}/stats").json()
        assert stats == {"documentCount": 0, "userCount": 1, "folderCount": 0}

        dashboard = client.get("/api/stats").json()
        assert dashboard["totalRooms"] == 1
        assert dashboard["totalUsers"] == 1


class TestUpdateRoom:

    def test_owner_updates_room(self, client, make_user, make_room):
        owner = make_user()
        room = make_room(owner, tags=["Legal"])
        resp = client.put(
            f"/api/data-room/{room.id}",
            json={"userId": owner.id, "description": "Updated", "tags": ["Tax", "Legal"]},
        )
        assert resp.status_code == 200
        assert resp.json()["tags"] == ["Legal", "Tax"]
        assert resp.json()["description"] == "Updated"

    def test_outsider_update_is_403(self, client, make_user, make_room):
        owner, outsider = make_user(), make_user()
        room = make_room(owner)
        resp = client.put(f"/api/data-room/{room.id}", json={"userId": outsider.id, "name": "Mine"})
        assert resp.status_code == 403
        assert resp.json()["error"] == "PERMISSION_DENIED"


class TestTagsAndUsers:

    def test_tags_listed_by_name(self, client, make_user, make_room):
        owner = make_user()
        make_room(owner, tags=["Tax", "Business"])
        resp = client.get("/api/tags")
        assert resp.status_code == 200
        assert resp.json() == ["Business", "Tax"]

    def test_create_user_returns_201_without_hash(self, client):
        resp = client.post(
            "/api/users", json={"email": "new@example.com", "name": "New", "password": "long-enough"}
        )
        assert resp.status_code == 201
        assert "passwordHash" not in resp.json()
        assert client.get("/api/users").json()[0]["email"] == "new@example.com"

    def test_invalid_email_is_400(self, client):
        resp = client.post("/api/users", json={"email": "nope", "name": "N", "password": "long-enough"})
        assert resp.status_code == 400
