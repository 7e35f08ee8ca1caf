import pytest

import vloghub.repositories.vlog as vlog_repo
from vloghub.errors import ConstraintViolationError
from vloghub.services import vlog as vlog_service


@pytest.fixture(scope="function")
def bob(signup) -> dict:
    return signup(email="bob@example.com", password="secret2", name="Bob")


@pytest.fixture(scope="function")
def bob_headers(bob) -> dict:
    return {"Authorization": f"Bearer {bob['token']}"}


@pytest.fixture(scope="function")
def vlog(client, auth_headers) -> dict:
    """A vlog published by alice."""
    response = client.post(
        "/api/vlogs",
        json={"title": "First trip", "description": "Mountains", "video_url": "https://v/1"},
        headers=auth_headers,
    )
    assert response.status_code == 201, response.text
    return response.json()


# ============================================================================
# BACKEND GATING TESTS
# ============================================================================


def test_vlog_routes_absent_on_embedded_store(make_client):
    """Test vlog endpoints are not mounted without a hosted DATABASE_URL."""
    client = make_client(database_url=None)
    assert client.get("/api/vlogs").status_code == 404
    assert client.get("/api/vlog-categories").status_code == 404
    # Core routes still work
    assert client.get("/api/stats").status_code == 200


# ============================================================================
# CATEGORY TESTS
# ============================================================================


def test_create_and_list_categories(client, auth_headers):
    """Test categories are listed by name."""
    client.post("/api/vlog-categories", json={"name": "Travel"}, headers=auth_headers)
    response = client.post("/api/vlog-categories", json={"name": "Food"}, headers=auth_headers)
    assert response.status_code == 201
    assert response.json()["name"] == "Food"

    names = [c["name"] for c in client.get("/api/vlog-categories").json()]
    assert names == ["Food", "Travel"]


def test_create_category_requires_auth(client):
    response = client.post("/api/vlog-categories", json={"name": "Travel"})
    assert response.status_code == 401


def test_create_category_duplicate(client, auth_headers):
    client.post("/api/vlog-categories", json={"name": "Travel"}, headers=auth_headers)
    response = client.post("/api/vlog-categories", json={"name": "Travel"}, headers=auth_headers)
    assert response.status_code == 409


def test_create_category_blank_name(client, auth_headers):
    response = client.post("/api/vlog-categories", json={"name": "  "}, headers=auth_headers)
    assert response.status_code == 400


# ============================================================================
# VLOG TESTS
# ============================================================================


def test_create_vlog(client, alice, vlog):
    """Test a new vlog belongs to the caller and starts with no views."""
    assert vlog["user_id"] == alice["user"]["id"]
    assert vlog["author_name"] == "Alice"
    assert vlog["title"] == "First trip"
    assert vlog["views"] == 0
    assert vlog["category_id"] is None


def test_create_vlog_requires_auth(client):
    response = client.post("/api/vlogs", json={"title": "Nope"})
    assert response.status_code == 401


def test_create_vlog_missing_title(client, auth_headers):
    response = client.post("/api/vlogs", json={"description": "No title"}, headers=auth_headers)
    assert response.status_code == 400


def test_create_vlog_unknown_category(client, auth_headers):
    response = client.post(
        "/api/vlogs", json={"title": "Trip", "category_id": 999}, headers=auth_headers
    )
    assert response.status_code == 404


def test_list_vlogs_filters(client, auth_headers, bob_headers):
    """Test listing newest first, filtered by author and by category."""
    category = client.post(
        "/api/vlog-categories", json={"name": "Travel"}, headers=auth_headers
    ).json()
    client.post("/api/vlogs", json={"title": "A1"}, headers=auth_headers)
    client.post(
        "/api/vlogs", json={"title": "B1", "category_id": category["id"]}, headers=bob_headers
    )
    bob_vlog = client.post("/api/vlogs", json={"title": "B2"}, headers=bob_headers).json()

    assert [v["title"] for v in client.get("/api/vlogs").json()] == ["B2", "B1", "A1"]

    by_bob = client.get("/api/vlogs", params={"user_id": bob_vlog["user_id"]}).json()
    assert [v["title"] for v in by_bob] == ["B2", "B1"]

    in_travel = client.get("/api/vlogs", params={"category_id": category["id"]}).json()
    assert [v["title"] for v in in_travel] == ["B1"]


def test_get_vlog_not_found(client):
    response = client.get("/api/vlogs/999")
    assert response.status_code == 404
    assert response.json()["code"] == "NOT_FOUND"


def test_update_vlog_partial(client, auth_headers, vlog):
    """Test the author can change the title while other fields are kept."""
    response = client.put(
        f"/api/vlogs/{vlog['id']}", json={"title": "Renamed"}, headers=auth_headers
    )
    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "Renamed"
    assert data["description"] == "Mountains"
    assert data["video_url"] == "https://v/1"


def test_update_vlog_by_other_user_forbidden(client, bob_headers, vlog):
    response = client.put(f"/api/vlogs/{vlog['id']}", json={"title": "Mine"}, headers=bob_headers)
    assert response.status_code == 403
    assert client.get(f"/api/vlogs/{vlog['id']}").json()["title"] == "First trip"


def test_delete_vlog(client, auth_headers, bob_headers, vlog):
    """Test only the author can delete a vlog."""
    response = client.delete(f"/api/vlogs/{vlog['id']}", headers=bob_headers)
    assert response.status_code == 403

    response = client.delete(f"/api/vlogs/{vlog['id']}", headers=auth_headers)
    assert response.status_code == 200
    assert response.json() == {"deleted": 1}
    assert client.get(f"/api/vlogs/{vlog['id']}").status_code == 404


def test_record_view(client, vlog):
    """Test views are counted without authentication."""
    assert client.post(f"/api/vlogs/{vlog['id']}/views").json() == {"views": 1}
    assert client.post(f"/api/vlogs/{vlog['id']}/views").json() == {"views": 2}
    assert client.get(f"/api/vlogs/{vlog['id']}").json()["views"] == 2


def test_record_view_not_found(client):
    assert client.post("/api/vlogs/999/views").status_code == 404


# ============================================================================
# COMMENT TESTS
# ============================================================================


def test_comments(client, bob_headers, vlog):
    """Test comments are listed newest first with their author."""
    first = client.post(
        f"/api/vlogs/{vlog['id']}/comments", json={"content": "Nice"}, headers=bob_headers
    )
    assert first.status_code == 201
    assert first.json()["author_name"] == "Bob"
    client.post(f"/api/vlogs/{vlog['id']}/comments", json={"content": "Again"}, headers=bob_headers)

    comments = client.get(f"/api/vlogs/{vlog['id']}/comments").json()
    assert [c["content"] for c in comments] == ["Again", "Nice"]


def test_comment_requires_content(client, bob_headers, vlog):
    response = client.post(
        f"/api/vlogs/{vlog['id']}/comments", json={"content": ""}, headers=bob_headers
    )
    assert response.status_code == 400


def test_comment_on_missing_vlog(client, bob_headers):
    response = client.post("/api/vlogs/999/comments", json={"content": "Hi"}, headers=bob_headers)
    assert response.status_code == 404


# ============================================================================
# LIKE TESTS
# ============================================================================


def test_toggle_like(client, auth_headers, bob_headers, vlog):
    """Test liking twice removes the like again."""
    url = f"/api/vlogs/{vlog['id']}/like"
    assert client.post(url, headers=bob_headers).json() == {"liked": True, "likes": 1}
    assert client.post(url, headers=auth_headers).json() == {"liked": True, "likes": 2}
    assert client.post(url, headers=bob_headers).json() == {"liked": False, "likes": 1}
    assert client.get(f"/api/vlogs/{vlog['id']}/likes").json() == {"likes": 1}


def test_like_requires_auth(client, vlog):
    assert client.post(f"/api/vlogs/{vlog['id']}/like").status_code == 401


# ============================================================================
# FOLLOW AND PROFILE TESTS
# ============================================================================


def test_toggle_follow_and_profile(client, alice, bob, bob_headers, vlog):
    """Test following shows up in both profiles and can be undone."""
    alice_id = alice["user"]["id"]
    url = f"/api/profiles/{alice_id}/follow"

    assert client.post(url, headers=bob_headers).json() == {"following": True, "followers": 1}

    profile = client.get(f"/api/profiles/{alice_id}").json()
    assert profile["name"] == "Alice"
    assert profile["followers"] == 1
    assert profile["following"] == 0
    assert profile["vlogCount"] == 1
    assert "email" not in profile

    assert client.get(f"/api/profiles/{bob['user']['id']}").json()["following"] == 1

    assert client.post(url, headers=bob_headers).json() == {"following": False, "followers": 0}


def test_follow_self_rejected(client, alice, auth_headers):
    response = client.post(f"/api/profiles/{alice['user']['id']}/follow", headers=auth_headers)
    assert response.status_code == 400
    assert response.json()["error"] == "You cannot follow yourself"


def test_follow_unknown_user(client, auth_headers):
    response = client.post("/api/profiles/999/follow", headers=auth_headers)
    assert response.status_code == 404


def test_profile_not_found(client):
    assert client.get("/api/profiles/999").status_code == 404


def test_deleting_user_removes_their_vlogs(client, alice, vlog):
    """Test vlogs are removed together with their author."""
    client.delete(f"/api/users/{alice['user']['id']}")
    assert client.get(f"/api/vlogs/{vlog['id']}").status_code == 404


# ============================================================================
# DELETED ACCOUNT TESTS
# ============================================================================


@pytest.mark.parametrize(
    "method, path, body",
    [
        ("post", "/api/vlogs/{vlog_id}/like", None),
        ("post", "/api/profiles/{alice_id}/follow", None),
        ("post", "/api/vlogs", {"title": "Ghost vlog"}),
        ("post", "/api/vlogs/{vlog_id}/comments", {"content": "Boo"}),
        ("post", "/api/vlog-categories", {"name": "Ghosts"}),
    ],
)
def test_writes_rejected_after_account_deleted(
    client, alice, bob, bob_headers, vlog, method, path, body
):
    """Test a token whose user was deleted cannot write anything."""
    client.delete(f"/api/users/{bob['user']['id']}")

    url = path.format(vlog_id=vlog["id"], alice_id=alice["user"]["id"])
    response = client.request(method.upper(), url, json=body, headers=bob_headers)
    assert response.status_code == 401
    assert response.json()["error"] == "User not found"

    assert client.get(f"/api/vlogs/{vlog['id']}/likes").json() == {"likes": 0}
    assert client.get(f"/api/profiles/{alice['user']['id']}").json()["followers"] == 0
    assert [v["id"] for v in client.get("/api/vlogs").json()] == [vlog["id"]]
    assert client.get(f"/api/vlogs/{vlog['id']}/comments").json() == []


def test_toggle_like_reports_concurrent_duplicate_as_liked(store, bob, vlog, monkeypatch):
    """Test a like inserted by a racing request still reads as liked."""
    bob_id = bob["user"]["id"]
    real_add_like = vlog_repo.add_like

    def racing_add_like(store_, vlog_id, user_id):
        real_add_like(store_, vlog_id, user_id)
        raise ConstraintViolationError("UNIQUE constraint failed: vlog_likes.vlog_id, vlog_likes.user_id")

    monkeypatch.setattr(vlog_repo, "add_like", racing_add_like)
    result = vlog_service.toggle_like(store, bob_id, vlog["id"])
    assert result.liked is True
    assert result.likes == 1


def test_toggle_like_propagates_other_constraint_errors(store, bob, vlog, monkeypatch):
    """Test a failed insert that left no like is not reported as success."""

    def failing_add_like(store_, vlog_id, user_id):
        raise ConstraintViolationError("FOREIGN KEY constraint failed")

    monkeypatch.setattr(vlog_repo, "add_like", failing_add_like)
    with pytest.raises(ConstraintViolationError):
        vlog_service.toggle_like(store, bob["user"]["id"], vlog["id"])


def test_toggle_follow_propagates_other_constraint_errors(store, alice, bob, monkeypatch):
    def failing_add_follow(store_, follower_id, following_id):
        raise ConstraintViolationError("FOREIGN KEY constraint failed")

    monkeypatch.setattr(vlog_repo, "add_follow", failing_add_follow)
    with pytest.raises(ConstraintViolationError):
        vlog_service.toggle_follow(store, bob["user"]["id"], alice["user"]["id"])
