def _signup(client, email: str, password: str = "secret1", name: str = "User"):
    response = client.post(
        "/api/auth/signup",
        json={"email": email, "password": password, "name": name},
    )
    assert response.status_code == 200, response.text
    return response.json()


# ============================================================================
# STATUS TESTS
# ============================================================================


def test_status_configured(client):
    response = client.get("/api/backend/status")
    assert response.status_code == 200
    assert response.json() == {"configured": True}


def test_status_not_configured(make_client):
    client = make_client(database_url=None)
    response = client.get("/api/backend/status")
    assert response.status_code == 200
    assert response.json() == {"configured": False}


# ============================================================================
# STATS TESTS
# ============================================================================


def test_hosted_stats(client, alice):
    response = client.get("/api/backend/stats")
    assert response.status_code == 200
    assert response.json() == {"totalUsers": 1, "activeSessions": 0, "pendingActions": 0}


def test_hosted_stats_not_configured(make_client):
    client = make_client(database_url=None)
    response = client.get("/api/backend/stats")
    assert response.status_code == 400
    assert response.json()["error"] == "Hosted backend is not configured"


# ============================================================================
# MIGRATION TESTS
# ============================================================================


def test_migrate_copies_embedded_users(make_client):
    """Test embedded users move to the hosted store, skipping emails it already has."""
    embedded = make_client(database_url=None)
    _signup(embedded, "alice@example.com", name="Alice")
    _signup(embedded, "bob@example.com", password="secret2", name="Bob")
    embedded.post(
        "/api/users", json={"name": "Carol", "email": "carol@example.com", "status": "pending"}
    )

    hosted = make_client()
    _signup(hosted, "alice@example.com", password="hosted1", name="Alice Hosted")

    response = hosted.post("/api/backend/migrate")
    assert response.status_code == 200
    assert response.json() == {"migrated": 2, "total": 3}

    # Migrated users keep their password hash
    login = hosted.post(
        "/api/auth/login", json={"email": "bob@example.com", "password": "secret2"}
    )
    assert login.status_code == 200
    assert login.json()["user"]["name"] == "Bob"

    # The hosted copy of a duplicate email is left alone
    login = hosted.post(
        "/api/auth/login", json={"email": "alice@example.com", "password": "hosted1"}
    )
    assert login.status_code == 200

    users = {u["email"]: u for u in hosted.get("/api/users").json()}
    assert set(users) == {"alice@example.com", "bob@example.com", "carol@example.com"}
    assert users["carol@example.com"]["status"] == "pending"
    assert users["carol@example.com"]["isActive"] is False


def test_migrate_twice_copies_nothing_new(make_client):
    embedded = make_client(database_url=None)
    _signup(embedded, "bob@example.com")

    hosted = make_client()
    assert hosted.post("/api/backend/migrate").json() == {"migrated": 1, "total": 1}
    assert hosted.post("/api/backend/migrate").json() == {"migrated": 0, "total": 1}


def test_migrate_without_embedded_file(client, settings):
    assert not settings.sqlite_path.exists()
    response = client.post("/api/backend/migrate")
    assert response.status_code == 200
    assert response.json() == {"migrated": 0, "total": 0}


def test_migrate_not_configured(make_client):
    client = make_client(database_url=None)
    response = client.post("/api/backend/migrate")
    assert response.status_code == 400
    assert response.json()["error"] == "Hosted backend is not configured"
