from contextlib import ExitStack

import pytest
from fastapi.testclient import TestClient

from vloghub.core.config import Settings
from vloghub.core.security import decode_token
from vloghub.main import create_app

TEST_SECRET_KEY = "test-secret-key-min-32-characters-long-for-testing"


def make_settings(tmp_path, **overrides) -> Settings:
    """Settings for a fresh SQLite file per test, independent of the environment and .env."""
    values = {
        "database_url": f"sqlite:///{tmp_path / 'test.db'}",
        "data_dir": str(tmp_path / "data"),
        "secret_key": TEST_SECRET_KEY,
        "algorithm": "HS256",
        "expose_reset_tokens": True,
        "frontend_url": "http://localhost:5173",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture(scope="function")
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path)


@pytest.fixture(scope="function")
def client(settings):
    """Create a test client; entering it runs the lifespan that creates the store."""
    app = create_app(settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def store(client):
    return client.app.state.store


@pytest.fixture(scope="function")
def signup(client):
    """Sign up a user through the API and return the response body."""

    def _signup(email: str = "alice@example.com", password: str = "secret1", name: str = "Alice") -> dict:
        response = client.post(
            "/api/auth/signup",
            json={"email": email, "password": password, "name": name},
        )
        assert response.status_code == 200, response.text
        return response.json()

    return _signup


@pytest.fixture(scope="function")
def alice(signup) -> dict:
    """A registered user: {"token", "user", "password"}."""
    body = signup()
    body["password"] = "secret1"
    return body


@pytest.fixture(scope="function")
def auth_headers(alice) -> dict:
    return {"Authorization": f"Bearer {alice['token']}"}


@pytest.fixture(scope="function")
def claims_of(settings):
    def _claims(token: str) -> dict | None:
        return decode_token(settings, token)

    return _claims


@pytest.fixture(scope="function")
def make_client(tmp_path):
    """Build a client over an app with overridden settings; closed after the test."""
    with ExitStack() as stack:

        def _make_client(**overrides) -> TestClient:
            app = create_app(make_settings(tmp_path, **overrides))
            return stack.enter_context(TestClient(app))

        yield _make_client
