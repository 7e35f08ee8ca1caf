from typing import Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from vloghub.core.config import Settings
from vloghub.db.store import Store
from vloghub.errors import UnauthorizedError
from vloghub.repositories.user import get_user_by_id
from vloghub.services.auth import verify_access_token
from vloghub.services.storage import StorageService

# auto_error=False so a missing header reaches our own 401 instead of FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False)


def get_store(request: Request) -> Store:
    """The store created by the application lifespan."""
    return request.app.state.store


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_current_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> dict[str, Any]:
    """
    Extract and verify the bearer token from the Authorization header.

    Tokens are stateless: the decoded claims are trusted without a store
    lookup, so they are valid until they expire.
    """
    token = credentials.credentials if credentials else None
    return verify_access_token(settings, token)


def get_current_user(
    claims: dict[str, Any] = Depends(get_current_claims),
    store: Store = Depends(get_store),
) -> dict[str, Any]:
    """
    The stored user behind a valid token.

    Used by routes that write rows owned by the caller; a token outlives its
    user when the account is deleted, so the row is looked up again here.
    """
    user = get_user_by_id(store, int(claims["id"]))
    if user is None:
        raise UnauthorizedError("User not found")
    return user


def get_current_user_id(user: dict[str, Any] = Depends(get_current_user)) -> int:
    return user["id"]


def get_storage_service(settings: Settings = Depends(get_settings)) -> StorageService:
    return StorageService(settings)
