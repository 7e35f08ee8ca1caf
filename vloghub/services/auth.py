"""Auth service: signup, login, and bearer token issuance/verification."""

import logging
from typing import Any

from vloghub.core.config import Settings
from vloghub.core.security import (
    ACCESS_TOKEN_TYPE,
    create_access_token,
    decode_token,
    get_password_hash,
    verify_password,
)
from vloghub.errors import (
    ConstraintViolationError,
    DomainValidationError,
    DuplicateResourceError,
    UnauthorizedError,
)
from vloghub.repositories.user import create_user, get_user_by_email
from vloghub.schemas.auth import AuthResponse
from vloghub.schemas.user import UserIdentity

logger = logging.getLogger(__name__)


def issue_token(settings: Settings, user: UserIdentity) -> AuthResponse:
    """Sign a token whose claims carry the user's identity."""
    token = create_access_token(
        settings,
        data={"sub": str(user.id), "id": user.id, "email": user.email, "name": user.name},
    )
    return AuthResponse(token=token, user=user)


def signup(store, settings: Settings, email: str | None, password: str | None, name: str | None) -> AuthResponse:
    """
    Register a new user and sign them in.

    Duplicate emails are detected by the unique constraint on insert rather
    than a pre-check, so two racing signups cannot both succeed.

    Raises:
        DomainValidationError: If email, password or name is missing or empty.
        DuplicateResourceError: If the email is already registered.
    """
    if not email or not password or not name:
        raise DomainValidationError("email, password, name are required")

    password_hash = get_password_hash(password)
    try:
        user_id = create_user(store, email=email, name=name, password_hash=password_hash)
    except ConstraintViolationError:
        raise DuplicateResourceError("Email already registered")

    logger.info("User %s signed up", user_id)
    return issue_token(settings, UserIdentity(id=user_id, email=email, name=name))


def login(store, settings: Settings, email: str | None, password: str | None) -> AuthResponse:
    """
    Authenticate user by email and password, return a signed token.

    Raises:
        DomainValidationError: If email or password is missing.
        UnauthorizedError: If email not found or password incorrect.
    """
    if not email or not password:
        raise DomainValidationError("email and password are required")

    user = get_user_by_email(store, email)
    if not user or not verify_password(password, user["password_hash"]):
        raise UnauthorizedError("Invalid credentials")

    return issue_token(settings, UserIdentity(id=user["id"], email=user["email"], name=user["name"]))


def verify_access_token(settings: Settings, token: str | None) -> dict[str, Any]:
    """
    Return the claims of a valid access token.

    Raises:
        UnauthorizedError: If the token is absent, badly signed, expired, or not an access token.
    """
    if not token:
        raise UnauthorizedError("Missing token")

    payload = decode_token(settings, token)
    if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
        raise UnauthorizedError("Invalid token")

    if payload.get("id") is None or payload.get("email") is None:
        raise UnauthorizedError("Invalid token")

    return payload
