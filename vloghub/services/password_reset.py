"""Password reset: token issuance, single-use consumption, and the development token listing."""

import logging
from datetime import datetime, timedelta, timezone

import aiosmtplib

from vloghub.core.config import Settings
from vloghub.core.security import create_password_reset_token, get_password_hash, validate_password
from vloghub.errors import DomainValidationError, InvalidTokenError
from vloghub.repositories.password_reset import (
    claim_reset_token,
    create_reset_token,
    list_active_tokens,
)
from vloghub.repositories.user import get_user_by_email, get_user_by_id, update_user_password
from vloghub.schemas.auth import (
    PasswordResetDone,
    PasswordResetRequested,
    ResetTokenInfo,
    ResetTokenList,
)
from vloghub.schemas.user import UserIdentity
from vloghub.services.email import build_reset_url, send_password_reset_email

logger = logging.getLogger(__name__)

GENERIC_RESET_MESSAGE = "If the email exists, a password reset link has been sent."


async def request_reset(store, settings: Settings, email: str | None) -> PasswordResetRequested:
    """
    Request password reset: create token, store it, email it.

    Unknown emails get the generic message and no token. Known emails get the
    same message unless EXPOSE_RESET_TOKENS is on, in which case the token and
    reset link are echoed back for local testing.

    Raises:
        DomainValidationError: If email is missing.
    """
    if not email:
        raise DomainValidationError("email is required")

    user = get_user_by_email(store, email)
    if not user:
        return PasswordResetRequested(message=GENERIC_RESET_MESSAGE)

    now = datetime.now(timezone.utc)
    expires = now + timedelta(minutes=settings.password_reset_token_expire_minutes)
    reset_token = create_password_reset_token()
    create_reset_token(store, user["id"], reset_token, expires_at=expires, created_at=now)
    logger.info("Issued password reset token for user %s", user["id"])

    try:
        await send_password_reset_email(settings, user["email"], reset_token)
    except (ValueError, aiosmtplib.SMTPException) as e:
        logger.error("Failed to send password reset email: %s", e)

    if not settings.expose_reset_tokens:
        return PasswordResetRequested(message=GENERIC_RESET_MESSAGE)

    return PasswordResetRequested(
        message="Password reset token generated (development mode - do not expose in production)",
        reset_token=reset_token,
        reset_url=build_reset_url(settings, reset_token),
        expires=expires,
    )


def consume_reset(store, token: str | None, new_password: str | None) -> PasswordResetDone:
    """
    Reset password using a token from request_reset.

    The password is validated before the token is looked up. Claiming the
    token and overwriting the hash happen in one transaction, so a failure
    between the two writes leaves the token unused.

    Raises:
        DomainValidationError: If token or password is missing, or the password is too short.
        InvalidTokenError: If the token never existed, has expired, or was already used.
    """
    if not token or not new_password:
        raise DomainValidationError("token and newPassword are required")

    is_valid, error_message = validate_password(new_password)
    if not is_valid:
        raise DomainValidationError(error_message)

    password_hash = get_password_hash(new_password)
    now = datetime.now(timezone.utc)
    with store.transaction() as tx:
        user_id = claim_reset_token(tx, token, now)
        if user_id is None:
            raise InvalidTokenError("Invalid or expired token")
        update_user_password(tx, user_id, password_hash)
        user = get_user_by_id(tx, user_id)

    logger.info("Password reset completed for user %s", user_id)
    return PasswordResetDone(
        message="Password has been reset successfully",
        user=UserIdentity(id=user["id"], email=user["email"], name=user["name"]),
    )


def active_tokens(store) -> ResetTokenList:
    """Every unused, unexpired token in plaintext. Development aid only."""
    rows = list_active_tokens(store, datetime.now(timezone.utc))
    return ResetTokenList(tokens=[ResetTokenInfo(**row) for row in rows])
