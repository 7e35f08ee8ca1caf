from datetime import datetime
from typing import Any

from sqlalchemy import false, insert, select, update

from vloghub.db.models import password_reset_tokens, users


def create_reset_token(
    store, user_id: int, token: str, expires_at: datetime, created_at: datetime
) -> int:
    """Persist a freshly issued reset token and return its id."""
    result = store.execute(
        insert(password_reset_tokens).values(
            user_id=user_id,
            token=token,
            expires_at=expires_at,
            used=False,
            created_at=created_at,
        )
    )
    return result.last_insert_id


def claim_reset_token(store, token: str, now: datetime) -> int | None:
    """
    Mark a token used if it is still unused and unexpired.

    The check and the write are one conditional UPDATE, so two concurrent
    claims of the same token cannot both succeed.

    Returns the owning user's id, or None when nothing was claimed.
    """
    result = store.execute(
        update(password_reset_tokens)
        .where(
            password_reset_tokens.c.token == token,
            password_reset_tokens.c.used == false(),
            password_reset_tokens.c.expires_at > now,
        )
        .values(used=True)
    )
    if result.rowcount != 1:
        return None

    row = store.get_one(
        select(password_reset_tokens.c.user_id).where(password_reset_tokens.c.token == token)
    )
    return row["user_id"] if row else None


def list_active_tokens(store, now: datetime) -> list[dict[str, Any]]:
    """Unused, unexpired tokens joined with their owners, newest first."""
    return store.get_all(
        select(
            password_reset_tokens.c.id,
            password_reset_tokens.c.token,
            password_reset_tokens.c.expires_at,
            password_reset_tokens.c.created_at,
            users.c.id.label("user_id"),
            users.c.email,
            users.c.name,
        )
        .join(users, users.c.id == password_reset_tokens.c.user_id)
        .where(
            password_reset_tokens.c.used == false(),
            password_reset_tokens.c.expires_at > now,
        )
        .order_by(password_reset_tokens.c.created_at.desc())
    )
