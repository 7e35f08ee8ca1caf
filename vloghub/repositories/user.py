from datetime import datetime, timezone
from typing import Any

from sqlalchemy import delete, func, insert, literal, select, update

from vloghub.db.models import users

# Every column a client may see; password_hash is deliberately absent.
PUBLIC_COLUMNS = (
    users.c.id,
    users.c.email,
    users.c.name,
    users.c.status,
    users.c.is_active,
    users.c.created_at,
)


def get_user_by_email(store, email: str) -> dict[str, Any] | None:
    """Get a user by email, including the password hash for credential checks."""
    return store.get_one(
        select(users.c.id, users.c.email, users.c.name, users.c.password_hash).where(
            users.c.email == email
        )
    )


def get_user_by_id(store, user_id: int) -> dict[str, Any] | None:
    """Get a user by ID."""
    return store.get_one(select(*PUBLIC_COLUMNS).where(users.c.id == user_id))


def list_users(store) -> list[dict[str, Any]]:
    """All users, newest first."""
    return store.get_all(
        select(*PUBLIC_COLUMNS).order_by(users.c.created_at.desc(), users.c.id.desc())
    )


def list_users_for_export(store) -> list[dict[str, Any]]:
    """All users oldest first, password hashes included, for copying to another store."""
    return store.get_all(
        select(*PUBLIC_COLUMNS, users.c.password_hash).order_by(users.c.id)
    )


def create_user(
    store,
    email: str,
    name: str,
    password_hash: str,
    status: str | None = None,
    is_active: bool = False,
    created_at: datetime | None = None,
) -> int:
    """Insert a user row and return its id. Pure data access - no business logic."""
    values = {
        "email": email,
        "name": name,
        "password_hash": password_hash,
        "is_active": is_active,
        "created_at": created_at or datetime.now(timezone.utc),
    }
    if status is not None:
        values["status"] = status
    result = store.execute(insert(users).values(**values))
    return result.last_insert_id


def update_user(
    store,
    user_id: int,
    email: str | None = None,
    name: str | None = None,
    status: str | None = None,
) -> int:
    """
    Update user fields, keeping the stored value for every field passed as None.

    is_active follows status whenever a status is given.

    Returns the number of rows changed (0 when the user does not exist).
    """
    values = {
        "email": func.coalesce(literal(email, users.c.email.type), users.c.email),
        "name": func.coalesce(literal(name, users.c.name.type), users.c.name),
        "status": func.coalesce(literal(status, users.c.status.type), users.c.status),
    }
    if status is not None:
        values["is_active"] = status == "active"
    result = store.execute(update(users).where(users.c.id == user_id).values(**values))
    return result.rowcount


def update_user_password(store, user_id: int, password_hash: str) -> int:
    """Overwrite a user's password hash."""
    result = store.execute(
        update(users).where(users.c.id == user_id).values(password_hash=password_hash)
    )
    return result.rowcount


def delete_user(store, user_id: int) -> int:
    result = store.execute(delete(users).where(users.c.id == user_id))
    return result.rowcount


def count_users(store, *conditions) -> int:
    """Count users matching all given conditions."""
    query = select(func.count().label("c")).select_from(users)
    if conditions:
        query = query.where(*conditions)
    row = store.get_one(query)
    return row["c"] if row else 0
