import logging

from sqlalchemy import true

import vloghub.repositories.user as user_repo
from vloghub.core.config import Settings
from vloghub.core.security import get_password_hash
from vloghub.db.models import users
from vloghub.errors import ConstraintViolationError, DomainValidationError, DuplicateResourceError
from vloghub.schemas.user import DeletedCount, Stats, UpdatedCount, User, UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def list_users(store) -> list[User]:
    return [User(**row) for row in user_repo.list_users(store)]


def create_user(store, settings: Settings, user_data: UserCreate) -> User:
    """
    Create a user on behalf of an admin.

    - Requires name and email
    - Assigns the configured default password, to be changed through a reset
    - is_active follows status == "active"

    Raises:
        DomainValidationError: If name or email is missing.
        DuplicateResourceError: If the email is already registered.
    """
    if not user_data.name or not user_data.email:
        raise DomainValidationError("name and email required")

    password_hash = get_password_hash(settings.default_user_password)
    try:
        user_id = user_repo.create_user(
            store,
            email=user_data.email,
            name=user_data.name,
            password_hash=password_hash,
            status=user_data.status,
            is_active=user_data.status == "active",
        )
    except ConstraintViolationError:
        raise DuplicateResourceError("Email already exists")

    logger.info("Created user %s", user_id)
    return User(**user_repo.get_user_by_id(store, user_id))


def update_user(store, user_id: int, user_data: UserUpdate) -> UpdatedCount:
    """
    Partially update a user. Omitted or empty fields keep their previous value.

    A count of 0 means no such user; that is reported, not raised.

    Raises:
        DuplicateResourceError: If the new email belongs to another user.
    """
    try:
        updated = user_repo.update_user(
            store,
            user_id,
            email=user_data.email or None,
            name=user_data.name or None,
            status=user_data.status or None,
        )
    except ConstraintViolationError:
        raise DuplicateResourceError("Email already exists")
    return UpdatedCount(updated=updated)


def delete_user(store, user_id: int) -> DeletedCount:
    deleted = user_repo.delete_user(store, user_id)
    if deleted:
        logger.info("Deleted user %s", user_id)
    return DeletedCount(deleted=deleted)


def get_stats(store) -> Stats:
    """Three independent counts: all users, active users, users pending action."""
    return Stats(
        total_users=user_repo.count_users(store),
        active_sessions=user_repo.count_users(store, users.c.is_active == true()),
        pending_actions=user_repo.count_users(store, users.c.status == "pending"),
    )
