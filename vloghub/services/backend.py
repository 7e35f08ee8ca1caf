"""Hosted backend switch: status, hosted stats and copying users off the embedded file."""

import logging

from vloghub.core.config import Settings
from vloghub.db.store import Store, create_embedded_store
from vloghub.errors import ConstraintViolationError, DomainValidationError
from vloghub.repositories import user as user_repo
from vloghub.schemas.backend import BackendStatus, MigrationResult
from vloghub.schemas.user import Stats
from vloghub.services import user as user_service

logger = logging.getLogger(__name__)


def get_status(settings: Settings) -> BackendStatus:
    return BackendStatus(configured=settings.uses_hosted_backend)


def _require_hosted(settings: Settings) -> None:
    if not settings.uses_hosted_backend:
        raise DomainValidationError("Hosted backend is not configured")


def get_hosted_stats(settings: Settings, store: Store) -> Stats:
    _require_hosted(settings)
    return user_service.get_stats(store)


def migrate_embedded_users(settings: Settings, store: Store) -> MigrationResult:
    """
    Copy every user from the embedded SQLite file into the hosted store.

    Password hashes, statuses and creation times are kept, so migrated users
    log in with their existing passwords. Emails already present in the
    hosted store are skipped, which makes repeated runs safe.

    Raises:
        DomainValidationError: If no hosted backend is configured.
    """
    _require_hosted(settings)

    if not settings.sqlite_path.exists():
        logger.info("No embedded database at %s; nothing to migrate", settings.sqlite_path)
        return MigrationResult(migrated=0, total=0)

    embedded = create_embedded_store(settings)
    try:
        embedded.initialize()
        rows = user_repo.list_users_for_export(embedded)
    finally:
        embedded.dispose()

    migrated = 0
    for row in rows:
        try:
            user_repo.create_user(
                store,
                email=row["email"],
                name=row["name"],
                password_hash=row["password_hash"],
                status=row["status"],
                is_active=row["is_active"],
                created_at=row["created_at"],
            )
        except ConstraintViolationError:
            logger.info("Skipping %s: already in the hosted store", row["email"])
            continue
        migrated += 1

    logger.info("Migrated %d of %d embedded users", migrated, len(rows))
    return MigrationResult(migrated=migrated, total=len(rows))
