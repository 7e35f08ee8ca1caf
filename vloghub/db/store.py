"""Store adapter: single-statement query primitives over an embedded or hosted database."""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event, inspect, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.sql import ClauseElement
from sqlalchemy.sql.functions import FunctionElement

from vloghub.core.config import Settings
from vloghub.db.base import metadata
from vloghub.errors import ConstraintViolationError, StoreError

# Importing the models registers every table on the shared metadata.
import vloghub.db.models  # noqa: F401

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecuteResult:
    """Summary of a mutating statement."""

    last_insert_id: int | None
    rowcount: int


def normalize_database_url(url: str) -> str:
    """Normalize PostgreSQL URL to use psycopg3 driver."""
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql://") and "+psycopg" not in url:
        return url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


def _as_statement(query: Any) -> Any:
    if isinstance(query, str):
        return text(query)
    return query


def _run(connection: Connection, query: Any, params: dict[str, Any] | None):
    statement = _as_statement(query)
    try:
        if params:
            return connection.execute(statement, params)
        return connection.execute(statement)
    except IntegrityError as e:
        raise ConstraintViolationError(str(e.orig)) from e
    except SQLAlchemyError as e:
        raise StoreError(str(e)) from e


def _execute_result(result) -> ExecuteResult:
    last_insert_id = None
    if result.is_insert and result.inserted_primary_key:
        last_insert_id = result.inserted_primary_key[0]
    return ExecuteResult(last_insert_id=last_insert_id, rowcount=result.rowcount)


class Transaction:
    """Query primitives bound to one connection inside an open transaction."""

    def __init__(self, connection: Connection):
        self._connection = connection

    def get_one(self, query: Any, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        row = _run(self._connection, query, params).mappings().first()
        return dict(row) if row is not None else None

    def get_all(self, query: Any, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        return [dict(row) for row in _run(self._connection, query, params).mappings().all()]

    def execute(self, query: Any, params: dict[str, Any] | None = None) -> ExecuteResult:
        return _execute_result(_run(self._connection, query, params))


class Store:
    """
    Owns the engine for one database and exposes get_one/get_all/execute.

    Every primitive runs a single statement in its own short transaction.
    Use transaction() when a logical operation needs several writes to
    commit together.
    """

    def __init__(self, engine: Engine):
        self.engine = engine

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def initialize(self) -> None:
        """Create missing tables, then add any declared column an existing table lacks."""
        try:
            metadata.create_all(self.engine, checkfirst=True)
            self._add_missing_columns()
        except SQLAlchemyError as e:
            raise StoreError(f"Failed to initialize schema: {e}") from e

    def _add_missing_columns(self) -> None:
        with self.engine.begin() as connection:
            inspector = inspect(connection)
            for table in metadata.sorted_tables:
                existing = {column["name"] for column in inspector.get_columns(table.name)}
                for column in table.columns:
                    if column.name in existing:
                        continue
                    ddl = (
                        f"ALTER TABLE {table.name} ADD COLUMN {column.name} "
                        f"{column.type.compile(dialect=self.engine.dialect)}"
                    )
                    default = self._default_sql(column)
                    if default is not None:
                        ddl += f" DEFAULT {default}"
                    connection.execute(text(ddl))
                    logger.info("Added missing column %s.%s", table.name, column.name)

    def _default_sql(self, column) -> str | None:
        if column.server_default is None:
            return None
        default = column.server_default.arg
        # SQLite refuses non-constant defaults in ADD COLUMN
        if isinstance(default, FunctionElement):
            return None
        if isinstance(default, ClauseElement):
            return str(default.compile(dialect=self.engine.dialect))
        return f"'{default}'"

    def get_one(self, query: Any, params: dict[str, Any] | None = None) -> dict[str, Any] | None:
        with self.transaction() as tx:
            return tx.get_one(query, params)

    def get_all(self, query: Any, params: dict[str, Any] | None = None) -> list[dict[str, Any]]:
        with self.transaction() as tx:
            return tx.get_all(query, params)

    def execute(self, query: Any, params: dict[str, Any] | None = None) -> ExecuteResult:
        with self.transaction() as tx:
            return tx.execute(query, params)

    @contextmanager
    def transaction(self) -> Iterator[Transaction]:
        """Yield primitives sharing one connection; commit on success, roll back on error."""
        try:
            with self.engine.begin() as connection:
                yield Transaction(connection)
        except IntegrityError as e:
            raise ConstraintViolationError(str(e.orig)) from e
        except SQLAlchemyError as e:
            raise StoreError(str(e)) from e

    def dispose(self) -> None:
        self.engine.dispose()


def _enable_sqlite_pragmas(engine: Engine) -> None:
    @event.listens_for(engine, "connect")
    def set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()


def _build_store(database_url: str) -> Store:
    if database_url.startswith("sqlite"):
        engine = create_engine(database_url, connect_args={"check_same_thread": False})
        _enable_sqlite_pragmas(engine)
    else:
        engine = create_engine(database_url, pool_pre_ping=True)
    return Store(engine)


def create_embedded_store(settings: Settings) -> Store:
    """The SQLite file under DATA_DIR, whether or not it is the active backend."""
    Path(settings.data_dir).mkdir(parents=True, exist_ok=True)
    return _build_store(f"sqlite:///{settings.sqlite_path}")


def create_store(settings: Settings) -> Store:
    """
    Build the store selected by configuration.

    A configured DATABASE_URL points at the hosted backend; without it the
    application falls back to an embedded SQLite file under DATA_DIR.
    """
    if settings.uses_hosted_backend:
        logger.info("Using hosted database backend")
        return _build_store(normalize_database_url(settings.database_url))

    logger.info("Using embedded SQLite database at %s", settings.sqlite_path)
    return create_embedded_store(settings)
