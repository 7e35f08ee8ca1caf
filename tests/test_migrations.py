from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect, insert, select

from vloghub.db.base import metadata
from vloghub.db.models import users
from vloghub.db.store import create_store

from conftest import make_settings

ALEMBIC_DIR = Path(__file__).resolve().parent.parent / "alembic"


@pytest.fixture(scope="function")
def migrated_settings(tmp_path):
    """Settings for a database brought to head by the migration scripts."""
    settings = make_settings(tmp_path)
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(ALEMBIC_DIR))
    alembic_cfg.set_main_option("sqlalchemy.url", settings.database_url)
    command.upgrade(alembic_cfg, "head")
    return settings


def test_migrations_create_every_table(migrated_settings):
    """Test the migration history produces the same tables and columns as the models."""
    engine = create_engine(migrated_settings.database_url)
    try:
        inspector = inspect(engine)
        for table in metadata.sorted_tables:
            columns = {column["name"] for column in inspector.get_columns(table.name)}
            assert columns == set(table.columns.keys()), table.name
    finally:
        engine.dispose()


def test_store_initialize_on_migrated_database(migrated_settings):
    """Test startup schema checks leave a migrated database untouched and usable."""
    store = create_store(migrated_settings)
    try:
        store.initialize()
        store.execute(insert(users).values(email="a@example.com", name="A", password_hash="x"))
        row = store.get_one(select(users.c.status, users.c.is_active))
        assert row == {"status": "active", "is_active": False}
    finally:
        store.dispose()
