"""
Tests for the Alembic migration chain against a file-backed SQLite database.
"""

from pathlib import Path

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import create_engine, inspect

from utils_api.db.models import User

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"


@pytest.fixture
def database_path(tmp_path, monkeypatch):
    path = tmp_path / "migrated.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{path}")
    monkeypatch.setenv("APP_VERSION", "1.2.3")
    return path


@pytest.fixture
def alembic_config():
    config = Config()
    config.set_main_option("script_location", str(MIGRATIONS_DIR))
    return config


def _user_columns(path):
    engine = create_engine(f"sqlite:///{path}")
    try:
        inspector = inspect(engine)
        if not inspector.has_table("user"):
            return None
        return {column["name"]: column["nullable"] for column in inspector.get_columns("user")}
    finally:
        engine.dispose()


def test_upgrade_matches_models(database_path, alembic_config):
    command.upgrade(alembic_config, "head")

    expected = {column.name: column.nullable for column in User.__table__.columns}
    assert _user_columns(database_path) == expected


def test_downgrade_drops_user_table(database_path, alembic_config):
    command.upgrade(alembic_config, "head")
    command.downgrade(alembic_config, "base")

    assert _user_columns(database_path) is None
