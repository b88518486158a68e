"""
Test configuration and fixtures
"""

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from utils_api.application import create_application
from utils_api.config import AppConfig
from utils_api.db.session import Database
from utils_api.repositories.user import UserRepository
from utils_api.services.user import UserService

IN_MEMORY_DATABASE_URL = "sqlite+aiosqlite://"


def build_config(**overrides) -> AppConfig:
    raw = {
        "app": {"version": "1.2.3", "environment": "test"},
        "database": {"url": IN_MEMORY_DATABASE_URL, "sqlite_pragmas": {}},
        "security": {"request_limit": 1000},
    }
    for section, values in overrides.items():
        raw.setdefault(section, {}).update(values)
    return AppConfig.model_validate(raw)


@pytest.fixture
def make_config():
    return build_config


@pytest.fixture
def app_config():
    return build_config()


@pytest_asyncio.fixture
async def database(app_config):
    """Fresh in-memory database with the schema created"""
    db = Database(app_config)
    await db.create_all()
    try:
        yield db
    finally:
        await db.dispose()


@pytest_asyncio.fixture
async def db_session(database):
    async with database.session() as session:
        yield session


@pytest.fixture
def user_repository(db_session):
    return UserRepository(db_session)


@pytest.fixture
def user_service(user_repository):
    return UserService(user_repository)


@pytest.fixture
def sample_user_data():
    return {"email": "a@x.com", "password": "p", "name": "A"}


@pytest.fixture
def client(app_config):
    app = create_application(app_config)
    with TestClient(app) as test_client:
        yield test_client
