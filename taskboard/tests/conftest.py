"""Shared fixtures: a fresh in-memory database per test."""

import pytest
from fastapi.testclient import TestClient

from taskboard.config import Settings
from taskboard.crud import TagStorage, TaskStorage
from taskboard.database import create_db_and_tables, get_engine
from taskboard.main import create_app

MEMORY_URL = "sqlite://"


@pytest.fixture
def engine():
    engine = get_engine(MEMORY_URL)
    create_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def tag_storage(engine):
    return TagStorage(engine)


@pytest.fixture
def task_storage(engine, tag_storage):
    return TaskStorage(engine, tag_storage)


@pytest.fixture
def client():
    """Test client whose lifespan builds the store against an in-memory database."""
    app = create_app(Settings(database_url=MEMORY_URL))
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def file_client(tmp_path):
    """Test client backed by a SQLite file, the default deployment setup."""
    database_url = f"sqlite:///{tmp_path / 'taskboard.db'}"
    app = create_app(Settings(database_url=database_url))
    with TestClient(app) as test_client:
        yield test_client
