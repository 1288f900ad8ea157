"""Shared pytest fixtures: an isolated SQLite file per test."""

import pytest
from fastapi.testclient import TestClient

from kennel_api.app.core.config import Settings
from kennel_api.app.core.db import Database
from kennel_api.app.main import create_app
from kennel_api.app.schemas.dog import DogCreate
from kennel_api.app.services.dog_service import DogService


@pytest.fixture
def settings(tmp_path):
    return Settings(database_url=str(tmp_path / "kennel_test.db"), log_level="WARNING")


@pytest.fixture
def database(settings):
    db = Database(settings)
    db.init_db()
    return db


@pytest.fixture
def service(database):
    return DogService(database)


@pytest.fixture
def draft():
    """Factory for valid create payloads; keyword arguments override fields."""

    def _draft(**overrides) -> DogCreate:
        data = {
            "name": "Max",
            "breed": "Labrador",
            "badge_id": 42,
            "status": "in training",
        }
        data.update(overrides)
        return DogCreate(**data)

    return _draft


@pytest.fixture
def client(settings):
    app = create_app(settings)
    # Entering the client runs the lifespan, which creates the table.
    with TestClient(app) as test_client:
        yield test_client
