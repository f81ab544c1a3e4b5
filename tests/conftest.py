"""Shared fixtures: a fresh SQLite file per test.

Invariants:
    - Every test gets its own database under pytest's tmp_path
    - The API client runs the app lifespan, so startup opens the store
"""

import pytest
from fastapi.testclient import TestClient

from green_space_api.app.core.config import Settings
from green_space_api.app.core.db import StableMemory
from green_space_api.app.main import create_app
from green_space_api.app.schemas.green_space import GreenSpaceCreate
from green_space_api.app.services.green_space_service import GreenSpaceService


@pytest.fixture
def db_path(tmp_path):
    return str(tmp_path / "green_spaces.db")


@pytest.fixture
def memory(db_path):
    return StableMemory.open(db_path)


@pytest.fixture
def service(db_path):
    return GreenSpaceService.open(db_path)


@pytest.fixture
def central_park():
    return GreenSpaceCreate(name="Central Park", location="NYC", description="Big park")


@pytest.fixture
def client(db_path):
    app = create_app(Settings(database_url=db_path, log_level="DEBUG"))
    with TestClient(app) as c:
        yield c
