import os

os.environ.setdefault("ENV", "test")

import pytest
from fastapi.testclient import TestClient

from webuser.database import build_engine
from webuser.main import app
from webuser.models import User
from webuser.repository import open_repository
from webuser.routes.users import get_repository


@pytest.fixture
def engine():
    engine = build_engine("test")
    yield engine
    engine.dispose()


@pytest.fixture
def repository(engine):
    return open_repository(engine)


@pytest.fixture
def test_user_data():
    return {
        "user_id": 1,
        "alias": "alice",
        "email": "alice@example.com",
        "password": "testpassword123"
    }


@pytest.fixture
def test_user(test_user_data):
    return User(**test_user_data)


@pytest.fixture
def client(repository):
    app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def network_codes():
    return {
        "success": [200, 201],
        "error": [400, 404, 422]
    }
