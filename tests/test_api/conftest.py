# tests/test_api/conftest.py
import pytest
from fastapi.testclient import TestClient

from api.main import app
from core.sa.database import get_db
from core.sa.repositories.user import UserRepository

@pytest.fixture
def client(database):
    """TestClient whose requests use the test database."""
    def override_get_db():
        session = database.get_session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def user_repo_api(db_session):
    return UserRepository(db_session)

@pytest.fixture
def due_date_str(due_date):
    return due_date.isoformat()
