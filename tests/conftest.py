# tests/conftest.py
import sys
import pytest
from pathlib import Path
from datetime import datetime, timedelta, UTC
from sqlalchemy.sql import text

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from sqlalchemy.orm import Session
from core.sa.database import Database
from core.sa.models import UserRole
from core.sa.repositories.book import BookRepository
from core.sa.repositories.user import UserRepository

@pytest.fixture(scope="session")
def test_db_path(tmp_path_factory):
    """Create a temporary directory for the test database."""
    test_dir = tmp_path_factory.mktemp("test_db")
    return str(test_dir / "test_library.db")

@pytest.fixture(scope="session")
def database(test_db_path):
    """Create a test database instance"""
    db = Database(f"sqlite:///{test_db_path}")

    # Drop all tables and recreate schema
    db.drop_db()
    db.init_db()

    yield db

    db.engine.dispose()

@pytest.fixture(autouse=True)
def cleanup_db(database):
    """Clean up database tables before each test"""
    with database.engine.begin() as conn:
        conn.execute(text("DELETE FROM loan"))
        conn.execute(text("DELETE FROM book"))
        conn.execute(text('DELETE FROM "user"'))
    yield

@pytest.fixture(scope="function")
def db_session(database):
    """Create a new database session for a test"""
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def due_date():
    return datetime.now(UTC) + timedelta(days=14)

@pytest.fixture
def sample_book(db_session):
    """A book with two copies, both on the shelf."""
    return BookRepository(db_session).create_book(
        title="Test Book",
        author="Test Author",
        isbn="X",
        category="Testing",
        publish_year=2020,
        total_copies=2
    )

@pytest.fixture
def sample_student(db_session):
    return UserRepository(db_session).create_user(
        username="student1",
        password="student-pass",
        name="Test Student",
        role=UserRole.STUDENT.value,
        email="student1@example.com"
    )

@pytest.fixture
def sample_admin(db_session):
    return UserRepository(db_session).create_user(
        username="admin",
        password="admin-pass",
        name="Test Admin",
        role=UserRole.ADMIN.value
    )
