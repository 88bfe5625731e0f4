# tests/test_sa/conftest.py
import pytest
from core.sa.repositories.book import BookRepository
from core.sa.repositories.user import UserRepository
from core.services.loan_ledger import LoanLedger

@pytest.fixture
def book_repo(db_session):
    """Fixture to create a BookRepository instance."""
    return BookRepository(db_session)

@pytest.fixture
def user_repo(db_session):
    """Fixture to create a UserRepository instance."""
    return UserRepository(db_session)

@pytest.fixture
def ledger(db_session):
    """Fixture to create a LoanLedger bound to the test session."""
    return LoanLedger(db_session)
