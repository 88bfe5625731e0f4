# core/sa/__init__.py
from .database import Database
from .models import (
    Base, Book, User, UserRole,
    Loan, LoanStatus
)

__all__ = [
    'Database',
    'Base',
    'Book',
    'User',
    'UserRole',
    'Loan',
    'LoanStatus'
]
