# core/sa/models/__init__.py
from .base import Base, TimestampMixin, UTCDateTime, utcnow
from .book import Book
from .user import User, UserRole
from .loan import Loan, LoanStatus

__all__ = [
    'Base',
    'TimestampMixin',
    'UTCDateTime',
    'utcnow',
    'Book',
    'User',
    'UserRole',
    'Loan',
    'LoanStatus'
]
