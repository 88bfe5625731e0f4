# core/sa/repositories/__init__.py
from .book import BookRepository
from .user import UserRepository

__all__ = ['BookRepository', 'UserRepository']
