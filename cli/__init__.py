"""CLI package for the library loans backend"""
from .main import cli

__all__ = ['cli']
