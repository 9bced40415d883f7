# core/sa/__init__.py
from .database import Database
from .models import Base, Book

__all__ = [
    'Database',
    'Base',
    'Book',
]
