# core/store/__init__.py
from .base import BookStore
from .local import LocalBookStore
from .remote import HttpBookStore

__all__ = ['BookStore', 'LocalBookStore', 'HttpBookStore']
