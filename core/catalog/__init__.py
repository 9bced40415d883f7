# core/catalog/__init__.py
from .controller import LibraryController
from .mapper import load_all
from .screens import BookDetailScreen, BookFormScreen, LibraryScreen
from .views import AddFormView, DetailView, EditFormView, LibraryView, View

__all__ = [
    'LibraryController',
    'load_all',
    'LibraryScreen',
    'BookFormScreen',
    'BookDetailScreen',
    'LibraryView',
    'AddFormView',
    'EditFormView',
    'DetailView',
    'View',
]
