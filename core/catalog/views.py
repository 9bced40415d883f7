# core/catalog/views.py
from dataclasses import dataclass
from typing import Union

from core.models.book import Book

@dataclass(frozen=True)
class LibraryView:
    name = "library"

@dataclass(frozen=True)
class AddFormView:
    name = "add"

@dataclass(frozen=True)
class EditFormView:
    id: int
    book: Book
    name = "edit"

@dataclass(frozen=True)
class DetailView:
    id: int
    book: Book
    name = "detail"

# The one screen currently shown
View = Union[LibraryView, AddFormView, EditFormView, DetailView]
