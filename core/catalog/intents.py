# core/catalog/intents.py
"""User intents emitted by the screens and applied by the controller."""
from dataclasses import dataclass
from typing import Union

from core.models.book import Book, BookDraft

@dataclass(frozen=True)
class AddIntent:
    """Open the empty add form"""
    pass

@dataclass(frozen=True)
class ViewDetailIntent:
    id: int
    book: Book

@dataclass(frozen=True)
class EditIntent:
    id: int
    book: Book

@dataclass(frozen=True)
class SaveIntent:
    """Submit a validated draft from the add or edit form"""
    draft: BookDraft

@dataclass(frozen=True)
class DeleteIntent:
    id: int

@dataclass(frozen=True)
class BackIntent:
    """Cancel a form or leave the detail view"""
    pass

Intent = Union[AddIntent, ViewDetailIntent, EditIntent, SaveIntent, DeleteIntent, BackIntent]
