# core/errors.py
from typing import Dict, Optional


class CatalogError(Exception):
    """Base class for all catalog errors"""
    pass


class StoreConnectionError(CatalogError):
    """The storage collaborator is unreachable or not yet connected"""
    pass


class NotFoundError(CatalogError):
    """An operation referenced an identifier that does not exist"""

    def __init__(self, book_id: int, message: Optional[str] = None):
        self.book_id = book_id
        super().__init__(message or f"Book {book_id} not found")


class ValidationError(CatalogError):
    """A draft failed form validation.

    Args:
        errors: Mapping of field name to a user-facing message
    """

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(self.errors.values()))


class FetchError(CatalogError):
    """Loading the collection from the collaborator failed"""
    pass


class SaveError(CatalogError):
    """Creating or updating a book through the collaborator failed"""
    pass


class DeleteError(CatalogError):
    """Deleting a book through the collaborator failed"""
    pass
