# core/store/base.py
from abc import ABC, abstractmethod
from typing import List, Tuple

from core.models.book import Book

class BookStore(ABC):
    """The storage collaborator the catalog talks to.

    Every operation may suspend the caller. Implementations assign
    identifiers on ``add_book`` and raise ``NotFoundError`` for unknown
    identifiers on ``get_book``, ``update_book`` and ``delete_book``.
    """

    @abstractmethod
    async def add_book(self, book: Book) -> int:
        ...

    @abstractmethod
    async def get_book(self, book_id: int) -> Book:
        ...

    @abstractmethod
    async def get_all_books(self) -> List[Tuple[int, Book]]:
        ...

    @abstractmethod
    async def update_book(self, book_id: int, book: Book) -> None:
        ...

    @abstractmethod
    async def delete_book(self, book_id: int) -> None:
        ...

    async def close(self) -> None:
        """Release any resources held by the store"""
        pass
