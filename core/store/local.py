# core/store/local.py
import asyncio
from typing import Callable, List, Tuple, TypeVar

from core.models.book import Book
from core.sa.database import Database
from core.sa.repositories.book import BookRepository
from .base import BookStore

T = TypeVar("T")

class LocalBookStore(BookStore):
    """Book store backed directly by the SQLAlchemy database.

    Session work is blocking, so each call runs in a worker thread with its
    own session and the event loop stays free.
    """

    def __init__(self, database: Database):
        self.database = database

    async def _run(self, operation: Callable[[BookRepository], T]) -> T:
        def work() -> T:
            with self.database.get_db() as session:
                return operation(BookRepository(session))
        return await asyncio.to_thread(work)

    async def add_book(self, book: Book) -> int:
        return await self._run(lambda repo: repo.add_book(book))

    async def get_book(self, book_id: int) -> Book:
        return await self._run(lambda repo: repo.get_book(book_id))

    async def get_all_books(self) -> List[Tuple[int, Book]]:
        return await self._run(lambda repo: repo.get_all_books())

    async def update_book(self, book_id: int, book: Book) -> None:
        await self._run(lambda repo: repo.update_book(book_id, book))

    async def delete_book(self, book_id: int) -> None:
        await self._run(lambda repo: repo.delete_book(book_id))
