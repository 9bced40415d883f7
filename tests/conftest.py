# tests/conftest.py
import sys
import itertools
import pytest
from pathlib import Path
from typing import Dict, List, Set

# Add project root to Python path
project_root = str(Path(__file__).parent.parent)
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from api.main import app
from core.errors import NotFoundError
from core.models.book import Book, BookDraft, ReadingStatus
from core.sa.database import Database, get_db
from core.sa.repositories.book import BookRepository
from core.store.base import BookStore
from core.store.local import LocalBookStore

# 2025-03-04 12:00:00 UTC
NOON = 1741089600000
DAY = 24 * 60 * 60 * 1000


class FakeBookStore(BookStore):
    """In-memory store that records calls and can be told to fail"""

    def __init__(self):
        self.books: Dict[int, Book] = {}
        self.next_id = 1
        self.calls: List[str] = []
        self.fail_on: Set[str] = set()

    def _check(self, name: str) -> None:
        self.calls.append(name)
        if name in self.fail_on:
            raise RuntimeError(f"{name} rejected")

    async def add_book(self, book: Book) -> int:
        self._check("add_book")
        book_id = self.next_id
        self.next_id += 1
        self.books[book_id] = book
        return book_id

    async def get_book(self, book_id: int) -> Book:
        self._check("get_book")
        if book_id not in self.books:
            raise NotFoundError(book_id)
        return self.books[book_id]

    async def get_all_books(self):
        self._check("get_all_books")
        return list(self.books.items())

    async def update_book(self, book_id: int, book: Book) -> None:
        self._check("update_book")
        if book_id not in self.books:
            raise NotFoundError(book_id)
        self.books[book_id] = book

    async def delete_book(self, book_id: int) -> None:
        self._check("delete_book")
        if book_id not in self.books:
            raise NotFoundError(book_id)
        del self.books[book_id]


@pytest.fixture
def fake_store():
    return FakeBookStore()

@pytest.fixture
def clock():
    """A clock that advances one day per call, starting at NOON"""
    ticks = itertools.count(NOON, DAY)
    return lambda: next(ticks)

@pytest.fixture
def make_draft():
    def factory(title="Dune", author="Herbert", **kwargs) -> BookDraft:
        return BookDraft(title=title, author=author, **kwargs)
    return factory

@pytest.fixture
def make_book(make_draft):
    def factory(title="Dune", author="Herbert", date_added=NOON, **kwargs) -> Book:
        return make_draft(title, author, **kwargs).stamped(date_added)
    return factory

@pytest.fixture
def db_url(tmp_path):
    return f"sqlite:///{tmp_path / 'test_books.db'}"

@pytest.fixture
def database(db_url):
    """Create a test database with a fresh schema"""
    db = Database(db_url)
    db.init_db()
    yield db
    db.dispose()

@pytest.fixture
def db_session(database):
    session: Session = database.get_session()
    try:
        yield session
    finally:
        session.close()

@pytest.fixture
def book_repo(db_session):
    return BookRepository(db_session)

@pytest.fixture
def local_store(database):
    return LocalBookStore(database)

@pytest.fixture
def api_app(database):
    """The API app wired to the test database"""
    def override_get_db():
        session = database.get_session()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield app
    app.dependency_overrides.clear()

@pytest.fixture
def client(api_app):
    return TestClient(api_app)
