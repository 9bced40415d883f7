# core/sa/repositories/book.py
import logging
from typing import List, Optional, Tuple
from sqlalchemy.orm import Session

from core.errors import NotFoundError
from core.models.book import Book as BookRecord
from ..models import Book

logger = logging.getLogger(__name__)

def to_record(book: Book) -> BookRecord:
    """Convert a stored row into a book record"""
    return BookRecord(
        title=book.title,
        author=book.author,
        genre=book.genre,
        notes=book.notes,
        rating=book.rating,
        cover_url=book.cover_url,
        status=book.status,
        date_added=book.date_added,
    )

class BookRepository:
    """Repository for managing Book rows.

    This is the synchronous storage behind both the local store and the
    catalog API. Missing identifiers raise ``NotFoundError`` rather than
    returning ``None`` so callers see the same failure either way.
    """

    def __init__(self, session: Session):
        """Initialize the repository with a database session.

        Args:
            session: SQLAlchemy session for database operations
        """
        self.session = session

    def get_by_id(self, book_id: int) -> Optional[Book]:
        """Get a book row by its ID.

        Args:
            book_id: The ID of the book to retrieve

        Returns:
            The Book row if found, None otherwise
        """
        return self.session.query(Book).filter(Book.id == book_id).first()

    def _require(self, book_id: int) -> Book:
        book = self.get_by_id(book_id)
        if book is None:
            raise NotFoundError(book_id)
        return book

    def add_book(self, record: BookRecord) -> int:
        """Insert a new book.

        Args:
            record: The full record, including its date_added stamp

        Returns:
            The identifier assigned by the database
        """
        book = Book(
            title=record.title,
            author=record.author,
            genre=record.genre,
            notes=record.notes,
            rating=record.rating,
            cover_url=record.cover_url,
            status=record.status.value,
            date_added=record.date_added,
        )
        self.session.add(book)
        self.session.commit()
        logger.debug("Inserted book %s (%s)", book.id, book.title)
        return book.id

    def get_book(self, book_id: int) -> BookRecord:
        """Get a single book record.

        Raises:
            NotFoundError: If no book has this ID
        """
        return to_record(self._require(book_id))

    def get_all_books(self) -> List[Tuple[int, BookRecord]]:
        """Get every stored book as (id, record) pairs in insertion order"""
        books = self.session.query(Book).order_by(Book.id).all()
        return [(book.id, to_record(book)) for book in books]

    def update_book(self, book_id: int, record: BookRecord) -> None:
        """Replace the editable fields of a book.

        The stored date_added is kept even when the record carries a
        different value.

        Raises:
            NotFoundError: If no book has this ID
        """
        book = self._require(book_id)
        if record.date_added != book.date_added:
            logger.warning(
                "Ignoring date_added change for book %s (%s -> %s)",
                book_id, book.date_added, record.date_added
            )

        book.title = record.title
        book.author = record.author
        book.genre = record.genre
        book.notes = record.notes
        book.rating = record.rating
        book.cover_url = record.cover_url
        book.status = record.status.value

        self.session.commit()
        logger.debug("Updated book %s", book_id)

    def delete_book(self, book_id: int) -> None:
        """Delete a book.

        Raises:
            NotFoundError: If no book has this ID
        """
        book = self._require(book_id)
        self.session.delete(book)
        self.session.commit()
        logger.debug("Deleted book %s", book_id)

    def count_books(self) -> int:
        return self.session.query(Book).count()
