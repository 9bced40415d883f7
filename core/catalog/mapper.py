# core/catalog/mapper.py
import logging
from typing import Iterable, List, Tuple

from core.errors import FetchError, StoreConnectionError
from core.models.book import Book, BookEntry
from core.store.base import BookStore

logger = logging.getLogger(__name__)

def to_entries(rows: Iterable[Tuple[int, Book]]) -> List[BookEntry]:
    """Order raw (id, book) pairs newest first.

    Python's sort is stable, so books sharing a date_added keep the order
    the store returned them in.
    """
    entries = [BookEntry(int(book_id), book) for book_id, book in rows]
    entries.sort(key=lambda entry: entry.book.date_added, reverse=True)
    return entries

async def load_all(store: BookStore) -> List[BookEntry]:
    """Fetch the store's full snapshot as ordered entries.

    Raises:
        StoreConnectionError: If the store cannot be reached
        FetchError: If the store call fails for any other reason
    """
    try:
        rows = await store.get_all_books()
    except StoreConnectionError:
        raise
    except Exception as e:
        raise FetchError("Failed to load your library") from e
    return to_entries(rows)
