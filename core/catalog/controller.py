# core/catalog/controller.py
import logging
from typing import Callable, List, Optional

from core.errors import (
    DeleteError, FetchError, NotFoundError, SaveError, StoreConnectionError
)
from core.models.book import Book, BookDraft, BookEntry, now_millis
from core.store.base import BookStore
from .intents import (
    AddIntent, BackIntent, DeleteIntent, EditIntent, Intent, SaveIntent, ViewDetailIntent
)
from .mapper import load_all
from .views import AddFormView, DetailView, EditFormView, LibraryView, View

logger = logging.getLogger(__name__)

class LibraryController:
    """Owns the current view and the in-memory book collection.

    Every mutation goes through the store and is followed by a full reload;
    the collection is replaced, never patched. When a store call fails the
    view and collection are left as they were and the error is re-raised for
    the caller to report.
    """

    def __init__(self, store: Optional[BookStore] = None, clock: Callable[[], int] = now_millis):
        """Initialize the controller.

        Args:
            store: The storage collaborator, or None until it is ready
            clock: Source of the current time in epoch milliseconds
        """
        self._store = store
        self._clock = clock
        self._view: View = LibraryView()
        self._books: List[BookEntry] = []
        self._is_loading = True

    @property
    def view(self) -> View:
        return self._view

    @property
    def books(self) -> List[BookEntry]:
        return list(self._books)

    @property
    def is_loading(self) -> bool:
        """True until the first fetch has resolved"""
        return self._is_loading

    @property
    def is_connected(self) -> bool:
        return self._store is not None

    def connect(self, store: BookStore) -> None:
        """Attach the store once it is ready"""
        self._store = store

    def _require_store(self) -> BookStore:
        if self._store is None:
            raise StoreConnectionError("Not connected")
        return self._store

    def find(self, book_id: int) -> Optional[BookEntry]:
        return next((entry for entry in self._books if entry.id == book_id), None)

    async def load_books(self) -> None:
        """Replace the collection with the store's current snapshot.

        Does nothing while no store is connected.

        Raises:
            FetchError: If the store call fails
        """
        if self._store is None:
            return
        try:
            entries = await load_all(self._store)
        except (FetchError, StoreConnectionError) as e:
            logger.error("Failed to load books: %s", e)
            raise
        finally:
            self._is_loading = False
        self._books = entries

    async def _reload(self) -> None:
        # The mutation already succeeded; a failed refresh is only logged
        try:
            await self.load_books()
        except (FetchError, StoreConnectionError):
            logger.warning("Keeping previous collection after failed reload")

    async def add_book(self, draft: BookDraft) -> int:
        """Create a book stamped with the current time.

        Returns:
            The identifier assigned by the store

        Raises:
            StoreConnectionError: If no store is connected or it is unreachable
            SaveError: If the store rejects the book
        """
        store = self._require_store()
        book = draft.stamped(self._clock())
        try:
            book_id = await store.add_book(book)
        except StoreConnectionError:
            logger.error("Failed to add book: store unreachable")
            raise
        except Exception as e:
            logger.error("Failed to add book: %s", e)
            raise SaveError("Failed to add book") from e

        logger.info("Added book %s (%s)", book_id, book.title)
        await self._reload()
        self._view = LibraryView()
        return book_id

    async def _date_added_for(self, store: BookStore, book_id: int) -> int:
        entry = self.find(book_id)
        if entry is not None:
            return entry.book.date_added
        # Not in the local snapshot, so ask the store for the authoritative stamp
        logger.info("Book %s not loaded locally, fetching its date_added", book_id)
        current = await store.get_book(book_id)
        return current.date_added

    async def update_book(self, book_id: int, draft: BookDraft) -> None:
        """Replace a book's fields, keeping its original date_added.

        Raises:
            StoreConnectionError: If no store is connected or it is unreachable
            NotFoundError: If the book no longer exists
            SaveError: If the store rejects the update
        """
        store = self._require_store()
        try:
            date_added = await self._date_added_for(store, book_id)
            await store.update_book(book_id, draft.stamped(date_added))
        except (StoreConnectionError, NotFoundError) as e:
            logger.error("Failed to update book %s: %s", book_id, e)
            raise
        except Exception as e:
            logger.error("Failed to update book %s: %s", book_id, e)
            raise SaveError("Failed to update book") from e

        logger.info("Updated book %s", book_id)
        await self._reload()
        self._view = LibraryView()

    async def delete_book(self, book_id: int) -> None:
        """Remove a book.

        Raises:
            StoreConnectionError: If no store is connected or it is unreachable
            NotFoundError: If the book no longer exists
            DeleteError: If the store rejects the delete
        """
        store = self._require_store()
        try:
            await store.delete_book(book_id)
        except (StoreConnectionError, NotFoundError) as e:
            logger.error("Failed to delete book %s: %s", book_id, e)
            raise
        except Exception as e:
            logger.error("Failed to delete book %s: %s", book_id, e)
            raise DeleteError("Failed to delete book") from e

        logger.info("Deleted book %s", book_id)
        await self._reload()
        self._view = LibraryView()

    def navigate_to_library(self) -> None:
        self._view = LibraryView()

    def navigate_to_add(self) -> None:
        self._view = AddFormView()

    def navigate_to_edit(self, book_id: int, book: Book) -> None:
        self._view = EditFormView(book_id, book.model_copy())

    def navigate_to_detail(self, book_id: int, book: Book) -> None:
        self._view = DetailView(book_id, book.model_copy())

    async def dispatch(self, intent: Intent) -> None:
        """Apply an intent emitted by the current screen.

        Save and delete act on the identifier held by the current view;
        a save from the add form creates, a save from the edit form updates.
        """
        if isinstance(intent, AddIntent):
            self.navigate_to_add()
        elif isinstance(intent, ViewDetailIntent):
            self.navigate_to_detail(intent.id, intent.book)
        elif isinstance(intent, EditIntent):
            self.navigate_to_edit(intent.id, intent.book)
        elif isinstance(intent, BackIntent):
            self.navigate_to_library()
        elif isinstance(intent, SaveIntent):
            view = self._view
            if isinstance(view, AddFormView):
                await self.add_book(intent.draft)
            elif isinstance(view, EditFormView):
                await self.update_book(view.id, intent.draft)
            else:
                raise ValueError(f"Cannot save from the {view.name} view")
        elif isinstance(intent, DeleteIntent):
            await self.delete_book(intent.id)
        else:
            raise TypeError(f"Unknown intent: {intent!r}")
