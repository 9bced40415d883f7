# core/catalog/screens.py
"""Screen models for the library, the add/edit form and the detail view.

Each screen is a plain function of the data it is given and hands user
intents back to the controller. Rendering them is left to the caller (the
CLI renders them as text).
"""
from dataclasses import dataclass, field
from datetime import datetime
from typing import Awaitable, Callable, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from core.errors import ValidationError
from core.models.book import Book, BookDraft, BookEntry, ReadingStatus, MAX_RATING
from .intents import AddIntent, BackIntent, DeleteIntent, EditIntent, SaveIntent, ViewDetailIntent


@dataclass
class LibraryScreen:
    entries: List[BookEntry]
    search: str = ""
    status: Optional[ReadingStatus] = None

    @property
    def is_filtered(self) -> bool:
        return bool(self.search.strip()) or self.status is not None

    @property
    def visible(self) -> List[BookEntry]:
        """Entries matching both the status filter and the search text"""
        result = self.entries
        if self.status is not None:
            result = [entry for entry in result if entry.book.status == self.status]
        if self.search.strip():
            query = self.search.lower()
            result = [
                entry for entry in result
                if query in entry.book.title.lower() or query in entry.book.author.lower()
            ]
        return list(result)

    @property
    def stats(self) -> Dict[str, int]:
        """Counts over the whole collection, ignoring filters"""
        def count(status: ReadingStatus) -> int:
            return sum(1 for entry in self.entries if entry.book.status == status)

        return {
            "total": len(self.entries),
            "reading": count(ReadingStatus.READING),
            "read": count(ReadingStatus.READ),
            "want": count(ReadingStatus.WANT_TO_READ),
        }

    @property
    def count_label(self) -> str:
        total = len(self.entries)
        return f"{total} {'book' if total == 1 else 'books'} cataloged"

    @property
    def empty_message(self) -> Optional[str]:
        if self.visible:
            return None
        if self.is_filtered:
            return "No matches found. Try a different search or filter"
        return "Your library awaits. Add your first book to start cataloging"

    def add(self) -> AddIntent:
        return AddIntent()

    def select(self, book_id: int) -> ViewDetailIntent:
        for entry in self.entries:
            if entry.id == book_id:
                return ViewDetailIntent(entry.id, entry.book)
        raise KeyError(book_id)


FORM_FIELDS = ("title", "author", "genre", "status", "rating", "cover_url", "notes")

def _default_fields() -> Dict[str, object]:
    return {
        "title": "",
        "author": "",
        "genre": "",
        "status": ReadingStatus.WANT_TO_READ,
        "rating": 0,
        "cover_url": "",
        "notes": "",
    }


@dataclass
class BookFormScreen:
    """State of the add or edit form.

    Field values are kept raw as typed; trimming happens when the draft is
    built. ``is_saving`` is true while a submit is outstanding and a second
    submit in that window is ignored.
    """
    mode: str = "add"
    fields: Dict[str, object] = field(default_factory=_default_fields)
    errors: Dict[str, str] = field(default_factory=dict)
    is_saving: bool = False

    @classmethod
    def for_book(cls, book: Book) -> "BookFormScreen":
        return cls(
            mode="edit",
            fields={
                "title": book.title,
                "author": book.author,
                "genre": book.genre,
                "status": book.status,
                "rating": book.rating,
                "cover_url": book.cover_url or "",
                "notes": book.notes,
            },
        )

    @property
    def heading(self) -> str:
        return "Add Book" if self.mode == "add" else "Edit Book"

    def set(self, name: str, value: object) -> None:
        if name not in FORM_FIELDS:
            raise KeyError(name)
        self.fields[name] = value
        self.errors.pop(name, None)

    def toggle_rating(self, stars: int) -> None:
        """Pick a star rating; picking the current rating clears it"""
        if not 1 <= stars <= MAX_RATING:
            raise ValueError(f"Rating must be between 1 and {MAX_RATING}")
        self.set("rating", 0 if stars == self.fields["rating"] else stars)

    def validate(self) -> Dict[str, str]:
        errors = {}
        if not str(self.fields["title"]).strip():
            errors["title"] = "Title is required"
        if not str(self.fields["author"]).strip():
            errors["author"] = "Author is required"
        return errors

    def draft(self) -> BookDraft:
        """Build the trimmed draft.

        Raises:
            ValidationError: If title or author is blank, or a field is out of range
        """
        errors = self.validate()
        if errors:
            raise ValidationError(errors)
        try:
            return BookDraft(
                title=str(self.fields["title"]),
                author=str(self.fields["author"]),
                genre=str(self.fields["genre"]),
                notes=str(self.fields["notes"]),
                cover_url=str(self.fields["cover_url"] or ""),
                rating=self.fields["rating"],
                status=self.fields["status"],
            )
        except PydanticValidationError as e:
            raise ValidationError({
                str(error["loc"][0]): error["msg"] for error in e.errors()
            }) from e

    async def submit(self, save: Callable[[SaveIntent], Awaitable[None]]) -> bool:
        """Validate and hand the draft to ``save``.

        Returns:
            True if ``save`` completed, False if the form was invalid or
            already saving. Errors raised by ``save`` propagate after the
            saving flag is cleared.
        """
        if self.is_saving:
            return False
        try:
            draft = self.draft()
        except ValidationError as e:
            self.errors = e.errors
            return False

        self.is_saving = True
        try:
            await save(SaveIntent(draft))
        finally:
            self.is_saving = False
        return True

    def cancel(self) -> BackIntent:
        return BackIntent()


@dataclass
class BookDetailScreen:
    id: int
    book: Book
    is_deleting: bool = False

    @property
    def formatted_date(self) -> str:
        added = datetime.fromtimestamp(self.book.date_added / 1000)
        return f"{added:%B} {added.day}, {added.year}"

    @property
    def rating_label(self) -> str:
        if self.book.rating == 0:
            return "Not rated"
        return f"{self.book.rating}/{MAX_RATING}"

    @property
    def status_label(self) -> str:
        return self.book.status.label

    def edit(self) -> EditIntent:
        return EditIntent(self.id, self.book)

    def back(self) -> BackIntent:
        return BackIntent()

    async def delete(self, remove: Callable[[DeleteIntent], Awaitable[None]]) -> bool:
        """Request deletion of this book, once at a time"""
        if self.is_deleting:
            return False
        self.is_deleting = True
        try:
            await remove(DeleteIntent(self.id))
        finally:
            self.is_deleting = False
        return True
