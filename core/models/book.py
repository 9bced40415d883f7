# core/models/book.py

from datetime import datetime, UTC
from enum import Enum
from typing import NamedTuple, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

class ReadingStatus(str, Enum):
    WANT_TO_READ = "wantToRead"
    READING = "reading"
    READ = "read"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

STATUS_LABELS = {
    ReadingStatus.WANT_TO_READ: "Want to Read",
    ReadingStatus.READING: "Reading",
    ReadingStatus.READ: "Read",
}

# Suggestions offered by the form; genre itself stays free text
GENRES = [
    "Fiction",
    "Non-Fiction",
    "Mystery",
    "Science Fiction",
    "Fantasy",
    "Romance",
    "Thriller",
    "Biography",
    "History",
    "Self-Help",
    "Science",
    "Poetry",
    "Graphic Novel",
    "Children's",
    "Other",
]

MAX_RATING = 5

def now_millis() -> int:
    """Current wall-clock time as integer milliseconds since the epoch"""
    return int(datetime.now(UTC).timestamp() * 1000)

class BookDraft(BaseModel):
    """A book record without its ``date_added`` stamp.

    Field names are snake_case in Python; the wire format uses the camelCase
    aliases (``coverUrl``, ``dateAdded``).
    """
    model_config = ConfigDict(populate_by_name=True, frozen=True, str_strip_whitespace=True)

    title: str = Field(min_length=1)
    author: str = Field(min_length=1)
    genre: str = ""
    notes: str = ""
    rating: int = Field(default=0, ge=0, le=MAX_RATING)
    cover_url: Optional[str] = Field(default=None, alias="coverUrl")
    status: ReadingStatus = ReadingStatus.WANT_TO_READ

    @field_validator("cover_url")
    @classmethod
    def blank_cover_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def stamped(self, date_added: int) -> "Book":
        """Attach a creation timestamp, producing a full record"""
        return Book(**self.model_dump(exclude={"date_added"}), date_added=date_added)

class Book(BookDraft):
    date_added: int = Field(alias="dateAdded")

    def draft(self) -> BookDraft:
        return BookDraft(**self.model_dump(exclude={"date_added"}))

class BookEntry(NamedTuple):
    """Identifier/record pair held in the in-memory collection"""
    id: int
    book: Book
