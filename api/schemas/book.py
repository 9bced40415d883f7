# api/schemas/book.py
from pydantic import BaseModel, ConfigDict

from core.models.book import Book

class BookCreated(BaseModel):
    id: int

class BookEntrySchema(BaseModel):
    id: int
    book: Book

    model_config = ConfigDict(from_attributes=True)
