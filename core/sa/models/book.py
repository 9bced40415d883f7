# core/sa/models/book.py
from sqlalchemy import BigInteger, Integer, String, Text, CheckConstraint, Index
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base

class Book(Base):
    __tablename__ = 'book'

    id: Mapped[int] = mapped_column(BigInteger().with_variant(Integer, "sqlite"), primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(500), nullable=False)
    author: Mapped[str] = mapped_column(String(500), nullable=False)
    genre: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    rating: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cover_url: Mapped[str | None] = mapped_column(String, nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="wantToRead")
    # Milliseconds since the epoch, written once on insert
    date_added: Mapped[int] = mapped_column(BigInteger, nullable=False)

    __table_args__ = (
        CheckConstraint('rating >= 0 AND rating <= 5', name='rating_range'),
        CheckConstraint("status IN ('wantToRead', 'reading', 'read')", name='status_value'),

        # Listing and search indexes
        Index('idx_book_date_added', 'date_added'),
        Index('idx_book_title', 'title'),
        Index('idx_book_author', 'author'),
        Index('idx_book_status', 'status'),

        # Identifiers are never reused after a delete
        {'sqlite_autoincrement': True}
    )

    def __repr__(self) -> str:
        return f"<Book(id={self.id}, title='{self.title}')>"
