# api/routes/books.py

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session

from core.errors import NotFoundError
from core.models.book import Book
from core.sa.database import get_db
from core.sa.repositories.book import BookRepository
from api.schemas.book import BookCreated, BookEntrySchema

router = APIRouter(prefix="/books", tags=["books"])

def _not_found(e: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))

@router.get("", response_model=List[BookEntrySchema])
def get_all_books(db: Session = Depends(get_db)):
    """
    Get every book in the catalog as id/book pairs, in insertion order.
    Ordering for display is left to the client.
    """
    repo = BookRepository(db)
    return [
        BookEntrySchema(id=book_id, book=book)
        for book_id, book in repo.get_all_books()
    ]

@router.post("", response_model=BookCreated, status_code=status.HTTP_201_CREATED)
def add_book(book: Book, db: Session = Depends(get_db)):
    """
    Add a book. The identifier is assigned here; date_added is taken from
    the request as stamped by the client.
    """
    repo = BookRepository(db)
    return BookCreated(id=repo.add_book(book))

@router.get("/{book_id}", response_model=Book)
def get_book(book_id: int, db: Session = Depends(get_db)):
    repo = BookRepository(db)
    try:
        return repo.get_book(book_id)
    except NotFoundError as e:
        raise _not_found(e)

@router.put("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_book(book_id: int, book: Book, db: Session = Depends(get_db)):
    """
    Replace a book's fields. The stored date_added is never changed.
    """
    repo = BookRepository(db)
    try:
        repo.update_book(book_id, book)
    except NotFoundError as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.delete("/{book_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_book(book_id: int, db: Session = Depends(get_db)):
    repo = BookRepository(db)
    try:
        repo.delete_book(book_id)
    except NotFoundError as e:
        raise _not_found(e)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
