# tests/test_book_repository.py
import pytest

from core.errors import NotFoundError
from core.models.book import ReadingStatus
from core.sa.models import Book as BookRow
from conftest import NOON, DAY


def test_add_and_get_book(book_repo, make_book):
    book = make_book(genre="Science Fiction", notes="Spice", cover_url="https://example.com/d.jpg")
    book_id = book_repo.add_book(book)
    assert book_id is not None
    assert book_repo.get_book(book_id) == book

def test_get_nonexistent_book(book_repo):
    with pytest.raises(NotFoundError) as exc_info:
        book_repo.get_book(999)
    assert exc_info.value.book_id == 999

def test_get_by_nonexistent_id(book_repo):
    assert book_repo.get_by_id(999) is None

def test_get_all_books_in_insertion_order(book_repo, make_book):
    first = book_repo.add_book(make_book("Dune", date_added=NOON + DAY))
    second = book_repo.add_book(make_book("Emma", "Austen", date_added=NOON))
    rows = book_repo.get_all_books()
    assert [book_id for book_id, _ in rows] == [first, second]
    assert rows[1][1].title == "Emma"

def test_identifiers_are_unique(book_repo, make_book):
    ids = {book_repo.add_book(make_book(f"Book {i}")) for i in range(5)}
    assert len(ids) == 5
    assert book_repo.count_books() == 5

def test_identifiers_not_reused_after_delete(book_repo, make_book):
    first = book_repo.add_book(make_book("Dune"))
    second = book_repo.add_book(make_book("Emma", "Austen"))
    book_repo.delete_book(second)
    third = book_repo.add_book(make_book("Ulysses", "Joyce"))
    assert third > second > first

def test_update_book_replaces_fields(book_repo, make_book):
    book_id = book_repo.add_book(make_book())
    updated = make_book(rating=5, status=ReadingStatus.READ, notes="Reread")
    book_repo.update_book(book_id, updated)
    stored = book_repo.get_book(book_id)
    assert stored.rating == 5
    assert stored.status == ReadingStatus.READ
    assert stored.notes == "Reread"

def test_update_book_keeps_date_added(book_repo, make_book):
    book_id = book_repo.add_book(make_book(date_added=NOON))
    book_repo.update_book(book_id, make_book(rating=3, date_added=NOON + DAY))
    stored = book_repo.get_book(book_id)
    assert stored.rating == 3
    assert stored.date_added == NOON

def test_update_only_touches_target(book_repo, make_book):
    dune = book_repo.add_book(make_book("Dune"))
    emma = book_repo.add_book(make_book("Emma", "Austen"))
    book_repo.update_book(dune, make_book("Dune Messiah"))
    assert book_repo.get_book(emma).title == "Emma"

def test_update_nonexistent_book(book_repo, make_book):
    with pytest.raises(NotFoundError):
        book_repo.update_book(999, make_book())

def test_delete_book(book_repo, make_book):
    book_id = book_repo.add_book(make_book())
    book_repo.delete_book(book_id)
    assert book_repo.get_all_books() == []
    with pytest.raises(NotFoundError):
        book_repo.get_book(book_id)

def test_delete_nonexistent_book(book_repo):
    with pytest.raises(NotFoundError):
        book_repo.delete_book(999)

def test_book_table_layout():
    table = BookRow.__table__
    assert set(table.columns.keys()) == {
        "id", "title", "author", "genre", "notes", "rating", "cover_url", "status", "date_added",
    }
    check_names = {constraint.name for constraint in table.constraints if constraint.name and constraint.name.startswith("ck_")}
    assert check_names == {"ck_book_rating_range", "ck_book_status_value"}
