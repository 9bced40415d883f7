# tests/test_screens.py
import asyncio
import pytest

from core.catalog.intents import AddIntent, BackIntent, DeleteIntent, EditIntent, SaveIntent, ViewDetailIntent
from core.catalog.screens import BookDetailScreen, BookFormScreen, LibraryScreen
from core.errors import ValidationError
from core.models.book import BookEntry, ReadingStatus
from conftest import NOON


@pytest.fixture
def entries(make_book):
    return [
        BookEntry(1, make_book("Dune", "Frank Herbert", status=ReadingStatus.READ)),
        BookEntry(2, make_book("Children of Dune", "Frank Herbert", status=ReadingStatus.WANT_TO_READ)),
        BookEntry(3, make_book("Emma", "Jane Austen", status=ReadingStatus.READING)),
        BookEntry(4, make_book("Dune Notes", "Kevin Dunesmith", status=ReadingStatus.READING)),
    ]


# Library screen

def test_blank_search_shows_everything(entries):
    screen = LibraryScreen(entries, search="   ")
    assert screen.visible == entries
    assert not screen.is_filtered

def test_search_is_case_insensitive_over_title_and_author(entries):
    screen = LibraryScreen(entries, search="DUNE")
    assert [entry.id for entry in screen.visible] == [1, 2, 4]
    assert [entry.id for entry in LibraryScreen(entries, search="austen").visible] == [3]

def test_search_and_status_apply_together(entries):
    screen = LibraryScreen(entries, search="dune", status=ReadingStatus.READING)
    assert [entry.id for entry in screen.visible] == [4]

def test_status_filter_alone(entries):
    screen = LibraryScreen(entries, status=ReadingStatus.WANT_TO_READ)
    assert [entry.id for entry in screen.visible] == [2]

def test_stats_ignore_filters(entries):
    screen = LibraryScreen(entries, search="emma")
    assert screen.stats == {"total": 4, "reading": 2, "read": 1, "want": 1}

def test_count_label(entries):
    assert LibraryScreen(entries).count_label == "4 books cataloged"
    assert LibraryScreen(entries[:1]).count_label == "1 book cataloged"
    assert LibraryScreen([]).count_label == "0 books cataloged"

def test_empty_messages(entries):
    assert LibraryScreen(entries).empty_message is None
    assert LibraryScreen(entries, search="tolstoy").empty_message.startswith("No matches found")
    assert LibraryScreen([]).empty_message.startswith("Your library awaits")

def test_library_intents(entries):
    screen = LibraryScreen(entries)
    assert screen.add() == AddIntent()
    assert screen.select(3) == ViewDetailIntent(3, entries[2].book)
    with pytest.raises(KeyError):
        screen.select(99)


# Form screen

class SaveRecorder:
    def __init__(self, fail=False):
        self.intents = []
        self.fail = fail

    async def __call__(self, intent):
        self.intents.append(intent)
        if self.fail:
            raise RuntimeError("store down")


def test_validate_reports_each_missing_field():
    form = BookFormScreen()
    form.set("title", "   ")
    assert form.validate() == {"title": "Title is required", "author": "Author is required"}

def test_invalid_submit_never_saves():
    form = BookFormScreen()
    form.set("author", "Herbert")
    save = SaveRecorder()
    assert asyncio.run(form.submit(save)) is False
    assert save.intents == []
    assert form.errors == {"title": "Title is required"}

def test_draft_raises_validation_error():
    with pytest.raises(ValidationError) as exc_info:
        BookFormScreen().draft()
    assert set(exc_info.value.errors) == {"title", "author"}

def test_setting_a_field_clears_its_error():
    form = BookFormScreen()
    asyncio.run(form.submit(SaveRecorder()))
    form.set("title", "Dune")
    assert "title" not in form.errors
    assert "author" in form.errors

def test_submit_trims_fields():
    form = BookFormScreen()
    form.set("title", "  Dune  ")
    form.set("author", " Herbert ")
    form.set("genre", " Science Fiction ")
    form.set("notes", "  spice  ")
    form.set("cover_url", "   ")
    save = SaveRecorder()
    assert asyncio.run(form.submit(save)) is True

    (intent,) = save.intents
    assert isinstance(intent, SaveIntent)
    assert intent.draft.title == "Dune"
    assert intent.draft.author == "Herbert"
    assert intent.draft.genre == "Science Fiction"
    assert intent.draft.notes == "spice"
    assert intent.draft.cover_url is None
    assert intent.draft.status == ReadingStatus.WANT_TO_READ
    assert intent.draft.rating == 0

def test_saving_flag_and_duplicate_submit():
    form = BookFormScreen()
    form.set("title", "Dune")
    form.set("author", "Herbert")

    async def scenario():
        started = asyncio.Event()
        release = asyncio.Event()

        async def slow_save(intent):
            started.set()
            await release.wait()

        first = asyncio.create_task(form.submit(slow_save))
        await started.wait()
        assert form.is_saving
        assert await form.submit(slow_save) is False
        release.set()
        assert await first is True

    asyncio.run(scenario())
    assert not form.is_saving

def test_failed_save_clears_saving_flag():
    form = BookFormScreen()
    form.set("title", "Dune")
    form.set("author", "Herbert")
    with pytest.raises(RuntimeError):
        asyncio.run(form.submit(SaveRecorder(fail=True)))
    assert not form.is_saving

def test_edit_form_starts_from_book(make_book):
    book = make_book(genre="Science Fiction", rating=4, cover_url="https://example.com/d.jpg")
    form = BookFormScreen.for_book(book)
    assert form.mode == "edit"
    assert form.heading == "Edit Book"
    assert form.fields["rating"] == 4
    assert form.fields["cover_url"] == "https://example.com/d.jpg"
    assert form.draft() == book.draft()

def test_toggle_rating():
    form = BookFormScreen()
    form.toggle_rating(3)
    assert form.fields["rating"] == 3
    form.toggle_rating(3)
    assert form.fields["rating"] == 0
    with pytest.raises(ValueError):
        form.toggle_rating(6)

def test_unknown_field_rejected():
    with pytest.raises(KeyError):
        BookFormScreen().set("isbn", "123")

def test_cancel_goes_back():
    assert BookFormScreen().cancel() == BackIntent()


# Detail screen

def test_detail_labels(make_book):
    screen = BookDetailScreen(1, make_book(rating=0, status=ReadingStatus.READING, date_added=NOON))
    assert screen.formatted_date == "March 4, 2025"
    assert screen.rating_label == "Not rated"
    assert screen.status_label == "Reading"
    assert BookDetailScreen(1, make_book(rating=4)).rating_label == "4/5"

def test_detail_intents(make_book):
    book = make_book()
    screen = BookDetailScreen(5, book)
    assert screen.edit() == EditIntent(5, book)
    assert screen.back() == BackIntent()

def test_detail_delete(make_book):
    screen = BookDetailScreen(5, make_book())
    seen = []

    async def remove(intent):
        seen.append((intent, screen.is_deleting))

    assert asyncio.run(screen.delete(remove)) is True
    assert seen == [(DeleteIntent(5), True)]
    assert not screen.is_deleting
