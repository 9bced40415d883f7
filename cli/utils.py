import asyncio
import click
from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar

from core.catalog.controller import LibraryController
from core.catalog.screens import BookDetailScreen, BookFormScreen, LibraryScreen
from core.errors import CatalogError, NotFoundError, ValidationError
from core.models.book import BookEntry, ReadingStatus, MAX_RATING
from core.sa.database import Database
from core.store import BookStore, HttpBookStore, LocalBookStore

T = TypeVar("T")

STATUS_COLORS = {
    ReadingStatus.WANT_TO_READ: 'yellow',
    ReadingStatus.READING: 'cyan',
    ReadingStatus.READ: 'green',
}

STATUS_CHOICES = [status.value for status in ReadingStatus]

def open_store(obj: Dict[str, Any]) -> BookStore:
    """Create the store selected on the command line.

    The HTTP store is used when an API URL is configured, otherwise the
    local database (created on first use).
    """
    if obj.get('api_url'):
        return HttpBookStore(obj['api_url'])
    database = Database(obj.get('database_url'))
    database.init_db()
    return LocalBookStore(database)

def run_with_controller(obj: Dict[str, Any], action: Callable[[LibraryController], Awaitable[T]]) -> T:
    """Connect a controller, load the library and run ``action`` against it.

    Catalog errors are reported as a click error and a non-zero exit.
    """
    async def runner() -> T:
        store = open_store(obj)
        controller = LibraryController()
        controller.connect(store)
        try:
            await controller.load_books()
            return await action(controller)
        finally:
            await store.close()

    try:
        return asyncio.run(runner())
    except ValidationError as e:
        for field, message in e.errors.items():
            click.echo(click.style(f"{field}: {message}", fg='red'), err=True)
        raise click.exceptions.Exit(1)
    except CatalogError as e:
        raise click.ClickException(str(e))

def require_entry(controller: LibraryController, book_id: int) -> BookEntry:
    entry = controller.find(book_id)
    if entry is None:
        raise NotFoundError(book_id)
    return entry

def stars(rating: int) -> str:
    return "★" * rating + "☆" * (MAX_RATING - rating)

def status_badge(status: ReadingStatus) -> str:
    return click.style(status.label, fg=STATUS_COLORS[status])

def render_library(screen: LibraryScreen) -> None:
    """Print the library header, stats and the visible books"""
    click.echo(click.style("My Library", fg='blue', bold=True) + "  " +
               click.style(screen.count_label, fg='blue'))

    stats = screen.stats
    click.echo(
        f"Total {stats['total']} | " +
        click.style(f"Reading {stats['reading']}", fg='cyan') + " | " +
        click.style(f"Read {stats['read']}", fg='green') + " | " +
        click.style(f"Want {stats['want']}", fg='yellow')
    )

    filters = []
    if screen.search.strip():
        filters.append(f"search '{screen.search.strip()}'")
    if screen.status is not None:
        filters.append(f"status {screen.status.label}")
    if filters:
        click.echo(click.style("Filtered by " + ", ".join(filters), fg='blue'))

    click.echo("")
    if screen.empty_message:
        click.echo(click.style(screen.empty_message, fg='yellow'))
        return

    for entry in screen.visible:
        book = entry.book
        line = (click.style(f"[{entry.id}] ", fg='cyan') +
                click.style(book.title, bold=True) +
                f" by {book.author}  " +
                status_badge(book.status))
        if book.rating > 0:
            line += "  " + click.style(stars(book.rating), fg='yellow')
        click.echo(line)

def render_detail(screen: BookDetailScreen) -> None:
    """Print every field of a single book"""
    book = screen.book
    click.echo(click.style(book.title, bold=True) + click.style(f"  (#{screen.id})", fg='cyan'))
    click.echo(f"by {book.author}")
    click.echo("")
    click.echo(click.style("Status: ", fg='blue') + status_badge(book.status))
    click.echo(click.style("Genre: ", fg='blue') + (book.genre or "-"))
    rating = screen.rating_label
    if book.rating > 0:
        rating = f"{stars(book.rating)} {rating}"
    click.echo(click.style("Rating: ", fg='blue') + rating)
    click.echo(click.style("Date Added: ", fg='blue') + screen.formatted_date)
    if book.cover_url:
        click.echo(click.style("Cover: ", fg='blue') + book.cover_url)
    if book.notes:
        click.echo(click.style("Notes:", fg='blue'))
        click.echo(book.notes)

def render_errors(form: BookFormScreen) -> None:
    for field, message in form.errors.items():
        click.echo(click.style(f"{field}: {message}", fg='red'), err=True)

def apply_fields(form: BookFormScreen, values: Dict[str, Optional[Any]]) -> None:
    """Copy the non-None command line values into the form"""
    for name, value in values.items():
        if value is None:
            continue
        if name == 'status':
            value = ReadingStatus(value)
        form.set(name, value)
