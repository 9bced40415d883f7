import click
from typing import Optional

from core.catalog.controller import LibraryController
from core.catalog.screens import BookDetailScreen, BookFormScreen, LibraryScreen
from core.models.book import ReadingStatus, MAX_RATING
from core.utils.image import CoverDownloader
from ..utils import (
    STATUS_CHOICES, apply_fields, render_detail, render_errors, render_library,
    require_entry, run_with_controller
)

rating_option = click.option('--rating', type=click.IntRange(0, MAX_RATING), default=None,
                             help='Rating from 0 (not rated) to 5')
status_option = click.option('--status', type=click.Choice(STATUS_CHOICES), default=None,
                             help='Reading status')

@click.group()
def book():
    """Book catalog commands"""
    pass

@book.command(name='list')
@click.option('--search', default='', help='Case-insensitive match on title or author')
@status_option
@click.pass_obj
def list_books(obj, search: str, status: Optional[str]):
    """List the library, newest first

    Example:
        catalog book list
        catalog book list --search dune --status read
    """
    async def action(controller: LibraryController):
        screen = LibraryScreen(
            controller.books,
            search=search,
            status=ReadingStatus(status) if status else None
        )
        render_library(screen)

    run_with_controller(obj, action)

@book.command()
@click.argument('book_id', type=int)
@click.pass_obj
def show(obj, book_id: int):
    """Show every field of one book"""
    async def action(controller: LibraryController):
        entry = require_entry(controller, book_id)
        controller.navigate_to_detail(entry.id, entry.book)
        view = controller.view
        render_detail(BookDetailScreen(view.id, view.book))

    run_with_controller(obj, action)

@book.command()
@click.option('--title', required=True, help='Book title')
@click.option('--author', required=True, help='Book author')
@click.option('--genre', default=None, help='Genre, e.g. "Science Fiction"')
@status_option
@rating_option
@click.option('--cover-url', default=None, help='URL of a cover image')
@click.option('--notes', default=None, help='Free-form notes')
@click.pass_obj
def add(obj, title, author, genre, status, rating, cover_url, notes):
    """Add a book to the library

    Example:
        catalog book add --title Dune --author Herbert
        catalog book add --title Dune --author Herbert --status read --rating 5
    """
    async def action(controller: LibraryController):
        controller.navigate_to_add()
        form = BookFormScreen(mode='add')
        apply_fields(form, {
            'title': title, 'author': author, 'genre': genre, 'status': status,
            'rating': rating, 'cover_url': cover_url, 'notes': notes,
        })
        if not await form.submit(controller.dispatch):
            render_errors(form)
            raise click.exceptions.Exit(1)
        click.echo(click.style("Book added to your library", fg='green'))

    run_with_controller(obj, action)

@book.command()
@click.argument('book_id', type=int)
@click.option('--title', default=None, help='Book title')
@click.option('--author', default=None, help='Book author')
@click.option('--genre', default=None, help='Genre')
@status_option
@rating_option
@click.option('--cover-url', default=None, help='URL of a cover image, empty to clear')
@click.option('--notes', default=None, help='Free-form notes')
@click.pass_obj
def edit(obj, book_id, title, author, genre, status, rating, cover_url, notes):
    """Change fields of a book, keeping its date added

    Example:
        catalog book edit 3 --rating 5 --status read
    """
    async def action(controller: LibraryController):
        entry = require_entry(controller, book_id)
        controller.navigate_to_edit(entry.id, entry.book)
        form = BookFormScreen.for_book(controller.view.book)
        apply_fields(form, {
            'title': title, 'author': author, 'genre': genre, 'status': status,
            'rating': rating, 'cover_url': cover_url, 'notes': notes,
        })
        if not await form.submit(controller.dispatch):
            render_errors(form)
            raise click.exceptions.Exit(1)
        click.echo(click.style("Book updated", fg='green'))

    run_with_controller(obj, action)

@book.command()
@click.argument('book_id', type=int)
@click.option('--yes', is_flag=True, help='Do not ask for confirmation')
@click.pass_obj
def delete(obj, book_id: int, yes: bool):
    """Remove a book from the library"""
    async def action(controller: LibraryController):
        entry = require_entry(controller, book_id)
        if not yes and not click.confirm(f"Remove '{entry.book.title}' from your library?"):
            click.echo("Cancelled")
            return
        controller.navigate_to_detail(entry.id, entry.book)
        await BookDetailScreen(entry.id, entry.book).delete(controller.dispatch)
        click.echo(click.style("Book removed from library", fg='green'))

    run_with_controller(obj, action)

@book.command()
@click.argument('book_id', type=int)
@click.option('--output-dir', default=None, help='Directory for cover files (default: $CATALOG_COVERS_DIR or data/covers)')
@click.option('--force/--no-force', default=False, help='Overwrite an existing cover file')
@click.pass_obj
def cover(obj, book_id: int, output_dir: Optional[str], force: bool):
    """Download a book's cover image as a JPEG"""
    async def action(controller: LibraryController):
        return require_entry(controller, book_id)

    entry = run_with_controller(obj, action)
    if not entry.book.cover_url:
        raise click.ClickException(f"Book {book_id} has no cover URL")
    success, path = CoverDownloader(output_dir).download(entry.book.cover_url, str(book_id), force_update=force)
    if not success:
        raise click.ClickException(f"Could not download cover for book {book_id}")
    click.echo(click.style("Saved cover to ", fg='blue') + click.style(path, fg='cyan'))
