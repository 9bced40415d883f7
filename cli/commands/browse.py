import click
from typing import Optional

from core.catalog.controller import LibraryController
from core.catalog.intents import BackIntent
from core.catalog.screens import BookDetailScreen, BookFormScreen, LibraryScreen
from core.catalog.views import AddFormView, DetailView, EditFormView, LibraryView
from core.errors import CatalogError
from core.models.book import GENRES, ReadingStatus, MAX_RATING
from ..utils import STATUS_CHOICES, render_detail, render_errors, render_library, run_with_controller

LIBRARY_HELP = "Enter a book id, [a]dd, [/text] search, [s]tatus filter, [c]lear filters, [q]uit"
CLEAR = "-"

class BrowseSession:
    """Interactive loop that renders the controller's current view.

    Failed actions are reported and the session stays on the same view.
    """

    def __init__(self, controller: LibraryController):
        self.controller = controller
        self.search = ""
        self.status: Optional[ReadingStatus] = None
        self.running = True

    async def run(self) -> None:
        while self.running:
            view = self.controller.view
            click.echo("")
            try:
                if isinstance(view, LibraryView):
                    await self.library()
                elif isinstance(view, AddFormView):
                    await self.form(BookFormScreen(mode='add'))
                elif isinstance(view, EditFormView):
                    await self.form(BookFormScreen.for_book(view.book))
                elif isinstance(view, DetailView):
                    await self.detail(BookDetailScreen(view.id, view.book))
            except CatalogError as e:
                click.echo(click.style(f"Error: {e}", fg='red'), err=True)

    async def library(self) -> None:
        screen = LibraryScreen(self.controller.books, search=self.search, status=self.status)
        render_library(screen)
        command = click.prompt(click.style(LIBRARY_HELP, fg='blue'), default='', show_default=False).strip()

        if command in ('q', 'quit'):
            self.running = False
        elif command == 'a':
            await self.controller.dispatch(screen.add())
        elif command.startswith('/'):
            self.search = command[1:]
        elif command == 's':
            choice = click.prompt("Status", type=click.Choice(['all'] + STATUS_CHOICES), default='all')
            self.status = None if choice == 'all' else ReadingStatus(choice)
        elif command == 'c':
            self.search, self.status = "", None
        elif command.isdigit():
            try:
                await self.controller.dispatch(screen.select(int(command)))
            except KeyError:
                click.echo(click.style(f"No book with id {command}", fg='yellow'))

    def prompt_fields(self, form: BookFormScreen) -> None:
        """Prompt for every field, offering the form's current values.

        Enter keeps a value; for optional fields a single "-" clears it.
        """
        for name in ('title', 'author', 'genre', 'cover_url', 'notes'):
            label = name.replace('_', ' ').capitalize()
            current = str(form.fields[name])
            optional = name not in ('title', 'author')
            if optional and current:
                label += f" ({CLEAR} to clear)"
            value = click.prompt(label, default=current, show_default=bool(current))
            if optional and value.strip() == CLEAR:
                value = ''
            form.set(name, value)
        status = click.prompt("Status", type=click.Choice(STATUS_CHOICES),
                              default=ReadingStatus(form.fields['status']).value)
        form.set('status', ReadingStatus(status))
        form.set('rating', click.prompt("Rating", type=click.IntRange(0, MAX_RATING),
                                        default=form.fields['rating']))

    async def form(self, form: BookFormScreen) -> None:
        click.echo(click.style(form.heading, fg='blue', bold=True))
        click.echo(click.style("Genres: " + ", ".join(GENRES), fg='blue'))
        # The same form is reused on retry so typed values are kept
        while True:
            self.prompt_fields(form)
            if not click.confirm("Save this book?", default=True):
                await self.controller.dispatch(form.cancel())
                return
            if await form.submit(self.controller.dispatch):
                break
            render_errors(form)
            if not click.confirm("Try again?", default=True):
                await self.controller.dispatch(BackIntent())
                return
        click.echo(click.style("Book added to your library" if form.mode == 'add' else "Book updated", fg='green'))

    async def detail(self, screen: BookDetailScreen) -> None:
        render_detail(screen)
        command = click.prompt(click.style("[e]dit, [d]elete, [b]ack", fg='blue'),
                               type=click.Choice(['e', 'd', 'b']), default='b', show_choices=False)
        if command == 'e':
            await self.controller.dispatch(screen.edit())
        elif command == 'd':
            if click.confirm(f"Remove '{screen.book.title}' from your library?"):
                await screen.delete(self.controller.dispatch)
                click.echo(click.style("Book removed from library", fg='green'))
        else:
            await self.controller.dispatch(screen.back())

@click.command()
@click.pass_obj
def browse(obj):
    """Browse and edit the library interactively"""
    async def action(controller: LibraryController):
        await BrowseSession(controller).run()

    run_with_controller(obj, action)
