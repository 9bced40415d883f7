# cli/main.py
import logging
import click
from .commands.book import book
from .commands.browse import browse
from .commands.dev import dev

@click.group()
@click.option('--api-url', envvar='CATALOG_API_URL', default=None,
              help='Catalog API root; the local database is used when unset')
@click.option('--database-url', envvar='DATABASE_URL', default=None,
              help='SQLAlchemy URL of the local database')
@click.option('--verbose/--no-verbose', default=False, help='Show debug logging')
@click.pass_context
def cli(ctx, api_url, database_url, verbose):
    """Book Catalog CLI"""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )
    ctx.obj = {
        'api_url': api_url,
        'database_url': database_url,
        'verbose': verbose,
    }

cli.add_command(book)
cli.add_command(browse)
cli.add_command(dev)

def main():
    """Entry point for the CLI"""
    cli()

if __name__ == '__main__':
    main()
