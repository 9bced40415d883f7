import click

from core.sa import database as sa_database
from core.sa.database import Database

@click.group()
def dev():
    """Development helper commands"""
    pass

@dev.command(name='init-db')
@click.pass_obj
def init_db(obj):
    """Create the catalog tables if they do not exist"""
    database = Database(obj.get('database_url'))
    database.init_db()
    click.echo(click.style("Initialized database: ", fg='blue') +
               click.style(database.display_url, fg='cyan'))

@dev.command()
@click.option('--host', default='127.0.0.1', help='Interface to bind')
@click.option('--port', default=8000, type=int, help='Port to listen on')
@click.option('--reload/--no-reload', default=False, help='Restart on code changes')
@click.pass_obj
def serve(obj, host: str, port: int, reload: bool):
    """Run the catalog API against the selected database"""
    import uvicorn

    if obj.get('database_url'):
        sa_database.configure(obj['database_url'])
    click.echo(click.style("Serving database: ", fg='blue') +
               click.style(sa_database.db.display_url, fg='cyan'))

    uvicorn.run(
        "api.main:app",
        host=host,
        port=port,
        reload=reload,
        reload_dirs=["api", "core"] if reload else None
    )
