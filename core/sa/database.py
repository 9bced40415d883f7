# core/sa/database.py
import logging
import os
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import NullPool

from core.sa.models import Base

logger = logging.getLogger(__name__)

DEFAULT_DATABASE_URL = "sqlite:///books.db"

class Database:
    """Engine and session factory for the catalog tables."""

    def __init__(self, connection_string: Optional[str] = None, **engine_kwargs):
        """Create the engine for a catalog database.

        Args:
            connection_string: SQLAlchemy URL. Defaults to the DATABASE_URL
                environment variable, then a books.db file in the working directory
            engine_kwargs: Extra keyword arguments for create_engine
        """
        self.connection_string = connection_string or os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)
        self.url = make_url(self.connection_string)
        self.is_sqlite = self.url.get_backend_name() == "sqlite"

        if self.is_sqlite:
            # Sessions are opened from worker threads by the local store
            engine_kwargs.setdefault("connect_args", {"check_same_thread": False})
            engine_kwargs.setdefault("poolclass", NullPool)
        else:
            engine_kwargs.setdefault("pool_pre_ping", True)

        self.engine = create_engine(self.url, **engine_kwargs)
        self._SessionFactory = sessionmaker(autoflush=False, bind=self.engine)

    @property
    def display_url(self) -> str:
        """The connection URL with any password masked"""
        return self.url.render_as_string(hide_password=True)

    @contextmanager
    def get_db(self) -> Iterator[Session]:
        """Session scope that commits on success and rolls back on error"""
        session: Session = self._SessionFactory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def init_db(self) -> None:
        """Create the catalog tables if they do not exist.

        For a file-backed SQLite database the parent directory is created too.
        """
        if self.is_sqlite and self.url.database and self.url.database != ":memory:":
            Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Creating catalog tables in %s", self.display_url)
        Base.metadata.create_all(self.engine)

    def get_session(self) -> Session:
        return self._SessionFactory()

    def dispose(self) -> None:
        self.engine.dispose()


# Shared instance used by the API
db = Database()

def configure(connection_string: str) -> Database:
    """Point the API at another database.

    The URL is also exported as DATABASE_URL so server processes started
    later (uvicorn reload workers) pick up the same database.
    """
    global db
    os.environ["DATABASE_URL"] = connection_string
    db.dispose()
    db = Database(connection_string)
    return db

def get_db() -> Iterator[Session]:
    """FastAPI dependency yielding one session per request.

    Route handlers commit through the repository; the session is closed
    when the response is done.
    """
    session = db.get_session()
    try:
        yield session
    finally:
        session.close()
