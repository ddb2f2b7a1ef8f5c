"""Database configuration and session management for SQLite.

The engine is configured for a small web API where every request runs
in its own short transaction.

SQLite Configuration Choices:
    - **WAL (Write-Ahead Logging)**: readers are not blocked while a
      timetable cell or a login state is being written.

    - **Foreign Keys**: disabled by default in SQLite. Enabled so that
      timetable cells cannot outlive or precede their user.

    - **check_same_thread=False**: FastAPI may hand a session created in
      one thread to a handler running in another.
"""

import logging
from contextlib import contextmanager

from sqlalchemy import event as sa_event
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from app.core.config import settings
from app.core.exceptions import UpstreamFailureError

logger = logging.getLogger(__name__)

connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    echo=settings.debug,  # Log SQL statements when DEBUG=true
)


@sa_event.listens_for(engine, "connect")
def set_sqlite_pragma(dbapi_connection, connection_record):
    """Configure SQLite pragmas on each new connection.

    These settings are connection-level, not database-level, so they must
    be set each time a new connection is established from the pool.
    """
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA journal_mode=WAL")
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_and_tables():
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


def get_session():
    """Dependency for getting database session."""
    with Session(engine) as session:
        yield session


@contextmanager
def storage_errors(session: Session, action: str):
    """Roll back and raise UpstreamFailureError when a statement in the block fails."""
    try:
        yield
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"Database error while {action}: {e}")
        raise UpstreamFailureError("Storage is unavailable") from e


def commit(session: Session) -> None:
    """Commit the session, rolling back and raising UpstreamFailureError on failure."""
    with storage_errors(session, "committing"):
        session.commit()
