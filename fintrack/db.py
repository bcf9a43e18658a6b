from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator, Iterator

from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, SQLModel, create_engine

from fintrack.config import get_settings
from fintrack.errors import DataAccessError

settings = get_settings()

# SQLite needs a special connect arg; others (e.g., Postgres) don't.
connect_args = {}
if settings.database_url.startswith("sqlite"):
    connect_args = {"check_same_thread": False}

engine = create_engine(
    settings.database_url,
    echo=False,  # set True to see SQL in console
    connect_args=connect_args,
)

logger = logging.getLogger("fintrack.db")
logger.info("DB URL in use: %s", engine.url)


def get_session() -> Generator[Session, None, None]:
    """FastAPI dependency: yields a database session and closes it afterwards."""
    with Session(engine) as session:
        yield session


def create_db_and_tables() -> None:
    """
    Create missing tables on startup.
    Alembic migrations remain the way to change an existing schema.
    """
    SQLModel.metadata.create_all(engine)


@contextmanager
def store_access(session: Session, action: str) -> Iterator[None]:
    """
    Run store reads/writes and turn any SQLAlchemy failure into DataAccessError.

    The pending unit of work is rolled back so the session stays usable;
    the original exception is logged with its traceback, never returned.
    """
    try:
        yield
    except SQLAlchemyError as exc:
        session.rollback()
        logger.exception("store failure while %s", action)
        raise DataAccessError() from exc
