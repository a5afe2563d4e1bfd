"""Database configuration for Taskboard.

This module provides the engine factory, table creation and a session scope
that translates SQLAlchemy failures into Taskboard errors.
"""

import logging
from contextlib import contextmanager
from typing import Iterator

from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from .errors import ConflictError, InternalError

# Import models so they're registered with SQLModel.metadata
from .models import Tag, Task  # noqa: F401

logger = logging.getLogger(__name__)


def _is_memory_sqlite(database_url: str) -> bool:
    url = make_url(database_url)
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def get_engine(database_url: str, echo: bool = False) -> Engine:
    """Create the engine shared by every store of one application.

    Sessions are opened per operation and a pooled SQLite connection may be
    handed to a different thread than the one that created it, so the
    same-thread check is disabled. In-memory databases live on a single
    connection.
    """
    kwargs = {"echo": echo}
    if make_url(database_url).get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if _is_memory_sqlite(database_url):
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def create_db_and_tables(engine: Engine) -> None:
    """Create all database tables."""
    SQLModel.metadata.create_all(engine)


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Open a short-lived session.

    Yields:
        Session: Database session

    Raises:
        ConflictError: A uniqueness constraint was violated
        InternalError: Any other storage failure
    """
    try:
        with Session(engine) as session:
            yield session
    except IntegrityError as e:
        logger.warning(f"Integrity error: {e.orig}")
        raise ConflictError(str(e.orig)) from e
    except SQLAlchemyError as e:
        logger.error(f"Database error: {e}")
        raise InternalError(str(e)) from e
