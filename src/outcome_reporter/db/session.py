"""Database session management.

The task result store is reached through one engine per database URL,
created on first use and reused for the lifetime of the process.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Generator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from outcome_reporter.db.functions import install_sqlite_functions
from outcome_reporter.db.schema import Base

# Module-level engine cache for connection pooling
_engine_cache: dict[str, Engine] = {}

# Module-level session factory cache
_session_factory_cache: dict[str, sessionmaker] = {}


def get_engine(database_url: str) -> Engine:
    """Get SQLAlchemy engine for the task result store.

    Engines are cached by URL so every request shares one pool.
    SQLite engines get StaticPool, check_same_thread=False and the
    approx_percentile aggregate.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        SQLAlchemy engine instance (cached).
    """
    if database_url in _engine_cache:
        return _engine_cache[database_url]

    if database_url.startswith("sqlite"):
        engine = create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        install_sqlite_functions(engine)
    else:
        engine = create_engine(database_url, echo=False, pool_pre_ping=True)

    _engine_cache[database_url] = engine
    return engine


def get_session_factory(database_url: str) -> sessionmaker:
    """Get cached session factory for the database.

    Args:
        database_url: SQLAlchemy database URL.

    Returns:
        Cached sessionmaker instance.
    """
    if database_url in _session_factory_cache:
        return _session_factory_cache[database_url]

    factory = sessionmaker(bind=get_engine(database_url))
    _session_factory_cache[database_url] = factory

    return factory


@contextmanager
def session_scope(database_url: str) -> Generator[Session, None, None]:
    """Context manager for read-only sessions.

    Args:
        database_url: SQLAlchemy database URL.

    Yields:
        SQLAlchemy Session instance, closed on exit.
    """
    session = get_session_factory(database_url)()
    try:
        yield session
    finally:
        session.close()


def dispose_engine(database_url: str) -> None:
    """Close pooled connections and forget the engine.

    Called on application shutdown.

    Args:
        database_url: SQLAlchemy database URL.
    """
    _session_factory_cache.pop(database_url, None)
    engine = _engine_cache.pop(database_url, None)
    if engine is not None:
        engine.dispose()


def init_db(database_url: str) -> None:
    """Create the task result table.

    Only for tests and local development; production tables belong
    to the task execution system.

    Args:
        database_url: SQLAlchemy database URL.
    """
    Base.metadata.create_all(get_engine(database_url))
