"""Database engine and session factory construction.

This module handles ONLY connection setup and schema creation.
Queries live in ``drill_store.client``.
"""

from __future__ import annotations

import logging

from sqlalchemy import create_engine, event, inspect
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from drill_store.schema import Base

logger = logging.getLogger(__name__)


def make_engine(url: str, echo: bool = False) -> Engine:
    """Create an engine for *url*.

    SQLite engines enforce foreign keys; in-memory SQLite shares one
    connection so every session sees the same database.
    """
    if url.startswith("sqlite"):
        kwargs: dict = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            kwargs["poolclass"] = StaticPool
        engine = create_engine(url, echo=echo, **kwargs)
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
        return engine

    return create_engine(
        url,
        pool_size=5,
        max_overflow=10,
        pool_pre_ping=True,  # Verify connections before use
        echo=echo,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False)


def init_db(engine: Engine) -> None:
    """Create any missing tables. Safe to call repeatedly."""
    existing = set(inspect(engine).get_table_names())
    missing = set(Base.metadata.tables) - existing
    if missing:
        Base.metadata.create_all(engine)
        logger.info("Created tables: %s", ", ".join(sorted(missing)))


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()
