"""
Database Access Module

Read-only access to the Goodreads book table through SQLAlchemy 2.0 Core.

There are no mapped classes here: the table is declared with Core's Table()
so statements can be built with select(), and rows come back as plain
dictionaries that are handed to the view layer.

Connection Pool
===============
The engine owns a bounded QueuePool:
- pool_size: DB_CONNECTION_LIMIT connections (default 4)
- max_overflow=0: never open more than pool_size
- pool_timeout: how long a request waits for a free connection
- pool_pre_ping: test connection health before using it

Each BookStore method checks out exactly one connection inside a
`with engine.connect()` block, runs one statement and hands the connection
back to the pool on every exit path, including errors.

The BookStore is created once at startup and stored on app.state; routes
receive it through a FastAPI dependency (see bookbrowser.dependencies), so
tests can build one around an in-memory SQLite engine.
"""

import logging
from typing import Any

from sqlalchemy import (
    Column,
    Engine,
    Float,
    Integer,
    MetaData,
    String,
    Table,
    Text,
    create_engine,
    event,
    select,
    text,
)
from sqlalchemy.exc import SQLAlchemyError

from bookbrowser.config import Settings

logger = logging.getLogger(__name__)

metadata = MetaData()

# =============================================================================
# Table Definition
# =============================================================================
# Mirrors the pre-existing goodreads.book2018 table. genres and authors hold
# "|"-joined lists; the view layer rewrites the delimiter before rendering.

books_table = Table(
    "book2018",
    metadata,
    Column("book_id", String(8), primary_key=True),
    Column("title", String(256), nullable=False, index=True),
    Column("authors", String(256)),
    Column("description", Text),
    Column("edition", String(256)),
    Column("format", String(256)),
    Column("pages", Integer),
    Column("rating", Float),
    Column("rating_count", Integer),
    Column("review_count", Integer),
    Column("genres", String(256)),
    Column("image_url", String(1024)),
    Column("official_site", String(1024)),
)


class DataAccessError(Exception):
    """Raised when a query cannot be completed (pool timeout, connectivity, SQL)."""


def create_db_engine(settings: Settings) -> Engine:
    """
    Create the SQLAlchemy engine described by the settings.

    For MySQL every new DBAPI connection gets its session time zone set to
    DB_TIMEZONE, so DATETIME/TIMESTAMP values are read in that offset.
    """
    engine = create_engine(
        settings.sqlalchemy_url,
        pool_size=settings.db_connection_limit,
        max_overflow=0,
        pool_timeout=settings.db_pool_timeout,
        pool_pre_ping=True,
        echo=settings.debug,
    )

    if engine.dialect.name == "mysql":
        timezone = settings.db_timezone

        @event.listens_for(engine, "connect")
        def set_session_timezone(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            try:
                cursor.execute("SET time_zone = %s", (timezone,))
            finally:
                cursor.close()

    return engine


# =============================================================================
# Data Store Adapter
# =============================================================================
class BookStore:
    """
    Parameterized read queries against the book table.

    Usage:
        store = BookStore.from_settings(get_settings())
        store.ping()
        rows = store.find_by_title_prefix("Dune%", limit=10, offset=0)
    """

    def __init__(self, engine: Engine) -> None:
        self.engine = engine

    @classmethod
    def from_settings(cls, settings: Settings) -> "BookStore":
        return cls(create_db_engine(settings))

    def ping(self) -> None:
        """
        Liveness ping: one round trip on one pooled connection.

        Raises:
            DataAccessError: If the database cannot be reached
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
        except SQLAlchemyError as exc:
            logger.error(f"Database ping failed: {exc}")
            raise DataAccessError(str(exc)) from exc

    def find_by_title_prefix(
        self,
        prefix: str,
        limit: int,
        offset: int,
    ) -> list[dict[str, Any]]:
        """
        Books whose title matches the LIKE pattern, ordered by title.

        The caller appends the "%" wildcard (q + "%"), so an empty query
        matches every book. Case sensitivity follows the column collation.

        Args:
            prefix: LIKE pattern, e.g. "Dune%"
            limit: Maximum number of rows to return
            offset: Number of rows to skip

        Returns:
            List of row dictionaries, empty when nothing matches

        Raises:
            DataAccessError: On pool timeout or query failure
        """
        stmt = (
            select(books_table)
            .where(books_table.c.title.like(prefix))
            .order_by(books_table.c.title)
            .limit(limit)
            .offset(offset)
        )
        try:
            with self.engine.connect() as conn:
                rows = conn.execute(stmt).mappings().all()
        except SQLAlchemyError as exc:
            logger.error(f"Title search failed for {prefix!r}: {exc}")
            raise DataAccessError(str(exc)) from exc

        return [dict(row) for row in rows]

    def find_by_id(self, book_id: str) -> dict[str, Any] | None:
        """
        Look up one book by its identifier.

        Returns:
            The row as a dictionary, or None if no book has this id

        Raises:
            DataAccessError: On pool timeout or query failure
        """
        stmt = select(books_table).where(books_table.c.book_id == book_id)
        try:
            with self.engine.connect() as conn:
                row = conn.execute(stmt).mappings().first()
        except SQLAlchemyError as exc:
            logger.error(f"Lookup failed for book {book_id!r}: {exc}")
            raise DataAccessError(str(exc)) from exc

        return dict(row) if row is not None else None

    def dispose(self) -> None:
        """Close all pooled connections."""
        self.engine.dispose()
