"""
SQLite Durable Medium.

Stores each key as a row of the kv_entries table through a synchronous
SQLAlchemy engine. In-memory URLs share one connection across threads so
the deferred writer sees the same database as the caller.
"""

from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from notekeeper.core.exceptions import WriteError
from notekeeper.core.logging import get_logger
from notekeeper.models.base import Base
from notekeeper.models.kv import KeyValueEntry

logger = get_logger(__name__)


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or ":memory:" in url


def sqlite_url(path: str) -> str:
    """Build a SQLite URL for a database file path."""
    return f"sqlite:///{path}"


class SqlMedium:
    """Durable medium backed by a SQL table."""

    def __init__(self, url: str, echo: bool = False) -> None:
        engine_kwargs: dict[str, Any] = {"echo": echo}
        if _is_memory_url(url):
            engine_kwargs.update(
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        self._engine = create_engine(url, **engine_kwargs)
        Base.metadata.create_all(self._engine)
        self._session_factory: sessionmaker[Session] = sessionmaker(
            self._engine,
            expire_on_commit=False,
        )
        logger.debug("SQL medium ready", extra={"url": url})

    def get(self, key: str) -> str | None:
        with self._session_factory() as session:
            entry = session.get(KeyValueEntry, key)
            return entry.value if entry is not None else None

    def set(self, key: str, value: str) -> None:
        """
        Insert or replace the row for key.

        Raises:
            WriteError: If the database rejects the write
        """
        try:
            with self._session_factory.begin() as session:
                entry = session.get(KeyValueEntry, key)
                if entry is None:
                    session.add(KeyValueEntry(key=key, value=value))
                else:
                    entry.value = value
        except SQLAlchemyError as e:
            logger.error(
                "Database write failed",
                extra={"key": key, "error": str(e)},
            )
            raise WriteError(f"Database write failed for {key}", key=key) from e

    def close(self) -> None:
        self._engine.dispose()
