"""
SQLAlchemy Base Model.

Declarative base for the tables behind the SQLite durable medium.
Timestamps are epoch milliseconds, the same unit notes use.
"""

from sqlalchemy import BigInteger, MetaData
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from notekeeper.core.utils import now_ms

NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "pk": "pk_%(table_name)s",
}


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)


class WrittenAtMixin:
    """Mixin recording when a row was first and last written, in epoch ms."""

    created_ms: Mapped[int] = mapped_column(
        BigInteger,
        default=now_ms,
        nullable=False,
    )
    written_ms: Mapped[int] = mapped_column(
        BigInteger,
        default=now_ms,
        onupdate=now_ms,
        nullable=False,
    )
