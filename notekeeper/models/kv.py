"""
Key-Value Entry Model.

Backing table for the SQLite durable medium. Each row holds one
persisted blob under its storage key.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from notekeeper.models.base import Base, WrittenAtMixin


class KeyValueEntry(WrittenAtMixin, Base):
    """
    Durable key-value entry.

    The value is replaced wholesale on every write; there are no
    partial updates.
    """

    __tablename__ = "kv_entries"

    key: Mapped[str] = mapped_column(
        String(255),
        primary_key=True,
    )
    value: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<KeyValueEntry(key={self.key!r}, size={len(self.value)})>"
