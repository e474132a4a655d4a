"""
Durable Media.

A durable medium is any object with ``get(key)`` and ``set(key, value)``
over strings. ``set`` always replaces the whole value.

Implementations:
    MemoryMedium - dict-backed, for tests and throwaway sessions
    FileMedium   - one file per key inside a directory
    SqlMedium    - rows in a SQLite table (see notekeeper.storage.sql)
"""

import os
import tempfile
from pathlib import Path
from typing import Protocol, runtime_checkable
from urllib.parse import quote

from notekeeper.core.exceptions import WriteError
from notekeeper.core.logging import get_logger

logger = get_logger(__name__)


@runtime_checkable
class DurableMedium(Protocol):
    """String key-value store the synchronizer reads and writes."""

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key was never written."""
        ...

    def set(self, key: str, value: str) -> None:
        """Replace the stored value. Raises WriteError when rejected."""
        ...


class MemoryMedium:
    """In-process medium. Contents are lost when the object goes away."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def close(self) -> None:
        pass


class FileMedium:
    """
    Directory-backed medium.

    Each key maps to one UTF-8 file named after the percent-encoded key.
    Writes go to a temporary file that is then renamed over the target,
    so readers never see a half-written value.
    """

    def __init__(self, directory: str | Path) -> None:
        self.directory = Path(directory)

    def _path_for(self, key: str) -> Path:
        return self.directory / quote(key, safe="")

    def get(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        target = self._path_for(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=".tmp-")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, target)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            logger.error(
                "File write failed",
                extra={"path": str(target), "error": str(e)},
            )
            raise WriteError(f"Could not write {target}: {e}", key=key) from e

    def close(self) -> None:
        pass
