"""
Shared Dependencies.

Builds configured storage and workspaces for entry points. Library code
takes its collaborators as arguments; only entry points read config.
"""

from pathlib import Path

from notekeeper.core.config import get_app_config, get_storage_path
from notekeeper.core.logging import get_logger
from notekeeper.services.workspace import Confirm, NotesWorkspace, always_confirm
from notekeeper.storage.medium import DurableMedium, FileMedium, MemoryMedium
from notekeeper.storage.sql import SqlMedium, sqlite_url
from notekeeper.storage.synchronizer import PersistenceSynchronizer

logger = get_logger(__name__)


def build_medium(backend: str, path: Path) -> DurableMedium:
    """
    Create the durable medium for a backend name.

    Args:
        backend: One of memory, file, sqlite
        path: Directory for file, database file for sqlite

    Raises:
        ValueError: If the backend name is unknown
    """
    if backend == "memory":
        return MemoryMedium()
    if backend == "file":
        return FileMedium(path)
    if backend == "sqlite":
        path.parent.mkdir(parents=True, exist_ok=True)
        return SqlMedium(sqlite_url(str(path)))
    raise ValueError(f"Unknown storage backend: {backend}")


def build_synchronizer(
    backend: str | None = None,
    path: Path | None = None,
) -> PersistenceSynchronizer:
    """Synchronizer for storage.yaml, with optional backend/path overrides."""
    storage = get_app_config().storage
    effective_backend = backend or storage.backend
    effective_path = path or get_storage_path()
    logger.debug(
        "Building storage",
        extra={"backend": effective_backend, "path": str(effective_path)},
    )
    return PersistenceSynchronizer(
        build_medium(effective_backend, effective_path),
        storage.key,
        legacy_keys=storage.legacy_keys,
        deferred=storage.deferred_writes,
    )


def build_workspace(
    backend: str | None = None,
    path: Path | None = None,
    confirm: Confirm = always_confirm,
) -> NotesWorkspace:
    """Create and open a workspace wired from configuration."""
    notes = get_app_config().notes
    workspace = NotesWorkspace(
        build_synchronizer(backend, path),
        confirm=confirm,
        placeholder_title=notes.placeholder_title,
        preview_length=notes.preview_length,
    )
    workspace.open()
    return workspace
