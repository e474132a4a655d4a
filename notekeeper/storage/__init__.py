"""
Storage.

Codec for the persisted note collection, durable media, and the
synchronizer that keeps the medium in step with the note store.
"""

from notekeeper.storage.medium import DurableMedium, FileMedium, MemoryMedium
from notekeeper.storage.synchronizer import DEFAULT_STORAGE_KEY, PersistenceSynchronizer

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "DurableMedium",
    "FileMedium",
    "MemoryMedium",
    "PersistenceSynchronizer",
]
