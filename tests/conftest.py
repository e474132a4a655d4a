"""
Root Pytest Fixtures.

Shared fixtures available to all test types. Everything runs against
in-memory media and a controllable clock; nothing touches the real
storage directory.
"""

import threading
import time

import pytest

from notekeeper.core.exceptions import WriteError
from notekeeper.repositories.note import NoteStore
from notekeeper.schemas.note import Note
from notekeeper.services.workspace import NotesWorkspace
from notekeeper.storage.medium import MemoryMedium
from notekeeper.storage.synchronizer import PersistenceSynchronizer


# =============================================================================
# Test Doubles
# =============================================================================


class FakeClock:
    """Clock returning a fixed epoch-ms value until moved."""

    def __init__(self, start: int = 1_000) -> None:
        self.value = start

    def __call__(self) -> int:
        return self.value

    def advance(self, ms: int = 1) -> int:
        self.value += ms
        return self.value


class FailingMedium(MemoryMedium):
    """Medium whose writes fail while `failing` is set."""

    def __init__(self, error: Exception | None = None) -> None:
        super().__init__()
        self.failing = True
        self.error = error or WriteError("Quota exceeded")
        self.attempts = 0

    def set(self, key: str, value: str) -> None:
        self.attempts += 1
        if self.failing:
            raise self.error
        super().set(key, value)


class RecordingMedium(MemoryMedium):
    """Medium that keeps every value written and can slow writes down."""

    def __init__(self, delay: float = 0.0) -> None:
        super().__init__()
        self.delay = delay
        self.writes: list[str] = []
        self.threads: set[str] = set()
        self.closed = False

    def set(self, key: str, value: str) -> None:
        if self.delay:
            time.sleep(self.delay)
        self.threads.add(threading.current_thread().name)
        self.writes.append(value)
        super().set(key, value)

    def close(self) -> None:
        self.closed = True


# =============================================================================
# Core Fixtures
# =============================================================================


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def medium() -> MemoryMedium:
    return MemoryMedium()


@pytest.fixture
def synchronizer(medium: MemoryMedium, clock: FakeClock) -> PersistenceSynchronizer:
    return PersistenceSynchronizer(medium, clock=clock)


@pytest.fixture
def store(synchronizer: PersistenceSynchronizer, clock: FakeClock) -> NoteStore:
    return NoteStore(synchronizer, clock=clock)


@pytest.fixture
def workspace(synchronizer: PersistenceSynchronizer, clock: FakeClock) -> NotesWorkspace:
    ws = NotesWorkspace(synchronizer, clock=clock)
    ws.open()
    return ws


@pytest.fixture
def make_note():
    """
    Factory for committed notes.

    Usage:
        def test_x(make_note):
            note = make_note("a", title="Groceries", updated_at=300)
    """

    def _make(
        note_id: str,
        title: str = "Note",
        content: str = "",
        created_at: int = 100,
        updated_at: int | None = None,
    ) -> Note:
        return Note(
            id=note_id,
            title=title,
            content=content,
            created_at=created_at,
            updated_at=updated_at if updated_at is not None else created_at,
        )

    return _make


@pytest.fixture
def failing_medium() -> FailingMedium:
    return FailingMedium()


@pytest.fixture
def recording_medium() -> RecordingMedium:
    return RecordingMedium()
