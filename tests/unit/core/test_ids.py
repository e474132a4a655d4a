"""Unit tests for notekeeper.core.ids."""

import re
import uuid
from unittest.mock import patch

import pytest

import notekeeper.core.ids as ids_module
from notekeeper.core.ids import new_id


@pytest.fixture(autouse=True)
def _reset_fallback_clock(monkeypatch):
    monkeypatch.setattr(ids_module, "_last_ms", 0)


class TestNewId:
    """Tests for the default entropy-backed path."""

    def test_returns_uuid_string(self):
        """Should return a parseable UUID4 string."""
        value = new_id()

        assert isinstance(value, str)
        assert uuid.UUID(value).version == 4

    def test_ids_do_not_repeat(self):
        """Should never repeat across many calls."""
        values = [new_id() for _ in range(2000)]

        assert len(set(values)) == len(values)


class TestFallbackId:
    """Tests for the path used when the OS has no entropy source."""

    def test_falls_back_when_uuid4_unavailable(self):
        """Should build a note_<ms>_<hex> id when uuid4 cannot run."""
        with patch("notekeeper.core.ids.uuid.uuid4", side_effect=NotImplementedError):
            value = new_id()

        assert re.fullmatch(r"note_\d+_[0-9a-f]{16}", value)

    def test_fallback_ids_are_unique(self):
        """Should stay unique even when the clock does not move."""
        with patch("notekeeper.core.ids.uuid.uuid4", side_effect=NotImplementedError), \
                patch("notekeeper.core.ids.now_ms", return_value=5_000):
            values = [new_id() for _ in range(500)]

        assert len(set(values)) == len(values)

    def test_fallback_timestamp_never_decreases(self):
        """A clock moving backwards should not lower the timestamp part."""
        with patch("notekeeper.core.ids.uuid.uuid4", side_effect=NotImplementedError), \
                patch("notekeeper.core.ids.now_ms", side_effect=[2_000, 1_000, 3_000]):
            stamps = [int(new_id().split("_")[1]) for _ in range(3)]

        assert stamps == [2_000, 2_000, 3_000]
