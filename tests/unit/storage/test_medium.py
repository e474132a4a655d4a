"""Unit tests for the durable media adapters."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import Session

from notekeeper.core.exceptions import WriteError
from notekeeper.models.kv import KeyValueEntry
from notekeeper.storage.medium import DurableMedium, FileMedium, MemoryMedium
from notekeeper.storage.sql import SqlMedium, sqlite_url


class TestMemoryMedium:
    def test_absent_key_is_none(self):
        assert MemoryMedium().get("k") is None

    def test_set_replaces_value(self):
        medium = MemoryMedium()
        medium.set("k", "one")
        medium.set("k", "two")

        assert medium.get("k") == "two"

    def test_satisfies_protocol(self):
        assert isinstance(MemoryMedium(), DurableMedium)


class TestFileMedium:
    def test_absent_key_is_none(self, tmp_path):
        assert FileMedium(tmp_path).get("simple-notes.notes.v1") is None

    def test_round_trip_creates_directory(self, tmp_path):
        medium = FileMedium(tmp_path / "nested" / "notes")
        medium.set("simple-notes.notes.v1", '[{"id":"a"}]')

        assert medium.get("simple-notes.notes.v1") == '[{"id":"a"}]'

    def test_overwrite_leaves_no_temporary_files(self, tmp_path):
        medium = FileMedium(tmp_path)
        medium.set("k", "one")
        medium.set("k", "two")

        assert medium.get("k") == "two"
        assert [p.name for p in tmp_path.iterdir()] == ["k"]

    def test_keys_with_separators_stay_inside_directory(self, tmp_path):
        medium = FileMedium(tmp_path / "store")
        medium.set("../escape/key", "v")

        assert medium.get("../escape/key") == "v"
        assert not (tmp_path / "escape").exists()

    def test_unwritable_location_raises_write_error(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        medium = FileMedium(blocker / "notes")

        with pytest.raises(WriteError) as exc_info:
            medium.set("k", "v")

        assert exc_info.value.key == "k"


class TestSqlMedium:
    @pytest.fixture
    def medium(self):
        medium = SqlMedium("sqlite://")
        yield medium
        medium.close()

    def test_absent_key_is_none(self, medium):
        assert medium.get("k") is None

    def test_insert_then_replace(self, medium):
        medium.set("k", "one")
        medium.set("k", "two")

        assert medium.get("k") == "two"

    def test_keys_are_independent(self, medium):
        medium.set("a", "1")
        medium.set("b", "2")

        assert (medium.get("a"), medium.get("b")) == ("1", "2")

    def test_file_database_persists_across_instances(self, tmp_path):
        url = sqlite_url(str(tmp_path / "notes.db"))
        first = SqlMedium(url)
        first.set("k", "kept")
        first.close()

        second = SqlMedium(url)
        try:
            assert second.get("k") == "kept"
        finally:
            second.close()

    def test_satisfies_protocol(self, medium):
        assert isinstance(medium, DurableMedium)

    def test_rows_carry_write_stamps(self, tmp_path):
        url = sqlite_url(str(tmp_path / "notes.db"))
        medium = SqlMedium(url)
        medium.set("k", "one")
        medium.set("k", "two")
        medium.close()

        engine = create_engine(url)
        try:
            with Session(engine) as session:
                entry = session.get(KeyValueEntry, "k")
                assert entry.value == "two"
                assert 0 < entry.created_ms <= entry.written_ms
        finally:
            engine.dispose()
