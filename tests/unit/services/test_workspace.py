"""
Unit Tests for the Notes Workspace.

Tests the facade end to end over an in-memory medium: hydration,
editing flow, confirmed deletes, search and view models.
"""

import pytest

from notekeeper.core.exceptions import WriteError
from notekeeper.core.utils import format_timestamp
from notekeeper.schemas.note import EditorState
from notekeeper.services.workspace import NotesWorkspace, always_confirm, delete_prompt
from notekeeper.storage.codec import decode, encode
from notekeeper.storage.synchronizer import DEFAULT_STORAGE_KEY, PersistenceSynchronizer


class ConfirmRecorder:
    def __init__(self, answer: bool) -> None:
        self.answer = answer
        self.messages: list[str] = []

    def __call__(self, message: str) -> bool:
        self.messages.append(message)
        return self.answer


class TestOpen:
    def test_empty_storage(self, workspace):
        assert workspace.visible_notes() == []
        assert workspace.editor_view() is None
        assert workspace.count_label() == "0 notes"

    def test_hydrates_and_selects_most_recent(self, medium, clock, make_note):
        medium.set(DEFAULT_STORAGE_KEY, encode([
            make_note("old", updated_at=100),
            make_note("new", updated_at=300),
        ]))
        ws = NotesWorkspace(PersistenceSynchronizer(medium, clock=clock), clock=clock)

        opened = ws.open()

        assert opened.id == "new"
        assert ws.editor.state is EditorState.CLEAN

    def test_open_does_not_rewrite_storage(self, medium, clock):
        medium.set(DEFAULT_STORAGE_KEY, "garbage")
        ws = NotesWorkspace(PersistenceSynchronizer(medium, clock=clock), clock=clock)

        ws.open()

        assert medium.get(DEFAULT_STORAGE_KEY) == "garbage"

    def test_without_synchronizer(self, clock):
        ws = NotesWorkspace(clock=clock)

        assert ws.open() is None
        ws.create_note("Scratch")
        ws.close()


class TestEditingScenario:
    def test_create_edit_save_delete(self, workspace, clock, medium):
        """Should walk a note through its whole lifecycle."""
        note = workspace.create_note()

        assert workspace.editor.selected_id == note.id
        assert workspace.editor.state is EditorState.CLEAN
        assert len(workspace.store) == 1

        assert workspace.edit_content("hello") is EditorState.DIRTY

        clock.advance(500)
        saved = workspace.save()

        assert workspace.editor.state is EditorState.CLEAN
        assert saved.content == "hello"
        assert saved.updated_at == clock()
        assert saved.created_at == note.created_at
        (persisted,) = decode(medium.get(DEFAULT_STORAGE_KEY))
        assert persisted == saved

        assert workspace.delete_note(note.id) is True
        assert len(workspace.store) == 0
        assert workspace.editor.state is EditorState.NO_SELECTION
        assert medium.get(DEFAULT_STORAGE_KEY) == "[]"

    def test_create_clears_query(self, workspace):
        workspace.set_query("zebra")

        workspace.create_note()

        assert workspace.query == ""
        assert len(workspace.visible_notes()) == 1

    def test_discard(self, workspace):
        workspace.create_note("Plans", "body")
        workspace.edit_content("scratch")

        workspace.discard()

        assert workspace.editor_view().content == "body"
        assert not workspace.editor_view().dirty


class TestDeleteNote:
    """Tests for confirmed deletes."""

    def test_declined_keeps_note(self, synchronizer, clock):
        confirm = ConfirmRecorder(False)
        ws = NotesWorkspace(synchronizer, confirm=confirm, clock=clock)
        ws.open()
        note = ws.create_note("Taxes")

        assert ws.delete_note(note.id) is False
        assert note.id in ws.store
        assert confirm.messages == ["Delete “Taxes”? This cannot be undone."]

    def test_absent_note_does_not_ask(self, synchronizer, clock):
        confirm = ConfirmRecorder(True)
        ws = NotesWorkspace(synchronizer, confirm=confirm, clock=clock)
        ws.open()

        assert ws.delete_note("missing") is False
        assert confirm.messages == []

    def test_reselects_first_presented(self, workspace, clock):
        older = workspace.create_note("Older")
        clock.advance(10)
        newer = workspace.create_note("Newer")

        workspace.delete_note(newer.id)

        assert workspace.editor.selected_id == older.id

    def test_prompt_text(self, make_note):
        assert delete_prompt(make_note("a", title="  Trip ")) == "Delete “Trip”? This cannot be undone."
        assert delete_prompt(make_note("a", title="   ")) == "Delete this note? This cannot be undone."
        assert delete_prompt(None) == "Delete this note? This cannot be undone."

    def test_always_confirm(self):
        assert always_confirm("anything") is True


class TestViews:
    @pytest.fixture
    def filled(self, workspace, clock):
        workspace.create_note("Groceries", "milk, eggs")
        clock.advance(10)
        workspace.create_note("Taxes 2024", "file by April")
        clock.advance(10)
        workspace.create_note("", "")
        return workspace

    def test_search(self, filled):
        filled.set_query("tax")
        assert [n.title for n in filled.visible_notes()] == ["Taxes 2024"]

        filled.set_query("milk")
        assert [n.title for n in filled.visible_notes()] == ["Groceries"]

    def test_count_label_follows_query(self, filled):
        assert filled.count_label() == "3 notes"

        filled.set_query("milk")

        assert filled.count_label() == "1 note"

    def test_list_view(self, filled):
        rows = filled.list_view()

        assert [row.title for row in rows] == ["Untitled note", "Taxes 2024", "Groceries"]
        assert [row.active for row in rows] == [True, False, False]
        assert rows[0].preview == "No content"

    def test_editor_view(self, workspace):
        note = workspace.create_note("Plans", "body")
        workspace.edit_title("Plans v2")

        view = workspace.editor_view()

        assert view.note_id == note.id
        assert view.title == "Plans v2"
        assert view.content == "body"
        assert view.dirty
        assert view.status == "Unsaved changes"
        assert view.created == format_timestamp(note.created_at)

    def test_editor_view_clean_status(self, workspace):
        workspace.create_note()

        assert workspace.editor_view().status == "All changes saved"


class TestPersistence:
    def test_reopen_restores_notes(self, medium, clock):
        """Should see committed notes again after a restart."""
        first = NotesWorkspace(PersistenceSynchronizer(medium, clock=clock), clock=clock)
        first.open()
        note = first.create_note("Keep me", "body")
        first.edit_content("unsaved edit")
        first.close()

        second = NotesWorkspace(PersistenceSynchronizer(medium, clock=clock), clock=clock)
        reopened = second.open()

        assert reopened == note
        assert reopened.content == "body"

    def test_write_failure_keeps_memory_and_surfaces_on_close(self, failing_medium, clock):
        ws = NotesWorkspace(PersistenceSynchronizer(failing_medium, clock=clock), clock=clock)
        ws.open()

        note = ws.create_note("Unsaved")

        assert ws.store.get(note.id) == note
        assert ws.editor.selected_id == note.id
        with pytest.raises(WriteError):
            ws.close()

    def test_deferred_writes_are_drained_on_close(self, recording_medium, clock):
        recording_medium.delay = 0.002
        sync = PersistenceSynchronizer(recording_medium, deferred=True, clock=clock)
        ws = NotesWorkspace(sync, clock=clock)
        ws.open()
        for i in range(5):
            ws.create_note(f"Note {i}")

        ws.close()

        assert len(recording_medium.writes) == 5
        assert len(decode(recording_medium.get(DEFAULT_STORAGE_KEY))) == 5
