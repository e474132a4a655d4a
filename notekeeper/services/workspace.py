"""
Notes Workspace.

The single entry point a presentation layer talks to. Wires the note
store, persistence synchronizer, draft controller and search query, and
turns their state into read-only view models.

Usage:
    sync = PersistenceSynchronizer(FileMedium("data/notes"))
    workspace = NotesWorkspace(sync, confirm=ask_user)
    workspace.open()

    note = workspace.create_note()
    workspace.edit_content("buy milk")
    workspace.save()
    workspace.close()
"""

from collections.abc import Callable

from notekeeper.core.utils import Clock, format_timestamp, now_ms
from notekeeper.repositories.note import PLACEHOLDER_TITLE, NoteStore
from notekeeper.schemas.note import EditorState, EditorView, Note, NoteSummary
from notekeeper.services.base import BaseService
from notekeeper.services.editor import DraftController
from notekeeper.services.search import (
    DEFAULT_PREVIEW_LENGTH,
    count_label,
    present,
    summarize,
)
from notekeeper.storage.synchronizer import PersistenceSynchronizer

Confirm = Callable[[str], bool]


def always_confirm(message: str) -> bool:
    return True


def delete_prompt(note: Note | None) -> str:
    """Confirmation message shown before deleting a note."""
    title = (note.title if note is not None else "").strip()
    subject = f"“{title}”" if title else "this note"
    return f"Delete {subject}? This cannot be undone."


class NotesWorkspace(BaseService):
    """
    Note store plus selection, draft and query for one user.

    Mutations go through create_note, select, edit_title, edit_content,
    save, discard and delete_note. Everything else is read-only.
    """

    def __init__(
        self,
        synchronizer: PersistenceSynchronizer | None = None,
        *,
        confirm: Confirm = always_confirm,
        clock: Clock = now_ms,
        placeholder_title: str = PLACEHOLDER_TITLE,
        preview_length: int = DEFAULT_PREVIEW_LENGTH,
    ) -> None:
        super().__init__()
        self.synchronizer = synchronizer
        self.store = NoteStore(
            synchronizer,
            clock=clock,
            placeholder_title=placeholder_title,
        )
        self.editor = DraftController(self.store)
        self.query = ""
        self.preview_length = preview_length
        self._confirm = confirm
        self._clock = clock

    def open(self) -> Note | None:
        """Hydrate from storage and open the most recently updated note."""
        if self.synchronizer is not None:
            self.store.load(self.synchronizer.hydrate())
        self._log_operation("Workspace opened", count=len(self.store))
        return self.editor.select_first()

    def close(self) -> None:
        """
        Wait for pending writes and release storage.

        Raises:
            WriteError: If the last write to storage failed
        """
        if self.synchronizer is not None:
            self.synchronizer.close()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def create_note(self, title: str | None = None, content: str | None = None) -> Note:
        """Create a note, open it and clear the search query."""
        note = self.store.create(title, content)
        self.editor.select(note.id)
        self.query = ""
        return note

    def select(self, note_id: str | None) -> Note | None:
        return self.editor.select(note_id)

    def edit_title(self, text: str) -> EditorState:
        return self.editor.edit_title(text)

    def edit_content(self, text: str) -> EditorState:
        return self.editor.edit_content(text)

    def save(self) -> Note | None:
        return self.editor.save(self._clock())

    def discard(self) -> None:
        self.editor.discard()

    def delete_note(self, note_id: str) -> bool:
        """
        Delete a note after the user confirms.

        Returns:
            True if the note was deleted, False if declined or absent
        """
        note = self.store.get(note_id)
        if note is None:
            return False
        if not self._confirm(delete_prompt(note)):
            self._log_debug("Delete declined", note_id=note_id)
            return False
        return self.editor.delete(note_id)

    def set_query(self, query: str) -> None:
        self.query = query

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def visible_notes(self) -> list[Note]:
        """Notes matching the current query, most recently updated first."""
        return present(self.store.list_notes(), self.query)

    def list_view(self) -> list[NoteSummary]:
        return summarize(
            self.visible_notes(),
            selected_id=self.editor.selected_id,
            preview_length=self.preview_length,
            placeholder=self.store.placeholder_title,
        )

    def count_label(self) -> str:
        return count_label(len(self.visible_notes()))

    def editor_view(self) -> EditorView | None:
        """Editor pane for the selected note, or None when nothing is open."""
        note = self.editor.selected_note
        draft = self.editor.draft
        if note is None or draft is None:
            return None
        state = self.editor.state
        return EditorView(
            note_id=note.id,
            title=draft.title,
            content=draft.content,
            state=state,
            status="Unsaved changes" if state is EditorState.DIRTY else "All changes saved",
            created=format_timestamp(note.created_at),
            updated=format_timestamp(note.updated_at),
        )
