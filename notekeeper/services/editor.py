"""
Selection and Draft Controller.

Tracks which note is open and holds its draft. Edits change only the
draft; the committed note in the store changes only on save. The editor
state is recomputed after every change by comparing the draft with the
committed note:

    NO_SELECTION  nothing is open
    CLEAN         draft matches the committed note
    DIRTY         draft title or content differs

Changing the selection drops the current draft without asking. Callers
that want a confirmation must ask before calling select().
"""

from notekeeper.core.exceptions import NotFoundError
from notekeeper.repositories.note import NoteStore
from notekeeper.schemas.note import Draft, EditorState, Note
from notekeeper.services.base import BaseService
from notekeeper.services.search import present


class DraftController(BaseService):
    """Selection state machine over a note store."""

    def __init__(self, store: NoteStore) -> None:
        super().__init__()
        self.store = store
        self._selected_id: str | None = None
        self._draft: Draft | None = None
        self._state = EditorState.NO_SELECTION

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def is_dirty(self) -> bool:
        return self._state is EditorState.DIRTY

    @property
    def selected_id(self) -> str | None:
        return self._selected_id

    @property
    def selected_note(self) -> Note | None:
        return self.store.get(self._selected_id)

    @property
    def draft(self) -> Draft | None:
        """Copy of the current draft; edit through edit_title/edit_content."""
        return self._draft.model_copy() if self._draft is not None else None

    def select(self, note_id: str | None) -> Note | None:
        """
        Open a note, replacing any draft with a fresh copy of it.

        Args:
            note_id: Note to open, or None to close the editor

        Returns:
            The opened note, or None if nothing is selected afterwards
        """
        note = self.store.get(note_id)
        if note is None:
            if note_id is not None:
                self._log_debug("Selected note not found", note_id=note_id)
            self._selected_id = None
            self._draft = None
            self._state = EditorState.NO_SELECTION
            return None

        if self.is_dirty and note.id != self._selected_id:
            self._log_debug("Dropping unsaved draft", note_id=self._selected_id)
        self._selected_id = note.id
        self._draft = Draft.from_note(note)
        self._state = EditorState.CLEAN
        return note

    def select_first(self) -> Note | None:
        """Open the first note in display order, or nothing if empty."""
        ordered = present(self.store.list_notes())
        return self.select(ordered[0].id if ordered else None)

    def edit_title(self, text: str) -> EditorState:
        if self._draft is not None:
            self._draft.title = text
            self._refresh()
        return self._state

    def edit_content(self, text: str) -> EditorState:
        if self._draft is not None:
            self._draft.content = text
            self._refresh()
        return self._state

    def save(self, now: int | None = None) -> Note | None:
        """
        Commit the draft to the store.

        Only acts when the draft is dirty. The title is normalized by the
        store; the draft is then reset from the committed note.

        Args:
            now: Commit time in epoch ms; defaults to the store clock

        Returns:
            The committed note, or None if nothing was saved
        """
        if self._state is not EditorState.DIRTY:
            return None

        note_id = self._selected_id
        try:
            note = self.store.update(
                note_id,
                self._draft.title,
                self._draft.content,
                now,
            )
        except NotFoundError:
            self._log_debug("Selected note vanished before save", note_id=note_id)
            self.select(None)
            return None

        self._log_operation("Draft saved", note_id=note_id)
        self._draft = Draft.from_note(note)
        self._state = EditorState.CLEAN
        return note

    def discard(self) -> None:
        """Reset the draft to the committed note."""
        if self._state is not EditorState.DIRTY:
            return
        self._log_debug("Draft discarded", note_id=self._selected_id)
        self.select(self._selected_id)

    def delete(self, note_id: str) -> bool:
        """
        Delete a note from the store.

        If it was the selected note, the first remaining note in display
        order is opened, or nothing when the collection is empty.

        Returns:
            True if a note was removed
        """
        removed = self.store.delete(note_id)
        if removed and note_id == self._selected_id:
            self.select_first()
        return removed

    def _refresh(self) -> None:
        note = self.selected_note
        if note is None:
            self.select(None)
        elif self._draft.differs_from(note):
            self._state = EditorState.DIRTY
        else:
            self._state = EditorState.CLEAN
