"""
Note Store.

Owns the committed note collection. Every mutation is followed by a
flush of the whole collection through the persistence synchronizer,
when one is attached.
"""

from collections.abc import Callable, Iterable
from concurrent.futures import Future

from notekeeper.core.exceptions import NotFoundError
from notekeeper.core.ids import new_id
from notekeeper.core.logging import get_logger
from notekeeper.core.utils import Clock, now_ms
from notekeeper.schemas.note import Note
from notekeeper.storage.synchronizer import PersistenceSynchronizer

logger = get_logger(__name__)

PLACEHOLDER_TITLE = "Untitled note"


class NoteStore:
    """
    In-memory note collection keyed by id.

    Notes are immutable; updates replace the stored instance. Iteration
    order is insertion order, which callers must not rely on for display.
    """

    def __init__(
        self,
        synchronizer: PersistenceSynchronizer | None = None,
        *,
        clock: Clock = now_ms,
        id_factory: Callable[[], str] = new_id,
        placeholder_title: str = PLACEHOLDER_TITLE,
    ) -> None:
        self._notes: dict[str, Note] = {}
        self._synchronizer = synchronizer
        self._clock = clock
        self._id_factory = id_factory
        self.placeholder_title = placeholder_title
        self.last_flush: Future[None] | None = None

    def __len__(self) -> int:
        return len(self._notes)

    def __contains__(self, note_id: object) -> bool:
        return note_id in self._notes

    def normalize_title(self, title: str | None) -> str:
        """Strip whitespace; blank titles become the placeholder."""
        stripped = (title or "").strip()
        return stripped or self.placeholder_title

    def load(self, notes: Iterable[Note]) -> None:
        """
        Replace the collection with hydrated notes, without flushing.

        Later duplicates of an id are ignored.
        """
        self._notes = {}
        for note in notes:
            self._notes.setdefault(note.id, note)
        logger.debug("Collection loaded", extra={"count": len(self._notes)})

    def get(self, note_id: str | None) -> Note | None:
        """Get a note by id, returning None if not found."""
        if note_id is None:
            return None
        return self._notes.get(note_id)

    def get_by_id(self, note_id: str) -> Note:
        """
        Get a note by id.

        Raises:
            NotFoundError: If the note is not in the collection
        """
        note = self._notes.get(note_id)
        if note is None:
            raise NotFoundError(f"Note {note_id} not found")
        return note

    def list_notes(self) -> list[Note]:
        """Snapshot of the collection in unspecified order."""
        return list(self._notes.values())

    def create(self, title: str | None = None, content: str | None = None) -> Note:
        """
        Create and insert a new note.

        Args:
            title: Initial title; blank or omitted gives the placeholder
            content: Initial content; omitted gives ""

        Returns:
            The new note
        """
        note_id = self._id_factory()
        while note_id in self._notes:
            note_id = self._id_factory()

        now = self._clock()
        note = Note(
            id=note_id,
            title=self.normalize_title(title),
            content=content or "",
            created_at=now,
            updated_at=now,
        )
        self._notes[note.id] = note
        logger.info("Note created", extra={"note_id": note.id})
        self._flush()
        return note

    def update(
        self,
        note_id: str,
        title: str | None,
        content: str | None,
        now: int | None = None,
    ) -> Note:
        """
        Commit new title and content for a note.

        Args:
            note_id: Note to update
            title: New title, normalized before storing
            content: New content, stored verbatim
            now: Commit time in epoch ms; defaults to the store clock

        Returns:
            The updated note

        Raises:
            NotFoundError: If the note is not in the collection
        """
        current = self.get_by_id(note_id)
        stamp = self._clock() if now is None else now

        note = current.model_copy(
            update={
                "title": self.normalize_title(title),
                "content": content or "",
                "updated_at": max(stamp, current.created_at),
            }
        )
        self._notes[note_id] = note
        logger.info("Note updated", extra={"note_id": note_id})
        self._flush()
        return note

    def delete(self, note_id: str) -> bool:
        """
        Remove a note.

        Returns:
            True if a note was removed, False if the id was absent
        """
        if self._notes.pop(note_id, None) is None:
            logger.debug("Delete skipped, note absent", extra={"note_id": note_id})
            return False
        logger.info("Note deleted", extra={"note_id": note_id})
        self._flush()
        return True

    def _flush(self) -> None:
        if self._synchronizer is not None:
            self.last_flush = self._synchronizer.flush(self.list_notes())
