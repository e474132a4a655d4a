"""
Search and Ordering.

Pure functions deriving what the note list shows from the committed
collection and the current query. Nothing here keeps state.
"""

import re
from collections.abc import Iterable

from notekeeper.core.utils import format_timestamp
from notekeeper.schemas.note import Note, NoteSummary

DEFAULT_PREVIEW_LENGTH = 140

_WHITESPACE = re.compile(r"\s+")


def sort_notes(notes: Iterable[Note]) -> list[Note]:
    """Most recently updated first; ties keep their incoming order."""
    return sorted(notes, key=lambda note: note.updated_at, reverse=True)


def present(notes: Iterable[Note], query: str = "") -> list[Note]:
    """
    Notes to display for a query.

    The query is trimmed and case-folded. A blank query returns every note;
    otherwise a note matches when its title or content contains the query.
    """
    ordered = sort_notes(notes)
    needle = (query or "").strip().casefold()
    if not needle:
        return ordered
    return [
        note
        for note in ordered
        if needle in note.title.casefold() or needle in note.content.casefold()
    ]


def make_preview(text: str | None, max_length: int = DEFAULT_PREVIEW_LENGTH) -> str:
    """One-line preview of note content, cut to max_length characters."""
    normalized = _WHITESPACE.sub(" ", text or "").strip()
    if not normalized:
        return "No content"
    if len(normalized) <= max_length:
        return normalized
    return f"{normalized[: max_length - 1]}…"


def display_title(title: str | None, placeholder: str) -> str:
    stripped = (title or "").strip()
    return stripped or placeholder


def count_label(count: int) -> str:
    return f"{count} note{'' if count == 1 else 's'}"


def summarize(
    notes: Iterable[Note],
    *,
    selected_id: str | None = None,
    preview_length: int = DEFAULT_PREVIEW_LENGTH,
    placeholder: str = "Untitled note",
) -> list[NoteSummary]:
    """Build list rows for already-presented notes, keeping their order."""
    return [
        NoteSummary(
            id=note.id,
            title=display_title(note.title, placeholder),
            preview=make_preview(note.content, preview_length),
            updated=format_timestamp(note.updated_at),
            active=note.id == selected_id,
        )
        for note in notes
    ]
