"""
Note Schemas.

Pydantic models for the committed note, the editable draft, and the
read-only view models handed to a presentation layer.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Note(BaseModel):
    """
    A committed note.

    Immutable: every change produces a new instance. Serialized by alias
    so the persisted field names stay ``createdAt`` / ``updatedAt``.
    """

    id: str = Field(description="Note unique identifier")
    title: str = Field(description="Note title")
    content: str = Field(default="", description="Note body, plain text")
    created_at: int = Field(alias="createdAt", description="Creation time, epoch ms")
    updated_at: int = Field(alias="updatedAt", description="Last committed save, epoch ms")

    model_config = ConfigDict(frozen=True, populate_by_name=True)


class Draft(BaseModel):
    """Unsaved copy of the editable fields of the selected note."""

    title: str = ""
    content: str = ""

    @classmethod
    def from_note(cls, note: Note) -> "Draft":
        return cls(title=note.title, content=note.content)

    def differs_from(self, note: Note) -> bool:
        """True when either field no longer matches the committed note."""
        return (self.title or "") != (note.title or "") or (
            self.content or ""
        ) != (note.content or "")


class EditorState(str, Enum):
    """Selection and draft status."""

    NO_SELECTION = "no_selection"
    CLEAN = "clean"
    DIRTY = "dirty"


class NoteSummary(BaseModel):
    """One row of the note list."""

    id: str
    title: str
    preview: str
    updated: str
    active: bool = False

    model_config = ConfigDict(frozen=True)


class EditorView(BaseModel):
    """Snapshot of the editor pane for the selected note."""

    note_id: str
    title: str
    content: str
    state: EditorState
    status: str
    created: str
    updated: str

    model_config = ConfigDict(frozen=True)

    @property
    def dirty(self) -> bool:
        return self.state is EditorState.DIRTY
