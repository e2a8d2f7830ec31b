"""
Note Schemas.

Pydantic copies of notes that live outside the database session.

NoteDraft is what the editor mutates while a note is open; changes only
reach the database through NoteStore.save(draft). NoteSnapshot is a
read-only view used for display and CLI output.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from notes_app.models.note import Note
from notes_app.models.palette import color_for


class NoteDraft(BaseModel):
    """Editable copy of a note's fields plus the transient interactivity flag."""

    id: str = Field(description="Identifier of the stored note")
    title: str = Field(default="", description="Note title")
    content: str = Field(default="", description="Note body")
    color_key: str = Field(description="Palette key")
    is_interactive: bool = Field(
        default=False,
        description="Whether the detail editor currently accepts input. Never persisted.",
    )

    model_config = ConfigDict(validate_assignment=True)

    @classmethod
    def from_note(cls, note: "Note | NoteSnapshot", is_interactive: bool = False) -> "NoteDraft":
        """Copy the editable fields of a stored note or a snapshot of one."""
        return cls(
            id=note.id,
            title=note.title or "",
            content=note.content or "",
            color_key=note.color_key,
            is_interactive=is_interactive,
        )

    @property
    def is_empty(self) -> bool:
        """True when both title and content are blank, i.e. the note will be discarded on close."""
        return not self.title and not self.content

    @property
    def color(self) -> str:
        return color_for(self.color_key)


class NoteSnapshot(BaseModel):
    """Read-only view of a stored note."""

    id: str
    title: str
    content: str
    color_key: str
    date_created: datetime
    date_modified: datetime

    model_config = ConfigDict(from_attributes=True, frozen=True)

    @property
    def color(self) -> str:
        return color_for(self.color_key)
