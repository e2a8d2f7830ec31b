# Pydantic schemas package
from notes_app.schemas.note import NoteDraft, NoteSnapshot

__all__ = [
    "NoteDraft",
    "NoteSnapshot",
]
