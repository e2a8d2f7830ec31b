"""
Unit Tests for the Note model and its schemas.
"""

from datetime import datetime

import pytest
from pydantic import ValidationError as PydanticValidationError

from notes_app.models.note import Note
from notes_app.models.palette import FALLBACK_COLOR, PALETTE
from notes_app.schemas.note import NoteDraft, NoteSnapshot


class TestNote:
    """Tests for derived Note fields."""

    def test_color_resolves_palette_key(self):
        note = Note(title="", content="", color_key="Note 2")
        assert note.color == PALETTE["Note 2"]

    def test_unknown_color_key_uses_fallback(self):
        note = Note(title="", content="", color_key="Sepia")
        assert note.color == FALLBACK_COLOR

    def test_is_empty(self):
        assert Note(title="", content="", color_key="Note 1").is_empty
        assert not Note(title="x", content="", color_key="Note 1").is_empty
        assert not Note(title="", content="x", color_key="Note 1").is_empty

    def test_repr_includes_title(self):
        note = Note(id="abc", title="Groceries", content="", color_key="Note 1")
        assert "Groceries" in repr(note)


class TestNoteDraft:
    """Tests for the detached editing copy."""

    def test_from_note_copies_fields(self):
        note = Note(id="n1", title="T", content="C", color_key="Note 4")

        draft = NoteDraft.from_note(note, is_interactive=True)

        assert draft.id == "n1"
        assert draft.title == "T"
        assert draft.content == "C"
        assert draft.color_key == "Note 4"
        assert draft.is_interactive is True

    def test_mutating_draft_leaves_note_alone(self):
        note = Note(id="n1", title="T", content="C", color_key="Note 4")
        draft = NoteDraft.from_note(note)

        draft.title = "Changed"

        assert note.title == "T"

    def test_not_interactive_by_default(self):
        assert NoteDraft(id="n1", color_key="Note 1").is_interactive is False

    def test_is_empty(self):
        assert NoteDraft(id="n1", color_key="Note 1").is_empty
        assert not NoteDraft(id="n1", title="a", color_key="Note 1").is_empty

    def test_assignment_is_validated(self):
        draft = NoteDraft(id="n1", color_key="Note 1")
        with pytest.raises(PydanticValidationError):
            draft.title = None


class TestNoteSnapshot:
    """Tests for the read-only view."""

    def test_from_attributes(self):
        created = datetime(2024, 10, 2, 9, 0)
        note = Note(
            id="n1",
            title="T",
            content="C",
            color_key="Note 1",
            date_created=created,
            date_modified=created,
        )

        snapshot = NoteSnapshot.model_validate(note)

        assert snapshot.id == "n1"
        assert snapshot.date_created == created
        assert snapshot.color == PALETTE["Note 1"]

    def test_is_frozen(self):
        created = datetime(2024, 10, 2, 9, 0)
        snapshot = NoteSnapshot(
            id="n1", title="", content="", color_key="Note 1",
            date_created=created, date_modified=created,
        )
        with pytest.raises(PydanticValidationError):
            snapshot.title = "x"
