"""
Integration Tests for the Notes TUI.

Drives the Textual app headlessly with a real SQLite store.
"""

import pytest
from textual.widgets import Button, Input, TextArea

from notes_app.core.config_schema import UiSchema
from notes_app.services.editor import EditorState
from notes_app.tui.app import ColorSwatch, NoteCard, NotesApp

pytestmark = pytest.mark.integration


UI = UiSchema(grid_columns=2, card_height=5, transition_seconds=0)


class TestNotesApp:
    """Pilot-driven tests for the card grid and detail editor."""

    @pytest.mark.asyncio
    async def test_empty_store_shows_hint(self, editor):
        app = NotesApp(editor=editor, ui=UI)

        async with app.run_test() as pilot:
            await pilot.pause()

            assert len(app.query(NoteCard)) == 0
            assert app.query_one("#empty-hint") is not None
            assert app.query_one("#primary", Button).label.plain == "New"
            assert app.query_one("#detail-content", TextArea).placeholder == "Add a note..."

    @pytest.mark.asyncio
    async def test_new_note_typed_and_closed_becomes_card(self, editor, store):
        app = NotesApp(editor=editor, ui=UI)

        async with app.run_test() as pilot:
            await pilot.click("#primary")
            await pilot.pause()
            assert editor.state is EditorState.EDITING
            assert app.query_one("#primary", Button).label.plain == "Delete"

            await pilot.press(*"groceries")
            await pilot.pause()
            assert app.query_one("#detail-title", Input).value == "groceries"

            await pilot.click("#close")
            await pilot.pause()

            assert editor.state is EditorState.IDLE
            cards = list(app.query(NoteCard))
            assert [card.note.title for card in cards] == ["groceries"]

        notes = await store.list_all()
        assert [n.title for n in notes] == ["groceries"]

    @pytest.mark.asyncio
    async def test_closing_blank_note_discards_it(self, editor, store):
        app = NotesApp(editor=editor, ui=UI)

        async with app.run_test() as pilot:
            await pilot.click("#primary")
            await pilot.pause()
            await pilot.click("#close")
            await pilot.pause()

            assert len(app.query(NoteCard)) == 0

        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_delete_button_removes_open_note(self, editor, store):
        app = NotesApp(editor=editor, ui=UI)

        async with app.run_test() as pilot:
            await pilot.click("#primary")
            await pilot.pause()
            await pilot.press(*"temp")
            await pilot.pause()

            # Primary button reads Delete while a note is open
            await pilot.click("#primary")
            await pilot.pause()

            assert editor.state is EditorState.IDLE

        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_failed_save_keeps_app_running(self, editor, store, fail_next_commit):
        for title in ("a", "b"):
            await editor.create_note()
            editor.update_title(title)
            await editor.close()
        app = NotesApp(editor=editor, ui=UI)

        async with app.run_test() as pilot:
            await pilot.click(NoteCard)
            await pilot.pause()
            assert editor.state is EditorState.EDITING

            await pilot.press("x")
            await pilot.pause()
            fail_next_commit()

            await pilot.click("#close")
            await pilot.pause()

            assert app.is_running
            assert editor.state is EditorState.IDLE
            cards = list(app.query(NoteCard))
            assert [card.note.title for card in cards] == ["b", "a"]

        assert [n.title for n in await store.list_all()] == ["b", "a"]

    @pytest.mark.asyncio
    async def test_swatch_sets_open_note_colour(self, editor, store):
        app = NotesApp(editor=editor, ui=UI)

        async with app.run_test() as pilot:
            await pilot.click("#primary")
            await pilot.pause()
            draft = editor.selected
            swatch = next(s for s in app.query(ColorSwatch) if s.color_key != draft.color_key)

            swatch.press()
            await pilot.pause()
            assert draft.color_key == swatch.color_key

            await pilot.press(*"tinted")
            await pilot.pause()
            await pilot.click("#close")
            await pilot.pause()

        notes = await store.list_all()
        assert [n.color_key for n in notes] == [swatch.color_key]
