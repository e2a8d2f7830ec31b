"""
Integration Tests for Note Editor.

Walks the editor through full create/edit/close flows against a real
SQLite store.
"""

import random

import pytest

from notes_app.core.exceptions import InvalidTransitionError, SaveFailedError
from notes_app.services.editor import CloseOutcome, EditorState

pytestmark = pytest.mark.integration


class TestEditingFlows:
    """End-to-end editor flows."""

    @pytest.mark.asyncio
    async def test_create_edit_close_keeps_note(self, editor, store):
        draft = await editor.create_note(random.Random(7))
        editor.update_title("Groceries")
        editor.update_content("Milk, eggs")
        editor.set_color("Note 3")

        outcome = await editor.close()

        assert outcome is CloseOutcome.SAVED
        assert editor.state is EditorState.IDLE
        notes = await store.list_all()
        assert [n.id for n in notes] == [draft.id]
        assert notes[0].title == "Groceries"
        assert notes[0].content == "Milk, eggs"
        assert notes[0].color_key == "Note 3"
        assert editor.notes[0].title == "Groceries"

    @pytest.mark.asyncio
    async def test_closing_untouched_new_note_leaves_nothing(self, editor, store):
        await editor.create_note()

        outcome = await editor.close()

        assert outcome is CloseOutcome.DISCARDED
        assert await store.list_all() == []
        assert editor.notes == []

    @pytest.mark.asyncio
    async def test_clearing_existing_note_discards_it(self, editor, store):
        await editor.create_note()
        editor.update_title("Temp")
        await editor.close()
        note = (await store.list_all())[0]

        editor.select(note)
        editor.update_title("")
        outcome = await editor.close()

        assert outcome is CloseOutcome.DISCARDED
        assert await store.count() == 0

    @pytest.mark.asyncio
    async def test_delete_selected_removes_note(self, editor, store):
        await editor.create_note()
        editor.update_content("to be removed")

        outcome = await editor.delete_selected()

        assert outcome is CloseOutcome.DELETED
        assert await store.list_all() == []

    @pytest.mark.asyncio
    async def test_edits_stay_in_draft_until_close(self, editor, store):
        draft = await editor.create_note()
        editor.update_title("Unsaved")

        stored = await store.get(draft.id)

        assert stored.title == ""

    @pytest.mark.asyncio
    async def test_newest_note_listed_first(self, editor):
        for title in ("first", "second", "third"):
            await editor.create_note()
            editor.update_title(title)
            await editor.close()

        assert [n.title for n in editor.notes] == ["third", "second", "first"]


class TestSingleSelection:
    """Only one note can be open at a time."""

    @pytest.mark.asyncio
    async def test_second_open_is_ignored(self, editor, store):
        for title in ("a", "b"):
            await editor.create_note()
            editor.update_title(title)
            await editor.close()
        newest, oldest = editor.notes

        editor.select(newest)
        assert editor.select(oldest) is None
        assert editor.selected.id == newest.id

    @pytest.mark.asyncio
    async def test_create_while_editing_inserts_nothing(self, editor, store):
        await editor.create_note()

        assert await editor.create_note() is None
        assert await store.count() == 1

    @pytest.mark.asyncio
    async def test_close_when_idle_raises(self, editor):
        with pytest.raises(InvalidTransitionError):
            await editor.close()


class TestTransitionHook:
    """The transition hook runs before the store changes."""

    @pytest.mark.asyncio
    async def test_hook_sees_old_store_contents(self, editor, store):
        await editor.create_note()
        counts_during_hook = []

        async def hook():
            counts_during_hook.append((editor.state, await store.count()))

        editor.on_transition = hook
        await editor.close()

        assert counts_during_hook == [(EditorState.IDLE, 1)]
        assert await store.count() == 0


class TestFailedSave:
    """A failed save is reported and leaves the listing usable."""

    async def _two_notes(self, editor):
        for title in ("a", "b"):
            await editor.create_note()
            editor.update_title(title)
            await editor.close()

    @pytest.mark.asyncio
    async def test_listing_readable_after_failed_commit(self, editor, store, fail_next_commit):
        await self._two_notes(editor)
        newest = editor.notes[0]
        editor.select(newest)
        editor.update_title("b edited")
        fail_next_commit()

        with pytest.raises(SaveFailedError):
            await editor.close()

        assert editor.state is EditorState.IDLE
        assert [n.title for n in editor.notes] == ["b", "a"]
        assert (await store.get(newest.id)).title == "b"

    @pytest.mark.asyncio
    async def test_store_usable_after_failed_commit(self, editor, store, fail_next_commit):
        await self._two_notes(editor)
        editor.select(editor.notes[0])
        editor.update_title("b edited")
        fail_next_commit()
        with pytest.raises(SaveFailedError):
            await editor.close()

        editor.select(editor.notes[0])
        editor.update_title("b edited again")
        outcome = await editor.close()

        assert outcome is CloseOutcome.SAVED
        assert [n.title for n in await store.list_all()] == ["b edited again", "a"]
