"""
Notes TUI.

Card grid and full-screen detail editor on top of NoteEditor. The grid
lists notes newest first; opening a card fades in the editor, closing it
fades the editor out before the store is touched.

Usage:
    python tui.py
    python tui.py --debug
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from contextlib import AsyncExitStack

from rich.markup import escape
from textual import on
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Grid, Horizontal, Vertical, VerticalScroll
from textual.message import Message
from textual.widgets import Button, Footer, Header, Input, Static, TextArea

from notes_app.core.config import get_app_config
from notes_app.core.config_schema import UiSchema
from notes_app.core.database import dispose_engine, session_scope
from notes_app.core.exceptions import ApplicationError, StorageUnavailableError
from notes_app.core.logging import get_logger
from notes_app.models.palette import PICKER_KEYS, color_for
from notes_app.schemas.note import NoteDraft, NoteSnapshot
from notes_app.services.editor import CloseOutcome, EditorState, NoteEditor
from notes_app.services.store import NoteStore

logger = get_logger(__name__)


class NoteCard(Static, can_focus=True):
    """One note in the grid, painted in its palette colour."""

    BINDINGS = [Binding("enter", "open", "Open", show=False)]

    class Opened(Message):
        def __init__(self, note: NoteSnapshot) -> None:
            self.note = note
            super().__init__()

    def __init__(self, note: NoteSnapshot, height: int) -> None:
        super().__init__(self._label(note), classes="note-card")
        self.note = note
        self.styles.height = height
        self.styles.background = note.color

    @staticmethod
    def _label(note: NoteSnapshot) -> str:
        title = f"[bold]{escape(note.title)}[/]" if note.title else "[dim]Untitled[/]"
        preview = escape(note.content.splitlines()[0]) if note.content else ""
        return f"{title}\n{preview}"

    def on_click(self) -> None:
        self.action_open()

    def action_open(self) -> None:
        self.post_message(self.Opened(self.note))


class ColorSwatch(Button):
    """Colour picker button for one palette key."""

    def __init__(self, color_key: str) -> None:
        super().__init__(" ", classes="swatch", name=color_key)
        self.color_key = color_key
        self.styles.background = color_for(color_key)


class NotesApp(App):
    """Colour-coded note cards with a full-screen editor."""

    TITLE = "Notes"

    CSS = """
    Screen {
        layout: vertical;
    }

    #search {
        margin: 0 1;
    }

    #cards-scroll {
        height: 1fr;
    }

    #cards {
        grid-gutter: 1 2;
        height: auto;
        padding: 1;
    }

    .note-card {
        padding: 1 2;
        color: black;
    }

    .note-card:focus {
        text-style: bold;
        border: tall $accent;
    }

    #empty-hint {
        color: $text-muted;
        padding: 1 2;
    }

    #detail {
        display: none;
        height: 1fr;
        padding: 1 2;
    }

    #detail-title {
        color: black;
        background: transparent;
    }

    #detail-content {
        height: 1fr;
        color: black;
        background: transparent;
    }

    #bottom-bar {
        dock: bottom;
        height: 3;
        background: $panel;
    }

    #palette {
        width: 1fr;
        align: center middle;
    }

    .swatch {
        min-width: 4;
        width: 4;
        margin: 0 1;
    }
    """

    BINDINGS = [
        Binding("ctrl+n", "new_note", "New"),
        Binding("escape", "close_note", "Close"),
        Binding("ctrl+d", "delete_note", "Delete"),
        Binding("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        editor: NoteEditor | None = None,
        ui: UiSchema | None = None,
    ) -> None:
        super().__init__()
        self._editor = editor
        self._ui = ui or get_app_config().application.ui
        self._exit_stack = AsyncExitStack()

    @property
    def editor(self) -> NoteEditor:
        if self._editor is None:
            raise RuntimeError("Note store is not open")
        return self._editor

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(placeholder="Search", id="search")
        with VerticalScroll(id="cards-scroll"):
            yield Grid(id="cards")
        with Vertical(id="detail"):
            yield Input(placeholder="Title", id="detail-title")
            yield TextArea(id="detail-content", placeholder="Add a note...")
        with Horizontal(id="bottom-bar"):
            yield Button("New", id="primary", variant="primary")
            with Horizontal(id="palette"):
                for color_key in PICKER_KEYS:
                    yield ColorSwatch(color_key)
            yield Button("Close", id="close")
        yield Footer()

    async def on_mount(self) -> None:
        self.query_one("#cards", Grid).styles.grid_size_columns = self._ui.grid_columns

        if self._editor is None:
            try:
                session = await self._exit_stack.enter_async_context(session_scope())
            except StorageUnavailableError as e:
                self.exit(return_code=1, message=e.message)
                return
            self._editor = NoteEditor(NoteStore(session))

        self.editor.on_transition = self._collapse_detail
        await self.editor.refresh()
        await self._render_cards()
        self._sync_bottom_bar()

    async def on_unmount(self) -> None:
        await self._exit_stack.aclose()
        await dispose_engine()

    # -------------------------------------------------------------------------
    # Grid
    # -------------------------------------------------------------------------

    async def _render_cards(self) -> None:
        cards = self.query_one("#cards", Grid)
        await cards.remove_children()

        notes = self.editor.notes
        if not notes:
            hint = "No matching notes" if self.editor.search_text else "No notes yet. Press Ctrl+N to add one."
            await cards.mount(Static(hint, id="empty-hint"))
            return

        await cards.mount_all(NoteCard(note, self._ui.card_height) for note in notes)

    @on(Input.Changed, "#search")
    async def on_search_changed(self, event: Input.Changed) -> None:
        await self.editor.refresh(event.value)
        await self._render_cards()

    @on(NoteCard.Opened)
    async def on_card_opened(self, event: NoteCard.Opened) -> None:
        draft = self.editor.select(event.note)
        if draft is not None:
            self._expand_detail(draft)

    # -------------------------------------------------------------------------
    # Detail editor
    # -------------------------------------------------------------------------

    def _expand_detail(self, draft: NoteDraft) -> None:
        detail = self.query_one("#detail", Vertical)
        self.query_one("#detail-title", Input).value = draft.title
        self.query_one("#detail-content", TextArea).text = draft.content
        detail.styles.background = draft.color
        detail.styles.opacity = 0.0
        detail.display = True
        self.query_one("#cards-scroll").display = False
        detail.styles.animate("opacity", value=1.0, duration=self._ui.transition_seconds)
        self.query_one("#detail-title", Input).focus()
        self._sync_bottom_bar()

    async def _collapse_detail(self) -> None:
        detail = self.query_one("#detail", Vertical)
        self._sync_bottom_bar()
        detail.styles.animate("opacity", value=0.0, duration=self._ui.transition_seconds)
        await asyncio.sleep(self._ui.transition_seconds)
        detail.display = False
        self.query_one("#cards-scroll").display = True

    @on(Input.Changed, "#detail-title")
    def on_title_changed(self, event: Input.Changed) -> None:
        if self.editor.state is EditorState.EDITING:
            self.editor.update_title(event.value)

    @on(TextArea.Changed, "#detail-content")
    def on_content_changed(self, event: TextArea.Changed) -> None:
        if self.editor.state is EditorState.EDITING:
            self.editor.update_content(event.text_area.text)

    @on(Button.Pressed, ".swatch")
    def on_swatch_pressed(self, event: Button.Pressed) -> None:
        if self.editor.state is not EditorState.EDITING or not isinstance(event.button, ColorSwatch):
            return
        self.editor.set_color(event.button.color_key)
        self.query_one("#detail", Vertical).styles.background = color_for(event.button.color_key)

    @on(Button.Pressed, "#primary")
    async def on_primary_pressed(self) -> None:
        if self.editor.state is EditorState.IDLE:
            await self.action_new_note()
        else:
            await self.action_delete_note()

    @on(Button.Pressed, "#close")
    async def on_close_pressed(self) -> None:
        await self.action_close_note()

    def _sync_bottom_bar(self) -> None:
        editing = self.editor.state is EditorState.EDITING
        primary = self.query_one("#primary", Button)
        primary.label = "Delete" if editing else "New"
        primary.variant = "error" if editing else "primary"
        self.query_one("#palette").display = editing
        self.query_one("#close", Button).display = editing
        self.sub_title = "Editing" if editing else ""

    # -------------------------------------------------------------------------
    # Actions
    # -------------------------------------------------------------------------

    async def action_new_note(self) -> None:
        try:
            draft = await self.editor.create_note()
        except ApplicationError as e:
            self.notify(e.message, severity="error")
            return
        if draft is None:
            return
        await self._render_cards()
        self._expand_detail(draft)

    async def action_close_note(self) -> None:
        if self.editor.state is not EditorState.EDITING:
            return
        await self._finish(self.editor.close())

    async def action_delete_note(self) -> None:
        if self.editor.state is not EditorState.EDITING:
            return
        await self._finish(self.editor.delete_selected())

    async def _finish(self, transition: Awaitable[CloseOutcome]) -> None:
        try:
            outcome = await transition
        except ApplicationError as e:
            logger.error("Closing note failed", extra={"error": e.message, "code": e.code})
            self.notify(e.message, title="Note not saved", severity="error")
        else:
            if outcome is CloseOutcome.DISCARDED:
                self.notify("Empty note discarded")
            elif outcome is CloseOutcome.DELETED:
                self.notify("Note deleted")

        self._sync_bottom_bar()
        await self._render_cards()
