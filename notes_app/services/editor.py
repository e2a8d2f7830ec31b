"""
Note Editor.

Selection and editing policy for the single-screen notes UI, kept free of
any rendering framework. The UI calls the transition methods and may pass
an awaitable hook that plays its expand/collapse animation.

    IDLE ──select / create_note──▶ EDITING
    EDITING ──close / delete_selected──▶ IDLE

Only one note is edited at a time. Closing is two-phase: the draft is made
non-interactive and the state returns to IDLE, the transition hook runs,
and only then is the store mutated.
"""

from collections.abc import Awaitable, Callable
from enum import Enum

from notes_app.core.exceptions import InvalidTransitionError, ValidationError
from notes_app.core.logging import get_logger
from notes_app.models.note import Note
from notes_app.models.palette import PALETTE, ChoiceSource, is_palette_key
from notes_app.schemas.note import NoteDraft, NoteSnapshot
from notes_app.services.store import NoteStore

logger = get_logger(__name__)

TransitionHook = Callable[[], Awaitable[None]]


class EditorState(str, Enum):
    IDLE = "idle"
    EDITING = "editing"


class CloseOutcome(str, Enum):
    """What happened to the note when the editor closed."""

    SAVED = "saved"
    DISCARDED = "discarded"
    DELETED = "deleted"


class NoteEditor:
    """
    State machine over at most one selected note.

    Edits go to a detached NoteDraft. The stored note changes only when
    the editor closes: empty drafts are discarded, everything else is
    saved, and delete_selected() removes the note regardless.
    """

    def __init__(
        self,
        store: NoteStore,
        on_transition: TransitionHook | None = None,
    ) -> None:
        self._store = store
        self.on_transition = on_transition
        self._state = EditorState.IDLE
        self._selected: NoteDraft | None = None
        self._notes: list[NoteSnapshot] = []
        self._search_text = ""

    @property
    def state(self) -> EditorState:
        return self._state

    @property
    def selected(self) -> NoteDraft | None:
        """The draft being edited, or None when idle."""
        return self._selected

    @property
    def notes(self) -> list[NoteSnapshot]:
        """Listing as of the last refresh(), detached from the database session."""
        return list(self._notes)

    @property
    def search_text(self) -> str:
        return self._search_text

    async def refresh(self, search_text: str | None = None) -> list[NoteSnapshot]:
        """
        Reload the listing from the store.

        Args:
            search_text: New filter text; None keeps the current one

        Returns:
            Notes newest first, filtered by the search text
        """
        if search_text is not None:
            self._search_text = search_text
        notes = await self._store.search(self._search_text)
        self._notes = [NoteSnapshot.model_validate(note) for note in notes]
        return self.notes

    def select(self, note: Note | NoteSnapshot) -> NoteDraft | None:
        """
        Open a note for editing.

        Returns:
            The interactive draft, or None if another note is already open
        """
        if self._state is EditorState.EDITING:
            logger.debug(
                "Selection ignored while editing",
                extra={"selected": self._selected.id if self._selected else None, "requested": note.id},
            )
            return None

        self._selected = NoteDraft.from_note(note, is_interactive=True)
        self._state = EditorState.EDITING
        logger.info("Note opened", extra={"note_id": note.id})
        return self._selected

    async def create_note(self, rng: ChoiceSource | None = None) -> NoteDraft | None:
        """
        Insert an empty note and open it.

        The store returns the committed record, so it is selected right
        away. Nothing is inserted while another note is open.

        Returns:
            The new note's draft, or None if a note is already open
        """
        if self._state is EditorState.EDITING:
            return None

        note = await self._store.create_empty(rng)
        await self.refresh()
        return self.select(note)

    def update_title(self, title: str) -> None:
        self._require_interactive().title = title

    def update_content(self, content: str) -> None:
        self._require_interactive().content = content

    def set_color(self, color_key: str) -> None:
        """
        Change the open note's colour.

        Raises:
            ValidationError: If color_key is not a palette key
        """
        draft = self._require_interactive()
        if not is_palette_key(color_key):
            raise ValidationError(
                "Unknown colour",
                details={"color_key": color_key, "allowed": list(PALETTE)},
            )
        draft.color_key = color_key

    async def close(self) -> CloseOutcome:
        """
        Close the open note, keeping it unless title and content are both empty.

        Raises:
            InvalidTransitionError: If no note is open
            SaveFailedError: If the edits could not be persisted
        """
        draft = self._require_editing()
        outcome = CloseOutcome.DISCARDED if draft.is_empty else CloseOutcome.SAVED
        return await self._finish(draft, outcome)

    async def delete_selected(self) -> CloseOutcome:
        """
        Close the open note and delete it.

        Raises:
            InvalidTransitionError: If no note is open
        """
        draft = self._require_editing()
        return await self._finish(draft, CloseOutcome.DELETED)

    async def _finish(self, draft: NoteDraft, outcome: CloseOutcome) -> CloseOutcome:
        # Phase one: stop accepting input and leave EDITING before the animation.
        draft.is_interactive = False
        self._selected = None
        self._state = EditorState.IDLE

        if self.on_transition is not None:
            await self.on_transition()

        # Phase two: mutate the store. A failed write rolls the session back,
        # so the listing is reloaded either way.
        try:
            if outcome is CloseOutcome.SAVED:
                await self._store.save(draft)
            else:
                await self._store.delete(draft)
        finally:
            await self.refresh()

        logger.info("Note closed", extra={"note_id": draft.id, "outcome": outcome.value})
        return outcome

    def _require_editing(self) -> NoteDraft:
        if self._state is not EditorState.EDITING or self._selected is None:
            raise InvalidTransitionError("No note is open")
        return self._selected

    def _require_interactive(self) -> NoteDraft:
        draft = self._require_editing()
        if not draft.is_interactive:
            raise InvalidTransitionError("Note is not accepting input")
        return draft
