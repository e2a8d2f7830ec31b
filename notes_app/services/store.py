"""
Note Store.

The persistence contract of the app: list, insert, delete and save notes
against the local database. Every write commits before returning, so a
record handed back by insert() is already visible to list_all().
"""

import random
from collections.abc import Callable
from datetime import datetime
from uuid import uuid4

from sqlalchemy.ext.asyncio import AsyncSession

from notes_app.core.exceptions import SaveFailedError
from notes_app.core.utils import utc_now
from notes_app.models.note import Note
from notes_app.models.palette import PALETTE, ChoiceSource, pick_color
from notes_app.repositories.note import NoteRepository
from notes_app.schemas.note import NoteDraft
from notes_app.services.base import BaseService

Clock = Callable[[], datetime]


class NoteStore(BaseService):
    """
    Service owning the durable collection of notes.

    Listing order is always date_created descending. Field edits arrive
    as a NoteDraft and are persisted with save(); nothing is written
    implicitly.
    """

    def __init__(self, session: AsyncSession, clock: Clock = utc_now) -> None:
        super().__init__(session)
        self.repo = NoteRepository(session)
        self._clock = clock

    async def list_all(self) -> list[Note]:
        """
        Get every persisted note.

        Returns:
            Notes sorted by date_created, newest first
        """
        notes = await self._execute_db_operation("list_notes", self.repo.get_newest_first())
        self._log_debug("Listed notes", count=len(notes))
        return notes

    async def search(self, text: str) -> list[Note]:
        """
        Get notes whose title or content contains text.

        Blank text returns the full listing.
        """
        if not text.strip():
            return await self.list_all()
        self._log_debug("Searching notes", query=text)
        return await self._execute_db_operation("search_notes", self.repo.search(text.strip()))

    async def get(self, note_id: str) -> Note:
        """
        Get a note by ID.

        Raises:
            NotFoundError: If note not found
        """
        return await self._execute_db_operation("get_note", self.repo.get_by_id(note_id))

    async def count(self) -> int:
        return await self._execute_db_operation("count_notes", self.repo.count())

    async def insert(self, note: Note) -> Note:
        """
        Insert a new note and commit.

        Identifier and creation time are filled in when missing; an
        explicit date_created is kept as given.

        Args:
            note: Unsaved note

        Returns:
            The inserted note, already committed

        Raises:
            ConflictError: If a note with the same id exists
        """
        if note.id is None:
            note.id = str(uuid4())
        if note.date_created is None:
            note.date_created = self._clock()
        if note.date_modified is None:
            note.date_modified = note.date_created

        self._log_operation("Inserting note", note_id=note.id, color_key=note.color_key)

        return await self._execute_db_operation(
            "insert_note",
            self._commit_after(self.repo.add(note)),
        )

    async def create_empty(self, rng: ChoiceSource | None = None) -> Note:
        """
        Insert a blank note with a random palette colour.

        Args:
            rng: Random source for the colour pick (defaults to the random module)

        Returns:
            The inserted note
        """
        color_key = pick_color(PALETTE, rng or random)
        return await self.insert(Note(title="", content="", color_key=color_key))

    async def delete(self, note: Note | NoteDraft | str) -> bool:
        """
        Delete a note and commit.

        Deleting a note that is already gone is a no-op.

        Args:
            note: Note, draft or note id

        Returns:
            True if a row was removed
        """
        note_id = note if isinstance(note, str) else note.id
        self._log_operation("Deleting note", note_id=note_id)

        deleted = await self._execute_db_operation(
            "delete_note",
            self._commit_after(self.repo.delete(note_id, missing_ok=True)),
        )
        if not deleted:
            self._log_debug("Note already absent", note_id=note_id)
        return deleted

    async def save(self, draft: NoteDraft) -> Note:
        """
        Persist the editable fields of a draft.

        date_created is never touched; date_modified is refreshed.

        Args:
            draft: Edited copy of a stored note

        Returns:
            The stored note with the draft's values

        Raises:
            NotFoundError: If the note was deleted meanwhile
            SaveFailedError: If the commit fails
        """
        self._log_operation(
            "Saving note",
            note_id=draft.id,
            color_key=draft.color_key,
        )

        return await self._execute_db_operation(
            "save_note",
            self._commit_after(
                self.repo.update(
                    draft.id,
                    title=draft.title,
                    content=draft.content,
                    color_key=draft.color_key,
                    date_modified=self._clock(),
                )
            ),
            error_cls=SaveFailedError,
        )
