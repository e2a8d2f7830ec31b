"""
Note Repository.

Data access layer for notes. Handles all database operations
for the Note model.
"""

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from notes_app.models.note import Note
from notes_app.repositories.base import BaseRepository


class NoteRepository(BaseRepository[Note]):
    """
    Repository for Note model.

    Inherits standard CRUD operations from BaseRepository
    and adds the listing queries the card grid needs.
    """

    model = Note

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session)

    async def get_newest_first(self) -> list[Note]:
        """
        Get every note, most recently created first.

        Returns:
            All notes ordered by date_created descending
        """
        result = await self.session.execute(
            select(Note).order_by(Note.date_created.desc())
        )
        return list(result.scalars().all())

    async def search(self, text: str) -> list[Note]:
        """
        Search notes by title or content (case-insensitive substring).

        Args:
            text: Search text; LIKE wildcards in it match literally

        Returns:
            Matching notes ordered by date_created descending
        """
        result = await self.session.execute(
            select(Note)
            .where(
                or_(
                    Note.title.icontains(text, autoescape=True),
                    Note.content.icontains(text, autoescape=True),
                )
            )
            .order_by(Note.date_created.desc())
        )
        return list(result.scalars().all())
