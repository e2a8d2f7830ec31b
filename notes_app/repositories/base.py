"""
Base Repository.

Base class for all repositories with common CRUD operations.
Repositories flush but never commit; committing is the caller's decision.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from notes_app.core.exceptions import ConflictError, NotFoundError
from notes_app.core.logging import get_logger
from notes_app.models.base import Base

logger = get_logger(__name__)

ModelType = TypeVar("ModelType", bound=Base)


class BaseRepository(Generic[ModelType]):
    """
    Base repository with common CRUD operations.

    Subclasses should set the model class:

        class NoteRepository(BaseRepository[Note]):
            model = Note
    """

    model: type[ModelType]

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_by_id(self, id: str) -> ModelType:
        """
        Get a single record by ID.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id_or_none(id)

        if instance is None:
            raise NotFoundError(f"{self.model.__name__} not found")

        return instance

    async def get_by_id_or_none(self, id: str) -> ModelType | None:
        """Get a single record by ID, returning None if not found."""
        result = await self.session.execute(
            select(self.model).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none()

    async def add(self, instance: ModelType) -> ModelType:
        """
        Add an already constructed record.

        Raises:
            ConflictError: If a record with the same ID exists
        """
        if instance.id is not None and await self.exists(instance.id):
            raise ConflictError(f"{self.model.__name__} {instance.id} already exists")

        self.session.add(instance)
        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def update(self, id: str, **kwargs: Any) -> ModelType:
        """
        Update an existing record.

        Raises:
            NotFoundError: If record not found
        """
        instance = await self.get_by_id(id)

        for key, value in kwargs.items():
            if hasattr(instance, key):
                setattr(instance, key, value)

        await self.session.flush()
        await self.session.refresh(instance)
        return instance

    async def delete(self, id: str, missing_ok: bool = False) -> bool:
        """
        Delete a record by ID.

        Args:
            id: Record ID
            missing_ok: Return False instead of raising when the record is absent

        Returns:
            True if a record was deleted

        Raises:
            NotFoundError: If record not found and missing_ok is False
        """
        instance = await self.get_by_id_or_none(id)
        if instance is None:
            if missing_ok:
                return False
            raise NotFoundError(f"{self.model.__name__} not found")

        await self.session.delete(instance)
        await self.session.flush()
        return True

    async def exists(self, id: str) -> bool:
        """Check if a record exists by ID."""
        result = await self.session.execute(
            select(self.model.id).where(self.model.id == str(id))
        )
        return result.scalar_one_or_none() is not None

    async def count(self) -> int:
        """Count all records."""
        result = await self.session.execute(
            select(func.count()).select_from(self.model)
        )
        return result.scalar_one()
