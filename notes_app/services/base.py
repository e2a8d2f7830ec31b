"""
Base Service.

Base class for services that own a database session. Services orchestrate
repositories, commit transactions and translate database failures into
application exceptions.

Usage:
    from notes_app.services.base import BaseService

    class NoteStore(BaseService):
        def __init__(self, session: AsyncSession) -> None:
            super().__init__(session)
            self.repo = NoteRepository(session)

        async def delete(self, note_id: str) -> None:
            await self._execute_db_operation(
                "delete_note",
                self._commit_after(self.repo.delete(note_id)),
            )
"""

from collections.abc import Awaitable
from typing import Any, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_app.core.exceptions import ConflictError, DatabaseError
from notes_app.core.logging import get_logger, log_with_source

T = TypeVar("T")


class BaseService:
    """
    Base class for all services.

    Provides:
    - Database session management
    - Logging context, tagged with the store source
    - Error wrapping for database operations

    Subclasses should:
    - Call super().__init__(session) in their __init__
    - Initialize repositories in __init__
    """

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize the service with a database session.

        Args:
            session: SQLAlchemy async session for database operations
        """
        self._session = session
        self._logger = get_logger(self.__class__.__module__)

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    async def _commit_after(self, coro: Awaitable[T]) -> T:
        """Await a repository call, then commit the session."""
        result = await coro
        await self._session.commit()
        return result

    async def _execute_db_operation(
        self,
        operation: str,
        coro: Awaitable[T],
        error_cls: type[DatabaseError] = DatabaseError,
    ) -> T:
        """
        Execute a database operation with error handling.

        Wraps database operations to convert SQLAlchemy exceptions
        to application-specific exceptions. The session is rolled back
        on failure so it stays usable for the next operation.

        Args:
            operation: Description of the operation for logging
            coro: Coroutine to execute
            error_cls: DatabaseError subclass raised for non-integrity failures

        Returns:
            Result of the coroutine

        Raises:
            ConflictError: For unique constraint violations
            DatabaseError: For other database errors (or error_cls)
        """
        try:
            return await coro
        except IntegrityError as e:
            await self._session.rollback()
            self._logger.warning(
                "Database integrity error",
                extra={"operation": operation, "error": str(e)},
            )
            error_str = str(e).lower()
            if "unique" in error_str or "duplicate" in error_str:
                raise ConflictError("Resource already exists") from e
            raise error_cls(f"Database constraint violation: {operation}") from e
        except SQLAlchemyError as e:
            await self._session.rollback()
            self._logger.error(
                "Database error",
                extra={"operation": operation, "error": str(e)},
            )
            raise error_cls(f"Database operation failed: {operation}") from e

    def _log_operation(
        self,
        operation: str,
        **context: Any,
    ) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        log_with_source(
            self._logger,
            "store",
            "info",
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(
        self,
        message: str,
        **context: Any,
    ) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        log_with_source(
            self._logger,
            "store",
            "debug",
            message,
            extra={"service": self.__class__.__name__, **context},
        )
