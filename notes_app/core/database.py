"""
Database Configuration.

SQLAlchemy async engine and session management for the local note store.
Uses lazy initialization so importing the package never touches the disk.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from notes_app.core.exceptions import StorageUnavailableError
from notes_app.core.logging import get_logger

logger = get_logger(__name__)

# Module-level state for lazy initialization
_engine: Any = None
_async_session_factory: async_sessionmaker[AsyncSession] | None = None


def _ensure_sqlite_directory(url: str) -> None:
    """Create the parent directory of a file-backed SQLite database."""
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return
    if parsed.database and parsed.database != ":memory:":
        Path(parsed.database).parent.mkdir(parents=True, exist_ok=True)


def _create_engine() -> Any:
    """Create async SQLAlchemy engine."""
    from notes_app.core.config import get_app_config, get_database_url

    url = get_database_url()
    db_config = get_app_config().database

    try:
        _ensure_sqlite_directory(url)
    except OSError as e:
        raise StorageUnavailableError(f"Cannot create note storage directory: {e}") from e

    engine = create_async_engine(url, echo=db_config.echo)
    logger.debug("Database engine created", extra={"url": make_url(url).database})
    return engine


def get_engine() -> Any:
    """
    Get the database engine, creating it on first use.

    Returns:
        SQLAlchemy async engine instance
    """
    global _engine
    if _engine is None:
        _engine = _create_engine()
    return _engine


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """
    Get the session factory, creating it on first use.

    Returns:
        SQLAlchemy async session factory
    """
    global _async_session_factory
    if _async_session_factory is None:
        _async_session_factory = async_sessionmaker(
            get_engine(),
            class_=AsyncSession,
            expire_on_commit=False,
        )
    return _async_session_factory


async def init_db() -> None:
    """
    Create the notes table if it does not exist yet.

    Raises:
        StorageUnavailableError: If the database cannot be opened. This is
            fatal at startup; there is no fallback store.
    """
    from notes_app.models.base import Base

    # Registers the notes table on Base.metadata
    import notes_app.models.note  # noqa: F401

    try:
        async with get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except (SQLAlchemyError, OSError) as e:
        logger.error("Note storage unavailable", extra={"error": str(e)})
        raise StorageUnavailableError(f"Note storage unavailable: {e}") from e


async def dispose_engine() -> None:
    """Close pooled connections and forget the engine and session factory."""
    global _engine, _async_session_factory
    if _engine is not None:
        await _engine.dispose()
    _engine = None
    _async_session_factory = None


@asynccontextmanager
async def session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Open the note store for one application run.

    Initialises the schema, yields a session and closes it afterwards.
    The store commits its own writes, so leftover state is rolled back.

    Usage:
        async with session_scope() as session:
            store = NoteStore(session)
            notes = await store.list_all()
    """
    await init_db()
    session_factory = get_session_factory()
    async with session_factory() as session:
        try:
            yield session
        finally:
            await session.rollback()
