"""
Integration Test Fixtures.

Fixtures for integration tests - uses a real in-memory SQLite store.
These fixtures build on the root conftest.py database fixtures.
"""

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from notes_app.services.editor import NoteEditor
from notes_app.services.store import NoteStore


@pytest.fixture
def store(db_session: AsyncSession, clock) -> NoteStore:
    """NoteStore over the test session with a one-second ticking clock."""
    return NoteStore(db_session, clock=clock)


@pytest.fixture
def editor(store: NoteStore) -> NoteEditor:
    return NoteEditor(store)


@pytest.fixture
def fail_next_commit(db_session: AsyncSession, monkeypatch):
    """
    Return a function that makes the session's next commit fail.

    The failure is a real OperationalError, so the store's rollback and
    error translation run exactly as they would on a broken disk.
    """

    def arm() -> None:
        real_commit = db_session.commit

        async def failing_commit() -> None:
            monkeypatch.setattr(db_session, "commit", real_commit)
            raise OperationalError("COMMIT", {}, Exception("disk I/O error"))

        monkeypatch.setattr(db_session, "commit", failing_commit)

    return arm
