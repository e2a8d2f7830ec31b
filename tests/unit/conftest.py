"""
Unit Test Fixtures.

Fixtures for unit tests - all external dependencies are mocked.
Unit tests should be fast and isolated, never touching real databases.
"""

from unittest.mock import AsyncMock, MagicMock

import pytest


# =============================================================================
# Database Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_db_session() -> AsyncMock:
    """
    Mock database session for unit tests.

    Provides a fully mocked AsyncSession with common methods.
    """
    session = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.flush = AsyncMock()
    session.refresh = AsyncMock()
    session.execute = AsyncMock()
    session.add = MagicMock()
    session.delete = AsyncMock()
    return session


# =============================================================================
# Store Mock Fixtures
# =============================================================================


@pytest.fixture
def mock_store() -> MagicMock:
    """
    Mock NoteStore for editor tests.

    search() returns an empty listing unless a test overrides it.
    """
    store = MagicMock()
    store.search = AsyncMock(return_value=[])
    store.list_all = AsyncMock(return_value=[])
    store.create_empty = AsyncMock()
    store.insert = AsyncMock()
    store.delete = AsyncMock(return_value=True)
    store.save = AsyncMock()
    return store
