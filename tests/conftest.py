"""
Pytest configuration and fixtures for testing.

This module provides shared fixtures for pagination configuration,
in-memory adapters and mocked database sessions.
"""

import os
from unittest.mock import AsyncMock, MagicMock

import pytest

# Keep test runs independent of the developer's environment
os.environ.setdefault("COUNT_CACHE_ENABLED", "false")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from pagewise.schemas.request import PaginationConfig  # noqa: E402
from tests.mocks.adapter_mocks import ListAdapter, make_rows  # noqa: E402


@pytest.fixture
def config():
    """
    Provides a pagination config with small, explicit limits.

    Returns:
        PaginationConfig: default_per_page=10, max_per_page=50
    """
    return PaginationConfig(default_per_page=10, max_per_page=50)


@pytest.fixture
def rows():
    """
    Provides 25 in-memory rows.

    Returns:
        list: Row dictionaries with id, status and author_id
    """
    return make_rows(25)


@pytest.fixture
def list_adapter(rows):
    """
    Provides a list-backed QueryAdapter over the ``rows`` fixture.

    Returns:
        ListAdapter: Adapter recording fetch and count calls
    """
    return ListAdapter(rows)


@pytest.fixture
def mock_session():
    """
    Provides a mocked async session bound to a PostgreSQL dialect.

    Returns:
        AsyncMock: Session with ``exec``/``execute`` stubs and a bind whose
            dialect name is ``postgresql``
    """
    session = AsyncMock()
    session.bind = MagicMock()
    session.bind.dialect.name = "postgresql"
    return session
