"""
In-memory query adapters for pagination tests.

Provides a list-backed implementation of the QueryAdapter protocol that
records every call, plus an AsyncMock factory for call assertions.
"""

from typing import Any
from unittest.mock import AsyncMock


class ListAdapter:
    """
    QueryAdapter over a list of dict rows.

    Filters match rows whose values are equal to every filter value.
    """

    def __init__(self, rows: list[dict[str, Any]]):
        self.rows = rows
        self.fetch_calls: list[tuple[dict[str, Any] | None, int, int]] = []
        self.count_calls: list[dict[str, Any] | None] = []

    def _matching(self, filters: dict[str, Any] | None) -> list[dict[str, Any]]:
        if not filters:
            return list(self.rows)
        return [
            row
            for row in self.rows
            if all(row.get(key) == value for key, value in filters.items())
        ]

    async def fetch(
        self, filters: dict[str, Any] | None, offset: int, limit: int
    ) -> list[dict[str, Any]]:
        self.fetch_calls.append((filters, offset, limit))
        return self._matching(filters)[offset : offset + limit]

    async def count(self, filters: dict[str, Any] | None) -> int:
        self.count_calls.append(filters)
        return len(self._matching(filters))


def make_rows(total: int) -> list[dict[str, Any]]:
    """
    Build ``total`` rows with alternating status and three authors.

    Returns:
        list: Rows with id, status and author_id keys
    """
    return [
        {
            "id": i,
            "status": "published" if i % 2 else "draft",
            "author_id": i % 3,
        }
        for i in range(1, total + 1)
    ]


def create_mock_adapter(items: list[Any] | None = None, total: int = 0):
    """
    Creates a mock QueryAdapter with fetch and count stubs.

    Returns:
        AsyncMock: Mocked adapter instance
    """
    adapter_mock = AsyncMock()
    adapter_mock.fetch = AsyncMock(return_value=list(items or []))
    adapter_mock.count = AsyncMock(return_value=total)
    return adapter_mock
