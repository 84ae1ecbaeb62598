"""
Protocol classes for structural subtyping (duck typing with type safety).

Pagination depends on a host query engine only through ``QueryAdapter``.
Any class implementing ``fetch`` and ``count`` is compatible, so an ORM is
plugged in by composition instead of by patching its base classes.

Example:
    ```python
    from pagewise.protocols import QueryAdapter


    class ListAdapter:
        def __init__(self, rows):
            self.rows = rows

        async def fetch(self, filters, offset, limit):
            return self.rows[offset : offset + limit]

        async def count(self, filters):
            return len(self.rows)


    adapter: QueryAdapter[dict] = ListAdapter([{"id": 1}])
    ```
"""

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

T = TypeVar("T", covariant=True)


@runtime_checkable
class QueryAdapter(Protocol[T]):
    """
    Capability set pagination needs from a host query engine.

    Type Parameters:
        T: The record type the adapter returns.
    """

    async def fetch(
        self, filters: dict[str, Any] | None, offset: int, limit: int
    ) -> Sequence[T]:
        """
        Fetch one window of records.

        Args:
            filters: Attribute filters, or None for no filtering.
            offset: Number of records to skip.
            limit: Maximum number of records to return.

        Returns:
            Ordered records of the window.
        """
        ...

    async def count(self, filters: dict[str, Any] | None) -> int:
        """
        Count all records matching the filters, ignoring ordering and limits.

        Args:
            filters: Attribute filters, or None for no filtering.

        Returns:
            Total number of matching records.
        """
        ...
