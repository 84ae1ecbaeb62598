"""
Type-safe filter schemas for paginated queries.

Subclass ``BaseFilter`` to declare the filter fields a model accepts. The
query builder converts a filter instance into the dictionary consumed by
adapters, dropping fields left at ``None``.

Example:
    >>> class PostFilters(BaseFilter):
    ...     author_id: int | None = None
    ...     title: str | None = None
    >>> PostFilters(author_id=3).to_dict()
    {'author_id': 3}
"""

from typing import Any

from pydantic import BaseModel


class BaseFilter(BaseModel):  # type: ignore[misc]
    """
    Base class for all filter schemas.

    Provides common utilities for converting filters to dictionaries
    and excluding None values.
    """

    def to_dict(self) -> dict[str, Any]:
        """
        Convert filter schema to dictionary, excluding None values.

        Returns:
            Dictionary of non-None filter values ready for database queries.
        """
        return {k: v for k, v in self.model_dump().items() if v is not None}

    model_config = {
        "extra": "forbid",  # Reject unexpected fields
    }
