"""
Shared query building utilities for pagination adapters.

Extracts filter conversion and query construction logic used by the
SQLModel adapter for both the item query and the count query.
"""

from typing import Any, Type

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy import Select
from sqlalchemy.orm import selectinload
from sqlmodel import func, select

from pagewise.logging import logger
from pagewise.schemas.generic_typing import ApplyFiltersType, GenericSQLModelType
from pagewise.storage.db import default_apply_filters


def convert_filters(
    filters: dict[str, Any] | PydanticBaseModel | None,
) -> dict[str, Any] | None:
    """
    Convert Pydantic filter model to dict or pass through dict filters.

    Args:
        filters: Either a dict, a Pydantic BaseModel, or None.

    Returns:
        Dictionary of filter key-value pairs with None values excluded for
        Pydantic models, or None if no filters provided.

    Example:
        >>> class PostFilters(BaseFilter):
        ...     title: str | None = None
        ...     author_id: int | None = None
        >>> convert_filters(PostFilters(title="intro"))
        {'title': 'intro'}
    """
    if filters is None:
        return None

    if isinstance(filters, PydanticBaseModel):
        if hasattr(filters, "to_dict"):
            return filters.to_dict()  # noqa: PGH003
        return {k: v for k, v in filters.model_dump().items() if v is not None}

    return dict(filters)


def build_query(
    model: Type[GenericSQLModelType],
    filter_dict: dict[str, Any] | None,
    apply_filters: ApplyFiltersType | None,
    eager_load: list[str] | None = None,
    order_by: list[Any] | None = None,
) -> Select:
    """
    Build the item query with filters, ordering and eager loading.

    The adapter then applies OFFSET/LIMIT.

    Args:
        model: The SQLModel class to query.
        filter_dict: Dictionary of filter key-value pairs.
        apply_filters: Optional custom filter function. If None, uses
            default_apply_filters from pagewise.storage.db.
        eager_load: Relationship names to eager load (prevents N+1 queries).
        order_by: Columns or column names to order by. Pagination only
            makes sense on ordered sets, so pass a stable ordering.

    Returns:
        SQLAlchemy Select query ready for pagination.
    """
    query: Select = select(model)

    if eager_load:
        for relationship in eager_load:
            if hasattr(model, relationship):
                query = query.options(
                    selectinload(getattr(model, relationship))
                )
            else:
                logger.warning(
                    f"Relationship '{relationship}' not found on {model.__name__}"
                )

    query = _apply_filters(query, model, filter_dict, apply_filters)

    if order_by:
        query = query.order_by(
            *(
                getattr(model, column) if isinstance(column, str) else column
                for column in order_by
            )
        )

    return query


def build_count_query(
    model: Type[GenericSQLModelType],
    filter_dict: dict[str, Any] | None,
    apply_filters: ApplyFiltersType | None,
) -> Select:
    """
    Build the count query for a model.

    Counts the primary key instead of wrapping the item query as a
    subquery; ordering and eager loading are irrelevant for the count.
    """
    count_query: Select = select(func.count(model.id))
    return _apply_filters(count_query, model, filter_dict, apply_filters)


def _apply_filters(
    query: Select,
    model: Type[GenericSQLModelType],
    filter_dict: dict[str, Any] | None,
    apply_filters: ApplyFiltersType | None,
) -> Select:
    if not filter_dict:
        return query
    if apply_filters:
        return apply_filters(query, model, filter_dict)
    return default_apply_filters(query, model, filter_dict)
