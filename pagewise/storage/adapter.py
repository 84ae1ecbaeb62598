"""
SQLModel implementation of the QueryAdapter protocol.

Example:
    ```python
    from pagewise.pagination import paginate
    from pagewise.storage.adapter import SQLModelAdapter

    async with session_factory() as session:
        adapter = SQLModelAdapter(session, Post, order_by=[Post.created_at.desc()])
        posts = await paginate(adapter, {"page": 2}, filters={"author_id": 7})
    ```
"""

from typing import Any, Generic, Type

from pydantic import BaseModel as PydanticBaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel.ext.asyncio.session import AsyncSession

from pagewise.logging import logger
from pagewise.pagination.query_builder import (
    build_count_query,
    build_query,
    convert_filters,
)
from pagewise.schemas.generic_typing import ApplyFiltersType, GenericSQLModelType
from pagewise.settings import app_settings
from pagewise.utils.pagination_cache import CountCache


class SQLModelAdapter(Generic[GenericSQLModelType]):
    """
    Fetches and counts rows of one SQLModel table through an async session.

    Attributes:
        session: The database session for executing queries.
        model: The SQLModel class being paginated.
        order_by: Ordering applied to the item query only.
        apply_filters: Filter function shared by the item and count queries.
        eager_load: Relationship names loaded with ``selectinload``.
        count_filters: Filters merged into the count query only, e.g. to
            count a wider set than the one displayed.
        count_cache: Redis cache for count results, or None. Passing
            ``use_count_cache=True`` (or setting COUNT_CACHE_ENABLED)
            creates one with default settings.
    """

    def __init__(
        self,
        session: AsyncSession,
        model: Type[GenericSQLModelType],
        *,
        order_by: list[Any] | None = None,
        apply_filters: ApplyFiltersType | None = None,
        eager_load: list[str] | None = None,
        count_filters: dict[str, Any] | None = None,
        use_count_cache: bool | None = None,
        count_cache: CountCache | None = None,
    ):
        self.session = session
        self.model = model
        self.order_by = order_by
        self.apply_filters = apply_filters
        self.eager_load = eager_load
        self.count_filters = count_filters
        if use_count_cache is None:
            use_count_cache = app_settings.COUNT_CACHE_ENABLED
        if count_cache is None and use_count_cache:
            count_cache = CountCache()
        self.count_cache = count_cache

    async def fetch(
        self,
        filters: dict[str, Any] | PydanticBaseModel | None,
        offset: int,
        limit: int,
    ) -> list[GenericSQLModelType]:
        """
        Fetch one window of rows.

        Raises:
            ValueError: If a filter key is not a model attribute.
            SQLAlchemyError: If the database query fails.
        """
        query = build_query(
            self.model,
            convert_filters(filters),
            self.apply_filters,
            self.eager_load,
            self.order_by,
        )
        query = query.offset(offset).limit(limit)

        try:
            results = await self.session.exec(query)
            return list(results.all())
        except SQLAlchemyError as e:
            logger.error(f"Error fetching {self.model.__name__} page: {e}")
            raise

    async def count(
        self, filters: dict[str, Any] | PydanticBaseModel | None
    ) -> int:
        """
        Count rows matching the filters, using the Redis cache when enabled.

        Raises:
            ValueError: If a filter key is not a model attribute.
            SQLAlchemyError: If the database query fails.
        """
        filter_dict = convert_filters(filters)
        if self.count_filters:
            filter_dict = {**(filter_dict or {}), **self.count_filters}

        count_query = build_count_query(
            self.model, filter_dict, self.apply_filters
        )

        cache_key = None
        if self.count_cache is not None:
            cache_key = self.count_cache.key_for(
                self._cache_namespace, count_query
            )
            cached_total = await self.count_cache.get(cache_key)
            if cached_total is not None:
                return cached_total

        try:
            total_result = await self.session.exec(count_query)
            total = int(total_result.one())
        except SQLAlchemyError as e:
            logger.error(f"Error counting {self.model.__name__}: {e}")
            raise

        if cache_key is not None:
            await self.count_cache.set(cache_key, total)

        return total

    async def invalidate_count_cache(self) -> int:
        """
        Drop every cached count for this adapter's table.

        Returns:
            Number of cache entries removed; 0 when caching is off.
        """
        if self.count_cache is None:
            return 0
        return await self.count_cache.invalidate(self._cache_namespace)

    @property
    def _cache_namespace(self) -> str:
        return str(self.model.__tablename__)
