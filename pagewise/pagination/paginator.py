"""
Adapter-based pagination.

Runs the item fetch and, when needed, the count through a ``QueryAdapter``
and wraps the result in a ``PagedCollection``.
"""

from typing import Any, Mapping

from pydantic import BaseModel as PydanticBaseModel

from pagewise.logging import logger
from pagewise.pagination.collection import PagedCollection, TotalEntriesSetter
from pagewise.pagination.resolver import to_page_request
from pagewise.protocols import QueryAdapter
from pagewise.schemas.request import PageRequest, PageWindow, PaginationConfig


def infer_total_entries(window: PageWindow, fetched: int) -> int | None:
    """
    Infer the total from a partial page without a count query.

    A page holding fewer rows than the limit is the last one, so the total
    is ``offset + fetched``. An empty page past the first one proves
    nothing (the page may simply be out of bounds) and returns None.
    """
    if fetched < window.limit and (window.page == 1 or fetched > 0):
        return window.offset + fetched
    return None


async def paginate(
    adapter: QueryAdapter[Any],
    request: PageRequest | Mapping[str, Any] | None = None,
    *,
    filters: dict[str, Any] | PydanticBaseModel | None = None,
    total_entries: int | None = None,
    config: PaginationConfig | None = None,
) -> PagedCollection[Any]:
    """
    Paginate records exposed by a query adapter.

    Args:
        adapter: Query engine adapter providing ``fetch`` and ``count``.
        request: Page parameters (``page``, ``per_page``, ``total_entries``).
        filters: Filters passed to both ``fetch`` and ``count``.
        total_entries: Explicit total. When given, ``adapter.count`` is
            never called.
        config: Pagination configuration.

    Returns:
        PagedCollection holding the requested page.

    Raises:
        InvalidConfigError: If per_page resolves to a non-positive value.
        SQLAlchemyError: If a database query fails.
    """
    request = to_page_request(request)
    known_total = (
        total_entries if total_entries is not None else request.total_entries
    )

    async def provider(
        window: PageWindow, set_total_entries: TotalEntriesSetter
    ) -> list[Any]:
        items = list(await adapter.fetch(filters, window.offset, window.limit))

        if known_total is None:
            inferred = infer_total_entries(window, len(items))
            if inferred is not None:
                logger.debug(
                    f"Inferred total_entries={inferred} from a partial page"
                )
                set_total_entries(inferred)
            else:
                set_total_entries(await adapter.count(filters))

        return items

    return await PagedCollection.acreate(
        request, provider, total_entries=total_entries, config=config
    )

