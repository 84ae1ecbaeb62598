"""
Pagination of raw SQL queries.

Wraps a hand-written SELECT by appending LIMIT and OFFSET to it. A count
query is derived from the same SQL unless the caller supplies
``total_entries`` or the fetched page is partial.

Example:
    ```python
    from pagewise.pagination import paginate_by_sql

    developers = await paginate_by_sql(
        session,
        "SELECT * FROM developers WHERE salary > :salary ORDER BY name",
        {"page": 2, "per_page": 3},
        params={"salary": 80000},
    )
    ```
"""

from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from pagewise.logging import logger
from pagewise.pagination.collection import PagedCollection, TotalEntriesSetter
from pagewise.pagination.count_query import count_by_sql
from pagewise.pagination.paginator import infer_total_entries
from pagewise.pagination.resolver import to_page_request
from pagewise.schemas.request import PageRequest, PageWindow, PaginationConfig


def add_limit(sql: str, offset: int, limit: int) -> str:
    """
    Append LIMIT/OFFSET to a SQL string.

    Both values are integers produced by the resolver, so they are
    interpolated directly.

    Example:
        >>> add_limit("SELECT * FROM t", 20, 10)
        'SELECT * FROM t LIMIT 10 OFFSET 20'
    """
    sql = sql.rstrip().rstrip(";")
    return f"{sql} LIMIT {int(limit)} OFFSET {int(offset)}"


async def paginate_by_sql(
    session: AsyncSession,
    sql: str,
    request: PageRequest | Mapping[str, Any] | None = None,
    *,
    params: Mapping[str, Any] | None = None,
    total_entries: int | None = None,
    config: PaginationConfig | None = None,
) -> PagedCollection[Any]:
    """
    Paginate the rows of a raw SQL query.

    Args:
        session: Async session used for both queries.
        sql: SELECT statement with named bind parameters.
        request: Page parameters (``page``, ``per_page``, ``total_entries``).
        params: Values for the bind parameters in ``sql``.
        total_entries: Explicit total; skips count query derivation. Use
            it when the derived count query is not valid for your dialect.
        config: Pagination configuration.

    Returns:
        PagedCollection of result rows.

    Raises:
        InvalidConfigError: If per_page resolves to a non-positive value.
        SQLAlchemyError: If the query or the derived count query fails.
    """
    request = to_page_request(request)
    known_total = (
        total_entries if total_entries is not None else request.total_entries
    )
    bind_params = dict(params or {})

    async def provider(
        window: PageWindow, set_total_entries: TotalEntriesSetter
    ) -> list[Any]:
        query = add_limit(sql, window.offset, window.limit)
        result = await session.execute(text(query), bind_params)
        rows = list(result.all())

        if known_total is None:
            inferred = infer_total_entries(window, len(rows))
            if inferred is not None:
                logger.debug(
                    f"Inferred total_entries={inferred} from a partial page"
                )
                set_total_entries(inferred)
            else:
                set_total_entries(
                    await count_by_sql(session, sql, bind_params)
                )

        return rows

    return await PagedCollection.acreate(
        request, provider, total_entries=total_entries, config=config
    )
