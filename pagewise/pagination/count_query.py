"""
Count query derivation for raw SQL pagination.

Builds a ``SELECT COUNT(*)`` query from an arbitrary SELECT by removing its
trailing ORDER BY clause and wrapping the rest as a subquery. The ORDER BY
removal is a pattern match on the last clause only: queries whose
subqueries carry their own ORDER BY are not handled. Pass an explicit
``total_entries`` when the derived query is not valid for your database.
"""

import re
from typing import Any, Mapping

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from pagewise.constants import COUNT_TABLE_ALIAS, DIALECTS_WITHOUT_SUBQUERY_ALIAS
from pagewise.logging import logger

# Trailing "ORDER BY col [ASC|DESC], ..." up to the end of the string
ORDER_BY_PATTERN = re.compile(r"\s*\bORDER\s+BY\s+[\w`\".,\s]+\Z", re.IGNORECASE)


def strip_order_by(sql: str) -> str:
    """
    Remove a trailing ORDER BY clause from a SQL string.

    Example:
        >>> strip_order_by("SELECT * FROM t ORDER BY created_at DESC")
        'SELECT * FROM t'
    """
    return ORDER_BY_PATTERN.sub("", sql.rstrip().rstrip(";"), count=1).rstrip()


def derive_count_query(sql: str, dialect_name: str | None = None) -> str:
    """
    Derive a row count query from a SELECT statement.

    Args:
        sql: The original query text.
        dialect_name: Name of the target SQL dialect (``engine.dialect.name``).
            Dialects in ``DIALECTS_WITHOUT_SUBQUERY_ALIAS`` get no alias.

    Returns:
        The count query text.

    Example:
        >>> derive_count_query("SELECT * FROM t ORDER BY created_at DESC")
        'SELECT COUNT(*) FROM (SELECT * FROM t) AS count_table'
    """
    count_query = f"SELECT COUNT(*) FROM ({strip_order_by(sql)})"
    if (dialect_name or "").lower() not in DIALECTS_WITHOUT_SUBQUERY_ALIAS:
        count_query += f" AS {COUNT_TABLE_ALIAS}"
    return count_query


async def count_by_sql(
    session: AsyncSession,
    sql: str,
    params: Mapping[str, Any] | None = None,
) -> int:
    """
    Derive and execute the count query for ``sql``.

    Args:
        session: Async session whose bind decides the dialect.
        sql: The original query text.
        params: Bound parameters referenced by ``sql``.

    Returns:
        Number of rows the original query returns.

    Raises:
        SQLAlchemyError: If the derived query is rejected by the database.
    """
    dialect_name = session.bind.dialect.name if session.bind else None
    count_query = derive_count_query(sql, dialect_name)
    logger.debug(f"Derived count query: {count_query}")
    result = await session.execute(text(count_query), dict(params or {}))
    return int(result.scalar_one())
