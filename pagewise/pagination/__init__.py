"""
Page-based pagination for SQLModel/SQLAlchemy queries.

Example:
    Paginating a model through an adapter:
    ```python
    from pagewise.pagination import paginate
    from pagewise.storage.adapter import SQLModelAdapter

    adapter = SQLModelAdapter(session, Post, order_by=[Post.id])
    posts = await paginate(adapter, {"page": 2, "per_page": 20})
    print(f"Page {posts.current_page} of {posts.total_pages}")
    ```

    Paginating raw SQL:
    ```python
    from pagewise.pagination import paginate_by_sql

    rows = await paginate_by_sql(
        session, "SELECT * FROM post ORDER BY created_at DESC", {"page": 3}
    )
    ```
"""

from pagewise.pagination.collection import PagedCollection
from pagewise.pagination.count_query import (
    count_by_sql,
    derive_count_query,
    strip_order_by,
)
from pagewise.pagination.finders import Finder, FinderRegistry
from pagewise.pagination.paginator import infer_total_entries, paginate
from pagewise.pagination.resolver import resolve_page_request
from pagewise.pagination.sql import add_limit, paginate_by_sql

__all__ = [
    "PagedCollection",
    "Finder",
    "FinderRegistry",
    "add_limit",
    "count_by_sql",
    "derive_count_query",
    "infer_total_entries",
    "paginate",
    "paginate_by_sql",
    "resolve_page_request",
    "strip_order_by",
]
