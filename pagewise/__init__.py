from pagewise.exceptions import (
    InvalidConfigError,
    MissingTotalCountError,
    PaginationError,
    UnknownFinderError,
)
from pagewise.pagination import (
    Finder,
    FinderRegistry,
    PagedCollection,
    derive_count_query,
    paginate,
    paginate_by_sql,
    resolve_page_request,
)
from pagewise.protocols import QueryAdapter
from pagewise.schemas.request import PageRequest, PageWindow, PaginationConfig
from pagewise.storage.redis import close_redis_connections
from pagewise.utils.pagination_cache import CountCache

__all__ = [
    "CountCache",
    "Finder",
    "FinderRegistry",
    "InvalidConfigError",
    "MissingTotalCountError",
    "PageRequest",
    "PageWindow",
    "PagedCollection",
    "PaginationConfig",
    "PaginationError",
    "QueryAdapter",
    "UnknownFinderError",
    "close_redis_connections",
    "derive_count_query",
    "paginate",
    "paginate_by_sql",
    "resolve_page_request",
]
