"""
Paged collection: one page of results plus its pagination metadata.

The collection is built once per query response. Its items never change
after construction; the total entry count may be filled in exactly once
later, because the count query can run after the item fetch.

Example:
    ```python
    from pagewise.pagination import PagedCollection

    def fetch(window, set_total_entries):
        rows = all_rows[window.offset : window.offset + window.limit]
        set_total_entries(len(all_rows))
        return rows

    posts = PagedCollection.create({"page": 2, "per_page": 10}, fetch)
    print(posts.total_pages, posts.next_page)
    ```
"""

import math
from collections.abc import Awaitable, Iterable, Sequence
from typing import Any, Callable, Generic, Mapping, overload

from pagewise.exceptions import (
    InvalidConfigError,
    MissingTotalCountError,
    PaginationError,
)
from pagewise.logging import logger
from pagewise.pagination.resolver import resolve_page_request, to_page_request
from pagewise.schemas.generic_typing import ItemType
from pagewise.schemas.request import PageRequest, PageWindow, PaginationConfig
from pagewise.schemas.response import MetadataModel, PaginatedResponseModel

TotalEntriesSetter = Callable[[int], None]
ItemsProvider = Callable[[PageWindow, TotalEntriesSetter], Iterable[ItemType]]
AsyncItemsProvider = Callable[
    [PageWindow, TotalEntriesSetter], Awaitable[Iterable[ItemType]]
]


def _validate_total_entries(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigError(
            f"total_entries must be an integer, got {value!r}"
        )
    if value < 0:
        raise InvalidConfigError(
            f"total_entries must not be negative, got {value}"
        )
    return value


class _TotalEntriesSlot:
    """
    Write-once holder handed to item providers as a setter.

    A total supplied up front by the caller wins: later writes from the
    provider are ignored.
    """

    def __init__(self, explicit: int | None):
        self.explicit = explicit is not None
        self.value = explicit

    def set(self, value: int) -> None:
        if self.explicit:
            logger.debug(
                f"Ignoring total_entries={value}, explicit total {self.value} given"
            )
            return
        if self.value is not None:
            raise PaginationError("total_entries can only be set once")
        self.value = _validate_total_entries(value)


class PagedCollection(Sequence, Generic[ItemType]):
    """
    Read-only sequence of items for one page, with page metadata.

    Attributes:
        current_page: 1-indexed page number.
        per_page: Maximum number of items on a page.
        total_entries: Total number of matching rows, or None while the
            count is still pending.

    Derived values that depend on the total (``total_pages``,
    ``out_of_bounds``, ``next_page``, ``to_metadata()``) raise
    ``MissingTotalCountError`` until the total is known.
    """

    def __init__(
        self,
        items: Iterable[ItemType],
        page: int,
        per_page: int,
        total_entries: int | None = None,
    ):
        """
        Initialize a collection for a single page.

        Args:
            items: Items of this page. Anything beyond ``per_page`` is
                dropped.
            page: Current page number, 1 or more.
            per_page: Page size, 1 or more.
            total_entries: Total matching rows, if already known.

        Raises:
            InvalidConfigError: If page, per_page or total_entries are out
                of range.
        """
        if per_page <= 0:
            raise InvalidConfigError(
                f"per_page must be a positive integer, got {per_page}"
            )
        if page < 1:
            raise InvalidConfigError(f"page must be 1 or more, got {page}")

        items = tuple(items)
        if len(items) > per_page:
            logger.warning(
                f"Item provider returned {len(items)} items for a page of "
                f"{per_page}, dropping {len(items) - per_page}"
            )
            items = items[:per_page]

        self._items: tuple[ItemType, ...] = items
        self._current_page = page
        self._per_page = per_page
        self._total_entries: int | None = None
        if total_entries is not None:
            self._total_entries = _validate_total_entries(total_entries)

    @classmethod
    def create(
        cls,
        request: PageRequest | Mapping[str, Any] | None,
        items_provider: ItemsProvider,
        total_entries: int | None = None,
        config: PaginationConfig | None = None,
    ) -> "PagedCollection[ItemType]":
        """
        Resolve the request, fetch items through a provider and wrap them.

        Args:
            request: Page parameters. ``total_entries`` on the request is
                used when the argument is not given.
            items_provider: Callable receiving the resolved ``PageWindow``
                and a setter for the total entry count. Returns the items.
            total_entries: Explicit total. When given it is used verbatim
                and any total the provider reports is ignored.
            config: Pagination configuration.

        Returns:
            The populated collection.

        Raises:
            InvalidConfigError: If per_page resolves to a non-positive value.
        """
        window, slot = cls._prepare(request, total_entries, config)
        items = items_provider(window, slot.set)
        return cls(items, window.page, window.per_page, slot.value)

    @classmethod
    async def acreate(
        cls,
        request: PageRequest | Mapping[str, Any] | None,
        items_provider: AsyncItemsProvider,
        total_entries: int | None = None,
        config: PaginationConfig | None = None,
    ) -> "PagedCollection[ItemType]":
        """
        Async variant of ``create`` for providers backed by async sessions.
        """
        window, slot = cls._prepare(request, total_entries, config)
        items = await items_provider(window, slot.set)
        return cls(items, window.page, window.per_page, slot.value)

    @staticmethod
    def _prepare(
        request: PageRequest | Mapping[str, Any] | None,
        total_entries: int | None,
        config: PaginationConfig | None,
    ) -> tuple[PageWindow, _TotalEntriesSlot]:
        request = to_page_request(request)
        window = resolve_page_request(request, config)
        if total_entries is None:
            total_entries = request.total_entries
        if total_entries is not None:
            total_entries = _validate_total_entries(total_entries)
        return window, _TotalEntriesSlot(total_entries)

    @property
    def items(self) -> tuple[ItemType, ...]:
        return self._items

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def per_page(self) -> int:
        return self._per_page

    @property
    def total_entries(self) -> int | None:
        return self._total_entries

    @total_entries.setter
    def total_entries(self, value: int) -> None:
        if self._total_entries is not None:
            raise PaginationError("total_entries can only be set once")
        self._total_entries = _validate_total_entries(value)

    @property
    def offset(self) -> int:
        """Number of rows skipped before the first item of this page."""
        return (self._current_page - 1) * self._per_page

    @property
    def total_pages(self) -> int:
        total = self._require_total("total_pages")
        return math.ceil(total / self._per_page) if total > 0 else 0

    @property
    def out_of_bounds(self) -> bool:
        """
        Whether the current page lies beyond the last page.

        Page 1 of an empty result is not out of bounds.
        """
        return self._current_page > max(self.total_pages, 1)

    @property
    def previous_page(self) -> int | None:
        return self._current_page - 1 if self._current_page > 1 else None

    @property
    def next_page(self) -> int | None:
        if self._current_page < self.total_pages:
            return self._current_page + 1
        return None

    def to_metadata(self) -> MetadataModel:
        return MetadataModel(
            page=self._current_page,
            per_page=self._per_page,
            total=self._require_total("metadata"),
            pages=self.total_pages,
            offset=self.offset,
            out_of_bounds=self.out_of_bounds,
            previous_page=self.previous_page,
            next_page=self.next_page,
        )

    def to_response(self) -> PaginatedResponseModel[ItemType]:
        return PaginatedResponseModel[Any](
            items=list(self._items), meta=self.to_metadata()
        )

    def _require_total(self, what: str) -> int:
        if self._total_entries is None:
            raise MissingTotalCountError(
                f"Cannot compute {what} before total_entries is set"
            )
        return self._total_entries

    @overload
    def __getitem__(self, index: int) -> ItemType: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[ItemType, ...]: ...

    def __getitem__(self, index):
        return self._items[index]

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(page={self._current_page}, "
            f"per_page={self._per_page}, total_entries={self._total_entries}, "
            f"items={list(self._items)!r})"
        )
