"""
Explicitly registered finders.

A finder names a query intent ("posts by author", "posts by status and
author") and the model attributes its positional values filter on. Each
model declares its finders up front in a ``FinderRegistry``; there is no
resolution of finder names at call time beyond a dictionary lookup.

Example:
    ```python
    from pagewise.pagination import FinderRegistry, Finder

    post_finders = FinderRegistry(
        Finder(name="by_author_id", attributes=("author_id",)),
        Finder(
            name="by_status_and_author_id", attributes=("status", "author_id")
        ),
    )

    adapter = SQLModelAdapter(session, Post, apply_filters=exact_apply_filters)
    posts = await post_finders.paginate(
        adapter, "by_status_and_author_id", "published", 7, request={"page": 2}
    )
    ```
"""

from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict

from pagewise.exceptions import InvalidConfigError, UnknownFinderError
from pagewise.pagination.collection import PagedCollection
from pagewise.pagination.paginator import paginate
from pagewise.protocols import QueryAdapter
from pagewise.schemas.request import PageRequest, PaginationConfig


class Finder(BaseModel):
    """
    Query intent descriptor.

    Attributes:
        name: Name callers use to select the finder.
        attributes: Model attributes matched, in positional order, against
            the values passed to ``build_filters``.
        extra_filters: Fixed filters always added, e.g. ``{"deleted": False}``.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    attributes: tuple[str, ...]
    extra_filters: dict[str, Any] | None = None

    def build_filters(self, *values: Any) -> dict[str, Any]:
        if len(values) != len(self.attributes):
            raise InvalidConfigError(
                f"Finder '{self.name}' expects {len(self.attributes)} "
                f"value(s) for {', '.join(self.attributes)}, got {len(values)}"
            )
        filters = dict(self.extra_filters or {})
        filters.update(zip(self.attributes, values))
        return filters


class FinderRegistry:
    """Statically enumerated set of finders for one model."""

    def __init__(self, *finders: Finder):
        self._finders: dict[str, Finder] = {}
        for finder in finders:
            self.register(finder)

    def register(self, finder: Finder) -> Finder:
        if finder.name in self._finders:
            raise ValueError(f"Finder '{finder.name}' is already registered")
        self._finders[finder.name] = finder
        return finder

    def get(self, name: str) -> Finder:
        try:
            return self._finders[name]
        except KeyError:
            raise UnknownFinderError(f"No finder registered as '{name}'") from None

    def __contains__(self, name: object) -> bool:
        return name in self._finders

    def names(self) -> list[str]:
        return sorted(self._finders)

    def build_filters(self, name: str, *values: Any) -> dict[str, Any]:
        return self.get(name).build_filters(*values)

    async def paginate(
        self,
        adapter: QueryAdapter[Any],
        name: str,
        *values: Any,
        request: PageRequest | Mapping[str, Any] | None = None,
        total_entries: int | None = None,
        config: PaginationConfig | None = None,
    ) -> PagedCollection[Any]:
        """
        Paginate the records selected by a registered finder.

        Raises:
            UnknownFinderError: If ``name`` is not registered.
            InvalidConfigError: If the number of values does not match the
                finder's attributes, or per_page is invalid.
        """
        filters = self.build_filters(name, *values)
        return await paginate(
            adapter,
            request,
            filters=filters,
            total_entries=total_entries,
            config=config,
        )
