"""
Page request resolution.

Turns the page parameters a caller supplied into the concrete offset/limit
window used by adapters and raw SQL pagination.
"""

from typing import Any, Mapping

from pydantic import ValidationError

from pagewise.exceptions import InvalidConfigError
from pagewise.logging import logger
from pagewise.schemas.request import PageRequest, PageWindow, PaginationConfig


def to_page_request(
    request: PageRequest | Mapping[str, Any] | None,
) -> PageRequest:
    """
    Normalize the accepted request shapes into a ``PageRequest``.

    Args:
        request: A ``PageRequest``, a mapping with optional ``page``,
            ``per_page`` and ``total_entries`` keys, or None for page 1
            with the default page size.

    Returns:
        PageRequest instance.

    Raises:
        InvalidConfigError: If per_page or total_entries is not an integer.
    """
    if request is None:
        return PageRequest()
    if isinstance(request, PageRequest):
        return request
    try:
        return PageRequest.model_validate(dict(request))
    except ValidationError as ex:
        fields = ", ".join(
            str(error["loc"][0]) for error in ex.errors() if error["loc"]
        )
        raise InvalidConfigError(
            f"Invalid page request ({fields}): {dict(request)!r}"
        ) from ex


def resolve_page_request(
    request: PageRequest | Mapping[str, Any] | None,
    config: PaginationConfig | None = None,
) -> PageWindow:
    """
    Resolve page parameters into an offset/limit window.

    ``per_page`` falls back to ``config.default_per_page`` and is capped at
    ``config.max_per_page``. The page number has already been clamped to 1
    or more by ``PageRequest``.

    Args:
        request: Page parameters (see ``to_page_request``).
        config: Pagination configuration. Defaults to the configuration
            built from application settings.

    Returns:
        PageWindow with page, per_page, offset and limit.

    Raises:
        InvalidConfigError: If per_page is not a positive integer after
            defaulting.

    Example:
        >>> resolve_page_request({"page": 3, "per_page": 20})
        PageWindow(page=3, per_page=20, offset=40, limit=20)
    """
    request = to_page_request(request)
    config = config or PaginationConfig.from_settings()

    per_page = request.per_page
    if per_page is None:
        per_page = config.default_per_page

    if per_page <= 0:
        raise InvalidConfigError(
            f"per_page must be a positive integer, got {per_page}"
        )

    if per_page > config.max_per_page:
        logger.debug(
            f"per_page {per_page} exceeds limit, capping at {config.max_per_page}"
        )
        per_page = config.max_per_page

    return PageWindow(
        page=request.page,
        per_page=per_page,
        offset=(request.page - 1) * per_page,
        limit=per_page,
    )
