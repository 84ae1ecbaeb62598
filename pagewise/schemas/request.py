from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pagewise.constants import FIRST_PAGE, HARD_MAX_PAGE_SIZE
from pagewise.settings import Settings, app_settings


class PaginationConfig(BaseModel):  # type: ignore[misc]
    """
    Explicit pagination configuration threaded through every call.

    Replaces a process-wide mutable default page size. Build one from the
    environment with ``PaginationConfig.from_settings()`` or construct it
    directly for a specific model or endpoint.
    """

    model_config = ConfigDict(frozen=True)

    default_per_page: int = 30
    max_per_page: int = Field(default=1000, ge=1, le=HARD_MAX_PAGE_SIZE)

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "PaginationConfig":
        settings = settings or app_settings
        return cls(
            default_per_page=settings.DEFAULT_PAGE_SIZE,
            max_per_page=min(settings.MAX_PAGE_SIZE, HARD_MAX_PAGE_SIZE),
        )


class PageRequest(BaseModel):  # type: ignore[misc]
    """
    Page parameters as supplied by a caller.

    ``page`` is coerced to 1 when missing, non-numeric or below 1.
    ``per_page`` stays ``None`` until the resolver applies the configured
    default. ``total_entries`` lets callers bypass the count query.
    """

    model_config = ConfigDict(frozen=True)

    page: int = FIRST_PAGE
    per_page: int | None = None
    total_entries: int | None = None

    @field_validator("page", mode="before")
    @classmethod
    def coerce_page(cls, value: Any) -> int:
        try:
            page = int(value)
        except (TypeError, ValueError):
            return FIRST_PAGE
        return page if page >= FIRST_PAGE else FIRST_PAGE


class PageWindow(BaseModel):  # type: ignore[misc]
    """Resolved offset/limit window for a single page."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(ge=1)
    per_page: int = Field(ge=1)
    offset: int = Field(ge=0)
    limit: int = Field(ge=1)
