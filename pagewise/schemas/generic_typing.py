from typing import Any, Callable, Type, TypeVar

from sqlalchemy import Select
from sqlmodel import SQLModel

GenericSQLModelType = TypeVar("GenericSQLModelType", bound=SQLModel)

# Item type of a paged collection; not tied to SQLModel rows
ItemType = TypeVar("ItemType")

ApplyFiltersType = Callable[
    [Select[Any], Type[GenericSQLModelType], dict[str, Any]], Select[Any]
]
