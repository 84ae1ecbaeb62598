from typing import Generic

from pydantic import BaseModel, Field
from typing_extensions import Annotated

from pagewise.schemas.generic_typing import ItemType


class MetadataModel(BaseModel):  # type: ignore[misc]
    page: Annotated[int, Field(ge=1)]
    per_page: Annotated[int, Field(ge=1)]
    total: Annotated[int, Field(ge=0)]
    pages: Annotated[int, Field(ge=0)]
    offset: Annotated[int, Field(ge=0)]
    out_of_bounds: bool = False
    previous_page: int | None = None
    next_page: int | None = None


class PaginatedResponseModel(BaseModel, Generic[ItemType]):  # type: ignore[misc]
    items: list[ItemType]
    meta: MetadataModel
