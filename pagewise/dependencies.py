"""
FastAPI dependencies for paginated endpoints.

Example:
    ```python
    from fastapi import APIRouter
    from pagewise.dependencies import PageRequestDep

    router = APIRouter()

    @router.get("/posts")
    async def list_posts(page_request: PageRequestDep, session: SessionDep):
        adapter = SQLModelAdapter(session, Post, order_by=[Post.id])
        posts = await paginate(adapter, page_request)
        return posts.to_response()
    ```
"""

from typing import Annotated

from fastapi import Depends, Query

from pagewise.schemas.request import PageRequest


def page_request_params(
    page: Annotated[
        str | None,
        Query(description="Page number, 1-indexed; invalid values mean 1"),
    ] = None,
    per_page: Annotated[
        int | None,
        Query(ge=1, description="Items per page (default from settings)"),
    ] = None,
) -> PageRequest:
    """
    Build a ``PageRequest`` from query parameters.

    ``page`` is taken as a raw string so that missing, non-numeric and
    non-positive values all fall back to page 1 in ``PageRequest``. A
    non-integer or non-positive per_page is rejected by FastAPI validation
    (HTTP 422).
    """
    return PageRequest(page=page, per_page=per_page)


PageRequestDep = Annotated[PageRequest, Depends(page_request_params)]
