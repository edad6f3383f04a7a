# (c) Nelen & Schuurmans

from fastapi import Query
from fastapi import Request
from fastapi import Response

from clean_pagination import DEFAULT_LIMIT
from clean_pagination import DEFAULT_PER_PAGE
from clean_pagination import OffsetPagination
from clean_pagination import SeekPagination
from clean_pagination import ValueObject

__all__ = ["OffsetPaginationQuery", "SeekPaginationQuery", "set_pagination_headers"]


class OffsetPaginationQuery(ValueObject):
    """Query parameters for offset pagination on list endpoints.

    Example usage in a FastAPI route:

        @app.get("/books")
        async def list_books(
            q: Annotated[OffsetPaginationQuery, Query()],
            request: Request,
            response: Response,
        ):
            page = await runner.list(
                Book, select(books), OffsetPaging(pagination=q.as_pagination())
            )
            set_pagination_headers(response, request, page.pagination)
            return page.items
    """

    page: int = Query(1, ge=1, description="Page number, starting at 1")
    per_page: int = Query(DEFAULT_PER_PAGE, ge=1, le=100, description="Page size")

    def as_pagination(
        self, default_per_page: int = DEFAULT_PER_PAGE
    ) -> OffsetPagination:
        return OffsetPagination(
            default_per_page, page=self.page, per_page=self.per_page
        )


class SeekPaginationQuery(ValueObject):
    limit: int | None = Query(None, ge=1, le=100, description="Page size limit")
    cursor: str = Query("", description="Position to continue from")

    def as_pagination(self, default_limit: int = DEFAULT_LIMIT) -> SeekPagination:
        result = SeekPagination(default_limit)
        result.limit = self.limit or 0
        result.cursor = self.cursor
        return result


def set_pagination_headers(
    response: Response,
    request: Request,
    pagination: OffsetPagination | SeekPagination,
) -> None:
    """Write the Link and X-Pagination headers"""
    pagination.set_response_headers(response.headers, str(request.url))
