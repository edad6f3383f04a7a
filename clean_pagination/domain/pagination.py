# (c) Nelen & Schuurmans
"""Pagination value objects.

Two pagination methods are supported:

1. Offset/limit pagination (``OffsetPagination``): a page number times a page
   size. It needs the total number of records to know the page range.
2. Seek/keyset/cursor pagination (``SeekPagination``): an opaque cursor plus
   a limit. There is no total count, which keeps it cheap on large tables.

Reference:
- https://blog.jooq.org/2013/10/26/faster-sql-paging-with-jooq-using-the-seek-method/
"""

from collections.abc import MutableMapping
from typing import Any
from typing import Generic
from typing import TypeVar
from urllib.parse import parse_qsl
from urllib.parse import urlencode
from urllib.parse import urlsplit

from pydantic import BaseModel
from pydantic import PrivateAttr

__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_PER_PAGE",
    "OffsetPagination",
    "Page",
    "SeekPagination",
]

T = TypeVar("T")

DEFAULT_PER_PAGE = 20
DEFAULT_LIMIT = 10


def link(url: str, rel: str, **params: Any) -> str:
    """Render one entry of a Link header, with ``params`` replacing those in ``url``.

    Only the path and the query of ``url`` are used. The query parameters are
    sorted by key.
    """
    parts = urlsplit(url)
    query = [
        (k, v)
        for (k, v) in parse_qsl(parts.query, keep_blank_values=True)
        if k not in params
    ]
    query.extend((k, str(v)) for (k, v) in params.items())
    query.sort(key=lambda x: x[0])
    return f'<{parts.path}?{urlencode(query)}>; rel="{rel}"'


class OffsetPagination(BaseModel):
    """Paging info for the offset pagination method.

    The object normalizes itself on every accessor call, so ``page`` and
    ``per_page`` may be assigned freely (e.g. from request parameters).
    """

    page: int = 0
    per_page: int = 0
    count_pages: int = 0
    count_records: int = 0

    _default_per_page: int = PrivateAttr(default=DEFAULT_PER_PAGE)

    def __init__(self, default_per_page: int = DEFAULT_PER_PAGE, **data: Any):
        super().__init__(**data)
        self._default_per_page = default_per_page
        self._normalize()

    def set_default_per_page(self, default_per_page: int) -> int:
        self._default_per_page = default_per_page
        self._normalize()
        return self._default_per_page

    @property
    def limit(self) -> int:
        self._normalize()
        return self.per_page

    @property
    def offset(self) -> int:
        """The number of records skipped before the current page"""
        self._normalize()
        return (self.page - 1) * self.per_page

    @property
    def current_page(self) -> int:
        self._normalize()
        return self.page

    @property
    def page_size(self) -> int:
        self._normalize()
        return self.per_page

    def set_count_records(self, total: int) -> None:
        self.count_records = total
        self._normalize()

    def _normalize(self) -> None:
        if self._default_per_page <= 0:
            self._default_per_page = DEFAULT_PER_PAGE
        if self.page <= 0:
            self.page = 1
        if self.per_page <= 0:
            self.per_page = self._default_per_page
        if self.count_records < 0:
            self.count_records = 0
        self.count_pages = -(-self.count_records // self.per_page)

    def link_header(self, url: str) -> str:
        """Compose a Link header, see https://www.w3.org/wiki/LinkHeader

        For example: ``</users?page=1>; rel="first", </users?page=3>; rel="last"``
        """
        self._normalize()
        links = [link(url, "first", page=1)]
        if self.page > 1:
            links.append(link(url, "prev", page=self.page - 1))
        # NB: strict comparison, so there is no "next" on the second-to-last page
        if self.page + 1 < self.count_pages:
            links.append(link(url, "next", page=self.page + 1))
        links.append(link(url, "last", page=self.count_pages))
        return ", ".join(links)

    def x_pagination_header(self) -> str:
        """Compose '{page},{per_page},{count_pages},{count_records}'

        For example: ``X-Pagination: 1,20,10,200``
        """
        self._normalize()
        return ",".join(
            str(x)
            for x in (self.page, self.per_page, self.count_pages, self.count_records)
        )

    def set_response_headers(self, headers: MutableMapping[str, str], url: str) -> None:
        headers["Link"] = self.link_header(url)
        headers["X-Pagination"] = self.x_pagination_header()

    def __str__(self) -> str:
        return "OffsetPagination#" + self.x_pagination_header()


class SeekPagination:
    """Paging info for the seek pagination method.

    The cursor is opaque: its format is defined by the caller.
    """

    def __init__(self, default_limit: int = DEFAULT_LIMIT):
        if default_limit <= 0:
            default_limit = DEFAULT_LIMIT
        self.default_limit = default_limit
        self._limit = 0
        self._cursor = ""

    @property
    def limit(self) -> int:
        self._normalize()
        return self._limit

    @limit.setter
    def limit(self, value: int) -> None:
        self._limit = value
        self._normalize()

    @property
    def cursor(self) -> str:
        return self._cursor

    @cursor.setter
    def cursor(self, value: str) -> None:
        self._cursor = value

    def _normalize(self) -> None:
        if self._limit <= 0:
            self._limit = self.default_limit

    def link_header(self, url: str) -> str:
        return link(url, "next", limit=self.limit, cursor=self.cursor)

    def x_pagination_header(self) -> str:
        """Compose '{cursor},{limit}', e.g. ``X-Pagination: dXNlcjoxMCwz,20``"""
        return f"{self.cursor},{self.limit}"

    def set_response_headers(self, headers: MutableMapping[str, str], url: str) -> None:
        headers["Link"] = self.link_header(url)
        headers["X-Pagination"] = self.x_pagination_header()

    def __repr__(self) -> str:
        return f"SeekPagination(limit={self.limit}, cursor={self.cursor!r})"


class Page(BaseModel, Generic[T]):
    items: list[T]
    pagination: OffsetPagination
