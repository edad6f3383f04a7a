# (c) Nelen & Schuurmans

import logging
from typing import Any
from typing import TypeVar

import inject
from pydantic import TypeAdapter
from pydantic import ValidationError
from sqlalchemy import Select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.sql import Executable

from clean_pagination import categorize
from clean_pagination import DEFAULT_PER_PAGE
from clean_pagination import DoesNotExist
from clean_pagination import Json
from clean_pagination import ListOption
from clean_pagination import OffsetPagination
from clean_pagination import OffsetPaging
from clean_pagination import Page
from clean_pagination import PaginationConfigError
from clean_pagination import QueryAssemblyError
from clean_pagination import QueryExecutionError
from clean_pagination import QueryPhase

from .count_query import count_query
from .sql_provider import SQLDatabase
from .sql_provider import SQLProvider

__all__ = ["SQLRunner"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SQLRunner:
    """Runs SELECT queries for lists (with pagination) and single records.

    The database is taken from the inject binding of SQLDatabase, unless a
    provider is given explicitly.
    """

    def __init__(self, provider_override: SQLProvider | None = None):
        self.provider_override = provider_override

    @property
    def provider(self) -> SQLProvider:
        return self.provider_override or inject.instance(SQLDatabase)

    def _assemble(self, query: Executable, phase: QueryPhase) -> tuple[Any, ...]:
        try:
            return self.provider.compile(query)
        except SQLAlchemyError as e:
            raise QueryAssemblyError(phase) from e

    async def _fetch(self, query: Executable, phase: QueryPhase) -> list[Json]:
        args = self._assemble(query, phase)
        try:
            return await self.provider.fetch(*args)
        except Exception as e:
            raise QueryExecutionError(phase) from e

    async def _count(self, query: Select) -> int:
        rows = await self._fetch(count_query(query), QueryPhase.COUNT)
        if len(rows) != 1:
            raise QueryExecutionError(
                QueryPhase.COUNT, f"count query returned {len(rows)} rows"
            )
        return rows[0]["count"]

    async def list(
        self, model: type[T], query: Select, *options: ListOption
    ) -> Page[T]:
        """Get one page of the records selected by `query`.

        Filtering options are applied before counting the records. Sorting
        and paging options are applied after that, and only if the requested
        page is not empty.

        Example:

            >>> runner.list(
                User,
                select(users),
                Filter(field="status", values=["active"]),
                Sort(field="id", direction="desc"),
                OffsetPaging(pagination=OffsetPagination(page=2)),
            )
        """
        filtering, paging, sorting = categorize(options)
        if not paging:
            paging = [OffsetPaging(pagination=OffsetPagination(DEFAULT_PER_PAGE))]
        if len(paging) > 1:
            raise PaginationConfigError()
        (paging_option,) = paging
        assert isinstance(paging_option, OffsetPaging)
        pagination = paging_option.pagination

        for option in filtering:
            query = option.apply(query)

        pagination.set_count_records(await self._count(query))
        if (
            pagination.count_records == 0
            or pagination.current_page > pagination.count_pages
        ):
            logger.debug(f"skipping query, nothing to fetch for {pagination}")
            return Page[model](items=[], pagination=pagination)  # type: ignore

        for option in sorting:
            query = option.apply(query)
        query = paging_option.apply(query)

        rows = await self._fetch(query, QueryPhase.DATA)
        try:
            items = TypeAdapter(list[model]).validate_python(rows)  # type: ignore
        except ValidationError as e:
            raise QueryExecutionError(QueryPhase.DATA, "map data query rows") from e
        return Page[model](items=items, pagination=pagination)  # type: ignore

    async def get(self, model: type[T], query: Select) -> T | None:
        """Get a single record, or None if there is none.

        Example:

            >>> runner.get(User, select(users).where(users.c.email == "john@example"))
        """
        provider = self.provider
        try:
            row = await provider.fetch_one(*provider.compile(query))
        except DoesNotExist:
            return None
        return TypeAdapter(model).validate_python(row)

    async def exec(self, query: Executable) -> int:
        """Run an INSERT, UPDATE or DELETE and return the number of affected rows"""
        provider = self.provider
        return await provider.execute(*provider.compile(query))
