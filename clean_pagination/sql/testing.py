from typing import Any
from unittest import mock

from sqlalchemy.dialects import postgresql
from sqlalchemy.sql import Executable

from clean_pagination import Json
from clean_pagination.sql import SQLDatabase

__all__ = ["FakeSQLDatabase", "assert_query_equal"]


class FakeSQLDatabase(SQLDatabase):
    """Records queries instead of executing them.

    ``queries`` holds every compiled query (as SQLAlchemy object) and
    ``executed`` every round-trip as (sql, *args). Set ``result`` and
    ``rowcount`` (mocks) to control what is returned.
    """

    def __init__(self):
        self.queries: list[Executable] = []
        self.executed: list[tuple[Any, ...]] = []
        self.result = mock.Mock(return_value=[])
        self.rowcount = mock.Mock(return_value=0)

    def compile(
        self, query: Executable, bind_params: dict[str, Any] | None = None
    ) -> tuple[Any, ...]:
        self.queries.append(query)
        return super().compile(query, bind_params)

    async def fetch(self, sql: str, *args: Any) -> list[Json]:
        self.executed.append((sql, *args))
        return self.result()

    async def execute(self, sql: str, *args: Any) -> int:
        self.executed.append((sql, *args))
        return self.rowcount()


def assert_query_equal(q: Executable, expected: str, literal_binds: bool = True):
    """There are two ways of 'binding' parameters (for testing!):

    literal_binds=True: use the built-in sqlalchemy way, which fails on some datatypes (Range)
    literal_binds=False: do it yourself using %, there is no 'mogrify' so don't expect quotes.
    """
    assert isinstance(q, Executable)
    compiled = q.compile(
        compile_kwargs={"literal_binds": literal_binds},
        dialect=postgresql.dialect(),
    )
    if not literal_binds:
        actual = str(compiled) % compiled.params
    else:
        actual = str(compiled)
    actual = actual.replace("\n", "").replace("  ", " ")
    assert actual == expected
