# (c) Nelen & Schuurmans

from typing import Any

from sqlalchemy.dialects.postgresql.asyncpg import dialect as asyncpg_dialect
from sqlalchemy.engine import Dialect
from sqlalchemy.sql import Executable

from clean_pagination import DoesNotExist
from clean_pagination import Json

__all__ = ["SQLProvider", "SQLDatabase"]


DIALECT = asyncpg_dialect()


class SQLProvider:
    dialect: Dialect = DIALECT

    def compile(
        self, query: Executable, bind_params: dict[str, Any] | None = None
    ) -> tuple[Any, ...]:
        """Render a query to (sql, *positional_args).

        See https://docs.sqlalchemy.org/en/20/faq/sqlexpressions.html
        Note that this circumvents the SQLAlchemy caching system.
        """
        compiled = query.compile(
            dialect=self.dialect, compile_kwargs={"render_postcompile": True}
        )
        params = (
            compiled.params
            if bind_params is None
            else {**compiled.params, **bind_params}
        )
        # add params in positional order
        return (str(compiled),) + tuple(params[k] for k in compiled.positiontup or ())

    async def fetch(self, sql: str, *args: Any) -> list[Json]:
        raise NotImplementedError()

    async def fetch_one(self, sql: str, *args: Any) -> Json:
        result = await self.fetch(sql, *args)
        if not result:
            raise DoesNotExist("record")
        return result[0]

    async def execute(self, sql: str, *args: Any) -> int:
        """Execute a statement and return the number of affected rows"""
        raise NotImplementedError()


class SQLDatabase(SQLProvider):
    async def dispose(self) -> None:
        pass

    async def ping(self) -> None:
        await self.fetch("SELECT 1")
