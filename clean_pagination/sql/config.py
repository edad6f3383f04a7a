# (c) Nelen & Schuurmans

from typing import Literal

from clean_pagination import ValueObject

from .asyncpg_sql_database import AsyncpgSQLDatabase

__all__ = ["SQLConfig"]


class SQLConfig(ValueObject):
    url: str
    pool_size: int = 1
    isolation_level: Literal[
        "serializable", "repeatable_read", "read_committed", "read_uncommitted"
    ] = "repeatable_read"

    def apply(self) -> AsyncpgSQLDatabase:
        return AsyncpgSQLDatabase(
            self.url, isolation_level=self.isolation_level, pool_size=self.pool_size
        )
