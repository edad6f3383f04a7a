# (c) Nelen & Schuurmans

import json
import logging
import re
from typing import Any

import asyncpg
from async_lru import alru_cache

from clean_pagination import AlreadyExists
from clean_pagination import Conflict
from clean_pagination import DoesNotExist
from clean_pagination import Json

from .sql_provider import SQLDatabase

__all__ = ["AsyncpgSQLDatabase"]

logger = logging.getLogger(__name__)


UNIQUE_VIOLATION_DETAIL_REGEX = re.compile(
    r"Key\s\((?P<key>.*)\)=\((?P<value>.*)\)\s+already exists"
)


def convert_unique_violation_error(
    e: asyncpg.exceptions.UniqueViolationError,
) -> AlreadyExists:
    match = UNIQUE_VIOLATION_DETAIL_REGEX.match(e.detail or "")
    if match:
        return AlreadyExists(key=match["key"], value=match["value"])
    else:
        return AlreadyExists()


def parse_status(status: str) -> int:
    """Get the affected row count from a command status like 'UPDATE 3'"""
    last = status.rsplit(" ", 1)[-1]
    return int(last) if last.isdigit() else 0


async def init_db_types(conn: asyncpg.Connection):
    await conn.set_type_codec(
        "json", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
    )
    await conn.set_type_codec(
        "jsonb", encoder=json.dumps, decoder=json.loads, schema="pg_catalog"
    )


class AsyncpgSQLDatabase(SQLDatabase):
    """Process-wide connection pool, created on first use.

    Bind it with inject to make it the default for all SQLRunners:

        database = AsyncpgSQLDatabase(url)
        inject.configure(lambda binder: binder.bind(SQLDatabase, database))
    """

    def __init__(
        self, url: str, *, isolation_level: str = "repeatable_read", pool_size: int = 1
    ):
        self.url = url
        self.pool_size = pool_size
        self.isolation_level = isolation_level

    @alru_cache
    async def get_pool(self) -> asyncpg.Pool:
        logger.info(f"creating connection pool of size {self.pool_size}")
        # Note: disable JIT because it makes the initial queries very slow
        # see https://github.com/MagicStack/asyncpg/issues/530
        return await asyncpg.create_pool(
            f"postgresql://{self.url}",
            server_settings={"jit": "off"},
            min_size=1,
            max_size=self.pool_size,
            init=init_db_types,
        )

    async def dispose(self) -> None:
        pool = await self.get_pool()
        await pool.close()
        self.get_pool.cache_clear()
        logger.info("closed connection pool")

    async def fetch(self, sql: str, *args: Any) -> list[Json]:
        pool = await self.get_pool()
        try:
            result = await pool.fetch(sql, *args)
        except asyncpg.exceptions.UniqueViolationError as e:
            raise convert_unique_violation_error(e)
        except asyncpg.exceptions.SerializationError:
            raise Conflict("could not execute query due to concurrent update")
        return list(map(dict, result))

    async def fetch_one(self, sql: str, *args: Any) -> Json:
        pool = await self.get_pool()
        try:
            result = await pool.fetchrow(sql, *args)
        except asyncpg.exceptions.UniqueViolationError as e:
            raise convert_unique_violation_error(e)
        except asyncpg.exceptions.SerializationError:
            raise Conflict("could not execute query due to concurrent update")
        if result is None:
            raise DoesNotExist("record")
        return dict(result)

    async def execute(self, sql: str, *args: Any) -> int:
        pool = await self.get_pool()
        connection: asyncpg.Connection
        async with pool.acquire() as connection:
            async with connection.transaction(isolation=self.isolation_level):
                try:
                    status = await connection.execute(sql, *args)
                except asyncpg.exceptions.UniqueViolationError as e:
                    raise convert_unique_violation_error(e)
                except asyncpg.exceptions.SerializationError:
                    raise Conflict("could not execute query due to concurrent update")
        return parse_status(status)
