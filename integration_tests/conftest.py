# (c) Nelen & Schuurmans

import os

import asyncpg
import pytest
from sqlalchemy.schema import CreateTable

from clean_pagination.sql import AsyncpgSQLDatabase

from .sql_model import test_model


@pytest.fixture(scope="session")
def postgres_url():
    return os.environ.get("POSTGRES_URL", "postgres:postgres@localhost:5432")


@pytest.fixture(scope="session")
async def postgres_db_url(postgres_url) -> str:
    dbname = "cleanpagination_test"
    # CREATE DATABASE cannot run inside a transaction
    connection = await asyncpg.connect(f"postgresql://{postgres_url}")
    try:
        await connection.execute(f"DROP DATABASE IF EXISTS {dbname}")
        await connection.execute(f"CREATE DATABASE {dbname}")
    finally:
        await connection.close()
    return f"{postgres_url}/{dbname}"


@pytest.fixture(scope="session")
async def database(postgres_db_url):
    db = AsyncpgSQLDatabase(postgres_db_url, pool_size=2)
    await db.execute(str(CreateTable(test_model).compile(dialect=db.dialect)))
    yield db
    await db.dispose()


@pytest.fixture
async def database_with_cleanup(database):
    await database.execute('TRUNCATE TABLE "test_model" RESTART IDENTITY')
    yield database
    await database.execute('TRUNCATE TABLE "test_model" RESTART IDENTITY')
