import pytest
from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy import insert
from sqlalchemy import select
from sqlalchemy import update

from clean_pagination import AlreadyExists
from clean_pagination import Filter
from clean_pagination import OffsetPagination
from clean_pagination import OffsetPaging
from clean_pagination import Sort
from clean_pagination.sql import SQLRunner

from .sql_model import test_model


class Record(BaseModel):
    id: int
    t: str
    b: bool


@pytest.fixture
def runner(database_with_cleanup):
    return SQLRunner(database_with_cleanup)


@pytest.fixture
async def records(runner):
    for i in range(45):
        await runner.exec(insert(test_model).values(t=f"t{i % 3}", b=i % 2 == 0))


async def test_exec_insert(runner):
    assert await runner.exec(insert(test_model).values(t="foo", b=True)) == 1


async def test_exec_update(runner, records):
    query = update(test_model).where(test_model.c.t == "t0").values(b=False)
    assert await runner.exec(query) == 15


async def test_exec_already_exists(runner, records):
    with pytest.raises(AlreadyExists):
        await runner.exec(insert(test_model).values(id=1, t="foo", b=True))


async def test_get(runner, records):
    actual = await runner.get(Record, select(test_model).where(test_model.c.id == 3))
    assert actual == Record(id=3, t="t2", b=True)


async def test_get_does_not_exist(runner, records):
    query = select(test_model).where(test_model.c.id == 99)
    assert await runner.get(Record, query) is None


async def test_list_empty(runner):
    page = await runner.list(Record, select(test_model))

    assert page.items == []
    assert page.pagination.count_pages == 0


async def test_list(runner, records):
    page = await runner.list(
        Record,
        select(test_model),
        Sort(field="id", direction="desc"),
        OffsetPaging(pagination=OffsetPagination(10, page=2)),
    )

    assert [x.id for x in page.items] == list(range(35, 25, -1))
    assert page.pagination.count_records == 45
    assert page.pagination.count_pages == 5


async def test_list_filter(runner, records):
    page = await runner.list(
        Record,
        select(test_model),
        Filter(field="t", values=["t0", "t1"]),
        Filter.exclude("b", True),
        Sort(field="id"),
    )

    assert page.pagination.count_records == 15
    assert all(x.t in ("t0", "t1") and not x.b for x in page.items)


async def test_list_out_of_range(runner, records):
    page = await runner.list(
        Record, select(test_model), OffsetPaging(pagination=OffsetPagination(page=4))
    )

    assert page.items == []
    assert page.pagination.page == 4
    assert page.pagination.count_pages == 3


async def test_list_group_by(runner, records):
    query = select(test_model.c.t, func.count().label("n")).group_by(test_model.c.t)

    page = await runner.list(dict, query, Sort(field="t"))

    assert page.pagination.count_records == 3
    assert page.items == [
        {"t": "t0", "n": 15},
        {"t": "t1", "n": 15},
        {"t": "t2", "n": 15},
    ]
