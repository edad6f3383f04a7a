import pytest

from clean_pagination import DEFAULT_PER_PAGE
from clean_pagination import OffsetPagination
from clean_pagination import Page


@pytest.fixture
def pagination():
    return OffsetPagination(20)


def test_init_normalizes(pagination):
    assert pagination.page == 1
    assert pagination.per_page == 20
    assert pagination.count_pages == 0
    assert pagination.count_records == 0


@pytest.mark.parametrize("default_per_page", [0, -5])
def test_invalid_default_per_page(default_per_page):
    assert OffsetPagination(default_per_page).limit == DEFAULT_PER_PAGE


@pytest.mark.parametrize(
    "per_page,expected", [(-1, 20), (0, 20), (1, 1), (15, 15), (100, 100)]
)
def test_limit(pagination, per_page, expected):
    pagination.per_page = per_page
    assert pagination.limit == expected
    assert pagination.page_size == expected


@pytest.mark.parametrize("page,expected", [(-3, 1), (0, 1), (1, 1), (4, 4)])
def test_current_page(pagination, page, expected):
    pagination.page = page
    assert pagination.current_page == expected


@pytest.mark.parametrize(
    "page,per_page,expected",
    [(1, 20, 0), (2, 20, 20), (3, 10, 20), (0, 0, 0), (-1, 5, 0), (5, -1, 80)],
)
def test_offset(pagination, page, per_page, expected):
    pagination.page = page
    pagination.per_page = per_page
    assert pagination.offset == expected
    assert pagination.offset == (pagination.current_page - 1) * pagination.page_size


@pytest.mark.parametrize(
    "total,per_page,count_pages",
    [(0, 20, 0), (1, 20, 1), (20, 20, 1), (21, 20, 2), (45, 20, 3), (45, 15, 3)],
)
def test_set_count_records(pagination, total, per_page, count_pages):
    pagination.per_page = per_page
    pagination.set_count_records(total)
    assert pagination.count_records == total
    assert pagination.count_pages == count_pages


def test_set_count_records_negative(pagination):
    pagination.set_count_records(-10)
    assert pagination.count_records == 0
    assert pagination.count_pages == 0


def test_set_default_per_page(pagination):
    pagination.per_page = 0
    assert pagination.set_default_per_page(50) == 50
    assert pagination.per_page == 50


def test_set_default_per_page_invalid(pagination):
    assert pagination.set_default_per_page(-1) == DEFAULT_PER_PAGE


def test_set_default_per_page_keeps_explicit_per_page(pagination):
    pagination.per_page = 7
    pagination.set_default_per_page(50)
    assert pagination.limit == 7


def test_accessors_idempotent(pagination):
    pagination.page = -1
    pagination.per_page = 0
    pagination.set_count_records(33)
    first = (pagination.limit, pagination.offset, pagination.current_page)
    second = (pagination.limit, pagination.offset, pagination.current_page)
    assert first == second
    assert pagination.model_dump() == pagination.model_dump()


def test_init_with_values():
    pagination = OffsetPagination(10, page=3, per_page=0)
    assert pagination.current_page == 3
    assert pagination.page_size == 10


@pytest.mark.parametrize(
    "page,count_pages,expected",
    [
        (
            2,
            5,
            '</users?page=1>; rel="first", '
            '</users?page=1>; rel="prev", '
            '</users?page=3>; rel="next", '
            '</users?page=5>; rel="last"',
        ),
        (
            5,
            5,
            '</users?page=1>; rel="first", '
            '</users?page=4>; rel="prev", '
            '</users?page=5>; rel="last"',
        ),
        (
            1,
            5,
            '</users?page=1>; rel="first", '
            '</users?page=2>; rel="next", '
            '</users?page=5>; rel="last"',
        ),
        # next is omitted on the second-to-last page
        (
            4,
            5,
            '</users?page=1>; rel="first", '
            '</users?page=3>; rel="prev", '
            '</users?page=5>; rel="last"',
        ),
        (1, 0, '</users?page=1>; rel="first", </users?page=0>; rel="last"'),
    ],
)
def test_link_header(page, count_pages, expected):
    pagination = OffsetPagination(10, page=page)
    pagination.set_count_records(count_pages * 10)
    assert pagination.link_header("https://api.example.com/users") == expected


def test_link_header_keeps_query():
    pagination = OffsetPagination(10, page=2)
    pagination.set_count_records(50)
    actual = pagination.link_header("https://host/users?q=a+b&page=2&per_page=10")
    assert actual.split(", ")[0] == '</users?page=1&per_page=10&q=a+b>; rel="first"'
    assert actual.split(", ")[2] == '</users?page=3&per_page=10&q=a+b>; rel="next"'


def test_x_pagination_header():
    pagination = OffsetPagination(20, page=2)
    pagination.set_count_records(45)
    assert pagination.x_pagination_header() == "2,20,3,45"
    assert str(pagination) == "OffsetPagination#2,20,3,45"


def test_set_response_headers():
    pagination = OffsetPagination(20)
    pagination.set_count_records(45)
    headers: dict[str, str] = {}
    pagination.set_response_headers(headers, "http://testserver/books")
    assert headers == {
        "Link": (
            '</books?page=1>; rel="first", '
            '</books?page=2>; rel="next", '
            '</books?page=3>; rel="last"'
        ),
        "X-Pagination": "1,20,3,45",
    }


def test_model_dump():
    pagination = OffsetPagination(20, page=2)
    pagination.set_count_records(45)
    assert pagination.model_dump() == {
        "page": 2,
        "per_page": 20,
        "count_pages": 3,
        "count_records": 45,
    }


def test_copy_is_independent(pagination):
    copied = pagination.model_copy()
    copied.set_count_records(100)
    copied.page = 3
    assert pagination.count_records == 0
    assert pagination.page == 1


def test_page():
    pagination = OffsetPagination()
    page = Page[int](items=[1, 2], pagination=pagination)
    assert page.items == [1, 2]
    assert page.pagination is pagination
