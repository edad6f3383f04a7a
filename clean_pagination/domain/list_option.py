# (c) Nelen & Schuurmans

from collections.abc import Callable
from collections.abc import Iterable
from enum import Enum
from typing import Any
from typing import ClassVar
from typing import Literal

from pydantic import field_validator
from sqlalchemy import and_
from sqlalchemy import literal_column
from sqlalchemy import or_
from sqlalchemy import Select

from .pagination import OffsetPagination
from .types import Id
from .value_object import ValueObject

__all__ = [
    "categorize",
    "Filter",
    "FilterFunc",
    "ListOption",
    "OffsetPaging",
    "OptionCategory",
    "Sort",
]


class OptionCategory(str, Enum):
    FILTERING = "filtering"
    SORTING = "sorting"
    PAGING = "paging"


class ListOption(ValueObject):
    """A condition that is applied to a SELECT query.

    Subclasses set ``category``; list operations use it to decide when an
    option is applied (filters before counting, sorting and paging after).
    """

    category: ClassVar[OptionCategory]

    def apply(self, query: Select) -> Select:
        raise NotImplementedError()


class Filter(ListOption):
    """Filter on a column.

    No values: the query is unchanged. One value: ``field = value``. Multiple
    values: ``field = value1 OR field = value2 ...`` (equivalent to IN).

    With ``negate=True`` the conditions become ``<>`` combined with AND
    (equivalent to NOT IN).
    """

    category = OptionCategory.FILTERING

    field: str
    values: list[Any]
    negate: bool = False

    @classmethod
    def for_id(cls, id: Id) -> "Filter":
        return cls(field="id", values=[id])

    @classmethod
    def exclude(cls, field: str, *values: Any) -> "Filter":
        return cls(field=field, values=list(values), negate=True)

    def apply(self, query: Select) -> Select:
        if len(self.values) == 0:
            return query
        column = literal_column(self.field)
        if self.negate:
            return query.where(and_(*[column != x for x in self.values]))
        else:
            return query.where(or_(*[column == x for x in self.values]))


class FilterFunc(ListOption):
    """Adapter to use an ordinary function as a filtering option"""

    category = OptionCategory.FILTERING

    func: Callable[[Select], Select]

    def apply(self, query: Select) -> Select:
        return self.func(query)


class Sort(ListOption):
    category = OptionCategory.SORTING

    field: str
    direction: Literal["asc", "desc"] = "asc"

    def apply(self, query: Select) -> Select:
        column = literal_column(self.field)
        if self.direction == "desc":
            return query.order_by(column.desc())
        return query.order_by(column.asc())


class OffsetPaging(ListOption):
    """Limit the result to one page.

    The pagination is copied on construction; changing the original afterwards
    has no effect on this option.
    """

    category = OptionCategory.PAGING

    pagination: OffsetPagination

    @field_validator("pagination")
    @classmethod
    def copy_pagination(cls, v: OffsetPagination) -> OffsetPagination:
        return v.model_copy()

    def apply(self, query: Select) -> Select:
        return query.limit(self.pagination.limit).offset(self.pagination.offset)


def categorize(
    options: Iterable[ListOption],
) -> tuple[list[ListOption], list[ListOption], list[ListOption]]:
    """Split options into (filtering, paging, sorting), keeping their order"""
    result: dict[OptionCategory, list[ListOption]] = {x: [] for x in OptionCategory}
    for option in options:
        result[option.category].append(option)
    return (
        result[OptionCategory.FILTERING],
        result[OptionCategory.PAGING],
        result[OptionCategory.SORTING],
    )
