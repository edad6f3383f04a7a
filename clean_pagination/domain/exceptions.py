# (c) Nelen & Schuurmans

from enum import Enum
from typing import Any

from pydantic import ValidationError
from pydantic_core import ErrorDetails

from .types import Id

__all__ = [
    "AlreadyExists",
    "BadRequest",
    "Conflict",
    "DoesNotExist",
    "PaginationConfigError",
    "QueryAssemblyError",
    "QueryError",
    "QueryExecutionError",
    "QueryPhase",
]


class DoesNotExist(Exception):
    def __init__(self, name: str, id: Id | None = None):
        super().__init__()
        self.name = name
        self.id = id

    def __str__(self):
        if self.id:
            return f"does not exist: {self.name} with id={self.id}"
        else:
            return f"does not exist: {self.name}"


class Conflict(Exception):
    def __init__(self, msg: str | None = None):
        super().__init__(msg)


class AlreadyExists(Exception):
    def __init__(self, value: Any = None, key: str = "id"):
        super().__init__(f"record with {key}={value} already exists")


class BadRequest(Exception):
    def __init__(self, err_or_msg: ValidationError | str):
        self._internal_error = err_or_msg
        super().__init__(err_or_msg)

    def errors(self) -> list[ErrorDetails]:
        if isinstance(self._internal_error, ValidationError):
            return self._internal_error.errors()
        return [
            ErrorDetails(
                type="value_error",
                msg=self._internal_error,
                loc=[],  # type: ignore
                input=None,
            )
        ]

    def __str__(self) -> str:
        error = self._internal_error
        if isinstance(error, ValidationError):
            details = error.errors()[0]
            loc = "'" + ",".join([str(x) for x in details["loc"]]) + "' "
            if loc == "'*' ":
                loc = ""
            return f"validation error: {loc}{details['msg']}"
        return f"validation error: {super().__str__()}"


class PaginationConfigError(ValueError):
    def __init__(self, msg: str = "only one pagination option is allowed"):
        super().__init__(msg)


class QueryPhase(str, Enum):
    COUNT = "count"
    DATA = "data"


class QueryError(Exception):
    """Failure of one of the round-trips of a list operation.

    The underlying exception is available as ``__cause__``.
    """

    action: str = "run"

    def __init__(self, phase: QueryPhase, msg: str | None = None):
        self.phase = QueryPhase(phase)
        super().__init__(msg or f"{self.action} {self.phase.value} query")


class QueryAssemblyError(QueryError):
    action = "assemble"


class QueryExecutionError(QueryError):
    action = "execute"
