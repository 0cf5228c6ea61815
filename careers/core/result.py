"""
Result pattern for store operations.

Store calls never raise for expected outcomes; they return ``Success`` or
``Failure`` and callers branch on it:

    result = await store.load(scope)
    match result:
        case Success(slots):
            ...
        case Failure(error):
            logger.warning("load failed: %s", error.code)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar, Union, cast

T = TypeVar("T")
E = TypeVar("E")


@dataclass(frozen=True, slots=True)
class Success(Generic[T]):
    """Represents a successful operation result."""

    value: T

    def is_success(self) -> bool:
        return True

    def is_failure(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value

    def __repr__(self) -> str:
        return f"Success({self.value!r})"


@dataclass(frozen=True, slots=True)
class Failure(Generic[E]):
    """Represents a failed operation result."""

    error: E

    def is_success(self) -> bool:
        return False

    def is_failure(self) -> bool:
        return True

    def unwrap(self) -> T:
        """Raise instead of returning a value."""
        if isinstance(self.error, Exception):
            raise self.error
        raise RuntimeError(f"Operation failed: {self.error}")

    def __repr__(self) -> str:
        return f"Failure({self.error!r})"


Result = Union[Success[T], Failure[E]]


def success(value: T) -> Success[T]:
    return Success(value)


def failure(error: E) -> Failure[E]:
    return Failure(error)


def collect_results(results: list[Result[T, E]]) -> Result[list[T], E]:
    """
    Collect a list of Results into a single Result.

    Returns the first Failure if there is one, otherwise Success with all
    values in order.
    """
    values: list[T] = []
    for result in results:
        if result.is_failure():
            return cast(Result[list[T], E], result)
        values.append(result.unwrap())
    return Success(values)


__all__ = [
    "Success",
    "Failure",
    "Result",
    "success",
    "failure",
    "collect_results",
]
