"""Tagged success/failure result returned by value-object factories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from ..core.exceptions import ValidationException

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Outcome of a validating factory.

    Expected validation failures are returned, not raised; call ``unwrap()``
    to convert a failure into a ``ValidationException``.
    """

    is_success: bool
    _value: Optional[T] = None
    error: str = ""

    def __post_init__(self) -> None:
        if self.is_success and self.error:
            raise ValueError("A successful result cannot have an error message.")
        if not self.is_success and not self.error:
            raise ValueError("A failed result must have an error message.")

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(is_success=True, _value=value)

    @classmethod
    def failure(cls, error: str) -> "Result[T]":
        return cls(is_success=False, error=error)

    @property
    def is_failure(self) -> bool:
        return not self.is_success

    @property
    def value(self) -> T:
        if self.is_failure:
            raise ValueError("Cannot access value on a failed result. Check is_success first.")
        return self._value  # type: ignore[return-value]

    def unwrap(self) -> T:
        """Return the value or raise ``ValidationException`` with the failure message."""
        if self.is_failure:
            raise ValidationException(self.error, code="VALIDATION_FAILED")
        return self._value  # type: ignore[return-value]

    def value_or(self, default: T) -> T:
        return self._value if self.is_success else default  # type: ignore[return-value]

    def map(self, mapper: Callable[[T], U]) -> "Result[U]":
        if self.is_failure:
            return Result.failure(self.error)
        return Result.success(mapper(self._value))  # type: ignore[arg-type]

    def bind(self, binder: Callable[[T], "Result[U]"]) -> "Result[U]":
        if self.is_failure:
            return Result.failure(self.error)
        return binder(self._value)  # type: ignore[arg-type]


def first_failure(*results: Result) -> Optional[Result]:
    """Return the first failed result, or None when all succeeded."""
    for result in results:
        if result.is_failure:
            return result
    return None
