from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar

from .enums import FailureCode
from .exceptions import LedgerError

T = TypeVar("T")


@dataclass(frozen=True)
class Failure:
    code: FailureCode
    message: str


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or a typed failure; used where misuse is data, not a crash."""

    value: Optional[T] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, code: FailureCode, message: str) -> "Result[T]":
        return cls(failure=Failure(code=code, message=message))

    def unwrap(self) -> T:
        if self.failure is not None:
            raise LedgerError(f"{self.failure.code.value}: {self.failure.message}")
        return self.value  # type: ignore[return-value]
