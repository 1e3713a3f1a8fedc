"""FetchResult - explicit success/failure for venue calls.

A successful result holding ``None`` means the venue confirmed there is nothing
(e.g. 404); a failed result means the data could not be fetched right now.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    value: T | None = None
    error: str | None = None

    @classmethod
    def success(cls, value: T | None) -> FetchResult[T]:
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> FetchResult[T]:
        return cls(error=error or "unknown error")

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, default: T) -> T:
        if self.ok and self.value is not None:
            return self.value
        return default

    def map(self, fn: Callable[[T], U]) -> FetchResult[U]:
        """Apply fn to a present value; failures and empty successes pass through."""
        if not self.ok:
            return FetchResult(error=self.error)
        if self.value is None:
            return FetchResult()
        return FetchResult(value=fn(self.value))
