"""Uniform outcome of a store request: success(value) or failure(error)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Generic, Optional, TypeVar

from .errors import StoreError

T = TypeVar("T")


@dataclass(frozen=True)
class StoreResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[StoreError] = None

    @classmethod
    def success(cls, value: Optional[T] = None) -> "StoreResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: StoreError) -> "StoreResult[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_code(self) -> str:
        return self.error.code if self.error else ""

    def unwrap(self) -> Optional[T]:
        """Return the value or re-raise the store error."""
        if self.error is not None:
            raise self.error
        return self.value


def capture(fn: Callable[..., T], *args, **kwargs) -> StoreResult[T]:
    """Run a store operation and fold StoreError into a failed result."""
    try:
        return StoreResult.success(fn(*args, **kwargs))
    except StoreError as exc:
        return StoreResult.failure(exc)
