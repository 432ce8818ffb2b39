"""Typed results returned by operations whose failures callers must handle."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Reasons an operation could not produce a value."""

    UPSTREAM_UNAVAILABLE = "upstream_unavailable"
    STORE_UNAVAILABLE = "store_unavailable"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either a value or an :class:`ErrorKind` with a human readable detail.

    ``NOT_FOUND`` means the store answered and nothing matched. The
    ``*_UNAVAILABLE`` kinds mean the answer could not be determined.
    """

    value: T | None = None
    error: ErrorKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: ErrorKind, detail: str | None = None) -> "Result[T]":
        return cls(error=error, detail=detail)


__all__ = ["ErrorKind", "Result"]
