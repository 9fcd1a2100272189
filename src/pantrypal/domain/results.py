"""Typed results returned by application services."""

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

ResultKind = Literal["ok", "bad-data", "not-found", "server", "unauthorized"]


@dataclass(frozen=True)
class ApiResult(Generic[T]):
    """Outcome of a remote operation that callers can branch on."""

    kind: ResultKind
    data: T | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        """Return True when the operation succeeded."""
        return self.kind == "ok"

    @classmethod
    def success(cls, data: T | None = None) -> "ApiResult[T]":
        """Build a successful result."""
        return cls(kind="ok", data=data)

    @classmethod
    def failure(cls, kind: ResultKind, error: str) -> "ApiResult[T]":
        """Build a failed result with a message."""
        return cls(kind=kind, error=error)
