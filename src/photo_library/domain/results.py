"""Operation outcomes shared by services."""

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(StrEnum):
    """Categories of rejected operations."""

    DUPLICATE_NAME = "DuplicateName"
    DUPLICATE_TAG = "DuplicateTag"
    DUPLICATE_PHOTO = "DuplicatePhoto"
    TAG_CAPACITY_EXCEEDED = "TagCapacityExceeded"
    NOT_FOUND = "NotFound"
    INVALID_INPUT = "InvalidInput"
    PERSISTENCE_FAILURE = "PersistenceFailure"


class PersistenceError(Exception):
    """Raised when the durable store cannot be read or written."""


@dataclass(frozen=True)
class OperationResult(Generic[T]):
    """Success flag plus a reason for presentation code."""

    ok: bool
    value: T | None = None
    kind: ErrorKind | None = None
    reason: str | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "OperationResult[T]":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, reason: str) -> "OperationResult[T]":
        return cls(ok=False, kind=kind, reason=reason)

    def __bool__(self) -> bool:
        return self.ok
