"""Operation outcomes and the error taxonomy.

Missing paths, duplicate names and wrong node types are ordinary
events in a file system, not crashes.  Every namespace and router
operation therefore *returns* an ``Outcome`` instead of raising:

- ``Outcome.ok`` (and the outcome's truthiness) says whether it worked.
- ``Outcome.error`` classifies the failure with an ``FsError``.
- ``Outcome.value`` carries data for reads and listings.

Callers that would rather work with exceptions can call
``unwrap()``, which raises ``VfsError`` on failure.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class FsError(StrEnum):
    """Why an operation was rejected."""

    NOT_FOUND = "not found"
    WRONG_TYPE = "wrong type"
    ALREADY_EXISTS = "already exists"
    ROOT_VIOLATION = "root cannot be modified"
    ALREADY_MOUNTED = "already mounted"
    NOT_MOUNTED = "not mounted"


class VfsError(Exception):
    """Raise when an unwrapped outcome turns out to be a failure."""

    def __init__(self, error: FsError, path: str) -> None:
        """Record the failure kind and the path it concerns."""
        super().__init__(f"{path}: {error}")
        self.error = error
        self.path = path


@dataclass(frozen=True)
class Outcome(Generic[T]):
    """Result of a single operation: a value on success, an error otherwise."""

    value: T | None = None
    error: FsError | None = None
    path: str = ""

    @classmethod
    def success(cls, value: T | None = None, *, path: str = "") -> Outcome[T]:
        """Build a successful outcome."""
        return cls(value=value, path=path)

    @classmethod
    def failure(cls, error: FsError, *, path: str = "") -> Outcome[T]:
        """Build a failed outcome."""
        return cls(error=error, path=path)

    @property
    def ok(self) -> bool:
        """Return True when the operation succeeded."""
        return self.error is None

    def __bool__(self) -> bool:
        """Truthiness mirrors ``ok``."""
        return self.ok

    def unwrap(self) -> T | None:
        """Return the value, or raise ``VfsError`` if the operation failed.

        Raises:
            VfsError: If this outcome is a failure.

        """
        if self.error is not None:
            raise VfsError(self.error, self.path)
        return self.value
