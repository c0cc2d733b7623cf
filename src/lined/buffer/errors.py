"""Error taxonomy for buffer operations."""

from __future__ import annotations


class LinedError(RuntimeError):
    """Base class for recoverable editor errors."""

    kind = "error"

    def __init__(self, message: str, *, index: int | None = None) -> None:
        super().__init__(message)
        self.index = index


class BadRange(LinedError):
    """Raised when a range token cannot be parsed."""

    kind = "bad_range"


class BadIndex(LinedError):
    """Raised when a single-line operation addresses a missing line."""

    kind = "bad_index"


class CapacityExceeded(LinedError):
    """Raised when the store is full and another line is offered."""

    kind = "capacity_exceeded"


class IOFailure(LinedError):
    """Raised when a file cannot be opened, read, or written."""

    kind = "io_failure"

    def __init__(self, message: str, *, path: str | None = None) -> None:
        super().__init__(message)
        self.path = path


class AllocFailure(LinedError):
    """Raised when storage for a line could not be obtained."""

    kind = "alloc_failure"


__all__ = [
    "LinedError",
    "BadRange",
    "BadIndex",
    "CapacityExceeded",
    "IOFailure",
    "AllocFailure",
]
