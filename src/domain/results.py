"""Result values returned by point cloud readers and writers.

Readers and writers never let an exception cross their boundary. Every
outcome is an ``IOResult`` carrying an ``IOErrorKind`` plus the message
that was logged.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class IOErrorKind(Enum):
    """Failure categories for point cloud I/O."""

    OPEN_FAILURE = "open_failure"  # File could not be opened in the requested mode
    HEADER_FORMAT = "header_format"  # Point count missing, non-numeric, non-positive or too large
    INSUFFICIENT_FIELDS = "insufficient_fields"  # First data line has fewer than 3 tokens
    LINE_LENGTH_MISMATCH = "line_length_mismatch"  # Later line shorter than the first
    LINE_PARSE = "line_parse"  # Line has enough tokens but none of the layouts parse
    WRITE_IO = "write_io"  # A formatted write to the output failed
    EMPTY_CLOUD = "empty_cloud"  # Write requested on a cloud with zero points
    UNSUPPORTED_FORMAT = "unsupported_format"  # No reader/writer registered for the format
    UNEXPECTED = "unexpected"  # Any other low-level error


@dataclass(frozen=True)
class IOResult:
    """Outcome of a read or write.

    Truthy iff the operation succeeded, so ``if not read_pts(...)`` reads
    naturally at call sites.

    Attributes:
        ok: Whether the operation succeeded
        kind: Failure category, None on success
        message: Diagnostic message (empty on success)
        path: File the operation targeted
        points: Number of point records read or written
    """

    ok: bool
    kind: IOErrorKind | None = None
    message: str = ""
    path: str | None = None
    points: int = 0

    @classmethod
    def success(cls, path: str | None = None, points: int = 0) -> IOResult:
        """Build a successful result."""
        return cls(ok=True, path=path, points=points)

    @classmethod
    def failure(cls, kind: IOErrorKind, message: str, path: str | None = None) -> IOResult:
        """Build a failed result."""
        return cls(ok=False, kind=kind, message=message, path=path)

    def __bool__(self) -> bool:
        return self.ok
