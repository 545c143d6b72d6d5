"""Domain interfaces (protocols) for dependency inversion.

This module defines the core protocols for point cloud I/O:
- ProgressReporter: Progress sink driven by long-running read/write loops
- PointCloudReader: Reads a file into a PointCloud
- PointCloudWriter: Writes a PointCloud to a file
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable


if TYPE_CHECKING:
    from src.domain.options import ReadPointCloudOptions, WritePointCloudOptions
    from src.domain.pointcloud import PointCloud
    from src.domain.results import IOResult


@runtime_checkable
class ProgressReporter(Protocol):
    """Progress sink receiving record counts.

    Updates are advisory; a reporter cannot abort the operation.
    """

    def set_total(self, total: int) -> None:
        """Set the number of records expected."""
        ...

    def update(self, current: int) -> None:
        """Report the number of records processed so far."""
        ...

    def finish(self) -> None:
        """Mark the operation finished."""
        ...

    def close(self) -> None:
        """Release resources; called after finish and after a failed operation."""
        ...


@dataclass
class FormatMetadata:
    """Metadata for a point cloud file format.

    Used by the registry to provide information about available formats.
    """

    name: str  # Format identifier (e.g., "pts")
    description: str  # Brief description
    file_extensions: tuple[str, ...]  # Extensions handled, with leading dot
    is_ascii: bool = True


class PointCloudReader(Protocol):
    """Protocol for point cloud readers."""

    @classmethod
    def metadata(cls) -> FormatMetadata:
        """Return metadata about this format."""
        ...

    def read(
        self,
        path: str,
        cloud: PointCloud,
        options: ReadPointCloudOptions | None = None,
    ) -> IOResult:
        """Read ``path`` into ``cloud``.

        Parameters
        ----------
        path : str
            Input file path
        cloud : PointCloud
            Destination; cleared once the header is accepted and
            populated only on success
        options : ReadPointCloudOptions | None
            Read options
        """
        ...


class PointCloudWriter(Protocol):
    """Protocol for point cloud writers."""

    @classmethod
    def metadata(cls) -> FormatMetadata:
        """Return metadata about this format."""
        ...

    def write(
        self,
        path: str,
        cloud: PointCloud,
        options: WritePointCloudOptions | None = None,
    ) -> IOResult:
        """Write ``cloud`` to ``path``.

        Parameters
        ----------
        path : str
            Output file path
        cloud : PointCloud
            Source point cloud
        options : WritePointCloudOptions | None
            Write options
        """
        ...


__all__ = [
    "FormatMetadata",
    "PointCloudReader",
    "PointCloudWriter",
    "ProgressReporter",
]
