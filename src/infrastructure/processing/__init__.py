"""Point cloud file format implementations."""

from .pts import PtsReader, PtsWriter, read_pts, write_pts

__all__ = [
    "PtsReader",
    "PtsWriter",
    "read_pts",
    "write_pts",
]
