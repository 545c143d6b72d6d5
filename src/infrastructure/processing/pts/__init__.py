"""
PTS point cloud I/O.

This package reads and writes the ASCII PTS format:
- Header line with the number of points
- One line per point: X Y Z, X Y Z I, or X Y Z I R G B
- Layout inferred from the first data line, fixed for the whole file
- Local filesystem and cloud storage (S3, GCS, Azure) via UniversalPath

Public API:
-----------
**Reading**:
- read_pts()              - Read a file into a PointCloud

**Writing**:
- write_pts()             - Write a PointCloud to a file

**Format contract**:
- PtsLayout               - The three line layouts
- parse_point_count()     - Header parsing
- parse_record()          - Data line parsing with layout fallback

Architecture:
-------------
```
schema.py          - Format contract shared by reader and writer
reader.py          - Schema-inferring streaming reader
writer.py          - Layout-selecting writer
```

Example Usage:
--------------
```python
from src.domain.pointcloud import PointCloud
from src.infrastructure.processing.pts import read_pts, write_pts

cloud = PointCloud()
result = read_pts("./scans/room.pts", cloud)
if not result:
    raise SystemExit(f"{result.kind}: {result.message}")

write_pts("./scans/room_copy.pts", cloud)
```
"""

from src.infrastructure.processing.pts.reader import PtsReader, read_pts
from src.infrastructure.processing.pts.schema import (
    MIN_FIELDS,
    PTS_METADATA,
    PtsLayout,
    PtsRecord,
    parse_point_count,
    parse_record,
)
from src.infrastructure.processing.pts.writer import PtsWriter, write_pts


__all__ = [
    # Reader
    "PtsReader",
    "read_pts",
    # Writer
    "PtsWriter",
    "write_pts",
    # Format contract
    "MIN_FIELDS",
    "PTS_METADATA",
    "PtsLayout",
    "PtsRecord",
    "parse_point_count",
    "parse_record",
]
