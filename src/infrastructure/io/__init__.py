"""Infrastructure I/O helpers (path handling, line files, format dispatch)."""

from .line_file import LineFile
from .path_io import UniversalPath
from .point_cloud_io import read_point_cloud, write_point_cloud


__all__ = ["LineFile", "UniversalPath", "read_point_cloud", "write_point_cloud"]
