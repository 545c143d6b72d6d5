"""
Format-dispatching point cloud read/write entry points.

Resolves the format from the options (or the file extension when the
format is "auto"), delegates to the registered reader/writer, and applies
post-read cleanup such as NaN/Inf point removal.
"""

from __future__ import annotations

import logging
from pathlib import Path

from src.domain.options import ReadPointCloudOptions, WritePointCloudOptions
from src.domain.pointcloud import PointCloud
from src.domain.results import IOErrorKind, IOResult
from src.infrastructure.io.path_io import UniversalPath
from src.infrastructure.registry import FormatEntry, PointCloudFormatRegistry, register_defaults


logger = logging.getLogger(__name__)


def _resolve_format(path: str | Path | UniversalPath, fmt: str) -> FormatEntry | None:
    register_defaults()
    if fmt.lower() != "auto":
        return PointCloudFormatRegistry.get(fmt)
    suffix = UniversalPath(path).suffix
    return PointCloudFormatRegistry.find_by_extension(suffix) if suffix else None


def _unsupported_message(path: str | Path | UniversalPath, fmt: str) -> str:
    known = ", ".join(PointCloudFormatRegistry.names())
    return f"unknown file format for {path} (format: {fmt}; known: {known})."


def read_point_cloud(
    path: str | Path | UniversalPath,
    cloud: PointCloud,
    options: ReadPointCloudOptions | None = None,
) -> IOResult:
    """Read ``path`` into ``cloud`` using the matching format.

    Parameters
    ----------
    path : str | Path | UniversalPath
        Input file
    cloud : PointCloud
        Destination point cloud
    options : ReadPointCloudOptions | None
        Read options; ``format`` selects the reader

    Returns
    -------
    IOResult
        Falsy on failure, with the failure kind and message
    """
    options = options or ReadPointCloudOptions()
    entry = _resolve_format(path, options.format)
    if entry is None or entry.reader is None:
        message = _unsupported_message(path, options.format)
        logger.warning("Read point cloud failed: %s", message)
        return IOResult.failure(IOErrorKind.UNSUPPORTED_FORMAT, message, str(path))

    result = entry.reader().read(path, cloud, options)
    if not result:
        return result

    removed = cloud.remove_non_finite_points(
        options.remove_nan_points, options.remove_infinite_points
    )
    if removed:
        logger.info("Removed %d non-finite points from %s", removed, path)
        return IOResult.success(result.path, len(cloud))
    return result


def write_point_cloud(
    path: str | Path | UniversalPath,
    cloud: PointCloud,
    options: WritePointCloudOptions | None = None,
) -> IOResult:
    """Write ``cloud`` to ``path`` using the matching format.

    Parameters
    ----------
    path : str | Path | UniversalPath
        Output file
    cloud : PointCloud
        Source point cloud
    options : WritePointCloudOptions | None
        Write options; ``format`` selects the writer

    Returns
    -------
    IOResult
        Falsy on failure, with the failure kind and message
    """
    options = options or WritePointCloudOptions()
    entry = _resolve_format(path, options.format)
    if entry is None or entry.writer is None:
        message = _unsupported_message(path, options.format)
        logger.warning("Write point cloud failed: %s", message)
        return IOResult.failure(IOErrorKind.UNSUPPORTED_FORMAT, message, str(path))

    return entry.writer().write(path, cloud, options)
