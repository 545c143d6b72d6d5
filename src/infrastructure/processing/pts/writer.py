"""
PTS writer.

Emits the point count header and one CR-LF terminated line per point. The
layout is chosen once from the attributes present on the cloud and used
for every row.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from src.domain.interfaces import FormatMetadata, ProgressReporter
from src.domain.options import WritePointCloudOptions
from src.domain.pointcloud import INTENSITIES_ATTR, PointCloud
from src.domain.results import IOErrorKind, IOResult
from src.infrastructure.io.line_file import LineFile
from src.infrastructure.io.path_io import UniversalPath
from src.infrastructure.processing.pts.schema import PTS_METADATA, PtsLayout, format_header
from src.shared.exceptions import PtsFormatError
from src.shared.progress import PROGRESS_INTERVAL, make_progress_reporter


logger = logging.getLogger(__name__)


class PtsWriter:
    """PTS file writer.

    Parameters
    ----------
    reporter : ProgressReporter | None
        Progress sink; when None one is built from the write options
    log : logging.Logger | None
        Logger receiving diagnostics (default: module logger)

    Example
    -------
    >>> result = PtsWriter().write("out.pts", cloud)
    >>> assert result, result.message
    """

    def __init__(
        self,
        reporter: ProgressReporter | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self._reporter = reporter
        self._log = log or logger

    @classmethod
    def metadata(cls) -> FormatMetadata:
        return PTS_METADATA

    def write(
        self,
        path: str | Path | UniversalPath,
        cloud: PointCloud,
        options: WritePointCloudOptions | None = None,
    ) -> IOResult:
        """Write ``cloud`` to ``path``; never raises.

        A write failure part-way through leaves the partial file on disk.
        """
        options = options or WritePointCloudOptions()
        path_str = str(path)
        try:
            # Checked before opening so an empty cloud never truncates an existing file
            if cloud.is_empty():
                message = "point cloud has 0 points."
                self._log.warning("Write PTS failed: %s", message)
                return IOResult.failure(IOErrorKind.EMPTY_CLOUD, message, path_str)

            try:
                f = LineFile.open(path, "w")
            except (OSError, ImportError) as e:
                message = f"unable to open file: {path_str}"
                self._log.warning("Write PTS failed: %s (%s)", message, e)
                return IOResult.failure(IOErrorKind.OPEN_FAILURE, message, path_str)

            with f:
                count = self._write_from(f, cloud, options)

        except PtsFormatError as e:
            self._log.warning("Write PTS failed: %s", e)
            return IOResult.failure(e.kind, str(e), path_str)
        except Exception as e:
            self._log.warning("Write PTS failed with exception: %s", e)
            return IOResult.failure(IOErrorKind.UNEXPECTED, str(e), path_str)

        return IOResult.success(path_str, count)

    def _write_from(
        self, f: LineFile, cloud: PointCloud, options: WritePointCloudOptions
    ) -> int:
        points = cloud.get_points()
        num_points = len(points)

        layout = PtsLayout.for_cloud(cloud)
        if cloud.has_point_colors() and not layout.has_colors:
            self._log.warning(
                "Write PTS: colors are only stored together with intensities; dropping colors."
            )

        columns = [points]
        if layout.has_intensity:
            columns.append(np.asarray(cloud.get_point_attr(INTENSITIES_ATTR)).reshape(num_points, -1)[:, :1])
        float_block = np.hstack(columns).astype(np.float64, copy=False)
        colors = cloud.get_point_colors() if layout.has_colors else None

        template = layout.line_template(options.float_precision)

        reporter = self._reporter or make_progress_reporter(
            options.update_progress, options.print_progress, desc="Writing PTS"
        )
        reporter.set_total(num_points)
        try:
            self._emit(f, format_header(num_points), "unable to write header")

            for i in range(num_points):
                values = float_block[i].tolist()
                if colors is not None:
                    values.extend(int(c) for c in colors[i])
                self._emit(f, template.format(*values), "unable to write file")

                if (i + 1) % PROGRESS_INTERVAL == 0:
                    reporter.update(i + 1)

            reporter.finish()
        finally:
            reporter.close()

        self._log.debug("Wrote %d points (%s) to %s", num_points, layout.name, f.path)
        return num_points

    @staticmethod
    def _emit(f: LineFile, text: str, message: str) -> None:
        try:
            f.write_line(text)
        except OSError as e:
            raise PtsFormatError(IOErrorKind.WRITE_IO, f"{message}: {f.path} ({e})") from e


def write_pts(
    path: str | Path | UniversalPath,
    cloud: PointCloud,
    options: WritePointCloudOptions | None = None,
    *,
    reporter: ProgressReporter | None = None,
    log: logging.Logger | None = None,
) -> IOResult:
    """Write ``cloud`` as a PTS file.

    Failures are logged at WARNING and returned as a falsy ``IOResult``;
    no exception escapes.

    Args:
        path: Output path (local or cloud)
        cloud: Source point cloud, must not be empty
        options: Write options (progress callback, float precision)
        reporter: Explicit progress sink, overrides the options
        log: Logger for diagnostics

    Returns:
        IOResult with ``points`` set to the number of records written
    """
    return PtsWriter(reporter=reporter, log=log).write(path, cloud, options)
