"""
PTS reader.

Reads the declared point count, commits to a layout from the first data
line, allocates storage once for the declared count, then streams the
remaining lines into it. The destination cloud is cleared once the header
is accepted and only populated when the whole read succeeded.
"""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np

from src.domain.interfaces import FormatMetadata, ProgressReporter
from src.domain.options import ReadPointCloudOptions
from src.domain.pointcloud import INTENSITIES_ATTR, PointCloud
from src.domain.results import IOErrorKind, IOResult
from src.infrastructure.io.line_file import LineFile
from src.infrastructure.io.path_io import UniversalPath
from src.infrastructure.processing.pts.schema import (
    PTS_METADATA,
    PtsLayout,
    parse_point_count,
    parse_record,
)
from src.shared.exceptions import PtsFormatError
from src.shared.progress import PROGRESS_INTERVAL, make_progress_reporter


logger = logging.getLogger(__name__)


class PtsReader:
    """PTS file reader.

    Parameters
    ----------
    reporter : ProgressReporter | None
        Progress sink; when None one is built from the read options
    log : logging.Logger | None
        Logger receiving diagnostics (default: module logger)

    Example
    -------
    >>> cloud = PointCloud()
    >>> result = PtsReader().read("scan.pts", cloud)
    >>> if not result:
    ...     print(result.kind, result.message)
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

    def read(
        self,
        path: str | Path | UniversalPath,
        cloud: PointCloud,
        options: ReadPointCloudOptions | None = None,
    ) -> IOResult:
        """Read ``path`` into ``cloud``; never raises."""
        options = options or ReadPointCloudOptions()
        path_str = str(path)
        try:
            try:
                f = LineFile.open(path, "r")
            except (OSError, ImportError) as e:
                message = f"unable to open file: {path_str}"
                self._log.warning("Read PTS failed: %s (%s)", message, e)
                return IOResult.failure(IOErrorKind.OPEN_FAILURE, message, path_str)

            with f:
                count = self._read_into(f, cloud, options)

        except PtsFormatError as e:
            self._log.warning("Read PTS failed: %s", e)
            return IOResult.failure(e.kind, str(e), path_str)
        except Exception as e:
            self._log.warning("Read PTS failed with exception: %s", e)
            return IOResult.failure(IOErrorKind.UNEXPECTED, str(e), path_str)

        return IOResult.success(path_str, count)

    def _read_into(
        self, f: LineFile, cloud: PointCloud, options: ReadPointCloudOptions
    ) -> int:
        declared = parse_point_count(f.read_line(), options.max_points)

        reporter = self._reporter or make_progress_reporter(
            options.update_progress, options.print_progress, desc="Reading PTS"
        )
        reporter.set_total(declared)
        try:
            return self._read_records(f, cloud, options, declared, reporter)
        finally:
            reporter.close()

    def _read_records(
        self,
        f: LineFile,
        cloud: PointCloud,
        options: ReadPointCloudOptions,
        declared: int,
        reporter: ProgressReporter,
    ) -> int:
        cloud.clear()

        layout: PtsLayout | None = None
        committed_fields = 0
        points = intensities = colors = None
        skipped = 0
        idx = 0

        while idx < declared:
            line = f.read_line()
            if line is None:
                break
            tokens = line.split()

            if layout is None:
                committed_fields = len(tokens)
                layout = PtsLayout.from_field_count(committed_fields, f.lines_read)
                points = np.zeros((declared, 3), dtype=np.float64)
                if layout.has_intensity:
                    intensities = np.zeros((declared, 1), dtype=np.float64)
                if layout.has_colors:
                    colors = np.zeros((declared, 3), dtype=np.uint8)
                self._log.debug(
                    "Committed to %s layout (%d fields) for %d points",
                    layout.name, committed_fields, declared,
                )

            if len(tokens) < committed_fields:
                raise PtsFormatError(
                    IOErrorKind.LINE_LENGTH_MISMATCH,
                    f"lines have unequal elements ({len(tokens)} < {committed_fields}).",
                    line_number=f.lines_read,
                )

            record = parse_record(tokens, layout)
            if record is None:
                if options.strict_lines:
                    raise PtsFormatError(
                        IOErrorKind.LINE_PARSE,
                        "unable to parse data line.",
                        line_number=f.lines_read,
                    )
                skipped += 1
            else:
                points[idx] = record.position
                if record.intensity is not None:
                    intensities[idx, 0] = record.intensity
                if record.color is not None:
                    colors[idx] = [min(max(c, 0), 255) for c in record.color]

            idx += 1
            if idx % PROGRESS_INTERVAL == 0:
                reporter.update(idx)

        if skipped:
            self._log.warning("Read PTS: %d unparseable line(s) zero-filled.", skipped)

        if layout is None:
            self._log.warning("Read PTS: header declares %d points but file has no data lines.", declared)
            reporter.finish()
            return 0

        if idx < declared:
            self._log.warning("Read PTS: header declares %d points, file ends after %d.", declared, idx)
            points = points[:idx].copy()
            if intensities is not None:
                intensities = intensities[:idx].copy()
            if colors is not None:
                colors = colors[:idx].copy()

        cloud.set_points(points)
        if layout.has_intensity:
            cloud.set_point_attr(INTENSITIES_ATTR, intensities)
        if layout.has_colors:
            cloud.set_point_colors(colors)

        reporter.finish()
        self._log.debug("Read %d points (%s) from %s", idx, layout.name, f.path)
        return idx


def read_pts(
    path: str | Path | UniversalPath,
    cloud: PointCloud,
    options: ReadPointCloudOptions | None = None,
    *,
    reporter: ProgressReporter | None = None,
    log: logging.Logger | None = None,
) -> IOResult:
    """Read a PTS file into ``cloud``.

    Failures are logged at WARNING and returned as a falsy ``IOResult``;
    no exception escapes.

    Args:
        path: Input path (local or cloud)
        cloud: Destination point cloud; cleared once the header is accepted
        options: Read options (progress callback, limits, strictness)
        reporter: Explicit progress sink, overrides the options
        log: Logger for diagnostics

    Returns:
        IOResult with ``points`` set to the number of records read
    """
    return PtsReader(reporter=reporter, log=log).read(path, cloud, options)
