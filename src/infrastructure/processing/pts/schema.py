"""
PTS format contract shared by the reader and writer.

A PTS file is ASCII:

    N                       <- declared point count, N >= 1
    X Y Z                   <- 3 fields: positions only
    X Y Z I                 <- 4..6 fields: positions + intensity
    X Y Z I R G B           <- 7+ fields: positions + intensity + color

The field count of the first data line fixes the layout for the whole
file. Later lines may carry extra trailing fields (ignored) but never
fewer. Fields are separated by a single space on write and by any
whitespace on read; lines are written with CR-LF.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import TYPE_CHECKING, NamedTuple

from src.domain.interfaces import FormatMetadata
from src.domain.pointcloud import INTENSITIES_ATTR
from src.domain.results import IOErrorKind
from src.shared.exceptions import PtsFormatError


if TYPE_CHECKING:
    from src.domain.pointcloud import PointCloud

MIN_FIELDS = 3

# Leading unsigned digit run of the header token
_POINT_COUNT_RE = re.compile(r"\+?([0-9]+)")

PTS_METADATA = FormatMetadata(
    name="pts",
    description="ASCII point count header followed by X Y Z [I [R G B]] lines",
    file_extensions=(".pts",),
)


class PtsLayout(Enum):
    """Per-line schema, identified by the number of fields it consumes."""

    POSITION_ONLY = 3
    WITH_INTENSITY = 4
    WITH_INTENSITY_COLOR = 7

    @property
    def field_count(self) -> int:
        return self.value

    @property
    def has_intensity(self) -> bool:
        return self.value >= PtsLayout.WITH_INTENSITY.value

    @property
    def has_colors(self) -> bool:
        return self.value >= PtsLayout.WITH_INTENSITY_COLOR.value

    @classmethod
    def from_field_count(cls, count: int, line_number: int | None = None) -> PtsLayout:
        """
        Commit to the richest layout a first data line with ``count`` tokens supports.

        Raises
        ------
        PtsFormatError
            INSUFFICIENT_FIELDS if ``count`` is below 3
        """
        if count < MIN_FIELDS:
            raise PtsFormatError(
                IOErrorKind.INSUFFICIENT_FIELDS,
                f"insufficient data fields ({count} < {MIN_FIELDS}).",
                line_number=line_number,
            )
        if count >= cls.WITH_INTENSITY_COLOR.value:
            return cls.WITH_INTENSITY_COLOR
        if count >= cls.WITH_INTENSITY.value:
            return cls.WITH_INTENSITY
        return cls.POSITION_ONLY

    @classmethod
    def for_cloud(cls, cloud: PointCloud) -> PtsLayout:
        """
        Pick the layout used to write ``cloud``.

        Colors are only written together with intensities; a cloud with
        colors but no intensities is written as positions only.
        """
        has_intensity = cloud.has_point_attr(INTENSITIES_ATTR)
        if has_intensity and cloud.has_point_colors():
            return cls.WITH_INTENSITY_COLOR
        if has_intensity:
            return cls.WITH_INTENSITY
        return cls.POSITION_ONLY

    def fallbacks(self) -> tuple[PtsLayout, ...]:
        """Layouts to try when parsing a line, richest first."""
        return tuple(
            layout for layout in (
                PtsLayout.WITH_INTENSITY_COLOR,
                PtsLayout.WITH_INTENSITY,
                PtsLayout.POSITION_ONLY,
            )
            if layout.value <= self.value
        )

    def line_template(self, precision: int = 10) -> str:
        """str.format template for one data line of this layout."""
        floats = ["{:.%df}" % precision] * (4 if self.has_intensity else 3)
        ints = ["{:d}"] * 3 if self.has_colors else []
        return " ".join(floats + ints)


class PtsRecord(NamedTuple):
    """One parsed data line."""

    layout: PtsLayout
    position: tuple[float, float, float]
    intensity: float | None = None
    color: tuple[int, int, int] | None = None


def parse_point_count(line: str | None, max_points: int | None = None) -> int:
    """
    Parse the header line into the declared point count.

    Only the leading digits of the first whitespace-separated token are
    considered, so "3.0" and "3abc" both declare 3 points.

    Raises
    ------
    PtsFormatError
        HEADER_FORMAT if the line is missing, does not start with digits, is
        not positive, or is larger than ``max_points``
    """
    tokens = line.split() if line is not None else []
    if not tokens:
        raise PtsFormatError(IOErrorKind.HEADER_FORMAT, "unable to read header.", line_number=1)
    match = _POINT_COUNT_RE.match(tokens[0])
    if match is None:
        raise PtsFormatError(
            IOErrorKind.HEADER_FORMAT,
            f"unable to read header: {tokens[0]!r} is not a point count.",
            line_number=1,
        )
    count = int(match.group(1))
    if count <= 0:
        raise PtsFormatError(
            IOErrorKind.HEADER_FORMAT,
            f"unable to read header: point count must be positive, got {count}.",
            line_number=1,
        )
    if max_points is not None and count > max_points:
        raise PtsFormatError(
            IOErrorKind.HEADER_FORMAT,
            f"declared point count {count} exceeds limit of {max_points}.",
            line_number=1,
        )
    return count


def _parse_as(tokens: list[str], layout: PtsLayout) -> PtsRecord | None:
    try:
        position = (float(tokens[0]), float(tokens[1]), float(tokens[2]))
        if layout is PtsLayout.POSITION_ONLY:
            return PtsRecord(layout, position)
        intensity = float(tokens[3])
        if layout is PtsLayout.WITH_INTENSITY:
            return PtsRecord(layout, position, intensity)
        color = (int(tokens[4]), int(tokens[5]), int(tokens[6]))
        return PtsRecord(layout, position, intensity, color)
    except (ValueError, IndexError):
        return None


def parse_record(tokens: list[str], layout: PtsLayout) -> PtsRecord | None:
    """
    Parse a tokenised data line against ``layout``.

    Tries the richest layout ``layout`` allows first and falls back to
    poorer ones, so a 7-field line whose colors are not integers still
    yields its position and intensity. Returns None when not even the
    position parses.
    """
    for candidate in layout.fallbacks():
        record = _parse_as(tokens, candidate)
        if record is not None:
            return record
    return None


def format_header(count: int) -> str:
    return f"{count:d}"
