"""
Read/write options for point cloud I/O.

This module provides type-safe option objects using dataclasses. Options
are plain values: progress sinks are passed in explicitly rather than
looked up from ambient state.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, fields
from typing import Any

from src.shared.exceptions import ConfigError


logger = logging.getLogger(__name__)

# Callback receiving (current, total) record counts
ProgressCallback = Callable[[int, int], Any]

DEFAULT_MAX_POINTS = 100_000_000


def _known_fields(cls: type, data: dict[str, Any], section: str) -> dict[str, Any]:
    """Filter a raw dict to the dataclass fields, rejecting unknown keys."""
    names = {f.name for f in fields(cls)}
    unknown = sorted(set(data) - names)
    if unknown:
        raise ConfigError(f"Unknown {section} option(s): {', '.join(unknown)}", field_name=unknown[0])
    return dict(data)


@dataclass
class ReadPointCloudOptions:
    """Options for reading a point cloud.

    Attributes
    ----------
    format : str
        Format name, or "auto" to pick by file extension
    remove_nan_points : bool
        Drop points whose position has a NaN component after reading
    remove_infinite_points : bool
        Drop points whose position has an infinite component after reading
    print_progress : bool
        Show a tqdm progress bar on stderr
    update_progress : ProgressCallback | None
        Called with (current, total) every 1000 records and at finish
    max_points : int | None
        Upper bound on the declared point count (None disables the check)
    strict_lines : bool
        Fail the read when a data line has enough tokens but cannot be
        parsed; when False such rows are zero-filled
    """

    format: str = "auto"
    remove_nan_points: bool = False
    remove_infinite_points: bool = False
    print_progress: bool = False
    update_progress: ProgressCallback | None = None
    max_points: int | None = DEFAULT_MAX_POINTS
    strict_lines: bool = True

    def __post_init__(self):
        """Validate options after initialization."""
        if not self.format:
            raise ConfigError("format must be a non-empty string", field_name="format")
        if self.max_points is not None and self.max_points < 1:
            raise ConfigError(
                f"max_points must be positive, got {self.max_points}", field_name="max_points"
            )
        if self.update_progress is not None and not callable(self.update_progress):
            raise ConfigError("update_progress must be callable", field_name="update_progress")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ReadPointCloudOptions:
        """Create options from a plain dict (e.g. a YAML section)."""
        return cls(**_known_fields(cls, data, "read"))

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary (the callback is not serialisable and is dropped)."""
        data = asdict(self)
        data.pop("update_progress")
        return data


@dataclass
class WritePointCloudOptions:
    """Options for writing a point cloud.

    Attributes
    ----------
    format : str
        Format name, or "auto" to pick by file extension
    print_progress : bool
        Show a tqdm progress bar on stderr
    update_progress : ProgressCallback | None
        Called with (current, total) every 1000 records and at finish
    float_precision : int
        Decimal digits for floating values
    """

    format: str = "auto"
    print_progress: bool = False
    update_progress: ProgressCallback | None = None
    float_precision: int = 10

    def __post_init__(self):
        """Validate options after initialization."""
        if not self.format:
            raise ConfigError("format must be a non-empty string", field_name="format")
        if not 0 <= self.float_precision <= 17:
            raise ConfigError(
                f"float_precision must be in [0, 17], got {self.float_precision}",
                field_name="float_precision",
            )
        if self.update_progress is not None and not callable(self.update_progress):
            raise ConfigError("update_progress must be callable", field_name="update_progress")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> WritePointCloudOptions:
        """Create options from a plain dict (e.g. a YAML section)."""
        return cls(**_known_fields(cls, data, "write"))

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary (the callback is not serialisable and is dropped)."""
        data = asdict(self)
        data.pop("update_progress")
        return data
