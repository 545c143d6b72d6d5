"""
Custom exceptions for ptsio.

This module provides domain-specific exceptions for better error handling
and clearer error messages throughout the library.

Clean Architecture Note:
- This file belongs to the Shared layer (cross-cutting concerns)
- Can be imported by any layer (domain, infrastructure, cli)
- Format errors are raised inside the PTS reader/writer and converted to
  ``IOResult`` values at the module boundary
"""

from __future__ import annotations

from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from src.domain.results import IOErrorKind


class PtsIOError(Exception):
    """Base exception for all ptsio errors."""

    pass


class PointCloudError(PtsIOError):
    """Raised when point cloud contents are invalid or inconsistent."""

    def __init__(
        self,
        message: str,
        attribute: str | None = None,
        expected_rows: int | None = None,
        actual_rows: int | None = None,
    ):
        """
        Initialize PointCloudError.

        Parameters
        ----------
        message : str
            Error message
        attribute : str | None
            Name of the offending attribute (e.g., 'positions', 'colors')
        expected_rows : int | None
            Row count the attribute should have
        actual_rows : int | None
            Row count the attribute actually has
        """
        self.attribute = attribute
        self.expected_rows = expected_rows
        self.actual_rows = actual_rows

        full_message = message
        if attribute:
            full_message = f"{full_message} (attribute: {attribute})"
        if expected_rows is not None and actual_rows is not None:
            full_message = f"{full_message} (expected rows: {expected_rows}, got: {actual_rows})"

        super().__init__(full_message)


class PtsFormatError(PtsIOError):
    """Raised when a PTS file cannot be read or written.

    Carries the ``IOErrorKind`` so the boundary can turn it into a result
    without inspecting the message.
    """

    def __init__(
        self,
        kind: IOErrorKind,
        message: str,
        line_number: int | None = None,
    ):
        """
        Initialize PtsFormatError.

        Parameters
        ----------
        kind : IOErrorKind
            Failure category
        message : str
            Error message
        line_number : int | None
            1-based line number in the file where the failure was detected
        """
        self.kind = kind
        self.line_number = line_number

        full_message = message
        if line_number is not None:
            full_message = f"{full_message} (line: {line_number})"

        super().__init__(full_message)


class ConfigError(PtsIOError):
    """Raised when configuration is invalid or missing."""

    def __init__(
        self,
        message: str,
        config_path: str | None = None,
        field_name: str | None = None,
    ):
        """
        Initialize ConfigError.

        Parameters
        ----------
        message : str
            Error message
        config_path : str | None
            Path to the config file
        field_name : str | None
            Name of the invalid/missing config field
        """
        self.config_path = config_path
        self.field_name = field_name

        full_message = message
        if field_name:
            full_message = f"{full_message} (field: {field_name})"
        if config_path:
            full_message = f"{full_message} (config: {config_path})"

        super().__init__(full_message)
