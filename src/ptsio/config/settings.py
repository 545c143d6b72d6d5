"""
Configuration dataclasses for the ptsio command line tool.

This module provides type-safe configuration using Python 3.10+ dataclasses.
Read and write options are nested so a single YAML file can carry both.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from src.domain.options import ReadPointCloudOptions, WritePointCloudOptions
from src.shared.exceptions import ConfigError


logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class CliConfig:
    """Main CLI configuration.

    Parameters
    ----------
    read : ReadPointCloudOptions
        Options applied to every read
    write : WritePointCloudOptions
        Options applied to every write
    log_level : str
        Logging level: DEBUG, INFO, WARNING, ERROR
    """

    read: ReadPointCloudOptions = field(default_factory=ReadPointCloudOptions)
    write: WritePointCloudOptions = field(default_factory=WritePointCloudOptions)
    log_level: str = "INFO"

    def __post_init__(self):
        """Validate settings after initialization."""
        self.log_level = self.log_level.upper()
        if self.log_level not in LOG_LEVELS:
            raise ConfigError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level}",
                field_name="log_level",
            )

    def with_progress(self, enabled: bool) -> CliConfig:
        """Turn the tqdm progress bar on for reads and writes."""
        if enabled:
            self.read.print_progress = True
            self.write.print_progress = True
        return self

    @classmethod
    def from_dict(cls, data: dict[str, Any], config_path: str | None = None) -> CliConfig:
        """Create a config from a plain dict with optional ``read``/``write`` sections."""
        unknown = sorted(set(data) - {"read", "write", "log_level"})
        if unknown:
            raise ConfigError(
                f"Unknown config section(s): {', '.join(unknown)}",
                config_path=config_path,
                field_name=unknown[0],
            )
        try:
            return cls(
                read=ReadPointCloudOptions.from_dict(data.get("read") or {}),
                write=WritePointCloudOptions.from_dict(data.get("write") or {}),
                log_level=str(data.get("log_level", "INFO")),
            )
        except TypeError as e:
            raise ConfigError(f"Invalid config: {e}", config_path=config_path) from e

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for easy serialization."""
        return {
            "read": self.read.to_dict(),
            "write": self.write.to_dict(),
            "log_level": self.log_level,
        }
