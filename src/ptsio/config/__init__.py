"""Configuration module for the ptsio command line tool."""

from src.ptsio.config.io import export_cli_config, import_cli_config
from src.ptsio.config.settings import CliConfig


__all__ = [
    "CliConfig",
    "export_cli_config",
    "import_cli_config",
]
