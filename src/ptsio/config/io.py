"""
Configuration import/export for the ptsio command line tool.

Stores ``CliConfig`` as YAML with ``read``, ``write`` and ``log_level``
top-level keys.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml

from src.ptsio.config.settings import CliConfig
from src.shared.exceptions import ConfigError


logger = logging.getLogger(__name__)


def export_cli_config(config: CliConfig, output_path: Path | str) -> None:
    """
    Export CLI configuration to a YAML file.

    Parameters
    ----------
    config : CliConfig
        Configuration to save
    output_path : Path | str
        Path to output YAML file
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    with open(output_path, "w") as f:
        yaml.safe_dump(config.to_dict(), f, default_flow_style=False, sort_keys=False)

    logger.info(f"Exported config to {output_path}")


def import_cli_config(input_path: Path | str) -> CliConfig:
    """
    Import CLI configuration from a YAML file.

    Parameters
    ----------
    input_path : Path | str
        Path to input YAML file

    Returns
    -------
    CliConfig
        Parsed configuration; an empty file yields the defaults

    Raises
    ------
    ConfigError
        If the file is missing, is not valid YAML, or has unknown keys
    """
    input_path = Path(input_path)

    if not input_path.exists():
        raise ConfigError("Config file not found", config_path=str(input_path))

    try:
        with open(input_path, "r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML: {e}", config_path=str(input_path)) from e

    if data is None:
        logger.debug(f"Empty config file {input_path}, using defaults")
        return CliConfig()
    if not isinstance(data, dict):
        raise ConfigError("Config root must be a mapping", config_path=str(input_path))

    config = CliConfig.from_dict(data, config_path=str(input_path))
    logger.debug(f"Imported config from {input_path}")
    return config
