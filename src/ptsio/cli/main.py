"""
ptsio command line tool - Main Entry Point.

This is the CLI entry point that uses tyro for argument parsing.
"""

from __future__ import annotations

import logging
import sys
from dataclasses import replace
from pathlib import Path
from typing import Annotated

import numpy as np
import tyro

from src.domain.pointcloud import COLORS_ATTR, INTENSITIES_ATTR, PointCloud
from src.infrastructure.io import read_point_cloud, write_point_cloud
from src.infrastructure.processing.pts import PtsLayout
from src.ptsio.config import CliConfig, export_cli_config, import_cli_config
from src.shared.exceptions import ConfigError


logger = logging.getLogger(__name__)


def setup_logging(level: str = "INFO") -> None:
    """
    Setup logging configuration.

    Parameters
    ----------
    level : str
        Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _load_config(config: Path | None, log_level: str | None, progress: bool) -> CliConfig:
    cli_config = import_cli_config(config) if config is not None else CliConfig()
    if log_level is not None:
        cli_config = replace(cli_config, log_level=log_level)
    setup_logging(cli_config.log_level)
    return cli_config.with_progress(progress)


def _summarize(cloud: PointCloud) -> list[str]:
    lines = [
        f"points:     {len(cloud)}",
        f"layout:     {PtsLayout.for_cloud(cloud).name}",
        f"attributes: {', '.join(cloud.attribute_names) or 'none'}",
    ]
    if not cloud.is_empty():
        points = cloud.get_points()
        lines.append(f"min:        {np.array2string(points.min(axis=0), precision=4)}")
        lines.append(f"max:        {np.array2string(points.max(axis=0), precision=4)}")
    if cloud.has_point_attr(INTENSITIES_ATTR):
        intensities = cloud.get_point_attr(INTENSITIES_ATTR)
        lines.append(f"intensity:  [{intensities.min():.4f}, {intensities.max():.4f}]")
    return lines


def info(
    file: Annotated[Path, tyro.conf.Positional],
    config: Path | None = None,
    log_level: str | None = None,
    progress: bool = False,
) -> int:
    """
    Print point count, layout, attributes and bounds of a point cloud file.

    Parameters
    ----------
    file : Path
        Point cloud file to inspect
    config : Path | None
        YAML config with read/write options
    log_level : str | None
        Logging level: DEBUG, INFO, WARNING, ERROR (overrides the config)
    progress : bool
        Show a progress bar
    """
    cli_config = _load_config(config, log_level, progress)

    cloud = PointCloud()
    result = read_point_cloud(file, cloud, cli_config.read)
    if not result:
        print(f"{file}: {result.kind.value}: {result.message}", file=sys.stderr)
        return 1

    print(f"file:       {file}")
    for line in _summarize(cloud):
        print(line)
    return 0


def convert(
    src: Annotated[Path, tyro.conf.Positional],
    dst: Annotated[Path, tyro.conf.Positional],
    drop_colors: bool = False,
    drop_intensities: bool = False,
    config: Path | None = None,
    log_level: str | None = None,
    progress: bool = False,
) -> int:
    """
    Read a point cloud and write it back out, optionally dropping attributes.

    Parameters
    ----------
    src : Path
        Input point cloud file
    dst : Path
        Output point cloud file
    drop_colors : bool
        Do not write colors
    drop_intensities : bool
        Do not write intensities (colors are then dropped as well)
    config : Path | None
        YAML config with read/write options
    log_level : str | None
        Logging level (overrides the config)
    progress : bool
        Show progress bars

    Examples
    --------
    Strip colors:
        ptsio convert scan.pts scan_xyzi.pts --drop-colors
    """
    cli_config = _load_config(config, log_level, progress)

    cloud = PointCloud()
    result = read_point_cloud(src, cloud, cli_config.read)
    if not result:
        print(f"{src}: {result.kind.value}: {result.message}", file=sys.stderr)
        return 1

    if drop_colors:
        cloud.remove_point_attr(COLORS_ATTR)
    if drop_intensities:
        cloud.remove_point_attr(INTENSITIES_ATTR)

    result = write_point_cloud(dst, cloud, cli_config.write)
    if not result:
        print(f"{dst}: {result.kind.value}: {result.message}", file=sys.stderr)
        return 1

    logger.info(f"Wrote {result.points} points to {dst}")
    return 0


def validate(
    file: Annotated[Path, tyro.conf.Positional],
    config: Path | None = None,
    log_level: str | None = None,
) -> int:
    """
    Check that a point cloud file reads cleanly.

    Exits with status 1 and prints the failure kind when it does not.

    Parameters
    ----------
    file : Path
        Point cloud file to check
    config : Path | None
        YAML config with read options
    log_level : str | None
        Logging level (overrides the config)
    """
    cli_config = _load_config(config, log_level, progress=False)

    result = read_point_cloud(file, PointCloud(), cli_config.read)
    if not result:
        print(f"FAIL {file}: {result.kind.value}: {result.message}")
        return 1

    print(f"OK {file}: {result.points} points")
    return 0


def dump_config(
    output: Annotated[Path, tyro.conf.Positional],
) -> int:
    """
    Write the default configuration to a YAML file.

    Parameters
    ----------
    output : Path
        Destination YAML file
    """
    setup_logging("INFO")
    export_cli_config(CliConfig(), output)
    return 0


COMMANDS = {
    "info": info,
    "convert": convert,
    "validate": validate,
    "dump-config": dump_config,
}


def cli() -> None:
    """Entry point for the installed script."""
    try:
        code = tyro.extras.subcommand_cli_from_dict(COMMANDS)
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        code = 2
    sys.exit(code)


if __name__ == "__main__":
    cli()
