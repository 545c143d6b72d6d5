"""
Point cloud format registry.

This module provides centralized registration and discovery of point cloud
readers and writers, enabling easy extension with new format support.

Usage
-----
>>> from src.infrastructure.registry import (
...     PointCloudFormatRegistry,
...     register_defaults,
... )
>>>
>>> # Initialize default formats
>>> register_defaults()
>>>
>>> # Look up a format by file extension
>>> entry = PointCloudFormatRegistry.find_by_extension(".pts")
>>> reader = entry.reader()
"""

import logging

from .formats import FormatEntry, PointCloudFormatRegistry


logger = logging.getLogger(__name__)

_defaults_registered = False


def register_default_formats() -> None:
    """Register all built-in formats."""
    # Import here to avoid circular imports
    from src.infrastructure.processing.pts import PtsReader, PtsWriter

    PointCloudFormatRegistry.register("pts", reader=PtsReader, writer=PtsWriter)


def register_defaults() -> None:
    """Register all default formats.

    Safe to call multiple times - will only register once.
    """
    global _defaults_registered
    if _defaults_registered:
        return

    logger.debug("Registering default point cloud formats")
    register_default_formats()
    _defaults_registered = True


def reset_defaults() -> None:
    """Forget registrations so the next ``register_defaults`` re-registers (for testing)."""
    global _defaults_registered
    PointCloudFormatRegistry.clear()
    _defaults_registered = False


__all__ = [
    "FormatEntry",
    "PointCloudFormatRegistry",
    "register_default_formats",
    "register_defaults",
    "reset_defaults",
]
