"""
Registry for point cloud file formats.

Provides centralized registration and discovery of readers and writers,
keyed by format name and by file extension.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Type

from src.domain.interfaces import FormatMetadata, PointCloudReader, PointCloudWriter


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FormatEntry:
    """Reader/writer pair registered under one format name."""

    name: str
    reader: Type[PointCloudReader] | None
    writer: Type[PointCloudWriter] | None
    metadata: FormatMetadata


class PointCloudFormatRegistry:
    """Registry for point cloud formats.

    Provides:
    - Registration of reader/writer classes by format name
    - Lookup by name or by file extension
    - Metadata listing for CLI help

    Example
    -------
    >>> PointCloudFormatRegistry.register("pts", reader=PtsReader, writer=PtsWriter)
    >>> entry = PointCloudFormatRegistry.find_by_extension(".PTS")
    >>> entry.name
    'pts'
    """

    _formats: dict[str, FormatEntry] = {}

    @classmethod
    def register(
        cls,
        name: str,
        reader: Type[PointCloudReader] | None = None,
        writer: Type[PointCloudWriter] | None = None,
    ) -> None:
        """Register a reader and/or writer for a format.

        Parameters
        ----------
        name : str
            Format identifier (e.g., "pts")
        reader : Type[PointCloudReader] | None
            Class implementing PointCloudReader
        writer : Type[PointCloudWriter] | None
            Class implementing PointCloudWriter

        Raises
        ------
        ValueError
            If neither a reader nor a writer is given
        """
        impl = reader or writer
        if impl is None:
            raise ValueError(f"Format {name!r} needs a reader or a writer")

        meta = impl.metadata()
        cls._formats[name.lower()] = FormatEntry(name.lower(), reader, writer, meta)
        logger.debug(
            "Registered point cloud format: %s (%s) - extensions: %s",
            name,
            meta.description,
            ", ".join(meta.file_extensions),
        )

    @classmethod
    def get(cls, name: str) -> FormatEntry | None:
        """Get a registered format by name (case-insensitive)."""
        return cls._formats.get(name.lower())

    @classmethod
    def find_by_extension(cls, extension: str) -> FormatEntry | None:
        """Find the format handling files with ``extension``.

        Parameters
        ----------
        extension : str
            File extension, with or without leading dot (case-insensitive)

        Returns
        -------
        FormatEntry | None
            First matching format, or None
        """
        extension = extension.lower()
        if not extension.startswith("."):
            extension = f".{extension}"

        for entry in cls._formats.values():
            if extension in (ext.lower() for ext in entry.metadata.file_extensions):
                return entry
        return None

    @classmethod
    def list_all(cls) -> list[FormatMetadata]:
        """List metadata for all registered formats."""
        return [entry.metadata for entry in cls._formats.values()]

    @classmethod
    def names(cls) -> list[str]:
        """Get sorted list of registered format names."""
        return sorted(cls._formats.keys())

    @classmethod
    def clear(cls) -> None:
        """Clear all registered formats (for testing)."""
        cls._formats.clear()
