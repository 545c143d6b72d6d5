"""
Local and remote file paths behind one interface.

Point cloud files are opened through ``UniversalPath`` so that the PTS
reader and writer work unchanged on local disks and on object stores.

- Local paths use the built-in ``open``
- ``s3://``, ``gs://``, ``az://``, ``memory://`` and other URLs go through
  fsspec, imported on first open (``pip install ptsio[cloud]``)
- Text handles never translate newlines, so the CR-LF terminators the PTS
  writer emits reach the file unchanged

Example Usage:
    path = UniversalPath("s3://survey-bucket/site_a/scan_001.pts")
    path.suffix        # ".pts", no fsspec import needed
    with path.open("r") as f:
        header = f.readline()
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO, Protocol


logger = logging.getLogger(__name__)

LOCAL_PROTOCOL = "local"

# Extra packages fsspec needs per protocol, used to improve import errors
_PROTOCOL_PACKAGES = {
    "s3": "s3fs",
    "gs": "gcsfs",
    "gcs": "gcsfs",
    "az": "adlfs",
    "abfs": "adlfs",
}


class PathBackend(Protocol):
    """Opens paths for one storage protocol."""

    def open(self, path: str, mode: str, encoding: str | None = None) -> IO:
        ...


class LocalBackend:
    """Local filesystem."""

    def open(self, path: str, mode: str, encoding: str | None = None) -> IO:
        return open(path, mode, encoding=encoding or "utf-8", newline="")


class FsspecBackend:
    """Remote filesystems through fsspec.

    Parameters
    ----------
    protocol : str
        fsspec protocol name (s3, gs, memory, ...)

    Raises
    ------
    ImportError
        If fsspec, or the package implementing ``protocol``, is missing
    """

    def __init__(self, protocol: str):
        try:
            import fsspec
        except ImportError:
            raise ImportError(
                f"fsspec is required for {protocol}:// paths. Install with: pip install fsspec"
            ) from None

        try:
            fsspec.filesystem(protocol)
        except ImportError as e:
            package = _PROTOCOL_PACKAGES.get(protocol)
            hint = f"pip install {package}" if package else "the fsspec implementation for it"
            raise ImportError(f"{protocol}:// paths require {hint}. Original error: {e}") from e

        self._fsspec = fsspec
        self.protocol = protocol

    def open(self, path: str, mode: str, encoding: str | None = None) -> IO:
        return self._fsspec.open(path, mode, encoding=encoding or "utf-8", newline="").open()


class UniversalPath:
    """
    Path to a local file or a remote object.

    The storage backend is created on first use, so name and suffix
    lookups on remote paths work without fsspec installed.

    Parameters
    ----------
    path : str | Path | UniversalPath
        Local path or URL
    """

    def __init__(self, path: str | Path | UniversalPath):
        if isinstance(path, UniversalPath):
            self.path_str = path.path_str
            self._protocol = path._protocol
            self._backend = path._backend
            return

        self.path_str = str(path)
        self._protocol = self.path_str.split("://", 1)[0] if "://" in self.path_str else LOCAL_PROTOCOL
        self._backend: PathBackend | None = None

    @property
    def backend(self) -> PathBackend:
        if self._backend is None:
            if self.is_remote:
                logger.debug("Creating fsspec backend for %s://", self._protocol)
                self._backend = FsspecBackend(self._protocol)
            else:
                self._backend = LocalBackend()
        return self._backend

    @property
    def is_remote(self) -> bool:
        return self._protocol != LOCAL_PROTOCOL

    @property
    def protocol(self) -> str:
        return self._protocol

    def open(self, mode: str = "r", encoding: str | None = None) -> IO:
        """
        Open the file as text.

        Parameters
        ----------
        mode : str
            Text mode, 'r' or 'w'
        encoding : str | None
            Text encoding (default: utf-8)

        Raises
        ------
        OSError
            If the file cannot be opened
        ImportError
            If a remote path needs a package that is not installed
        """
        return self.backend.open(self.path_str, mode, encoding=encoding)

    @property
    def name(self) -> str:
        # Query strings on URLs are not part of the name
        return self.path_str.split("?", 1)[0].rstrip("/").replace("\\", "/").split("/")[-1]

    @property
    def suffix(self) -> str:
        """Extension including the dot (e.g. ".pts"), or "" if there is none."""
        return Path(self.name).suffix

    def __str__(self) -> str:
        return self.path_str

    def __repr__(self) -> str:
        return f"UniversalPath('{self.path_str}')"

    def __eq__(self, other) -> bool:
        if isinstance(other, UniversalPath):
            return self.path_str == other.path_str
        return self.path_str == str(other)

    def __hash__(self) -> int:
        return hash(self.path_str)
