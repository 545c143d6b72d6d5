"""
Line-oriented text file handle.

Wraps a ``UniversalPath`` text handle with "read next line" and
"write formatted line" primitives. Written lines always end with CR-LF;
read lines come back with any trailing CR/LF removed.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import IO

from src.infrastructure.io.path_io import UniversalPath


logger = logging.getLogger(__name__)

LINE_TERMINATOR = "\r\n"


class LineFile:
    """Text file opened for line-by-line reading or writing.

    Example
    -------
    >>> with LineFile.open("cloud.pts", "w") as f:
    ...     f.write_line("1")
    ...     f.write_line("0.0 0.0 0.0")
    """

    def __init__(self, handle: IO, path: str, mode: str):
        self._handle = handle
        self.path = path
        self.mode = mode
        self.lines_read = 0

    @classmethod
    def open(cls, path: str | Path | UniversalPath, mode: str = "r") -> LineFile:
        """
        Open ``path`` for text reading ("r") or writing ("w").

        Raises
        ------
        OSError
            If the file cannot be opened
        ValueError
            If ``mode`` is not "r" or "w"
        """
        if mode not in ("r", "w"):
            raise ValueError(f"LineFile mode must be 'r' or 'w', got {mode!r}")
        upath = UniversalPath(path)
        handle = upath.open(mode)
        logger.debug("Opened %s for %s", upath, "reading" if mode == "r" else "writing")
        return cls(handle, str(upath), mode)

    def read_line(self) -> str | None:
        """Return the next line without its terminator, or None at EOF."""
        line = self._handle.readline()
        if not line:
            return None
        self.lines_read += 1
        return line.rstrip("\r\n")

    def write_line(self, text: str) -> None:
        """Write ``text`` followed by CR-LF."""
        self._handle.write(text)
        self._handle.write(LINE_TERMINATOR)

    def close(self) -> None:
        if not self._handle.closed:
            self._handle.close()

    @property
    def closed(self) -> bool:
        return self._handle.closed

    def __enter__(self) -> LineFile:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
