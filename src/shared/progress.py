"""
Lightweight progress reporting helpers.

These utilities keep progress concerns decoupled from the read/write loops
so we can plug in callbacks, progress bars, or tests without touching the
format code.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from tqdm import tqdm


if TYPE_CHECKING:
    from src.domain.interfaces import ProgressReporter
    from src.domain.options import ProgressCallback

logger = logging.getLogger(__name__)

# Records between two progress updates in the read/write loops
PROGRESS_INTERVAL = 1000


class NullProgressReporter:
    """Reporter that ignores every update."""

    def set_total(self, total: int) -> None:
        pass

    def update(self, current: int) -> None:
        pass

    def finish(self) -> None:
        pass

    def close(self) -> None:
        pass


class CountingProgressReporter:
    """
    Forwards (current, total) counts to a user callback.

    Exceptions raised by the callback are logged and otherwise ignored so a
    faulty progress sink cannot abort a read or write.
    """

    def __init__(self, callback: ProgressCallback | None = None) -> None:
        self._callback = callback
        self.total = 0
        self.current = 0
        self.finished = False
        self.closed = False

    def set_total(self, total: int) -> None:
        self.total = max(int(total), 0)
        self.current = 0
        self.finished = False
        self.closed = False

    def update(self, current: int) -> None:
        self.current = int(current)
        self._notify()

    def finish(self) -> None:
        self.current = self.total
        self.finished = True
        self._notify()

    def close(self) -> None:
        self.closed = True

    def _notify(self) -> None:
        if self._callback is None:
            return
        try:
            self._callback(self.current, self.total)
        except Exception as e:
            logger.warning("Progress callback failed: %s", e)


class TqdmProgressReporter:
    """Progress bar on stderr backed by tqdm."""

    def __init__(self, desc: str = "Points", unit: str = "pt", disable: bool | None = None) -> None:
        self._desc = desc
        self._unit = unit
        # Quiet when stderr is not a terminal unless explicitly enabled
        self._disable = (not sys.stderr.isatty()) if disable is None else disable
        self._bar: tqdm | None = None

    def set_total(self, total: int) -> None:
        self.close()
        self._bar = tqdm(total=total, desc=self._desc, unit=self._unit, disable=self._disable)

    def update(self, current: int) -> None:
        if self._bar is None:
            return
        self._bar.update(max(current - self._bar.n, 0))

    def finish(self) -> None:
        if self._bar is None:
            return
        if self._bar.total is not None:
            self._bar.update(max(self._bar.total - self._bar.n, 0))
        self.close()

    def close(self) -> None:
        """Close the bar without filling it."""
        if self._bar is not None:
            self._bar.close()
            self._bar = None


class CompositeProgressReporter:
    """Fans every call out to several reporters."""

    def __init__(self, reporters: list[ProgressReporter]) -> None:
        self._reporters = list(reporters)

    def set_total(self, total: int) -> None:
        for reporter in self._reporters:
            reporter.set_total(total)

    def update(self, current: int) -> None:
        for reporter in self._reporters:
            reporter.update(current)

    def finish(self) -> None:
        for reporter in self._reporters:
            reporter.finish()

    def close(self) -> None:
        for reporter in self._reporters:
            reporter.close()


def make_progress_reporter(
    update_progress: ProgressCallback | None = None,
    print_progress: bool = False,
    desc: str = "Points",
) -> ProgressReporter:
    """
    Build the reporter implied by a set of read/write options.

    Parameters
    ----------
    update_progress : ProgressCallback | None
        Callback receiving (current, total)
    print_progress : bool
        Also draw a tqdm bar
    desc : str
        Progress bar label

    Returns
    -------
    ProgressReporter
        A single reporter (possibly composite or null)
    """
    reporters: list[ProgressReporter] = []
    if update_progress is not None:
        reporters.append(CountingProgressReporter(update_progress))
    if print_progress:
        reporters.append(TqdmProgressReporter(desc=desc, disable=False))

    if not reporters:
        return NullProgressReporter()
    if len(reporters) == 1:
        return reporters[0]
    return CompositeProgressReporter(reporters)
