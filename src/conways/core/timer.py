"""Labeled timing spans for debugging hot paths."""

import logging
import time
from typing import Optional

logger = logging.getLogger(__name__)


class Timer:
    """Measure a labeled span of work.

    Used as a context manager; the span is closed and logged on every exit
    path, including when the body raises.

        with Timer("Universe::tick"):
            universe.tick()
    """

    def __init__(self, label: str) -> None:
        self.label = label
        self._start: Optional[float] = None
        self.elapsed: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.elapsed = time.perf_counter() - self._start
        logger.debug("%s: %.3fms", self.label, self.elapsed * 1000)
