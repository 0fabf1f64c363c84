"""Frame timer measuring the seconds between consecutive frames."""

from __future__ import annotations

import time
from typing import Callable, Optional


class Timer:
    """Measures elapsed time between calls to :meth:`frame`."""

    def __init__(self, clock: Callable[[], float] = time.perf_counter) -> None:
        self._clock = clock
        self._start_time: Optional[float] = None
        self.frame_time = 0.0

    def start(self) -> None:
        """Begin timing from now."""
        self._start_time = self._clock()

    def frame(self) -> float:
        """Record the time since the previous frame (or start) and restart."""
        if self._start_time is None:
            raise RuntimeError("timer has not been started")
        now = self._clock()
        self.frame_time = now - self._start_time
        self._start_time = now
        return self.frame_time