"""
Pausable animation clock.
"""

import time
from typing import Callable, Optional


class AnimationClock:
    """
    Elapsed animation time that stops while paused.

    Time spent paused is excluded, so resuming continues from the frozen
    frame instead of jumping ahead.
    """

    def __init__(self, time_source: Callable[[], float] = time.monotonic):
        """
        Initialize clock; animation time starts at zero.

        Args:
            time_source: Monotonic clock in seconds
        """
        self._time_source = time_source
        self._start = time_source()
        self._paused_total = 0.0
        self._pause_started: Optional[float] = None

    @property
    def is_paused(self) -> bool:
        return self._pause_started is not None

    def now(self) -> float:
        """Animation time in seconds."""
        if self._pause_started is not None:
            return self._pause_started - self._start - self._paused_total
        return self._time_source() - self._start - self._paused_total

    def now_millis(self) -> float:
        return self.now() * 1000.0

    def pause(self) -> None:
        if self._pause_started is None:
            self._pause_started = self._time_source()

    def resume(self) -> None:
        if self._pause_started is not None:
            self._paused_total += self._time_source() - self._pause_started
            self._pause_started = None

    def toggle(self) -> bool:
        """
        Flip between paused and running.

        Returns:
            True if the clock is now paused
        """
        if self.is_paused:
            self.resume()
        else:
            self.pause()
        return self.is_paused
