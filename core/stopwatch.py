"""Pausable elapsed-time counter for answer timing."""

import time


class Stopwatch:
    """Monotonic stopwatch with start, pause and reset.

    The clock is injectable so tests can drive time by hand.
    """

    def __init__(self, clock=time.monotonic):
        self._clock = clock
        self._accumulated = 0.0
        self._started_at = None

    @property
    def running(self) -> bool:
        return self._started_at is not None

    @property
    def elapsed_seconds(self) -> float:
        if self._started_at is None:
            return self._accumulated
        return self._accumulated + (self._clock() - self._started_at)

    def start(self) -> None:
        if self._started_at is None:
            self._started_at = self._clock()

    def pause(self) -> None:
        if self._started_at is not None:
            self._accumulated += self._clock() - self._started_at
            self._started_at = None

    def reset(self) -> None:
        """Zero the counter and stop it."""
        self._accumulated = 0.0
        self._started_at = None

    def restart(self) -> None:
        self.reset()
        self.start()
