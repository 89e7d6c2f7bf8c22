"""Byte counters and timing for a reading session."""

from __future__ import annotations

import time


class SessionStats:
    """Counts received bytes and measures how long the session has run."""

    def __init__(self) -> None:
        self._total_bytes = 0
        self._start = time.perf_counter()

    @property
    def total_bytes(self) -> int:
        """Bytes received since start or last reset."""
        return self._total_bytes

    def add_bytes(self, count: int) -> None:
        """Record that count more bytes were received."""
        if count < 0:
            raise ValueError(f"byte count cannot be negative: {count}")
        self._total_bytes += count

    def elapsed(self) -> float:
        """Seconds since start or last reset."""
        return time.perf_counter() - self._start

    def average_rate(self) -> float:
        """Average bytes per second, 0.0 if no time has passed."""
        seconds = self.elapsed()
        if seconds > 0.0:
            return self._total_bytes / seconds
        return 0.0

    def reset(self) -> None:
        """Clear the counter and restart the clock."""
        self._total_bytes = 0
        self._start = time.perf_counter()