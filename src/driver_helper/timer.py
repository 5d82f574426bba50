"""In-memory timer buckets for wait and action durations."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class TimingStats:
    """Statistics for one timer bucket."""

    count: int = 0
    total: float = 0.0
    min: float = float("inf")
    max: float = 0.0

    @property
    def avg(self) -> float:
        """Average duration in seconds."""
        return self.total / self.count if self.count > 0 else 0.0

    def record(self, duration: float) -> None:
        self.count += 1
        self.total += duration
        self.min = min(self.min, duration)
        self.max = max(self.max, duration)


class Timer:
    """Named start/stop timers feeding per-bucket statistics.

    Timers are keyed by bucket and thread, so two threads timing the same
    bucket do not stop each other's measurement. Failures never propagate:
    stopping a bucket that was not started is logged and ignored.

    Example:
        >>> timer = Timer()
        >>> timer.start("WAIT")
        >>> timer.stop("WAIT")
        >>> timer.stats("WAIT").count
        1
    """

    def __init__(self) -> None:
        self._started: dict[tuple[str, int], float] = {}
        self._stats: dict[str, TimingStats] = {}
        self._lock = threading.Lock()

    def start(self, bucket: str) -> None:
        key = (bucket, threading.get_ident())
        with self._lock:
            self._started[key] = time.perf_counter()

    def stop(self, bucket: str) -> float | None:
        """Stop the running timer for a bucket and record its duration.

        Args:
            bucket: Bucket name passed to start().

        Returns:
            The measured duration in seconds, or None if the bucket was not started.
        """
        key = (bucket, threading.get_ident())
        with self._lock:
            started = self._started.pop(key, None)
            if started is None:
                logger.debug(f"Timer.stop: bucket '{bucket}' was not started")
                return None
            duration = time.perf_counter() - started
            self._stats.setdefault(bucket, TimingStats()).record(duration)
        return duration

    def stats(self, bucket: str) -> TimingStats | None:
        """Return a copy of the statistics for a bucket."""
        with self._lock:
            stats = self._stats.get(bucket)
            if stats is None:
                return None
            return TimingStats(count=stats.count, total=stats.total, min=stats.min, max=stats.max)

    def reset(self) -> None:
        with self._lock:
            self._started.clear()
            self._stats.clear()
