"""Exact histograms that keep every observed point for percentile queries."""

from __future__ import annotations

import queue
from typing import Generic, Optional, Sequence, Tuple, TypeVar

T = TypeVar("T")


def _divide(value, count: int):
    """Divide a running sum by a count, truncating for integral types."""
    if isinstance(value, float):
        return value / count
    return value // count


class HistogramSender(Generic[T]):
    """A cheap handle that feeds points into a histogram from anywhere."""

    __slots__ = ("_channel",)

    def __init__(self, channel: "queue.SimpleQueue[T]") -> None:
        self._channel = channel

    def observe(self, point: T) -> None:
        """Queue a point; the histogram picks it up on its next receive."""
        self._channel.put(point)


class PreciseHistogram(Generic[T]):
    """Stores every point so that percentiles are exact.

    The running sum and count survive ``clear``; the stored points do not.
    """

    def __init__(
        self, zero: T = 0, channel: Optional["queue.SimpleQueue[T]"] = None
    ) -> None:
        self._points: list = []
        self._sum = zero
        self._count = 0
        self._channel = channel if channel is not None else queue.SimpleQueue()

    def observe(self, point: T) -> None:
        """Record one point."""
        self._points.append(point)
        self._sum += point
        self._count += 1

    def avg(self) -> Optional[T]:
        """Running sum divided by the number of points currently stored."""
        if not self._points:
            return None
        return _divide(self._sum, len(self._points))

    def total_sum(self) -> T:
        """Running sum, not reset by ``clear``."""
        return self._sum

    def total_count(self) -> int:
        """Running count, not reset by ``clear``."""
        return self._count

    def pcts(self, pcts: Sequence[int]) -> Optional[Tuple[T, ...]]:
        """Return the points at the given per-mille ranks, or None if empty."""
        if not self._points:
            return None
        # Sorting in place keeps later calls fast on already sorted data.
        self._points.sort()
        return tuple(self._points[self._pct1000_index(p)] for p in pcts)

    def pct(self, pct1000: int) -> Optional[T]:
        """Return the point at one per-mille rank, or None if empty."""
        result = self.pcts([pct1000])
        return None if result is None else result[0]

    def receive_all(self) -> None:
        """Drain every point queued by senders into the histogram."""
        while True:
            try:
                point = self._channel.get_nowait()
            except queue.Empty:
                return
            self.observe(point)

    def clear_receive_all(self) -> None:
        """Drop stored points, then take in everything queued."""
        self.clear()
        self.receive_all()

    def clear(self) -> None:
        """Drop stored points; running totals are kept."""
        self._points.clear()

    def _pct1000_index(self, pct1000: int) -> int:
        if not 0 <= pct1000 < 1000:
            raise ValueError(f"per-mille rank must be in [0, 1000), got {pct1000}")
        return len(self._points) * pct1000 // 1000


def histogram(zero=0) -> Tuple[PreciseHistogram, HistogramSender]:
    """Create a histogram together with a sender that feeds it."""
    channel: queue.SimpleQueue = queue.SimpleQueue()
    return PreciseHistogram(zero, channel), HistogramSender(channel)