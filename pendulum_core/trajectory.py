#!/usr/bin/env python3
"""
Bounded trail of second-bob positions used for rendering and diagnostics.
"""
from collections import deque
from typing import Deque, Optional, Tuple

from .data_models import ConfigurationError, _is_count

Point = Tuple[float, float]


class TrajectoryBuffer:
    """
    FIFO of the most recent `capacity` points, oldest first.

    Backed by a deque with maxlen so that appending past capacity drops the
    oldest point in O(1).
    """

    def __init__(self, capacity: int):
        if not _is_count(capacity) or capacity <= 0:
            raise ConfigurationError(f"Trajectory capacity must be a positive integer, got {capacity}.")
        self._points: Deque[Point] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._points.maxlen

    def append(self, x: float, y: float) -> None:
        """Add a point, evicting the oldest one when full."""
        self._points.append((float(x), float(y)))

    def clear(self) -> None:
        self._points.clear()

    def points(self) -> Tuple[Point, ...]:
        """Snapshot of the stored points in chronological order."""
        return tuple(self._points)

    def size(self) -> int:
        return len(self._points)

    def is_empty(self) -> bool:
        return not self._points

    def last_point(self) -> Optional[Point]:
        if not self._points:
            return None
        return self._points[-1]

    def __len__(self) -> int:
        return len(self._points)

    def __iter__(self):
        return iter(self._points)
