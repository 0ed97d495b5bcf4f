"""
Stroke capture state machine

Tracks one pointer gesture at a time: Idle -> Capturing on press, a
self-loop on every move, back to Idle on release or leave.
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple

from ..models.stroke import MIN_STROKE_POINTS, Point

logger = logging.getLogger(__name__)

Segment = Tuple[Point, Point]


class CaptureState(Enum):
    IDLE = 0
    CAPTURING = 1


class StrokeCapture:
    """
    Accumulates the points of the in-progress stroke.

    The capture only collects geometry; what the points become (ink or
    erase) is decided by the editing session at commit time.
    """

    def __init__(self):
        self._state = CaptureState.IDLE
        self._points: List[Point] = []

    @property
    def state(self) -> CaptureState:
        return self._state

    @property
    def is_capturing(self) -> bool:
        return self._state is CaptureState.CAPTURING

    @property
    def points(self) -> Tuple[Point, ...]:
        return tuple(self._points)

    def press(self, point: Point):
        """Start a new stroke at the pointer-down position."""
        if self.is_capturing:
            # A second press without release restarts the gesture
            logger.debug(f"Press while capturing, discarding {len(self._points)} points")
        self._state = CaptureState.CAPTURING
        self._points = [point]

    def move(self, point: Point) -> Optional[Segment]:
        """
        Append a point to the active stroke.

        Returns:
            The (previous, new) segment to paint incrementally, or None when idle
        """
        if not self.is_capturing:
            return None
        previous = self._points[-1]
        self._points.append(point)
        return previous, point

    def release(self) -> Optional[Tuple[Point, ...]]:
        """
        Finish the gesture (pointer up or leave).

        Returns:
            The captured points, or None for taps and when nothing was captured
        """
        if not self.is_capturing:
            return None
        points = tuple(self._points)
        self._state = CaptureState.IDLE
        self._points = []
        if len(points) < MIN_STROKE_POINTS:
            logger.debug(f"Discarding tap with {len(points)} point(s)")
            return None
        return points


__all__ = ['CaptureState', 'StrokeCapture', 'Segment']
