"""Tests for the stroke capture state machine."""

from frame_notes.core.stroke_capture import CaptureState, StrokeCapture
from frame_notes.models.stroke import Point


class TestStrokeCapture:

    def test_starts_idle(self):
        capture = StrokeCapture()
        assert capture.state is CaptureState.IDLE
        assert not capture.is_capturing
        assert capture.points == ()

    def test_press_move_release(self):
        capture = StrokeCapture()
        capture.press(Point(10, 10))
        assert capture.is_capturing

        assert capture.move(Point(10, 50)) == (Point(10, 10), Point(10, 50))
        assert capture.move(Point(50, 50)) == (Point(10, 50), Point(50, 50))

        points = capture.release()
        assert points == (Point(10, 10), Point(10, 50), Point(50, 50))
        assert capture.state is CaptureState.IDLE
        assert capture.points == ()

    def test_move_while_idle_is_ignored(self):
        capture = StrokeCapture()
        assert capture.move(Point(3, 3)) is None
        assert capture.points == ()

    def test_release_while_idle_returns_none(self):
        assert StrokeCapture().release() is None

    def test_tap_is_discarded(self):
        capture = StrokeCapture()
        capture.press(Point(5, 5))
        assert capture.release() is None
        assert not capture.is_capturing

    def test_second_press_restarts_gesture(self):
        capture = StrokeCapture()
        capture.press(Point(0, 0))
        capture.move(Point(1, 1))
        capture.press(Point(20, 20))
        assert capture.points == (Point(20, 20),)

    def test_repeated_points_are_kept(self):
        capture = StrokeCapture()
        capture.press(Point(7, 7))
        capture.move(Point(7, 7))
        assert capture.release() == (Point(7, 7), Point(7, 7))
