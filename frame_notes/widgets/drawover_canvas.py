"""
DrawoverCanvas - Interactive surface for capturing neon ink strokes

Mouse and touch input drive a StrokeCapture state machine. Each move paints
the new segment straight onto the backing surface for immediate feedback;
every change to the session's strokes triggers a full batch redraw, which is
the authoritative rendering.
"""

import logging
from typing import Optional, Tuple

from PyQt6.QtCore import Qt, QEvent, QPointF, pyqtSignal
from PyQt6.QtGui import QCursor, QImage, QPainter
from PyQt6.QtWidgets import QWidget

from ..core.editing_session import EditingSession
from ..core.stroke_capture import StrokeCapture
from ..drawover.stroke_renderer import composite_segment, composite_strokes, create_surface
from ..models.stroke import AnnotationSet, Point
from ..utils.coordinate_utils import to_surface_point

logger = logging.getLogger(__name__)


class DrawoverCanvas(QWidget):
    """
    Fixed-size live drawing surface bound to an EditingSession.

    Signals:
        drawing_started(): Pointer went down on the surface
        drawing_finished(): Gesture ended (committed or discarded)
    """

    drawing_started = pyqtSignal()
    drawing_finished = pyqtSignal()

    def __init__(
        self,
        session: EditingSession,
        width: Optional[int] = None,
        height: Optional[int] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)

        self._session = session
        self._capture = StrokeCapture()
        self._surface = create_surface(width, height)
        self._redraw_count = 0

        self._setup_widget()
        self._session.paths_changed.connect(self._on_paths_changed)
        self._redraw(self._session.paths)

    def _setup_widget(self):
        """Configure the widget."""
        self.setFixedSize(self._surface.size())
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setCursor(QCursor(Qt.CursorShape.CrossCursor))
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

    # ==================== Properties ====================

    @property
    def session(self) -> EditingSession:
        return self._session

    @property
    def capture(self) -> StrokeCapture:
        return self._capture

    @property
    def surface(self) -> QImage:
        return self._surface

    @property
    def redraw_count(self) -> int:
        """Number of full batch redraws performed so far."""
        return self._redraw_count

    def surface_size(self) -> Tuple[int, int]:
        return self._surface.width(), self._surface.height()

    # ==================== Stroke Capture ====================

    def pointer_down(self, point: Point):
        """Idle -> Capturing."""
        if not self._session.is_active:
            return
        if self._capture.is_capturing:
            # Restarting discards the live ink of the abandoned gesture
            self._redraw(self._session.paths)
        self._capture.press(point)
        self.drawing_started.emit()

    def pointer_move(self, point: Point):
        """Capturing self-loop: record the point and paint the new segment."""
        segment = self._capture.move(point)
        if segment is None:
            return
        composite_segment(self._surface, segment[0], segment[1], self._session.current_style())
        self.update()

    def pointer_up(self):
        """Capturing -> Idle: commit the stroke if it has at least two points."""
        if not self._capture.is_capturing:
            return
        points = self._capture.release()
        if points is not None and self._session.commit_stroke(points) is None:
            # Nothing was committed; drop the live ink
            self._redraw(self._session.paths)
        self.drawing_finished.emit()

    def _leaves_surface(self, point: Point) -> bool:
        return not (0 <= point.x < self.width() and 0 <= point.y < self.height())

    def _point_from_global(self, global_pos: QPointF) -> Point:
        origin = self.mapToGlobal(QPointF(0, 0))
        return to_surface_point(global_pos.x(), global_pos.y(), origin.x(), origin.y())

    # ==================== Rendering ====================

    def _on_paths_changed(self, paths: AnnotationSet):
        self._redraw(paths)

    def _redraw(self, paths: AnnotationSet):
        """Full batch redraw from the committed strokes."""
        composite_strokes(self._surface, paths)
        self._redraw_count += 1
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.drawImage(0, 0, self._surface)
        painter.end()

    # ==================== Mouse Events ====================

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton or not self._session.is_active:
            super().mousePressEvent(event)
            return
        self.pointer_down(self._point_from_global(event.globalPosition()))
        event.accept()

    def mouseMoveEvent(self, event):
        if not self._capture.is_capturing:
            super().mouseMoveEvent(event)
            return
        # The implicit grab suppresses leaveEvent while the button is held
        point = self._point_from_global(event.globalPosition())
        if self._leaves_surface(point):
            self.pointer_up()
        else:
            self.pointer_move(point)
        event.accept()

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton or not self._capture.is_capturing:
            super().mouseReleaseEvent(event)
            return
        self.pointer_up()
        event.accept()

    def leaveEvent(self, event):
        """Leaving the surface ends the gesture like a release."""
        self.pointer_up()
        super().leaveEvent(event)

    # ==================== Touch Events ====================

    def event(self, event):
        """Intercept touch events; accepting them suppresses synthesized mouse input."""
        event_type = event.type()

        if event_type in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate,
                          QEvent.Type.TouchEnd, QEvent.Type.TouchCancel):
            self._handle_touch_event(event)
            return True

        return super().event(event)

    def _handle_touch_event(self, event):
        event_type = event.type()
        touch_points = event.points()

        if event_type in (QEvent.Type.TouchEnd, QEvent.Type.TouchCancel) or not touch_points:
            self.pointer_up()
        else:
            # Only the first finger draws
            point = self._point_from_global(touch_points[0].globalPosition())
            if event_type == QEvent.Type.TouchBegin:
                self.pointer_down(point)
            elif self._leaves_surface(point):
                self.pointer_up()
            else:
                self.pointer_move(point)
        event.accept()


__all__ = ['DrawoverCanvas']
