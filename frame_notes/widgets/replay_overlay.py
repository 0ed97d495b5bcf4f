"""
ReplayOverlay - Read-only annotation layer stacked over an image or video

Re-renders the whole annotation set whenever a new snapshot arrives or the
host resizes. Holds no capture or tool state.
"""

import logging
from typing import Iterable, Optional, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QImage, QPainter
from PyQt6.QtWidgets import QWidget

from ..drawover.stroke_renderer import render_annotation_set
from ..models.stroke import AnnotationSet, Stroke
from ..utils.layout_utils import measured_size

logger = logging.getLogger(__name__)


class ReplayOverlay(QWidget):
    """Transparent, mouse-transparent surface replaying committed strokes."""

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._paths: AnnotationSet = ()
        self._source_size: Optional[Tuple[int, int]] = None
        self._surface: QImage = render_annotation_set((), *measured_size(self))

        self.setAttribute(Qt.WidgetAttribute.WA_TransparentForMouseEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)

    @property
    def paths(self) -> AnnotationSet:
        return self._paths

    def surface(self) -> QImage:
        """Current rendered pixels."""
        return self._surface

    def set_annotation_set(
        self,
        paths: Iterable[Stroke],
        source_size: Optional[Tuple[int, int]] = None
    ):
        """
        Replace the displayed snapshot (never merged with the previous one).

        Args:
            paths: Committed strokes in paint order
            source_size: Size of the surface the strokes were captured on
        """
        self._paths = tuple(paths)
        self._source_size = source_size
        self.refresh()

    def refresh(self):
        """Re-render the current snapshot at the host's current size."""
        width, height = measured_size(self)
        self._surface = render_annotation_set(self._paths, width, height, self._source_size)
        self.update()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.refresh()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.drawImage(0, 0, self._surface)
        painter.end()


__all__ = ['ReplayOverlay']
