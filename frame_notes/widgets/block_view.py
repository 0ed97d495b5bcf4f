"""
BlockView - Drawable block host

Stacks the block's media, its read-only replay overlay and a "Draw" button.
Opening a drawing session covers the block with a dimmed drawover layer
(live canvas + toolbar) sized to the block. Only one session can be open.
"""

import logging
from typing import Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtGui import QKeySequence, QShortcut
from PyQt6.QtWidgets import QPushButton, QWidget

from ..core.editing_session import EditingSession
from ..drawover.stroke_serializer import annotation_set_to_list, scale_stroke
from ..events.event_bus import EventBus, get_event_bus
from ..models.block import DrawableBlock
from ..models.stroke import AnnotationSet
from ..services.annotation_storage import AnnotationStorage, get_annotation_storage
from ..utils.coordinate_utils import resolve_surface_size, scale_factors
from ..utils.layout_utils import measured_size
from .annotation_toolbar import AnnotationToolbar
from .drawover_canvas import DrawoverCanvas
from .media_view import MediaView
from .replay_overlay import ReplayOverlay

logger = logging.getLogger(__name__)


class BlockView(QWidget):
    """
    Media block with committed drawings and an on-demand drawover.

    Signals:
        session_opened(): A drawing session started
        session_closed(bool): The session ended (True if saved)
    """

    session_opened = pyqtSignal()
    session_closed = pyqtSignal(bool)

    TOOLBAR_MARGIN = 16

    def __init__(
        self,
        block: DrawableBlock,
        storage: Optional[AnnotationStorage] = None,
        event_bus: Optional[EventBus] = None,
        parent: Optional[QWidget] = None
    ):
        super().__init__(parent)

        self._block = block
        self._storage = storage if storage is not None else get_annotation_storage()
        self._event_bus = event_bus if event_bus is not None else get_event_bus()

        self._session: Optional[EditingSession] = None
        self._drawover: Optional[QWidget] = None
        self._canvas: Optional[DrawoverCanvas] = None
        self._toolbar: Optional[AnnotationToolbar] = None

        self._create_widgets()
        self._media_view.load(block.content, block.block_type)
        self._overlay.set_annotation_set(block.drawings, block.canvas_size)

    def _create_widgets(self):
        self.setMinimumSize(320, 240)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet("BlockView { background: #0a0a0a; }")

        self._media_view = MediaView(self)
        self._overlay = ReplayOverlay(self)

        self._draw_button = QPushButton("Draw", self)
        self._draw_button.setToolTip("Draw over this block")
        self._draw_button.setStyleSheet("""
            QPushButton { background: rgba(0, 0, 0, 150); color: #ffffff; border: none;
                          border-radius: 12px; padding: 4px 12px; }
            QPushButton:hover { background: rgba(0, 0, 0, 200); }
        """)
        self._draw_button.clicked.connect(self.open_drawing_session)

        self._layout_children()

    # ==================== Properties ====================

    @property
    def block(self) -> DrawableBlock:
        return self._block

    @property
    def media_view(self) -> MediaView:
        return self._media_view

    @property
    def overlay(self) -> ReplayOverlay:
        return self._overlay

    @property
    def draw_button(self) -> QPushButton:
        return self._draw_button

    @property
    def session(self) -> Optional[EditingSession]:
        return self._session

    @property
    def canvas(self) -> Optional[DrawoverCanvas]:
        return self._canvas

    @property
    def toolbar(self) -> Optional[AnnotationToolbar]:
        return self._toolbar

    @property
    def is_drawing(self) -> bool:
        return self._session is not None

    # ==================== Drawing Session ====================

    def _initial_paths(self, width: int, height: int) -> AnnotationSet:
        """Committed strokes mapped onto a canvas of the given size."""
        sx, sy = scale_factors(self._block.canvas_size, (width, height))
        if sx == 1.0 and sy == 1.0:
            return self._block.drawings
        return tuple(scale_stroke(stroke, sx, sy) for stroke in self._block.drawings)

    def open_drawing_session(self) -> Optional[EditingSession]:
        """
        Open the drawover on top of this block.

        Returns:
            The new session, or None if one is already open
        """
        if self._session is not None:
            logger.debug(f"Block {self._block.id} already has an open drawing session")
            return None

        width, height = resolve_surface_size(*measured_size(self))

        session = EditingSession(
            self._initial_paths(width, height),
            on_save=self._on_session_saved,
            on_cancel=self._on_session_cancelled,
            parent=self
        )

        drawover = QWidget(self)
        drawover.setObjectName("drawoverLayer")
        drawover.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        drawover.setStyleSheet("#drawoverLayer { background: rgba(0, 0, 0, 60); }")

        canvas = DrawoverCanvas(session, width, height, drawover)
        canvas.move(0, 0)

        toolbar = AnnotationToolbar(drawover)
        toolbar.bind_session(session)

        undo_shortcut = QShortcut(QKeySequence(QKeySequence.StandardKey.Undo), drawover)
        undo_shortcut.activated.connect(session.undo)
        cancel_shortcut = QShortcut(QKeySequence(Qt.Key.Key_Escape), drawover)
        cancel_shortcut.activated.connect(session.cancel)

        self._session = session
        self._drawover = drawover
        self._canvas = canvas
        self._toolbar = toolbar

        self._draw_button.hide()
        self._layout_children()
        drawover.show()
        canvas.setFocus()

        logger.info(f"Drawing session opened for block {self._block.id} ({width}x{height})")
        self._event_bus.drawing_session_started.emit(self._block.id)
        self.session_opened.emit()
        return session

    def _on_session_saved(self, paths: AnnotationSet):
        canvas_size = self._canvas.surface_size() if self._canvas else None
        self._block.replace_drawings(paths, canvas_size)

        if not self._storage.save_block(self._block):
            logger.error(f"Failed to persist drawings for block {self._block.id}")

        self._overlay.set_annotation_set(self._block.drawings, self._block.canvas_size)
        self._event_bus.drawings_updated.emit(
            self._block.id, annotation_set_to_list(self._block.drawings)
        )
        logger.info(f"Saved {len(self._block.drawings)} strokes for block {self._block.id}")
        self._close_session(True)

    def _on_session_cancelled(self):
        logger.info(f"Drawing session cancelled for block {self._block.id}")
        self._close_session(False)

    def _close_session(self, saved: bool):
        if self._drawover is not None:
            self._drawover.hide()
            self._drawover.deleteLater()

        if self._session is not None:
            self._session.deleteLater()

        self._session = None
        self._drawover = None
        self._canvas = None
        self._toolbar = None

        self._draw_button.show()
        self._event_bus.drawing_session_finished.emit(self._block.id, saved)
        self.session_closed.emit(saved)

    # ==================== Layout ====================

    def _layout_children(self):
        rect = self.rect()
        self._media_view.setGeometry(rect)
        self._overlay.setGeometry(rect)

        hint = self._draw_button.sizeHint()
        self._draw_button.setGeometry(
            rect.width() - hint.width() - 12, 12, hint.width(), hint.height()
        )
        self._draw_button.raise_()

        if self._drawover is not None:
            self._drawover.setGeometry(rect)
            self._drawover.raise_()
            if self._toolbar is not None:
                hint = self._toolbar.sizeHint()
                width = min(hint.width(), rect.width())
                self._toolbar.setGeometry(
                    (rect.width() - width) // 2,
                    rect.height() - self._toolbar.height() - self.TOOLBAR_MARGIN,
                    width,
                    self._toolbar.height()
                )
                self._toolbar.raise_()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._layout_children()


__all__ = ['BlockView']
