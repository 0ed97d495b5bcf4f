"""
EditingSession - tool state, working copy and undo for one drawing session

Pattern: modal single-writer session
The session owns a mutable working copy of the block's strokes. Save hands an
immutable snapshot back to the block owner; cancel discards the working copy
and leaves the block's committed strokes untouched.
"""

import logging
from typing import Callable, Iterable, List, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from ..config import Config
from ..drawover.stroke_renderer import StrokeStyle, style_for_tool
from ..models.stroke import (
    AnnotationSet, EraseStroke, MIN_STROKE_POINTS, PaintStroke, Point, Stroke,
    to_annotation_set
)
from ..models.tool import DrawingTool

logger = logging.getLogger(__name__)

SaveCallback = Callable[[AnnotationSet], None]
CancelCallback = Callable[[], None]


class EditingSession(QObject):
    """
    Tool, color, brush size and working copy for one editing session.

    Usage:
        session = EditingSession(block.drawings, on_save=block.replace_drawings)
        session.select_tool(DrawingTool.ERASER)
        session.commit_stroke(points)
        session.save()

    Signals:
        paths_changed(tuple): Working copy changed (commit or undo)
        tool_changed(str): Active tool value ('pen' or 'eraser')
        color_changed(str): Active palette color
        brush_size_changed(int): Active brush size
        saved(tuple): Session closed with the final annotation set
        cancelled(): Session closed without changes
    """

    paths_changed = pyqtSignal(tuple)
    tool_changed = pyqtSignal(str)
    color_changed = pyqtSignal(str)
    brush_size_changed = pyqtSignal(int)
    saved = pyqtSignal(tuple)
    cancelled = pyqtSignal()

    def __init__(
        self,
        initial_paths: Iterable[Stroke] = (),
        on_save: Optional[SaveCallback] = None,
        on_cancel: Optional[CancelCallback] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)

        self._paths: List[Stroke] = list(to_annotation_set(initial_paths))
        self._on_save = on_save
        self._on_cancel = on_cancel

        self._tool = DrawingTool.PEN
        self._color = Config.DEFAULT_COLOR
        self._brush_size = Config.DEFAULT_BRUSH_SIZE
        self._active = True

        logger.debug(f"Editing session opened with {len(self._paths)} strokes")

    # ==================== Properties ====================

    @property
    def tool(self) -> DrawingTool:
        return self._tool

    @property
    def color(self) -> str:
        return self._color

    @property
    def brush_size(self) -> int:
        return self._brush_size

    @property
    def paths(self) -> AnnotationSet:
        """Snapshot of the working copy."""
        return tuple(self._paths)

    @property
    def is_active(self) -> bool:
        return self._active

    def current_style(self) -> StrokeStyle:
        """Draw parameters for live painting with the active tool."""
        return style_for_tool(self._tool, self._color, self._brush_size)

    # ==================== Tool Management ====================

    def select_color(self, color: str):
        """Pick a palette color; always switches back to the pen."""
        if not Config.is_palette_color(color):
            raise ValueError(f"Not a palette color: {color!r}")
        self._color = color.lower()
        self.color_changed.emit(self._color)
        self.select_tool(DrawingTool.PEN)

    def select_tool(self, tool: DrawingTool):
        """Switch the tool used for subsequent strokes."""
        if tool == self._tool:
            return
        self._tool = tool
        self.tool_changed.emit(tool.value)

    def set_brush_size(self, size: int):
        """Set the brush size shared by pen and eraser (clamped)."""
        size = max(Config.MIN_BRUSH_SIZE, min(Config.MAX_BRUSH_SIZE, int(size)))
        if size == self._brush_size:
            return
        self._brush_size = size
        self.brush_size_changed.emit(size)

    # ==================== Working Copy ====================

    def _build_stroke(self, points: Iterable[Point]) -> Stroke:
        if self._tool is DrawingTool.ERASER:
            return EraseStroke(points=tuple(points), width=self._brush_size)
        return PaintStroke(points=tuple(points), color=self._color, width=self._brush_size)

    def commit_stroke(self, points: Iterable[Point]) -> Optional[Stroke]:
        """
        Append a finished gesture to the working copy.

        Args:
            points: Captured points in surface pixels

        Returns:
            The committed stroke, or None for taps and closed sessions
        """
        if not self._active:
            logger.debug("Ignoring stroke commit on a closed session")
            return None

        points = tuple(points)
        if len(points) < MIN_STROKE_POINTS:
            return None

        stroke = self._build_stroke(points)
        self._paths.append(stroke)
        logger.debug(
            f"Committed {stroke.kind.value} stroke ({len(points)} points, "
            f"width {stroke.width}); {len(self._paths)} total"
        )
        self.paths_changed.emit(self.paths)
        return stroke

    def undo(self) -> Optional[Stroke]:
        """
        Remove the most recently committed stroke.

        Returns:
            The removed stroke, or None when there is nothing to undo
        """
        if not self._active or not self._paths:
            return None
        stroke = self._paths.pop()
        logger.debug(f"Undo; {len(self._paths)} strokes remain")
        self.paths_changed.emit(self.paths)
        return stroke

    # ==================== Session Handoff ====================

    def save(self) -> AnnotationSet:
        """
        Close the session and hand the working copy to the block owner.

        Returns:
            The final annotation set (empty tuple if already closed)
        """
        if not self._active:
            return ()
        self._active = False
        snapshot = self.paths
        logger.debug(f"Editing session saved with {len(snapshot)} strokes")
        self.saved.emit(snapshot)
        if self._on_save is not None:
            self._on_save(snapshot)
        return snapshot

    def cancel(self):
        """Close the session, discarding the working copy."""
        if not self._active:
            return
        self._active = False
        self._paths.clear()
        logger.debug("Editing session cancelled")
        self.cancelled.emit()
        if self._on_cancel is not None:
            self._on_cancel()


__all__ = ['EditingSession']
