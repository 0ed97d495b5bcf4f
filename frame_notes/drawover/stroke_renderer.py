"""
Stroke renderer - the compositing routine shared by live capture and replay.

Provides:
- Per-draw-call stroke styles (paint vs. erase, thickness, glow)
- Batch compositing of a whole annotation set onto a transparent surface
- Incremental compositing of a single segment while a stroke is captured

Every call opens and ends its own QPainter, so composition mode and glow
settings never carry over from one stroke (or surface) to the next.
"""

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

import cv2
import numpy as np
from PyQt6.QtCore import Qt, QPoint, QRect
from PyQt6.QtGui import QColor, QImage, QPainter, QPainterPath, QPen

from ..config import Config
from ..models.stroke import (
    EraseStroke, PaintStroke, Point, Stroke, StrokeKind, is_renderable
)
from ..models.tool import DrawingTool
from ..utils.coordinate_utils import resolve_surface_size, scale_factors
from ..utils.image_utils import array_to_image, image_to_array
from .stroke_serializer import scale_stroke

logger = logging.getLogger(__name__)

SURFACE_FORMAT = QImage.Format.Format_ARGB32_Premultiplied


class CompositeMode(Enum):
    """How a stroke combines with what is already on the surface."""
    PAINT = "paint"  # Source over
    ERASE = "erase"  # Destination out: clears to transparent


@dataclass(frozen=True)
class StrokeStyle:
    """Visual parameters for one draw call."""
    mode: CompositeMode
    thickness: float
    color: str = "#000000"
    glow_blur: float = 0.0


def style_for_stroke(stroke: Stroke) -> StrokeStyle:
    """Derive the draw parameters of a committed stroke."""
    if stroke.kind is StrokeKind.ERASE:
        return StrokeStyle(
            mode=CompositeMode.ERASE,
            thickness=stroke.width * Config.ERASER_WIDTH_MULTIPLIER
        )
    return StrokeStyle(
        mode=CompositeMode.PAINT,
        thickness=stroke.width,
        color=stroke.color,
        glow_blur=Config.GLOW_BLUR
    )


def style_for_tool(tool: DrawingTool, color: str, brush_size: float) -> StrokeStyle:
    """
    Draw parameters for the stroke a tool is currently producing.

    Built from the same stroke a commit would create, so a live segment and
    its later replay always share thickness and blend mode.
    """
    if tool is DrawingTool.ERASER:
        return style_for_stroke(EraseStroke(points=(), width=brush_size))
    return style_for_stroke(PaintStroke(points=(), color=color, width=brush_size))


# ==================== Surfaces ====================

def create_surface(width: Optional[int], height: Optional[int]) -> QImage:
    """Create a fully transparent drawing surface (default size if unmeasured)."""
    w, h = resolve_surface_size(width, height)
    surface = QImage(w, h, SURFACE_FORMAT)
    surface.fill(Qt.GlobalColor.transparent)
    return surface


def clear_surface(surface: QImage):
    surface.fill(Qt.GlobalColor.transparent)


# ==================== Paths ====================

def build_stroke_path(points: Sequence[Point]) -> QPainterPath:
    """One continuous path through all points, so joins are drawn as joins."""
    path = QPainterPath()
    if not points:
        return path
    path.moveTo(points[0].x, points[0].y)
    for point in points[1:]:
        path.lineTo(point.x, point.y)
    return path


def _make_pen(style: StrokeStyle) -> QPen:
    if style.mode is CompositeMode.ERASE:
        # Only the alpha of the source matters for destination-out
        color = QColor(0, 0, 0, 255)
    else:
        color = QColor(style.color)
    pen = QPen(color, style.thickness)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


def _render_glow(
    path: QPainterPath,
    pen: QPen,
    style: StrokeStyle,
    bounds: QRect
) -> Tuple[Optional[QImage], QPoint]:
    """
    Render the blurred halo for a paint stroke.

    The stroke is drawn into a scratch layer covering its bounding box plus
    the blur reach, then Gaussian-blurred in premultiplied space.

    Returns:
        (halo image, top-left position on the surface); image is None when the
        stroke lies entirely outside the surface
    """
    sigma = style.glow_blur / 2.0
    margin = int(math.ceil(style.thickness / 2.0 + 3.0 * sigma)) + 1
    region = path.boundingRect().adjusted(-margin, -margin, margin, margin).toAlignedRect()
    region = region.intersected(bounds)
    if region.isEmpty():
        return None, QPoint()

    layer = QImage(region.size(), QImage.Format.Format_RGBA8888_Premultiplied)
    layer.fill(Qt.GlobalColor.transparent)
    painter = QPainter(layer)
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.translate(-region.x(), -region.y())
        painter.setPen(pen)
        painter.drawPath(path)
    finally:
        painter.end()

    pixels = image_to_array(layer, premultiplied=True)
    blurred = cv2.GaussianBlur(
        pixels, (0, 0), sigmaX=sigma, sigmaY=sigma,
        borderType=cv2.BORDER_CONSTANT
    )
    # Rounding can push a color channel above alpha; keep it valid premultiplied
    blurred[:, :, :3] = np.minimum(blurred[:, :, :3], blurred[:, :, 3:4])
    return array_to_image(blurred, premultiplied=True), region.topLeft()


def _draw_path(surface: QImage, path: QPainterPath, style: StrokeStyle):
    """Composite one path onto the surface using only the given style."""
    pen = _make_pen(style)
    painter = QPainter(surface)
    try:
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        if style.mode is CompositeMode.ERASE:
            painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_DestinationOut)
        else:
            painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)
            if style.glow_blur > 0:
                halo, origin = _render_glow(path, pen, style, surface.rect())
                if halo is not None:
                    painter.drawImage(origin, halo)
        painter.setPen(pen)
        painter.drawPath(path)
    finally:
        painter.end()


# ==================== Compositing ====================

def composite_strokes(surface: QImage, strokes: Iterable[Stroke]) -> int:
    """
    Batch mode: clear the surface and paint every stroke in order.

    Strokes with fewer than two points are skipped. Later strokes (erasers
    included) composite on top of earlier ones.

    Returns:
        Number of strokes drawn
    """
    clear_surface(surface)
    drawn = 0
    for stroke in strokes:
        if not is_renderable(stroke):
            continue
        _draw_path(surface, build_stroke_path(stroke.points), style_for_stroke(stroke))
        drawn += 1
    logger.debug(f"Composited {drawn} strokes onto {surface.width()}x{surface.height()} surface")
    return drawn


def composite_segment(surface: QImage, start: Point, end: Point, style: StrokeStyle):
    """Incremental mode: paint only the segment between two captured points."""
    _draw_path(surface, build_stroke_path((start, end)), style)


def render_annotation_set(
    strokes: Iterable[Stroke],
    width: Optional[int],
    height: Optional[int],
    source_size: Optional[Tuple[int, int]] = None
) -> QImage:
    """
    Render an annotation set onto a new transparent surface.

    Args:
        strokes: Committed strokes in paint order
        width: Surface width (default size when unknown)
        height: Surface height (default size when unknown)
        source_size: Size of the surface the strokes were captured on; strokes
            are rescaled when it differs from the target size

    Returns:
        The rendered surface
    """
    surface = create_surface(width, height)
    scale_x, scale_y = scale_factors(source_size, (surface.width(), surface.height()))
    if scale_x != 1.0 or scale_y != 1.0:
        strokes = [scale_stroke(s, scale_x, scale_y) for s in strokes]
    composite_strokes(surface, strokes)
    return surface


__all__ = [
    'CompositeMode',
    'StrokeStyle',
    'style_for_stroke',
    'style_for_tool',
    'create_surface',
    'clear_surface',
    'build_stroke_path',
    'composite_strokes',
    'composite_segment',
    'render_annotation_set',
]
