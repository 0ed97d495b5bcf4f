"""
Stroke serializer for data conversion and persistence.

Provides functions for:
- Converting strokes to and from the persisted ``{points, color, width}`` records
- Scaling strokes captured on a differently sized surface
"""

import logging
import math
from typing import Any, Dict, Iterable, List, Mapping

from ..config import Config
from ..models.stroke import (
    AnnotationSet, EraseStroke, PaintStroke, Point, Stroke, StrokeKind,
    is_renderable
)

logger = logging.getLogger(__name__)


class AnnotationFormatError(ValueError):
    """Raised when a persisted stroke record cannot be decoded."""


def _point_from_data(data: Any) -> Point:
    if isinstance(data, Mapping):
        x, y = data.get('x'), data.get('y')
    elif isinstance(data, (list, tuple)) and len(data) >= 2:
        x, y = data[0], data[1]
    else:
        raise AnnotationFormatError(f"Unrecognised point: {data!r}")

    if isinstance(x, bool) or isinstance(y, bool):
        raise AnnotationFormatError(f"Non-numeric point: {data!r}")
    try:
        fx, fy = float(x), float(y)
    except (TypeError, ValueError):
        raise AnnotationFormatError(f"Non-numeric point: {data!r}") from None
    if not (math.isfinite(fx) and math.isfinite(fy)):
        raise AnnotationFormatError(f"Non-finite point: {data!r}")
    return Point(fx, fy)


def stroke_to_dict(stroke: Stroke) -> Dict:
    """
    Convert a stroke to its persisted record.

    Erase strokes are written with the reserved ``"eraser"`` color tag.
    """
    if stroke.kind is StrokeKind.ERASE:
        color = Config.ERASER_TAG
    else:
        color = stroke.color
    return {
        'points': [{'x': p.x, 'y': p.y} for p in stroke.points],
        'color': color,
        'width': stroke.width,
    }


def stroke_from_dict(data: Any) -> Stroke:
    """
    Decode a persisted stroke record.

    Args:
        data: Mapping with ``points`` (list of {x, y} or [x, y]), ``color``, ``width``

    Returns:
        PaintStroke, or EraseStroke when color is the eraser tag

    Raises:
        AnnotationFormatError: If the record is malformed
    """
    if not isinstance(data, Mapping):
        raise AnnotationFormatError(f"Stroke record must be a mapping, got {type(data).__name__}")

    raw_points = data.get('points')
    if not isinstance(raw_points, (list, tuple)):
        raise AnnotationFormatError("Stroke record has no points list")
    points = tuple(_point_from_data(p) for p in raw_points)

    width = data.get('width', Config.DEFAULT_BRUSH_SIZE)
    if (isinstance(width, bool) or not isinstance(width, (int, float))
            or not math.isfinite(width) or width <= 0):
        raise AnnotationFormatError(f"Stroke width must be a positive number, got {width!r}")

    color = data.get('color')
    if not isinstance(color, str) or not color:
        raise AnnotationFormatError(f"Stroke color must be a string, got {color!r}")

    if color == Config.ERASER_TAG:
        return EraseStroke(points=points, width=width)
    return PaintStroke(points=points, color=color, width=width)


def annotation_set_to_list(strokes: Iterable[Stroke]) -> List[Dict]:
    """Serialize strokes in paint order, omitting ones that cannot render."""
    return [stroke_to_dict(s) for s in strokes if is_renderable(s)]


def annotation_set_from_list(data: Any, strict: bool = False) -> AnnotationSet:
    """
    Decode a persisted annotation set.

    Args:
        data: List of stroke records
        strict: Raise on the first malformed record instead of skipping it

    Returns:
        Immutable annotation set with degenerate strokes dropped
    """
    if data is None:
        return ()
    if not isinstance(data, (list, tuple)):
        if strict:
            raise AnnotationFormatError("Annotation set must be a list")
        logger.warning(f"Ignoring annotation set of type {type(data).__name__}")
        return ()

    strokes = []
    for index, record in enumerate(data):
        try:
            stroke = stroke_from_dict(record)
        except AnnotationFormatError as e:
            if strict:
                raise
            logger.warning(f"Skipping stroke {index}: {e}")
            continue
        if is_renderable(stroke):
            strokes.append(stroke)
    return tuple(strokes)


def scale_stroke(stroke: Stroke, scale_x: float, scale_y: float) -> Stroke:
    """
    Scale stroke coordinates by given factors.

    Width scales by the smaller factor so lines never fatten on one axis.
    """
    if scale_x == 1.0 and scale_y == 1.0:
        return stroke

    points = tuple(Point(p.x * scale_x, p.y * scale_y) for p in stroke.points)
    width = stroke.width * min(scale_x, scale_y)
    if stroke.kind is StrokeKind.ERASE:
        return EraseStroke(points=points, width=width)
    return PaintStroke(points=points, color=stroke.color, width=width)


__all__ = [
    'AnnotationFormatError',
    'stroke_to_dict',
    'stroke_from_dict',
    'annotation_set_to_list',
    'annotation_set_from_list',
    'scale_stroke',
]
