"""
Stroke data model

A stroke is one freehand gesture. Paint strokes carry a palette color, erase
strokes carry only a width; the compositing routine switches on ``kind``.
Strokes are immutable once built: editing means removing and re-adding.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple, Union


class StrokeKind(Enum):
    """Discriminator for the two stroke variants."""
    PAINT = "paint"
    ERASE = "erase"


@dataclass(frozen=True)
class Point:
    """A position in the pixel space of the drawing surface it was captured on."""
    x: float
    y: float


@dataclass(frozen=True)
class PaintStroke:
    """Neon ink stroke drawn with a palette color."""
    points: Tuple[Point, ...]
    color: str
    width: float

    @property
    def kind(self) -> StrokeKind:
        return StrokeKind.PAINT


@dataclass(frozen=True)
class EraseStroke:
    """Stroke that clears the annotation layer under its path."""
    points: Tuple[Point, ...]
    width: float

    @property
    def kind(self) -> StrokeKind:
        return StrokeKind.ERASE


Stroke = Union[PaintStroke, EraseStroke]

# Ordered, immutable snapshot of committed strokes (paint order = tuple order)
AnnotationSet = Tuple[Stroke, ...]

MIN_STROKE_POINTS = 2


def is_renderable(stroke: Stroke) -> bool:
    """A stroke needs at least two points to leave any ink."""
    return len(stroke.points) >= MIN_STROKE_POINTS


def make_paint_stroke(points: Iterable[Point], color: str, width: float) -> PaintStroke:
    return PaintStroke(points=tuple(points), color=color, width=width)


def make_erase_stroke(points: Iterable[Point], width: float) -> EraseStroke:
    return EraseStroke(points=tuple(points), width=width)


def to_annotation_set(strokes: Iterable[Stroke]) -> AnnotationSet:
    """Freeze strokes into a snapshot, dropping the ones that cannot render."""
    return tuple(stroke for stroke in strokes if is_renderable(stroke))


__all__ = [
    'StrokeKind',
    'Point',
    'PaintStroke',
    'EraseStroke',
    'Stroke',
    'AnnotationSet',
    'MIN_STROKE_POINTS',
    'is_renderable',
    'make_paint_stroke',
    'make_erase_stroke',
    'to_annotation_set',
]
