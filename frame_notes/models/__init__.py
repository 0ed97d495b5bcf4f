"""Data model for Frame Notes annotations"""

from .stroke import (
    StrokeKind, Point, PaintStroke, EraseStroke, Stroke, AnnotationSet,
    is_renderable, make_paint_stroke, make_erase_stroke, to_annotation_set
)
from .block import BlockType, DrawableBlock
from .tool import DrawingTool

__all__ = [
    'StrokeKind',
    'Point',
    'PaintStroke',
    'EraseStroke',
    'Stroke',
    'AnnotationSet',
    'is_renderable',
    'make_paint_stroke',
    'make_erase_stroke',
    'to_annotation_set',
    'BlockType',
    'DrawableBlock',
    'DrawingTool',
]
