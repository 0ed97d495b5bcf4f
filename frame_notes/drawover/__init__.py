"""
Drawover subpackage.

Provides the pieces shared by the live canvas and the replay overlay:
- stroke_renderer: the compositing routine (batch and incremental)
- stroke_serializer: persisted record conversion and rescaling
"""

from .stroke_renderer import (
    CompositeMode,
    StrokeStyle,
    style_for_stroke,
    style_for_tool,
    create_surface,
    build_stroke_path,
    composite_strokes,
    composite_segment,
    render_annotation_set
)
from .stroke_serializer import (
    AnnotationFormatError,
    stroke_to_dict,
    stroke_from_dict,
    annotation_set_to_list,
    annotation_set_from_list,
    scale_stroke
)

__all__ = [
    # Compositing
    'CompositeMode',
    'StrokeStyle',
    'style_for_stroke',
    'style_for_tool',
    'create_surface',
    'build_stroke_path',
    'composite_strokes',
    'composite_segment',
    'render_annotation_set',
    # Serialization
    'AnnotationFormatError',
    'stroke_to_dict',
    'stroke_from_dict',
    'annotation_set_to_list',
    'annotation_set_from_list',
    'scale_stroke',
]
