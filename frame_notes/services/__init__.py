"""Services for Frame Notes"""

from .annotation_storage import AnnotationStorage, get_annotation_storage

__all__ = [
    'AnnotationStorage',
    'get_annotation_storage',
]
