"""Annotation engine core: stroke capture and editing sessions"""

from .stroke_capture import CaptureState, StrokeCapture
from .editing_session import EditingSession

__all__ = ['CaptureState', 'StrokeCapture', 'EditingSession']
