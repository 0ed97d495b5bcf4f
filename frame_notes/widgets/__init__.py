"""UI Widgets for Frame Notes"""

from .drawover_canvas import DrawoverCanvas
from .replay_overlay import ReplayOverlay
from .annotation_toolbar import AnnotationToolbar
from .media_view import MediaView
from .block_view import BlockView
from .main_window import MainWindow

__all__ = [
    'DrawoverCanvas',
    'ReplayOverlay',
    'AnnotationToolbar',
    'MediaView',
    'BlockView',
    'MainWindow',
]
