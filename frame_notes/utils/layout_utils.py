"""
Layout Utilities - Host container measurement

Surfaces are sized from their host widget. A widget that has never been
shown or explicitly resized has no meaningful size yet.
"""

from typing import Optional, Tuple

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import QWidget


def measured_size(widget: Optional[QWidget]) -> Tuple[Optional[int], Optional[int]]:
    """
    Current pixel size of a host widget.

    Args:
        widget: Host container (may be None)

    Returns:
        (width, height), or (None, None) when the widget has not been measured
    """
    if widget is None:
        return None, None
    if widget.isVisible() or widget.testAttribute(Qt.WidgetAttribute.WA_Resized):
        return widget.width(), widget.height()
    return None, None


__all__ = ['measured_size']
