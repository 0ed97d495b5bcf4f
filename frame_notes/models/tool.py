"""Drawing tools available in an editing session."""

from enum import Enum


class DrawingTool(Enum):
    """Available drawing tools."""
    PEN = "pen"        # Neon ink in the active palette color
    ERASER = "eraser"  # Clears annotation pixels under the stroke


__all__ = ['DrawingTool']
