"""
EventBus - Central event system for annotation changes

Pattern: Observer/Publisher-Subscriber
"""

from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal


class EventBus(QObject):
    """
    Central event bus for decoupled communication between components

    Usage:
        event_bus = get_event_bus()
        event_bus.drawings_updated.connect(some_handler)
    """

    # Drawing session events
    drawing_session_started = pyqtSignal(str)  # block_id
    drawing_session_finished = pyqtSignal(str, bool)  # block_id, saved

    # Annotation data events
    drawings_updated = pyqtSignal(str, list)  # block_id, persisted stroke records

    def __init__(self, parent: Optional[QObject] = None):
        super().__init__(parent)


# Singleton instance
_event_bus_instance: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """
    Get global EventBus singleton instance

    Returns:
        Global EventBus instance
    """
    global _event_bus_instance
    if _event_bus_instance is None:
        _event_bus_instance = EventBus()
    return _event_bus_instance


__all__ = ['EventBus', 'get_event_bus']
