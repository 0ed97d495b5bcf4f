"""
Frame Notes

Neon freehand annotations drawn over image and video blocks.
"""

__version__ = "1.0.0"
__author__ = "Frame Notes"

from .config import Config
from .events.event_bus import EventBus, get_event_bus

__all__ = [
    'Config',
    'EventBus',
    'get_event_bus',
]
