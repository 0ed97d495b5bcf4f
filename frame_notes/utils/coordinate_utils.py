"""
Coordinate utilities for drawing surfaces.

Converts pointer positions into surface-local pixels and resolves the size a
surface should be created with.
"""

import logging
from typing import Optional, Tuple

from ..config import Config
from ..models.stroke import Point

logger = logging.getLogger(__name__)


def to_surface_point(client_x: float, client_y: float,
                     origin_x: float = 0.0, origin_y: float = 0.0) -> Point:
    """
    Translate a viewport position into surface-local coordinates.

    Args:
        client_x: Pointer x in viewport/global coordinates
        client_y: Pointer y in viewport/global coordinates
        origin_x: Left edge of the surface's bounding box
        origin_y: Top edge of the surface's bounding box

    Returns:
        Point relative to the surface's top-left corner
    """
    return Point(client_x - origin_x, client_y - origin_y)


def resolve_surface_size(width: Optional[int], height: Optional[int]) -> Tuple[int, int]:
    """
    Pick the pixel size for a drawing surface.

    A host that is unmeasured or collapsed gets the default surface size
    rather than an error.
    """
    if not width or not height or width <= 0 or height <= 0:
        logger.debug(
            f"Host size {width}x{height} unusable, falling back to "
            f"{Config.DEFAULT_SURFACE_WIDTH}x{Config.DEFAULT_SURFACE_HEIGHT}"
        )
        return Config.DEFAULT_SURFACE_WIDTH, Config.DEFAULT_SURFACE_HEIGHT
    return int(width), int(height)


def scale_factors(source_size: Optional[Tuple[int, int]],
                  target_size: Tuple[int, int]) -> Tuple[float, float]:
    """
    Scale factors mapping strokes captured at source_size onto target_size.

    Unknown or degenerate source sizes map 1:1, matching strokes stored as
    raw capture pixels.
    """
    if not source_size or source_size[0] <= 0 or source_size[1] <= 0:
        return 1.0, 1.0
    return target_size[0] / source_size[0], target_size[1] / source_size[1]


__all__ = ['to_surface_point', 'resolve_surface_size', 'scale_factors']
