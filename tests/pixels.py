"""Pixel inspection helpers for surface tests."""

from frame_notes.utils.image_utils import image_to_array


def alpha_at(surface, x, y):
    """Alpha of one surface pixel."""
    return surface.pixelColor(x, y).alpha()


def color_at(surface, x, y):
    """Unpremultiplied #rrggbb of one surface pixel."""
    return surface.pixelColor(x, y).name()


def is_fully_transparent(surface):
    return not image_to_array(surface)[:, :, 3].any()
