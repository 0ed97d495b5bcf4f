"""
Image utilities - QImage <-> numpy conversion

Pixel arrays are always RGBA byte order so callers never depend on the
platform's ARGB32 endianness.
"""

import numpy as np
from PyQt6.QtGui import QImage


def image_to_array(image: QImage, premultiplied: bool = False) -> np.ndarray:
    """
    Copy a QImage into an (height, width, 4) uint8 RGBA array.

    Args:
        image: Source image, any format
        premultiplied: Keep color channels premultiplied by alpha

    Returns:
        Independent numpy array (safe to modify)
    """
    target = (QImage.Format.Format_RGBA8888_Premultiplied if premultiplied
              else QImage.Format.Format_RGBA8888)
    if image.format() != target:
        image = image.convertToFormat(target)

    width = image.width()
    height = image.height()
    ptr = image.constBits()
    ptr.setsize(image.sizeInBytes())
    rows = np.frombuffer(ptr, dtype=np.uint8).reshape((height, image.bytesPerLine()))
    return rows[:, :width * 4].reshape((height, width, 4)).copy()


def array_to_image(pixels: np.ndarray, premultiplied: bool = False) -> QImage:
    """
    Build a QImage from an (height, width, 4) uint8 RGBA array.

    The returned image owns its pixel data.
    """
    pixels = np.ascontiguousarray(pixels, dtype=np.uint8)
    height, width = pixels.shape[:2]
    fmt = (QImage.Format.Format_RGBA8888_Premultiplied if premultiplied
           else QImage.Format.Format_RGBA8888)
    buffer = pixels.tobytes()
    image = QImage(buffer, width, height, width * 4, fmt)
    return image.copy()


__all__ = ['image_to_array', 'array_to_image']
