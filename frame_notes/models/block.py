"""
Drawable block - an image or video asset with an attached annotation set
"""

import uuid as uuid_lib
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple

from .stroke import AnnotationSet, Stroke, to_annotation_set


class BlockType(Enum):
    """Media kinds that can carry drawings."""
    IMAGE = "image"
    VIDEO = "video"


@dataclass
class DrawableBlock:
    """
    Media block owned by a note.

    Attributes:
        content: Path of the image or video file
        block_type: Image or video
        id: Stable identifier used by storage
        drawings: Committed annotation set (empty for a new block)
        canvas_size: (width, height) of the surface the drawings were captured on
    """
    content: str
    block_type: BlockType = BlockType.IMAGE
    id: str = field(default_factory=lambda: uuid_lib.uuid4().hex)
    drawings: AnnotationSet = ()
    canvas_size: Optional[Tuple[int, int]] = None

    def replace_drawings(self, strokes: Iterable[Stroke],
                         canvas_size: Optional[Tuple[int, int]] = None):
        """Replace the whole annotation set with a new snapshot."""
        self.drawings = to_annotation_set(strokes)
        if canvas_size is not None:
            self.canvas_size = (int(canvas_size[0]), int(canvas_size[1]))

    @property
    def has_drawings(self) -> bool:
        return bool(self.drawings)


__all__ = ['BlockType', 'DrawableBlock']
