"""
AnnotationStorage - File storage for drawable blocks and their drawings

Handles saving/loading block JSON records and PNG cache generation of the
annotation layer.
"""

import logging
import re
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from ..config import Config
from ..drawover.stroke_renderer import render_annotation_set
from ..drawover.stroke_serializer import (
    AnnotationFormatError, annotation_set_from_list, annotation_set_to_list
)
from ..models.block import BlockType, DrawableBlock
from ..utils.json_utils import safe_json_load, safe_json_save

logger = logging.getLogger(__name__)

_BLOCK_ID_PATTERN = re.compile(r'[A-Za-z0-9_-]+')


def block_to_record(block: DrawableBlock) -> Dict[str, Any]:
    """Serialize a block (drawings included) to its persisted record."""
    return {
        'version': Config.ANNOTATION_FILE_VERSION,
        'block_id': block.id,
        'type': block.block_type.value,
        'content': block.content,
        'canvas_size': list(block.canvas_size) if block.canvas_size else None,
        'drawings': annotation_set_to_list(block.drawings),
    }


def block_from_record(data: Any) -> DrawableBlock:
    """
    Rebuild a block from its persisted record.

    Malformed strokes are skipped (and logged); a record without an id or
    content raises AnnotationFormatError.
    """
    if not isinstance(data, dict):
        raise AnnotationFormatError("Block record must be a JSON object")

    block_id = data.get('block_id')
    content = data.get('content')
    if not isinstance(block_id, str) or not isinstance(content, str):
        raise AnnotationFormatError("Block record needs string 'block_id' and 'content'")

    try:
        block_type = BlockType(data.get('type', BlockType.IMAGE.value))
    except ValueError:
        raise AnnotationFormatError(f"Unknown block type: {data.get('type')!r}") from None

    canvas_size = data.get('canvas_size')
    if (isinstance(canvas_size, (list, tuple)) and len(canvas_size) == 2
            and all(isinstance(v, (int, float)) and v > 0 for v in canvas_size)):
        canvas_size = (int(canvas_size[0]), int(canvas_size[1]))
    else:
        canvas_size = None

    return DrawableBlock(
        content=content,
        block_type=block_type,
        id=block_id,
        drawings=annotation_set_from_list(data.get('drawings', [])),
        canvas_size=canvas_size,
    )


class AnnotationStorage:
    """
    Manages block records on disk.

    File structure:
        annotations/
        ├── {block_id}.json           # Block record with vector drawings
        └── {block_id}_{w}x{h}.png    # Annotation layer PNG cache
    """

    def __init__(self, base_path: Optional[Path] = None):
        if base_path is None:
            base_path = Config.get_annotations_dir()
        self._base = Path(base_path)
        self._base.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base

    @staticmethod
    def _check_block_id(block_id: str):
        if not _BLOCK_ID_PATTERN.fullmatch(block_id or ''):
            raise ValueError(f"Invalid block id: {block_id!r}")

    def get_record_path(self, block_id: str) -> Path:
        """Get path for a block's JSON record."""
        self._check_block_id(block_id)
        return self._base / f'{block_id}.json'

    def get_png_cache_path(self, block_id: str, size: Tuple[int, int]) -> Path:
        """Get path for a block's PNG cache at a given size."""
        self._check_block_id(block_id)
        return self._base / f'{block_id}_{size[0]}x{size[1]}.png'

    # ==================== Save/Load ====================

    def save_block(self, block: DrawableBlock) -> bool:
        """
        Save a block record, replacing its drawings wholesale.

        Returns:
            True if saved successfully
        """
        path = self.get_record_path(block.id)
        existing = safe_json_load(path, default=None)
        now = datetime.now(timezone.utc).isoformat()

        record = block_to_record(block)
        if isinstance(existing, dict) and existing.get('created_at'):
            record['created_at'] = existing['created_at']
        else:
            record['created_at'] = now
        record['modified_at'] = now

        if not safe_json_save(path, record):
            return False

        self._invalidate_png_cache(block.id)
        logger.debug(f"Saved block {block.id} with {len(record['drawings'])} strokes")
        return True

    def load_block(self, block_id: str) -> Optional[DrawableBlock]:
        """Load a block record, or None if missing or unreadable."""
        data = safe_json_load(self.get_record_path(block_id), default=None)
        if data is None:
            return None
        try:
            return block_from_record(data)
        except AnnotationFormatError as e:
            logger.warning(f"Could not load block {block_id}: {e}")
            return None

    def delete_block(self, block_id: str) -> bool:
        """Delete a block's record and cached PNGs."""
        path = self.get_record_path(block_id)
        try:
            if path.exists():
                path.unlink()
            self._invalidate_png_cache(block_id)
            return True
        except OSError as e:
            logger.error(f"Error deleting block {block_id}: {e}")
            return False

    def has_drawings(self, block_id: str) -> bool:
        """Check if a block has at least one committed stroke."""
        data = safe_json_load(self.get_record_path(block_id), default=None)
        return isinstance(data, dict) and bool(data.get('drawings'))

    def list_blocks(self) -> List[str]:
        """Get the ids of all stored blocks."""
        return sorted(path.stem for path in self._base.glob('*.json'))

    # ==================== PNG Cache ====================

    def render_to_png(self, block_id: str, size: Tuple[int, int]) -> Optional[Path]:
        """
        Render a block's annotation layer to PNG, using cache if valid.

        Returns:
            Path to PNG file, or None if no block record exists
        """
        json_path = self.get_record_path(block_id)
        png_path = self.get_png_cache_path(block_id, size)

        if not json_path.exists():
            return None

        if png_path.exists() and png_path.stat().st_mtime >= json_path.stat().st_mtime:
            return png_path

        block = self.load_block(block_id)
        if block is None:
            return None

        surface = render_annotation_set(block.drawings, size[0], size[1], block.canvas_size)
        if not surface.save(str(png_path), 'PNG'):
            logger.error(f"Could not write PNG cache {png_path}")
            return None
        return png_path

    def _invalidate_png_cache(self, block_id: str):
        cache_name = re.compile(rf'^{re.escape(block_id)}_\d+x\d+\.png$')
        for png_path in self._base.glob(f'{block_id}_*x*.png'):
            if not cache_name.match(png_path.name):
                continue
            try:
                png_path.unlink()
            except OSError as e:
                logger.warning(f"Could not remove stale cache {png_path}: {e}")


# ==================== Singleton ====================

_storage_instance: Optional[AnnotationStorage] = None


def get_annotation_storage() -> AnnotationStorage:
    """Get singleton AnnotationStorage instance."""
    global _storage_instance
    if _storage_instance is None:
        _storage_instance = AnnotationStorage()
    return _storage_instance


__all__ = [
    'AnnotationStorage',
    'block_to_record',
    'block_from_record',
    'get_annotation_storage',
]
