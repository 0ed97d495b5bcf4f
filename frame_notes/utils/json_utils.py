"""
JSON Utilities - Annotation record files

Block records are read and written through these helpers:
- Reads degrade to a default (with a warning) on missing or corrupt files
- Writes are serialized up front and swapped into place, so a failed save
  never leaves a half-written record behind
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Union

logger = logging.getLogger(__name__)


def safe_json_load(path: Union[str, Path], default: Any = None) -> Any:
    """
    Load a JSON record, or return default when it can't be read.

    Examples:
        >>> record = safe_json_load("block.json", default={})
    """
    file_path = Path(path)
    if not file_path.is_file():
        return default

    try:
        text = file_path.read_text(encoding='utf-8')
    except OSError as e:
        logger.warning(f"Could not read {file_path.name}: {e}")
        return default

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning(f"Corrupt record {file_path.name} (line {e.lineno}): {e.msg}")
        return default


def safe_json_save(path: Union[str, Path], data: Any,
                   indent: int = 2, ensure_ascii: bool = False) -> bool:
    """
    Write a JSON record atomically.

    Args:
        path: Destination file
        data: JSON-serializable data
        indent: Pretty-print indentation
        ensure_ascii: Escape non-ASCII characters

    Returns:
        True if the record was written, False otherwise (existing file untouched)
    """
    file_path = Path(path)
    try:
        text = json.dumps(data, indent=indent, ensure_ascii=ensure_ascii)
    except (TypeError, ValueError) as e:
        logger.error(f"Record for {file_path.name} is not JSON serializable: {e}")
        return False

    tmp_path = file_path.with_name(f'.{file_path.name}.tmp')
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path.write_text(text, encoding='utf-8')
        os.replace(tmp_path, file_path)
    except OSError as e:
        logger.error(f"Could not write {file_path}: {e}")
        tmp_path.unlink(missing_ok=True)
        return False
    return True


__all__ = [
    'safe_json_load',
    'safe_json_save',
]
