"""
Frame Notes - Main Entry Point

Opens an image or video block and lets you draw neon annotations over it.

Usage:
    python -m frame_notes.main <media_path> [block_id]
"""

import hashlib
import sys
from pathlib import Path
from typing import List, Optional

from PyQt6.QtWidgets import QApplication

from .config import Config
from .events.event_bus import get_event_bus
from .models.block import BlockType, DrawableBlock
from .services.annotation_storage import AnnotationStorage, get_annotation_storage
from .utils.logging_config import LoggingConfig

VIDEO_SUFFIXES = ('.mp4', '.mov', '.webm', '.avi', '.mkv', '.m4v')


def block_type_for(media_path: str) -> BlockType:
    """Guess the block type from the media file extension."""
    if Path(media_path).suffix.lower() in VIDEO_SUFFIXES:
        return BlockType.VIDEO
    return BlockType.IMAGE


def default_block_id(media_path: str) -> str:
    """Stable block id derived from the media's absolute path."""
    resolved = str(Path(media_path).expanduser().resolve())
    return hashlib.sha1(resolved.encode('utf-8')).hexdigest()[:16]


def load_or_create_block(
    storage: AnnotationStorage,
    media_path: str,
    block_id: Optional[str] = None
) -> DrawableBlock:
    """
    Load the stored block for a media file, or start a fresh one.

    A stored record keeps its drawings; its content is pointed at the media
    path given on the command line.
    """
    block_id = block_id or default_block_id(media_path)
    block = storage.load_block(block_id)
    if block is None:
        return DrawableBlock(content=media_path, block_type=block_type_for(media_path), id=block_id)
    block.content = media_path
    block.block_type = block_type_for(media_path)
    return block


def setup_application(argv: List[str]) -> QApplication:
    """
    Initialize and configure the Qt application

    Returns:
        Configured QApplication instance
    """
    app = QApplication(argv)

    app.setApplicationName(Config.APP_NAME)
    app.setApplicationVersion(Config.APP_VERSION)
    app.setOrganizationName(Config.APP_AUTHOR)

    # Initialize event bus (singleton)
    get_event_bus()

    return app


def main():
    """
    Main entry point for Frame Notes

    Creates the application, opens the requested block and runs the event loop.
    """
    LoggingConfig.setup_logging(Config.get_log_dir())

    logger = LoggingConfig.get_logger(__name__)
    logger.info(f"Starting {Config.APP_NAME} {Config.APP_VERSION}...")

    args = sys.argv[1:]
    if not args:
        print("Usage: python -m frame_notes.main <media_path> [block_id]", file=sys.stderr)
        sys.exit(2)

    media_path = args[0]
    requested_id = args[1] if len(args) > 1 else None

    app = setup_application(sys.argv)

    storage = get_annotation_storage()
    logger.info(f"Annotations: {storage.base_path}")

    try:
        block = load_or_create_block(storage, media_path, requested_id)
    except ValueError as e:
        logger.error(f"Cannot open block: {e}")
        sys.exit(2)

    from .widgets.main_window import MainWindow
    window = MainWindow(block, storage)
    window.show()

    logger.info(f"Opened block {block.id} ({block.block_type.value}, {len(block.drawings)} strokes)")

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
