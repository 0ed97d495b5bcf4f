"""
Global configuration for Frame Notes

Drawing defaults, the neon palette and per-user storage locations.
"""

import os
import sys
from pathlib import Path
from typing import Final, Tuple


class Config:
    """Central configuration class for all application settings"""

    # Application metadata
    APP_NAME: Final[str] = "Frame Notes"
    APP_VERSION: Final[str] = "1.0.0"
    APP_AUTHOR: Final[str] = "Frame Notes"

    # Paths
    APP_ROOT: Final[Path] = Path(__file__).parent
    HOME_ENV_VAR: Final[str] = "FRAME_NOTES_HOME"

    # Neon palette (the eraser is never part of it)
    NEON_COLORS: Final[Tuple[str, ...]] = (
        "#22d3ee",  # Cyan
        "#e879f9",  # Fuchsia
        "#a78bfa",  # Violet
        "#fb7185",  # Rose
        "#facc15",  # Yellow
        "#ffffff",  # White
    )
    DEFAULT_COLOR: Final[str] = "#22d3ee"

    # Persisted color tag for erase strokes
    ERASER_TAG: Final[str] = "eraser"

    # Brush settings
    DEFAULT_BRUSH_SIZE: Final[int] = 3
    MIN_BRUSH_SIZE: Final[int] = 1
    MAX_BRUSH_SIZE: Final[int] = 30

    # Shared by live capture and replay so both render erasers identically
    ERASER_WIDTH_MULTIPLIER: Final[int] = 2

    # Neon glow halo radius in pixels (Gaussian sigma is half of it)
    GLOW_BLUR: Final[float] = 4.0

    # Surface size used when the host container cannot be measured
    DEFAULT_SURFACE_WIDTH: Final[int] = 800
    DEFAULT_SURFACE_HEIGHT: Final[int] = 600

    # Video blocks
    VIDEO_FALLBACK_FPS: Final[int] = 24

    # Window settings
    DEFAULT_WINDOW_WIDTH: Final[int] = 960
    DEFAULT_WINDOW_HEIGHT: Final[int] = 720

    # Storage
    ANNOTATIONS_FOLDER_NAME: Final[str] = "annotations"
    LOGS_FOLDER_NAME: Final[str] = "logs"
    ANNOTATION_FILE_VERSION: Final[str] = "1.0"

    # Logging
    PACKAGE_LOGGER: Final[str] = "frame_notes"
    LOG_FILE_NAME: Final[str] = "frame_notes.log"
    LOG_MAX_BYTES: Final[int] = 2 * 1024 * 1024
    LOG_BACKUP_COUNT: Final[int] = 3

    @classmethod
    def get_user_data_dir(cls) -> Path:
        """
        Get user data directory.

        Honours FRAME_NOTES_HOME, otherwise uses AppData/Local (Windows),
        Application Support (macOS) or .local/share (Linux).
        """
        override = os.environ.get(cls.HOME_ENV_VAR)
        if override:
            user_dir = Path(override)
        elif sys.platform == 'win32':
            base_path = Path(os.environ.get('LOCALAPPDATA', os.path.expanduser('~')))
            user_dir = base_path / 'FrameNotes'
        elif sys.platform == 'darwin':
            user_dir = Path.home() / 'Library' / 'Application Support' / 'FrameNotes'
        else:
            user_dir = Path.home() / '.local' / 'share' / 'frame_notes'

        user_dir.mkdir(parents=True, exist_ok=True)
        return user_dir

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get the log folder path."""
        return cls.get_user_data_dir() / cls.LOGS_FOLDER_NAME

    @classmethod
    def get_annotations_dir(cls) -> Path:
        """Get the folder holding one JSON record per drawable block."""
        folder = cls.get_user_data_dir() / cls.ANNOTATIONS_FOLDER_NAME
        folder.mkdir(parents=True, exist_ok=True)
        return folder

    @classmethod
    def is_palette_color(cls, color: str) -> bool:
        """Check whether a color string is one of the selectable neon colors."""
        return color.lower() in cls.NEON_COLORS


__all__ = ['Config']
