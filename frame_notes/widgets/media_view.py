"""
MediaView - Displays a block's image or looping, muted video

Video frames are decoded with OpenCV on a QTimer, the same way the preview
player works. Frames are scaled to cover the widget and center-cropped so
the annotation overlay always spans the visible media.
"""

import logging
from pathlib import Path
from typing import Optional

import cv2
from PyQt6.QtCore import Qt, QTimer, pyqtSignal
from PyQt6.QtGui import QImage, QPixmap
from PyQt6.QtWidgets import QLabel, QSizePolicy, QWidget

from ..config import Config
from ..models.block import BlockType

logger = logging.getLogger(__name__)


class MediaView(QLabel):
    """
    Background media for a drawable block.

    Signals:
        media_loaded(bool): Emitted after a load attempt with its outcome
    """

    media_loaded = pyqtSignal(bool)

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)

        self._source: Optional[QPixmap] = None

        # Video capture state
        self._cv_cap: Optional[cv2.VideoCapture] = None
        self._cv_timer = QTimer(self)
        self._cv_timer.timeout.connect(self._update_video_frame)
        self._cv_fps = Config.VIDEO_FALLBACK_FPS

        self.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.setSizePolicy(QSizePolicy.Policy.Ignored, QSizePolicy.Policy.Ignored)
        self.setStyleSheet("background: #0a0a0a; color: #737373;")

    # ==================== Loading ====================

    def load(self, path: str, block_type: BlockType) -> bool:
        """Load media for a block of the given type."""
        if block_type is BlockType.VIDEO:
            return self.load_video(path)
        return self.load_image(path)

    def load_image(self, image_path: str) -> bool:
        """
        Load a still image.

        Returns:
            True if loaded successfully
        """
        self._cleanup_video()

        pixmap = QPixmap(image_path)
        if pixmap.isNull():
            logger.warning(f"Could not load image: {image_path}")
            self._show_message("Failed to load image")
            return False

        self._set_source(pixmap)
        self.media_loaded.emit(True)
        return True

    def load_video(self, video_path: str) -> bool:
        """
        Load a video and start muted looping playback.

        Returns:
            True if loaded successfully
        """
        self._cleanup_video()

        if not Path(video_path).exists():
            self._show_message("Video not found")
            return False

        self._cv_cap = cv2.VideoCapture(video_path)
        if not self._cv_cap.isOpened():
            logger.warning(f"Could not open video: {video_path}")
            self._cleanup_video()
            self._show_message("Failed to load video")
            return False

        self._cv_fps = self._cv_cap.get(cv2.CAP_PROP_FPS) or Config.VIDEO_FALLBACK_FPS

        if not self._show_current_frame():
            self._cleanup_video()
            self._show_message("Failed to read video")
            return False

        self._cv_timer.start(max(1, int(1000 / self._cv_fps)))
        self.media_loaded.emit(True)
        return True

    def clear_media(self):
        """Stop playback and drop the current media."""
        self._cleanup_video()
        self._source = None
        self.clear()

    @property
    def is_playing(self) -> bool:
        return self._cv_timer.isActive()

    # ==================== Frames ====================

    def _show_current_frame(self) -> bool:
        """Decode and display the next video frame."""
        if not self._cv_cap or not self._cv_cap.isOpened():
            return False

        ret, frame = self._cv_cap.read()
        if not ret:
            return False

        h, w = frame.shape[:2]
        frame_rgb = cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)
        qt_frame = QImage(frame_rgb.data, w, h, 3 * w, QImage.Format.Format_RGB888)
        self._set_source(QPixmap.fromImage(qt_frame.copy()))
        return True

    def _update_video_frame(self):
        """Timer callback; loops back to the first frame at the end."""
        if self._show_current_frame():
            return
        if self._cv_cap is None:
            self._cv_timer.stop()
            return
        self._cv_cap.set(cv2.CAP_PROP_POS_FRAMES, 0)
        if not self._show_current_frame():
            logger.warning("Video stopped producing frames")
            self._cv_timer.stop()

    def _set_source(self, pixmap: QPixmap):
        self._source = pixmap
        self._apply_cover()

    def _apply_cover(self):
        """Scale the source to cover the widget and crop the overflow."""
        if self._source is None or self.width() <= 0 or self.height() <= 0:
            return
        scaled = self._source.scaled(
            self.width(), self.height(),
            Qt.AspectRatioMode.KeepAspectRatioByExpanding,
            Qt.TransformationMode.SmoothTransformation
        )
        x = (scaled.width() - self.width()) // 2
        y = (scaled.height() - self.height()) // 2
        self.setPixmap(scaled.copy(x, y, self.width(), self.height()))

    def _show_message(self, text: str):
        self._source = None
        self.clear()
        self.setText(text)
        self.media_loaded.emit(False)

    def _cleanup_video(self):
        """Release video resources."""
        self._cv_timer.stop()
        if self._cv_cap:
            self._cv_cap.release()
            self._cv_cap = None

    # ==================== Events ====================

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._apply_cover()

    def closeEvent(self, event):
        self._cleanup_video()
        super().closeEvent(event)


__all__ = ['MediaView']
