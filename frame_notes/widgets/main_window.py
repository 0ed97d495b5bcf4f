"""
MainWindow - Top-level window hosting one drawable block
"""

import logging
from typing import Optional

from PyQt6.QtCore import QSettings
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import QMainWindow, QStatusBar, QVBoxLayout, QWidget

from ..config import Config
from ..events.event_bus import EventBus, get_event_bus
from ..models.block import DrawableBlock
from ..services.annotation_storage import AnnotationStorage
from .block_view import BlockView

logger = logging.getLogger(__name__)


class MainWindow(QMainWindow):
    """Main window showing a single block and its drawing status."""

    def __init__(
        self,
        block: DrawableBlock,
        storage: Optional[AnnotationStorage] = None,
        event_bus: Optional[EventBus] = None,
        parent=None
    ):
        super().__init__(parent)

        self._block = block
        self._storage = storage
        self._event_bus = event_bus if event_bus is not None else get_event_bus()

        self._setup_window()
        self._create_widgets()
        self._create_layout()
        self._connect_signals()
        self._load_settings()

    def _setup_window(self):
        """Configure window properties"""
        self.setWindowTitle(f"{Config.APP_NAME} {Config.APP_VERSION}")
        self.setGeometry(100, 100, Config.DEFAULT_WINDOW_WIDTH, Config.DEFAULT_WINDOW_HEIGHT)

    def _create_widgets(self):
        """Create UI widgets"""
        self._block_view = BlockView(self._block, self._storage, self._event_bus)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._show_stroke_count()

    def _create_layout(self):
        """Create window layout"""
        central_widget = QWidget()
        layout = QVBoxLayout(central_widget)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self._block_view)
        self.setCentralWidget(central_widget)

    def _connect_signals(self):
        self._event_bus.drawing_session_started.connect(self._on_session_started)
        self._event_bus.drawing_session_finished.connect(self._on_session_finished)

    @property
    def block_view(self) -> BlockView:
        return self._block_view

    # ==================== Event Handlers ====================

    def _on_session_started(self, block_id: str):
        if block_id == self._block.id:
            self._status_bar.showMessage("Drawing... (Ctrl+Z to undo, Esc to cancel)")

    def _on_session_finished(self, block_id: str, saved: bool):
        if block_id != self._block.id:
            return
        if saved:
            self._show_stroke_count()
        else:
            self._status_bar.showMessage("Drawing discarded")

    def _show_stroke_count(self):
        count = len(self._block.drawings)
        self._status_bar.showMessage(f"{count} stroke{'s' if count != 1 else ''}")

    # ==================== Settings ====================

    def _load_settings(self):
        """Restore window geometry"""
        settings = QSettings(Config.APP_AUTHOR, Config.APP_NAME)
        if settings.contains("window/geometry"):
            self.restoreGeometry(settings.value("window/geometry"))

    def _save_settings(self):
        settings = QSettings(Config.APP_AUTHOR, Config.APP_NAME)
        settings.setValue("window/geometry", self.saveGeometry())

    def closeEvent(self, event: QCloseEvent):
        """Handle window close"""
        # Stop status updates from a bus that outlives the window
        try:
            self._event_bus.drawing_session_started.disconnect(self._on_session_started)
            self._event_bus.drawing_session_finished.disconnect(self._on_session_finished)
        except (TypeError, RuntimeError):
            # Already disconnected by an earlier close
            pass
        self._save_settings()
        event.accept()


__all__ = ['MainWindow']
