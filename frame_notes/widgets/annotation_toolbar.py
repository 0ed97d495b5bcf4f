"""
Annotation Toolbar Widget

Single-row floating toolbar for a drawing session with:
- Neon palette swatches
- Pen / eraser selection
- Brush size slider
- Undo, Cancel and Done buttons
"""

from typing import Dict, Optional

from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import (
    QButtonGroup, QFrame, QHBoxLayout, QLabel, QPushButton, QSlider, QWidget
)

from ..config import Config
from ..core.editing_session import EditingSession
from ..models.tool import DrawingTool


class AnnotationToolbar(QWidget):
    """Single-row toolbar driving one EditingSession."""

    # Signals
    color_selected = pyqtSignal(str)
    tool_selected = pyqtSignal(object)  # DrawingTool
    brush_size_changed = pyqtSignal(int)
    undo_clicked = pyqtSignal()
    done_clicked = pyqtSignal()
    cancel_clicked = pyqtSignal()

    # Tool definitions: (label, DrawingTool, tooltip)
    TOOLS = [
        ("Pen", DrawingTool.PEN, "Neon pen (P)"),
        ("Eraser", DrawingTool.ERASER, "Eraser (E)"),
    ]

    _TOOL_BTN_STYLE = """
        QPushButton { background: #262626; border: 1px solid #404040; border-radius: 14px;
                      color: #a3a3a3; padding: 0 10px; }
        QPushButton:hover { color: #ffffff; }
        QPushButton:checked { background: #404040; color: #ffffff; }
    """

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._color_buttons: Dict[str, QPushButton] = {}
        self._tool_buttons: Dict[DrawingTool, QPushButton] = {}

        self._setup_ui()
        self._connect_signals()

        self.set_tool(DrawingTool.PEN)
        self.set_color(Config.DEFAULT_COLOR)

    def _setup_ui(self):
        """Build the single-row toolbar UI."""
        self.setFixedHeight(48)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)
        self.setStyleSheet("AnnotationToolbar { background: rgba(23, 23, 23, 230); "
                           "border: 1px solid #404040; border-radius: 24px; }")

        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 6, 16, 6)
        layout.setSpacing(8)

        # ===== Palette =====
        self._color_group = QButtonGroup(self)
        self._color_group.setExclusive(True)
        for color in Config.NEON_COLORS:
            btn = self._create_swatch(color)
            self._color_group.addButton(btn)
            self._color_buttons[color] = btn
            layout.addWidget(btn)

        layout.addWidget(self._create_separator())

        # ===== Tools =====
        self._tool_group = QButtonGroup(self)
        self._tool_group.setExclusive(True)
        for label, tool, tooltip in self.TOOLS:
            btn = self._create_tool_button(label, tooltip)
            self._tool_group.addButton(btn)
            self._tool_buttons[tool] = btn
            layout.addWidget(btn)

        # ===== Brush Size =====
        self._brush_size_slider = QSlider(Qt.Orientation.Horizontal)
        self._brush_size_slider.setRange(Config.MIN_BRUSH_SIZE, Config.MAX_BRUSH_SIZE)
        self._brush_size_slider.setValue(Config.DEFAULT_BRUSH_SIZE)
        self._brush_size_slider.setFixedWidth(80)
        self._brush_size_slider.setToolTip(
            f"Brush Size ({Config.MIN_BRUSH_SIZE}-{Config.MAX_BRUSH_SIZE})"
        )
        layout.addWidget(self._brush_size_slider)

        self._brush_size_label = QLabel(str(Config.DEFAULT_BRUSH_SIZE))
        self._brush_size_label.setFixedWidth(20)
        self._brush_size_label.setStyleSheet("color: #e5e5e5; font-size: 11px;")
        layout.addWidget(self._brush_size_label)

        self._undo_btn = self._create_tool_button("Undo", "Undo last stroke (Ctrl+Z)")
        self._undo_btn.setCheckable(False)
        layout.addWidget(self._undo_btn)

        layout.addWidget(self._create_separator())

        self._cancel_btn = self._create_tool_button("Cancel", "Discard changes (Esc)")
        self._cancel_btn.setCheckable(False)
        layout.addWidget(self._cancel_btn)

        self._done_btn = self._create_tool_button("DONE", "Save drawing")
        self._done_btn.setCheckable(False)
        self._done_btn.setStyleSheet(self._TOOL_BTN_STYLE.replace("#a3a3a3", "#ffffff"))
        layout.addWidget(self._done_btn)

    def _create_swatch(self, color: str) -> QPushButton:
        """Create a round checkable palette swatch."""
        btn = QPushButton()
        btn.setFixedSize(22, 22)
        btn.setCheckable(True)
        btn.setToolTip(color)
        btn.setStyleSheet(f"""
            QPushButton {{ background: {color}; border: 2px solid transparent; border-radius: 11px; }}
            QPushButton:checked {{ border-color: #ffffff; }}
        """)
        return btn

    def _create_tool_button(self, label: str, tooltip: str) -> QPushButton:
        """Create a checkable text tool button."""
        btn = QPushButton(label)
        btn.setFixedHeight(28)
        btn.setCheckable(True)
        btn.setToolTip(tooltip)
        btn.setStyleSheet(self._TOOL_BTN_STYLE)
        return btn

    def _create_separator(self) -> QFrame:
        """Create a vertical separator."""
        sep = QFrame()
        sep.setFrameShape(QFrame.Shape.VLine)
        sep.setStyleSheet("background: #404040; max-width: 1px;")
        return sep

    def _connect_signals(self):
        """Connect internal signals."""
        for color, btn in self._color_buttons.items():
            btn.clicked.connect(lambda checked, c=color: self.color_selected.emit(c))

        for tool, btn in self._tool_buttons.items():
            btn.clicked.connect(lambda checked, t=tool: self.tool_selected.emit(t))

        self._brush_size_slider.valueChanged.connect(self._on_brush_size_changed)
        self._undo_btn.clicked.connect(self.undo_clicked.emit)
        self._cancel_btn.clicked.connect(self.cancel_clicked.emit)
        self._done_btn.clicked.connect(self.done_clicked.emit)

    def _on_brush_size_changed(self, value: int):
        """Handle brush size slider change."""
        self._brush_size_label.setText(str(value))
        self.brush_size_changed.emit(value)

    # ==================== PUBLIC API ====================

    def bind_session(self, session: EditingSession):
        """Wire the toolbar to a session in both directions."""
        self.color_selected.connect(session.select_color)
        self.tool_selected.connect(session.select_tool)
        self.brush_size_changed.connect(session.set_brush_size)
        self.undo_clicked.connect(session.undo)
        self.done_clicked.connect(session.save)
        self.cancel_clicked.connect(session.cancel)

        session.color_changed.connect(self.set_color)
        session.tool_changed.connect(lambda value: self.set_tool(DrawingTool(value)))
        session.brush_size_changed.connect(self.set_brush_size)

        self.set_tool(session.tool)
        self.set_color(session.color)
        self.set_brush_size(session.brush_size)

    def set_tool(self, tool: DrawingTool):
        """Reflect the active tool; the palette highlight only shows for the pen."""
        if tool in self._tool_buttons:
            self._tool_buttons[tool].setChecked(True)
        self._color_group.setExclusive(tool is DrawingTool.PEN)
        if tool is not DrawingTool.PEN:
            for btn in self._color_buttons.values():
                btn.setChecked(False)

    def set_color(self, color: str):
        """Reflect the active palette color."""
        btn = self._color_buttons.get(color.lower())
        if btn is not None:
            self._color_group.setExclusive(True)
            btn.setChecked(True)

    def set_brush_size(self, value: int):
        """Reflect the brush size without re-emitting."""
        self._brush_size_slider.blockSignals(True)
        self._brush_size_slider.setValue(value)
        self._brush_size_slider.blockSignals(False)
        self._brush_size_label.setText(str(self._brush_size_slider.value()))

    @property
    def current_tool(self) -> Optional[DrawingTool]:
        for tool, btn in self._tool_buttons.items():
            if btn.isChecked():
                return tool
        return None

    @property
    def brush_size(self) -> int:
        return self._brush_size_slider.value()

    def color_button(self, color: str) -> Optional[QPushButton]:
        return self._color_buttons.get(color)

    def tool_button(self, tool: DrawingTool) -> Optional[QPushButton]:
        return self._tool_buttons.get(tool)

    @property
    def undo_button(self) -> QPushButton:
        return self._undo_btn

    @property
    def done_button(self) -> QPushButton:
        return self._done_btn

    @property
    def cancel_button(self) -> QPushButton:
        return self._cancel_btn


__all__ = ['AnnotationToolbar']
