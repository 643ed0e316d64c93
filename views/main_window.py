"""
Main application window.

Assembles the tool bar, the target canvas and the status bar, and wires
toolkit widgets to the editor controller.
"""

import logging
from pathlib import Path
from typing import Dict, Optional

from PyQt6.QtGui import QAction, QKeySequence
from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QToolBar, QPushButton, QLabel,
    QStatusBar, QComboBox, QFileDialog, QButtonGroup, QAbstractButton,
)

from models import Tool, InteractionMode, RegionStore, CanvasModel, COLOR_NAMES
from services import (
    EditorController, FreeformBuilder, TagBinding, QtImageDecoder, get_settings,
)
from views.target_canvas import TargetCanvas
from views.tag_editor_panel import TagEditorPanel

logger = logging.getLogger(__name__)


IMAGE_FILTER = ("Graphics Interchange Format (*.gif);;"
                "Portable Network Graphic (*.png);;"
                "JPEG (*.jpg *.jpeg)")

# Tool buttons in tool bar order
TOOL_BUTTONS = [
    (Tool.CURSOR, "Cursor"),
    (Tool.IMAGE, "Image"),
    (Tool.RECTANGLE, "Rectangle"),
    (Tool.OVAL, "Oval"),
    (Tool.TRIANGLE, "Triangle"),
    (Tool.APPLESEED_THREE, "Appleseed 3"),
    (Tool.APPLESEED_FOUR, "Appleseed 4"),
    (Tool.APPLESEED_FIVE, "Appleseed 5"),
    (Tool.FREEFORM, "Freeform"),
]

MODE_HINTS = {
    InteractionMode.IDLE: "Click a region to select • Arrows move • Shift+Arrows resize • Delete removes",
    InteractionMode.PLACING: "Click to place • Pick the cursor tool to stop",
    InteractionMode.TRACING: "Click to add vertices • Right-click to finish • Ctrl+Z undoes",
}


class EditorToolbar(QToolBar):
    """Tool bar with region tools and selection controls."""

    def __init__(self, parent=None):
        super().__init__("Tools", parent)
        self.setMovable(False)
        self.tool_buttons: Dict[Tool, QPushButton] = {}
        self._setup_ui()

    def _setup_ui(self):
        self.setStyleSheet("""
            QToolBar {
                background: #F9FAFB;
                border-bottom: 1px solid #E5E7EB;
                padding: 8px 16px;
                spacing: 6px;
            }
            QPushButton {
                padding: 6px 12px;
                border-radius: 6px;
                border: 1px solid #D1D5DB;
                background: white;
                font-size: 13px;
            }
            QPushButton:hover {
                background: #F3F4F6;
            }
            QPushButton:checked {
                background: #3B82F6;
                border-color: #2563EB;
                color: white;
            }
            QPushButton:disabled {
                color: #9CA3AF;
            }
        """)

        self.tool_group = QButtonGroup(self)
        self.tool_group.setExclusive(True)
        for tool, label in TOOL_BUTTONS:
            btn = QPushButton(label)
            btn.setCheckable(True)
            self.tool_group.addButton(btn)
            self.tool_buttons[tool] = btn
            self.addWidget(btn)
        self.tool_buttons[Tool.CURSOR].setChecked(True)

        self.addSeparator()

        self.color_combo = QComboBox()
        self.color_combo.addItems(COLOR_NAMES)
        self.addWidget(self.color_combo)

        self.forward_btn = QPushButton("Bring Forward")
        self.addWidget(self.forward_btn)

        self.backward_btn = QPushButton("Send Backward")
        self.addWidget(self.backward_btn)

        self.tags_btn = QPushButton("Tags")
        self.tags_btn.setCheckable(True)
        self.addWidget(self.tags_btn)

        self.set_controls_enabled(False)

    def tool_for(self, button: QAbstractButton) -> Optional[Tool]:
        for tool, btn in self.tool_buttons.items():
            if btn is button:
                return tool
        return None

    def set_active_tool(self, tool: Tool):
        btn = self.tool_buttons.get(tool)
        if btn is not None and not btn.isChecked():
            btn.setChecked(True)

    def set_controls_enabled(self, enabled: bool):
        """Enable the controls that act on the selection."""
        for widget in (self.color_combo, self.forward_btn,
                       self.backward_btn, self.tags_btn):
            widget.setEnabled(enabled)


class TargetEditorWindow(QMainWindow):
    """
    Main window of the target editor.

    Layout:
    ┌─────────────────────────────────────────────────────┐
    │  Tool bar (tools │ color │ forward/backward │ tags)  │
    ├─────────────────────────────────────────────────────┤
    │                                                     │
    │                  Target canvas                      │
    │                                                     │
    ├─────────────────────────────────────────────────────┤
    │  Status Bar                                         │
    └─────────────────────────────────────────────────────┘
    """

    def __init__(self, background_path: Optional[str] = None):
        super().__init__()

        # Settings manager (JSON file based)
        self.settings_manager = get_settings()
        defaults = self.settings_manager.editor

        # Models and controller
        self.store = RegionStore(CanvasModel())
        self.controller = EditorController(
            self.store,
            TagBinding(self._create_tag_editor),
            decoder=QtImageDecoder(),
            defaults=defaults,
            builder=FreeformBuilder(self.store.canvas, defaults.vertex_radius,
                                    defaults.preview_dash),
            parent=self,
        )

        # Setup
        self._setup_window()
        self._setup_menu()
        self._setup_toolbar()
        self._setup_central_widget()
        self._setup_status_bar()
        self._connect_signals()

        # Restore window geometry
        self._load_window_settings()

        self.controller.initialize(background_path)

    def _load_window_settings(self):
        """Restore window geometry and state."""
        geometry, state = self.settings_manager.get_window_geometry()
        if geometry:
            self.restoreGeometry(geometry)
        if state:
            self.restoreState(state)

    def _save_window_settings(self):
        """Save window geometry and state."""
        self.settings_manager.save_window_geometry(
            self.saveGeometry(),
            self.saveState()
        )

    def closeEvent(self, event):
        """Handle window close - save settings."""
        self.controller.select_cursor_tool()
        self._save_window_settings()
        super().closeEvent(event)

    def _setup_window(self):
        """Configure window properties."""
        self.setWindowTitle("Target Editor")
        ui = self.settings_manager.settings.ui
        self.resize(ui.canvas_width + 40, ui.canvas_height + 120)

        self.setStyleSheet("""
            QMainWindow {
                background: #F3F4F6;
            }
        """)

    def _setup_menu(self):
        """Create the menu bar."""
        file_menu = self.menuBar().addMenu("&File")

        open_action = QAction("&Open Image...", self)
        open_action.setShortcut(QKeySequence.StandardKey.Open)
        open_action.triggered.connect(self._on_open_image)
        file_menu.addAction(open_action)

        self._recent_menu = file_menu.addMenu("Open &Recent")
        self._recent_menu.aboutToShow.connect(self._populate_recent_menu)

        file_menu.addSeparator()

        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.StandardKey.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        view_menu = self.menuBar().addMenu("&View")
        grid_action = QAction("Show &Grid", self)
        grid_action.setCheckable(True)
        grid_action.setChecked(self.settings_manager.settings.ui.show_grid)
        grid_action.toggled.connect(self._on_toggle_grid)
        view_menu.addAction(grid_action)

    def _setup_toolbar(self):
        """Create the tool bar."""
        self.toolbar = EditorToolbar(self)
        self.addToolBar(self.toolbar)

    def _setup_central_widget(self):
        """Create the canvas."""
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(8, 8, 8, 8)

        ui = self.settings_manager.settings.ui
        self.canvas = TargetCanvas(self.controller, ui.canvas_width,
                                   ui.canvas_height, ui.show_grid)
        self.canvas.setStyleSheet("""
            QGraphicsView {
                border: 1px solid #E5E7EB;
                background: white;
            }
        """)
        layout.addWidget(self.canvas)
        self.setCentralWidget(central)

    def _setup_status_bar(self):
        """Create status bar."""
        status = QStatusBar()
        status.setStyleSheet("""
            QStatusBar {
                background: #F9FAFB;
                border-top: 1px solid #E5E7EB;
                padding: 4px 8px;
                color: #6B7280;
                font-size: 12px;
            }
        """)
        self.setStatusBar(status)

        self._count_label = QLabel("Regions: 0")
        status.addWidget(self._count_label)

        status.addWidget(QWidget(), 1)

        self._instruction_label = QLabel(MODE_HINTS[InteractionMode.IDLE])
        status.addWidget(self._instruction_label)

    def _connect_signals(self):
        """Connect all signals."""
        tb = self.toolbar
        tb.tool_group.buttonClicked.connect(self._on_tool_clicked)
        tb.color_combo.textActivated.connect(self.controller.set_fill_color)
        tb.forward_btn.clicked.connect(self.controller.bring_forward)
        tb.backward_btn.clicked.connect(self.controller.send_backward)
        tb.tags_btn.toggled.connect(self.controller.toggle_tag_editor)

        c = self.controller
        c.toolChanged.connect(tb.set_active_tool)
        c.modeChanged.connect(self._on_mode_changed)
        c.controlsEnabledChanged.connect(tb.set_controls_enabled)
        c.colorSynced.connect(self._on_color_synced)
        c.tagEditorToggled.connect(self._on_tag_editor_toggled)
        c.regionCommitted.connect(self._update_counts)
        c.regionRemoved.connect(self._update_counts)

    # =========================================================================
    # Handlers
    # =========================================================================

    def _on_tool_clicked(self, button: QAbstractButton):
        tool = self.toolbar.tool_for(button)
        if tool is None:
            return
        if tool == Tool.CURSOR:
            self.controller.select_cursor_tool()
        elif tool == Tool.IMAGE:
            self._on_open_image()
        elif tool == Tool.FREEFORM:
            self.controller.start_freeform()
        else:
            self.controller.start_shape(tool)
        self.canvas.setFocus()

    def _on_open_image(self):
        """Pick an image file and make it the candidate region."""
        filepath, _ = QFileDialog.getOpenFileName(
            self,
            "Open Image",
            self.settings_manager.get_image_directory(),
            IMAGE_FILTER
        )
        # Keep the tool buttons in step with the controller on cancel
        self.toolbar.set_active_tool(self.controller.active_tool)
        if not filepath:
            return
        self._open_image_path(filepath)

    def _open_image_path(self, filepath: str):
        region = self.controller.open_image(filepath)
        self.toolbar.set_active_tool(self.controller.active_tool)
        if region is None:
            self.statusBar().showMessage(f"Could not load {Path(filepath).name}", 3000)
            return
        self.settings_manager.set_image_directory(filepath)
        self.settings_manager.add_recent_image(filepath)
        self.canvas.setFocus()

    def _populate_recent_menu(self):
        self._recent_menu.clear()
        recent = self.settings_manager.get_recent_images()
        if not recent:
            action = self._recent_menu.addAction("(none)")
            action.setEnabled(False)
            return
        for filepath in recent:
            action = self._recent_menu.addAction(Path(filepath).name)
            action.setToolTip(filepath)
            action.triggered.connect(lambda checked=False, p=filepath: self._open_image_path(p))

    def _on_toggle_grid(self, checked: bool):
        self.canvas.set_show_grid(checked)
        self.settings_manager.settings.ui.show_grid = checked
        self.settings_manager.save()

    def _on_mode_changed(self, mode: InteractionMode):
        self._instruction_label.setText(MODE_HINTS.get(mode, ""))

    def _on_color_synced(self, name: str):
        self.toolbar.color_combo.setCurrentText(name)

    def _on_tag_editor_toggled(self, opened: bool):
        tags_btn = self.toolbar.tags_btn
        if tags_btn.isChecked() != opened:
            tags_btn.blockSignals(True)
            tags_btn.setChecked(opened)
            tags_btn.blockSignals(False)

    def _create_tag_editor(self, tags: Dict[str, str]) -> TagEditorPanel:
        panel = TagEditorPanel(tags, self)
        panel.place_below(self.toolbar.tags_btn)
        panel.show()
        panel.raise_()
        return panel

    def _update_counts(self, *args):
        self._count_label.setText(f"Regions: {len(self.store)}")


__all__ = ["TargetEditorWindow", "EditorToolbar"]
