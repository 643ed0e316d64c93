"""
Target canvas for visual region editing.

Uses Qt's Graphics View Framework to draw the canvas model. The scene
mirrors the model's child list (one item per child, z-value from the
child's index) and the view turns mouse and keyboard events into
controller calls.
"""

import logging
from typing import Any, Dict, Optional

from PyQt6.QtCore import Qt, QRectF
from PyQt6.QtGui import (
    QPainter, QPen, QColor, QPixmap, QImage, QMouseEvent, QKeyEvent,
)
from PyQt6.QtWidgets import (
    QGraphicsView, QGraphicsScene, QGraphicsItem, QGraphicsPixmapItem,
)

from models.interaction import PointerButton, Key, KeyPress
from models.target_region import TargetRegion
from services.editor_controller import EditorController
from views.region_items import create_item, sync_item

logger = logging.getLogger(__name__)


COLORS = {
    "grid": QColor("#E5E7EB"),          # Light gray
    "background": QColor("#FAFAFA"),    # Off-white
}

BACKGROUND_Z = -1.0

_BUTTONS = {
    Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
    Qt.MouseButton.RightButton: PointerButton.SECONDARY,
    Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
}

_KEYS = {
    Qt.Key.Key_Delete: Key.DELETE,
    Qt.Key.Key_Backspace: Key.DELETE,
    Qt.Key.Key_Left: Key.LEFT,
    Qt.Key.Key_Right: Key.RIGHT,
    Qt.Key.Key_Up: Key.UP,
    Qt.Key.Key_Down: Key.DOWN,
    Qt.Key.Key_Z: Key.Z,
}


def to_key_press(event: QKeyEvent) -> KeyPress:
    """Translate a Qt key event into the editor's key vocabulary."""
    modifiers = event.modifiers()
    return KeyPress(
        key=_KEYS.get(Qt.Key(event.key()), Key.OTHER),
        shift=bool(modifiers & Qt.KeyboardModifier.ShiftModifier),
        ctrl=bool(modifiers & (Qt.KeyboardModifier.ControlModifier |
                               Qt.KeyboardModifier.MetaModifier)),
    )


class TargetScene(QGraphicsScene):
    """
    Scene mirroring the canvas model.

    Items are created and dropped as children come and go; the stacking
    order always follows the model.
    """

    def __init__(self, controller: EditorController, parent=None):
        super().__init__(parent)
        self.controller = controller

        # Graphics items tracking: region id, or the preview primitive itself
        self._items: Dict[Any, QGraphicsItem] = {}
        self._background_item: Optional[QGraphicsPixmapItem] = None

        self.setBackgroundBrush(COLORS["background"])
        controller.canvasChanged.connect(self.sync)

    @staticmethod
    def _key(child: Any):
        if isinstance(child, TargetRegion):
            return child.id
        # Preview primitives compare and hash by identity
        return child

    def item_for(self, child: Any) -> Optional[QGraphicsItem]:
        return self._items.get(self._key(child))

    def sync(self):
        """Bring items in line with the canvas model."""
        canvas = self.controller.canvas
        children = canvas.children

        present = set(self._key(c) for c in children)
        for key in [k for k in self._items if k not in present]:
            self.removeItem(self._items.pop(key))

        for index, child in enumerate(children):
            key = self._key(child)
            item = self._items.get(key)
            if item is None:
                item = create_item(child)
                if item is None:
                    continue
                self.addItem(item)
                self._items[key] = item
            else:
                sync_item(item, child)
            item.setZValue(index)

        self._sync_background(canvas.background)
        self.update()

    def _sync_background(self, background: Any):
        if background is None:
            if self._background_item is not None:
                self.removeItem(self._background_item)
                self._background_item = None
            return

        if self._background_item is None:
            self._background_item = QGraphicsPixmapItem()
            self._background_item.setZValue(BACKGROUND_Z)
            self.addItem(self._background_item)

        if isinstance(background, QImage):
            background = QPixmap.fromImage(background)
        elif isinstance(background, str):
            background = QPixmap(background)
        if isinstance(background, QPixmap):
            self._background_item.setPixmap(background)


class TargetCanvas(QGraphicsView):
    """
    Canvas widget for placing and editing target regions.

    The view does no hit testing of its own beyond asking the region
    store for the topmost committed region under the pointer.
    """

    def __init__(self, controller: EditorController, width: int = 600,
                 height: int = 480, show_grid: bool = False, parent=None):
        super().__init__(parent)
        self.controller = controller
        self._show_grid = show_grid

        self.target_scene = TargetScene(controller)
        self.target_scene.setSceneRect(QRectF(0, 0, width, height))
        self.setScene(self.target_scene)

        # View settings
        self.setRenderHint(QPainter.RenderHint.Antialiasing)
        self.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        self.setViewportUpdateMode(QGraphicsView.ViewportUpdateMode.FullViewportUpdate)
        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignTop)

        controller.selectionChanged.connect(self._on_selection_changed)

    def set_show_grid(self, show: bool):
        self._show_grid = show
        self.viewport().update()

    def drawBackground(self, painter: QPainter, rect: QRectF):
        """Draw grid background."""
        super().drawBackground(painter, rect)
        if not self._show_grid:
            return

        grid_size = 50
        left = int(rect.left()) - (int(rect.left()) % grid_size)
        top = int(rect.top()) - (int(rect.top()) % grid_size)

        painter.setPen(QPen(COLORS["grid"], 1))

        x = left
        while x < rect.right():
            painter.drawLine(int(x), int(rect.top()), int(x), int(rect.bottom()))
            x += grid_size

        y = top
        while y < rect.bottom():
            painter.drawLine(int(rect.left()), int(y), int(rect.right()), int(y))
            y += grid_size

    def _on_selection_changed(self, region):
        if region is not None:
            self.setFocus()

    def mouseMoveEvent(self, event: QMouseEvent):
        """Track the pointer in scene coordinates."""
        pos = self.mapToScene(event.position().toPoint())
        self.controller.pointer_moved(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event: QMouseEvent):
        """Route a click to the region under the pointer, or to the canvas."""
        button = _BUTTONS.get(event.button())
        if button is None:
            super().mouseReleaseEvent(event)
            return

        pos = self.mapToScene(event.position().toPoint())
        x, y = pos.x(), pos.y()

        region = self.controller.store.topmost_at(x, y)
        if region is not None:
            self.controller.region_clicked(region, x, y, button)
        else:
            self.controller.pointer_released(x, y, button)
        event.accept()

    def keyPressEvent(self, event: QKeyEvent):
        """Region keys go to the selection; everything else to the canvas."""
        press = to_key_press(event)

        handled = False
        selection = self.controller.selection
        if selection is not None:
            handled = self.controller.region_key_pressed(selection, press)
        if not handled:
            handled = self.controller.canvas_key_pressed(press)

        if handled:
            event.accept()
        else:
            super().keyPressEvent(event)


__all__ = ["TargetScene", "TargetCanvas", "to_key_press"]
