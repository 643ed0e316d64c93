"""
Graphics items for canvas children.

Each logical child of the canvas model (regions and freeform preview
primitives) is drawn by one QGraphicsItem. Items carry no state of their
own; ``sync_item`` copies geometry and paint from the model every time
the controller reports a change.
"""

import logging
from typing import Any, Optional

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPen, QBrush, QColor, QPolygonF, QPixmap, QImage
from PyQt6.QtWidgets import (
    QGraphicsItem, QGraphicsRectItem, QGraphicsEllipseItem,
    QGraphicsPolygonItem, QGraphicsPixmapItem, QGraphicsLineItem,
)

from models.canvas import VertexMarker, EdgeLine
from models.target_region import (
    RectangleRegion, EllipseRegion, PolygonRegion, ImageRegion,
)

logger = logging.getLogger(__name__)


# Preview colors
COLORS = {
    "marker": QColor("#000000"),
    "edge": QColor("#000000"),
    "preview": QColor("#6B7280"),    # Gray dashed preview edge
}

STROKE_WIDTH = 2.0


def create_item(child: Any) -> Optional[QGraphicsItem]:
    """Create the graphics item matching a canvas child."""
    if isinstance(child, RectangleRegion):
        item = QGraphicsRectItem()
    elif isinstance(child, EllipseRegion):
        item = QGraphicsEllipseItem()
    elif isinstance(child, PolygonRegion):
        item = QGraphicsPolygonItem()
    elif isinstance(child, ImageRegion):
        item = QGraphicsPixmapItem()
        item.setTransformationMode(Qt.TransformationMode.SmoothTransformation)
    elif isinstance(child, VertexMarker):
        item = QGraphicsEllipseItem()
    elif isinstance(child, EdgeLine):
        item = QGraphicsLineItem()
    else:
        logger.warning(f"No graphics item for {type(child).__name__}")
        return None

    sync_item(item, child)
    return item


def sync_item(item: QGraphicsItem, child: Any):
    """Copy a child's geometry and paint onto its item."""
    if isinstance(child, RectangleRegion):
        item.setRect(QRectF(child.x, child.y, child.width, child.height))
        _apply_paint(item, child)
    elif isinstance(child, EllipseRegion):
        item.setRect(QRectF(child.center_x - child.radius_x,
                            child.center_y - child.radius_y,
                            child.radius_x * 2, child.radius_y * 2))
        _apply_paint(item, child)
    elif isinstance(child, PolygonRegion):
        item.setPolygon(QPolygonF([QPointF(x, y) for x, y in child.points]))
        _apply_paint(item, child)
    elif isinstance(child, ImageRegion):
        _sync_pixmap(item, child)
    elif isinstance(child, VertexMarker):
        r = child.radius
        item.setRect(QRectF(child.x - r, child.y - r, r * 2, r * 2))
        item.setPen(QPen(COLORS["marker"], 1))
        item.setBrush(QBrush(COLORS["marker"]))
    elif isinstance(child, EdgeLine):
        item.setLine(child.x1, child.y1, child.x2, child.y2)
        if child.is_dashed:
            pen = QPen(COLORS["preview"], 1)
            pen.setDashPattern(list(child.dash))
        else:
            pen = QPen(COLORS["edge"], STROKE_WIDTH)
        item.setPen(pen)


def _apply_paint(item: QGraphicsItem, region):
    fill = QColor(region.fill)
    fill.setAlphaF(region.opacity)
    item.setBrush(QBrush(fill))
    item.setPen(QPen(QColor(region.stroke), STROKE_WIDTH))


def _sync_pixmap(item: QGraphicsPixmapItem, region: ImageRegion):
    image = region.image
    if isinstance(image, QImage):
        pixmap = QPixmap.fromImage(image)
    elif isinstance(image, QPixmap):
        pixmap = image
    else:
        pixmap = QPixmap(int(region.width), int(region.height))
        pixmap.fill(Qt.GlobalColor.transparent)

    if pixmap.width() != int(region.width) or pixmap.height() != int(region.height):
        pixmap = pixmap.scaled(int(region.width), int(region.height),
                               Qt.AspectRatioMode.IgnoreAspectRatio,
                               Qt.TransformationMode.SmoothTransformation)
    item.setPixmap(pixmap)
    item.setPos(region.x, region.y)
    item.setOpacity(region.opacity)


__all__ = ["create_item", "sync_item"]
