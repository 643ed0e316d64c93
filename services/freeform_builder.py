"""
Freeform Builder.

Accumulates a polygon one vertex at a time while the freeform tool is
active. Each vertex draws a marker on the canvas and, after the first,
an edge back to the previous vertex. A dashed preview edge follows the
pointer from the last vertex.

Usage:
    builder = FreeformBuilder(canvas)
    builder.add_vertex(10, 10)
    builder.add_vertex(50, 10)
    builder.preview_edge(40, 60)
    builder.undo()                    # drops the (50, 10) vertex and its edge
    polygon = builder.finalize()      # None with fewer than three vertices
"""

import logging
from typing import List, Optional, Tuple, Union

from models.canvas import CanvasModel, VertexMarker, EdgeLine
from models.target_region import COLOR_TABLE, DEFAULT_OPACITY, PolygonRegion

logger = logging.getLogger(__name__)

VERTEX_RADIUS = 3.0
DASH_OFFSET = 5.0
MIN_POLYGON_VERTICES = 3

PreviewShape = Union[VertexMarker, EdgeLine]


class FreeformBuilder:
    """
    Incremental polygon tracer with undo.

    Markers and edges are pushed onto an undo stack in marker-then-edge
    order, so an undo step removes the newest edge first and then its
    marker.
    """

    def __init__(self, canvas: CanvasModel,
                 vertex_radius: float = VERTEX_RADIUS,
                 dash_offset: float = DASH_OFFSET):
        self._canvas = canvas
        self._vertex_radius = vertex_radius
        self._dash_offset = dash_offset
        self._points: List[Tuple[float, float]] = []
        self._shapes: List[PreviewShape] = []
        self._edge: Optional[EdgeLine] = None

    @property
    def vertices(self) -> List[Tuple[float, float]]:
        return list(self._points)

    @property
    def shapes(self) -> List[PreviewShape]:
        """Undo stack contents, oldest first."""
        return list(self._shapes)

    @property
    def edge(self) -> Optional[EdgeLine]:
        """The live preview edge, if drawn."""
        return self._edge

    @property
    def is_empty(self) -> bool:
        return not self._points and not self._shapes and self._edge is None

    def add_vertex(self, x: float, y: float):
        """Record a vertex, drawing its marker and the edge from the previous one."""
        marker = VertexMarker(x, y, self._vertex_radius)
        self._shapes.append(marker)
        self._canvas.add(marker)

        if self._points:
            last_x, last_y = self._points[-1]
            edge = EdgeLine(last_x, last_y, x, y)
            self._shapes.append(edge)
            self._canvas.add(edge)

        self._points.append((x, y))

    def preview_edge(self, x: float, y: float):
        """Redraw the dashed edge from the last vertex to the pointer."""
        if not self._points:
            return

        self._clear_edge()

        last_x, last_y = self._points[-1]
        self._edge = EdgeLine(last_x, last_y, x, y,
                              dash=(self._dash_offset, self._dash_offset))
        self._canvas.add(self._edge)

    def undo(self) -> bool:
        """Remove the last vertex along with its edge and marker."""
        if not self._points:
            return False

        self._points.pop()

        if not self._points:
            self._clear_edge()

        # Edge if it exists, otherwise the lone first marker
        if self._shapes:
            top = self._shapes.pop()
            self._canvas.discard(top)
            if isinstance(top, EdgeLine) and self._shapes:
                self._canvas.discard(self._shapes.pop())

        return True

    def finalize(self, fill: str = COLOR_TABLE["black"],
                 opacity: float = DEFAULT_OPACITY) -> Optional[PolygonRegion]:
        """
        Turn the traced vertices into a polygon and clear the trace.

        Returns:
            The polygon (not yet committed), or None if fewer than three
            vertices were traced.
        """
        points = list(self._points)
        self.reset()

        if len(points) < MIN_POLYGON_VERTICES:
            logger.warning(f"Freeform trace needs {MIN_POLYGON_VERTICES} vertices, "
                           f"got {len(points)}; no polygon created")
            return None

        polygon = PolygonRegion(points, fill=fill, opacity=opacity)
        logger.debug(f"Finalized freeform polygon with {len(points)} vertices")
        return polygon

    def reset(self):
        """Discard the trace and remove every preview primitive from the canvas."""
        self._points.clear()
        self._canvas.remove_all(self._shapes)
        self._shapes.clear()
        self._clear_edge()

    def _clear_edge(self):
        if self._edge is not None:
            self._canvas.discard(self._edge)
            self._edge = None


__all__ = [
    "VERTEX_RADIUS",
    "DASH_OFFSET",
    "MIN_POLYGON_VERTICES",
    "FreeformBuilder",
]
