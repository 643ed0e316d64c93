"""
Region presets for the shape tools.

Each placement tool drops a region of a fixed default size with its
top-left anchored at the drop point. The appleseed silhouettes are
static offset tables (relative to the drop point) scaled by a constant
factor.
"""

from typing import Dict, List, Optional, Tuple

from .interaction import Tool
from .target_region import (
    COLOR_TABLE, DEFAULT_OPACITY,
    TargetRegion, RectangleRegion, EllipseRegion, PolygonRegion,
)


DEFAULT_DIM = 40
SILHOUETTE_SCALE = 2.5

# Appleseed silhouette outlines as (dx, dy) offsets before scaling
APPLESEED_THREE: List[Tuple[float, float]] = [
    (15.083, 13.12), (15.083, -0.147), (14.277, -2.508), (13.149, -4.115),
    (11.841, -5.257), (10.557, -6.064), (8.689, -6.811), (7.539, -8.439),
    (7.076, -9.978), (6.104, -11.577), (4.82, -12.829), (3.43, -13.788),
    (1.757, -14.386), (0.083, -14.55), (-1.59, -14.386), (-3.263, -13.788),
    (-4.653, -12.829), (-5.938, -11.577), (-6.909, -9.978), (-7.372, -8.439),
    (-8.522, -6.811), (-10.39, -6.064), (-11.674, -5.257), (-12.982, -4.115),
    (-14.11, -2.508), (-14.917, -0.147), (-14.917, 13.12),
]

APPLESEED_FOUR: List[Tuple[float, float]] = [
    (11.66, 5.51), (11.595, 0.689), (11.1, -1.084), (9.832, -2.441),
    (7.677, -3.322), (5.821, -4.709), (4.715, -6.497), (4.267, -8.135),
    (3.669, -9.41), (2.534, -10.553), (1.436, -11.091), (0.083, -11.323),
    (-1.269, -11.091), (-2.367, -10.553), (-3.502, -9.41), (-4.1, -8.135),
    (-4.548, -6.497), (-5.654, -4.709), (-7.51, -3.322), (-9.665, -2.441),
    (-10.933, -1.084), (-11.428, 0.689), (-11.493, 5.51),
]

APPLESEED_FIVE: List[Tuple[float, float]] = [
    (7.893, 3.418), (7.893, 1.147), (7.255, 0.331), (5.622, -0.247),
    (4.187, -1.124), (2.833, -2.339), (1.917, -3.594), (1.219, -5.048),
    (0.9, -6.223), (0.801, -7.1), (0.521, -7.558), (0.083, -7.617),
    (-0.354, -7.558), (-0.634, -7.1), (-0.733, -6.223), (-1.052, -5.048),
    (-1.75, -3.594), (-2.666, -2.339), (-4.02, -1.124), (-5.455, -0.247),
    (-7.088, 0.331), (-7.726, 1.147), (-7.726, 3.418),
]

SILHOUETTES: Dict[Tool, List[Tuple[float, float]]] = {
    Tool.APPLESEED_THREE: APPLESEED_THREE,
    Tool.APPLESEED_FOUR: APPLESEED_FOUR,
    Tool.APPLESEED_FIVE: APPLESEED_FIVE,
}


def silhouette_points(table: List[Tuple[float, float]], x: float, y: float,
                      scale: float = SILHOUETTE_SCALE) -> List[Tuple[float, float]]:
    """Scale an offset table and translate it to (x, y)."""
    return [(x + dx * scale, y + dy * scale) for dx, dy in table]


def create_region_for_tool(tool: Tool, x: float, y: float,
                           fill: str = COLOR_TABLE["black"],
                           opacity: float = DEFAULT_OPACITY,
                           default_dim: float = DEFAULT_DIM,
                           scale: float = SILHOUETTE_SCALE) -> Optional[TargetRegion]:
    """
    Create the preset region for a shape tool dropped at (x, y).

    Args:
        tool: Active tool
        x, y: Drop point
        fill: Initial fill color (hex)
        opacity: Initial opacity
        default_dim: Width/height of the rectangle, oval and triangle presets
        scale: Scale factor applied to silhouette offset tables

    Returns:
        The new region, or None when the tool has no preset
        (cursor, image and freeform).
    """
    half = default_dim / 2

    if tool == Tool.RECTANGLE:
        region = RectangleRegion(x, y, default_dim, default_dim)
    elif tool == Tool.OVAL:
        region = EllipseRegion(x + half, y + half, half, half)
    elif tool == Tool.TRIANGLE:
        region = PolygonRegion([
            (x, y + half),
            (x + default_dim, y + half),
            (x + half, y),
        ])
    elif tool in SILHOUETTES:
        region = PolygonRegion(silhouette_points(SILHOUETTES[tool], x, y, scale))
    else:
        return None

    region.set_fill(fill)
    region.opacity = opacity
    return region


__all__ = [
    "DEFAULT_DIM",
    "SILHOUETTE_SCALE",
    "APPLESEED_THREE",
    "APPLESEED_FOUR",
    "APPLESEED_FIVE",
    "SILHOUETTES",
    "silhouette_points",
    "create_region_for_tool",
]
