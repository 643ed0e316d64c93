"""
Models package.

This package contains the data models of the target editor:
- Interaction vocabulary (Tool, InteractionMode, PointerButton, Key, KeyPress)
- Regions (TargetRegion and its Rectangle, Ellipse, Polygon and Image variants)
- Preset silhouettes and the tool-to-region factory
- Canvas child list and the committed region store
"""

from .interaction import (
    Tool,
    InteractionMode,
    PointerButton,
    Key,
    KeyPress,
    ARROW_KEYS,
)
from .target_region import (
    MIN_REGION_SIZE,
    DEFAULT_OPACITY,
    UNSELECTED_STROKE_COLOR,
    SELECTED_STROKE_COLOR,
    COLOR_TABLE,
    COLOR_NAMES,
    DEFAULT_COLOR_NAME,
    DEFAULT_COLOR,
    RegionType,
    create_color,
    get_color_name,
    Resizable,
    Taggable,
    Colorable,
    is_colorable,
    TargetRegion,
    RectangleRegion,
    EllipseRegion,
    PolygonRegion,
    ImageRegion,
)
from .region_presets import (
    DEFAULT_DIM,
    SILHOUETTE_SCALE,
    APPLESEED_THREE,
    APPLESEED_FOUR,
    APPLESEED_FIVE,
    SILHOUETTES,
    silhouette_points,
    create_region_for_tool,
)
from .canvas import (
    DuplicateChildError,
    VertexMarker,
    EdgeLine,
    CanvasModel,
)
from .region_store import RegionStore

__all__ = [
    # Interaction
    "Tool",
    "InteractionMode",
    "PointerButton",
    "Key",
    "KeyPress",
    "ARROW_KEYS",
    # Regions
    "MIN_REGION_SIZE",
    "DEFAULT_OPACITY",
    "UNSELECTED_STROKE_COLOR",
    "SELECTED_STROKE_COLOR",
    "COLOR_TABLE",
    "COLOR_NAMES",
    "DEFAULT_COLOR_NAME",
    "DEFAULT_COLOR",
    "RegionType",
    "create_color",
    "get_color_name",
    "Resizable",
    "Taggable",
    "Colorable",
    "is_colorable",
    "TargetRegion",
    "RectangleRegion",
    "EllipseRegion",
    "PolygonRegion",
    "ImageRegion",
    # Presets
    "DEFAULT_DIM",
    "SILHOUETTE_SCALE",
    "APPLESEED_THREE",
    "APPLESEED_FOUR",
    "APPLESEED_FIVE",
    "SILHOUETTES",
    "silhouette_points",
    "create_region_for_tool",
    # Canvas and store
    "DuplicateChildError",
    "VertexMarker",
    "EdgeLine",
    "CanvasModel",
    "RegionStore",
]
