"""
Target Region Models.

This module defines the regions a target is composed of. Every region
is taggable and resizable; geometric regions are also colorable, image
regions are not.

Key concepts:
- TargetRegion: Common geometric/tag contract (bounds, move, resize, hit target)
- RectangleRegion / EllipseRegion / PolygonRegion: Colorable shape variants
- ImageRegion: Bitmap region with an optional frame sequence, no fill or stroke
- Color table: The named colors offered by the region color chooser

Coordinates are canvas pixels with the origin at the top-left corner.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple
import uuid


# =============================================================================
# Constants
# =============================================================================

MIN_REGION_SIZE = 1.0   # Floor for every width/height a resize can produce
DEFAULT_OPACITY = 0.7
UNSELECTED_STROKE_COLOR = "black"
SELECTED_STROKE_COLOR = "gold"

# Named colors offered by the color chooser, in chooser order
COLOR_TABLE: Dict[str, str] = {
    "black": "#000000",
    "blue": "#0000ff",
    "green": "#008000",
    "orange": "#ffa500",
    "red": "#ff0000",
    "white": "#ffffff",
}
DEFAULT_COLOR_NAME = "cornsilk"
DEFAULT_COLOR = "#fff8dc"
COLOR_NAMES: List[str] = list(COLOR_TABLE)

Point = Tuple[float, float]


class RegionType(Enum):
    """Variant tag of a target region."""
    RECTANGLE = "rectangle"
    ELLIPSE = "ellipse"
    POLYGON = "polygon"
    IMAGE = "image"


# =============================================================================
# Helper Functions
# =============================================================================

def _generate_id() -> str:
    """Generate a short unique ID."""
    return str(uuid.uuid4())[:8]


def create_color(name: str) -> str:
    """Map a color chooser name to its hex value (cornsilk for unknown names)."""
    return COLOR_TABLE.get(name, DEFAULT_COLOR)


def get_color_name(color: Optional[str]) -> str:
    """Map a hex color back to its chooser name (cornsilk for anything else)."""
    if not color:
        return DEFAULT_COLOR_NAME
    color = color.lower()
    for name, value in COLOR_TABLE.items():
        if value == color:
            return name
    return DEFAULT_COLOR_NAME


# =============================================================================
# Capability Groups
# =============================================================================

class Resizable(ABC):
    """Regions whose width and height can be changed by a signed delta."""

    @abstractmethod
    def resize_width(self, delta: float):
        """Grow (delta > 0) or shrink (delta < 0) the region horizontally."""

    @abstractmethod
    def resize_height(self, delta: float):
        """Grow (delta > 0) or shrink (delta < 0) the region vertically."""


class Taggable:
    """Regions that carry a string-to-string tag mapping."""

    _tags: Dict[str, str]

    @property
    def tags(self) -> Dict[str, str]:
        """A copy of the region's tags."""
        return dict(self._tags)

    def set_tags(self, tags: Dict[str, str]):
        """Replace all tags."""
        self._tags = {str(k): str(v) for k, v in tags.items()}


class Colorable:
    """Regions with a fill color and a selection stroke."""

    _fill: str
    _stroke: str

    def _init_paint(self, fill: str):
        self._fill = fill.lower()
        self._stroke = UNSELECTED_STROKE_COLOR

    @property
    def fill(self) -> Optional[str]:
        return self._fill

    def set_fill(self, color: str):
        self._fill = color.lower()

    @property
    def stroke(self) -> Optional[str]:
        return self._stroke

    def set_selected(self, selected: bool):
        """Highlight or unhighlight the region outline."""
        self._stroke = SELECTED_STROKE_COLOR if selected else UNSELECTED_STROKE_COLOR

    @property
    def is_highlighted(self) -> bool:
        return self._stroke == SELECTED_STROKE_COLOR


def is_colorable(region: 'TargetRegion') -> bool:
    """True if fill and stroke operations apply to the region."""
    return isinstance(region, Colorable)


# =============================================================================
# Region Base
# =============================================================================

class TargetRegion(Taggable, Resizable, ABC):
    """
    Base class for every region placed on a target.

    Identity is the object itself; ``id`` is a short handle used by views
    to map regions onto their graphics items.

    Paint operations (``set_fill``, ``set_selected``) are accepted by all
    regions but only take effect on colorable ones.
    """

    region_type: RegionType

    def __init__(self, opacity: float = DEFAULT_OPACITY):
        self.id = _generate_id()
        self.opacity = opacity
        self._tags: Dict[str, str] = {}

    def __repr__(self) -> str:
        x, y, w, h = self.bounds()
        return (f"{type(self).__name__}(id={self.id!r}, "
                f"bounds=({x:.1f}, {y:.1f}, {w:.1f}, {h:.1f}))")

    @property
    def fill(self) -> Optional[str]:
        return None

    def set_fill(self, color: str):
        pass

    @property
    def stroke(self) -> Optional[str]:
        return None

    def set_selected(self, selected: bool):
        pass

    @property
    def is_highlighted(self) -> bool:
        return False

    @abstractmethod
    def bounds(self) -> Tuple[float, float, float, float]:
        """Bounding box as (x, y, width, height)."""

    @abstractmethod
    def move_by(self, dx: float, dy: float):
        """Translate the region."""

    @abstractmethod
    def contains(self, x: float, y: float) -> bool:
        """Hit test against the region's logical outline."""

    @abstractmethod
    def geometry(self) -> Dict[str, Any]:
        """Variant-specific geometry for export."""

    def move_to(self, x: float, y: float):
        """Move the region so the top-left of its bounds is at (x, y)."""
        bx, by, _, _ = self.bounds()
        self.move_by(x - bx, y - by)

    def center(self) -> Point:
        x, y, w, h = self.bounds()
        return (x + w / 2, y + h / 2)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for export."""
        return {
            "id": self.id,
            "type": self.region_type.value,
            "geometry": self.geometry(),
            "fill": self.fill,
            "opacity": self.opacity,
            "tags": self.tags,
        }


# =============================================================================
# Region Variants
# =============================================================================

class RectangleRegion(Colorable, TargetRegion):
    """Axis-aligned rectangle."""

    region_type = RegionType.RECTANGLE

    def __init__(self, x: float, y: float, width: float, height: float,
                 fill: str = COLOR_TABLE["black"], opacity: float = DEFAULT_OPACITY):
        super().__init__(opacity)
        self._init_paint(fill)
        self.x = x
        self.y = y
        self.width = max(MIN_REGION_SIZE, width)
        self.height = max(MIN_REGION_SIZE, height)

    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def move_by(self, dx: float, dy: float):
        self.x += dx
        self.y += dy

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height

    def resize_width(self, delta: float):
        self.width = max(MIN_REGION_SIZE, self.width + delta)

    def resize_height(self, delta: float):
        self.height = max(MIN_REGION_SIZE, self.height + delta)

    def geometry(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


class EllipseRegion(Colorable, TargetRegion):
    """Axis-aligned ellipse given by its center and radii."""

    region_type = RegionType.ELLIPSE

    def __init__(self, center_x: float, center_y: float,
                 radius_x: float, radius_y: float,
                 fill: str = COLOR_TABLE["black"], opacity: float = DEFAULT_OPACITY):
        super().__init__(opacity)
        self._init_paint(fill)
        self.center_x = center_x
        self.center_y = center_y
        self.radius_x = max(MIN_REGION_SIZE / 2, radius_x)
        self.radius_y = max(MIN_REGION_SIZE / 2, radius_y)

    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.center_x - self.radius_x, self.center_y - self.radius_y,
                self.radius_x * 2, self.radius_y * 2)

    def move_by(self, dx: float, dy: float):
        self.center_x += dx
        self.center_y += dy

    def contains(self, x: float, y: float) -> bool:
        nx = (x - self.center_x) / self.radius_x
        ny = (y - self.center_y) / self.radius_y
        return nx * nx + ny * ny <= 1.0

    # The center stays put; each radius absorbs half of the delta.
    def resize_width(self, delta: float):
        self.radius_x = max(MIN_REGION_SIZE / 2, self.radius_x + delta / 2)

    def resize_height(self, delta: float):
        self.radius_y = max(MIN_REGION_SIZE / 2, self.radius_y + delta / 2)

    def geometry(self) -> Dict[str, Any]:
        return {
            "center_x": self.center_x,
            "center_y": self.center_y,
            "radius_x": self.radius_x,
            "radius_y": self.radius_y,
        }


class PolygonRegion(Colorable, TargetRegion):
    """
    Closed polygon given by its vertices.

    Used for the preset silhouettes (triangle, appleseed targets) as well
    as freeform traces. Resizing scales the vertices about the left or top
    edge of the bounding box; a polygon with no extent on an axis cannot
    be scaled on that axis. Traced vertices are kept as given, so a
    polygon may start below the minimum size, but shrinking never grows it.
    """

    region_type = RegionType.POLYGON

    def __init__(self, points: Sequence[Point],
                 fill: str = COLOR_TABLE["black"], opacity: float = DEFAULT_OPACITY):
        super().__init__(opacity)
        self._init_paint(fill)
        self._points: List[Point] = [(float(x), float(y)) for x, y in points]

    @property
    def points(self) -> List[Point]:
        return list(self._points)

    def bounds(self) -> Tuple[float, float, float, float]:
        if not self._points:
            return (0.0, 0.0, 0.0, 0.0)
        xs = [p[0] for p in self._points]
        ys = [p[1] for p in self._points]
        return (min(xs), min(ys), max(xs) - min(xs), max(ys) - min(ys))

    def move_by(self, dx: float, dy: float):
        self._points = [(x + dx, y + dy) for x, y in self._points]

    def contains(self, x: float, y: float) -> bool:
        # Even-odd ray cast
        inside = False
        n = len(self._points)
        if n < 3:
            return False
        j = n - 1
        for i in range(n):
            xi, yi = self._points[i]
            xj, yj = self._points[j]
            if (yi > y) != (yj > y):
                x_cross = xi + (y - yi) * (xj - xi) / (yj - yi)
                if x < x_cross:
                    inside = not inside
            j = i
        return inside

    def resize_width(self, delta: float):
        left, _, width, _ = self.bounds()
        if width <= 0:
            return
        scale = max(MIN_REGION_SIZE, width + delta) / width
        if delta < 0:
            scale = min(scale, 1.0)
        self._points = [(left + (x - left) * scale, y) for x, y in self._points]

    def resize_height(self, delta: float):
        _, top, _, height = self.bounds()
        if height <= 0:
            return
        scale = max(MIN_REGION_SIZE, height + delta) / height
        if delta < 0:
            scale = min(scale, 1.0)
        self._points = [(x, top + (y - top) * scale) for x, y in self._points]

    def geometry(self) -> Dict[str, Any]:
        return {"points": [list(p) for p in self._points]}


class ImageRegion(TargetRegion):
    """
    Bitmap region loaded from a file.

    Images have no fill or stroke. A multi-frame source carries a frame
    sequence player that the region owns; ``image`` always holds the frame
    currently displayed.
    """

    region_type = RegionType.IMAGE

    def __init__(self, x: float, y: float, image_file: str,
                 width: float = 0.0, height: float = 0.0,
                 opacity: float = 1.0):
        super().__init__(opacity)
        self.x = x
        self.y = y
        self.image_file = image_file
        self.width = max(MIN_REGION_SIZE, width)
        self.height = max(MIN_REGION_SIZE, height)
        self.image: Any = None
        self._animation = None

    @property
    def animation(self):
        """The attached frame sequence player, or None."""
        return self._animation

    def set_image(self, image: Any):
        self.image = image

    def set_animation(self, animation):
        self._animation = animation

    def bounds(self) -> Tuple[float, float, float, float]:
        return (self.x, self.y, self.width, self.height)

    def move_by(self, dx: float, dy: float):
        self.x += dx
        self.y += dy

    def contains(self, x: float, y: float) -> bool:
        return self.x <= x <= self.x + self.width and self.y <= y <= self.y + self.height

    def resize_width(self, delta: float):
        self.width = max(MIN_REGION_SIZE, self.width + delta)

    def resize_height(self, delta: float):
        self.height = max(MIN_REGION_SIZE, self.height + delta)

    def geometry(self) -> Dict[str, Any]:
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}

    def to_dict(self) -> Dict[str, Any]:
        d = super().to_dict()
        d["image_file"] = self.image_file
        return d


__all__ = [
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
]
