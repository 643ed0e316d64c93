"""
Unit tests for target region classes.

Tests:
- Color name/value mapping
- Capability groups (resizable, colorable, taggable)
- Geometry, movement and hit testing per variant
- Minimum size floor on resize
- Export to dictionaries
"""

import pytest
from models.target_region import (
    COLOR_TABLE, DEFAULT_COLOR_NAME, DEFAULT_COLOR, MIN_REGION_SIZE,
    SELECTED_STROKE_COLOR, UNSELECTED_STROKE_COLOR,
    RegionType, create_color, get_color_name, is_colorable,
    Resizable, Taggable, Colorable,
    RectangleRegion, EllipseRegion, PolygonRegion, ImageRegion,
)


class TestColors:
    """Tests for color name mapping."""

    @pytest.mark.parametrize("name", ["black", "blue", "green", "orange", "red", "white"])
    def test_round_trip(self, name):
        """Test that every chooser name survives name -> color -> name."""
        assert get_color_name(create_color(name)) == name

    def test_unknown_color_maps_to_default_name(self):
        """Test that colors outside the table map to cornsilk."""
        assert get_color_name("#123456") == DEFAULT_COLOR_NAME
        assert get_color_name(None) == DEFAULT_COLOR_NAME
        assert get_color_name("") == DEFAULT_COLOR_NAME

    def test_unknown_name_maps_to_default_color(self):
        """Test that an unknown name creates the default color."""
        assert create_color("purple") == DEFAULT_COLOR
        assert get_color_name(create_color("purple")) == DEFAULT_COLOR_NAME

    def test_name_lookup_ignores_case(self):
        """Test that hex values match regardless of case."""
        assert get_color_name("#FFA500") == "orange"


class TestCapabilities:
    """Tests for capability groups."""

    def test_shapes_are_colorable(self):
        """Test that geometric variants are colorable."""
        assert is_colorable(RectangleRegion(0, 0, 10, 10))
        assert is_colorable(EllipseRegion(5, 5, 5, 5))
        assert is_colorable(PolygonRegion([(0, 0), (10, 0), (5, 5)]))

    def test_image_is_not_colorable(self):
        """Test that images lack the colorable capability."""
        image = ImageRegion(0, 0, "target.png", 10, 10)
        assert not is_colorable(image)
        assert not isinstance(image, Colorable)
        assert isinstance(image, Resizable)
        assert isinstance(image, Taggable)

    def test_image_ignores_paint(self):
        """Test that paint operations on images are no-ops."""
        image = ImageRegion(0, 0, "target.png", 10, 10)
        image.set_fill(COLOR_TABLE["red"])
        image.set_selected(True)
        assert image.fill is None
        assert image.stroke is None
        assert not image.is_highlighted

    def test_selection_highlight(self):
        """Test highlighting and unhighlighting a colorable region."""
        rect = RectangleRegion(0, 0, 10, 10)
        assert rect.stroke == UNSELECTED_STROKE_COLOR
        rect.set_selected(True)
        assert rect.is_highlighted
        assert rect.stroke == SELECTED_STROKE_COLOR
        rect.set_selected(False)
        assert not rect.is_highlighted

    def test_fill_is_stored_lower_case(self):
        """Test that fills are normalized."""
        rect = RectangleRegion(0, 0, 10, 10, fill="#FF0000")
        assert rect.fill == "#ff0000"


class TestTags:
    """Tests for tag storage."""

    def test_tags_start_empty(self):
        """Test a new region has no tags."""
        assert RectangleRegion(0, 0, 10, 10).tags == {}

    def test_tags_are_copied(self):
        """Test that the tags property does not alias internal state."""
        rect = RectangleRegion(0, 0, 10, 10)
        rect.set_tags({"points": "5"})
        tags = rect.tags
        tags["points"] = "10"
        assert rect.tags == {"points": "5"}

    def test_set_tags_replaces(self):
        """Test that set_tags replaces the whole mapping."""
        rect = RectangleRegion(0, 0, 10, 10)
        rect.set_tags({"a": "1", "b": "2"})
        rect.set_tags({"c": "3"})
        assert rect.tags == {"c": "3"}


class TestRectangleRegion:
    """Tests for RectangleRegion."""

    def test_bounds_and_move(self):
        """Test bounds follow moves."""
        rect = RectangleRegion(10, 20, 30, 40)
        assert rect.bounds() == (10, 20, 30, 40)
        rect.move_by(5, -5)
        assert rect.bounds() == (15, 15, 30, 40)
        rect.move_to(0, 0)
        assert rect.bounds() == (0, 0, 30, 40)

    def test_contains(self):
        """Test hit testing."""
        rect = RectangleRegion(10, 10, 20, 20)
        assert rect.contains(15, 15)
        assert not rect.contains(5, 15)

    def test_resize(self):
        """Test growing and shrinking."""
        rect = RectangleRegion(0, 0, 10, 10)
        rect.resize_width(1)
        rect.resize_height(-1)
        assert (rect.width, rect.height) == (11, 9)

    def test_resize_floor(self):
        """Test that shrinking stops at the minimum size."""
        rect = RectangleRegion(0, 0, 2, 2)
        for _ in range(5):
            rect.resize_width(-1)
            rect.resize_height(-1)
        assert rect.width == MIN_REGION_SIZE
        assert rect.height == MIN_REGION_SIZE


class TestEllipseRegion:
    """Tests for EllipseRegion."""

    def test_bounds(self):
        """Test bounds from center and radii."""
        oval = EllipseRegion(50, 50, 20, 10)
        assert oval.bounds() == (30, 40, 40, 20)

    def test_contains(self):
        """Test hit testing against the ellipse outline."""
        oval = EllipseRegion(50, 50, 20, 10)
        assert oval.contains(50, 50)
        assert oval.contains(69, 50)
        assert not oval.contains(69, 59)

    def test_resize_keeps_center(self):
        """Test that resizing changes the diameter by the delta."""
        oval = EllipseRegion(50, 50, 20, 20)
        oval.resize_width(2)
        assert oval.bounds()[2] == 42
        assert oval.center() == (50, 50)

    def test_resize_floor(self):
        """Test that the diameter never drops below the minimum size."""
        oval = EllipseRegion(0, 0, 1, 1)
        oval.resize_height(-10)
        assert oval.bounds()[3] == MIN_REGION_SIZE


class TestPolygonRegion:
    """Tests for PolygonRegion."""

    def test_bounds(self):
        """Test bounds of the vertex list."""
        tri = PolygonRegion([(0, 20), (40, 20), (20, 0)])
        assert tri.bounds() == (0, 0, 40, 20)

    def test_contains_even_odd(self):
        """Test hit testing inside and outside a triangle."""
        tri = PolygonRegion([(0, 20), (40, 20), (20, 0)])
        assert tri.contains(20, 15)
        assert not tri.contains(2, 2)

    def test_resize_scales_from_left_edge(self):
        """Test that width resizing keeps the left edge fixed."""
        tri = PolygonRegion([(10, 20), (50, 20), (30, 0)])
        tri.resize_width(4)
        x, _, w, _ = tri.bounds()
        assert x == pytest.approx(10)
        assert w == pytest.approx(44)

    def test_resize_floor(self):
        """Test that polygons cannot collapse or invert."""
        tri = PolygonRegion([(0, 2), (2, 2), (1, 0)])
        for _ in range(5):
            tri.resize_width(-1)
            tri.resize_height(-1)
        _, _, w, h = tri.bounds()
        assert w == pytest.approx(MIN_REGION_SIZE)
        assert h == pytest.approx(MIN_REGION_SIZE)

    def test_shrink_never_grows_narrow_polygon(self):
        """Test shrinking a polygon already below the minimum size."""
        sliver = PolygonRegion([(0, 0), (0.4, 5), (0.2, 10)])
        sliver.resize_width(-1)
        sliver.resize_height(-20)
        _, _, w, h = sliver.bounds()
        assert w == pytest.approx(0.4)
        assert h == pytest.approx(MIN_REGION_SIZE)

    def test_grow_narrow_polygon(self):
        """Test growing a sub-minimum polygon still widens it."""
        sliver = PolygonRegion([(0, 0), (0.4, 5), (0.2, 10)])
        sliver.resize_width(1)
        assert sliver.bounds()[2] == pytest.approx(1.4)

    def test_flat_polygon_resize_is_noop(self):
        """Test that a polygon with no height cannot be scaled vertically."""
        line = PolygonRegion([(0, 5), (10, 5), (20, 5)])
        line.resize_height(3)
        assert line.bounds()[3] == 0

    def test_points_are_copied(self):
        """Test that the points property does not alias internal state."""
        tri = PolygonRegion([(0, 0), (1, 0), (0, 1)])
        tri.points.append((9, 9))
        assert len(tri.points) == 3


class TestImageRegion:
    """Tests for ImageRegion."""

    def test_geometry_and_frame(self):
        """Test image bounds and the displayed frame."""
        image = ImageRegion(5, 5, "popper.gif", 30, 20)
        image.set_image("frame0")
        assert image.bounds() == (5, 5, 30, 20)
        assert image.image == "frame0"
        assert image.animation is None

    def test_resize_floor(self):
        """Test image resizing respects the minimum size."""
        image = ImageRegion(0, 0, "popper.gif", 3, 3)
        image.resize_width(-10)
        assert image.width == MIN_REGION_SIZE


class TestExport:
    """Tests for dictionary export."""

    def test_rectangle_to_dict(self):
        """Test exported fields of a rectangle."""
        rect = RectangleRegion(1, 2, 3, 4, fill=COLOR_TABLE["red"])
        rect.set_tags({"points": "10"})
        d = rect.to_dict()
        assert d["type"] == RegionType.RECTANGLE.value
        assert d["geometry"] == {"x": 1, "y": 2, "width": 3, "height": 4}
        assert d["fill"] == "#ff0000"
        assert d["tags"] == {"points": "10"}
        assert d["id"] == rect.id

    def test_image_to_dict_has_file(self):
        """Test that images export their source file."""
        d = ImageRegion(0, 0, "popper.gif", 10, 10).to_dict()
        assert d["type"] == "image"
        assert d["image_file"] == "popper.gif"
        assert d["fill"] is None

    def test_ids_are_unique(self):
        """Test that each region gets its own ID."""
        ids = {RectangleRegion(0, 0, 1, 1).id for _ in range(50)}
        assert len(ids) == 50
