"""
Unit tests for region presets.

Tests:
- Tool-to-region factory for each shape tool
- Silhouette scaling
"""

import pytest
from models.interaction import Tool
from models.region_presets import (
    DEFAULT_DIM, SILHOUETTE_SCALE, APPLESEED_THREE, APPLESEED_FOUR,
    APPLESEED_FIVE, silhouette_points, create_region_for_tool,
)
from models.target_region import (
    COLOR_TABLE, RectangleRegion, EllipseRegion, PolygonRegion,
)


class TestCreateRegionForTool:
    """Tests for create_region_for_tool."""

    def test_rectangle_top_left_at_drop_point(self):
        """Test the rectangle preset is anchored at its top-left."""
        region = create_region_for_tool(Tool.RECTANGLE, 100, 50)
        assert isinstance(region, RectangleRegion)
        assert region.bounds() == (100, 50, DEFAULT_DIM, DEFAULT_DIM)

    def test_oval(self):
        """Test the oval preset fills the default square."""
        region = create_region_for_tool(Tool.OVAL, 10, 10)
        assert isinstance(region, EllipseRegion)
        assert region.bounds() == (10, 10, DEFAULT_DIM, DEFAULT_DIM)
        assert region.center() == (30, 30)

    def test_triangle(self):
        """Test the triangle preset vertices."""
        region = create_region_for_tool(Tool.TRIANGLE, 0, 0)
        assert isinstance(region, PolygonRegion)
        assert region.points == [(0, 20), (40, 20), (20, 0)]

    @pytest.mark.parametrize("tool,table", [
        (Tool.APPLESEED_THREE, APPLESEED_THREE),
        (Tool.APPLESEED_FOUR, APPLESEED_FOUR),
        (Tool.APPLESEED_FIVE, APPLESEED_FIVE),
    ])
    def test_silhouettes(self, tool, table):
        """Test silhouettes use their scaled offset tables."""
        region = create_region_for_tool(tool, 200, 200)
        assert isinstance(region, PolygonRegion)
        assert len(region.points) == len(table)
        assert region.points[0] == pytest.approx(
            (200 + table[0][0] * SILHOUETTE_SCALE, 200 + table[0][1] * SILHOUETTE_SCALE))

    @pytest.mark.parametrize("tool", [Tool.CURSOR, Tool.IMAGE, Tool.FREEFORM])
    def test_tools_without_preset(self, tool):
        """Test that non-shape tools produce nothing."""
        assert create_region_for_tool(tool, 0, 0) is None

    def test_fill_and_opacity(self):
        """Test that the fill and opacity are applied."""
        region = create_region_for_tool(Tool.RECTANGLE, 0, 0,
                                        fill=COLOR_TABLE["blue"], opacity=0.5)
        assert region.fill == "#0000ff"
        assert region.opacity == 0.5

    def test_custom_dimension(self):
        """Test a configured default dimension."""
        region = create_region_for_tool(Tool.RECTANGLE, 0, 0, default_dim=60)
        assert region.bounds() == (0, 0, 60, 60)


class TestSilhouettePoints:
    """Tests for silhouette_points."""

    def test_scale_and_translate(self):
        """Test offsets are scaled then translated."""
        points = silhouette_points([(1, -2), (0, 4)], 10, 20, scale=2)
        assert points == [(12, 16), (10, 28)]
