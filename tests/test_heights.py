"""Tests for edge height rules."""

import pytest

from hexterrain.hexgrid.coordinate import Direction
from hexterrain.mesh import heights as rules
from hexterrain.mesh.heights import Relation


class TestRelation:
    def test_compare(self):
        assert rules.compare(2, 1) is Relation.HIGHER
        assert rules.compare(1, 2) is Relation.LOWER
        assert rules.compare(1, 1) is Relation.EQUAL


class TestEdgeHeights:
    """Test the height rules of the sloped skirt."""

    def test_level_neighbours_are_flat(self):
        assert rules.inner_edge_heights(2, 2) == (1.0, 1.0)
        assert rules.outer_edge_heights(2, 2) == (1.0, 1.0, 1.0)
        assert rules.inner_corner_heights(2, 2, 2) == (1.0, 1.0, 1.0, 1.0)
        assert rules.outer_corner_heights(2, 2, 2) == (1.0, 1.0, 1.0, 1.0)
        assert rules.outer_edge_end_heights(2, 2, 2) == (1.0, 1.0, 1.0)

    def test_slope_down(self):
        assert rules.inner_edge_heights(1, 0) == (0.5, 0.0)
        assert rules.outer_edge_heights(1, 0) == (0.0, -0.5, -1.0)

    def test_slope_up(self):
        assert rules.inner_edge_heights(0, 1) == (1.5, 2.0)
        assert rules.outer_edge_heights(0, 1) == (2.0, 2.5, 3.0)

    @pytest.mark.parametrize("low,high", [(0, 1), (-2, -1), (3, 4)])
    def test_seam_meets_in_the_middle(self, low, high):
        # The outer row of both tiles lands on the same world height.
        level = 4.0
        lower_top = low * level + rules.outer_edge_heights(low, high)[2]
        upper_top = high * level + rules.outer_edge_heights(high, low)[2]
        assert lower_top == upper_top

    def test_edge_end_follows_flank_only_when_level(self):
        assert rules.outer_edge_end_heights(1, 1, 0) == (0.0, 0.5, 0.0)
        assert rules.outer_edge_end_heights(1, 1, 2) == (2.0, 1.5, 2.0)
        assert rules.outer_edge_end_heights(1, 0, 2) == rules.outer_edge_heights(1, 0)

    def test_outer_corner(self):
        assert rules.outer_corner_heights(0, 1, 0) == (2.0, 3.0, 2.5, 3.0)
        assert rules.outer_corner_heights(1, 1, 2) == (2.0, 2.0, 2.5, 3.0)
        assert rules.outer_corner_heights(2, 1, 0) == (-4.0, -4.0, -4.5, -5.0)
        assert rules.outer_corner_heights(2, 1, 1) == (0.0, -1.0, -0.5, -1.0)
        assert rules.outer_corner_heights(2, 2, 1) == (0.0, 0.0, -0.5, -1.0)


class TestWallRules:
    """Test how many wall rings fill a gap."""

    @pytest.mark.parametrize("gap,rings", [(0, 0), (1, 0), (2, 1), (5, 4)])
    def test_center_wall_rings(self, gap, rings):
        assert rules.center_wall_rings(gap, 0) == rings
        assert rules.center_wall_rings(0, gap) == 0

    def test_side_wall_rings(self):
        assert rules.side_wall_rings(3, 3, 0) == 2
        assert rules.side_wall_rings(3, 1, 0) == 0
        assert rules.side_wall_rings(4, 3, 0) == 2
        assert rules.side_wall_top(4, 3) == -4.0
        assert rules.side_wall_top(3, 3) == 0.0

    def test_corner_walls(self):
        assert rules.has_steep_corner_wall(3, 1, 0)
        assert not rules.has_steep_corner_wall(3, 0, 0)
        assert rules.has_ledge_corner_wall(1, 3, 0)
        assert not rules.has_ledge_corner_wall(0, 3, 0)

    def test_ring_profile(self):
        assert rules.ring_profile(0.0) == (0.0, -0.5, -2.0, -3.5, -4.0)
        assert rules.ring_profile(-4.0, wall_edge_width=1.0) == (-4.0, -5.0, -6.0, -7.0, -8.0)

    def test_flank_directions(self):
        assert rules.flank_directions(Direction.RIGHT) == (
            Direction.TOP_RIGHT,
            Direction.BOTTOM_RIGHT,
        )
