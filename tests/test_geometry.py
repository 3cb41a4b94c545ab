"""Tests for vector math and footprint geometry."""

import math

import numpy as np
import pytest

from settlefit.geometry.footprints import (
    boundary_points,
    connector_endpoints,
    footprint_polygon,
    pairwise_distances,
)
from settlefit.geometry.vectors import (
    direction_of,
    distance,
    local_to_world,
    midpoint,
    normalize_facing,
    offset_point,
)


class TestNormalizeFacing:
    """Test facing normalization."""

    @pytest.mark.parametrize("facing", [0.0, 45.0, 359.9, -10.0, 725.0, -720.5])
    def test_adding_full_turn_is_idempotent(self, facing):
        """normalize(f + 360) == normalize(f)."""
        assert normalize_facing(facing + 360.0) == pytest.approx(normalize_facing(facing))

    @pytest.mark.parametrize(
        "facing,expected",
        [(360.0, 0.0), (-90.0, 270.0), (450.0, 90.0), (0.0, 0.0)],
    )
    def test_wraps_into_range(self, facing, expected):
        """Angles wrap into [0, 360)."""
        assert normalize_facing(facing) == pytest.approx(expected)

    def test_tiny_negative_stays_below_360(self):
        """Rounding never yields exactly 360."""
        result = normalize_facing(-1e-17)
        assert 0.0 <= result < 360.0


class TestDirections:
    """Test direction/offset conventions."""

    @pytest.mark.parametrize(
        "target,expected",
        [((0, 1), 0.0), ((-1, 0), 90.0), ((0, -1), 180.0), ((1, 0), 270.0)],
    )
    def test_direction_of_cardinals(self, target, expected):
        """Facing 0 points along +y and angles turn counter-clockwise."""
        assert direction_of((0.0, 0.0), target) == pytest.approx(expected)

    @pytest.mark.parametrize("angle", [0.0, 30.0, 135.0, 200.0, 315.0])
    def test_offset_point_inverts_direction_of(self, angle):
        """direction_of(p, offset_point(p, a, d)) == a."""
        origin = (3.0, -4.0)
        moved = offset_point(origin, angle, 7.5)
        assert distance(origin, moved) == pytest.approx(7.5)
        assert direction_of(origin, moved) == pytest.approx(angle)

    def test_midpoint(self):
        assert midpoint((0.0, 0.0), (4.0, -2.0)) == (2.0, -1.0)

    def test_local_to_world_rotates_then_translates(self):
        """Local front point of a building facing 90 lies on its -x side."""
        x, y = local_to_world(0.0, 5.0, (10.0, 10.0), 90.0)
        assert x == pytest.approx(5.0)
        assert y == pytest.approx(10.0)


class TestFootprints:
    """Test rotated rectangle footprints."""

    def test_axis_aligned_bounds(self):
        poly = footprint_polygon(0.0, 0.0, 4.0, 10.0)
        assert poly.bounds == pytest.approx((-2.0, -5.0, 2.0, 5.0))
        assert poly.area == pytest.approx(40.0)

    def test_quarter_turn_swaps_extent(self):
        """Facing 90 puts the length along the x-axis."""
        poly = footprint_polygon(1.0, 1.0, 4.0, 10.0, 90.0)
        assert poly.bounds == pytest.approx((-4.0, -1.0, 6.0, 3.0))

    def test_rotation_preserves_area(self):
        poly = footprint_polygon(0.0, 0.0, 3.0, 7.0, 33.0)
        assert poly.area == pytest.approx(21.0)

    def test_connector_endpoints(self):
        """End points lie half a length from center along the facing."""
        back, front = connector_endpoints(15.0, 0.0, 19.8, 270.0)
        assert front == pytest.approx((24.9, 0.0))
        assert back == pytest.approx((5.1, 0.0))


class TestBoundaryPoints:
    """Test side point sampling."""

    def test_order_front_back_right_left(self):
        points = boundary_points((0.0, 0.0), 10.0, 10.0, 0.0, 0.1)
        expected = np.array([[0.0, 5.1], [0.0, -5.1], [-5.1, 0.0], [5.1, 0.0]])
        np.testing.assert_allclose(points, expected, atol=1e-12)

    def test_rotated_and_translated(self):
        points = boundary_points((10.0, 20.0), 4.0, 8.0, 90.0, 0.5)
        # front (0, 4.5) -> (-4.5, 0); right (-2.5, 0) -> (0, -2.5)
        np.testing.assert_allclose(points[0], [5.5, 20.0], atol=1e-9)
        np.testing.assert_allclose(points[2], [10.0, 17.5], atol=1e-9)

    def test_pairwise_distances(self):
        a = np.array([[0.0, 0.0], [1.0, 0.0]])
        b = np.array([[0.0, 3.0], [4.0, 0.0], [1.0, 1.0]])
        d = pairwise_distances(a, b)
        assert d.shape == (2, 3)
        assert d[0, 0] == pytest.approx(3.0)
        assert d[1, 1] == pytest.approx(3.0)
        assert d[0, 2] == pytest.approx(math.sqrt(2.0))
