"""Tests for geographic utility functions."""

import pytest

from utils.geo_utils import (
    angle_difference,
    aspect_to_degrees,
    degrees_to_aspect,
    find_known_area,
)


class TestAspectConversion:
    """Test cases for aspect and bearing conversion."""

    @pytest.mark.parametrize(
        "aspect,degrees",
        [("N", 0), ("NE", 45), ("E", 90), ("SE", 135), ("S", 180), ("SW", 225), ("W", 270), ("NW", 315)],
    )
    def test_aspect_to_degrees(self, aspect, degrees):
        """Test each compass aspect maps to its bearing."""
        assert aspect_to_degrees(aspect) == degrees

    def test_aspect_is_case_insensitive(self):
        assert aspect_to_degrees("sw") == 225

    def test_unknown_aspect_defaults_to_south(self):
        """Test that unrecognized aspects fall back to south."""
        assert aspect_to_degrees("UP") == 180

    @pytest.mark.parametrize(
        "degrees,aspect",
        [(0, "N"), (350, "N"), (22.4, "N"), (22.6, "NE"), (200, "S"), (-45, "NW"), (720 + 90, "E")],
    )
    def test_degrees_to_aspect(self, degrees, aspect):
        """Test bearings snap to the nearest 45 degree sector."""
        assert degrees_to_aspect(degrees) == aspect


class TestAngleDifference:
    """Test cases for angle_difference."""

    def test_wraps_around_north(self):
        assert angle_difference(350, 10) == 20

    def test_opposite_directions(self):
        assert angle_difference(0, 180) == 180
        assert angle_difference(90, 270) == 180

    def test_is_symmetric(self):
        assert angle_difference(30, 100) == angle_difference(100, 30) == 70


class TestFindKnownArea:
    """Test cases for known climbing area lookup."""

    def test_inside_area(self):
        name, coverage = find_known_area(34.0, -116.2)
        assert name == "Joshua Tree"
        assert coverage == 3

    def test_outside_all_areas(self):
        assert find_known_area(0.0, 0.0) is None
