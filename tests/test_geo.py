"""Tests for haversine distance."""

import math

import pytest
from hypothesis import given, strategies as st

from civicscan.geo import EARTH_RADIUS_METERS, distance_meters
from civicscan.model import Coordinate

latitudes = st.floats(min_value=-90, max_value=90, allow_nan=False)
longitudes = st.floats(min_value=-180, max_value=180, allow_nan=False)
coordinates = st.builds(Coordinate, latitude=latitudes, longitude=longitudes)


class TestDistanceMeters:
    def test_identical_points(self):
        point = Coordinate(12.9716, 77.5946)

        assert distance_meters(point, point) == 0

    def test_one_degree_of_latitude(self):
        """One degree along a meridian is R * pi / 180."""
        expected = EARTH_RADIUS_METERS * math.pi / 180

        assert distance_meters(Coordinate(0, 0), Coordinate(1, 0)) == pytest.approx(expected)

    def test_short_city_distance(self):
        """Roughly 30m apart in Bengaluru."""
        a = Coordinate(12.9716, 77.5946)
        b = Coordinate(12.97187, 77.5946)

        assert distance_meters(a, b) == pytest.approx(30.0, abs=0.5)

    def test_antipodal_points(self):
        """Half the circumference, without a math domain error."""
        distance = distance_meters(Coordinate(0, 0), Coordinate(0, 180))

        assert distance == pytest.approx(EARTH_RADIUS_METERS * math.pi)

    def test_nan_propagates(self):
        distance = distance_meters(Coordinate(float("nan"), 0), Coordinate(0, 0))

        assert math.isnan(distance)

    @pytest.mark.parametrize("bad", [float("inf"), float("-inf")])
    def test_infinite_components_give_nan(self, bad):
        """Infinite degrees yield NaN rather than a math domain error."""
        assert math.isnan(distance_meters(Coordinate(bad, 0), Coordinate(0, 0)))
        assert math.isnan(distance_meters(Coordinate(0, 0), Coordinate(0, bad)))

    @given(coordinates)
    def test_self_distance_is_zero(self, a):
        assert distance_meters(a, a) == 0

    @given(coordinates, coordinates)
    def test_symmetric_and_non_negative(self, a, b):
        forward = distance_meters(a, b)

        assert forward >= 0
        assert forward == pytest.approx(distance_meters(b, a))
        assert forward <= EARTH_RADIUS_METERS * math.pi + 1e-6
