"""
Tests for geodesic arc membership and arc/arc intersection.

Run with: python -m pytest geohatch/test_intersection.py
"""

import pytest

from geohatch.base import GeoPoint
from geohatch.geodesy import Ellipsoid
from geohatch.intersection import is_point_on_geodesic_arc, geodesic_segments_intersection


@pytest.fixture(scope="module")
def ellipsoid():
    return Ellipsoid.wgs84()


def _matches(points, expected, tolerance=1e-6):
    """True if both lists hold the same points in any order."""
    if len(points) != len(expected):
        return False
    return all(any(p.equals(e, tolerance) for p in points) for e in expected)


class TestArcMembership:

    def test_endpoints(self, ellipsoid):
        a, b = GeoPoint(0, 0), GeoPoint(10, 0)
        assert is_point_on_geodesic_arc(a, a, b, ellipsoid)
        assert is_point_on_geodesic_arc(b, a, b, ellipsoid)

    def test_interior_point(self, ellipsoid):
        assert is_point_on_geodesic_arc(GeoPoint(5, 0), GeoPoint(0, 0), GeoPoint(10, 0), ellipsoid)
        assert is_point_on_geodesic_arc(GeoPoint(0, 45), GeoPoint(0, 10), GeoPoint(0, 80), ellipsoid)

    def test_point_beyond_end(self, ellipsoid):
        assert not is_point_on_geodesic_arc(GeoPoint(11, 0), GeoPoint(0, 0), GeoPoint(10, 0), ellipsoid)
        assert not is_point_on_geodesic_arc(GeoPoint(-1, 0), GeoPoint(0, 0), GeoPoint(10, 0), ellipsoid)

    def test_point_off_arc(self, ellipsoid):
        assert not is_point_on_geodesic_arc(GeoPoint(5, 0.01), GeoPoint(0, 0), GeoPoint(10, 0), ellipsoid)

    def test_degenerate_arc(self, ellipsoid):
        a = GeoPoint(3, 4)
        assert is_point_on_geodesic_arc(a, a, a, ellipsoid)
        assert not is_point_on_geodesic_arc(GeoPoint(3, 5), a, a, ellipsoid)


class TestSegmentIntersection:

    def test_crossing_arcs(self, ellipsoid):
        """An equatorial arc and a meridian arc cross at a single point."""
        points = geodesic_segments_intersection(
            GeoPoint(0, 0), GeoPoint(10, 0),
            GeoPoint(5, -5), GeoPoint(5, 5),
            ellipsoid
        )
        assert _matches(points, [GeoPoint(5, 0)])

    def test_crossing_arcs_order_independent(self, ellipsoid):
        forward = geodesic_segments_intersection(
            GeoPoint(0, 0), GeoPoint(10, 0), GeoPoint(5, -5), GeoPoint(5, 5), ellipsoid
        )
        swapped = geodesic_segments_intersection(
            GeoPoint(5, 5), GeoPoint(5, -5), GeoPoint(10, 0), GeoPoint(0, 0), ellipsoid
        )
        assert _matches(forward, swapped)

    def test_disjoint_arcs(self, ellipsoid):
        points = geodesic_segments_intersection(
            GeoPoint(0, 0), GeoPoint(1, 0),
            GeoPoint(5, -1), GeoPoint(5, 1),
            ellipsoid
        )
        assert points == []

    def test_great_circle_crossing_outside_arcs(self, ellipsoid):
        """The planes meet, but beyond the end of the first arc."""
        points = geodesic_segments_intersection(
            GeoPoint(0, 0), GeoPoint(4, 0),
            GeoPoint(5, -5), GeoPoint(5, 5),
            ellipsoid
        )
        assert points == []

    def test_shared_endpoint(self, ellipsoid):
        points = geodesic_segments_intersection(
            GeoPoint(0, 0), GeoPoint(10, 0),
            GeoPoint(10, 0), GeoPoint(10, 10),
            ellipsoid
        )
        assert _matches(points, [GeoPoint(10, 0)])

    def test_collinear_overlap(self, ellipsoid):
        """Overlapping arcs on the equator return the ends of the overlap."""
        points = geodesic_segments_intersection(
            GeoPoint(0, 0), GeoPoint(10, 0),
            GeoPoint(5, 0), GeoPoint(15, 0),
            ellipsoid
        )
        assert _matches(points, [GeoPoint(5, 0), GeoPoint(10, 0)])

    def test_collinear_disjoint(self, ellipsoid):
        points = geodesic_segments_intersection(
            GeoPoint(0, 0), GeoPoint(4, 0),
            GeoPoint(5, 0), GeoPoint(15, 0),
            ellipsoid
        )
        assert points == []

    def test_degenerate_arc(self, ellipsoid):
        """A zero-length arc defines no plane."""
        points = geodesic_segments_intersection(
            GeoPoint(5, 0), GeoPoint(5, 0),
            GeoPoint(0, 0), GeoPoint(10, 0),
            ellipsoid
        )
        assert points == []

    def test_intersection_heights_dropped(self, ellipsoid):
        points = geodesic_segments_intersection(
            GeoPoint(0, 0), GeoPoint(10, 0),
            GeoPoint(5, -5), GeoPoint(5, 5),
            ellipsoid
        )
        assert all(p.height == 0.0 for p in points)

    def test_symmetric_cross_at_origin(self, ellipsoid):
        points = geodesic_segments_intersection(
            GeoPoint(-10, 0), GeoPoint(10, 0),
            GeoPoint(0, -10), GeoPoint(0, 10),
            ellipsoid
        )
        assert _matches(points, [GeoPoint(0, 0)])

    def test_long_collinear_overlap(self, ellipsoid):
        points = geodesic_segments_intersection(
            GeoPoint(0, 0), GeoPoint(20, 0),
            GeoPoint(10, 0), GeoPoint(30, 0),
            ellipsoid
        )
        assert _matches(points, [GeoPoint(10, 0), GeoPoint(20, 0)])

    def test_tolerance_admits_near_point(self, ellipsoid):
        """A point ~111 m off the equator overshoots the default slack but not a looser one."""
        near = GeoPoint(5, 0.001)
        assert not is_point_on_geodesic_arc(near, GeoPoint(0, 0), GeoPoint(10, 0), ellipsoid)
        assert is_point_on_geodesic_arc(near, GeoPoint(0, 0), GeoPoint(10, 0), ellipsoid, tolerance=0.1)

    def test_long_oblique_chord_with_relative_tolerance(self, ellipsoid):
        """A 600 km diagonal chord still cuts a short meridian edge."""
        center = GeoPoint(10.5, 45.5)
        start = ellipsoid.direct(center, 45.0, 300000)
        end = ellipsoid.direct(center, 225.0, 300000)

        points = geodesic_segments_intersection(
            start, end,
            GeoPoint(10.5, 45.0), GeoPoint(10.5, 46.0),
            ellipsoid,
            first_tolerance=6.0,
        )
        assert len(points) == 1
        assert points[0].lon == pytest.approx(10.5, abs=1e-6)
        assert points[0].lat == pytest.approx(45.5, abs=1e-3)
