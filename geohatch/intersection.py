"""
Geodesic arc membership and arc/arc intersection.

Two arcs are intersected through plane geometry in ECEF space: each arc
spans a plane through the center of the ellipsoid, the planes meet in a
line through the center, and that line pierces the surface at two
antipodal candidates. A candidate counts only if it lies on both arcs.
"""

from typing import List
import logging

import numpy as np

from .base import GeoPoint
from .constants import GEO_TOLERANCE, ARC_DISTANCE_TOLERANCE, COPLANAR_TOLERANCE
from .geodesy import Ellipsoid
from .utils import dedupe_points

logger = logging.getLogger(__name__)


def is_point_on_geodesic_arc(
    point: GeoPoint,
    arc_start: GeoPoint,
    arc_end: GeoPoint,
    ellipsoid: Ellipsoid,
    tolerance: float = ARC_DISTANCE_TOLERANCE
) -> bool:
    """
    Check whether ``point`` lies on the geodesic arc from ``arc_start`` to ``arc_end``.

    On the arc, d(start, point) + d(point, end) equals d(start, end); anywhere
    else the sum is strictly larger.

    Args:
        point: Point to test
        arc_start: Start of the arc
        arc_end: End of the arc
        ellipsoid: Ellipsoid used to measure distances
        tolerance: Allowed excess of the distance sum in meters

    Returns:
        True if the point is on the arc, endpoints included
    """
    if point.equals(arc_start, GEO_TOLERANCE) or point.equals(arc_end, GEO_TOLERANCE):
        return True

    if arc_start.equals(arc_end, GEO_TOLERANCE):
        return False

    to_point = ellipsoid.inverse(arc_start, point)
    from_point = ellipsoid.inverse(point, arc_end)
    whole = ellipsoid.inverse(arc_start, arc_end)
    if to_point is None or from_point is None or whole is None:
        return False

    excess = to_point.distance + from_point.distance - whole.distance
    return abs(excess) <= tolerance


def _is_degenerate(vector: np.ndarray, scale: float) -> bool:
    return np.linalg.norm(vector) <= COPLANAR_TOLERANCE * scale


def _collinear_overlap(
    p1: GeoPoint, q1: GeoPoint,
    p2: GeoPoint, q2: GeoPoint,
    ellipsoid: Ellipsoid,
    first_tolerance: float,
    second_tolerance: float
) -> List[GeoPoint]:
    """Shared endpoints of two arcs lying on the same great circle."""
    overlap = []
    if is_point_on_geodesic_arc(p1, p2, q2, ellipsoid, second_tolerance):
        overlap.append(p1)
    if is_point_on_geodesic_arc(q1, p2, q2, ellipsoid, second_tolerance):
        overlap.append(q1)
    if is_point_on_geodesic_arc(p2, p1, q1, ellipsoid, first_tolerance):
        overlap.append(p2)
    if is_point_on_geodesic_arc(q2, p1, q1, ellipsoid, first_tolerance):
        overlap.append(q2)
    return dedupe_points(overlap, GEO_TOLERANCE)


def geodesic_segments_intersection(
    p1: GeoPoint, q1: GeoPoint,
    p2: GeoPoint, q2: GeoPoint,
    ellipsoid: Ellipsoid,
    first_tolerance: float = ARC_DISTANCE_TOLERANCE,
    second_tolerance: float = ARC_DISTANCE_TOLERANCE
) -> List[GeoPoint]:
    """
    Find the intersection point(s) of the arcs p1-q1 and p2-q2.

    Args:
        p1, q1: Endpoints of the first arc
        p2, q2: Endpoints of the second arc
        ellipsoid: Ellipsoid the arcs live on
        first_tolerance: Arc membership slack in meters for the first arc
        second_tolerance: Arc membership slack in meters for the second arc

    Returns:
        Zero, one or two points. Two points only occur when the arcs overlap
        along a shared great circle, in which case the ends of the overlap
        are returned. Arcs whose endpoints are coincident or antipodal do not
        define a plane and yield no points.
    """
    p1_cart = ellipsoid.point_to_cartesian(p1)
    q1_cart = ellipsoid.point_to_cartesian(q1)
    p2_cart = ellipsoid.point_to_cartesian(p2)
    q2_cart = ellipsoid.point_to_cartesian(q2)

    n1 = np.cross(p1_cart, q1_cart)
    n2 = np.cross(p2_cart, q2_cart)

    if _is_degenerate(n1, np.linalg.norm(p1_cart) * np.linalg.norm(q1_cart)) or \
            _is_degenerate(n2, np.linalg.norm(p2_cart) * np.linalg.norm(q2_cart)):
        logger.debug("Degenerate arc, no plane through the center")
        return []

    n1 = n1 / np.linalg.norm(n1)
    n2 = n2 / np.linalg.norm(n2)

    direction = np.cross(n1, n2)
    if _is_degenerate(direction, 1.0):
        return _collinear_overlap(p1, q1, p2, q2, ellipsoid, first_tolerance, second_tolerance)

    direction = direction / np.linalg.norm(direction)

    piercing = ellipsoid.surface_point(direction)
    if piercing is None:
        return []

    intersections: List[GeoPoint] = []
    for candidate_cart in (piercing, -piercing):
        candidate = ellipsoid.cartesian_to_geodetic(candidate_cart)
        if is_point_on_geodesic_arc(candidate, p1, q1, ellipsoid, first_tolerance) and \
                is_point_on_geodesic_arc(candidate, p2, q2, ellipsoid, second_tolerance):
            intersections.append(GeoPoint(candidate.lon, candidate.lat))

    return dedupe_points(intersections, GEO_TOLERANCE)
