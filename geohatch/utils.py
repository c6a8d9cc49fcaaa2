"""
Utility functions for hatching operations.
"""

from typing import List, Tuple, Optional, Sequence, Union, Iterable
import math

from shapely.geometry import Polygon, LineString, Point

from .base import GeoPoint
from .constants import GEO_TOLERANCE, PLANAR_TOLERANCE


def normalize_angle(angle: float) -> float:
    """
    Fold an angle into [0, 360) degrees.

    Args:
        angle: Angle in degrees, any real value

    Returns:
        Equivalent angle in [0, 360)
    """
    normalized = math.fmod(angle, 360.0)
    if normalized < 0:
        normalized += 360.0
    # fmod of a tiny negative number can round up to exactly 360
    if normalized >= 360.0:
        normalized -= 360.0
    return normalized


def perpendicular_bearing(base_bearing: float, direction: str = 'right') -> float:
    """
    Bearing perpendicular to ``base_bearing``.

    Args:
        base_bearing: Bearing in degrees
        direction: 'right' (clockwise) or 'left' (counter-clockwise)

    Returns:
        Perpendicular bearing in [0, 360)
    """
    if direction == 'right':
        return normalize_angle(base_bearing + 90.0)
    if direction == 'left':
        return normalize_angle(base_bearing - 90.0)
    raise ValueError(f"direction must be 'left' or 'right', got {direction!r}")


def as_geopoint(point: Union[GeoPoint, Sequence[float]]) -> GeoPoint:
    if isinstance(point, GeoPoint):
        return point
    return GeoPoint.from_sequence(point)


def as_geopoints(ring: Iterable[Union[GeoPoint, Sequence[float]]]) -> List[GeoPoint]:
    """Convert a ring of GeoPoints or (lon, lat[, height]) sequences to GeoPoints."""
    return [as_geopoint(p) for p in ring]


def get_bounding_box(points: Sequence[GeoPoint]) -> Tuple[float, float, float, float]:
    """
    Calculate the lon/lat bounding box of a set of points.

    Args:
        points: Points to bound

    Returns:
        Tuple of (min_lon, min_lat, max_lon, max_lat); an empty input gives
        an inverted box of infinities
    """
    if not points:
        return (math.inf, math.inf, -math.inf, -math.inf)

    lons = [p.lon for p in points]
    lats = [p.lat for p in points]

    return (min(lons), min(lats), max(lons), max(lats))


def create_polygon_from_ring(ring: Sequence[GeoPoint]) -> Optional[Polygon]:
    """
    Create a Shapely Polygon in the lon/lat plane from an outer ring.

    Args:
        ring: Outer ring, implicitly closed

    Returns:
        Shapely Polygon object, or None if the ring has fewer than 3 vertices
    """
    if len(ring) < 3:
        return None
    return Polygon([p.to_tuple() for p in ring])


def is_point_in_polygon(point: GeoPoint, polygon: Union[Polygon, Sequence[GeoPoint]]) -> bool:
    """
    Planar containment test on (lon, lat) pairs.

    Polygon edges are treated as straight lines in the lon/lat plane, which
    holds while the polygon is small enough that curvature is negligible at
    hatching resolution. Points on an edge or vertex count as outside.

    Args:
        point: Point to test
        polygon: Shapely Polygon or ring of GeoPoints

    Returns:
        True if the point is strictly inside
    """
    if not isinstance(polygon, Polygon):
        polygon = create_polygon_from_ring(as_geopoints(polygon))
        if polygon is None:
            return False

    candidate = Point(point.lon, point.lat)
    if polygon.exterior.distance(candidate) <= PLANAR_TOLERANCE:
        return False
    return polygon.contains(candidate)


def dedupe_points(points: Iterable[GeoPoint], tolerance: float = GEO_TOLERANCE) -> List[GeoPoint]:
    """Drop points that match an earlier point within ``tolerance`` degrees."""
    unique: List[GeoPoint] = []
    for point in points:
        if not any(u.equals(point, tolerance) for u in unique):
            unique.append(point)
    return unique


def planar_squared_distance(p1: GeoPoint, p2: GeoPoint) -> float:
    """Squared distance between two points treated as (lon, lat) plane coordinates."""
    return (p1.lon - p2.lon) ** 2 + (p1.lat - p2.lat) ** 2


def planar_midpoint(p1: GeoPoint, p2: GeoPoint) -> GeoPoint:
    return GeoPoint((p1.lon + p2.lon) / 2, (p1.lat + p2.lat) / 2)


def clip_line_to_polygon(
    line_start: Tuple[float, float],
    line_end: Tuple[float, float],
    polygon: Polygon
) -> List[Tuple[Tuple[float, float], Tuple[float, float]]]:
    """
    Clip a line segment to a polygon in the plane.

    Args:
        line_start: Starting point of the line (x, y)
        line_end: Ending point of the line (x, y)
        polygon: Shapely Polygon to clip against

    Returns:
        List of line segments (start, end) that overlap the polygon, ordered
        from ``line_start`` towards ``line_end``
    """
    line = LineString([line_start, line_end])
    intersection = line.intersection(polygon)

    if intersection.is_empty:
        return []

    if intersection.geom_type == 'LineString':
        pieces = [intersection]
    elif intersection.geom_type in ('MultiLineString', 'GeometryCollection'):
        pieces = [g for g in intersection.geoms if g.geom_type == 'LineString']
    else:
        # Point or MultiPoint, the line only touches the boundary
        return []

    segments = []
    for piece in pieces:
        coords = list(piece.coords)
        if len(coords) >= 2:
            segments.append((coords[0], coords[-1]))

    segments.sort(key=lambda seg: line.project(Point(seg[0])))
    return segments
