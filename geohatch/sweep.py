"""
Corridor projection and the chord sweep.

The polygon is measured along the axis perpendicular to the hatch bearing,
then candidate chords are laid across that corridor at a fixed spacing.
"""

from typing import Iterator, Sequence
import logging
import math

from .base import GeoPoint, Chord, Corridor
from .constants import LARGE_SPAN, MAX_CHORDS, CHORD_SPAN_FACTOR, CHORD_SPAN_PADDING
from .geodesy import Ellipsoid
from .utils import normalize_angle, perpendicular_bearing

logger = logging.getLogger(__name__)


def project_polygon_onto_axis(
    polygon: Sequence[GeoPoint],
    main_bearing: float,
    ellipsoid: Ellipsoid
) -> Corridor:
    """
    Project a polygon onto the axis perpendicular to the hatch bearing.

    The axis starts at the first vertex. Every other vertex is projected
    using its true geodesic distance and bearing from that origin.

    Args:
        polygon: Outer ring
        main_bearing: Hatch bearing in degrees
        ellipsoid: Ellipsoid for the distance measurements

    Returns:
        Corridor with the extreme projections and the axis it was measured on

    Raises:
        ValueError: If the polygon is empty
    """
    if len(polygon) == 0:
        raise ValueError("Polygon cannot be empty for projection range calculation")

    axis_origin = polygon[0]
    axis_bearing = perpendicular_bearing(main_bearing, 'right')

    # The origin projects to 0 on its own axis
    min_projection = 0.0
    max_projection = 0.0

    for vertex in polygon[1:]:
        projected = 0.0
        result = ellipsoid.inverse(axis_origin, vertex)
        if result is not None:
            angle_diff = math.radians(normalize_angle(result.initial_bearing - axis_bearing))
            projected = result.distance * math.cos(angle_diff)

        min_projection = min(min_projection, projected)
        max_projection = max(max_projection, projected)

    return Corridor(
        min_projection=min_projection,
        max_projection=max_projection,
        axis_origin=axis_origin,
        axis_bearing=axis_bearing,
    )


def chord_half_span(
    polygon: Sequence[GeoPoint],
    corridor: Corridor,
    offset: float,
    ellipsoid: Ellipsoid,
    limit: float = LARGE_SPAN
) -> float:
    """
    Half-length that lets every chord of the sweep cross the whole polygon.

    A chord centered on the axis at position p is never farther than |p| from
    the axis origin, and no vertex is farther than its own distance from that
    origin, so their sum bounds the reach from any chord center to the
    polygon. The reach is scaled, padded and capped at ``limit``.

    Args:
        polygon: Outer ring
        corridor: Corridor from project_polygon_onto_axis
        offset: Offset that widens the sweep on both sides
        ellipsoid: Ellipsoid for the distance measurements
        limit: Largest half-length allowed

    Returns:
        Half-length in meters
    """
    vertex_reach = 0.0
    for vertex in polygon:
        result = ellipsoid.inverse(corridor.axis_origin, vertex)
        if result is not None:
            vertex_reach = max(vertex_reach, result.distance)

    axis_reach = max(abs(corridor.min_projection), abs(corridor.max_projection)) + abs(offset)
    span = (vertex_reach + axis_reach) * CHORD_SPAN_FACTOR + CHORD_SPAN_PADDING
    return min(limit, span)


def sweep_positions(
    corridor: Corridor,
    step: float,
    offset: float,
    max_lines: int = MAX_CHORDS
) -> Iterator[float]:
    """
    Distances along the corridor axis at which chords are placed.

    Runs from ``min_projection - offset`` to ``max_projection + offset``
    inclusive. A non-positive step yields only the start position. The sweep
    stops after ``max_lines`` positions and logs a warning if more remained.
    """
    start = corridor.min_projection - offset
    end = corridor.max_projection + offset

    if start > end:
        return

    if step <= 0:
        yield start
        return

    count = 0
    position = start
    while position <= end:
        if count >= max_lines:
            logger.warning(
                "Sweep exceeded %d hatch lines, truncating at %.1f m of %.1f m",
                max_lines, position - start, end - start
            )
            return
        yield position
        count += 1
        position = start + count * step


def generate_chords(
    corridor: Corridor,
    main_bearing: float,
    step: float,
    offset: float,
    ellipsoid: Ellipsoid,
    span: float = LARGE_SPAN,
    max_lines: int = MAX_CHORDS
) -> Iterator[Chord]:
    """
    Generate full-span candidate chords across the corridor.

    Each chord passes through a point on the corridor axis and runs ``span``
    meters along the hatch bearing and ``span`` meters along its reverse.
    The generator is lazy; calling it again restarts the sweep.

    Args:
        corridor: Corridor from project_polygon_onto_axis
        main_bearing: Hatch bearing in degrees
        step: Spacing between chords in meters
        offset: Extra distance swept beyond each side of the corridor
        ellipsoid: Ellipsoid for the direct geodesic solutions
        span: Half-length of each chord in meters
        max_lines: Ceiling on the number of chords

    Yields:
        Chord objects in sweep order
    """
    reverse_bearing = normalize_angle(main_bearing + 180.0)

    for index, position in enumerate(sweep_positions(corridor, step, offset, max_lines)):
        axis_point = ellipsoid.direct(corridor.axis_origin, corridor.axis_bearing, position)
        start = ellipsoid.direct(axis_point, main_bearing, span)
        end = ellipsoid.direct(axis_point, reverse_bearing, span)
        yield Chord(start=start, end=end, index=index, projection=position)