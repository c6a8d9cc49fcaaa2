"""
Built-in hatching plugins.

GeodesicLineHatchingPlugin is the main engine: chords are swept across the
polygon as geodesics and cut against each edge on the ellipsoid.
PlanarLineHatchingPlugin works in the lon/lat plane and is only suitable
for small polygons away from the poles and the antimeridian.
"""

from typing import List, Optional, Sequence
import logging

from shapely.affinity import rotate as shapely_rotate
from shapely.geometry import LineString

from .base import (
    GeoPoint,
    Chord,
    HatchingPlugin,
    HatchingParameters,
    HatchLine,
    HatchingStrategy,
)
from .constants import DEDUPE_TOLERANCE, ARC_DISTANCE_TOLERANCE, CHORD_RELATIVE_TOLERANCE
from .geodesy import Ellipsoid
from .intersection import geodesic_segments_intersection
from .registry import registry
from .sweep import project_polygon_onto_axis, chord_half_span, generate_chords
from .utils import (
    as_geopoints,
    normalize_angle,
    create_polygon_from_ring,
    is_point_in_polygon,
    dedupe_points,
    planar_squared_distance,
    planar_midpoint,
    clip_line_to_polygon,
)

logger = logging.getLogger(__name__)


class GeodesicLineHatchingPlugin(HatchingPlugin):
    """
    Parallel geodesic line hatching.

    Sweeps chords across the corridor perpendicular to the hatch bearing,
    intersects each chord with every polygon edge, pairs the sorted
    intersections and keeps the pairs whose midpoint is inside the polygon.
    """

    def __init__(self):
        super().__init__()
        self._name = "Geodesic Line Hatching"
        self._description = "Parallel geodesic hatch lines trimmed to the polygon and inset by an offset"
        self._version = "1.0.0"

    def generate_hatching(
        self,
        polygon: Sequence,
        parameters: HatchingParameters,
        ellipsoid: Ellipsoid
    ) -> List[HatchLine]:
        """
        Generate geodesic hatch lines for a polygon.

        Args:
            polygon: Outer ring as GeoPoints or (lon, lat[, height]) sequences
            parameters: Hatching parameters
            ellipsoid: Ellipsoid for every geodesic computation

        Returns:
            HatchLines in sweep order, then pairing order along each chord

        Raises:
            ValueError: If no ellipsoid is supplied
        """
        if ellipsoid is None:
            raise ValueError("An ellipsoid is required for geodesic hatching")

        ring = as_geopoints(polygon) if polygon is not None else []
        if len(ring) < 3:
            logger.warning("Polygon has %d vertices, at least 3 are needed for hatching", len(ring))
            return []

        if not self.validate_parameters(parameters):
            logger.warning("Invalid hatching parameters: %s", parameters)
            return []

        bearing = parameters.bearing_degrees
        corridor = project_polygon_onto_axis(ring, bearing, ellipsoid)
        logger.debug(
            "Corridor from %.1f m to %.1f m along bearing %.2f",
            corridor.min_projection, corridor.max_projection, corridor.axis_bearing
        )

        span = chord_half_span(ring, corridor, parameters.offset_meters, ellipsoid, parameters.span_meters)
        # Chords are cut as plane sections, which drift off the geodesic as they grow
        chord_tolerance = max(ARC_DISTANCE_TOLERANCE, 2.0 * span * CHORD_RELATIVE_TOLERANCE)
        logger.debug("Chord half-length %.1f m, membership tolerance %.4f m", span, chord_tolerance)

        shape = create_polygon_from_ring(ring)
        chords = generate_chords(
            corridor,
            bearing,
            parameters.step_meters,
            parameters.offset_meters,
            ellipsoid,
            span=span,
            max_lines=parameters.max_lines,
        )

        hatch_lines = []
        chord_count = 0
        for chord in chords:
            chord_count += 1
            hatch_lines.extend(self._clip_chord(chord, ring, shape, parameters, ellipsoid, chord_tolerance))

        hatch_lines = self.orient_for_scanning(hatch_lines, parameters.bidirectional)

        prefix = (
            f"Geodesic hatching for polygon w/ {len(ring)} vertices "
            f"(B:{bearing}, S:{parameters.step_meters}, O:{parameters.offset_meters})"
        )
        if hatch_lines:
            logger.info("%s: generated %d lines from %d chords", prefix, len(hatch_lines), chord_count)
        else:
            logger.info("%s: no lines generated from %d chords", prefix, chord_count)

        return hatch_lines

    def find_chord_intersections(
        self,
        chord: Chord,
        ring: Sequence[GeoPoint],
        ellipsoid: Ellipsoid,
        tolerance: float = ARC_DISTANCE_TOLERANCE
    ) -> List[GeoPoint]:
        """
        Intersections of a chord with every polygon edge.

        Args:
            chord: Candidate chord
            ring: Outer ring
            ellipsoid: Ellipsoid the chord and edges live on
            tolerance: Arc membership slack in meters on the chord side

        Returns:
            Deduplicated points sorted by planar distance from the chord start
        """
        points = []
        n = len(ring)
        for i in range(n):
            points.extend(geodesic_segments_intersection(
                chord.start, chord.end, ring[i], ring[(i + 1) % n], ellipsoid,
                first_tolerance=tolerance,
            ))

        unique = dedupe_points(points, DEDUPE_TOLERANCE)
        # sorted() is stable, so equal distances keep edge order
        return sorted(unique, key=lambda p: planar_squared_distance(p, chord.start))

    def _clip_chord(
        self,
        chord: Chord,
        ring: Sequence[GeoPoint],
        shape,
        parameters: HatchingParameters,
        ellipsoid: Ellipsoid,
        tolerance: float = ARC_DISTANCE_TOLERANCE
    ) -> List[HatchLine]:
        intersections = self.find_chord_intersections(chord, ring, ellipsoid, tolerance)
        if len(intersections) < 2:
            return []

        bearing = parameters.bearing_degrees
        reverse_bearing = normalize_angle(bearing + 180.0)
        offset = parameters.offset_meters

        lines = []
        for j in range(0, len(intersections) - 1, 2):
            first, second = intersections[j], intersections[j + 1]
            if not is_point_in_polygon(planar_midpoint(first, second), shape):
                logger.debug("Chord %d: pair %d lies outside the polygon", chord.index, j // 2)
                continue

            lines.append(HatchLine(
                start=ellipsoid.direct(first, reverse_bearing, offset),
                end=ellipsoid.direct(second, bearing, offset),
                chord_index=chord.index,
            ))

        return lines


class PlanarLineHatchingPlugin(HatchingPlugin):
    """
    Parallel line hatching in the lon/lat plane.

    Rotates the ring about its centroid so the hatch bearing points north,
    clips north-south lines against it, then rotates the pieces back. The
    step is converted from meters to degrees of longitude at the latitude
    of the rotated bounding box center.
    """

    def __init__(self):
        super().__init__()
        self._name = "Planar Line Hatching"
        self._description = "Parallel hatch lines clipped in the lon/lat plane"
        self._version = "1.0.0"

    def validate_parameters(self, parameters: HatchingParameters) -> bool:
        if not super().validate_parameters(parameters):
            return False
        return parameters.step_meters > 0

    def generate_hatching(
        self,
        polygon: Sequence,
        parameters: HatchingParameters,
        ellipsoid: Ellipsoid
    ) -> List[HatchLine]:
        """
        Generate planar hatch lines for a polygon.

        Args:
            polygon: Outer ring as GeoPoints or (lon, lat[, height]) sequences
            parameters: Hatching parameters (the step must be positive)
            ellipsoid: Ellipsoid used to convert meters to degrees

        Returns:
            List of HatchLine objects
        """
        if ellipsoid is None:
            raise ValueError("An ellipsoid is required for planar hatching")

        ring = as_geopoints(polygon) if polygon is not None else []
        if len(ring) < 3:
            logger.warning("Polygon has %d vertices, at least 3 are needed for hatching", len(ring))
            return []

        if not self.validate_parameters(parameters):
            logger.warning("Invalid hatching parameters: %s", parameters)
            return []

        shape = create_polygon_from_ring(ring)
        if shape is None or shape.is_empty or not shape.is_valid:
            logger.warning("Polygon ring is not a valid simple polygon, skipping")
            return []

        bearing = normalize_angle(parameters.bearing_degrees)
        center = shape.centroid

        # Counter-clockwise by the bearing turns bearing-aligned lines north-south
        rotated = shapely_rotate(shape, bearing, origin=center)
        min_x, min_y, max_x, max_y = rotated.bounds

        reference = GeoPoint(min_x, (min_y + max_y) / 2)
        step_degrees = self._meters_to_longitude(reference, parameters.step_meters, ellipsoid)
        pad_meters = (parameters.offset_meters * 1.1 if parameters.offset_meters > 0
                      else parameters.step_meters * 0.5) + parameters.step_meters * 0.5
        pad_degrees = self._meters_to_longitude(reference, pad_meters, ellipsoid)
        y_pad = (max_y - min_y) * 0.05 + 0.01

        hatch_lines = []
        index = 0
        x = min_x - pad_degrees
        limit_x = max_x + pad_degrees
        while x < limit_x:
            if index >= parameters.max_lines:
                logger.warning("Planar sweep exceeded %d hatch lines, truncating", parameters.max_lines)
                break

            for start, end in clip_line_to_polygon((x, min_y - y_pad), (x, max_y + y_pad), rotated):
                midpoint = GeoPoint((start[0] + end[0]) / 2, (start[1] + end[1]) / 2)
                if not is_point_in_polygon(midpoint, rotated):
                    continue
                segment = shapely_rotate(LineString([start, end]), -bearing, origin=center)
                first, second = (GeoPoint(*c) for c in segment.coords)
                hatch_lines.append(self._extend(first, second, parameters.offset_meters, index, ellipsoid))

            index += 1
            x = min_x - pad_degrees + index * step_degrees

        hatch_lines = self.orient_for_scanning(hatch_lines, parameters.bidirectional)
        logger.info("Planar hatching generated %d lines from %d sweep lines", len(hatch_lines), index)
        return hatch_lines

    def _meters_to_longitude(self, reference: GeoPoint, meters: float, ellipsoid: Ellipsoid) -> float:
        """Degrees of longitude spanned by ``meters`` due east of ``reference``."""
        destination = ellipsoid.direct(reference, 90.0, meters)
        # Wrap into (-180, 180] so a step across the antimeridian stays small
        delta = (destination.lon - reference.lon + 180.0) % 360.0 - 180.0
        return abs(delta)

    def _extend(
        self,
        start: GeoPoint,
        end: GeoPoint,
        offset: float,
        index: int,
        ellipsoid: Ellipsoid
    ) -> HatchLine:
        """Push both ends of a segment outward along its azimuth."""
        result = ellipsoid.inverse(start, end)
        if offset == 0 or result is None:
            return HatchLine(start=start, end=end, chord_index=index)
        return HatchLine(
            start=ellipsoid.direct(start, normalize_angle(result.initial_bearing + 180.0), offset),
            end=ellipsoid.direct(end, result.final_bearing, offset),
            chord_index=index,
        )


def hatch(
    polygon: Sequence,
    parameters: Optional[HatchingParameters] = None,
    ellipsoid: Optional[Ellipsoid] = None,
    strategy: HatchingStrategy = HatchingStrategy.GEODESIC
) -> List[HatchLine]:
    """
    Hatch a polygon with the plugin registered for ``strategy``.

    Args:
        polygon: Outer ring as GeoPoints or (lon, lat[, height]) sequences
        parameters: Hatching parameters, defaults when omitted
        ellipsoid: Ellipsoid for the geodesic computations (required)
        strategy: Registered hatching strategy

    Returns:
        List of HatchLine objects

    Raises:
        ValueError: If no ellipsoid is supplied or the strategy is not registered
    """
    if ellipsoid is None:
        raise ValueError("An ellipsoid is required for hatching")

    plugin = registry.get_plugin(strategy)
    if plugin is None:
        raise ValueError(f"No hatching plugin registered for {strategy}")

    return plugin.generate_hatching(polygon, parameters or HatchingParameters(), ellipsoid)
