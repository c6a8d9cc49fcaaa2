"""
Ellipsoid geodesy backed by pyproj.

Forward and inverse geodesic problems are solved with pyproj's Geod
(Karney's algorithm). Geodetic <-> ECEF conversion uses a PROJ ``cart``
pipeline built for the same radii, so both halves agree on the figure of
the earth.
"""

from typing import NamedTuple, Optional, Sequence, Tuple
import logging

import numpy as np
from pyproj import Geod, Transformer
from pyproj.enums import TransformDirection

from .base import GeoPoint
from .constants import WGS84_EQUATORIAL_RADIUS, WGS84_POLAR_RADIUS, GEO_TOLERANCE
from .utils import normalize_angle

logger = logging.getLogger(__name__)


class GeodesicInverse(NamedTuple):
    """Solution of the inverse geodesic problem."""
    distance: float
    initial_bearing: float
    final_bearing: float


class Ellipsoid:
    """
    Oblate ellipsoid of revolution.

    Instances are read-only and safe to share between calls.

    Args:
        equatorial_radius: Semi-major axis in meters
        polar_radius: Semi-minor axis in meters

    Raises:
        ValueError: If the radii do not satisfy equatorial > polar > 0
    """

    def __init__(self, equatorial_radius: float, polar_radius: float):
        if not (equatorial_radius > polar_radius > 0):
            raise ValueError(
                f"Ellipsoid radii must satisfy equatorial > polar > 0, "
                f"got {equatorial_radius} and {polar_radius}"
            )
        self._equatorial_radius = float(equatorial_radius)
        self._polar_radius = float(polar_radius)
        self._geod = Geod(a=self._equatorial_radius, b=self._polar_radius)
        self._cartesian = Transformer.from_pipeline(
            f"+proj=pipeline +step +proj=cart "
            f"+a={self._equatorial_radius!r} +b={self._polar_radius!r}"
        )

    @classmethod
    def wgs84(cls) -> "Ellipsoid":
        return cls(WGS84_EQUATORIAL_RADIUS, WGS84_POLAR_RADIUS)

    @property
    def equatorial_radius(self) -> float:
        return self._equatorial_radius

    @property
    def polar_radius(self) -> float:
        return self._polar_radius

    @property
    def flattening(self) -> float:
        return (self._equatorial_radius - self._polar_radius) / self._equatorial_radius

    def __repr__(self) -> str:
        return f"Ellipsoid(equatorial_radius={self._equatorial_radius}, polar_radius={self._polar_radius})"

    def direct_with_bearing(
        self,
        origin: GeoPoint,
        bearing: float,
        distance: float
    ) -> Tuple[GeoPoint, float]:
        """
        Solve the direct geodesic problem.

        Args:
            origin: Starting point
            bearing: Initial bearing in degrees, clockwise from north
            distance: Distance to travel in meters (negative travels backwards)

        Returns:
            Tuple of (destination, bearing at the destination in [0, 360))
        """
        lon, lat, back_azimuth = self._geod.fwd(origin.lon, origin.lat, bearing, distance)
        return GeoPoint(float(lon), float(lat)), normalize_angle(float(back_azimuth) + 180.0)

    def direct(self, origin: GeoPoint, bearing: float, distance: float) -> GeoPoint:
        """Point reached from ``origin`` along ``bearing`` after ``distance`` meters."""
        return self.direct_with_bearing(origin, bearing, distance)[0]

    def inverse(self, p1: GeoPoint, p2: GeoPoint) -> Optional[GeodesicInverse]:
        """
        Solve the inverse geodesic problem.

        Returns:
            Distance in meters with initial and final bearings in [0, 360),
            or None when the points coincide within tolerance.
        """
        if p1.equals(p2, GEO_TOLERANCE):
            return None
        azimuth12, azimuth21, distance = self._geod.inv(p1.lon, p1.lat, p2.lon, p2.lat)
        return GeodesicInverse(
            distance=float(distance),
            initial_bearing=normalize_angle(float(azimuth12)),
            final_bearing=normalize_angle(float(azimuth21) + 180.0),
        )

    def geodetic_to_cartesian(self, lon: float, lat: float, height: float = 0.0) -> np.ndarray:
        """Convert geodetic coordinates to an ECEF vector in meters."""
        x, y, z = self._cartesian.transform(lon, lat, height)
        return np.array([x, y, z], dtype=float)

    def point_to_cartesian(self, point: GeoPoint) -> np.ndarray:
        return self.geodetic_to_cartesian(point.lon, point.lat, point.height)

    def cartesian_to_geodetic(self, vector: Sequence[float]) -> GeoPoint:
        """Convert an ECEF vector in meters to a geodetic point."""
        lon, lat, height = self._cartesian.transform(
            vector[0], vector[1], vector[2],
            direction=TransformDirection.INVERSE
        )
        return GeoPoint(float(lon), float(lat), float(height))

    def surface_point(self, direction: Sequence[float]) -> Optional[np.ndarray]:
        """
        Point where the ray from the center along ``direction`` pierces the surface.

        Returns:
            ECEF vector, or None for a zero direction
        """
        vx, vy, vz = (float(c) for c in direction)
        a2 = self._equatorial_radius ** 2
        c2 = self._polar_radius ** 2
        denom = (vx * vx) / a2 + (vy * vy) / a2 + (vz * vz) / c2
        if denom <= 0.0:
            return None
        t = 1.0 / np.sqrt(denom)
        return np.array([vx * t, vy * t, vz * t], dtype=float)
