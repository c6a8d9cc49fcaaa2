"""
Base classes and value types for the geodesic hatching engine.
"""

from abc import ABC, abstractmethod
from typing import List, Tuple, Sequence, Optional, TYPE_CHECKING
from dataclasses import dataclass
from enum import Enum
import math

from .constants import (
    DEFAULT_STEP_METERS,
    DEFAULT_BEARING_DEGREES,
    DEFAULT_OFFSET_METERS,
    LARGE_SPAN,
    MAX_CHORDS,
    GEO_TOLERANCE,
)

if TYPE_CHECKING:
    from .geodesy import Ellipsoid


class HatchingStrategy(Enum):
    """Enumeration of available hatching strategies."""
    GEODESIC = "geodesic"
    PLANAR = "planar"


@dataclass(frozen=True)
class GeoPoint:
    """
    A position on the ellipsoid.

    Attributes:
        lon: Longitude in degrees (any real, compared modulo 360)
        lat: Latitude in degrees, within [-90, 90]
        height: Height above the ellipsoid in meters
    """
    lon: float
    lat: float
    height: float = 0.0

    @classmethod
    def from_sequence(cls, coords: Sequence[float]) -> "GeoPoint":
        """Build a point from a (lon, lat[, height]) sequence."""
        if len(coords) < 2:
            raise ValueError(f"Expected at least (lon, lat), got {coords!r}")
        height = coords[2] if len(coords) > 2 and coords[2] is not None else 0.0
        return cls(float(coords[0]), float(coords[1]), float(height))

    def to_tuple(self) -> Tuple[float, float]:
        """Return (lon, lat), dropping the height."""
        return (self.lon, self.lat)

    def equals(self, other: "GeoPoint", tolerance: float = GEO_TOLERANCE) -> bool:
        """
        Compare two points within a tolerance in degrees.

        Longitudes are compared modulo 360 so that -180 and 180 match.
        """
        dlon = (self.lon - other.lon + 180.0) % 360.0 - 180.0
        return abs(dlon) <= tolerance and abs(self.lat - other.lat) <= tolerance

    def is_finite(self) -> bool:
        return math.isfinite(self.lon) and math.isfinite(self.lat) and math.isfinite(self.height)


@dataclass(frozen=True)
class Chord:
    """
    Unclipped full-span candidate hatch line.

    Attributes:
        start: Endpoint reached by travelling along the hatch bearing
        end: Endpoint reached by travelling along the reverse bearing
        index: Position of this chord in the sweep
        projection: Distance of the chord's center along the sweep axis in meters
    """
    start: GeoPoint
    end: GeoPoint
    index: int = 0
    projection: float = 0.0


@dataclass(frozen=True)
class Corridor:
    """
    Extent of a polygon measured along the axis perpendicular to the hatch bearing.

    Attributes:
        min_projection: Smallest signed projection of any vertex in meters
        max_projection: Largest signed projection of any vertex in meters
        axis_origin: Point the axis is measured from (first polygon vertex)
        axis_bearing: Bearing of the axis in degrees
    """
    min_projection: float
    max_projection: float
    axis_origin: GeoPoint
    axis_bearing: float

    @property
    def width(self) -> float:
        return self.max_projection - self.min_projection


@dataclass(frozen=True)
class HatchLine:
    """
    A single output hatch segment.

    Attributes:
        start: First endpoint
        end: Second endpoint
        chord_index: Index of the sweep chord this segment was cut from
    """
    start: GeoPoint
    end: GeoPoint
    chord_index: int = 0

    def to_coordinates(self) -> List[Tuple[float, float]]:
        """Return [(lon, lat), (lon, lat)] with heights dropped."""
        return [self.start.to_tuple(), self.end.to_tuple()]

    def length(self, ellipsoid: "Ellipsoid") -> float:
        """Geodesic length of this hatch line in meters."""
        result = ellipsoid.inverse(self.start, self.end)
        return result.distance if result is not None else 0.0

    def bearing(self, ellipsoid: "Ellipsoid") -> Optional[float]:
        """Initial bearing from start to end in degrees, or None if degenerate."""
        result = ellipsoid.inverse(self.start, self.end)
        return result.initial_bearing if result is not None else None

    def reversed(self) -> "HatchLine":
        return HatchLine(start=self.end, end=self.start, chord_index=self.chord_index)


@dataclass
class HatchingParameters:
    """
    Parameters for hatching generation.

    Attributes:
        step_meters: Distance between hatch lines; zero or negative asks for a
            single line through the start of the sweep
        bearing_degrees: Direction of the hatch lines, clockwise from north
        offset_meters: Distance each line end is moved from the boundary
        span_meters: Upper bound on the half-length of the candidate chords
        max_lines: Ceiling on the number of chords swept
        bidirectional: Reverse every other output line for back-and-forth drawing
    """
    step_meters: float = DEFAULT_STEP_METERS
    bearing_degrees: float = DEFAULT_BEARING_DEGREES
    offset_meters: float = DEFAULT_OFFSET_METERS
    span_meters: float = LARGE_SPAN
    max_lines: int = MAX_CHORDS
    bidirectional: bool = False


class HatchingPlugin(ABC):
    """
    Abstract base class for hatching plugins.

    All hatching strategies must inherit from this class and implement
    the generate_hatching method.
    """

    def __init__(self):
        """Initialize the hatching plugin."""
        self._name = self.__class__.__name__
        self._description = ""
        self._version = "1.0.0"

    @property
    def name(self) -> str:
        """Get the plugin name."""
        return self._name

    @property
    def description(self) -> str:
        """Get the plugin description."""
        return self._description

    @property
    def version(self) -> str:
        """Get the plugin version."""
        return self._version

    @abstractmethod
    def generate_hatching(
        self,
        polygon: Sequence,
        parameters: HatchingParameters,
        ellipsoid: "Ellipsoid"
    ) -> List[HatchLine]:
        """
        Generate hatch lines for a polygon.

        Args:
            polygon: Outer ring as GeoPoints or (lon, lat[, height]) sequences.
                     The ring is implicitly closed.
            parameters: Hatching parameters
            ellipsoid: Ellipsoid used for all geodesic computations

        Returns:
            List of HatchLine objects
        """
        pass

    def validate_parameters(self, parameters: HatchingParameters) -> bool:
        """
        Validate parameters for this hatching strategy.

        Args:
            parameters: Parameters to validate

        Returns:
            True if parameters are valid, False otherwise
        """
        numbers = (
            parameters.step_meters,
            parameters.bearing_degrees,
            parameters.offset_meters,
            parameters.span_meters,
        )
        if not all(math.isfinite(value) for value in numbers):
            return False
        if parameters.span_meters <= 0:
            return False
        if parameters.max_lines < 1:
            return False
        return True

    def orient_for_scanning(self, hatch_lines: List[HatchLine], bidirectional: bool) -> List[HatchLine]:
        """
        Orient lines for drawing without changing their order.

        Args:
            hatch_lines: Lines in sweep order
            bidirectional: If True, reverse every other line so consecutive
                lines are drawn back and forth

        Returns:
            Oriented hatch lines
        """
        if not bidirectional:
            return list(hatch_lines)
        return [line.reversed() if i % 2 == 1 else line for i, line in enumerate(hatch_lines)]
