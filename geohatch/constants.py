"""
Default parameters, limits and numerical tolerances for geodesic hatching.
"""

# Hatching defaults
DEFAULT_STEP_METERS = 100.0  # Spacing between neighbouring hatch lines
DEFAULT_BEARING_DEGREES = 0.0  # Clockwise from north
DEFAULT_OFFSET_METERS = 50.0  # Distance the line ends move from the boundary

# Sweep limits
LARGE_SPAN = 10_000_000.0  # Upper bound on the half-length of a candidate chord in meters
MAX_CHORDS = 2000  # Ceiling on chords generated per call
CHORD_SPAN_FACTOR = 1.1  # Chord half-length relative to the farthest polygon reach
CHORD_SPAN_PADDING = 1000.0  # Meters added on top of the scaled reach

# Default ellipsoid (WGS84, meters)
WGS84_EQUATORIAL_RADIUS = 6378137.0
WGS84_POLAR_RADIUS = 6356752.314245179

# Tolerances
GEO_TOLERANCE = 1e-6  # Degrees, point equality on the ellipsoid
DEDUPE_TOLERANCE = 1e-7  # Degrees, merging intersections along one chord
ARC_DISTANCE_TOLERANCE = 1e-3  # Meters, slack in the arc triangle equality
CHORD_RELATIVE_TOLERANCE = 1e-5  # Triangle-equality slack per meter of chord length
PLANAR_TOLERANCE = 1e-9  # Lon/lat units, on-edge test for containment
COPLANAR_TOLERANCE = 1e-9  # Relative, degenerate plane normals
