"""
Geodesic parallel hatching for polygons on an ellipsoid.

Fills the interior of a simple polygon (outer ring only) with parallel
geodesic line segments, trimmed to the boundary and moved inward by a fixed
offset.

Usage:
    from geohatch import Ellipsoid, HatchingParameters, hatch

    ellipsoid = Ellipsoid.wgs84()
    ring = [(0, 0), (1, 0), (1, 1), (0, 1)]
    params = HatchingParameters(step_meters=500, bearing_degrees=0, offset_meters=50)
    hatch_lines = hatch(ring, params, ellipsoid)
"""

from .base import (
    GeoPoint,
    Chord,
    Corridor,
    HatchLine,
    HatchingParameters,
    HatchingPlugin,
    HatchingStrategy,
)
from .geodesy import Ellipsoid, GeodesicInverse
from .registry import HatchingRegistry, registry
from .plugins import GeodesicLineHatchingPlugin, PlanarLineHatchingPlugin, hatch

# Auto-register built-in plugins
registry.register(HatchingStrategy.GEODESIC, GeodesicLineHatchingPlugin)
registry.register(HatchingStrategy.PLANAR, PlanarLineHatchingPlugin)

__all__ = [
    'GeoPoint',
    'Chord',
    'Corridor',
    'HatchLine',
    'HatchingParameters',
    'HatchingPlugin',
    'HatchingStrategy',
    'Ellipsoid',
    'GeodesicInverse',
    'HatchingRegistry',
    'registry',
    'GeodesicLineHatchingPlugin',
    'PlanarLineHatchingPlugin',
    'hatch',
]
