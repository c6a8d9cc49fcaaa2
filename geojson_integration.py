"""
Integration utilities for connecting GeoJSON sources to the hatching engine.

This module loads polygon features, extracts their outer rings and styles,
runs the hatching engine on each, and converts the resulting hatch lines
back into GeoJSON.
"""

from typing import List, Tuple, Dict, Any, Optional, Union
from dataclasses import dataclass, field
from pathlib import Path
import json
import logging

from shapely.geometry import shape, mapping, LineString
from shapely.errors import GeometryTypeError

from geohatch import (
    Ellipsoid,
    GeoPoint,
    HatchLine,
    HatchingParameters,
    HatchingStrategy,
    hatch,
)

logger = logging.getLogger(__name__)

GeoJSON = Dict[str, Any]


@dataclass
class PolygonFeature:
    """
    Outer ring of a GeoJSON polygon plus the styling found on its feature.

    Attributes:
        outer_ring: Ring vertices with the repeated closing vertex removed
        style: Colours and line width parsed from the feature properties
        properties: The feature's original properties
    """
    outer_ring: List[GeoPoint]
    style: Dict[str, Any] = field(default_factory=dict)
    properties: Dict[str, Any] = field(default_factory=dict)


def load_geojson(path: Union[str, Path]) -> GeoJSON:
    """
    Load a GeoJSON document from disk.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is not valid GeoJSON
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"GeoJSON file not found: {path}")

    try:
        with open(path, encoding="utf-8") as f:
            document = json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}")

    if not isinstance(document, dict) or "type" not in document:
        raise ValueError(f"{path} does not contain a GeoJSON object")
    return document


def hex_to_rgba(css_hex: str, opacity: float = 1) -> str:
    """Convert '#rrggbb' to an 'rgba(r,g,b,a)' string."""
    value = int(css_hex.lstrip("#"), 16)
    r = (value >> 16) & 255
    g = (value >> 8) & 255
    b = value & 255
    return f"rgba({r},{g},{b},{opacity})"


def feature_style(properties: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Extract fill/stroke styling from simplestyle-like feature properties.

    Args:
        properties: Feature properties, may be None

    Returns:
        Dict with any of 'fill_color', 'line_color', 'line_width'
    """
    style: Dict[str, Any] = {}
    if not properties:
        return style

    if properties.get("fill"):
        style["fill_color"] = hex_to_rgba(properties["fill"], properties.get("fill_opacity", 1))
    if properties.get("stroke"):
        style["line_color"] = hex_to_rgba(properties["stroke"], properties.get("stroke_opacity", 1))
    width = properties.get("strokeWidth", properties.get("stroke-width"))
    if width:
        style["line_width"] = float(width)
    return style


def extract_outer_ring(polygon) -> List[GeoPoint]:
    """Outer ring of a shapely Polygon without the repeated closing vertex."""
    coords = list(polygon.exterior.coords)
    if len(coords) > 1 and coords[0] == coords[-1]:
        coords = coords[:-1]
    return [GeoPoint.from_sequence(c) for c in coords]


def _iter_features(geojson: GeoJSON) -> List[GeoJSON]:
    kind = geojson.get("type")
    if kind == "FeatureCollection":
        return list(geojson.get("features") or [])
    if kind == "Feature":
        return [geojson]
    # Bare geometry
    return [{"type": "Feature", "geometry": geojson, "properties": {}}]


def features_to_polygons(geojson: GeoJSON) -> List[PolygonFeature]:
    """
    Collect the outer rings of every Polygon and MultiPolygon feature.

    Holes are dropped and non-polygon features are skipped.

    Args:
        geojson: FeatureCollection, Feature or bare geometry

    Returns:
        One PolygonFeature per polygon part
    """
    polygons = []
    for feature in _iter_features(geojson):
        geometry = feature.get("geometry")
        if not geometry:
            continue

        try:
            geom = shape(geometry)
        except (GeometryTypeError, ValueError, KeyError, TypeError) as e:
            raise ValueError(f"Malformed geometry in feature: {e}")

        if geom.geom_type == "Polygon":
            parts = [geom]
        elif geom.geom_type == "MultiPolygon":
            parts = list(geom.geoms)
        else:
            logger.debug("Skipping %s feature", geom.geom_type)
            continue

        properties = feature.get("properties") or {}
        for part in parts:
            if part.is_empty:
                continue
            if len(part.interiors) > 0:
                logger.info("Ignoring %d hole(s), only the outer ring is hatched", len(part.interiors))
            polygons.append(PolygonFeature(
                outer_ring=extract_outer_ring(part),
                style=feature_style(properties),
                properties=dict(properties),
            ))

    return polygons


def hatch_features(
    geojson: GeoJSON,
    parameters: HatchingParameters,
    ellipsoid: Ellipsoid,
    strategy: HatchingStrategy = HatchingStrategy.GEODESIC
) -> List[Tuple[PolygonFeature, List[HatchLine]]]:
    """
    Hatch every polygon in a GeoJSON document.

    Args:
        geojson: Source document
        parameters: Hatching parameters
        ellipsoid: Ellipsoid for the geodesic computations
        strategy: Hatching strategy to use

    Returns:
        List of (polygon feature, hatch lines) pairs in document order
    """
    results = []
    polygons = features_to_polygons(geojson)
    for i, polygon in enumerate(polygons):
        lines = hatch(polygon.outer_ring, parameters, ellipsoid, strategy)
        logger.info("Polygon %d/%d: %d hatch lines", i + 1, len(polygons), len(lines))
        results.append((polygon, lines))
    return results


def hatch_lines_to_geojson(
    hatch_lines: List[HatchLine],
    properties: Optional[Dict[str, Any]] = None
) -> GeoJSON:
    """
    Convert hatch lines to a FeatureCollection of LineStrings.

    Args:
        hatch_lines: Lines to convert
        properties: Extra properties copied onto every feature

    Returns:
        GeoJSON FeatureCollection
    """
    features = []
    for line in hatch_lines:
        line_properties = {"chord_index": line.chord_index}
        if properties:
            line_properties.update(properties)
        features.append({
            "type": "Feature",
            "geometry": mapping(LineString(line.to_coordinates())),
            "properties": line_properties,
        })
    return {"type": "FeatureCollection", "features": features}


def get_hatching_statistics(hatch_lines: List[HatchLine], ellipsoid: Ellipsoid) -> Dict[str, Any]:
    """
    Calculate statistics about generated hatching.

    Args:
        hatch_lines: Generated lines
        ellipsoid: Ellipsoid for measuring geodesic lengths

    Returns:
        Dictionary with statistics
    """
    lengths = [line.length(ellipsoid) for line in hatch_lines]
    total_length = sum(lengths)
    chords = {line.chord_index for line in hatch_lines}

    stats = {
        'total_lines': len(hatch_lines),
        'chords_with_lines': len(chords),
        'total_length_m': total_length,
        'min_length_m': min(lengths) if lengths else 0.0,
        'max_length_m': max(lengths) if lengths else 0.0,
        'avg_length_m': total_length / len(lengths) if lengths else 0.0,
    }

    return stats
