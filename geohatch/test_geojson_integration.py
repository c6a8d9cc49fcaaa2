"""
Tests for the GeoJSON integration layer and the command-line entry point.

Run with: python -m pytest geohatch/test_geojson_integration.py
"""

import json

import pytest

from geohatch import Ellipsoid, GeoPoint, HatchLine, HatchingParameters, HatchingStrategy
from geojson_integration import (
    load_geojson,
    hex_to_rgba,
    feature_style,
    features_to_polygons,
    hatch_features,
    hatch_lines_to_geojson,
    get_hatching_statistics,
)
import main as cli

SQUARE_RING = [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]


def _collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def _feature(geometry, **properties):
    return {"type": "Feature", "geometry": geometry, "properties": properties}


@pytest.fixture
def square_file(tmp_path):
    path = tmp_path / "square.geojson"
    document = _collection(_feature(
        {"type": "Polygon", "coordinates": [SQUARE_RING]},
        name="field", stroke="#00ff00", fill="#ff0000", fill_opacity=0.5,
    ))
    path.write_text(json.dumps(document), encoding="utf-8")
    return path


def test_load_geojson(square_file):
    document = load_geojson(square_file)
    assert document["type"] == "FeatureCollection"
    assert len(document["features"]) == 1


def test_load_geojson_errors(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_geojson(tmp_path / "missing.geojson")

    broken = tmp_path / "broken.geojson"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        load_geojson(broken)

    not_geojson = tmp_path / "list.geojson"
    not_geojson.write_text("[1, 2, 3]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_geojson(not_geojson)


def test_hex_to_rgba():
    assert hex_to_rgba("#ff0000") == "rgba(255,0,0,1)"
    assert hex_to_rgba("#0080ff", 0.5) == "rgba(0,128,255,0.5)"


def test_feature_style():
    style = feature_style({"fill": "#ff0000", "fill_opacity": 0.5, "stroke": "#000000", "stroke-width": "2"})
    assert style == {
        "fill_color": "rgba(255,0,0,0.5)",
        "line_color": "rgba(0,0,0,1)",
        "line_width": 2.0,
    }
    assert feature_style(None) == {}
    assert feature_style({"name": "plain"}) == {}


def test_features_to_polygons():
    document = _collection(
        _feature({"type": "Polygon", "coordinates": [SQUARE_RING]}, name="a"),
        _feature({"type": "Point", "coordinates": [5, 5]}),
        _feature(None),
        _feature({
            "type": "MultiPolygon",
            "coordinates": [
                [[[10, 10], [11, 10], [11, 11], [10, 10]]],
                [[[20, 20], [21, 20], [21, 21], [20, 20]]],
            ],
        }, name="b"),
    )

    polygons = features_to_polygons(document)

    assert len(polygons) == 3
    # Closing vertex is stripped
    assert polygons[0].outer_ring == [GeoPoint(0, 0), GeoPoint(1, 0), GeoPoint(1, 1), GeoPoint(0, 1)]
    assert polygons[0].properties == {"name": "a"}
    assert [p.properties["name"] for p in polygons[1:]] == ["b", "b"]
    assert polygons[2].outer_ring[0] == GeoPoint(20, 20)


def test_features_to_polygons_accepts_bare_geometry():
    polygons = features_to_polygons({"type": "Polygon", "coordinates": [SQUARE_RING]})
    assert len(polygons) == 1
    assert len(polygons[0].outer_ring) == 4


def test_features_to_polygons_drops_holes():
    hole = [[0.4, 0.4], [0.6, 0.4], [0.6, 0.6], [0.4, 0.6], [0.4, 0.4]]
    polygons = features_to_polygons({"type": "Polygon", "coordinates": [SQUARE_RING, hole]})
    assert len(polygons) == 1
    assert len(polygons[0].outer_ring) == 4


def test_features_to_polygons_malformed():
    with pytest.raises(ValueError):
        features_to_polygons(_collection(_feature({"type": "Blob", "coordinates": []})))


def test_hatch_features():
    document = _collection(_feature({"type": "Polygon", "coordinates": [SQUARE_RING]}))
    ellipsoid = Ellipsoid.wgs84()

    results = hatch_features(document, HatchingParameters(step_meters=20000), ellipsoid)

    assert len(results) == 1
    polygon, lines = results[0]
    assert len(polygon.outer_ring) == 4
    assert len(lines) > 0

    planar = hatch_features(
        document, HatchingParameters(step_meters=20000), ellipsoid, HatchingStrategy.PLANAR
    )
    assert len(planar[0][1]) > 0


def test_hatch_lines_to_geojson():
    lines = [
        HatchLine(GeoPoint(0, 1), GeoPoint(0, 0), chord_index=3),
        HatchLine(GeoPoint(1, 1), GeoPoint(1, 0), chord_index=4),
    ]

    collection = hatch_lines_to_geojson(lines, {"polygon_index": 0})

    assert collection["type"] == "FeatureCollection"
    assert len(collection["features"]) == 2
    first = collection["features"][0]
    assert first["geometry"]["type"] == "LineString"
    assert [list(c) for c in first["geometry"]["coordinates"]] == [[0, 1], [0, 0]]
    assert first["properties"] == {"chord_index": 3, "polygon_index": 0}

    # Serializable as-is
    json.dumps(collection)


def test_get_hatching_statistics():
    ellipsoid = Ellipsoid.wgs84()
    lines = [
        HatchLine(GeoPoint(0, 0), GeoPoint(1, 0), chord_index=0),
        HatchLine(GeoPoint(0, 1), GeoPoint(1, 1), chord_index=0),
        HatchLine(GeoPoint(0, 2), GeoPoint(0.5, 2), chord_index=1),
    ]

    stats = get_hatching_statistics(lines, ellipsoid)

    assert stats["total_lines"] == 3
    assert stats["chords_with_lines"] == 2
    assert stats["max_length_m"] == pytest.approx(111319.49, abs=0.01)
    assert stats["min_length_m"] < stats["max_length_m"]
    assert stats["avg_length_m"] == pytest.approx(stats["total_length_m"] / 3)

    empty = get_hatching_statistics([], ellipsoid)
    assert empty["total_lines"] == 0
    assert empty["total_length_m"] == 0


def test_cli_writes_output(square_file, tmp_path):
    output = tmp_path / "hatch.geojson"

    status = cli.main([str(square_file), "-o", str(output), "--step", "20000", "--bidirectional"])

    assert status == 0
    document = json.loads(output.read_text(encoding="utf-8"))
    assert document["type"] == "FeatureCollection"
    assert len(document["features"]) > 0
    properties = document["features"][0]["properties"]
    assert properties["polygon_index"] == 0
    assert properties["fill_color"] == "rgba(255,0,0,0.5)"


def test_cli_stdout(square_file, capsys):
    status = cli.main([str(square_file), "--step", "20000", "--strategy", "planar"])

    assert status == 0
    document = json.loads(capsys.readouterr().out)
    assert len(document["features"]) > 0


def test_cli_missing_input(tmp_path):
    assert cli.main([str(tmp_path / "nope.geojson")]) == 1


def test_cli_rejects_unknown_strategy(square_file):
    with pytest.raises(SystemExit):
        cli.main([str(square_file), "--strategy", "spiral"])
