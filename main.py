"""
Command-line entry point: hatch the polygons of a GeoJSON file.
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from geohatch import Ellipsoid, HatchingParameters, HatchingStrategy
from geohatch.constants import (
    DEFAULT_STEP_METERS,
    DEFAULT_BEARING_DEGREES,
    DEFAULT_OFFSET_METERS,
    MAX_CHORDS,
)
from geojson_integration import (
    load_geojson,
    hatch_features,
    hatch_lines_to_geojson,
    get_hatching_statistics,
)

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="geohatch",
        description="Fill GeoJSON polygons with parallel geodesic hatch lines",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Hatch with defaults (100 m spacing, north-south, 50 m inset)
  geohatch fields.geojson -o hatch.geojson

  # Diagonal lines every 250 m using the lon/lat-plane strategy
  geohatch fields.geojson --bearing 45 --step 250 --strategy planar
        """
    )
    parser.add_argument("input", help="GeoJSON file with Polygon/MultiPolygon features")
    parser.add_argument("-o", "--output", help="Output GeoJSON path (stdout if omitted)")
    parser.add_argument("--step", type=float, default=DEFAULT_STEP_METERS,
                        help="Spacing between lines in meters (default: %(default)s)")
    parser.add_argument("--bearing", type=float, default=DEFAULT_BEARING_DEGREES,
                        help="Line bearing in degrees clockwise from north (default: %(default)s)")
    parser.add_argument("--offset", type=float, default=DEFAULT_OFFSET_METERS,
                        help="Offset of line ends from the boundary in meters (default: %(default)s)")
    parser.add_argument("--max-lines", type=int, default=MAX_CHORDS,
                        help="Ceiling on sweep lines per polygon (default: %(default)s)")
    parser.add_argument("--strategy", choices=[s.value for s in HatchingStrategy],
                        default=HatchingStrategy.GEODESIC.value,
                        help="Hatching strategy (default: %(default)s)")
    parser.add_argument("--bidirectional", action="store_true",
                        help="Reverse every other line for back-and-forth drawing")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        document = load_geojson(args.input)
    except (FileNotFoundError, ValueError) as e:
        logger.error("%s", e)
        return 1

    parameters = HatchingParameters(
        step_meters=args.step,
        bearing_degrees=args.bearing,
        offset_meters=args.offset,
        max_lines=args.max_lines,
        bidirectional=args.bidirectional,
    )
    ellipsoid = Ellipsoid.wgs84()

    try:
        results = hatch_features(document, parameters, ellipsoid, HatchingStrategy(args.strategy))
    except ValueError as e:
        logger.error("%s", e)
        return 1

    features = []
    for index, (polygon, lines) in enumerate(results):
        stats = get_hatching_statistics(lines, ellipsoid)
        logger.info(
            "Polygon %d: %d lines, %.1f m total",
            index, stats['total_lines'], stats['total_length_m']
        )
        collection = hatch_lines_to_geojson(lines, {"polygon_index": index, **polygon.style})
        features.extend(collection["features"])

    output = json.dumps({"type": "FeatureCollection", "features": features})
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(output)
        logger.info("Wrote %d hatch lines to %s", len(features), args.output)
    else:
        sys.stdout.write(output + "\n")

    return 0


if __name__ == '__main__':
    sys.exit(main())
