#!/usr/bin/env python3
"""
Example script demonstrating geodesic hatching.

This script shows how to:
1. Hatch a small square with the geodesic plugin
2. Compare the geodesic and planar strategies on a skewed quadrilateral
3. Cross-hatch a polygon with two oblique geodesic passes

Requires matplotlib (``pip install geohatch[plot]``).
"""

import matplotlib.pyplot as plt
from matplotlib.collections import LineCollection
from typing import List, Optional, Sequence

from geohatch import (
    registry,
    Ellipsoid,
    GeoPoint,
    HatchingStrategy,
    HatchingParameters,
    HatchLine,
    hatch,
)


def plot_hatching(
    ax,
    ring: Sequence[GeoPoint],
    hatch_lines: List[HatchLine],
    title: str,
    color: str = 'blue'
):
    """Draw a ring and its hatch lines in lon/lat on a matplotlib axis."""
    closed = list(ring) + [ring[0]]
    ax.plot([p.lon for p in closed], [p.lat for p in closed], color='red', linewidth=1.5, label='Outline')

    if hatch_lines:
        segments = [line.to_coordinates() for line in hatch_lines]
        ax.add_collection(LineCollection(segments, colors=color, linewidths=0.5, label='Hatch'))

    ax.autoscale()
    ax.set_aspect('equal')
    ax.grid(True, alpha=0.3)
    ax.set_xlabel('Longitude (deg)')
    ax.set_ylabel('Latitude (deg)')
    ax.set_title(title)


def visualize_hatching(
    ring: Sequence[GeoPoint],
    hatch_lines: List[HatchLine],
    title: str = "Hatching Pattern",
    ax=None
):
    """
    Visualize hatch lines over their polygon.

    Args:
        ring: Polygon outer ring
        hatch_lines: Lines to draw
        title: Plot title
        ax: Existing axis to draw into, a new figure is created when omitted
    """
    show = ax is None
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 10))

    plot_hatching(ax, ring, hatch_lines, title)
    ax.legend()

    if show:
        plt.tight_layout()
        plt.show()


def example_1_basic_square(ellipsoid: Optional[Ellipsoid] = None):
    """Example 1: 0.1 degree square with north-south hatching."""
    print("=" * 60)
    print("Example 1: Square with Geodesic Line Hatching")
    print("=" * 60)

    ellipsoid = ellipsoid or Ellipsoid.wgs84()
    square = [GeoPoint(10.0, 50.0), GeoPoint(10.1, 50.0), GeoPoint(10.1, 50.1), GeoPoint(10.0, 50.1)]

    plugin = registry.get_plugin(HatchingStrategy.GEODESIC)
    params = HatchingParameters(step_meters=250, bearing_degrees=0, offset_meters=20, bidirectional=True)

    hatch_lines = plugin.generate_hatching(square, params, ellipsoid)

    lengths = [line.length(ellipsoid) for line in hatch_lines]
    print(f"Generated {len(hatch_lines)} hatch lines")
    if lengths:
        print(f"  - Shortest: {min(lengths):.1f} m, longest: {max(lengths):.1f} m")

    visualize_hatching(square, hatch_lines, "Example 1: Square, 250 m spacing, 20 m inset")


def example_2_strategy_comparison(ellipsoid: Optional[Ellipsoid] = None):
    """Example 2: Geodesic vs planar strategy on the same quadrilateral."""
    print("\n" + "=" * 60)
    print("Example 2: Geodesic vs Planar")
    print("=" * 60)

    ellipsoid = ellipsoid or Ellipsoid.wgs84()
    quad = [GeoPoint(-3.0, 60.0), GeoPoint(-1.0, 60.2), GeoPoint(-1.2, 61.0), GeoPoint(-3.1, 60.8)]
    params = HatchingParameters(step_meters=5000, bearing_degrees=0, offset_meters=0)

    fig, axes = plt.subplots(1, 2, figsize=(14, 7))
    for ax, strategy in zip(axes, (HatchingStrategy.GEODESIC, HatchingStrategy.PLANAR)):
        hatch_lines = hatch(quad, params, ellipsoid, strategy)
        print(f"{strategy.value}: {len(hatch_lines)} lines")
        plot_hatching(ax, quad, hatch_lines, f"{strategy.value} ({len(hatch_lines)} lines)")

    plt.tight_layout()
    plt.show()


def example_3_cross_hatch(ellipsoid: Optional[Ellipsoid] = None):
    """Example 3: Cross-hatching from two geodesic passes at right angles."""
    print("\n" + "=" * 60)
    print("Example 3: Cross Hatch")
    print("=" * 60)

    ellipsoid = ellipsoid or Ellipsoid.wgs84()
    triangle = [GeoPoint(20.0, -30.0), GeoPoint(20.5, -30.0), GeoPoint(20.2, -29.6)]

    _, ax = plt.subplots(figsize=(10, 10))
    for bearing, color in ((30.0, 'blue'), (120.0, 'green')):
        params = HatchingParameters(step_meters=2000, bearing_degrees=bearing, offset_meters=0)
        hatch_lines = hatch(triangle, params, ellipsoid, HatchingStrategy.GEODESIC)
        print(f"Bearing {bearing:.0f}: {len(hatch_lines)} lines")
        plot_hatching(ax, triangle, hatch_lines, "Example 3: Cross Hatch", color=color)

    plt.tight_layout()
    plt.show()


def main():
    """Run all examples."""
    print("\n" + "=" * 60)
    print("Geodesic Hatching Examples")
    print("=" * 60)
    print(f"\nRegistered strategies: {[s.value for s in registry.list_strategies()]}")

    ellipsoid = Ellipsoid.wgs84()
    example_1_basic_square(ellipsoid)
    example_2_strategy_comparison(ellipsoid)
    example_3_cross_hatch(ellipsoid)


if __name__ == '__main__':
    main()
