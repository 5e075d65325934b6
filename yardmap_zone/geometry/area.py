"""
Polygon Area Module
===================

Spherical polygon area for lat/lng rings - pure functions, no state.

Design:
- Ring is implicitly closed (last vertex connects back to the first)
- Spherical excess approximation on a sphere of the WGS84 equatorial radius
- Magnitude only: winding direction and starting vertex do not matter
- Degenerate rings (< 3 vertices) have area 0, never an error

Formula (cyclic indices):

    A = | sum_i (lng[i+1] - lng[i-1]) * sin(lat[i]) | * R^2 / 2

This is the approximation geolib's getAreaOfPolygon uses, not an exact
geodesic (ellipsoidal) area.
"""

import numpy as np
from typing import Sequence

from yardmap_zone.geometry.shapes import Coordinate

EARTH_RADIUS_M = 6378137.0
SQUARE_FEET_PER_SQUARE_METER = 10.763910416709722

MIN_POLYGON_VERTICES = 3


def polygon_area(path: Sequence[Coordinate], earth_radius_m: float = EARTH_RADIUS_M) -> float:
    """
    Compute the area enclosed by a lat/lng ring in square meters.

    Args:
        path: Ordered vertices; the closing edge is implicit
        earth_radius_m: Sphere radius used for the approximation

    Returns:
        Area rounded half-up to an integer-valued float. 0.0 for fewer
        than 3 vertices.
    """
    if len(path) < MIN_POLYGON_VERTICES:
        return 0.0

    lats = np.radians(np.fromiter((c.lat for c in path), dtype=np.float64, count=len(path)))
    lngs = np.radians(np.fromiter((c.lng for c in path), dtype=np.float64, count=len(path)))

    # Shift so index i pairs lng[i+1] - lng[i-1] with lat[i]
    spans = np.roll(lngs, -1) - np.roll(lngs, 1)
    excess = float(np.sum(spans * np.sin(lats)))

    area = abs(excess) * earth_radius_m * earth_radius_m / 2.0
    return float(np.floor(area + 0.5))


def square_meters_to_square_feet(area_m2: float) -> float:
    """Convert square meters to square feet (lawn sizes are quoted in sq ft)."""
    return area_m2 * SQUARE_FEET_PER_SQUARE_METER
