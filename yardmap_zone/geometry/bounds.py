"""
Bounding Box Module
===================

Axis-aligned lat/long bounds for GeoJSON-style geometries and paths.

Design:
- Tagged input: MultiPolygon ([[[[lng, lat]]]]) or LineString ([[lng, lat]])
- Each nesting level is flattened in one linear pass (never a recursive
  per-element concat, which degrades on very long rings)
- Explicit empty result (None) instead of a partially-filled box
"""

from itertools import chain
from typing import Any, Dict, List, Optional, Sequence, Union

import numpy as np

from yardmap_zone.geometry.shapes import (
    BoundingBox,
    Coordinate,
    GeoJsonGeometry,
    GeometryType,
)

GeometryLike = Union[GeoJsonGeometry, Dict[str, Any]]


def _coerce_geometry(geometry: GeometryLike) -> GeoJsonGeometry:
    if isinstance(geometry, GeoJsonGeometry):
        return geometry
    return GeoJsonGeometry.from_dict(geometry)


def flatten_coordinates(geometry: GeometryLike) -> List[Sequence[float]]:
    """
    Flatten a tagged geometry to a single list of [lng, lat] pairs.

    Unknown geometry types flatten to an empty list.
    """
    geometry = _coerce_geometry(geometry)

    if geometry.type == GeometryType.MULTI_POLYGON.value:
        # regions -> rings, then rings -> pairs
        rings = list(chain.from_iterable(geometry.coordinates))
        return list(chain.from_iterable(rings))

    if geometry.type == GeometryType.LINE_STRING.value:
        return list(geometry.coordinates)

    return []


def bounding_box(geometry: GeometryLike) -> Optional[BoundingBox]:
    """
    Compute the bounding box of a MultiPolygon or LineString geometry.

    Args:
        geometry: GeoJsonGeometry or {"type": ..., "coordinates": ...}

    Returns:
        BoundingBox, or None when there is no usable coordinate pair
        (empty list, empty first pair, or malformed nesting/ordinates).
    """
    try:
        coords = flatten_coordinates(geometry)
    except TypeError:
        # a nesting level holds scalars instead of sequences
        return None

    if not coords:
        return None
    if any(not isinstance(pair, (list, tuple)) or len(pair) < 2 for pair in coords):
        return None

    try:
        pairs = np.array([(pair[0], pair[1]) for pair in coords], dtype=np.float64)
    except (TypeError, ValueError):
        return None
    mins = pairs.min(axis=0)
    maxs = pairs.max(axis=0)

    return BoundingBox(
        min_lat=float(mins[1]),
        max_lat=float(maxs[1]),
        min_long=float(mins[0]),
        max_long=float(maxs[0]),
    )


def bounding_box_dict(geometry: GeometryLike) -> Dict[str, float]:
    """Flat dict form of bounding_box(); {} is the empty marker."""
    bbox = bounding_box(geometry)
    return bbox.to_dict() if bbox is not None else {}


def path_bounding_box(path: Sequence[Coordinate]) -> Optional[BoundingBox]:
    """Bounding box of a lat/lng path (None for an empty path)."""
    return bounding_box(
        GeoJsonGeometry(
            type=GeometryType.LINE_STRING.value,
            coordinates=[c.to_lng_lat() for c in path],
        )
    )


def line_string_for_bounds(bounds: Sequence[Sequence[float]]) -> GeoJsonGeometry:
    """Wrap a list of [lng, lat] pairs (e.g. bounds from a URL) as a LineString."""
    return GeoJsonGeometry(
        type=GeometryType.LINE_STRING.value,
        coordinates=[list(pair) for pair in bounds],
    )
