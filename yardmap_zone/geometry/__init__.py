"""
Geometry Layer
==============

Bounded Context: Pure geometry over lat/lng coordinates.

Responsibilities:
- Value types (Coordinate, Path, BoundingBox, GeoJsonGeometry)
- Spherical polygon area
- Bounding boxes of tagged geometries
- Coordinate-derived identifiers
- NO state, NO store, NO session logic

Design Philosophy:
- Pure functions
- Immutable data structures
- Degenerate input yields 0 / None, never an exception
"""

from yardmap_zone.geometry.shapes import (
    Coordinate,
    Path,
    as_path,
    BoundingBox,
    GeometryType,
    GeoJsonGeometry,
)
from yardmap_zone.geometry.area import (
    EARTH_RADIUS_M,
    polygon_area,
    square_meters_to_square_feet,
)
from yardmap_zone.geometry.bounds import (
    bounding_box,
    bounding_box_dict,
    flatten_coordinates,
    line_string_for_bounds,
    path_bounding_box,
)
from yardmap_zone.geometry.identifiers import coordinate_key, next_id

__all__ = [
    # Shapes
    "Coordinate",
    "Path",
    "as_path",
    "BoundingBox",
    "GeometryType",
    "GeoJsonGeometry",
    # Area
    "EARTH_RADIUS_M",
    "polygon_area",
    "square_meters_to_square_feet",
    # Bounds
    "bounding_box",
    "bounding_box_dict",
    "flatten_coordinates",
    "line_string_for_bounds",
    "path_bounding_box",
    # Identifiers
    "coordinate_key",
    "next_id",
]
