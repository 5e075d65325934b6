"""
yardmap Zone Core
=================

Bounded Context: Lawn-area polygon session.

Design Philosophy:
- Separation of Concerns: Geometry, Store, Session separated
- Geometry is pure; the store owns records; the session owns the mode
- UI-framework-free: widgets talk to it through yardmap_control

Architecture:

    yardmap_zone/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── shapes.py      # Coordinate, BoundingBox, GeoJsonGeometry
    │   ├── area.py        # polygon_area (spherical)
    │   ├── bounds.py      # bounding_box (MultiPolygon / LineString)
    │   └── identifiers.py # next_id (coordinate-based)
    │
    ├── store.py           # PolygonStore, PolygonRecord (stateful)
    ├── session.py         # DrawingSessionController (state machine)
    └── errors.py          # SessionError taxonomy

Usage:

    from yardmap_zone import Coordinate, DrawingSessionController

    controller = DrawingSessionController()
    record = controller.complete_polygon([
        Coordinate(39.7440, -105.1016),
        Coordinate(39.7440, -105.1012),
        Coordinate(39.7437, -105.1012),
    ])
    controller.polygons_editable   # True
    controller.edit_existing(record.id, new_path)
    controller.clear_all()         # back to drawing
"""

# Geometry Layer (immutable, stateless)
from yardmap_zone.geometry import (
    Coordinate,
    Path,
    BoundingBox,
    GeoJsonGeometry,
    GeometryType,
    polygon_area,
    bounding_box,
    next_id,
)

# Errors
from yardmap_zone.errors import (
    SessionError,
    InvalidTransitionError,
    UnknownPolygonIdError,
    DegenerateGeometryError,
)

# Store (stateful)
from yardmap_zone.store import PolygonRecord, PolygonStore

# Session (state machine)
from yardmap_zone.session import (
    SessionMode,
    SessionSnapshot,
    DrawingSessionController,
)

__all__ = [
    # Geometry
    "Coordinate",
    "Path",
    "BoundingBox",
    "GeoJsonGeometry",
    "GeometryType",
    "polygon_area",
    "bounding_box",
    "next_id",
    # Errors
    "SessionError",
    "InvalidTransitionError",
    "UnknownPolygonIdError",
    "DegenerateGeometryError",
    # Store
    "PolygonRecord",
    "PolygonStore",
    # Session
    "SessionMode",
    "SessionSnapshot",
    "DrawingSessionController",
]

__version__ = "1.0.0"
