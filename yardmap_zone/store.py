"""
Polygon Store Module
====================

Stateful working set of user-drawn polygons.

Design:
- Mutable state (private ordered dict keyed by id)
- Immutable records (PolygonRecord) and snapshots (tuple)
- Area is derived: computed on every add/replace, never set by callers
- Asymmetric lifecycle: add / replace / clear, no single delete
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterator, Optional, Sequence, Set, Tuple

from yardmap_zone.errors import DegenerateGeometryError, UnknownPolygonIdError
from yardmap_zone.geometry.area import (
    EARTH_RADIUS_M,
    polygon_area,
    square_meters_to_square_feet,
)
from yardmap_zone.geometry.identifiers import next_id
from yardmap_zone.geometry.shapes import Coordinate, Path, as_path


@dataclass(frozen=True)
class PolygonRecord:
    """
    Immutable polygon record.

    Attributes:
        id: Stable identifier, unique within one store
        path: Vertices (implicitly closed)
        area: Square meters, as computed from path at the last mutation
    """

    id: str
    path: Path
    area: float

    @property
    def area_sq_ft(self) -> float:
        return square_meters_to_square_feet(self.area)

    @property
    def vertex_count(self) -> int:
        return len(self.path)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the widget's {id, path, area} shape."""
        return {
            "id": self.id,
            "path": [c.to_dict() for c in self.path],
            "area": self.area,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PolygonRecord":
        """
        Deserialize a record handed back by the host.

        Raises:
            ValueError: If required keys are missing
        """
        try:
            return cls(
                id=str(data["id"]),
                path=as_path(data["path"]),
                area=float(data["area"]),
            )
        except KeyError as e:
            raise ValueError(f"Missing required PolygonRecord field: {e}")

    def __str__(self) -> str:
        return f"{self.id}: {self.area:.0f} m² ({len(self.path)} vertices)"


class PolygonStore:
    """
    Ordered collection of PolygonRecord for one mapping session.

    Invariants:
    - No two records share an id, and an id is never reissued, even
      after clear() (a stale edit for a cleared polygon stays unknown)
    - Every record's area equals polygon_area(record.path)

    Iteration order is insertion order; a replaced record moves to the end.

    Usage:
        store = PolygonStore()
        record = store.add(path)
        record = store.replace(record.id, new_path)
        store.clear()
    """

    def __init__(self, earth_radius_m: float = EARTH_RADIUS_M, anchor_index: int = 0):
        """
        Args:
            earth_radius_m: Sphere radius for area computation
            anchor_index: Vertex whose location keys new ids (clamped to the path)
        """
        self.earth_radius_m = earth_radius_m
        self.anchor_index = anchor_index
        self._records: Dict[str, PolygonRecord] = {}
        # Every id handed out, including cleared ones; ids are never reused
        self._issued_ids: Set[str] = set()

    def _make_record(self, polygon_id: str, path: Path) -> PolygonRecord:
        return PolygonRecord(
            id=polygon_id,
            path=path,
            area=polygon_area(path, self.earth_radius_m),
        )

    def _anchor_for(self, path: Path) -> Coordinate:
        return path[min(max(self.anchor_index, 0), len(path) - 1)]

    def add(self, path: Sequence[Coordinate], anchor: Optional[Coordinate] = None) -> PolygonRecord:
        """
        Add a newly completed polygon.

        Args:
            path: Vertices of the finished outline
            anchor: Coordinate to key the id off (default: the anchor vertex)

        Returns:
            The new record

        Raises:
            DegenerateGeometryError: If path is empty and no anchor is given
        """
        path = as_path(path)
        if anchor is None:
            if not path:
                raise DegenerateGeometryError("Cannot add a polygon with an empty path")
            anchor = self._anchor_for(path)

        record = self._make_record(next_id(self._issued_ids, anchor), path)
        self._issued_ids.add(record.id)
        self._records[record.id] = record
        return record

    def replace(self, polygon_id: str, path: Sequence[Coordinate]) -> PolygonRecord:
        """
        Replace a polygon's path and recompute its area.

        Raises:
            UnknownPolygonIdError: If polygon_id is not in the working set
                (nothing is mutated)
        """
        if polygon_id not in self._records:
            raise UnknownPolygonIdError(polygon_id)

        record = self._make_record(polygon_id, as_path(path))
        del self._records[polygon_id]
        self._records[polygon_id] = record
        return record

    def clear(self) -> None:
        """Remove every record. Issued ids stay reserved."""
        self._records.clear()

    def get(self, polygon_id: str) -> Optional[PolygonRecord]:
        return self._records.get(polygon_id)

    def ids(self) -> Tuple[str, ...]:
        return tuple(self._records.keys())

    def snapshot(self) -> Tuple[PolygonRecord, ...]:
        """Immutable view of the working set, in iteration order."""
        return tuple(self._records.values())

    def total_area(self) -> float:
        """Sum of all record areas in square meters."""
        return float(sum(r.area for r in self._records.values()))

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, polygon_id: object) -> bool:
        return polygon_id in self._records

    def __iter__(self) -> Iterator[PolygonRecord]:
        return iter(self.snapshot())

    def __repr__(self) -> str:
        return f"PolygonStore(polygons={len(self._records)})"
