"""
Geometric Value Types
=====================

Pure value objects shared by the geometry layer - NO state, NO side effects.

Design:
- Immutable shapes (frozen dataclass pattern)
- Paths are frozen to tuples on construction
- GeoJSON ordinate order ([lng, lat]) only at the interchange edge
"""

from dataclasses import dataclass, asdict
from enum import Enum
from typing import Any, Dict, Iterable, List, Sequence, Tuple, Union


@dataclass(frozen=True)
class Coordinate:
    """
    Immutable latitude/longitude pair.

    Range is a caller contract (lat in [-90, 90], lng in [-180, 180]);
    it is not enforced here.

    Attributes:
        lat: Latitude in decimal degrees
        lng: Longitude in decimal degrees
    """

    lat: float
    lng: float

    def to_dict(self) -> Dict[str, float]:
        """Serialize to the widget's {lat, lng} shape."""
        return asdict(self)

    def to_lng_lat(self) -> List[float]:
        """GeoJSON position ([longitude, latitude])."""
        return [self.lng, self.lat]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Coordinate":
        """
        Deserialize from a {lat, lng} mapping.

        Raises:
            ValueError: If keys are missing or ordinates are not numeric
        """
        try:
            return cls(lat=float(data["lat"]), lng=float(data["lng"]))
        except KeyError as e:
            raise ValueError(f"Missing required Coordinate field: {e}")
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid Coordinate data: {e}")


Path = Tuple[Coordinate, ...]


def as_path(points: Iterable[Union[Coordinate, Dict[str, Any]]]) -> Path:
    """Freeze a vertex sequence into a Path, accepting {lat, lng} dicts."""
    return tuple(
        p if isinstance(p, Coordinate) else Coordinate.from_dict(p)
        for p in points
    )


@dataclass(frozen=True)
class BoundingBox:
    """
    Minimal axis-aligned lat/long rectangle.

    An empty geometry has no BoundingBox at all (None), never a
    partially-filled one.
    """

    min_lat: float
    max_lat: float
    min_long: float
    max_long: float

    def to_dict(self) -> Dict[str, float]:
        """Serialize to the flat {min_lat, max_lat, min_long, max_long} record."""
        return asdict(self)

    def contains(self, coordinate: Coordinate) -> bool:
        return (
            self.min_lat <= coordinate.lat <= self.max_lat
            and self.min_long <= coordinate.lng <= self.max_long
        )


class GeometryType(str, Enum):
    """Tags of the geometry interchange union."""
    MULTI_POLYGON = "MultiPolygon"
    LINE_STRING = "LineString"


@dataclass(frozen=True)
class GeoJsonGeometry:
    """
    Tagged geometry in GeoJSON layout.

    MultiPolygon coordinates nest regions -> rings -> [lng, lat] pairs;
    LineString coordinates are a flat list of [lng, lat] pairs.
    """

    type: str
    coordinates: Sequence[Any]

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "coordinates": list(self.coordinates)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GeoJsonGeometry":
        return cls(type=data.get("type", ""), coordinates=data.get("coordinates") or [])
