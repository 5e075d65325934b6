"""
Submission Message Schema
=========================

Bounded Context: Host hand-off

The working set handed to the host application on "submit". Records are
carried unmodified; the host owns persistence and networking.

Message Flow:
    DrawingSessionController.submit() -> SubmissionMessage -> host
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence, Tuple

from yardmap_zone.geometry.area import square_meters_to_square_feet
from yardmap_zone.store import PolygonRecord
from .common import Timestamp

SCHEMA_VERSION = "1.0"


def polygon_feature(record: PolygonRecord) -> Dict[str, Any]:
    """
    GeoJSON Feature for one record.

    The ring is closed explicitly (GeoJSON requires first == last) and
    positions are [lng, lat].
    """
    ring = [c.to_lng_lat() for c in record.path]
    if ring and ring[0] != ring[-1]:
        ring.append(list(ring[0]))

    return {
        "type": "Feature",
        "id": record.id,
        "geometry": {"type": "Polygon", "coordinates": [ring]},
        "properties": {"area": record.area},
    }


@dataclass(frozen=True)
class SubmissionMessage:
    """
    Complete working set at submit time.

    Attributes:
        session_id: Mapping session identifier
        timestamp: When the host submitted
        polygons: Records in working-set order
        schema_version: Message schema version

    Example:
        >>> msg = SubmissionMessage.from_records("yard_01", controller.submit())
        >>> msg.total_area
        1520.0
    """
    session_id: str
    timestamp: Timestamp
    polygons: Tuple[PolygonRecord, ...] = field(default_factory=tuple)
    schema_version: str = SCHEMA_VERSION

    @classmethod
    def from_records(cls, session_id: str, records: Sequence[PolygonRecord]) -> 'SubmissionMessage':
        return cls(session_id=session_id, timestamp=Timestamp.now(), polygons=tuple(records))

    @property
    def polygon_count(self) -> int:
        return len(self.polygons)

    @property
    def total_area(self) -> float:
        """Square meters across all polygons."""
        return float(sum(p.area for p in self.polygons))

    @property
    def total_area_sq_ft(self) -> float:
        return square_meters_to_square_feet(self.total_area)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict."""
        return {
            "schema_version": self.schema_version,
            "session_id": self.session_id,
            "timestamp": self.timestamp.to_dict(),
            "polygon_count": self.polygon_count,
            "total_area": self.total_area,
            "polygons": [p.to_dict() for p in self.polygons],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SubmissionMessage':
        """
        Deserialize from dict.

        Raises:
            ValueError: If required fields are missing
        """
        try:
            return cls(
                session_id=data["session_id"],
                timestamp=Timestamp(value=data["timestamp"]),
                polygons=tuple(PolygonRecord.from_dict(p) for p in data.get("polygons", [])),
                schema_version=data.get("schema_version", SCHEMA_VERSION),
            )
        except KeyError as e:
            raise ValueError(f"Missing required SubmissionMessage field: {e}")

    def to_feature_collection(self) -> Dict[str, Any]:
        """GeoJSON FeatureCollection of Polygon features."""
        features: List[Dict[str, Any]] = [polygon_feature(p) for p in self.polygons]
        return {"type": "FeatureCollection", "features": features}
