"""
Configuration schema for a mapping session.

Defines the map center, the area model parameters, id keying and the
per-mode helper text shown by the host.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional
import yaml

from yardmap_zone.geometry.area import EARTH_RADIUS_M
from yardmap_zone.geometry.shapes import Coordinate
from yardmap_zone.session import DEFAULT_HELPER_TEXT, SessionMode

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass(frozen=True)
class HelperTextConfig:
    """Banner text per session mode."""

    drawing: str = DEFAULT_HELPER_TEXT[SessionMode.DRAWING]
    editing: str = DEFAULT_HELPER_TEXT[SessionMode.EDITING]

    def __post_init__(self):
        """Validate helper text."""
        if not self.drawing or not self.editing:
            raise ValueError("helper_text entries cannot be empty")

    def as_mode_map(self) -> Dict[SessionMode, str]:
        return {
            SessionMode.DRAWING: self.drawing,
            SessionMode.EDITING: self.editing,
        }


@dataclass(frozen=True)
class SessionConfig:
    """
    Main configuration for a mapping session.

    Loaded from YAML and validated at construction.
    Immutable after construction (frozen dataclass).
    """

    # Session identification
    session_id: str

    # Initial map center
    center: Optional[Coordinate] = None

    # Area model
    earth_radius_m: float = EARTH_RADIUS_M

    # Vertex whose location keys new polygon ids
    id_anchor_index: int = 0

    # Logging
    log_level: str = "INFO"

    # Host banner text
    helper_text: HelperTextConfig = field(default_factory=HelperTextConfig)

    def __post_init__(self):
        """Validate session configuration."""
        if not self.session_id:
            raise ValueError("session_id cannot be empty")

        if self.center is not None:
            if not -90.0 <= self.center.lat <= 90.0:
                raise ValueError(
                    f"center.lat must be in [-90, 90], got {self.center.lat}"
                )
            if not -180.0 <= self.center.lng <= 180.0:
                raise ValueError(
                    f"center.lng must be in [-180, 180], got {self.center.lng}"
                )

        if self.earth_radius_m <= 0:
            raise ValueError(
                f"earth_radius_m must be positive, got {self.earth_radius_m}"
            )

        if self.id_anchor_index < 0:
            raise ValueError(
                f"id_anchor_index must be >= 0, got {self.id_anchor_index}"
            )

        if self.log_level.upper() not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Invalid log_level: {self.log_level}. "
                f"Must be one of {sorted(VALID_LOG_LEVELS)}"
            )

    @property
    def logging_level(self) -> int:
        return getattr(logging, self.log_level.upper())

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionConfig":
        """
        Build from a parsed YAML/JSON mapping.

        Raises:
            ValueError: If session_id is missing, a section is malformed or
                helper_text has unknown keys
        """
        if "session_id" not in data:
            raise ValueError("Missing required config field: session_id")

        center_data = data.get("center")
        center = Coordinate.from_dict(center_data) if center_data else None

        helper_data = data.get("helper_text") or {}
        if not isinstance(helper_data, dict):
            raise ValueError(f"helper_text must be a mapping, got {type(helper_data).__name__}")
        unknown = set(helper_data) - {"drawing", "editing"}
        if unknown:
            raise ValueError(
                f"Unknown helper_text keys: {sorted(map(str, unknown))}. "
                f"Must be 'drawing' and/or 'editing'"
            )
        helper_text = HelperTextConfig(**helper_data)

        return cls(
            session_id=data["session_id"],
            center=center,
            earth_radius_m=float(data.get("earth_radius_m", EARTH_RADIUS_M)),
            id_anchor_index=int(data.get("id_anchor_index", 0)),
            log_level=str(data.get("log_level", "INFO")),
            helper_text=helper_text,
        )

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "SessionConfig":
        """
        Load configuration from YAML file.

        Example YAML:
            session_id: "yard_01"
            center:
              lat: 39.744031
              lng: -105.1014172
            earth_radius_m: 6378137.0
            id_anchor_index: 0
            log_level: "INFO"
            helper_text:
              drawing: "Connect last point to the first to complete shape"
              editing: "Tap to add to lawn area. Press and hold points to move"
        """
        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls.from_dict(data)
