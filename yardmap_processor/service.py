"""
Mapping Session Service - per-session orchestrator.

Wires one mapping session together:
- SessionConfig -> PolygonStore + DrawingSessionController
- Widget commands registered on a CommandRegistry
- WidgetEventAdapter as the single entry point for widget events
- SubmissionMessage built for the host on "submit"

Threading Model:
- None. Events are handled synchronously, in arrival order, on the
  caller's thread.
"""

import logging
from typing import Any, Callable, Dict, Optional, Tuple, Union

from yardmap_control import CommandRegistry, MalformedEventError, WidgetEventAdapter
from yardmap_host.logging import StructuredLogger, create_logger
from yardmap_host.schemas import SubmissionMessage
from yardmap_zone.geometry.shapes import Coordinate, Path, as_path
from yardmap_zone.session import DrawingSessionController, SessionSnapshot, SnapshotListener
from yardmap_zone.store import PolygonRecord, PolygonStore
from yardmap_processor.config import SessionConfig

logger = logging.getLogger(__name__)

SubmissionCallback = Callable[[SubmissionMessage], None]


class MappingSessionService:
    """
    One mapping session: store, controller and widget adapter.

    Usage:
        config = SessionConfig.from_yaml("session.yaml")
        service = MappingSessionService(config, on_submit=host.save)
        service.add_listener(widget.render)

        service.handle_event({"event": "polygon_complete", "path": [...]})
        service.handle_event({"event": "polygon_edited", "id": "...", "path": [...]})
        service.handle_event({"event": "submit"})
    """

    def __init__(
        self,
        config: SessionConfig,
        structured_logger: Optional[StructuredLogger] = None,
        on_submit: Optional[SubmissionCallback] = None,
    ):
        """
        Args:
            config: Session configuration
            structured_logger: Structured logger (default: component "session")
            on_submit: Host callback receiving the SubmissionMessage
        """
        self.config = config
        self.structured_logger = structured_logger or create_logger("session", level=config.logging_level)
        self.on_submit = on_submit
        self.last_submission: Optional[SubmissionMessage] = None

        self.store = PolygonStore(
            earth_radius_m=config.earth_radius_m,
            anchor_index=config.id_anchor_index,
        )
        self.controller = DrawingSessionController(
            store=self.store,
            center=config.center,
            helper_text=config.helper_text.as_mode_map(),
            logger=self.structured_logger,
            on_submit=self._on_records_submitted,
        )
        self.adapter = WidgetEventAdapter(CommandRegistry(), self.structured_logger)
        self._setup_command_handlers()

        logger.info(
            f"MappingSessionService initialized for session_id={config.session_id}"
        )

    def _setup_command_handlers(self):
        """Register widget commands with the adapter's command registry."""
        registry = self.adapter.command_registry

        registry.register(
            "polygon_complete",
            self._handle_polygon_complete,
            "Add a finished outline and switch to editing"
        )
        registry.register(
            "polygon_edited",
            self._handle_polygon_edited,
            "Replace an existing polygon's path"
        )
        registry.register(
            "map_clicked",
            self._handle_map_clicked,
            "Arm drawing mode"
        )
        registry.register(
            "clear_polygons",
            self._handle_clear_polygons,
            "Remove all polygons and re-arm drawing"
        )
        registry.register(
            "center_map",
            self._handle_center_map,
            "Get the map center to pan to"
        )
        registry.register(
            "submit",
            self._handle_submit,
            "Hand the working set to the host"
        )

        logger.info("Widget command handlers registered")

    # ─────────────────────────────────────────────────────────────────────
    # Public API
    # ─────────────────────────────────────────────────────────────────────

    def handle_event(self, event: Dict[str, Any]) -> bool:
        """Dispatch one widget event; False if it was rejected."""
        return self.adapter.dispatch(event)

    def handle_message(self, payload: Union[str, bytes]) -> bool:
        """Dispatch one JSON-encoded widget event."""
        return self.adapter.handle_message(payload)

    def add_listener(self, listener: SnapshotListener) -> None:
        self.controller.add_listener(listener)

    def snapshot(self) -> SessionSnapshot:
        return self.controller.snapshot()

    # ─────────────────────────────────────────────────────────────────────
    # Command Handlers
    # ─────────────────────────────────────────────────────────────────────

    @staticmethod
    def _parse_path(command: Dict) -> Path:
        try:
            return as_path(command["path"])
        except KeyError:
            raise MalformedEventError("Event has no 'path'")
        except (TypeError, ValueError) as e:
            raise MalformedEventError(f"Invalid 'path': {e}")

    @staticmethod
    def _parse_polygon_id(command: Dict) -> str:
        try:
            return str(command["id"])
        except KeyError:
            raise MalformedEventError("Event has no 'id'")

    def _handle_polygon_complete(self, command: Dict) -> PolygonRecord:
        path = self._parse_path(command)
        return self.controller.complete_polygon(path)

    def _handle_polygon_edited(self, command: Dict) -> PolygonRecord:
        polygon_id = self._parse_polygon_id(command)
        path = self._parse_path(command)
        return self.controller.edit_existing(polygon_id, path)

    def _handle_map_clicked(self, command: Dict) -> None:
        self.controller.request_new_drawing()

    def _handle_clear_polygons(self, command: Dict) -> None:
        self.controller.clear_all()

    def _handle_center_map(self, command: Dict) -> Optional[Coordinate]:
        return self.controller.center_map()

    def _handle_submit(self, command: Dict) -> Tuple[PolygonRecord, ...]:
        return self.controller.submit()

    def _on_records_submitted(self, records: Tuple[PolygonRecord, ...]) -> None:
        message = SubmissionMessage.from_records(self.config.session_id, records)
        self.last_submission = message
        logger.info(
            f"Submission ready: {message.polygon_count} polygons, "
            f"{message.total_area:.0f} m²"
        )
        if self.on_submit is not None:
            self.on_submit(message)
