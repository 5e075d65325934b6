"""
Drawing Session Module
======================

State machine that gates drawing vs. editing for one mapping session.

States:
    DRAWING  - the widget is capturing a new outline; nothing is editable
    EDITING  - no outline capture; existing polygons may be reshaped

Transitions:
    complete_polygon     DRAWING -> EDITING   (store.add)
    edit_existing        EDITING -> EDITING   (store.replace)
    request_new_drawing  any     -> DRAWING
    clear_all            any     -> DRAWING   (store.clear)

Illegal transitions raise InvalidTransitionError and change nothing.
There is no terminal state; the controller is dropped with its session.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple

from yardmap_host.logging import LogEvent, StructuredLogger, create_logger
from yardmap_zone.errors import InvalidTransitionError, SessionError
from yardmap_zone.geometry.shapes import Coordinate
from yardmap_zone.store import PolygonRecord, PolygonStore


class SessionMode(str, Enum):
    """Process-wide UI-facing session mode."""
    DRAWING = "drawing"
    EDITING = "editing"


# Widget drawing-mode value while DRAWING; None while EDITING
POLYGON_DRAWING_MODE = "polygon"

DEFAULT_HELPER_TEXT: Dict[SessionMode, str] = {
    SessionMode.DRAWING: "Connect last point to the first to complete shape",
    SessionMode.EDITING: "Tap to add to lawn area. Press and hold points to move",
}


@dataclass(frozen=True)
class SessionSnapshot:
    """
    Immutable view of a session after an event.

    This is what gets echoed back to the widget for re-rendering.
    """

    polygons: Tuple[PolygonRecord, ...]
    mode: SessionMode
    polygons_editable: bool
    clear_control_visible: bool
    helper_text: str
    total_area: float

    @property
    def drawing_mode(self) -> Optional[str]:
        return POLYGON_DRAWING_MODE if self.mode == SessionMode.DRAWING else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "polygons": [p.to_dict() for p in self.polygons],
            "mode": self.mode.value,
            "drawing_mode": self.drawing_mode,
            "polygons_editable": self.polygons_editable,
            "clear_control_visible": self.clear_control_visible,
            "helper_text": self.helper_text,
            "total_area": self.total_area,
        }


SnapshotListener = Callable[[SessionSnapshot], None]
SubmitCallback = Callable[[Tuple[PolygonRecord, ...]], None]


class DrawingSessionController:
    """
    Drawing/Editing state machine over a PolygonStore.

    Derived flags are recomputed on every query, never cached.

    Usage:
        controller = DrawingSessionController()
        record = controller.complete_polygon(path)      # -> EDITING
        controller.edit_existing(record.id, new_path)
        controller.clear_all()                          # -> DRAWING
    """

    def __init__(
        self,
        store: Optional[PolygonStore] = None,
        center: Optional[Coordinate] = None,
        helper_text: Optional[Mapping[SessionMode, str]] = None,
        logger: Optional[StructuredLogger] = None,
        on_submit: Optional[SubmitCallback] = None,
    ):
        """
        Args:
            store: Working set owned by this session (default: new empty store)
            center: Initial map center, returned by center_map()
            helper_text: Per-mode banner text overrides
            logger: Structured logger (default: component "session")
            on_submit: Host callback receiving the records on submit()
        """
        self._store = store if store is not None else PolygonStore()
        self._mode = SessionMode.DRAWING
        self.center = center
        self._helper_text = dict(DEFAULT_HELPER_TEXT)
        if helper_text:
            self._helper_text.update(helper_text)
        self.logger = logger or create_logger("session")
        self.on_submit = on_submit
        self._listeners: List[SnapshotListener] = []

    # ─────────────────────────────────────────────────────────────────────
    # Derived queries
    # ─────────────────────────────────────────────────────────────────────

    @property
    def store(self) -> PolygonStore:
        return self._store

    @property
    def mode(self) -> SessionMode:
        return self._mode

    @property
    def drawing_mode(self) -> Optional[str]:
        """Nullable widget drawing mode: 'polygon' while drawing, else None."""
        return POLYGON_DRAWING_MODE if self._mode == SessionMode.DRAWING else None

    @property
    def polygons_editable(self) -> bool:
        return self._mode == SessionMode.EDITING

    @property
    def clear_control_visible(self) -> bool:
        return len(self._store) > 0 and self._mode == SessionMode.EDITING

    @property
    def helper_text(self) -> str:
        return self._helper_text[self._mode]

    @property
    def polygons(self) -> Tuple[PolygonRecord, ...]:
        return self._store.snapshot()

    def snapshot(self) -> SessionSnapshot:
        return SessionSnapshot(
            polygons=self._store.snapshot(),
            mode=self._mode,
            polygons_editable=self.polygons_editable,
            clear_control_visible=self.clear_control_visible,
            helper_text=self.helper_text,
            total_area=self._store.total_area(),
        )

    # ─────────────────────────────────────────────────────────────────────
    # Listeners
    # ─────────────────────────────────────────────────────────────────────

    def add_listener(self, listener: SnapshotListener) -> None:
        """Register a callback receiving the snapshot after every change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: SnapshotListener) -> None:
        self._listeners.remove(listener)

    def _notify(self) -> None:
        if not self._listeners:
            return
        snapshot = self.snapshot()
        for listener in list(self._listeners):
            listener(snapshot)

    # ─────────────────────────────────────────────────────────────────────
    # Transitions
    # ─────────────────────────────────────────────────────────────────────

    def _require(self, operation: str, mode: SessionMode) -> None:
        if self._mode != mode:
            error = InvalidTransitionError(operation, self._mode.value)
            self.logger.warning(
                event=LogEvent.INVALID_TRANSITION,
                message=str(error),
                metadata={'operation': operation, 'mode': self._mode.value}
            )
            raise error

    def complete_polygon(self, raw_path: Sequence[Coordinate]) -> PolygonRecord:
        """
        Add a finished outline and switch to editing.

        Raises:
            InvalidTransitionError: If not drawing (nothing is added)
            DegenerateGeometryError: If raw_path is empty (mode unchanged)
        """
        self._require("complete_polygon", SessionMode.DRAWING)

        try:
            record = self._store.add(raw_path)
        except SessionError as e:
            self.logger.warning(
                event=LogEvent.DEGENERATE_GEOMETRY,
                message="Rejected polygon outline",
                exc_info=e
            )
            raise

        self._mode = SessionMode.EDITING
        self.logger.info(
            event=LogEvent.POLYGON_COMPLETED,
            message="Polygon completed",
            metadata={
                'polygon_id': record.id,
                'area': record.area,
                'vertices': record.vertex_count,
            }
        )
        self._notify()
        return record

    def request_new_drawing(self) -> None:
        """Arm drawing mode. Idempotent."""
        if self._mode == SessionMode.DRAWING:
            return

        self._mode = SessionMode.DRAWING
        self.logger.info(
            event=LogEvent.SESSION_DRAWING_REQUESTED,
            message="Drawing mode requested",
            metadata={'polygons': len(self._store)}
        )
        self._notify()

    def clear_all(self) -> None:
        """Empty the working set and re-arm drawing mode."""
        cleared = len(self._store)
        self._store.clear()
        self._mode = SessionMode.DRAWING
        self.logger.info(
            event=LogEvent.SESSION_CLEARED,
            message=f"Cleared {cleared} polygons",
            metadata={'cleared': cleared}
        )
        self._notify()

    def edit_existing(self, polygon_id: str, new_path: Sequence[Coordinate]) -> PolygonRecord:
        """
        Replace an existing polygon's path.

        Raises:
            InvalidTransitionError: If drawing
            UnknownPolygonIdError: If polygon_id was never added or was cleared
        """
        self._require("edit_existing", SessionMode.EDITING)

        try:
            record = self._store.replace(polygon_id, new_path)
        except SessionError as e:
            self.logger.warning(
                event=LogEvent.UNKNOWN_POLYGON,
                message=str(e),
                metadata={'polygon_id': polygon_id}
            )
            raise

        self.logger.info(
            event=LogEvent.POLYGON_EDITED,
            message="Polygon edited",
            metadata={
                'polygon_id': record.id,
                'area': record.area,
                'vertices': record.vertex_count,
            }
        )
        self._notify()
        return record

    # ─────────────────────────────────────────────────────────────────────
    # Host hand-off
    # ─────────────────────────────────────────────────────────────────────

    def center_map(self) -> Optional[Coordinate]:
        """Return the configured center for the widget to pan to."""
        self.logger.info(
            event=LogEvent.SESSION_CENTERED,
            message="Map center requested",
            metadata={'center': self.center.to_dict() if self.center else None}
        )
        return self.center

    def submit(self) -> Tuple[PolygonRecord, ...]:
        """Hand the unmodified working set to the host."""
        records = self._store.snapshot()
        self.logger.info(
            event=LogEvent.SESSION_SUBMITTED,
            message=f"Submitted {len(records)} polygons",
            metadata={'polygons': len(records), 'total_area': self._store.total_area()}
        )
        if self.on_submit is not None:
            self.on_submit(records)
        return records

    def __repr__(self) -> str:
        return f"DrawingSessionController(mode={self._mode.value}, polygons={len(self._store)})"
