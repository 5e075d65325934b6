"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

Typed event names for the polygon session.

Event Naming Convention:
    <component>.<action>

    component: polygon, session, widget, error
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - polygon.*: Working set mutations
    - session.*: Mode transitions and host hand-off
    - widget.*: Events received from the mapping widget
    - error.*: Rejected operations
    """

    # ========== Polygon Events ==========
    POLYGON_COMPLETED = "polygon.completed"
    """New polygon added from a finished outline."""

    POLYGON_EDITED = "polygon.edited"
    """Existing polygon path replaced and area recomputed."""

    # ========== Session Events ==========
    SESSION_CLEARED = "session.cleared"
    """Working set emptied, drawing re-armed."""

    SESSION_DRAWING_REQUESTED = "session.drawing_requested"
    """Drawing mode requested (e.g. tap on empty map)."""

    SESSION_SUBMITTED = "session.submitted"
    """Working set handed to the host."""

    SESSION_CENTERED = "session.centered"
    """Host asked for the map center."""

    # ========== Widget Events ==========
    WIDGET_EVENT_RECEIVED = "widget.event.received"
    """Event received from the mapping widget."""

    # ========== Error Events ==========
    INVALID_TRANSITION = "error.invalid_transition"
    """Operation rejected in the current mode."""

    UNKNOWN_POLYGON = "error.unknown_polygon"
    """Edit for an id no longer in the working set."""

    DEGENERATE_GEOMETRY = "error.degenerate_geometry"
    """Path with no usable vertices."""

    MALFORMED_EVENT = "error.malformed_event"
    """Widget event payload could not be parsed."""


POLYGON_EVENTS = {
    LogEvent.POLYGON_COMPLETED,
    LogEvent.POLYGON_EDITED,
}

SESSION_EVENTS = {
    LogEvent.SESSION_CLEARED,
    LogEvent.SESSION_DRAWING_REQUESTED,
    LogEvent.SESSION_SUBMITTED,
    LogEvent.SESSION_CENTERED,
}

ERROR_EVENTS = {
    LogEvent.INVALID_TRANSITION,
    LogEvent.UNKNOWN_POLYGON,
    LogEvent.DEGENERATE_GEOMETRY,
    LogEvent.MALFORMED_EVENT,
}
