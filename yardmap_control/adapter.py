"""
WidgetEventAdapter - Mapping widget events -> session commands

Bounded Context: Translation layer between a mapping widget and the core
Responsibilities:
  - Parse widget events ({"event": "<name>", ...} dicts or JSON payloads)
  - Delegate to CommandRegistry
  - Turn rejected operations into logged no-ops

Event payloads:
  {"event": "polygon_complete", "path": [{"lat": .., "lng": ..}, ...]}
  {"event": "polygon_edited", "id": "<polygon id>", "path": [...]}
  {"event": "map_clicked"}
  {"event": "clear_polygons"}
  {"event": "center_map"}
  {"event": "submit"}

The widget may deliver an edit for a polygon that a previous clear already
removed; that edit is rejected by the store and logged here, never applied.

Handlers parse their payload before touching the session and signal a bad
payload with MalformedEventError. Anything raised after the session changed
(snapshot listeners, host callbacks) propagates to the caller.
"""

import json
import logging
from typing import Any, Dict, Optional, Union

from yardmap_host.logging import LogEvent, StructuredLogger
from yardmap_zone.errors import SessionError
from .registry import CommandRegistry, CommandNotAvailableError

logger = logging.getLogger(__name__)

EVENT_KEY = "event"


class MalformedEventError(ValueError):
    """Raised by a command handler when the event payload cannot be parsed"""
    pass


class WidgetEventAdapter:
    """
    Dispatches widget events through a CommandRegistry.

    dispatch() never raises for rejected or malformed events: it logs and
    returns False, so a misbehaving widget cannot take the host down.

    Example:
        adapter = WidgetEventAdapter()
        adapter.command_registry.register('map_clicked', handler, "Arm drawing")

        adapter.dispatch({"event": "map_clicked"})  # True
        adapter.dispatch({"event": "unknown"})      # False, logged
    """

    def __init__(
        self,
        command_registry: Optional[CommandRegistry] = None,
        structured_logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            command_registry: Registry to dispatch into (default: empty)
            structured_logger: Receives widget.* and error.malformed_event
                records when given
        """
        self.command_registry = command_registry or CommandRegistry()
        self.structured_logger = structured_logger
        self.last_result: Any = None
        self._dispatched = 0
        self._rejected = 0

    def _malformed(self, message: str, metadata: Dict[str, Any], exc: Exception) -> bool:
        logger.error(f"❌ {message}: {exc}")
        if self.structured_logger is not None:
            self.structured_logger.error(
                event=LogEvent.MALFORMED_EVENT,
                message=message,
                metadata=metadata,
                exc_info=exc,
            )
        self._rejected += 1
        return False

    def dispatch(self, event: Dict[str, Any]) -> bool:
        """
        Execute one widget event.

        Args:
            event: Event dict with an "event" key naming the command

        Returns:
            True if the command ran, False if it was rejected

        Raises:
            Whatever a listener or host callback raises once the command
            has been applied
        """
        command = str(event.get(EVENT_KEY, '')).lower()

        if not command:
            logger.warning("⚠️ Empty widget event received")
            self._rejected += 1
            return False

        logger.debug(f"🎯 Widget event: {command}")
        if self.structured_logger is not None:
            self.structured_logger.debug(
                event=LogEvent.WIDGET_EVENT_RECEIVED,
                message=f"Widget event '{command}'",
                metadata={'command': command, 'keys': sorted(event.keys())},
            )

        try:
            self.last_result = self.command_registry.execute(command, event)
            self._dispatched += 1
            logger.debug(f"✅ Event '{command}' handled")
            return True

        except CommandNotAvailableError as e:
            logger.warning(f"⚠️ {e}")

        except SessionError as e:
            # Already reported by the controller
            logger.warning(f"⚠️ Rejected '{command}': {e}")

        except MalformedEventError as e:
            return self._malformed(f"Malformed '{command}' event", {'command': command}, e)

        self._rejected += 1
        return False

    def handle_message(self, payload: Union[str, bytes]) -> bool:
        """Decode a JSON widget payload and dispatch it."""
        try:
            if isinstance(payload, bytes):
                payload = payload.decode('utf-8')
            event = json.loads(payload)
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            return self._malformed("Error decoding widget payload", {'payload': repr(payload)}, e)

        if not isinstance(event, dict):
            return self._malformed(
                "Widget payload is not an object",
                {'payload': repr(payload)},
                TypeError(type(event).__name__),
            )

        return self.dispatch(event)

    def get_stats(self) -> Dict[str, int]:
        return {
            'dispatched': self._dispatched,
            'rejected': self._rejected,
        }
