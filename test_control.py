"""
Test Widget Command Flow (registry, adapter, session service, config)
=====================================================================

Simulates the mapping widget by feeding event dicts and JSON payloads
straight into the adapter; no map rendering involved.

Usage:
    source .venv/bin/activate && pytest test_control.py
"""

import json
import logging

import pytest

from yardmap_control import (
    CommandNotAvailableError,
    CommandRegistry,
    MalformedEventError,
    WidgetEventAdapter,
)
from yardmap_host.logging import StructuredLogger
from yardmap_processor import HelperTextConfig, MappingSessionService, SessionConfig
from yardmap_zone import Coordinate, SessionMode

SQUARE = [
    {"lat": 0, "lng": 0},
    {"lat": 0, "lng": 1},
    {"lat": 1, "lng": 1},
    {"lat": 1, "lng": 0},
]
TRIANGLE = [{"lat": 0, "lng": 0}, {"lat": 0, "lng": 1}, {"lat": 1, "lng": 0}]


def make_service(**kwargs) -> MappingSessionService:
    config = SessionConfig(
        session_id="yard_test",
        center=Coordinate(39.744031, -105.1014172),
    )
    logger = StructuredLogger("test.control", level=logging.DEBUG)
    return MappingSessionService(config, structured_logger=logger, **kwargs)


# ─────────────────────────────────────────────────────────────────────────────
# CommandRegistry
# ─────────────────────────────────────────────────────────────────────────────

def test_registry_register_and_execute():
    registry = CommandRegistry()
    calls = []

    registry.register("ping", lambda: calls.append("ping") or "pong", "Ping")
    registry.register("echo", lambda data: data["value"], "Echo")

    assert registry.execute("ping") == "pong"
    assert registry.execute("echo", {"value": 3}) == 3
    assert calls == ["ping"]
    assert registry.available_commands == {"ping", "echo"}
    assert registry.get_help() == {"ping": "Ping", "echo": "Echo"}
    assert registry.count() == 2
    assert registry.is_available("ping")


def test_registry_rejects_double_registration_and_unknown_commands():
    registry = CommandRegistry()
    registry.register("ping", lambda: None, "Ping")

    with pytest.raises(ValueError):
        registry.register("ping", lambda: None, "Again")

    with pytest.raises(CommandNotAvailableError) as exc_info:
        registry.execute("pong")
    assert "ping" in str(exc_info.value)


# ─────────────────────────────────────────────────────────────────────────────
# WidgetEventAdapter
# ─────────────────────────────────────────────────────────────────────────────

def test_adapter_rejects_empty_and_unknown_events():
    adapter = WidgetEventAdapter()
    adapter.command_registry.register("map_clicked", lambda data: None, "Arm drawing")

    assert adapter.dispatch({"event": "MAP_CLICKED"}) is True
    assert adapter.dispatch({}) is False
    assert adapter.dispatch({"event": "drag_start"}) is False
    assert adapter.get_stats() == {"dispatched": 1, "rejected": 2}


def test_adapter_handles_json_payloads():
    adapter = WidgetEventAdapter()
    seen = []
    adapter.command_registry.register("map_clicked", seen.append, "Arm drawing")

    assert adapter.handle_message(b'{"event": "map_clicked"}') is True
    assert adapter.handle_message("not json") is False
    assert adapter.handle_message("[1, 2]") is False
    assert seen == [{"event": "map_clicked"}]


# ─────────────────────────────────────────────────────────────────────────────
# MappingSessionService
# ─────────────────────────────────────────────────────────────────────────────

def test_service_full_widget_flow():
    print("\n" + "=" * 60)
    print("TEST: Widget event flow")
    print("=" * 60)

    submissions = []
    snapshots = []
    service = make_service(on_submit=submissions.append)
    service.add_listener(snapshots.append)

    assert service.handle_event({"event": "polygon_complete", "path": SQUARE})
    record = service.adapter.last_result
    assert service.snapshot().mode == SessionMode.EDITING
    print(f"✓ Completed {record}")

    assert service.handle_event({"event": "polygon_edited", "id": record.id, "path": TRIANGLE})
    edited = service.adapter.last_result
    assert edited.id == record.id
    assert edited.area < record.area
    print(f"✓ Edited {edited}")

    assert service.handle_event({"event": "submit"})
    assert len(submissions) == 1
    message = submissions[0]
    assert message.session_id == "yard_test"
    assert message.polygons == (edited,)
    assert service.last_submission is message
    print(f"✓ Submitted {message.polygon_count} polygons")

    assert service.handle_event({"event": "clear_polygons"})
    assert service.snapshot().polygons == ()
    assert service.snapshot().mode == SessionMode.DRAWING

    assert [s.mode for s in snapshots] == [
        SessionMode.EDITING,
        SessionMode.EDITING,
        SessionMode.DRAWING,
    ]


def test_service_rejects_contract_violations_as_no_ops():
    service = make_service()

    # edit while drawing
    assert service.handle_event({"event": "polygon_edited", "id": "0_0-0", "path": TRIANGLE}) is False

    assert service.handle_event({"event": "polygon_complete", "path": SQUARE}) is True
    before = service.snapshot().polygons

    # second outline while editing
    assert service.handle_event({"event": "polygon_complete", "path": TRIANGLE}) is False
    # stale edit for an unknown polygon
    assert service.handle_event({"event": "polygon_edited", "id": "gone-0", "path": TRIANGLE}) is False
    # malformed payloads
    assert service.handle_event({"event": "polygon_edited", "path": TRIANGLE}) is False
    assert service.handle_event({"event": "polygon_complete"}) is False
    assert service.handle_event({"event": "polygon_edited", "id": before[0].id, "path": [{"lat": 1}]}) is False

    assert service.snapshot().polygons == before
    assert service.adapter.get_stats()["rejected"] == 6


def test_service_stale_edit_after_clear():
    service = make_service()
    service.handle_event({"event": "polygon_complete", "path": SQUARE})
    old = service.adapter.last_result

    service.handle_event({"event": "clear_polygons"})
    service.handle_event({"event": "polygon_complete", "path": TRIANGLE})

    assert service.handle_event({"event": "polygon_edited", "id": old.id, "path": SQUARE}) is False
    assert [p.id for p in service.snapshot().polygons] != [old.id]
    assert len(service.snapshot().polygons) == 1


def test_listener_failure_is_not_reported_as_rejection():
    """A listener error surfaces to the host; the applied transition stays applied."""
    service = make_service()

    def render(snapshot):
        raise KeyError("tile")

    service.add_listener(render)

    with pytest.raises(KeyError):
        service.handle_event({"event": "polygon_complete", "path": SQUARE})

    assert service.controller.mode == SessionMode.EDITING
    assert len(service.store) == 1
    assert service.adapter.get_stats()["rejected"] == 0


def test_submit_callback_failure_propagates():
    def save(message):
        raise ValueError("disk full")

    service = make_service(on_submit=save)
    service.handle_event({"event": "polygon_complete", "path": SQUARE})

    with pytest.raises(ValueError, match="disk full"):
        service.handle_event({"event": "submit"})

    assert service.last_submission is not None


def test_adapter_only_swallows_malformed_payload_errors():
    adapter = WidgetEventAdapter()

    def parse(data):
        raise MalformedEventError("no path")

    def crash(data):
        raise TypeError("handler bug")

    adapter.command_registry.register("polygon_complete", parse, "Parse")
    adapter.command_registry.register("submit", crash, "Crash")

    assert adapter.dispatch({"event": "polygon_complete"}) is False
    with pytest.raises(TypeError):
        adapter.dispatch({"event": "submit"})
    assert adapter.get_stats() == {"dispatched": 0, "rejected": 1}


def test_service_map_click_and_center():
    service = make_service()
    service.handle_event({"event": "polygon_complete", "path": SQUARE})

    assert service.handle_event({"event": "map_clicked"})
    assert service.controller.mode == SessionMode.DRAWING

    assert service.handle_message(json.dumps({"event": "center_map"}))
    assert service.adapter.last_result == Coordinate(39.744031, -105.1014172)


def test_service_registers_every_widget_command():
    service = make_service()

    assert service.adapter.command_registry.available_commands == {
        "polygon_complete",
        "polygon_edited",
        "map_clicked",
        "clear_polygons",
        "center_map",
        "submit",
    }


# ─────────────────────────────────────────────────────────────────────────────
# SessionConfig
# ─────────────────────────────────────────────────────────────────────────────

def test_config_from_yaml(tmp_path):
    path = tmp_path / "session.yaml"
    path.write_text(
        "session_id: yard_01\n"
        "center:\n"
        "  lat: 39.744031\n"
        "  lng: -105.1014172\n"
        "id_anchor_index: 1\n"
        "log_level: debug\n"
        "helper_text:\n"
        "  drawing: Outline your lawn\n"
    )

    config = SessionConfig.from_yaml(path)

    assert config.session_id == "yard_01"
    assert config.center == Coordinate(39.744031, -105.1014172)
    assert config.id_anchor_index == 1
    assert config.logging_level == logging.DEBUG
    assert config.earth_radius_m == 6378137.0
    assert config.helper_text.drawing == "Outline your lawn"
    assert config.helper_text.editing == HelperTextConfig().editing

    service = MappingSessionService(config)
    assert service.controller.helper_text == "Outline your lawn"
    service.handle_event({"event": "polygon_complete", "path": SQUARE})
    assert service.adapter.last_result.id == "0.0_1.0-0"


def test_config_validation():
    with pytest.raises(ValueError):
        SessionConfig(session_id="")
    with pytest.raises(ValueError):
        SessionConfig(session_id="x", center=Coordinate(91, 0))
    with pytest.raises(ValueError):
        SessionConfig(session_id="x", center=Coordinate(0, 181))
    with pytest.raises(ValueError):
        SessionConfig(session_id="x", earth_radius_m=0)
    with pytest.raises(ValueError):
        SessionConfig(session_id="x", id_anchor_index=-1)
    with pytest.raises(ValueError):
        SessionConfig(session_id="x", log_level="LOUD")
    with pytest.raises(ValueError):
        HelperTextConfig(drawing="")


def test_config_from_dict_reports_bad_sections_as_value_errors():
    with pytest.raises(ValueError, match="session_id"):
        SessionConfig.from_dict({"center": {"lat": 1.0, "lng": 2.0}})
    with pytest.raises(ValueError, match="helper_text"):
        SessionConfig.from_dict({"session_id": "x", "helper_text": {"banner": "hi"}})
    with pytest.raises(ValueError, match="helper_text"):
        SessionConfig.from_dict({"session_id": "x", "helper_text": "hi"})
    with pytest.raises(ValueError):
        SessionConfig.from_dict({"session_id": "x", "center": {"lat": 1.0}})


def main():
    """Run all tests."""
    print("\n🌱 yardmap_control - Widget Command Tests")
    print("=" * 60)
    raise SystemExit(pytest.main([__file__, "-v"]))


if __name__ == "__main__":
    main()
