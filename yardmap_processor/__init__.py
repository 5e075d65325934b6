"""
yardmap_processor - Mapping session wiring

This package builds a complete lawn-mapping session from configuration:
store, drawing state machine, widget command adapter and host submission.

Architecture:
- SessionConfig: Configuration management (YAML)
- MappingSessionService: Per-session orchestrator

Threading Model:
- Single-threaded, event-driven; one service per mapping session
"""

from yardmap_processor.config import SessionConfig, HelperTextConfig
from yardmap_processor.service import MappingSessionService

__all__ = [
    "SessionConfig",
    "HelperTextConfig",
    "MappingSessionService",
]
