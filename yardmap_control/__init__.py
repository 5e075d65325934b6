"""
yardmap_control - Command interface for mapping widgets

Bounded Context: Widget event -> session command translation
Responsibilities:
  - Command registration and validation
  - Widget event parsing and delegation
  - Rejected operations become logged no-ops

Architecture:
  - CommandRegistry: Explicit registration pattern
  - WidgetEventAdapter: Event dict / JSON payload -> registered command

Design Philosophy:
  - Explicit registration (fail-fast, no runtime surprises)
  - The core never sees widget lifecycle events, only commands
  - Clear error messages (lists available commands on error)
"""

from .registry import CommandRegistry, CommandNotAvailableError
from .adapter import MalformedEventError, WidgetEventAdapter

__all__ = [
    "CommandRegistry",
    "CommandNotAvailableError",
    "MalformedEventError",
    "WidgetEventAdapter",
]
