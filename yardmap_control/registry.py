"""
CommandRegistry - Explicit command registration pattern

Bounded Context: Command registration and validation
Responsibilities:
  - Register session commands with handlers
  - Validate command existence before execution
  - Provide introspection (available_commands, get_help)

Design Motivation:
  Problem: Widget lifecycle callbacks make it unclear which mutations exist
  Solution: Explicit registration; the widget adapter can only reach
            what was registered

Threading: Single-threaded (events are delivered one at a time)
"""

from typing import Any, Callable, Dict, Optional, Set


class CommandNotAvailableError(Exception):
    """Raised when attempting to execute an unregistered command"""
    pass


class CommandRegistry:
    """
    Registry for session commands with explicit registration.

    Key Features:
      - Fail-fast: Unknown commands rejected immediately
      - Introspection: Can query available commands at runtime
      - Self-Documenting: Each command has description

    Example:
        registry = CommandRegistry()
        registry.register('clear_polygons', controller.clear_all, "Clear all polygons")

        try:
            registry.execute('clear_polygons')
        except CommandNotAvailableError as e:
            print(f"Command not available: {e}")
    """

    def __init__(self):
        self._commands: Dict[str, Callable] = {}
        self._descriptions: Dict[str, str] = {}

    def register(self, command: str, handler: Callable, description: str) -> None:
        """
        Register a command with its handler function.

        Args:
            command: Command name (lowercase, no spaces)
            handler: Callable that executes the command
            description: Human-readable description for help text

        Raises:
            ValueError: If command already registered (double registration)
        """
        if command in self._commands:
            raise ValueError(f"Command '{command}' already registered")

        self._commands[command] = handler
        self._descriptions[command] = description

    def execute(self, command: str, command_data: Optional[dict] = None) -> Any:
        """
        Execute a registered command.

        Args:
            command: Command name to execute
            command_data: Optional command data (full event payload)

        Returns:
            Whatever the handler returns

        Raises:
            CommandNotAvailableError: If command not registered
        """
        if command not in self._commands:
            raise CommandNotAvailableError(
                f"Command '{command}' not available. "
                f"Available commands: {', '.join(sorted(self.available_commands))}"
            )

        handler = self._commands[command]

        if command_data is not None:
            return handler(command_data)
        return handler()

    def is_available(self, command: str) -> bool:
        return command in self._commands

    @property
    def available_commands(self) -> Set[str]:
        """Snapshot of all registered command names."""
        return set(self._commands.keys())

    def get_help(self) -> Dict[str, str]:
        """Copy of {command: description}."""
        return dict(self._descriptions)

    def count(self) -> int:
        return len(self._commands)
