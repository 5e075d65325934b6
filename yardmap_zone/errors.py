"""
Session error taxonomy.

All errors are local and synchronous. The core raises them; the widget
adapter (yardmap_control) catches and logs them so that a rejected
operation is at most a no-op for the host.
"""


class SessionError(Exception):
    """Base class for rejected polygon session operations."""
    pass


class InvalidTransitionError(SessionError):
    """Raised when an operation is not legal in the current session mode."""

    def __init__(self, operation: str, mode: str):
        self.operation = operation
        self.mode = mode
        super().__init__(f"'{operation}' is not allowed while {mode}")


class UnknownPolygonIdError(SessionError, KeyError):
    """Raised when an edit targets an id that is not in the working set."""

    def __init__(self, polygon_id: str):
        self.polygon_id = polygon_id
        super().__init__(f"Polygon '{polygon_id}' is not in the working set")

    def __str__(self) -> str:
        return self.args[0]


class DegenerateGeometryError(SessionError, ValueError):
    """Raised when a path has no vertex to key a new polygon id from."""
    pass
