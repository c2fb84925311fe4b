"""Error types raised by the analysis package."""


class TopWordsError(Exception):
    """Base class for all analysis errors."""


class InvalidCapacityError(TopWordsError, ValueError):
    """Raised when a container capacity (or k) is not a positive integer."""

    def __init__(self, capacity: object) -> None:
        self.capacity = capacity
        super().__init__(f"Capacity must be a positive integer, got {capacity!r}")


class InputReadError(TopWordsError):
    """Raised when a text source cannot be opened or read.

    Attributes:
        source: Display name of the source (path or stream name).
        lines_read: Number of lines consumed before the failure.
    """

    def __init__(self, source: str, message: str, lines_read: int = 0) -> None:
        self.source = source
        self.lines_read = lines_read
        super().__init__(f"Failed to read {source}: {message}")
