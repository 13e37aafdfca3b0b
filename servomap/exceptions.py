"""
Servomap Exceptions

Custom exceptions for the servomap library.
"""

from typing import Optional
from pathlib import Path


class ServomapError(Exception):
    """Base exception for all servomap errors."""
    pass


class NotFoundError(ServomapError):
    """Raised when a configuration resource does not exist."""

    def __init__(self, path: Path):
        self.path = path
        super().__init__(f"Configuration resource not found: {path}")


class ParseError(ServomapError):
    """Raised when a configuration resource is not well-formed."""

    def __init__(self, source: str, reason: Optional[str] = None):
        self.source = source
        self.reason = reason
        msg = f"Could not parse configuration {source}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class DuplicateNodeError(ServomapError):
    """Raised when registering a controller node name that already exists."""

    def __init__(self, node: str):
        self.node = node
        super().__init__(f"Controller node already registered: {node}")


class UnknownNodeError(ServomapError):
    """Raised when operating on a controller node that was never registered."""

    def __init__(self, node: str):
        self.node = node
        super().__init__(f"Unknown controller node: {node}")


class ModeMismatchError(ServomapError):
    """Raised when a mode-specific operation targets a node in another mode."""

    def __init__(self, node: str, expected: "ControlMode", actual: "ControlMode"):
        self.node = node
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Node {node} is in {actual.value} mode, operation requires {expected.value}"
        )
