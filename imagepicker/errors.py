"""Exception types raised by the transform engine."""

from __future__ import annotations


class EngineError(Exception):
    """Base exception for all engine errors."""


class OutOfBounds(EngineError, IndexError):
    """Raised when a pixel access falls outside the buffer."""

    def __init__(self, x: int, y: int, width: int, height: int) -> None:
        super().__init__(f"pixel ({x}, {y}) outside {width}x{height} buffer")
        self.x = x
        self.y = y
        self.width = width
        self.height = height


class InvalidParameter(EngineError, ValueError):
    """Raised when a caller passes an out-of-range or nonsensical parameter."""

    def __init__(self, name: str, value: object, reason: str = "") -> None:
        message = f"invalid {name}={value!r}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
        self.name = name
        self.value = value
