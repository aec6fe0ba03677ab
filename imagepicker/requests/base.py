"""Base class for transform requests."""

from __future__ import annotations
from dataclasses import asdict
from typing import ClassVar

from imagepicker.buffer import PixelBuffer
from imagepicker.config import EngineConfig


class TransformRequest:
    """One tagged, fully parameterised transform.

    Subclasses are frozen dataclasses; the parameters alone decide the
    output for a given input buffer.
    """

    name: ClassVar[str] = ""

    def apply(self, buffer: PixelBuffer, config: EngineConfig) -> PixelBuffer:
        """Run the transform. Must be overridden by subclasses."""
        raise NotImplementedError

    def to_dict(self) -> dict:
        d = {"name": self.name}
        d.update(asdict(self))
        return d
