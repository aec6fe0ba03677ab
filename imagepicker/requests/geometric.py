"""Requests for coordinate-remapping transforms."""

from __future__ import annotations
from dataclasses import dataclass

from imagepicker import geometric
from imagepicker.requests.base import TransformRequest


@dataclass(frozen=True)
class Scale(TransformRequest):
    name = "scale"
    factor: float

    def apply(self, buffer, config):
        return geometric.scale(buffer, self.factor)


@dataclass(frozen=True)
class Rotate(TransformRequest):
    """Clockwise-positive rotation about the top-left corner."""
    name = "rotate"
    degrees: float

    def apply(self, buffer, config):
        return geometric.rotate(buffer, self.degrees, config.rotate_resample)


@dataclass(frozen=True)
class Translate(TransformRequest):
    name = "translate"
    dx: float = 0.0
    dy: float = 0.0

    def apply(self, buffer, config):
        return geometric.translate(buffer, self.dx, self.dy)


@dataclass(frozen=True)
class MirrorHorizontal(TransformRequest):
    name = "mirror_horizontal"

    def apply(self, buffer, config):
        return geometric.mirror_horizontal(buffer)


@dataclass(frozen=True)
class MirrorVertical(TransformRequest):
    name = "mirror_vertical"

    def apply(self, buffer, config):
        return geometric.mirror_vertical(buffer)
