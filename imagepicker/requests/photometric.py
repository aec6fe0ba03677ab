"""Requests for per-pixel channel transforms."""

from __future__ import annotations
from dataclasses import dataclass

from imagepicker import photometric
from imagepicker.requests.base import TransformRequest


@dataclass(frozen=True)
class Brightness(TransformRequest):
    name = "brightness"
    delta: float

    def apply(self, buffer, config):
        return photometric.brightness(buffer, self.delta)


@dataclass(frozen=True)
class Contrast(TransformRequest):
    name = "contrast"
    factor: float

    def apply(self, buffer, config):
        return photometric.contrast(buffer, self.factor)


@dataclass(frozen=True)
class Grayscale(TransformRequest):
    name = "grayscale"

    def apply(self, buffer, config):
        return photometric.grayscale(buffer)
