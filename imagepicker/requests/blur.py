"""Requests for convolution filters."""

from __future__ import annotations
from dataclasses import dataclass

from imagepicker import convolution
from imagepicker.requests.base import TransformRequest


@dataclass(frozen=True)
class LowPass(TransformRequest):
    """Box blur with a kernel_size x kernel_size kernel (odd, positive)."""
    name = "low_pass"
    kernel_size: int = 3

    def apply(self, buffer, config):
        return convolution.low_pass(buffer, self.kernel_size, config.workers)


@dataclass(frozen=True)
class GaussianBlur(TransformRequest):
    name = "gaussian_blur"

    def apply(self, buffer, config):
        return convolution.gaussian_blur(buffer, config.workers)
