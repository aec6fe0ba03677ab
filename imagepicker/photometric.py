"""Per-pixel channel transforms. Alpha and dimensions are always preserved."""

from __future__ import annotations

import numpy as np

from imagepicker.buffer import PixelBuffer, check_finite, clamp_to_byte

# ITU-R BT.601 luma coefficients
LUMA_WEIGHTS = (0.299, 0.587, 0.114)
MID_GRAY = 128.0


def _with_rgb(buffer: PixelBuffer, rgb: np.ndarray) -> PixelBuffer:
    """New buffer with float rgb (H, W, 3) clamped in, alpha copied from buffer."""
    out = np.empty_like(buffer.data)
    out[:, :, :3] = clamp_to_byte(rgb)
    out[:, :, 3] = buffer.data[:, :, 3]
    return PixelBuffer._adopt(out)


def luma(buffer: PixelBuffer) -> np.ndarray:
    """Unrounded luma plane (H, W) as float64."""
    f = buffer.data.astype(np.float64)
    r, g, b = LUMA_WEIGHTS
    return r * f[:, :, 0] + g * f[:, :, 1] + b * f[:, :, 2]


def brightness(buffer: PixelBuffer, delta: float) -> PixelBuffer:
    """Add delta to R, G and B, clamped to [0, 255]."""
    d = check_finite("delta", delta)
    return _with_rgb(buffer, buffer.data[:, :, :3].astype(np.float64) + d)


def contrast(buffer: PixelBuffer, factor: float) -> PixelBuffer:
    """Scale channels around mid-gray: factor*c + 128*(1 - factor).

    1 is the identity, 0 flattens to gray and negative factors invert.
    """
    k = check_finite("factor", factor)
    f = buffer.data[:, :, :3].astype(np.float64)
    return _with_rgb(buffer, k * f + MID_GRAY * (1.0 - k))


def grayscale(buffer: PixelBuffer) -> PixelBuffer:
    """round(0.299R + 0.587G + 0.114B) into all three channels.

    Done in integer thousandths so exact halves always round up.
    """
    rgb = buffer.data[:, :, :3].astype(np.int32)
    gray = (299 * rgb[:, :, 0] + 587 * rgb[:, :, 1] + 114 * rgb[:, :, 2] + 500) // 1000
    out = np.empty_like(buffer.data)
    out[:, :, :3] = gray.astype(np.uint8)[:, :, np.newaxis]
    out[:, :, 3] = buffer.data[:, :, 3]
    return PixelBuffer._adopt(out)
