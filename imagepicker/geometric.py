"""Coordinate-remapping transforms: scale, rotate, translate, mirror.

Scale and translate use forward (scatter) mapping: every source pixel is
written to its mapped destination if that lands inside the frame, and
destination pixels nobody maps to keep the transparent background. Upscaling
therefore leaves gaps between written pixels; this matches the behaviour the
editor has always shipped with. Rotation samples the source for each
destination pixel instead (inverse mapping), so it never leaves gaps inside
the rotated region.
"""

from __future__ import annotations

import numpy as np
from scipy.ndimage import map_coordinates

from imagepicker.buffer import PixelBuffer, check_finite, clamp_to_byte, round_half_up
from imagepicker.errors import InvalidParameter

RESAMPLE_MODES = ("nearest", "bilinear")


def _scatter(src: np.ndarray, out_w: int, out_h: int,
             dst_x: np.ndarray, dst_y: np.ndarray) -> PixelBuffer:
    """Write src[y, x] to out[dst_y, dst_x], dropping targets outside the frame.

    When several source pixels hit the same target the last one in
    row-major order wins.
    """
    out = np.zeros((out_h, out_w, 4), dtype=np.uint8)
    inside = (dst_x >= 0) & (dst_x < out_w) & (dst_y >= 0) & (dst_y < out_h)
    targets = (dst_y * out_w + dst_x)[inside]
    values = src[inside]
    _, first_from_end = np.unique(targets[::-1], return_index=True)
    keep = len(targets) - 1 - first_from_end
    out.reshape(-1, 4)[targets[keep]] = values[keep]
    return PixelBuffer._adopt(out)


def scale(buffer: PixelBuffer, factor: float) -> PixelBuffer:
    """Uniform scale about the origin into a round(f*w) x round(f*h) buffer."""
    f = check_finite("factor", factor)
    if f <= 0:
        raise InvalidParameter("factor", factor, "must be positive")
    out_w = round_half_up(f * buffer.width)
    out_h = round_half_up(f * buffer.height)
    if out_w < 1 or out_h < 1:
        raise InvalidParameter("factor", factor,
                               f"scaling {buffer.width}x{buffer.height} gives an empty image")
    yy, xx = np.mgrid[0:buffer.height, 0:buffer.width]
    dst_x = np.floor(xx * f + 0.5).astype(np.intp)
    dst_y = np.floor(yy * f + 0.5).astype(np.intp)
    return _scatter(buffer.data, out_w, out_h, dst_x, dst_y)


def translate(buffer: PixelBuffer, dx: float = 0.0, dy: float = 0.0) -> PixelBuffer:
    """Shift by (dx, dy) rounded to whole pixels; vacated area is background."""
    sx = round_half_up(check_finite("dx", dx))
    sy = round_half_up(check_finite("dy", dy))
    yy, xx = np.mgrid[0:buffer.height, 0:buffer.width]
    return _scatter(buffer.data, buffer.width, buffer.height, xx + sx, yy + sy)


def mirror_horizontal(buffer: PixelBuffer) -> PixelBuffer:
    """x' = (width - 1) - x."""
    return PixelBuffer._adopt(buffer.data[:, ::-1].copy())


def mirror_vertical(buffer: PixelBuffer) -> PixelBuffer:
    """y' = (height - 1) - y."""
    return PixelBuffer._adopt(buffer.data[::-1].copy())


def rotation_matrix(degrees: float) -> np.ndarray:
    """2x2 clockwise-positive rotation matrix [[cos, -sin], [sin, cos]]."""
    theta = np.radians(check_finite("degrees", degrees))
    cos_t, sin_t = np.cos(theta), np.sin(theta)
    return np.array([[cos_t, -sin_t], [sin_t, cos_t]])


def rotate(buffer: PixelBuffer, degrees: float,
           resample: str = "nearest") -> PixelBuffer:
    """Rotate about the origin (top-left corner), keeping the source size.

    Content rotated past the frame is clipped and uncovered area stays
    transparent, so for most angles only a wedge of the image survives.
    """
    if resample not in RESAMPLE_MODES:
        raise InvalidParameter("resample", resample,
                               f"expected one of {', '.join(RESAMPLE_MODES)}")
    inverse = rotation_matrix(degrees).T
    h, w = buffer.height, buffer.width
    yy, xx = np.mgrid[0:h, 0:w].astype(np.float64)
    src_x = inverse[0, 0] * xx + inverse[0, 1] * yy
    src_y = inverse[1, 0] * xx + inverse[1, 1] * yy

    if resample == "bilinear":
        f = buffer.data.astype(np.float64)
        result = np.zeros_like(f)
        for c in range(4):
            result[:, :, c] = map_coordinates(f[:, :, c], [src_y, src_x],
                                              order=1, mode="constant", cval=0.0)
        return PixelBuffer._adopt(clamp_to_byte(result))

    sx = np.floor(src_x + 0.5).astype(np.intp)
    sy = np.floor(src_y + 0.5).astype(np.intp)
    inside = (sx >= 0) & (sx < w) & (sy >= 0) & (sy < h)
    out = np.zeros((h, w, 4), dtype=np.uint8)
    out[inside] = buffer.data[sy[inside], sx[inside]]
    return PixelBuffer._adopt(out)
