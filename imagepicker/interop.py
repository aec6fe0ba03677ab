"""Bridges between PixelBuffer and the arrays/images collaborators already hold.

Nothing here reads or writes files: decoding and encoding stay with the
caller, which hands over an in-memory array or Pillow image.
"""

from __future__ import annotations

import numpy as np
from PIL import Image

from imagepicker.buffer import PixelBuffer
from imagepicker.errors import InvalidParameter


def from_array(arr: np.ndarray) -> PixelBuffer:
    """Accept (H, W) gray, (H, W, 3) RGB or (H, W, 4) RGBA integer data."""
    a = np.asarray(arr)
    if a.ndim == 2:
        a = np.repeat(a[:, :, np.newaxis], 3, axis=2)
    if a.ndim != 3 or a.shape[2] not in (3, 4):
        raise InvalidParameter("shape", a.shape, "expected (H, W), (H, W, 3) or (H, W, 4)")
    if a.shape[2] == 3:
        alpha = np.full(a.shape[:2] + (1,), 255, dtype=a.dtype)
        a = np.concatenate([a, alpha], axis=2)
    return PixelBuffer(a)


def from_pil(image: Image.Image) -> PixelBuffer:
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return PixelBuffer(np.array(image, dtype=np.uint8))


def to_pil(buffer: PixelBuffer, mode: str = "RGBA") -> Image.Image:
    """Pillow image of the buffer; mode="RGB" drops alpha (e.g. before JPEG)."""
    if mode not in ("RGBA", "RGB"):
        raise InvalidParameter("mode", mode, "expected RGBA or RGB")
    img = Image.fromarray(buffer.to_array())
    return img if mode == "RGBA" else img.convert("RGB")
