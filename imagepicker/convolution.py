"""2D kernel convolution with clamp-to-edge boundaries, plus blur kernels."""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import logging

import numpy as np
from scipy.ndimage import correlate

from imagepicker.buffer import PixelBuffer, clamp_to_byte
from imagepicker.errors import InvalidParameter

logger = logging.getLogger(__name__)

_GAUSSIAN_3X3 = ((1, 2, 1),
                 (2, 4, 2),
                 (1, 2, 1))


@dataclass(frozen=True, eq=False)
class Kernel:
    """Odd-sized grid of float weights; the centre cell sits over the output pixel."""
    weights: np.ndarray

    def __post_init__(self):
        w = np.array(self.weights, dtype=np.float64)
        if w.ndim != 2 or w.size == 0:
            raise InvalidParameter("weights", w.shape, "kernel must be a non-empty 2D grid")
        if w.shape[0] % 2 == 0 or w.shape[1] % 2 == 0:
            raise InvalidParameter("weights", w.shape, "kernel dimensions must be odd")
        if not np.all(np.isfinite(w)):
            raise InvalidParameter("weights", w.tolist(), "weights must be finite")
        w.setflags(write=False)
        object.__setattr__(self, "weights", w)

    @property
    def radius_x(self) -> int:
        return self.weights.shape[1] // 2

    @property
    def radius_y(self) -> int:
        return self.weights.shape[0] // 2

    @property
    def total(self) -> float:
        return float(self.weights.sum())


def box_kernel(size: int) -> Kernel:
    """Low-pass kernel: size x size cells of 1/size^2."""
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)):
        raise InvalidParameter("kernel_size", size, "must be an integer")
    if size <= 0 or size % 2 == 0:
        raise InvalidParameter("kernel_size", size, "must be a positive odd integer")
    return Kernel(np.full((size, size), 1.0 / (size * size)))


def gaussian_kernel() -> Kernel:
    """Fixed 3x3 Gaussian approximation, weights sum to 1."""
    return Kernel(np.array(_GAUSSIAN_3X3, dtype=np.float64) / 16.0)


def _check_workers(workers: int) -> int:
    if isinstance(workers, bool) or not isinstance(workers, (int, np.integer)) or workers < 1:
        raise InvalidParameter("workers", workers, "must be a positive integer")
    return int(workers)


def _convolve_rows(src: np.ndarray, weights: np.ndarray, out: np.ndarray,
                   start: int, stop: int) -> None:
    """Fill out[start:stop] using only the source rows those outputs can see."""
    ry = weights.shape[0] // 2
    lo = max(0, start - ry)
    hi = min(src.shape[0], stop + ry)
    band = src[lo:hi, :, :3].astype(np.float64)
    for c in range(3):
        acc = correlate(band[:, :, c], weights, mode="nearest")
        out[start:stop, :, c] = clamp_to_byte(acc[start - lo:stop - lo])


def convolve(buffer: PixelBuffer, kernel: Kernel, workers: int = 1) -> PixelBuffer:
    """Apply kernel to R, G and B; alpha is copied through unchanged.

    Out-of-range neighbours are replaced by the nearest edge pixel. With
    workers > 1 the rows are split into bands processed on a thread pool;
    every band writes a disjoint slice of the output so the result is
    identical to the single-threaded one.
    """
    n = min(_check_workers(workers), buffer.height)
    src = buffer.data
    out = np.empty_like(src)
    out[:, :, 3] = src[:, :, 3]

    edges = np.linspace(0, buffer.height, n + 1).astype(int)
    bands = list(zip(edges[:-1], edges[1:]))
    logger.debug("convolving %dx%d with %dx%d kernel in %d band(s)",
                 buffer.width, buffer.height,
                 kernel.weights.shape[1], kernel.weights.shape[0], n)
    if n == 1:
        _convolve_rows(src, kernel.weights, out, 0, buffer.height)
    else:
        with ThreadPoolExecutor(max_workers=n) as pool:
            futures = [pool.submit(_convolve_rows, src, kernel.weights, out, a, b)
                       for a, b in bands]
            for fut in futures:
                fut.result()
    return PixelBuffer._adopt(out)


def low_pass(buffer: PixelBuffer, kernel_size: int = 3, workers: int = 1) -> PixelBuffer:
    return convolve(buffer, box_kernel(kernel_size), workers)


def gaussian_blur(buffer: PixelBuffer, workers: int = 1) -> PixelBuffer:
    return convolve(buffer, gaussian_kernel(), workers)
