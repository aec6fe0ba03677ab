"""Immutable RGBA pixel buffer shared by every transform."""

from __future__ import annotations
from typing import Iterable, NamedTuple, Sequence
import math

import numpy as np

from imagepicker.errors import InvalidParameter, OutOfBounds


class Pixel(NamedTuple):
    """One RGBA pixel, each channel an int in [0, 255]."""
    r: int
    g: int
    b: int
    a: int = 255


TRANSPARENT = Pixel(0, 0, 0, 0)


def clamp_to_byte(values) -> np.ndarray:
    """Round half-up and clip float channel values into uint8.

    Accumulate in float (or wide ints) and call this once at the end, so
    weighted sums never wrap around in an 8-bit type.
    """
    f = np.floor(np.asarray(values, dtype=np.float64) + 0.5)
    return np.clip(f, 0, 255).astype(np.uint8)


def round_half_up(value: float) -> int:
    """Scalar rounding used for coordinates and output sizes."""
    return int(np.floor(value + 0.5))


def check_finite(name: str, value) -> float:
    if isinstance(value, (bool, np.bool_, str, bytes)):
        raise InvalidParameter(name, value, "must be a number")
    try:
        v = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(name, value, "must be a number") from None
    if not math.isfinite(v):
        raise InvalidParameter(name, value, "must be finite")
    return v


def _check_dimension(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise InvalidParameter(name, value, "must be an integer")
    if value <= 0:
        raise InvalidParameter(name, value, "must be positive")
    return int(value)


def _as_pixel(value: Sequence[int]) -> Pixel:
    if len(value) == 3:
        value = (*value, 255)
    if len(value) != 4:
        raise InvalidParameter("pixel", value, "expected 3 or 4 channels")
    if any(not 0 <= int(c) <= 255 for c in value):
        raise InvalidParameter("pixel", value, "channels must be in [0, 255]")
    return Pixel(*(int(c) for c in value))


class PixelBuffer:
    """A width x height grid of RGBA pixels with value semantics.

    Storage is a read-only (height, width, 4) uint8 array in row-major
    order. Transforms read from one buffer and return a new one; nothing
    ever writes into an existing buffer.
    """

    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray):
        arr = np.asarray(data)
        if arr.ndim != 3 or arr.shape[2] != 4:
            raise InvalidParameter("shape", arr.shape, "expected (height, width, 4)")
        if arr.shape[0] == 0 or arr.shape[1] == 0:
            raise InvalidParameter("shape", arr.shape, "buffer must not be empty")
        if arr.dtype != np.uint8:
            if not np.issubdtype(arr.dtype, np.integer):
                raise InvalidParameter("dtype", arr.dtype, "channels must be integers")
            if arr.min() < 0 or arr.max() > 255:
                raise InvalidParameter("pixels", (int(arr.min()), int(arr.max())),
                                       "channels must be in [0, 255]")
        self._data = np.array(arr, dtype=np.uint8)
        self._data.setflags(write=False)

    @classmethod
    def _adopt(cls, arr: np.ndarray) -> PixelBuffer:
        """Wrap a freshly allocated uint8 array without copying it."""
        buf = object.__new__(cls)
        arr.setflags(write=False)
        buf._data = arr
        return buf

    # ---- constructors ----

    @classmethod
    def with_size(cls, width: int, height: int) -> PixelBuffer:
        """Allocate a buffer filled with transparent black."""
        w = _check_dimension("width", width)
        h = _check_dimension("height", height)
        return cls._adopt(np.zeros((h, w, 4), dtype=np.uint8))

    @classmethod
    def filled(cls, width: int, height: int, pixel: Sequence[int]) -> PixelBuffer:
        w = _check_dimension("width", width)
        h = _check_dimension("height", height)
        arr = np.empty((h, w, 4), dtype=np.uint8)
        arr[:, :] = _as_pixel(pixel)
        return cls._adopt(arr)

    @classmethod
    def from_pixels(cls, width: int, height: int,
                    pixels: Iterable[Sequence[int]]) -> PixelBuffer:
        """Build from a flat row-major sequence of RGB or RGBA tuples."""
        w = _check_dimension("width", width)
        h = _check_dimension("height", height)
        flat = [_as_pixel(p) for p in pixels]
        if len(flat) != w * h:
            raise InvalidParameter("pixels", len(flat), f"expected {w * h} pixels")
        return cls._adopt(np.array(flat, dtype=np.uint8).reshape(h, w, 4))

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Sequence[int]]]) -> PixelBuffer:
        if not rows or not rows[0]:
            raise InvalidParameter("rows", rows, "buffer must not be empty")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise InvalidParameter("rows", [len(r) for r in rows], "rows differ in length")
        return cls.from_pixels(width, len(rows), (p for row in rows for p in row))

    # ---- access ----

    @property
    def width(self) -> int:
        return self._data.shape[1]

    @property
    def height(self) -> int:
        return self._data.shape[0]

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height

    @property
    def data(self) -> np.ndarray:
        """Read-only (height, width, 4) view of the pixels."""
        return self._data

    def get(self, x: int, y: int) -> Pixel:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise OutOfBounds(x, y, self.width, self.height)
        return Pixel(*(int(c) for c in self._data[y, x]))

    @property
    def pixels(self) -> tuple[Pixel, ...]:
        """All pixels, row-major; length is always width * height."""
        return tuple(Pixel(*p) for p in self._data.reshape(-1, 4).tolist())

    def rows(self) -> list[list[Pixel]]:
        return [[Pixel(*p) for p in row] for row in self._data.tolist()]

    def to_array(self) -> np.ndarray:
        """Writable copy of the pixel data."""
        return self._data.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PixelBuffer):
            return NotImplemented
        return np.array_equal(self._data, other._data)

    def __hash__(self) -> int:
        return hash((self.width, self.height, self._data.tobytes()))

    def __repr__(self) -> str:
        return f"PixelBuffer({self.width}x{self.height})"
