"""Tests for imagepicker.geometric."""

import numpy as np
import pytest

from imagepicker.buffer import Pixel, PixelBuffer, TRANSPARENT
from imagepicker.errors import InvalidParameter
from imagepicker.geometric import (
    scale, rotate, translate, mirror_horizontal, mirror_vertical, rotation_matrix,
)

RED = (255, 0, 0)
GREEN = (0, 255, 0)
BLUE = (0, 0, 255)
WHITE = (255, 255, 255)


def _rand_buf(h=12, w=16):
    arr = np.random.randint(0, 256, (h, w, 4), dtype=np.uint8)
    arr[:, :, 3] = 255
    return PixelBuffer(arr)


def _quad():
    return PixelBuffer.from_rows([[RED, GREEN], [BLUE, WHITE]])


def _opaque_count(buf):
    return int(np.count_nonzero(buf.data[:, :, 3]))


class TestScale:
    @pytest.mark.parametrize("w,h,factor,expected", [
        (10, 7, 1.5, (15, 11)),
        (10, 7, 0.5, (5, 4)),
        (3, 3, 2.0, (6, 6)),
        (10, 10, 1.1, (11, 11)),
        (10, 10, 0.9, (9, 9)),
    ])
    def test_output_size(self, w, h, factor, expected):
        buf = PixelBuffer.with_size(w, h)
        assert scale(buf, factor).size == expected

    def test_scale_up_scatter(self):
        out = scale(_quad(), 2.0)
        assert out.size == (4, 4)
        assert out.get(0, 0) == Pixel(*RED)
        assert out.get(2, 0) == Pixel(*GREEN)
        assert out.get(0, 2) == Pixel(*BLUE)
        assert out.get(2, 2) == Pixel(*WHITE)

    def test_scale_up_leaves_gaps(self):
        out = scale(_quad(), 2.0)
        assert out.get(1, 1) == TRANSPARENT
        assert out.get(3, 3) == TRANSPARENT
        assert _opaque_count(out) == 4

    def test_identity_factor(self):
        buf = _rand_buf()
        assert scale(buf, 1.0) == buf

    def test_scale_down_last_write_wins(self):
        buf = PixelBuffer.from_rows([[(10, 0, 0), (20, 0, 0), (30, 0, 0), (40, 0, 0)]])
        out = scale(buf, 0.5)
        assert out.size == (2, 1)
        # x=1 and x=2 both land on 1; x=3 lands outside
        assert [p.r for p in out.pixels] == [10, 30]

    @pytest.mark.parametrize("factor", [0, 0.0, -1.0, float("nan"), float("inf")])
    def test_invalid_factor(self, factor):
        with pytest.raises(InvalidParameter):
            scale(_quad(), factor)

    def test_empty_result_rejected(self):
        with pytest.raises(InvalidParameter):
            scale(_quad(), 0.1)

    def test_input_untouched(self):
        buf = _rand_buf()
        before = buf.to_array()
        scale(buf, 1.7)
        np.testing.assert_array_equal(buf.data, before)


class TestTranslate:
    def test_shift_right(self):
        buf = _rand_buf(3, 3)
        out = translate(buf, 1, 0)
        assert out.size == buf.size
        np.testing.assert_array_equal(out.data[:, 1:], buf.data[:, :2])
        assert all(out.get(0, y) == TRANSPARENT for y in range(3))

    def test_shift_up_left(self):
        buf = _rand_buf(4, 4)
        out = translate(buf, -2, -1)
        np.testing.assert_array_equal(out.data[:3, :2], buf.data[1:, 2:])
        assert _opaque_count(out) == 2 * 3

    def test_rounds_to_nearest(self):
        buf = _rand_buf(5, 5)
        assert translate(buf, 1.5, 0) == translate(buf, 2, 0)
        assert translate(buf, 0.4, -0.4) == buf

    def test_shift_out_of_frame(self):
        buf = _rand_buf(4, 4)
        out = translate(buf, 0, 10)
        assert _opaque_count(out) == 0

    def test_invalid_offset(self):
        with pytest.raises(InvalidParameter):
            translate(_quad(), float("nan"), 0)


class TestMirror:
    def test_horizontal_quad(self):
        out = mirror_horizontal(_quad())
        assert out == PixelBuffer.from_rows([[GREEN, RED], [WHITE, BLUE]])

    def test_vertical_quad(self):
        out = mirror_vertical(_quad())
        assert out == PixelBuffer.from_rows([[BLUE, WHITE], [RED, GREEN]])

    @pytest.mark.parametrize("fn", [mirror_horizontal, mirror_vertical])
    def test_twice_is_identity(self, fn):
        buf = _rand_buf(7, 11)
        assert fn(fn(buf)) == buf

    @pytest.mark.parametrize("fn", [mirror_horizontal, mirror_vertical])
    def test_single_pixel(self, fn):
        buf = PixelBuffer.filled(1, 1, RED)
        assert fn(buf) == buf

    def test_result_is_new_buffer(self):
        buf = _rand_buf()
        out = mirror_horizontal(buf)
        assert not np.shares_memory(out.data, buf.data)


class TestRotate:
    def test_matrix(self):
        m = rotation_matrix(90)
        np.testing.assert_array_almost_equal(m, [[0, -1], [1, 0]])

    def test_zero_is_identity(self):
        buf = _rand_buf()
        assert rotate(buf, 0) == buf

    @pytest.mark.parametrize("degrees", [30, 90, -45, 180, 270])
    def test_keeps_size(self, degrees):
        buf = _rand_buf(5, 9)
        assert rotate(buf, degrees).size == (9, 5)

    def test_90_about_origin(self):
        buf = _rand_buf(4, 4)
        out = rotate(buf, 90)
        # Only the source's top row lands inside the frame, along column 0.
        for y in range(4):
            assert out.get(0, y) == buf.get(y, 0)
        assert _opaque_count(out) == 4

    def test_90_then_minus_90(self):
        buf = _rand_buf(6, 6)
        out = rotate(rotate(buf, 90), -90)
        np.testing.assert_array_equal(out.data[0], buf.data[0])
        assert _opaque_count(out) == 6

    def test_180_keeps_only_origin(self):
        buf = _rand_buf(4, 4)
        out = rotate(buf, 180)
        assert out.get(0, 0) == buf.get(0, 0)
        assert _opaque_count(out) == 1

    def test_360_is_identity(self):
        buf = _rand_buf()
        assert rotate(buf, 360) == buf

    def test_bilinear_zero_matches_input(self):
        buf = _rand_buf()
        out = rotate(buf, 0, resample="bilinear")
        diff = np.abs(out.data.astype(int) - buf.data.astype(int))
        assert diff.max() <= 1

    def test_bilinear_keeps_size(self):
        buf = _rand_buf(6, 8)
        assert rotate(buf, 15, resample="bilinear").size == (8, 6)

    def test_invalid_resample(self):
        with pytest.raises(InvalidParameter):
            rotate(_quad(), 90, resample="cubic")

    def test_invalid_degrees(self):
        with pytest.raises(InvalidParameter):
            rotate(_quad(), float("inf"))
