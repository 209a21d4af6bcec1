"""Tests for drawing surfaces, clipping and the Painter primitives."""

import math

import numpy as np
import pytest
from PIL import Image

from wireframe import (
    Painter,
    RasterSurface,
    ScreenPoint,
    clamp_rect,
    clip_segment,
    parse_color,
    save_frame,
)

RED = (255, 0, 0)
GREEN = (80, 255, 80)
BG = (16, 16, 16)


class TestParseColor:
    """CSS-style color descriptors."""

    def test_hex(self):
        assert parse_color("#50FF50") == (80, 255, 80)
        assert parse_color("#101010") == (16, 16, 16)

    def test_named(self):
        assert parse_color("white") == (255, 255, 255)

    def test_garbage_rejected(self):
        with pytest.raises(ValueError, match="invalid color"):
            parse_color("not-a-color")


class TestClipSegment:
    """Liang-Barsky clipping against the surface box."""

    def test_inside_untouched(self):
        visible, x0, y0, x1, y1 = clip_segment(1.0, 2.0, 5.0, 6.0, 9.0, 9.0)
        assert visible
        assert (x0, y0, x1, y1) == pytest.approx((1.0, 2.0, 5.0, 6.0))

    def test_crossing_is_cut_to_border(self):
        visible, x0, y0, x1, y1 = clip_segment(-1e9, 5.0, 1e9, 5.0, 39.0, 29.0)
        assert visible
        assert (x0, y0, x1, y1) == pytest.approx((0.0, 5.0, 39.0, 5.0))

    def test_fully_outside(self):
        visible, *_ = clip_segment(-10.0, -10.0, -1.0, -5.0, 39.0, 29.0)
        assert not visible

    def test_span_overflow_is_invisible(self):
        visible, *_ = clip_segment(-1e308, 5.0, 1e308, 5.0, 39.0, 29.0)
        assert not visible
        visible, *_ = clip_segment(5.0, 1e308, 5.0, -1e308, 39.0, 29.0)
        assert not visible


class TestClampRect:
    """Float rectangles snapped to pixels and clamped to the surface."""

    def test_inside(self):
        assert clamp_rect(2.0, 3.0, 4.0, 5.0, 40, 30) == (2, 3, 6, 8)

    def test_partially_outside(self):
        assert clamp_rect(-5.0, 25.0, 10.0, 10.0, 40, 30) == (0, 25, 5, 30)

    def test_outside(self):
        assert clamp_rect(100.0, 100.0, 10.0, 10.0, 40, 30) is None


class TestRasterSurface:
    """Off-screen numpy framebuffer."""

    def test_size(self, raster):
        assert (raster.width, raster.height) == (40, 30)
        assert raster.pixels.shape == (40, 30, 3)

    def test_clear_fills_everything(self, raster):
        raster.clear(BG)
        assert (raster.pixels == np.array(BG, dtype=np.uint8)).all()

    def test_fill_rect(self, raster):
        raster.clear(BG)
        raster.fill_rect(2.0, 3.0, 4.0, 4.0, RED)
        assert tuple(raster.pixels[2, 3]) == RED
        assert tuple(raster.pixels[5, 6]) == RED
        assert tuple(raster.pixels[6, 6]) == BG
        assert tuple(raster.pixels[1, 3]) == BG

    def test_fill_rect_off_surface_is_ignored(self, raster):
        raster.clear(BG)
        raster.fill_rect(500.0, -500.0, 10.0, 10.0, RED)
        assert (raster.pixels == np.array(BG, dtype=np.uint8)).all()

    def test_line_hits_both_endpoints(self, raster):
        raster.clear(BG)
        raster.stroke_line(ScreenPoint(0.0, 0.0), ScreenPoint(39.0, 29.0), GREEN)
        assert tuple(raster.pixels[0, 0]) == GREEN
        assert tuple(raster.pixels[39, 29]) == GREEN

    def test_steep_line(self, raster):
        raster.clear(BG)
        raster.stroke_line(ScreenPoint(10.0, 0.0), ScreenPoint(10.0, 29.0), GREEN)
        column = raster.pixels[10, :, :]
        assert (column == np.array(GREEN, dtype=np.uint8)).all()

    def test_line_near_float_limit_is_dropped(self, raster):
        raster.clear(BG)
        raster.stroke_line(ScreenPoint(-1e308, 5.0), ScreenPoint(1e308, 5.0), GREEN)
        assert (raster.pixels == np.array(BG, dtype=np.uint8)).all()

    def test_far_away_endpoints_are_clipped(self, raster):
        raster.clear(BG)
        raster.stroke_line(ScreenPoint(-1e12, 5.0), ScreenPoint(1e12, 5.0), GREEN)
        row = raster.pixels[:, 5, :]
        assert (row == np.array(GREEN, dtype=np.uint8)).all()
        assert tuple(raster.pixels[0, 6]) == BG

    def test_snapshot_is_a_copy(self, raster):
        raster.clear(BG)
        snap = raster.snapshot()
        raster.clear(RED)
        assert tuple(snap[0, 0]) == BG


class TestSaveFrame:
    """PNG export through Pillow."""

    def test_png_has_surface_size_and_orientation(self, raster, tmp_path):
        raster.clear(BG)
        raster.fill_rect(0.0, 0.0, 1.0, 1.0, RED)
        path = save_frame(raster, tmp_path / "frame.png")

        with Image.open(path) as img:
            assert img.size == (40, 30)
            assert img.getpixel((0, 0)) == RED
            assert img.getpixel((39, 29)) == BG


class TestPainter:
    """clear/point/line delegate to the surface in pixel space."""

    def test_clear_uses_background(self, recording_surface):
        painter = Painter(recording_surface, BG, GREEN)
        painter.clear()
        assert recording_surface.calls == [("clear", BG)]

    def test_point_is_centered_square(self, recording_surface):
        painter = Painter(recording_surface, BG, GREEN, point_size=10.0)
        painter.point(ScreenPoint(240.0, 240.0))
        assert recording_surface.calls == [("fill_rect", (235.0, 235.0, 10.0, 10.0), GREEN)]

    def test_line_uses_foreground(self, recording_surface):
        painter = Painter(recording_surface, BG, GREEN)
        a, b = ScreenPoint(1.0, 2.0), ScreenPoint(3.0, 4.0)
        painter.line(a, b)
        assert recording_surface.calls == [("stroke_line", (a, b), GREEN)]

    @pytest.mark.parametrize("bad", [math.inf, -math.inf, math.nan])
    def test_non_finite_is_skipped(self, recording_surface, bad):
        painter = Painter(recording_surface, BG, GREEN)
        painter.point(ScreenPoint(bad, 1.0))
        painter.line(ScreenPoint(1.0, 1.0), ScreenPoint(1.0, bad))
        assert recording_surface.calls == []

    def test_draws_on_raster(self, raster):
        painter = Painter(raster, BG, GREEN, point_size=4.0)
        painter.clear()
        painter.point(ScreenPoint(20.0, 15.0))
        assert tuple(raster.pixels[18, 13]) == GREEN
        assert tuple(raster.pixels[21, 16]) == GREEN
        assert tuple(raster.pixels[22, 17]) == BG
