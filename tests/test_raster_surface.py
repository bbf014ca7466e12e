"""Test the numpy/OpenCV raster surface.

Tests for src.canvas.raster:
    - Background fill, sizes and clear()
    - Lines and quadratic curves leave pixels in the stroke colour
    - Glow spreads colour beyond the crisp line
    - Zero-length subpaths: dot for round caps only
    - Non-finite coordinates are skipped, not drawn
    - PNG export through utils.fs
    - A stroke session paints onto the raster

Run:
    pytest tests/test_raster_surface.py -v
"""

import logging
import random

import numpy as np
import pytest
from PIL import Image

from src.brush_engine.session import StrokeSession
from src.canvas import DrawingSurface, RasterSurface
from src.utils.color import ColorParseError
from src.utils.validators import BrushConfig


def _stroke_line(surface, p0, p1, color="#ff0000", width=4.0, glow=0.0, cap="round"):
    surface.begin_path()
    surface.move_to(*p0)
    surface.set_stroke_style(color, width, cap=cap, glow=glow)
    surface.line_to(*p1)
    surface.stroke()


class TestBasics:
    def test_background(self) -> None:
        surface = RasterSurface(40, 30, background="#102030")
        assert surface.image.shape == (30, 40, 3)
        assert surface.image.dtype == np.uint8
        assert (surface.width, surface.height) == (40, 30)
        assert np.all(surface.image == np.array([16, 32, 48], dtype=np.uint8))

    def test_is_drawing_surface(self) -> None:
        assert isinstance(RasterSurface(4, 4), DrawingSurface)

    @pytest.mark.parametrize("size", [(0, 10), (10, 0), (-1, 5)])
    def test_bad_size(self, size) -> None:
        with pytest.raises(ValueError, match="Canvas size must be positive"):
            RasterSurface(*size)

    def test_bad_background(self) -> None:
        with pytest.raises(ColorParseError):
            RasterSurface(10, 10, background="nope")

    def test_bad_stroke_colour(self) -> None:
        with pytest.raises(ColorParseError):
            RasterSurface(10, 10).set_stroke_style("nope", 2.0)

    def test_clear(self) -> None:
        surface = RasterSurface(20, 20)
        _stroke_line(surface, (2, 10), (18, 10))
        assert not np.all(surface.image == 255)
        surface.clear()
        assert np.all(surface.image == 255)

    def test_to_array_is_copy(self) -> None:
        surface = RasterSurface(8, 8)
        arr = surface.to_array()
        arr[...] = 0
        assert np.all(surface.image == 255)


class TestStroking:
    def test_line_pixels(self) -> None:
        surface = RasterSurface(50, 50)
        _stroke_line(surface, (5, 25), (45, 25), color="#ff0000", width=5.0)
        # Centre of the line is fully covered
        assert tuple(surface.image[25, 25]) == (255, 0, 0)
        # Far from the line stays background
        assert tuple(surface.image[5, 25]) == (255, 255, 255)

    def test_quadratic_curve(self) -> None:
        surface = RasterSurface(60, 60)
        surface.begin_path()
        surface.move_to(10, 50)
        surface.set_stroke_style("#0000ff", 3.0)
        surface.quadratic_curve_to(30, 10, 50, 50)
        surface.stroke()
        # Curve apex at t=0.5 is (30, 30)
        assert tuple(surface.image[30, 30]) == (0, 0, 255)
        # The control point itself is off the curve
        assert tuple(surface.image[10, 30]) == (255, 255, 255)

    def test_glow_spreads(self) -> None:
        crisp = RasterSurface(60, 60)
        glowing = RasterSurface(60, 60)
        _stroke_line(crisp, (10, 30), (50, 30), color="#000000", width=2.0)
        _stroke_line(glowing, (10, 30), (50, 30), color="#000000", width=2.0, glow=6.0)
        row = 30 + 5
        assert glowing.image[row, 30].sum() < crisp.image[row, 30].sum()
        # The crisp line is still painted on top
        assert tuple(glowing.image[30, 30]) == (0, 0, 0)

    def test_bare_move_draws_nothing(self) -> None:
        surface = RasterSurface(20, 20)
        surface.begin_path()
        surface.move_to(10, 10)
        surface.stroke()
        assert np.all(surface.image == 255)

    def test_zero_length_round_cap(self) -> None:
        surface = RasterSurface(20, 20)
        _stroke_line(surface, (10, 10), (10, 10), color="#000000", width=6.0, cap="round")
        assert tuple(surface.image[10, 10]) == (0, 0, 0)

    def test_zero_length_butt_cap(self) -> None:
        surface = RasterSurface(20, 20)
        _stroke_line(surface, (10, 10), (10, 10), color="#000000", width=6.0, cap="butt")
        assert np.all(surface.image == 255)

    def test_non_finite_skipped(self, caplog) -> None:
        surface = RasterSurface(20, 20)
        with caplog.at_level(logging.WARNING, logger="src.canvas.raster"):
            _stroke_line(surface, (2, 2), (float("nan"), 10))
        assert np.all(surface.image == 255)
        assert "non-finite" in caplog.text

    def test_line_to_without_move(self) -> None:
        surface = RasterSurface(20, 20)
        surface.begin_path()
        surface.set_stroke_style("#000000", 3.0)
        surface.line_to(5, 5)
        surface.line_to(15, 5)
        surface.stroke()
        assert tuple(surface.image[5, 10]) == (0, 0, 0)

    def test_begin_path_resets(self) -> None:
        surface = RasterSurface(20, 20)
        surface.begin_path()
        surface.set_stroke_style("#000000", 3.0)
        surface.move_to(2, 5)
        surface.line_to(18, 5)
        surface.begin_path()
        surface.move_to(2, 15)
        surface.line_to(18, 15)
        surface.stroke()
        assert tuple(surface.image[5, 10]) == (255, 255, 255)
        assert tuple(surface.image[15, 10]) == (0, 0, 0)


class TestOutput:
    def test_save_png(self, tmp_path) -> None:
        surface = RasterSurface(32, 24, background="#336699")
        _stroke_line(surface, (4, 12), (28, 12), color="#ffcc00", width=3.0)
        path = surface.save(tmp_path / "out" / "canvas.png")
        assert path.exists()
        loaded = np.asarray(Image.open(path).convert("RGB"))
        np.testing.assert_array_equal(loaded, surface.image)
        assert not list(path.parent.glob("*.tmp*"))


class TestSessionOnRaster:
    def test_stroke_paints_brush_colour(self) -> None:
        surface = RasterSurface(200, 100)
        session = StrokeSession(
            surface, BrushConfig(color="#3d34a5", vary_brightness=0), rng=random.Random(1)
        )
        session.start(20, 50)
        session.move(100, 50)
        session.move(180, 50)
        session.end()
        painted = np.any(surface.image != 255, axis=-1)
        assert painted.sum() > 0
        # Stroke spans roughly the brush width around y=50
        rows = np.where(painted[:, 100])[0]
        assert rows.min() >= 50 - 20 and rows.max() <= 50 + 20
        column = {tuple(px) for px in surface.image[:, 100]}
        assert (0x3d, 0x34, 0xa5) in column
