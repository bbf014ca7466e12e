"""Test per-bristle segment construction.

Tests for src.brush_engine.geometry:
    - rotate_point basics and 2π wraparound invariance
    - segment_for: origin on old heading, control and destination on new
    - First move (old heading None) uses the new heading for the origin
    - stroke_segments: one per bristle, bristle order, deterministic

Run:
    pytest tests/test_stroke_geometry.py -v
"""

import math
import random

import pytest

from src.brush_engine.brush import Bristle, Brush, make_brush
from src.brush_engine.geometry import (
    Point,
    bristle_offset,
    rotate_point,
    segment_for,
    stroke_segments,
)


def _approx_point(p):
    return pytest.approx((p[0], p[1]), abs=1e-9)


class TestRotatePoint:
    def test_zero_angle(self) -> None:
        assert rotate_point((0, 0), 0.0, 5.0) == _approx_point((5.0, 0.0))

    def test_quarter_turn(self) -> None:
        assert rotate_point((1, 1), math.pi / 2, 2.0) == _approx_point((1.0, 3.0))

    def test_negative_distance(self) -> None:
        assert rotate_point((0, 0), 0.0, -4.0) == _approx_point((-4.0, 0.0))

    def test_returns_point(self) -> None:
        p = rotate_point((1, 2), 0.3, 0.0)
        assert isinstance(p, Point)
        assert p == (1, 2)

    def test_full_turn_invariance(self) -> None:
        rng = random.Random(4)
        for _ in range(200):
            base = (rng.uniform(-100, 100), rng.uniform(-100, 100))
            theta = rng.uniform(-10, 10)
            r = rng.uniform(-30, 30)
            assert rotate_point(base, theta + 2 * math.pi, r) == _approx_point(
                rotate_point(base, theta, r)
            )


class TestSegmentFor:
    def test_known_segment(self) -> None:
        bristle = Bristle(lateral_offset=0.0, thickness=2.0, color="#000000")
        seg = segment_for(bristle, 10.0, (0, 0), (10, 0), 0.0, math.pi / 2)
        # offset = 0 - 10/2 = -5
        assert seg.origin == _approx_point((-5.0, 0.0))
        assert seg.control_point == _approx_point((0.0, -5.0))
        assert seg.destination == _approx_point((10.0, -5.0))

    def test_bristle_on_centre_line(self) -> None:
        bristle = Bristle(lateral_offset=5.0, thickness=2.0, color="#000000")
        assert bristle_offset(bristle, 10.0) == 0.0
        seg = segment_for(bristle, 10.0, (1, 2), (3, 4), 0.7, 1.9)
        assert seg.origin == _approx_point((1, 2))
        assert seg.control_point == _approx_point((1, 2))
        assert seg.destination == _approx_point((3, 4))

    def test_first_move_uses_new_heading(self) -> None:
        bristle = Bristle(lateral_offset=0.0, thickness=2.0, color="#000000")
        seg = segment_for(bristle, 25.0, (0, 0), (100, 0), None, -math.pi / 2)
        assert seg.origin == _approx_point((0.0, 12.5))
        assert seg.control_point == _approx_point((0.0, 12.5))
        assert seg.destination == _approx_point((100.0, 12.5))
        assert all(math.isfinite(c) for c in (*seg.origin, *seg.destination))

    def test_straight_move_same_heading(self) -> None:
        bristle = Bristle(lateral_offset=2.0, thickness=2.0, color="#000000")
        seg = segment_for(bristle, 8.0, (0, 0), (0, 50), 0.0, 0.0)
        # Control point coincides with origin: a straight bristle
        assert seg.control_point == _approx_point(seg.origin)


class TestStrokeSegments:
    def test_one_per_bristle_in_order(self) -> None:
        brush = make_brush(25, "#3d34a5", rng=random.Random(1))
        segments = stroke_segments(brush, (0, 0), (30, 40), 0.2, 0.4)
        assert len(segments) == len(brush)
        assert [b for b, _ in segments] == list(brush)

    def test_deterministic(self) -> None:
        brush = Brush(
            bristles=(Bristle(0.0, 2.0, "#000000"), Bristle(4.0, 3.0, "#111111")),
            stroke_width=6.0,
        )
        a = stroke_segments(brush, (5, 5), (9, 1), 1.0, 1.3)
        b = stroke_segments(brush, (5, 5), (9, 1), 1.0, 1.3)
        assert a == b
