"""Bristle painting onto a drawing surface.

One path per bristle per move, never batched: bristles are painted in
bristle order so later bristles land on top of earlier ones.
"""

from typing import Iterable, Sequence, Tuple

from src.canvas.surface import DrawingSurface

from .brush import Bristle
from .geometry import BristleSegment

LINE_CAP = "round"
LINE_JOIN = "round"

# Glow radius as a fraction of bristle thickness
GLOW_FACTOR = 0.5


class StrokeRenderer:
    """Issues drawing calls for bristle segments on one surface."""

    def __init__(self, surface: DrawingSurface):
        self.surface = surface

    def paint_bristle(
        self,
        bristle_origin: Sequence[float],
        bristle_destination: Sequence[float],
        bristle: Bristle,
        control_point: Sequence[float]
    ) -> None:
        """Stroke one bristle's quadratic curve.

        The trailing line_to the destination closes the path at the curve's
        end point so round caps are drawn there even for flat curves.
        """
        surface = self.surface
        surface.begin_path()
        surface.move_to(bristle_origin[0], bristle_origin[1])
        surface.set_stroke_style(
            bristle.color,
            bristle.thickness,
            cap=LINE_CAP,
            join=LINE_JOIN,
            glow=bristle.thickness * GLOW_FACTOR,
        )
        surface.quadratic_curve_to(
            control_point[0], control_point[1],
            bristle_destination[0], bristle_destination[1],
        )
        surface.line_to(bristle_destination[0], bristle_destination[1])
        surface.stroke()

    def paint_segments(self, segments: Iterable[Tuple[Bristle, BristleSegment]]) -> int:
        """Paint (bristle, segment) pairs in order; returns how many were painted."""
        painted = 0
        for bristle, segment in segments:
            self.paint_bristle(segment.origin, segment.destination, bristle, segment.control_point)
            painted += 1
        return painted
