"""Per-bristle segment construction.

For every move event each bristle contributes one quadratic curve. Its
three points are the move's anchor points pushed sideways along the stroke
heading:

    origin      = rotate(anchor_origin,      old_angle, offset)
    control     = rotate(anchor_origin,      new_angle, offset)
    destination = rotate(anchor_destination, new_angle, offset)

with offset = bristle.lateral_offset - stroke_width / 2. Pushing the origin
along the old heading and the rest along the new one bends each bristle
around the turn, which is what makes the stroke look swept.

Everything here is pure and deterministic.
"""

import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Sequence, Tuple

from .brush import Bristle, Brush


class Point(NamedTuple):
    """Canvas-space coordinate (px, image frame)."""

    x: float
    y: float


@dataclass(frozen=True)
class BristleSegment:
    """Curve for one bristle over one move: origin → (control) → destination."""

    origin: Point
    destination: Point
    control_point: Point


def rotate_point(base: Sequence[float], angle: float, distance: float) -> Point:
    """Point at `distance` from `base` in direction `angle` (radians)."""
    return Point(
        base[0] + distance * math.cos(angle),
        base[1] + distance * math.sin(angle),
    )


def bristle_offset(bristle: Bristle, stroke_width: float) -> float:
    """Signed displacement of a bristle from the stroke centre line."""
    return bristle.lateral_offset - stroke_width / 2


def segment_for(
    bristle: Bristle,
    stroke_width: float,
    origin: Sequence[float],
    destination: Sequence[float],
    old_angle: Optional[float],
    new_angle: float
) -> BristleSegment:
    """Compute one bristle's curve for a move from origin to destination.

    Parameters
    ----------
    bristle : Bristle
        Bristle being placed
    stroke_width : float
        Width the brush was laid out for (px)
    origin, destination : Sequence[float]
        Anchor points of the move (px)
    old_angle : float or None
        Heading before the move; None on the first move of a stroke, in
        which case new_angle is used for the origin too
    new_angle : float
        Smoothed heading after the move

    Returns
    -------
    BristleSegment
    """
    offset = bristle_offset(bristle, stroke_width)
    start_angle = new_angle if old_angle is None else old_angle
    return BristleSegment(
        origin=rotate_point(origin, start_angle, offset),
        destination=rotate_point(destination, new_angle, offset),
        control_point=rotate_point(origin, new_angle, offset),
    )


def stroke_segments(
    brush: Brush,
    origin: Sequence[float],
    destination: Sequence[float],
    old_angle: Optional[float],
    new_angle: float
) -> Tuple[Tuple[Bristle, BristleSegment], ...]:
    """Segments for every bristle of a brush, in bristle (draw) order."""
    return tuple(
        (bristle, segment_for(bristle, brush.stroke_width, origin, destination, old_angle, new_angle))
        for bristle in brush
    )
