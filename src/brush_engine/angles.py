"""Stroke heading: bearings between points and shortest-path smoothing.

A bearing of 0 points along the brush's reference orientation, which is a
quarter turn behind the canvas x axis: bearing = atan2(dy, dx) - π/2.

Headings are carried unwrapped while a stroke moves so that differences
never jump by 2π; they are only normalized to [0, 2π) for storage between
events (normalize_angle).

Degenerate moves (origin == destination) have no bearing. bearing() returns
None for them and next_angle() keeps the previous heading, so no NaN or
arbitrary angle ever reaches geometry.
"""

import math
from typing import Optional, Sequence

TWO_PI = 2.0 * math.pi

# Moves shorter than this (px) have no usable direction
DEGENERATE_EPS = 1e-9


def bearing(origin: Sequence[float], destination: Sequence[float]) -> Optional[float]:
    """Heading of the move origin → destination.

    Parameters
    ----------
    origin, destination : Sequence[float]
        (x, y) points in canvas space

    Returns
    -------
    float or None
        atan2(dy, dx) - π/2, wrapped into (-2π, 2π) by truncated remainder;
        None if the points coincide
    """
    dx = destination[0] - origin[0]
    dy = destination[1] - origin[1]
    if math.hypot(dx, dy) <= DEGENERATE_EPS:
        return None
    return math.fmod(math.atan2(dy, dx) - math.pi / 2, TWO_PI)


def angle_diff(angle_a: float, angle_b: float) -> float:
    """Signed shortest difference a - b, wrapped into (-π, π].

    Both operands may be any real value; wraparound is handled for each.
    """
    return math.pi - (math.pi - (angle_a - angle_b)) % TWO_PI


def next_angle(
    origin: Sequence[float],
    destination: Sequence[float],
    previous_angle: Optional[float]
) -> Optional[float]:
    """Smoothed heading after moving from origin to destination.

    Parameters
    ----------
    origin, destination : Sequence[float]
        Move endpoints
    previous_angle : float or None
        Heading before the move; None on the first move of a stroke

    Returns
    -------
    float or None
        - previous_angle is None: the raw bearing (None if degenerate)
        - degenerate move: previous_angle unchanged
        - otherwise previous_angle nudged onto the new bearing along the
          shortest arc, so the change never exceeds π in magnitude
    """
    new_bearing = bearing(origin, destination)
    if previous_angle is None:
        return new_bearing
    if new_bearing is None:
        return previous_angle
    return previous_angle - angle_diff(previous_angle, new_bearing)


def normalize_angle(angle: float) -> float:
    """Wrap an angle into [0, 2π)."""
    wrapped = angle % TWO_PI
    # -1e-17 % 2π rounds up to exactly 2π
    return 0.0 if wrapped >= TWO_PI else wrapped
