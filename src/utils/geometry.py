"""Geometric helpers for rasterizing bristle paths.

Provides:
    - Quadratic Bézier evaluation and adaptive flattening
    - Polyline length and axis-aligned bounding box

Used by:
    - Raster surface: quadratic curve segments → polylines for OpenCV
    - Tests: curve endpoint and flatness checks

All coordinates are canvas pixels. Points are (x, y) pairs; polylines are
numpy arrays of shape (N, 2), float64.

Adaptive flattening uses recursive subdivision with a configurable max_err_px
tolerance (default: 0.25 px, well under the anti-aliasing footprint).
"""

from typing import Sequence, Tuple

import numpy as np


def bezier_quadratic_eval(
    p0: Sequence[float],
    p1: Sequence[float],
    p2: Sequence[float],
    t: np.ndarray
) -> np.ndarray:
    """Evaluate quadratic Bézier curve at parameter t.

    Parameters
    ----------
    p0, p1, p2 : Sequence[float]
        Start, control and end points (x, y)
    t : np.ndarray
        Parameter values in [0, 1], shape (N,)

    Returns
    -------
    np.ndarray
        Points on curve, shape (N, 2)

    Notes
    -----
    B(t) = (1-t)²·p0 + 2(1-t)t·p1 + t²·p2
    """
    t = np.atleast_1d(np.asarray(t, dtype=np.float64))[:, None]
    a = np.asarray(p0, dtype=np.float64)
    b = np.asarray(p1, dtype=np.float64)
    c = np.asarray(p2, dtype=np.float64)

    one_minus_t = 1.0 - t
    return (one_minus_t ** 2) * a + 2.0 * one_minus_t * t * b + (t ** 2) * c


def bezier_quadratic_polyline(
    p0: Sequence[float],
    p1: Sequence[float],
    p2: Sequence[float],
    max_err_px: float = 0.25,
    max_depth: int = 10
) -> np.ndarray:
    """Flatten quadratic Bézier to polyline via adaptive subdivision.

    Parameters
    ----------
    p0, p1, p2 : Sequence[float]
        Start, control and end points (x, y) in px
    max_err_px : float
        Maximum allowed deviation in px, default 0.25
    max_depth : int
        Maximum recursion depth, default 10

    Returns
    -------
    np.ndarray
        Polyline vertices, shape (N, 2), N ≥ 2, first = p0, last = p2

    Notes
    -----
    Flatness criterion: distance from the control point to the chord.
    The curve's maximum deviation from the chord is half that distance,
    so subdivision stops once half the control distance is within tolerance.
    """
    def subdivide(q0, q1, q2, depth):
        if depth >= max_depth:
            return [q0, q2]

        chord = q2 - q0
        chord_len = float(np.hypot(chord[0], chord[1]))
        v = q1 - q0
        if chord_len < 1e-12:
            dist = float(np.hypot(v[0], v[1]))
        else:
            # 2D cross product / chord length = perpendicular distance
            dist = abs(v[0] * chord[1] - v[1] * chord[0]) / chord_len

        if dist * 0.5 <= max_err_px:
            return [q0, q2]

        # De Casteljau subdivision at t=0.5
        q01 = (q0 + q1) / 2.0
        q12 = (q1 + q2) / 2.0
        mid = (q01 + q12) / 2.0

        left = subdivide(q0, q01, mid, depth + 1)
        right = subdivide(mid, q12, q2, depth + 1)
        return left[:-1] + right

    a = np.asarray(p0, dtype=np.float64)
    b = np.asarray(p1, dtype=np.float64)
    c = np.asarray(p2, dtype=np.float64)
    return np.stack(subdivide(a, b, c, depth=0), axis=0)


def polyline_length(points: np.ndarray) -> float:
    """Total length of a polyline, 0.0 for fewer than two points."""
    points = np.asarray(points, dtype=np.float64)
    if points.shape[0] < 2:
        return 0.0
    diffs = points[1:] - points[:-1]
    return float(np.hypot(diffs[:, 0], diffs[:, 1]).sum())


def polyline_bbox(points: np.ndarray) -> Tuple[float, float, float, float]:
    """Compute axis-aligned bounding box of polyline.

    Parameters
    ----------
    points : np.ndarray
        Polyline vertices, shape (N, 2)

    Returns
    -------
    Tuple[float, float, float, float]
        (xmin, ymin, xmax, ymax); (0, 0, 0, 0) if no points
    """
    points = np.asarray(points, dtype=np.float64)
    if points.shape[0] == 0:
        return (0.0, 0.0, 0.0, 0.0)
    xmin, ymin = points.min(axis=0)
    xmax, ymax = points.max(axis=0)
    return (float(xmin), float(ymin), float(xmax), float(ymax))
