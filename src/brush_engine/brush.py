"""Bristle layout for a single stroke.

A brush is generated once when a stroke starts and stays fixed until the
stroke ends. Bristle 0 sits on the stroke's reference line; the others are
spread across the stroke width with jitter so they never line up on a grid.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Iterator, Optional, Tuple

from src.utils import color as color_utils

from .color_variation import vary_color

logger = logging.getLogger(__name__)

BRISTLE_SPACING_PX = 3.0
MIN_THICKNESS_PX = 2.0
THICKNESS_SPREAD_PX = 2.0


@dataclass(frozen=True)
class Bristle:
    """One simulated brush fibre.

    lateral_offset is measured from the brush's reference line and may be
    negative; thickness is in px; color is "#rrggbb".
    """

    lateral_offset: float
    thickness: float
    color: str


@dataclass(frozen=True)
class Brush:
    """Ordered, immutable bristle set plus the width it was laid out for."""

    bristles: Tuple[Bristle, ...]
    stroke_width: float

    def __len__(self) -> int:
        return len(self.bristles)

    def __iter__(self) -> Iterator[Bristle]:
        return iter(self.bristles)

    def __getitem__(self, index: int) -> Bristle:
        return self.bristles[index]


def bristle_count(stroke_width: float) -> int:
    """Number of bristles for a stroke width: round(width / 3), at least 1."""
    return max(1, color_utils.round_half_up(stroke_width / BRISTLE_SPACING_PX))


def make_brush(
    stroke_width: float,
    base_color: color_utils.ColorLike,
    vary_brightness: float = 5.0,
    rng: Optional[random.Random] = None
) -> Brush:
    """Generate the bristle set for a new stroke.

    Parameters
    ----------
    stroke_width : float
        Stroke width in px, > 0
    base_color : ColorLike
        Stroke colour every bristle colour is varied from
    vary_brightness : float
        Brightness variation magnitude in percent, default 5
    rng : random.Random, optional
        Random source for jitter, thickness and colour; defaults to the
        module-level generator

    Returns
    -------
    Brush
        bristle_count(stroke_width) bristles in draw order

    Raises
    ------
    ValueError
        If stroke_width is not a positive finite number
    ColorParseError
        If base_color cannot be parsed

    Notes
    -----
    gap = width / count. Bristle 0 has offset exactly 0. Bristle i > 0 sits
    at gap·i plus jitter drawn from [-gap/2, +gap/2). Thickness is drawn
    from [2, 4) px.
    """
    if not math.isfinite(stroke_width) or stroke_width <= 0:
        raise ValueError(f"stroke_width must be a positive finite number, got {stroke_width}")
    rng = rng if rng is not None else random

    count = bristle_count(stroke_width)
    gap = stroke_width / count

    bristles = []
    for i in range(count):
        if i == 0:
            offset = 0.0
        else:
            offset = gap * i + rng.random() * gap - gap / 2
        thickness = rng.random() * THICKNESS_SPREAD_PX + MIN_THICKNESS_PX
        bristles.append(Bristle(
            lateral_offset=offset,
            thickness=thickness,
            color=vary_color(base_color, vary_brightness, rng),
        ))

    logger.debug("Made brush: %d bristles, gap=%.2fpx", count, gap)
    return Brush(bristles=tuple(bristles), stroke_width=float(stroke_width))
