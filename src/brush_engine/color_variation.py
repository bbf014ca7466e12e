"""Per-bristle colour variation.

Each bristle gets a colour a few percent brighter or darker than the
stroke's base colour, so a stroke reads as many fibres instead of one
flat ribbon.
"""

import random
from typing import Optional

from src.utils import color as color_utils


def vary_color(
    source_color: color_utils.ColorLike,
    vary_brightness: float,
    rng: Optional[random.Random] = None
) -> str:
    """Derive a randomized colour near source_color.

    Parameters
    ----------
    source_color : ColorLike
        Base colour (any form accepted by utils.color.parse_color)
    vary_brightness : float
        Maximum brightness change V in percent, V ≥ 0
    rng : random.Random, optional
        Random source; defaults to the module-level generator

    Returns
    -------
    str
        Varied colour as "#rrggbb"

    Raises
    ------
    ColorParseError
        If source_color cannot be parsed
    ValueError
        If vary_brightness is negative

    Notes
    -----
    Draws amount = round(U[0, 2V]). Amounts above V brighten by
    (amount - V); the rest darken by amount, so amount == 0 returns the
    source colour unchanged.
    """
    if vary_brightness < 0:
        raise ValueError(f"vary_brightness must be >= 0, got {vary_brightness}")
    rng = rng if rng is not None else random

    amount = color_utils.round_half_up(rng.random() * 2 * vary_brightness)
    if amount > vary_brightness:
        varied = color_utils.brighten(source_color, amount - vary_brightness)
    else:
        varied = color_utils.darken(source_color, amount)
    return color_utils.to_hex(varied)
