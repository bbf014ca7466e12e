"""Colour parsing and tinting for brush colours.

Provides:
    - Colour string parsing (hex, rgb()/hsl() functions, CSS names)
    - Brighten: additive shift of every RGB channel
    - Darken: lightness reduction in HSL space
    - Hex formatting ("#rrggbb")

Used by:
    - Colour variation: per-bristle brightness jitter
    - Config validation: fail fast on unparseable base colours
    - Raster surface: stroke and background colours

Colours are 8-bit RGB triples internally. Amounts for brighten/darken are
percentages (10 = 10%), matching the usual CSS colour-library convention.

Invariants:
    - Parsing never falls back to a default colour; unknown input raises
      ColorParseError
    - All outputs are clamped to [0, 255] per channel
"""

import colorsys
import math
import re
from typing import Sequence, Tuple, Union

from PIL import ImageColor

RGB = Tuple[int, int, int]
ColorLike = Union[str, Sequence[int]]

_BARE_HEX = re.compile(r"[0-9a-fA-F]{3}|[0-9a-fA-F]{6}")


class ColorParseError(ValueError):
    """Raised when a colour value cannot be interpreted."""

    pass


def round_half_up(value: float) -> int:
    """Round to nearest integer with .5 going up (toward +inf).

    Python's round() uses banker's rounding; colour math here follows the
    half-up convention so that amounts like 25.5 land on 26 and -25.5 on -25.
    """
    return int(math.floor(value + 0.5))


def parse_color(color: ColorLike) -> RGB:
    """Parse a colour value into an 8-bit RGB triple.

    Parameters
    ----------
    color : str or sequence of int
        "#3d34a5", "3d34a5", "#fff", "rgb(61, 52, 165)", "hsl(245, 52%, 43%)",
        CSS names ("red"), or an (r, g, b) sequence

    Returns
    -------
    RGB
        (r, g, b), each in [0, 255]

    Raises
    ------
    ColorParseError
        If the value is empty, of the wrong type, or not a known colour
    """
    if isinstance(color, str):
        text = color.strip()
        if not text:
            raise ColorParseError("Colour string is empty")
        if _BARE_HEX.fullmatch(text):
            text = "#" + text
        try:
            rgb = ImageColor.getrgb(text)
        except ValueError as e:
            raise ColorParseError(f"Unrecognised colour: {color!r}") from e
        # Functional notations like rgb(300, 0, 0) clamp, as in CSS
        return tuple(max(0, min(255, int(c))) for c in rgb[:3])

    try:
        r, g, b = (int(c) for c in color)
    except (TypeError, ValueError) as e:
        raise ColorParseError(f"Expected colour string or (r, g, b), got {color!r}") from e
    for ch in (r, g, b):
        if not 0 <= ch <= 255:
            raise ColorParseError(f"RGB channel {ch} out of range [0, 255] in {color!r}")
    return (r, g, b)


def to_hex(color: ColorLike) -> str:
    """Format a colour as a lowercase "#rrggbb" string."""
    r, g, b = parse_color(color)
    return f"#{r:02x}{g:02x}{b:02x}"


def brighten(color: ColorLike, amount: float = 10) -> RGB:
    """Brighten a colour by shifting every channel up.

    Parameters
    ----------
    color : ColorLike
        Source colour
    amount : float
        Percentage of full scale to add, default 10

    Returns
    -------
    RGB
        Brightened colour

    Notes
    -----
    Each channel becomes ``ch + round(255 * amount / 100)``, clamped.
    The shift is additive, so hue is not preserved for saturated colours.
    """
    r, g, b = parse_color(color)
    delta = round_half_up(255 * -(amount / 100.0))
    return tuple(max(0, min(255, ch - delta)) for ch in (r, g, b))


def darken(color: ColorLike, amount: float = 10) -> RGB:
    """Darken a colour by lowering its HSL lightness.

    Parameters
    ----------
    color : ColorLike
        Source colour
    amount : float
        Percentage points of lightness to remove, default 10

    Returns
    -------
    RGB
        Darkened colour (hue and saturation preserved)
    """
    r, g, b = parse_color(color)
    h, l, s = colorsys.rgb_to_hls(r / 255.0, g / 255.0, b / 255.0)
    l = min(1.0, max(0.0, l - amount / 100.0))
    rf, gf, bf = colorsys.hls_to_rgb(h, l, s)
    return tuple(max(0, min(255, round_half_up(c * 255.0))) for c in (rf, gf, bf))
