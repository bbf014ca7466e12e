"""Raster drawing surface backed by a numpy RGB buffer.

Paths are collected as polylines (quadratic curves flattened adaptively by
utils.geometry) and stroked with OpenCV anti-aliased polylines using 4-bit
sub-pixel coordinates. The glow is a Gaussian-blurred coverage mask of the
same line, composited under the crisp stroke in the stroke colour
(sigma = glow / 2, as for HTML canvas shadowBlur).

Image frame: (H, W, 3) uint8, RGB channel order, top-left origin, +Y down.

Limitations:
    - OpenCV draws thick anti-aliased lines with rounded ends and joins, so
      cap/join are honoured only as "round"; other values render the same
    - Glow is composited per stroke() call over a bbox-cropped region
"""

import logging
import math
from pathlib import Path
from typing import List, Tuple, Union

import cv2
import numpy as np

from src.utils import color as color_utils, fs, geometry

from .surface import StrokeStyle

logger = logging.getLogger(__name__)

# Fractional bits for cv2 sub-pixel drawing
SHIFT = 4
_SCALE = 1 << SHIFT

# Keep fixed-point coordinates far from int32 overflow
_COORD_LIMIT = 1.0e6


def _to_fixed(points: np.ndarray) -> np.ndarray:
    clipped = np.clip(points, -_COORD_LIMIT, _COORD_LIMIT)
    return np.round(clipped * _SCALE).astype(np.int32).reshape(-1, 1, 2)


class RasterSurface:
    """DrawingSurface that rasterizes into ``self.image``.

    Attributes
    ----------
    image : np.ndarray
        (height, width, 3) uint8 RGB canvas
    style : StrokeStyle
        Style used by the next stroke()
    max_err_px : float
        Curve flattening tolerance
    """

    def __init__(
        self,
        width: int,
        height: int,
        background: color_utils.ColorLike = "#ffffff",
        max_err_px: float = 0.25
    ):
        if width < 1 or height < 1:
            raise ValueError(f"Canvas size must be positive, got {width}x{height}")
        self.background = color_utils.parse_color(background)
        self.image = np.empty((height, width, 3), dtype=np.uint8)
        self.image[...] = self.background
        self.style = StrokeStyle()
        self.max_err_px = max_err_px
        self._subpaths: List[List[Tuple[float, float]]] = []

    @property
    def width(self) -> int:
        return self.image.shape[1]

    @property
    def height(self) -> int:
        return self.image.shape[0]

    # ------------------------------------------------------------------
    # Path construction
    # ------------------------------------------------------------------

    def begin_path(self) -> None:
        self._subpaths = []

    def move_to(self, x: float, y: float) -> None:
        self._subpaths.append([(float(x), float(y))])

    def line_to(self, x: float, y: float) -> None:
        if not self._subpaths:
            # No current point: behaves like move_to
            self.move_to(x, y)
            return
        self._subpaths[-1].append((float(x), float(y)))

    def quadratic_curve_to(self, cx: float, cy: float, x: float, y: float) -> None:
        if not self._subpaths:
            self.move_to(cx, cy)
        current = self._subpaths[-1]
        polyline = geometry.bezier_quadratic_polyline(
            current[-1], (cx, cy), (x, y), max_err_px=self.max_err_px
        )
        current.extend((float(px), float(py)) for px, py in polyline[1:])

    def set_stroke_style(
        self,
        color: str,
        width: float,
        cap: str = "round",
        join: str = "round",
        glow: float = 0.0
    ) -> None:
        color_utils.parse_color(color)
        self.style = StrokeStyle(color=color, width=width, cap=cap, join=join, glow=glow)

    # ------------------------------------------------------------------
    # Rasterization
    # ------------------------------------------------------------------

    def stroke(self) -> None:
        """Rasterize every subpath of the current path with the current style."""
        rgb = tuple(int(c) for c in color_utils.parse_color(self.style.color))
        for subpath in self._subpaths:
            points = np.asarray(subpath, dtype=np.float64)
            if not np.all(np.isfinite(points)):
                logger.warning("Skipping subpath with non-finite coordinates")
                continue
            if self.style.glow > 0:
                self._draw_glow(points, rgb)
            self._draw_polyline(self.image, points, rgb)

    def _draw_polyline(self, target: np.ndarray, points: np.ndarray, color) -> None:
        if points.shape[0] < 2:
            # A bare move_to draws nothing
            return
        fixed = _to_fixed(points)
        if geometry.polyline_length(points) < 1e-6:
            # Zero-length segment: only a round cap leaves a mark
            if self.style.cap == "round":
                center = (int(fixed[0, 0, 0]), int(fixed[0, 0, 1]))
                radius = max(1, int(round(self.style.width / 2 * _SCALE)))
                cv2.circle(target, center, radius, color, thickness=-1,
                           lineType=cv2.LINE_AA, shift=SHIFT)
            return
        thickness = max(1, int(round(self.style.width)))
        cv2.polylines(target, [fixed], False, color, thickness=thickness,
                      lineType=cv2.LINE_AA, shift=SHIFT)

    def _draw_glow(self, points: np.ndarray, rgb: Tuple[int, int, int]) -> None:
        sigma = self.style.glow / 2.0
        pad = self.style.width / 2.0 + 3.0 * sigma + 1.0
        xmin, ymin, xmax, ymax = geometry.polyline_bbox(points)

        x0 = max(0, int(math.floor(xmin - pad)))
        y0 = max(0, int(math.floor(ymin - pad)))
        x1 = min(self.width, int(math.ceil(xmax + pad)) + 1)
        y1 = min(self.height, int(math.ceil(ymax + pad)) + 1)
        if x0 >= x1 or y0 >= y1:
            return

        mask = np.zeros((y1 - y0, x1 - x0), dtype=np.uint8)
        self._draw_polyline(mask, points - np.array([x0, y0], dtype=np.float64), 255)
        mask = cv2.GaussianBlur(mask, (0, 0), sigmaX=sigma)

        alpha = (mask.astype(np.float32) / 255.0)[..., None]
        region = self.image[y0:y1, x0:x1].astype(np.float32)
        blended = region * (1.0 - alpha) + np.asarray(rgb, dtype=np.float32) * alpha
        self.image[y0:y1, x0:x1] = np.clip(np.rint(blended), 0, 255).astype(np.uint8)

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def clear(self) -> None:
        """Fill the canvas with the background colour and drop the path."""
        self.image[...] = self.background
        self._subpaths = []

    def to_array(self) -> np.ndarray:
        """Copy of the canvas, (H, W, 3) uint8 RGB."""
        return self.image.copy()

    def save(self, path: Union[str, Path]) -> Path:
        """Write the canvas as an image file (format from extension)."""
        path = Path(path)
        fs.atomic_save_image(self.image, path)
        logger.info("Saved canvas %dx%d to %s", self.width, self.height, path)
        return path
