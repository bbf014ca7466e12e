"""Bristle Brush: multi-bristle brush strokes from pointer and touch input.

This package synthesizes hand-drawn looking brush strokes: each stroke is
made of bristles with their own lateral offset, thickness and colour, swept
along the pointer path with smoothed curvature.

Architecture layers (strict one-way dependency):
    scripts/ → src/{brush_engine,canvas}/ → src/utils/

Key invariants:
    - Coordinates are canvas pixels, image frame (top-left origin, +Y down)
    - Angles are radians; stored angles are normalized to [0, 2π)
    - A stroke's brush is generated once at stroke start and never mutated
    - Colours cross module boundaries as "#rrggbb" strings
"""

__version__ = "0.3.0"
