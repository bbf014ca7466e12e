"""Drawing surfaces consumed by the stroke renderer.

Modules:
    - surface: DrawingSurface protocol, StrokeStyle, RecordingSurface
    - raster: RasterSurface (numpy buffer + OpenCV anti-aliased strokes)

Any object implementing DrawingSurface can be painted on; the engine never
reads pixels back.
"""

from .raster import RasterSurface
from .surface import DrawCommand, DrawingSurface, RecordingSurface, StrokeStyle

__all__ = [
    'DrawCommand',
    'DrawingSurface',
    'RasterSurface',
    'RecordingSurface',
    'StrokeStyle',
]
