"""Multi-bristle brush stroke synthesis.

Modules (leaf-first):
    - color_variation: per-bristle colour jitter around the base colour
    - brush: Bristle/Brush and make_brush()
    - angles: bearing(), next_angle() shortest-path smoothing
    - geometry: Point, rotate_point(), per-bristle BristleSegment
    - renderer: StrokeRenderer, one curved path per bristle
    - input: pointer/touch event translation
    - session: StrokeSession Idle/Drawing state machine

Data flow:
    input event → session → angles (new heading) → geometry (segments)
    → renderer (surface calls) → session stores last point/heading
"""

from .angles import angle_diff, bearing, next_angle, normalize_angle
from .brush import Bristle, Brush, bristle_count, make_brush
from .color_variation import vary_color
from .geometry import BristleSegment, Point, rotate_point, segment_for, stroke_segments
from .input import EventKind, InputEvent, pointer_event, touch_event
from .renderer import StrokeRenderer
from .session import StrokeSession, StrokeState, handle_event

__all__ = [
    'Bristle',
    'BristleSegment',
    'Brush',
    'EventKind',
    'InputEvent',
    'Point',
    'StrokeRenderer',
    'StrokeSession',
    'StrokeState',
    'angle_diff',
    'bearing',
    'bristle_count',
    'handle_event',
    'make_brush',
    'next_angle',
    'normalize_angle',
    'pointer_event',
    'rotate_point',
    'segment_for',
    'stroke_segments',
    'touch_event',
    'vary_color',
]
