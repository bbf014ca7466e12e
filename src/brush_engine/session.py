"""Stroke session: the Idle/Drawing state machine.

Transitions (all others are no-ops):

    Idle    --START(point)-------------------> Drawing   new brush, angle cleared
    Idle    --ENTER(point, primary button)---> Drawing   implicit start
    Drawing --MOVE(point)--------------------> Drawing   paint bristles, advance
    Drawing --END----------------------------> Idle      per-stroke state dropped

Events whose point is missing or not finite are no-ops.

handle_event() is the pure transition function: (state, event, context) →
(new state, bristle segments to paint). StrokeSession owns the current
state and a renderer, and paints whatever the transition returns.

Randomness (bristle jitter, thickness, colour) comes from the context's
random source, so tests can pass a seeded or scripted generator.
"""

import logging
import math
import random
from dataclasses import dataclass, field, replace
from typing import Callable, Iterable, Optional, Sequence, Tuple

from src.canvas.surface import DrawingSurface
from src.utils.logging_config import pop_context, push_context
from src.utils.validators import BrushConfig

from .angles import bearing, next_angle, normalize_angle
from .brush import Bristle, Brush, make_brush
from .geometry import BristleSegment, Point, stroke_segments
from .input import EventKind, InputEvent, primary_button_down
from .renderer import StrokeRenderer

logger = logging.getLogger(__name__)

ColorSource = Callable[[], str]
Segments = Tuple[Tuple[Bristle, BristleSegment], ...]


@dataclass(frozen=True)
class StrokeState:
    """Active-stroke state.

    current_angle is None right after a start, until the first move with a
    usable direction; it is stored normalized to [0, 2π).
    """

    is_drawing: bool = False
    last_point: Optional[Point] = None
    current_angle: Optional[float] = None
    active_brush: Optional[Brush] = None


IDLE = StrokeState()


def static_color(color: str) -> ColorSource:
    """Colour source that always returns the same colour."""
    def source() -> str:
        return color
    return source


@dataclass(frozen=True)
class StrokeContext:
    """Static inputs of the state machine, fixed for a session."""

    stroke_width: float
    vary_brightness: float
    color_source: ColorSource
    rng: random.Random = field(default_factory=random.Random)

    @classmethod
    def from_config(
        cls,
        config: BrushConfig,
        color_source: Optional[ColorSource] = None,
        rng: Optional[random.Random] = None
    ) -> 'StrokeContext':
        return cls(
            stroke_width=config.stroke_width,
            vary_brightness=config.vary_brightness,
            color_source=color_source if color_source is not None else static_color(config.color),
            rng=rng if rng is not None else random.Random(),
        )


def _as_point(point: Sequence[float]) -> Point:
    point = Point(float(point[0]), float(point[1]))
    if not (math.isfinite(point.x) and math.isfinite(point.y)):
        raise ValueError(f"Point must be finite, got {point}")
    return point


def _usable(point: Optional[Sequence[float]]) -> bool:
    return point is not None and math.isfinite(point[0]) and math.isfinite(point[1])


def start_stroke(point: Sequence[float], context: StrokeContext) -> StrokeState:
    """Begin a stroke at point with a freshly generated brush.

    Reads the base colour from the colour source at call time. Always
    regenerates the brush, even if called twice without an end.

    Raises
    ------
    ValueError
        If point is not finite
    ColorParseError
        If the colour source yields an unparseable colour
    """
    point = _as_point(point)
    base_color = context.color_source()
    brush = make_brush(context.stroke_width, base_color, context.vary_brightness, context.rng)
    return StrokeState(
        is_drawing=True,
        last_point=point,
        current_angle=None,
        active_brush=brush,
    )


def continue_stroke(state: StrokeState, point: Sequence[float]) -> Tuple[StrokeState, Segments]:
    """Advance a drawing stroke to point.

    A zero-length move has no direction: nothing is painted and the state
    is returned unchanged.

    Raises
    ------
    ValueError
        If point is not finite
    """
    point = _as_point(point)
    if bearing(state.last_point, point) is None:
        return state, ()

    new_angle = next_angle(state.last_point, point, state.current_angle)
    segments = stroke_segments(
        state.active_brush, state.last_point, point, state.current_angle, new_angle
    )
    return replace(state, last_point=point, current_angle=normalize_angle(new_angle)), segments


def handle_event(
    state: StrokeState,
    event: InputEvent,
    context: StrokeContext
) -> Tuple[StrokeState, Segments]:
    """Apply one input event.

    Parameters
    ----------
    state : StrokeState
        Current state (not modified)
    event : InputEvent
        Event to apply
    context : StrokeContext
        Brush settings, colour source and random source

    Returns
    -------
    Tuple[StrokeState, Segments]
        New state and the (bristle, segment) pairs to paint, in draw order
    """
    kind = event.kind

    if kind is EventKind.START:
        if state.is_drawing or not _usable(event.point):
            return state, ()
        return start_stroke(event.point, context), ()

    if kind is EventKind.ENTER:
        # Recovers a stroke that began outside the surface
        if state.is_drawing or not _usable(event.point) or not primary_button_down(event.buttons):
            return state, ()
        return start_stroke(event.point, context), ()

    if kind is EventKind.MOVE:
        if not state.is_drawing or not _usable(event.point):
            return state, ()
        return continue_stroke(state, event.point)

    if kind is EventKind.END:
        return IDLE, ()

    raise ValueError(f"Unknown event kind: {kind!r}")


class StrokeSession:
    """Drives strokes on one drawing surface from a stream of input events.

    Parameters
    ----------
    surface : DrawingSurface
        Where bristles are painted
    config : BrushConfig, optional
        Brush width, variation and default colour; defaults to BrushConfig()
    color_source : callable, optional
        Returns the base colour at each stroke start; defaults to config.color
    rng : random.Random, optional
        Random source; defaults to a fresh unseeded generator

    Examples
    --------
    >>> session = StrokeSession(RecordingSurface())
    >>> session.start(0, 0)
    >>> session.move(100, 0)
    8
    >>> session.end()
    """

    def __init__(
        self,
        surface: DrawingSurface,
        config: Optional[BrushConfig] = None,
        color_source: Optional[ColorSource] = None,
        rng: Optional[random.Random] = None
    ):
        self.context = StrokeContext.from_config(config or BrushConfig(), color_source, rng)
        self.renderer = StrokeRenderer(surface)
        self.state = IDLE
        self.strokes_started = 0
        self.bristles_painted = 0

    @property
    def surface(self) -> DrawingSurface:
        return self.renderer.surface

    @property
    def is_drawing(self) -> bool:
        return self.state.is_drawing

    def dispatch(self, event: InputEvent) -> int:
        """Apply an event, paint its segments; returns bristles painted."""
        new_state, segments = handle_event(self.state, event, self.context)
        painted = self.renderer.paint_segments(segments)
        self._on_transition(self.state, new_state)
        self.state = new_state
        self.bristles_painted += painted
        return painted

    def replay(self, events: Iterable[InputEvent]) -> int:
        """Dispatch events in order; returns total bristles painted."""
        return sum(self.dispatch(event) for event in events)

    def start(self, x: float, y: float) -> None:
        self.dispatch(InputEvent(EventKind.START, Point(x, y)))

    def move(self, x: float, y: float) -> int:
        return self.dispatch(InputEvent(EventKind.MOVE, Point(x, y)))

    def enter(self, x: float, y: float, buttons: int) -> None:
        self.dispatch(InputEvent(EventKind.ENTER, Point(x, y), buttons))

    def end(self) -> None:
        self.dispatch(InputEvent(EventKind.END))

    def close(self) -> None:
        """End any stroke still in progress, dropping its logging context."""
        if self.is_drawing:
            self.end()

    def _on_transition(self, old: StrokeState, new: StrokeState) -> None:
        if not old.is_drawing and new.is_drawing:
            self.strokes_started += 1
            push_context(stroke=self.strokes_started)
            logger.debug(
                "Stroke started at (%.1f, %.1f) with %d bristles",
                new.last_point.x, new.last_point.y, len(new.active_brush)
            )
        elif old.is_drawing and not new.is_drawing:
            logger.debug("Stroke ended at (%.1f, %.1f)", old.last_point.x, old.last_point.y)
            pop_context(keys=["stroke"])
