"""Input adapters: pointer, mouse and touch events → session input events.

Pointer and mouse events already carry surface-local coordinates.
Touch events carry client (viewport) coordinates and are translated into
surface space by subtracting the surface's bounding rectangle origin.
A touch event with no active touch yields an event without a point, which
the session treats as a no-op.
"""

import enum
from dataclasses import dataclass
from typing import Iterator, Optional, Sequence

from src.utils.validators import TraceEventV1, TraceV1

from .geometry import Point

# Bit 0 of the DOM `buttons` bitmask: primary (usually left) button
PRIMARY_BUTTON = 0b01


class EventKind(enum.Enum):
    START = "start"
    MOVE = "move"
    END = "end"
    ENTER = "enter"


@dataclass(frozen=True)
class InputEvent:
    """Session-level input event.

    point is None when the source had no usable coordinate (e.g. a touch
    event without an active touch).
    """

    kind: EventKind
    point: Optional[Point] = None
    buttons: int = 0


@dataclass(frozen=True)
class Touch:
    client_x: float
    client_y: float


@dataclass(frozen=True)
class BoundingRect:
    left: float
    top: float
    width: float = 0.0
    height: float = 0.0


_POINTER_KINDS = {
    "pointerdown": EventKind.START,
    "mousedown": EventKind.START,
    "pointermove": EventKind.MOVE,
    "mousemove": EventKind.MOVE,
    "pointerup": EventKind.END,
    "mouseup": EventKind.END,
    "pointerleave": EventKind.END,
    "mouseleave": EventKind.END,
    "mouseout": EventKind.END,
    "pointerenter": EventKind.ENTER,
    "mouseenter": EventKind.ENTER,
}

_TOUCH_KINDS = {
    "touchstart": EventKind.START,
    "touchmove": EventKind.MOVE,
    "touchend": EventKind.END,
    "touchcancel": EventKind.END,
}


def primary_button_down(buttons: int) -> bool:
    """True if the primary button bit is set in a `buttons` bitmask."""
    return (buttons & PRIMARY_BUTTON) == PRIMARY_BUTTON


def pointer_event(
    event_type: str,
    x: Optional[float] = None,
    y: Optional[float] = None,
    buttons: int = 0
) -> InputEvent:
    """Translate a pointer/mouse event (local offsetX/offsetY coordinates).

    Raises
    ------
    ValueError
        If event_type is not a known pointer or mouse event
    """
    try:
        kind = _POINTER_KINDS[event_type.lower()]
    except KeyError:
        raise ValueError(f"Unknown pointer event type: '{event_type}'") from None
    point = Point(float(x), float(y)) if x is not None and y is not None else None
    return InputEvent(kind, point, buttons)


def touch_point(
    touches: Sequence[Touch],
    rect: Optional[BoundingRect]
) -> Optional[Point]:
    """Surface-local position of the first active touch, or None."""
    if not touches or rect is None:
        return None
    touch = touches[0]
    return Point(touch.client_x - rect.left, touch.client_y - rect.top)


def touch_event(
    event_type: str,
    touches: Sequence[Touch] = (),
    rect: Optional[BoundingRect] = None
) -> InputEvent:
    """Translate a touch event using the surface's bounding rectangle.

    Raises
    ------
    ValueError
        If event_type is not a known touch event
    """
    try:
        kind = _TOUCH_KINDS[event_type.lower()]
    except KeyError:
        raise ValueError(f"Unknown touch event type: '{event_type}'") from None
    return InputEvent(kind, touch_point(touches, rect))


def from_trace_event(event: TraceEventV1) -> InputEvent:
    """Convert one validated trace record into an InputEvent."""
    if event.type in _TOUCH_KINDS:
        touches = [Touch(cx, cy) for cx, cy in event.touches]
        return touch_event(event.type, touches, BoundingRect(*event.rect))
    return pointer_event(event.type, event.x, event.y, event.buttons)


def events_from_trace(trace: TraceV1) -> Iterator[InputEvent]:
    """InputEvents of a trace, in recorded order."""
    for event in trace.events:
        yield from_trace_event(event)
