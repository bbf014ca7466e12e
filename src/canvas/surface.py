"""Drawing surface interface and an in-memory recording implementation.

The engine issues HTML-canvas-like path operations:

    begin_path()
    move_to(x, y)
    set_stroke_style(color, width, cap, join, glow)
    quadratic_curve_to(cx, cy, x, y)
    line_to(x, y)
    stroke()

RecordingSurface keeps every call as a DrawCommand so tests and tools can
inspect exactly what a session painted without rasterizing anything.
"""

from dataclasses import dataclass
from typing import Any, List, Protocol, Tuple, runtime_checkable

LINE_CAPS = ("butt", "round", "square")
LINE_JOINS = ("miter", "round", "bevel")


@dataclass(frozen=True)
class StrokeStyle:
    """Style applied by the next stroke() call.

    glow is the blur radius (px) of a same-coloured halo drawn under the
    line; 0 disables it.
    """

    color: str = "#000000"
    width: float = 1.0
    cap: str = "butt"
    join: str = "miter"
    glow: float = 0.0

    def __post_init__(self) -> None:
        if self.width <= 0:
            raise ValueError(f"Stroke width must be > 0, got {self.width}")
        if self.cap not in LINE_CAPS:
            raise ValueError(f"cap must be one of {LINE_CAPS}, got '{self.cap}'")
        if self.join not in LINE_JOINS:
            raise ValueError(f"join must be one of {LINE_JOINS}, got '{self.join}'")
        if self.glow < 0:
            raise ValueError(f"glow must be >= 0, got {self.glow}")


@runtime_checkable
class DrawingSurface(Protocol):
    """Path/stroke primitives the renderer draws with."""

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def set_stroke_style(
        self,
        color: str,
        width: float,
        cap: str = "round",
        join: str = "round",
        glow: float = 0.0
    ) -> None: ...

    def quadratic_curve_to(self, cx: float, cy: float, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None: ...


@dataclass(frozen=True)
class DrawCommand:
    """One recorded surface call."""

    op: str
    args: Tuple[Any, ...] = ()


class RecordingSurface:
    """DrawingSurface that records calls instead of drawing."""

    def __init__(self) -> None:
        self.commands: List[DrawCommand] = []
        self.style = StrokeStyle()

    def _record(self, op: str, *args: Any) -> None:
        self.commands.append(DrawCommand(op, tuple(args)))

    def begin_path(self) -> None:
        self._record("begin_path")

    def move_to(self, x: float, y: float) -> None:
        self._record("move_to", x, y)

    def set_stroke_style(
        self,
        color: str,
        width: float,
        cap: str = "round",
        join: str = "round",
        glow: float = 0.0
    ) -> None:
        self.style = StrokeStyle(color=color, width=width, cap=cap, join=join, glow=glow)
        self._record("set_stroke_style", color, width, cap, join, glow)

    def quadratic_curve_to(self, cx: float, cy: float, x: float, y: float) -> None:
        self._record("quadratic_curve_to", cx, cy, x, y)

    def line_to(self, x: float, y: float) -> None:
        self._record("line_to", x, y)

    def stroke(self) -> None:
        self._record("stroke", self.style)

    def ops(self) -> List[str]:
        """Operation names in call order."""
        return [c.op for c in self.commands]

    def count(self, op: str) -> int:
        return sum(1 for c in self.commands if c.op == op)

    def clear(self) -> None:
        self.commands.clear()
