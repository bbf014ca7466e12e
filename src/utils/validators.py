"""YAML schema validation and config loading.

Provides centralized validation using pydantic:
    - Paint config (brush.yaml): brush width/colour/variation, raster canvas,
      logging options
    - Pointer trace (trace.v1): recorded pointer/touch events for replay

All modules load configs through these validators for fail-fast error
detection with actionable messages (offending keys, expected ranges).

Units:
    - Geometry: canvas pixels
    - Brightness variation: percentage points (see utils.color)

Usage:
    from src.utils import validators

    cfg = validators.load_paint_config("configs/brush.yaml")
    trace = validators.load_trace("configs/traces/scribble.yaml")
"""

from pathlib import Path
from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .color import ColorParseError, parse_color


class ConfigError(ValueError):
    """Raised when a config or trace file fails validation."""

    pass


def _check_color(v: str) -> str:
    try:
        parse_color(v)
    except ColorParseError as e:
        raise ValueError(str(e)) from e
    return v


# ============================================================================
# PAINT CONFIG
# ============================================================================

class BrushConfig(BaseModel):
    """Brush settings, fixed for the lifetime of a session."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    stroke_width: float = Field(25.0, gt=0.0, le=1000.0, description="Stroke width (px)")
    vary_brightness: float = Field(5.0, ge=0.0, le=100.0, description="Max brightness jitter (%)")
    color: str = Field("#3d34a5", description="Base stroke colour")

    @field_validator('color')
    @classmethod
    def validate_color(cls, v: str) -> str:
        return _check_color(v)


class CanvasConfig(BaseModel):
    """Raster surface dimensions and background."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    width: int = Field(800, ge=1, le=16384, description="Canvas width (px)")
    height: int = Field(600, ge=1, le=16384, description="Canvas height (px)")
    background: str = Field("#ffffff", description="Background colour")

    @field_validator('background')
    @classmethod
    def validate_background(cls, v: str) -> str:
        return _check_color(v)


class LoggingConfig(BaseModel):
    """Keyword arguments for logging_config.setup_logging().

    Pass ``model_dump(by_alias=True)`` so that json_format arrives as ``json``.
    """
    model_config = ConfigDict(extra='forbid', frozen=True, populate_by_name=True)

    log_level: str = Field("INFO", description="Root log level")
    log_file: Optional[str] = Field(None, description="Optional log file path")
    json_format: bool = Field(False, alias="json", description="JSON lines in log file")
    color: bool = Field(True, description="ANSI colours on console")

    @field_validator('log_level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in levels:
            raise ValueError(f"log_level must be one of {sorted(levels)}, got '{v}'")
        return v.upper()


class PaintConfig(BaseModel):
    """Top-level paint config (brush.yaml)."""
    model_config = ConfigDict(extra='forbid', frozen=True)

    brush: BrushConfig = Field(default_factory=BrushConfig)
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


# ============================================================================
# POINTER TRACE V1
# ============================================================================

POINTER_EVENT_TYPES = frozenset({
    "pointerdown", "pointermove", "pointerup", "pointerleave", "pointerenter",
    "mousedown", "mousemove", "mouseup", "mouseleave", "mouseout", "mouseenter",
})
TOUCH_EVENT_TYPES = frozenset({"touchstart", "touchmove", "touchend", "touchcancel"})


class TraceEventV1(BaseModel):
    """One recorded input event.

    Pointer/mouse events carry local x/y and a buttons bitmask.
    Touch events carry client-space touches and the surface's bounding
    rect (left, top); an empty touch list means no active touch.
    """
    model_config = ConfigDict(extra='forbid', frozen=True)

    type: str = Field(..., description="DOM-style event name")
    x: Optional[float] = None
    y: Optional[float] = None
    buttons: int = Field(0, ge=0)
    touches: List[Tuple[float, float]] = Field(default_factory=list)
    rect: Tuple[float, float] = Field((0.0, 0.0), description="Bounding rect (left, top)")

    @field_validator('type')
    @classmethod
    def validate_type(cls, v: str) -> str:
        v = v.lower()
        if v not in POINTER_EVENT_TYPES and v not in TOUCH_EVENT_TYPES:
            raise ValueError(f"Unknown event type '{v}'")
        return v

    @model_validator(mode='after')
    def validate_coordinates(self) -> 'TraceEventV1':
        if self.type in POINTER_EVENT_TYPES and (self.x is None) != (self.y is None):
            raise ValueError(f"{self.type}: x and y must be given together")
        return self


class TraceV1(BaseModel):
    """Recorded pointer trace (trace.v1)."""
    model_config = ConfigDict(extra='forbid', frozen=True, populate_by_name=True)

    schema_version: str = Field("trace.v1", alias="schema")
    events: List[TraceEventV1] = Field(default_factory=list)

    @field_validator('schema_version')
    @classmethod
    def validate_schema(cls, v: str) -> str:
        if v != "trace.v1":
            raise ValueError(f"Expected schema 'trace.v1', got '{v}'")
        return v


# ============================================================================
# PUBLIC API
# ============================================================================

def load_paint_config(path: Union[str, Path]) -> PaintConfig:
    """Load and validate paint config from YAML.

    Parameters
    ----------
    path : Union[str, Path]
        Path to brush.yaml

    Returns
    -------
    PaintConfig
        Validated configuration; missing sections take defaults

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ConfigError
        If validation fails
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Paint config not found: {path}")

    data = fs.load_yaml(path)
    try:
        return PaintConfig(**data)
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"Paint config validation failed at {path}: {e}") from e


def load_trace(path: Union[str, Path]) -> TraceV1:
    """Load and validate a pointer trace from YAML.

    Raises
    ------
    FileNotFoundError
        If path doesn't exist
    ConfigError
        If validation fails
    """
    from . import fs

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Trace not found: {path}")

    data = fs.load_yaml(path)
    try:
        return TraceV1(**data)
    except (TypeError, ValidationError) as e:
        raise ConfigError(f"Trace validation failed at {path}: {e}") from e
