"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Colour parsing and tinting (color)
    - Quadratic Bézier flattening and polyline helpers (geometry)
    - Atomic I/O and YAML loading (fs)
    - Config and trace validation (validators)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (brush_engine, canvas).

Convenience imports:
    from src.utils import color, fs, validators
    from src.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import fs
from . import geometry
from . import logging_config
from . import validators

from .logging_config import get_logger, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'geometry',
    'logging_config',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
]
