#!/usr/bin/env python3
"""Replay a pointer trace through a stroke session and save the canvas.

Runs the full pipeline on a raster surface:
    1. Load and validate paint config (brush, canvas, logging)
    2. Load and validate pointer trace (trace.v1)
    3. Translate pointer/touch records into input events
    4. Dispatch every event through a StrokeSession
    5. Save the canvas image and a metadata.yaml next to it

Refactored architecture:
    - paint_main(trace_path, output_path, config, seed) → dict
        * Callable function (used by tests and embedding tools)
        * Returns: {canvas, output_path, metadata_path, strokes, bristles_painted}
    - CLI entry point: if __name__ == "__main__"

CLI:
    python scripts/paint.py --trace configs/traces/scribble.yaml \\
                            --output outputs/scribble.png
    python scripts/paint.py --config configs/brush.yaml \\
                            --trace configs/traces/scribble.yaml \\
                            --output outputs/scribble.png --seed 7
"""

import argparse
import logging
import random
import sys
import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

sys.path.insert(0, str(Path(__file__).parent.parent))

from src.brush_engine.input import events_from_trace
from src.brush_engine.session import StrokeSession
from src.canvas.raster import RasterSurface
from src.utils import fs, logging_config, validators

logger = logging.getLogger(__name__)


def paint_main(
    trace_path: Union[str, Path],
    output_path: Union[str, Path],
    config: Optional[validators.PaintConfig] = None,
    seed: Optional[int] = None
) -> Dict[str, Any]:
    """Replay a trace onto a fresh raster canvas and save it.

    Parameters
    ----------
    trace_path : str or Path
        trace.v1 YAML file
    output_path : str or Path
        Image path (PNG recommended); metadata.yaml is written beside it
    config : PaintConfig, optional
        Defaults to PaintConfig()
    seed : int, optional
        Seed for bristle randomness; None for a fresh unseeded generator

    Returns
    -------
    dict
        canvas (np.ndarray copy), output_path, metadata_path, strokes,
        bristles_painted

    Raises
    ------
    FileNotFoundError
        If the trace doesn't exist
    ConfigError
        If the trace fails validation
    """
    config = config or validators.PaintConfig()
    output_path = Path(output_path)

    trace = validators.load_trace(trace_path)
    logger.info("Loaded %d events from %s", len(trace.events), trace_path)

    surface = RasterSurface(
        config.canvas.width, config.canvas.height, config.canvas.background
    )
    rng = random.Random(seed) if seed is not None else random.Random()
    session = StrokeSession(surface, config.brush, rng=rng)

    t0 = time.perf_counter()
    try:
        painted = session.replay(events_from_trace(trace))
    finally:
        # A trace may stop mid-stroke
        session.close()
    elapsed = time.perf_counter() - t0
    logger.info(
        "Painted %d bristle segments over %d strokes in %.3fs",
        painted, session.strokes_started, elapsed
    )

    surface.save(output_path)
    metadata_path = output_path.with_name(output_path.stem + "_metadata.yaml")
    fs.atomic_yaml_dump({
        'trace': str(trace_path),
        'image': output_path.name,
        'seed': seed,
        'canvas': {'width': surface.width, 'height': surface.height},
        'brush': config.brush.model_dump(),
        'events': len(trace.events),
        'strokes': session.strokes_started,
        'bristles_painted': painted,
        'render_time_s': round(elapsed, 4),
    }, metadata_path)

    return {
        'canvas': surface.to_array(),
        'output_path': str(output_path),
        'metadata_path': str(metadata_path),
        'strokes': session.strokes_started,
        'bristles_painted': painted,
    }


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Replay a pointer trace with the bristle brush",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument('--trace', type=str, required=True, help='trace.v1 YAML file')
    parser.add_argument('--output', type=str, default='outputs/paint/canvas.png',
                        help='Output image, default: outputs/paint/canvas.png')
    parser.add_argument('--config', type=str, default=None,
                        help='Paint config YAML (default: built-in defaults)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for bristles')
    parser.add_argument('--log-level', type=str, default=None,
                        help='Override config log level (DEBUG, INFO, ...)')
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)

    config = (validators.load_paint_config(args.config)
              if args.config else validators.PaintConfig())

    log_kwargs = config.logging.model_dump(by_alias=True)
    if args.log_level:
        log_kwargs['log_level'] = args.log_level
    logging_config.setup_logging(**log_kwargs, quiet_libs=["PIL"], context={"app": "paint"})
    logging_config.install_excepthook()

    result = paint_main(args.trace, args.output, config=config, seed=args.seed)
    logger.info("Wrote %s", result['output_path'])
    return 0


if __name__ == "__main__":
    sys.exit(main())
