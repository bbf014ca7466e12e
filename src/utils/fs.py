"""Atomic filesystem operations for canvas exports and YAML handling.

Provides:
    - Atomic writes: tmp file → fsync → rename (prevents partial reads)
    - Atomic PNG export of raster canvases
    - YAML load/save (configs, pointer traces, replay metadata)
    - Directory creation with exist_ok semantics

All paths use pathlib.Path. YAML goes through PyYAML safe_load/safe_dump.

Usage:
    from src.utils import fs
    fs.atomic_save_image(surface.image, out_dir / "canvas.png")
    fs.atomic_yaml_dump(metadata, out_dir / "metadata.yaml")
    cfg = fs.load_yaml("configs/brush.yaml")
"""

import os
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np
import yaml
from PIL import Image


def ensure_dir(p: Union[str, Path]) -> Path:
    """Create directory if it doesn't exist, return Path object."""
    p = Path(p)
    p.mkdir(parents=True, exist_ok=True)
    return p


def _replace_via_tmp(path: Path, tmp_path: Path, write) -> None:
    """Run write(tmp_path), then move tmp_path over path; tmp removed on failure."""
    ensure_dir(path.parent)
    try:
        write(tmp_path)
        tmp_path.replace(path)
    except Exception as e:
        tmp_path.unlink(missing_ok=True)
        raise RuntimeError(f"Failed to write {path} atomically: {e}") from e


def atomic_write_bytes(path: Union[str, Path], data: bytes) -> None:
    """Write bytes to file atomically (tmp in same directory → fsync → rename)."""
    path = Path(path)

    def write(tmp: Path) -> None:
        with open(tmp, 'wb') as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())

    _replace_via_tmp(path, path.with_name(path.name + ".tmp"), write)


def atomic_save_image(img: np.ndarray, path: Union[str, Path]) -> None:
    """Save a canvas image atomically; format from the extension.

    Parameters
    ----------
    img : np.ndarray
        (H, W, 3) RGB; non-uint8 input is clipped to [0, 255] and cast
    path : Union[str, Path]
        Target file path
    """
    path = Path(path)
    img = np.asarray(img)
    if img.dtype != np.uint8:
        img = np.clip(img, 0, 255).astype(np.uint8)
    pil_img = Image.fromarray(img)

    # Tmp name keeps the real extension so Pillow can pick the format
    _replace_via_tmp(path, path.with_name(path.stem + ".tmp" + path.suffix), pil_img.save)


def atomic_yaml_dump(obj: Any, path: Union[str, Path]) -> None:
    """Save object as YAML atomically (safe_dump, insertion order kept)."""
    yaml_str = yaml.safe_dump(
        obj,
        default_flow_style=False,
        sort_keys=False,
        allow_unicode=True
    )
    atomic_write_bytes(Path(path), yaml_str.encode('utf-8'))


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """Load YAML file safely.

    Parameters
    ----------
    path : Union[str, Path]
        YAML file path

    Returns
    -------
    Dict[str, Any]
        Parsed YAML content ({} for an empty file)

    Raises
    ------
    FileNotFoundError
        If file doesn't exist
    yaml.YAMLError
        If YAML parsing fails
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"Failed to parse YAML file {path}: {e}") from e
    return data if data is not None else {}
