"""Point-cloud file loading for the CLI and benchmarks.

Accepted formats (chosen by file suffix):
  * .csv  - header row with at least ``x`` and ``y`` columns
  * .json - records (``[{"x": .., "y": ..}, ...]``) or columns
            (``{"x": [..], "y": [..]}``)

Column names are matched case-insensitively; extra columns are ignored.
"""
from __future__ import annotations
from pathlib import Path
from typing import List, Tuple, Union

import numpy as np
import pandas as pd
from loguru import logger


class PointInputError(ValueError):
    """Raised when a point file cannot be read or lacks x/y columns."""


_READERS = {
    '.csv': pd.read_csv,
    '.json': pd.read_json,
}


def load_points(path: Union[str, Path]) -> Tuple[List[float], List[float]]:
    """Return (xs, ys) read from ``path``."""
    p = Path(path)
    if not p.is_file():
        raise PointInputError(f"Point file not found: {p}")
    reader = _READERS.get(p.suffix.lower())
    if reader is None:
        raise PointInputError(f"Unsupported point file type '{p.suffix}' (expected .csv or .json)")
    try:
        frame = reader(p)
    except ValueError as e:
        raise PointInputError(f"Failed to parse {p}: {e}") from e
    frame = frame.rename(columns=lambda c: str(c).strip().lower())
    missing = [c for c in ('x', 'y') if c not in frame.columns]
    if missing:
        raise PointInputError(f"{p} is missing column(s): {', '.join(missing)}")
    coords = frame[['x', 'y']].apply(pd.to_numeric, errors='coerce')
    bad = int(coords.isna().any(axis=1).sum())
    if bad:
        raise PointInputError(f"{p} has {bad} row(s) with non-numeric coordinates")
    logger.debug(f"Loaded {len(coords)} points from {p}")
    return coords['x'].astype(float).tolist(), coords['y'].astype(float).tolist()


def parse_coordinates(text: str) -> List[float]:
    """Parse a comma-separated coordinate list such as ``"1, 2.5,-3"``."""
    items = [t.strip() for t in text.split(',') if t.strip()]
    try:
        return [float(t) for t in items]
    except ValueError as e:
        raise PointInputError(f"Invalid coordinate list '{text}': {e}") from e


def random_points(count: int, seed: int = 0, extent: float = 1000.0) -> Tuple[List[float], List[float]]:
    """Uniform random cloud in the square [-extent, extent]^2."""
    if count < 0:
        raise PointInputError(f"Point count must be non-negative, got {count}")
    rng = np.random.default_rng(seed)
    pts = rng.uniform(-extent, extent, size=(count, 2))
    return pts[:, 0].tolist(), pts[:, 1].tolist()


__all__ = ["PointInputError", "load_points", "parse_coordinates", "random_points"]
