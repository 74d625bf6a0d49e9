"""
Configuration management for the Planar Geometry Toolkit.
"""

from contextlib import contextmanager
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Union
import os
import hashlib
import json
import threading

import yaml
from dotenv import load_dotenv
from loguru import logger

# Load environment variables
load_dotenv()

CONFIG_ENV = "PLANEGEOM_CONFIG"


@dataclass
class ToleranceConfig:
    """Numerical tolerances used by the closed-form primitives.

    Values are tuned for pixel-scale coordinates (browser / game canvases),
    not for exact computational geometry.
    """

    # Default when a caller supplies no tolerance (degenerate segments, zero-length legs)
    zero_tol: float = 1e-7
    # Per-coordinate relative tolerance for points_equal
    point_equal_tol: float = 1e-3
    # Cross-product band treated as "on the line" by point_orientation
    orientation_tol: float = 1e-4
    # Cross-product / run magnitude below which segments are parallel or vertical
    parallel_tol: float = 1e-8
    # Determinant band for point_on_line
    on_line_tol: float = 1e-3
    # Relative tolerance when comparing slopes of infinite lines
    slope_tol: float = 1e-3
    # Center distance and radius delta below which two circles are coincident
    circle_coincident_tol: float = 1e-3

    _param_hash: str = field(default="", init=False, repr=False)

    def compute_hash(self) -> str:
        """Compute a short stable hash of all public tolerance values."""
        data = {k: v for k, v in asdict(self).items() if not k.startswith('_')}
        payload = json.dumps(data, sort_keys=True, separators=(",", ":"))
        digest = hashlib.sha256(payload.encode("utf-8")).hexdigest()[:10]
        self._param_hash = digest
        return digest

    @property
    def param_hash(self) -> str:
        if not self._param_hash:
            return self.compute_hash()
        return self._param_hash


@dataclass
class ClosestPairConfig:
    """Settings for closest-pair reference computations and the CLI."""

    # Point count above which the vectorised reference switches to a KD-tree
    kdtree_threshold: int = 2000
    # Largest point count the CLI will cross-check against the reference
    parity_check_limit: int = 5000
    # Half-width of the square used for --random point clouds
    random_extent: float = 1000.0


def _coerce(current: Any, value: Any) -> Any:
    """Convert a YAML value to the type of the field's current value.

    Lossy conversions (10.5 for an int field, "yes" for a float) raise
    ValueError instead of silently truncating.
    """
    if isinstance(current, bool):
        if not isinstance(value, bool):
            raise ValueError(f"expected a boolean, got {value!r}")
        return value
    if isinstance(current, int):
        if isinstance(value, bool):
            raise ValueError(f"expected an integer, got {value!r}")
        if isinstance(value, float):
            if not value.is_integer():
                raise ValueError(f"expected an integer, got {value!r}")
            return int(value)
        return int(value)
    if isinstance(current, float):
        if isinstance(value, bool):
            raise ValueError(f"expected a number, got {value!r}")
        return float(value)
    return type(current)(value)


@dataclass
class AppConfig:
    """Main application configuration."""

    app_name: str = "Planar Geometry Toolkit"
    version: str = "1.0.0"
    debug: bool = False

    tolerances: ToleranceConfig = field(default_factory=ToleranceConfig)
    closest_pair: ClosestPairConfig = field(default_factory=ClosestPairConfig)

    def apply_overrides(self, data: Dict[str, Any]) -> None:
        """Apply a nested mapping (as loaded from YAML) onto this config.

        Sections map to component configs by attribute name; unknown keys are
        skipped with a warning so stale config files do not break startup.
        """
        for section, values in data.items():
            key = str(section).strip().lower().replace(" ", "_")
            target = getattr(self, key, None)
            if isinstance(values, dict) and target is not None and hasattr(target, "__dataclass_fields__"):
                known = {f.name for f in fields(target) if not f.name.startswith('_')}
                for name, value in values.items():
                    if name in known:
                        current = getattr(target, name)
                        try:
                            coerced = _coerce(current, value)
                        except (TypeError, ValueError):
                            logger.warning(f"Ignoring config key {key}.{name}: {value!r} is not a valid {type(current).__name__}")
                            continue
                        setattr(target, name, coerced)
                    else:
                        logger.warning(f"Ignoring unknown config key {key}.{name}")
            elif key in {"app_name", "version", "debug"}:
                setattr(self, key, values)
            else:
                logger.warning(f"Ignoring unknown config section '{section}'")
        if isinstance(data.get("tolerances"), dict):
            self.tolerances.compute_hash()


def load_config(path: Optional[Union[str, Path]] = None) -> AppConfig:
    """Load application configuration.

    Defaults are overlaid with YAML from ``path`` or, when omitted, from the
    file named by ``PLANEGEOM_CONFIG`` (silently skipped if that is unset).
    """
    config = AppConfig()
    explicit = path is not None
    source = Path(path) if explicit else (Path(os.environ[CONFIG_ENV]) if os.getenv(CONFIG_ENV) else None)
    if source is None:
        return config
    if not source.is_file():
        if explicit:
            raise FileNotFoundError(f"Config file not found: {source}")
        logger.warning(f"{CONFIG_ENV} points to missing file {source}; using defaults")
        return config
    with source.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if isinstance(data, dict):
        config.apply_overrides(data)
    else:
        logger.warning(f"Config file {source} does not contain a mapping; using defaults")
    return config


DEFAULT_TOLERANCES = ToleranceConfig()

# Tolerances read by geometry.primitives when a call passes no explicit tol
_active_tolerances: ToleranceConfig = DEFAULT_TOLERANCES
_active_lock = threading.Lock()


def active_tolerances() -> ToleranceConfig:
    return _active_tolerances


def set_tolerances(tolerances: Optional[ToleranceConfig]) -> ToleranceConfig:
    """Install process-wide tolerances; None restores the defaults.

    Returns the previously active config so callers can restore it.
    """
    global _active_tolerances
    with _active_lock:
        previous = _active_tolerances
        _active_tolerances = DEFAULT_TOLERANCES if tolerances is None else tolerances
    logger.debug(f"Active tolerances set (hash={_active_tolerances.param_hash})")
    return previous


@contextmanager
def use_tolerances(tolerances: ToleranceConfig) -> Iterator[ToleranceConfig]:
    """Activate ``tolerances`` for the duration of the block."""
    previous = set_tolerances(tolerances)
    try:
        yield tolerances
    finally:
        set_tolerances(previous)


__all__ = [
    "ToleranceConfig",
    "ClosestPairConfig",
    "AppConfig",
    "load_config",
    "DEFAULT_TOLERANCES",
    "active_tolerances",
    "set_tolerances",
    "use_tolerances",
]
