"""Command-line interface for the Planar Geometry Toolkit.

Examples:
    python src/cli.py --points cloud.csv
    python src/cli.py --xs 0,3,1,7 --ys 0,4,1,2 --check
    python src/cli.py --random 500 --seed 7 --instrumentation

Prints a JSON document describing the closest pair of points. Exit codes:
0 on success (including an empty result), 2 when point input is invalid.
"""
from __future__ import annotations
import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

# Ensure src/ is on sys.path when executed directly
_THIS_DIR = Path(__file__).resolve().parent
if str(_THIS_DIR) not in sys.path:
    sys.path.insert(0, str(_THIS_DIR))

from loguru import logger

from geometry.closest_pair import ClosestPairEngine, pair_distance
from geometry.core import reference_closest_pair
from performance.timing import TIMINGS
from utils.config import AppConfig, active_tolerances, load_config, use_tolerances
from utils.logging_config import configure_logging
from utils.point_io import PointInputError, load_points, parse_coordinates, random_points
from utils.settings import get_settings


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser("planegeom", description="Find the closest pair of points in a planar cloud")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--points", help="CSV or JSON file with x and y columns")
    source.add_argument("--xs", help="Comma-separated x-coordinates (use with --ys)")
    source.add_argument("--random", type=int, metavar="N", help="Generate N uniform random points")
    parser.add_argument("--ys", help="Comma-separated y-coordinates (use with --xs)")
    parser.add_argument("--seed", type=int, default=None, help="Random seed for --random (default: settings)")
    parser.add_argument("--extent", type=float, default=None, help="Half-width of the --random square (default: config)")
    parser.add_argument("--config", default=None, help="YAML config override file")
    parser.add_argument("--check", action="store_true", help="Cross-check against the vectorized reference")
    parser.add_argument("--instrumentation", action="store_true", help="Include funnel counters and timings")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    settings = get_settings()
    configure_logging(json_logs=settings.json_logging, level=settings.log_level, log_file=settings.log_file)
    config = load_config(args.config)
    with use_tolerances(config.tolerances):
        return _run(args, settings, config)


def _run(args: argparse.Namespace, settings: Any, config: AppConfig) -> int:
    try:
        if args.points:
            xs, ys = load_points(args.points)
        elif args.xs is not None:
            if args.ys is None:
                raise PointInputError("--xs requires --ys")
            xs, ys = parse_coordinates(args.xs), parse_coordinates(args.ys)
        else:
            seed = settings.default_seed if args.seed is None else args.seed
            extent = config.closest_pair.random_extent if args.extent is None else args.extent
            xs, ys = random_points(args.random, seed=seed, extent=extent)
    except PointInputError as e:
        logger.error(str(e))
        return 2

    engine = ClosestPairEngine()
    pair = engine.find(xs, ys)
    result: Dict[str, Any] = {
        "n": len(xs) if len(xs) == len(ys) else None,
        "pair": [p.to_dict() for p in pair] if pair is not None else None,
        "distance": pair_distance(pair),
    }

    if args.check or settings.enable_parity_check:
        if len(xs) > config.closest_pair.parity_check_limit:
            logger.warning(f"Skipping parity check: {len(xs)} points exceeds limit {config.closest_pair.parity_check_limit}")
        else:
            ref = reference_closest_pair(xs, ys, kdtree_threshold=config.closest_pair.kdtree_threshold)
            if ref is not None:
                i, j, d = ref
                result["reference"] = {"i": i, "j": j, "distance": d}
                if result["distance"] is not None:
                    result["parity"] = abs(result["distance"] - d) <= 1e-9 * max(1.0, d)
                    if not result["parity"]:
                        logger.warning(f"Closest-pair mismatch: engine={result['distance']} reference={d}")

    if args.instrumentation:
        result["instrumentation"] = dict(engine.instrumentation)
        result["timings"] = TIMINGS.snapshot()
        result["tolerance_hash"] = active_tolerances().param_hash

    print(json.dumps(result, indent=2))
    return 0


if __name__ == "__main__":  # pragma: no cover - thin wrapper
    sys.exit(main())
