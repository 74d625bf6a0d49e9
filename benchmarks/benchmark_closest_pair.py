"""Pytest-benchmark hook script for closest-pair performance.

Usage (after installing the bench extra):
  pytest benchmarks/benchmark_closest_pair.py --benchmark-only
"""
import os
import sys
from pathlib import Path

SRC = Path(__file__).resolve().parents[1] / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from geometry.closest_pair import closest_points
from geometry.core import brute_force_closest_pair, kdtree_closest_pair
from utils.point_io import random_points

BENCH_SIZES = [int(s) for s in os.getenv("PLANEGEOM_BENCHMARK_SIZES", "1000,5000").split(",")]


def test_benchmark_divide_and_conquer(benchmark):
    clouds = [random_points(n, seed=n) for n in BENCH_SIZES]
    def run():
        for xs, ys in clouds:
            assert closest_points(xs, ys) is not None
    benchmark(run)


def test_benchmark_kdtree_reference(benchmark):
    clouds = [random_points(n, seed=n) for n in BENCH_SIZES]
    def run():
        for xs, ys in clouds:
            assert kdtree_closest_pair(xs, ys) is not None
    benchmark(run)


def test_benchmark_brute_force_reference(benchmark):
    xs, ys = random_points(min(BENCH_SIZES), seed=1)
    benchmark(lambda: brute_force_closest_pair(xs, ys))
