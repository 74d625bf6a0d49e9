"""Closest pair of points in a planar point cloud (divide and conquer).

Usage:
    from geometry.closest_pair import closest_points
    pair = closest_points([0, 3, 1, 7], [0, 4, 1, 2])
    if pair is not None:
        a, b = pair

Input is two equal-length coordinate sequences paired by index. The result is
the pair of points realizing the minimum Euclidean distance, or ``None`` when
the input is absent, empty, or the sequences differ in length. Shape problems
never raise.

Small clouds follow fixed conventions: a single point is returned twice, two
points are returned as given, and three points compare only the two
x-adjacent pairs (the outer pair is never measured, so the true minimum can
be missed). Larger clouds use the recursive strip algorithm over an x-sorted
view and a per-call y-sorted view of the same points.

All mutable state (the running best and the y-ordering buffer) lives in a
per-call scan object, so one engine can serve concurrent callers.
"""
from __future__ import annotations

import math
import time
from dataclasses import dataclass
from operator import attrgetter
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from geometry.types import Point
from performance.timing import time_function
from utils.instrumentation import finalize_funnel, init_funnel, update_counts

PointPair = Tuple[Point, Point]

_BY_X = attrgetter("x")
_BY_Y = attrgetter("y")


def distance(p: Point, q: Point) -> float:
    """Euclidean distance between two points."""
    dx = q.x - p.x
    dy = q.y - p.y
    return math.sqrt(dx * dx + dy * dy)


@dataclass
class _Scan:
    """Call-scoped state shared by every recursion frame of one search."""

    by_x: List[Point]
    by_y: List[Point]
    best_distance: float = math.inf
    best_first: Optional[Point] = None
    best_second: Optional[Point] = None
    strip_points: int = 0
    candidate_pairs: int = 0
    best_updates: int = 0
    calls: int = 0

    def offer(self, d: float, p: Point, q: Point) -> None:
        if d < self.best_distance:
            self.best_distance = d
            self.best_first = p
            self.best_second = q
            self.best_updates += 1

    def closest_in_range(self, lo: int, hi: int) -> float:
        """Minimal distance among the points of ``by_x[lo:hi + 1]``.

        On return ``by_y[lo:hi + 1]`` holds the same points ordered by y, so a
        caller's re-sort only has to merge two sorted runs.
        """
        self.calls += 1
        if hi <= lo:
            return math.inf

        mid = lo + (hi - lo) // 2
        median = self.by_x[mid]

        d = min(self.closest_in_range(lo, mid), self.closest_in_range(mid + 1, hi))

        self.by_y[lo:hi + 1] = sorted(self.by_y[lo:hi + 1], key=_BY_Y)

        strip = [p for p in self.by_y[lo:hi + 1] if abs(p.x - median.x) < d]
        self.strip_points += len(strip)

        m = len(strip)
        for i in range(m):
            p = strip[i]
            j = i + 1
            # bounded by the y-sort: only a handful of neighbours fit in a d x 2d box
            while j < m and strip[j].y - p.y < d:
                q = strip[j]
                self.candidate_pairs += 1
                dist = distance(p, q)
                if dist < d:
                    d = dist
                    self.offer(dist, p, q)
                j += 1
        return d


class ClosestPairEngine:
    """Finds the closest pair of points in a planar cloud.

    ``instrumentation`` holds the funnel counters of the most recent ``find``
    call (see ``utils.instrumentation``); it is a report only and is replaced
    on every call.
    """

    def __init__(self):
        self.instrumentation: Dict[str, object] = init_funnel(0)

    @time_function("closest_points", items_arg=1)
    def find(self, xs: Optional[Sequence[float]], ys: Optional[Sequence[float]]) -> Optional[PointPair]:
        if xs is None or ys is None:
            logger.debug("closest_points: missing coordinate sequence")
            self.instrumentation = init_funnel(0)
            return None
        n = len(xs)
        if n == 0 or len(ys) == 0:
            logger.debug("closest_points: empty coordinate sequence")
            self.instrumentation = init_funnel(0)
            return None
        if n != len(ys):
            logger.debug(f"closest_points: length mismatch ({n} x-values, {len(ys)} y-values)")
            self.instrumentation = init_funnel(0)
            return None

        instr = init_funnel(n)
        self.instrumentation = instr
        points = [Point(float(xs[i]), float(ys[i])) for i in range(n)]

        if n == 1:
            return points[0], points[0]
        if n == 2:
            update_counts(instr, candidates=1, updates=1)
            return points[0], points[1]

        t0 = time.perf_counter()
        by_x = sorted(points, key=_BY_X)
        t1 = time.perf_counter()

        if n == 3:
            # adjacent pairs only; the (p0, p2) pair is intentionally not measured
            p0, p1, p2 = by_x
            update_counts(instr, candidates=2, updates=1)
            finalize_funnel(instr, sort_seconds=t1 - t0, scan_seconds=0.0)
            if distance(p1, p2) < distance(p0, p1):
                return p1, p2
            return p0, p1

        scan = _Scan(by_x=by_x, by_y=list(by_x))
        scan.closest_in_range(0, n - 1)
        t2 = time.perf_counter()

        update_counts(
            instr,
            strip=scan.strip_points,
            candidates=scan.candidate_pairs,
            updates=scan.best_updates,
            calls=scan.calls,
        )
        finalize_funnel(instr, sort_seconds=t1 - t0, scan_seconds=t2 - t1)

        if scan.best_first is None or scan.best_second is None:
            logger.warning(f"closest_points: no pair recorded for {n} points")
            return None
        logger.debug(
            f"closest_points: n={n} d={scan.best_distance:.6g} "
            f"candidates={scan.candidate_pairs} calls={scan.calls}"
        )
        return scan.best_first, scan.best_second


def closest_points(xs: Optional[Sequence[float]], ys: Optional[Sequence[float]]) -> Optional[PointPair]:
    """Return the closest pair of points in the cloud ``zip(xs, ys)``, or ``None``."""
    return ClosestPairEngine().find(xs, ys)


def pair_distance(pair: Optional[PointPair]) -> Optional[float]:
    """Distance realized by a result of ``closest_points`` (``None`` passes through)."""
    if pair is None:
        return None
    return distance(pair[0], pair[1])


__all__ = ["ClosestPairEngine", "closest_points", "distance", "pair_distance", "PointPair"]
