"""Wall-clock timing for closest-pair runs.

``ClosestPairEngine.find`` is wrapped with ``time_function("closest_points",
items_arg=1)`` so every search adds its duration and point count to the
process-wide ``TIMINGS`` collector; ``planegeom --instrumentation`` prints
``TIMINGS.snapshot()`` next to the funnel counters, where ``items_per_sec``
reads as points searched per second. ``time_block`` times any other section
under a bucket of its choosing.

Set PLANEGEOM_ENABLE_TIMING=0 to turn collection off (read once at import).
"""
from __future__ import annotations
import functools
import os
import time
import threading
from contextlib import contextmanager
from typing import Callable, Dict, Any, Optional

_ENABLE = os.getenv("PLANEGEOM_ENABLE_TIMING", "1") != "0"
_lock = threading.Lock()


class TimingCollector:
    """Per-bucket totals of wall time, calls and points processed."""

    def __init__(self):
        self._data: Dict[str, Dict[str, float]] = {}

    def add(self, key: str, duration: float, items: Optional[int] = None):
        if not _ENABLE:
            return
        with _lock:
            rec = self._data.setdefault(key, {"time": 0.0, "calls": 0.0, "items": 0.0})
            rec["time"] += float(duration)
            rec["calls"] += 1.0
            if items is not None:
                rec["items"] += float(items)

    def snapshot(self) -> Dict[str, Any]:
        # Shallow copy safe for serialization
        with _lock:
            out = {}
            for k, rec in self._data.items():
                avg = rec["time"] / rec["calls"] if rec["calls"] else 0.0
                rate = rec["items"] / rec["time"] if rec["time"] and rec["items"] else None
                out[k] = {
                    "total_time": round(rec["time"], 6),
                    "calls": int(rec["calls"]),
                    "avg_time": round(avg, 6),
                    **({"total_items": int(rec["items"])} if rec["items"] else {}),
                    **({"items_per_sec": round(rate, 3)} if rate else {}),
                }
            return out

    def clear(self):
        with _lock:
            self._data.clear()


TIMINGS = TimingCollector()


@contextmanager
def time_block(name: str, items: Optional[int] = None):
    if not _ENABLE:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        TIMINGS.add(name, time.perf_counter() - start, items=items)


def time_function(name: Optional[str] = None, items_arg: Optional[int] = None):
    """Decorator to time a function.

    Args:
        name: Logical timing bucket (default: function.__name__).
        items_arg: If provided, ``len()`` of the positional argument at this
                   index is recorded as the processed item count (e.g. 1 for
                   the xs argument of a bound method).
    """
    def deco(fn: Callable):
        bucket = name or fn.__name__

        @functools.wraps(fn)
        def wrapper(*args, **kwargs):
            if not _ENABLE:
                return fn(*args, **kwargs)
            items_val = None
            if items_arg is not None and len(args) > items_arg:
                try:
                    items_val = len(args[items_arg])
                except TypeError:
                    items_val = None
            start = time.perf_counter()
            try:
                return fn(*args, **kwargs)
            finally:
                TIMINGS.add(bucket, time.perf_counter() - start, items=items_val)
        return wrapper
    return deco


__all__ = ["time_block", "time_function", "TIMINGS", "TimingCollector"]
