"""Funnel instrumentation for the closest-pair strip scan.

The scan narrows work in stages: all C(n,2) raw pairs, the points that land in
a merge strip, the candidate pairs actually measured there, and the pairs that
improved the running best. Recording those counts shows how much the strip
bound prunes for a given point cloud.

All helpers operate on plain dicts to keep them serializable and JSON-friendly.
"""
from __future__ import annotations
from typing import Dict, Optional

BASE_KEYS = (
    'points', 'raw_pairs', 'strip_points', 'candidate_pairs', 'best_updates',
    'recursive_calls', 'pruning_ratio', 'phase_sort_ms', 'phase_scan_ms'
)


def init_funnel(points: int = 0, extra: Optional[Dict[str, object]] = None) -> Dict[str, object]:
    """Initialize a funnel dictionary for a cloud of ``points`` points.

    extra: optional dict merged in after base keys.
    """
    n = int(points)
    instr: Dict[str, object] = {
        'points': n,
        'raw_pairs': n * (n - 1) // 2 if n > 1 else 0,
        'strip_points': 0,
        'candidate_pairs': 0,
        'best_updates': 0,
        'recursive_calls': 0,
        'pruning_ratio': 0.0,
        'phase_sort_ms': None,  # filled later
        'phase_scan_ms': None,
    }
    if extra:
        instr.update(extra)
    return instr


def update_counts(instr: Dict[str, object], *, strip: int = 0, candidates: int = 0,
                  updates: int = 0, calls: int = 0) -> None:
    """Add to the running counters and recompute the pruning ratio in place."""
    instr['strip_points'] = int(instr.get('strip_points') or 0) + int(strip)
    instr['candidate_pairs'] = int(instr.get('candidate_pairs') or 0) + int(candidates)
    instr['best_updates'] = int(instr.get('best_updates') or 0) + int(updates)
    instr['recursive_calls'] = int(instr.get('recursive_calls') or 0) + int(calls)
    raw = int(instr.get('raw_pairs') or 0)
    cand = int(instr.get('candidate_pairs') or 0)
    instr['pruning_ratio'] = (cand / raw) if raw else 0.0


def finalize_funnel(instr: Dict[str, object], *, sort_seconds: float, scan_seconds: float) -> None:
    """Finalize timing phases (store in ms, rounded) leaving existing counts untouched."""
    instr['phase_sort_ms'] = round(sort_seconds * 1000.0, 3)
    instr['phase_scan_ms'] = round(scan_seconds * 1000.0, 3)


__all__ = ['init_funnel', 'update_counts', 'finalize_funnel', 'BASE_KEYS']
