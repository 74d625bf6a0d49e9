"""Vectorized closest-pair reference kernels (NumPy / SciPy).

Independent O(n^2) and KD-tree computations of the closest pair in a planar
point cloud. They are used to cross-check ``geometry.closest_pair`` (CLI
``--check``, tests, benchmarks) and answer with point indices rather than
points.

Design goals:
  * NumPy broadcasting for small clouds (fast, memory heavy: n^2 floats).
  * SciPy cKDTree k=2 neighbour query above a configurable point count.
  * Float64 throughout so results match the scalar engine bit for bit on the
    broadcasting path.
"""
from __future__ import annotations

from typing import Optional, Sequence, Tuple

import numpy as _np
from scipy.spatial import cKDTree as _KDTree

from utils.config import ClosestPairConfig

IndexPair = Tuple[int, int, float]


def as_f64(a):  # small helper
    return _np.asarray(a, dtype=_np.float64)


def _stack(xs: Optional[Sequence[float]], ys: Optional[Sequence[float]]) -> Optional[_np.ndarray]:
    if xs is None or ys is None:
        return None
    X = as_f64(xs).ravel(); Y = as_f64(ys).ravel()
    if X.shape[0] != Y.shape[0] or X.shape[0] < 2:
        return None
    return _np.column_stack((X, Y))


def pairwise_distances(a, b) -> _np.ndarray:
    """(N,2) x (M,2) -> (N,M) Euclidean distances."""
    A = as_f64(a); B = as_f64(b)
    diff = A[:, None, :] - B[None, :, :]
    dx = diff[..., 0]; dy = diff[..., 1]
    return _np.sqrt(dx * dx + dy * dy)


def brute_force_closest_pair(xs, ys) -> Optional[IndexPair]:
    """Return (i, j, distance) with i < j over all C(n,2) pairs.

    None for absent input, mismatched lengths or fewer than two points.
    Ties resolve to the first pair in row-major (i, j) order.
    """
    P = _stack(xs, ys)
    if P is None:
        return None
    n = P.shape[0]
    dist = pairwise_distances(P, P)
    iu, ju = _np.triu_indices(n, k=1)
    vals = dist[iu, ju]
    k = int(_np.argmin(vals))
    return int(iu[k]), int(ju[k]), float(vals[k])


def kdtree_closest_pair(xs, ys) -> Optional[IndexPair]:
    """Closest pair via a k=2 nearest-neighbour query on a cKDTree.

    Duplicate coordinates may list the query point itself second, so the
    neighbour column is picked per row rather than assumed.
    """
    P = _stack(xs, ys)
    if P is None:
        return None
    tree = _KDTree(P)
    dist, idx = tree.query(P, k=2)
    rows = _np.arange(P.shape[0])
    first_is_other = idx[:, 0] != rows
    other = _np.where(first_is_other, idx[:, 0], idx[:, 1])
    nearest = _np.where(first_is_other, dist[:, 0], dist[:, 1])
    k = int(_np.argmin(nearest))
    i, j = int(k), int(other[k])
    return (i, j, float(nearest[k])) if i < j else (j, i, float(nearest[k]))


def reference_closest_pair(xs, ys, kdtree_threshold: Optional[int] = None) -> Optional[IndexPair]:
    """Pick broadcasting below ``kdtree_threshold`` points and a KD-tree above it."""
    threshold = ClosestPairConfig().kdtree_threshold if kdtree_threshold is None else kdtree_threshold
    n = 0 if xs is None else len(xs)
    if n > threshold:
        return kdtree_closest_pair(xs, ys)
    return brute_force_closest_pair(xs, ys)


__all__ = [
    'as_f64',
    'pairwise_distances',
    'brute_force_closest_pair',
    'kdtree_closest_pair',
    'reference_closest_pair',
]
