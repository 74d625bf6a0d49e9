"""Closed-form planar geometry predicates on raw coordinates.

Every function takes plain numbers (no point or vector objects) and returns a
plain value, a ``Point`` or a list of ``Point``. Error checking is minimal:
the helpers target interactive, pixel-scale workloads and favour speed over
robustness. Tolerances default to the active ``ToleranceConfig`` (see
``utils.config.set_tolerances``), looked up on every call, and can be
overridden per call with a ``tol`` keyword.

Box arguments accept both screen (y-down, bottom > top) and Cartesian (y-up)
corner conventions.
"""
from __future__ import annotations

import math
from typing import Any, Iterable, List, Optional, Tuple

from geometry.types import Box, Orientation, Point
from utils.config import active_tolerances


def compare(a: float, b: float, tol: float) -> bool:
    """Relative near-equality of two floats.

    Exactly equal values always compare equal. Two values that are both
    essentially zero compare equal when ``tol`` is loose (> 1e-7), since
    pixel-based coordinates rarely need tight tolerances.
    """
    if a == b:
        return True
    ma = abs(a)
    mb = abs(b)
    if ma < 1e-9 and mb < 1e-9 and tol > 1e-7:
        return True
    if mb > ma:
        return abs((a - b) / b) <= tol
    return abs((a - b) / a) <= tol


def _cross(p1x: float, p1y: float, p2x: float, p2y: float) -> float:
    return p1x * p2y - p1y * p2x


def inside_box(x: float, y: float, left: float, top: float, right: float, bottom: float) -> bool:
    """True if (x, y) is strictly inside the box; points on the boundary are outside."""
    if bottom > top:
        return left < x < right and top < y < bottom
    return left < x < right and bottom < y < top


def boxes_intersect(box1: Box, box2: Box) -> bool:
    """Do two axis-aligned boxes overlap? A single point of contact counts."""
    l1, r1 = box1.left, box1.right
    t1, b1 = max(box1.top, box1.bottom), min(box1.top, box1.bottom)
    l2, r2 = box2.left, box2.right
    t2, b2 = max(box2.top, box2.bottom), min(box2.top, box2.bottom)
    return not (l2 > r1 or r2 < l1 or t2 < b1 or t1 < b2)


def point_orientation(x1: float, y1: float, x2: float, y2: float, x: float, y: float,
                      tol: Optional[float] = None) -> Orientation:
    """Side of the directed line (x1,y1) -> (x2,y2) that (x, y) lies on.

    The on-line test is made first within a small band to absorb roundoff.
    """
    tol = active_tolerances().orientation_tol if tol is None else tol
    test = (x2 - x1) * (y - y1) - (x - x1) * (y2 - y1)
    if abs(test) < tol:
        return Orientation.ON
    return Orientation.LEFT if test > 0 else Orientation.RIGHT


def points_equal(x1: float, y1: float, x2: float, y2: float, tol: Optional[float] = None) -> bool:
    """Are (x1,y1) and (x2,y2) equal within a per-coordinate relative tolerance?"""
    tol = active_tolerances().point_equal_tol if tol is None else tol
    return compare(x1, x2, tol) and compare(y1, y2, tol)


def _segment_params(px: float, py: float, p2x: float, p2y: float,
                    qx: float, qy: float, q2x: float, q2y: float,
                    tol: Optional[float] = None) -> Tuple[bool, Optional[float], Optional[float]]:
    """Segment-segment test returning (hit, t, u).

    t and u are the parameters of the crossing along P and Q; both are None
    for parallel or collinear segments, where there is no single crossing.
    This is the 2-D form of Goldman's Graphics Gems algorithm.
    """
    eps = active_tolerances().parallel_tol if tol is None else tol
    rx = p2x - px
    ry = p2y - py
    sx = q2x - qx
    sy = q2y - qy
    tx = qx - px
    ty = qy - py

    num = _cross(tx, ty, rx, ry)
    den = _cross(rx, ry, sx, sy)

    if abs(num) < eps and abs(den) < eps:
        if (points_equal(px, py, qx, qy) or points_equal(px, py, q2x, q2y)
                or points_equal(p2x, p2y, qx, qy) or points_equal(p2x, p2y, q2x, q2y)):
            return True, None, None
        overlap = ((qx - px < 0) != (qx - p2x < 0)) or ((qy - py < 0) != (qy - p2y < 0))
        return overlap, None, None

    if abs(den) < eps:
        return False, None, None

    u = num / den
    t = _cross(tx, ty, sx, sy) / den
    return (0 <= t <= 1 and 0 <= u <= 1), t, u


def segments_intersect(px: float, py: float, p2x: float, p2y: float,
                       qx: float, qy: float, q2x: float, q2y: float,
                       tol: Optional[float] = None) -> bool:
    """Do segments P = (px,py)-(p2x,p2y) and Q = (qx,qy)-(q2x,q2y) intersect?

    Shared endpoints and collinear overlap count as intersections; distinct
    parallel segments do not. ``tol`` is the parallel/collinear cross-product
    band. A full test is always run, so pre-screen with bounding boxes when
    most pairs are far apart.
    """
    hit, _, _ = _segment_params(px, py, p2x, p2y, qx, qy, q2x, q2y, tol=tol)
    return hit


def _box_edges(left: float, top: float, right: float, bottom: float):
    return (
        (left, top, right, top),
        (right, top, right, bottom),
        (right, bottom, left, bottom),
        (left, bottom, left, top),
    )


def intersect_box(x1: float, y1: float, x2: float, y2: float,
                  left: float, top: float, right: float, bottom: float) -> bool:
    """Does the segment (x1,y1)-(x2,y2) touch any edge of the box?"""
    if (x1 < left and x2 < left) or (x1 > right and x2 > right):
        return False
    if bottom > top:
        if (y1 < top and y2 < top) or (y1 > bottom and y2 > bottom):
            return False
    else:
        if (y1 < bottom and y2 < bottom) or (y1 > top and y2 > top):
            return False
    return any(segments_intersect(x1, y1, x2, y2, *edge) for edge in _box_edges(left, top, right, bottom))


def line_rect_intersection(x1: float, y1: float, x2: float, y2: float,
                           left: float, top: float, right: float, bottom: float) -> Optional[Tuple[Point, Point]]:
    """Two points where the segment crosses the box edges, ordered by x.

    Meant to follow a positive ``intersect_box`` test. Returns None when fewer
    than two crossings exist (e.g. one endpoint inside the box); edges the
    segment runs along do not contribute a crossing.
    """
    hits: List[Point] = []
    for edge in _box_edges(left, top, right, bottom):
        hit, t, _ = _segment_params(x1, y1, x2, y2, *edge)
        if hit and t is not None:
            hits.append(Point((1 - t) * x1 + t * x2, (1 - t) * y1 + t * y2))
            if len(hits) == 2:
                break
    if len(hits) < 2:
        return None
    a, b = hits
    return (b, a) if a.x > b.x else (a, b)


def lines_intersect(x1: float, y1: float, x2: float, y2: float,
                    x3: float, y3: float, x4: float, y4: float,
                    tol: Optional[float] = None) -> bool:
    """Do the infinite lines through (x1,y1)-(x2,y2) and (x3,y3)-(x4,y4) intersect?

    Lines sharing an endpoint intersect; otherwise lines intersect unless they
    are parallel (both vertical, or slopes equal within ``tol``).
    """
    if (points_equal(x1, y1, x3, y3) or points_equal(x1, y1, x4, y4)
            or points_equal(x2, y2, x3, y3) or points_equal(x2, y2, x4, y4)):
        return True

    cfg = active_tolerances()
    slope_tol = cfg.slope_tol if tol is None else tol
    run1 = x2 - x1
    run2 = x4 - x3
    vertical1 = abs(run1) < cfg.parallel_tol
    vertical2 = abs(run2) < cfg.parallel_tol

    if vertical1:
        return not vertical2
    if vertical2:
        return True
    return not compare((y2 - y1) / run1, (y4 - y3) / run2, slope_tol)


def line_intersection(px: float, py: float, p2x: float, p2y: float,
                      qx: float, qy: float, q2x: float, q2y: float) -> Point:
    """Intersection point of the infinite lines through two segments.

    Intended for well-posed data only (non-parallel lines); there are no
    checks for degenerate input and parallel lines divide by zero.
    """
    rx = p2x - px
    ry = p2y - py
    sx = q2x - qx
    sy = q2y - qy
    tx = qx - px
    ty = qy - py

    t = _cross(tx, ty, sx, sy) / _cross(rx, ry, sx, sy)
    t1 = 1 - t
    return Point(t1 * px + t * p2x, t1 * py + t * p2y)


def interior_angle(x1: float, y1: float, x2: float, y2: float, x3: float, y3: float,
                   to_degrees: bool = False, tol: Optional[float] = None) -> float:
    """Angle at the interior vertex (x2,y2) of the path (x1,y1)-(x2,y2)-(x3,y3).

    Legs no longer than ``tol`` yield 0.
    """
    tol = active_tolerances().zero_tol if tol is None else tol
    v1x = x1 - x2
    v1y = y1 - y2
    v2x = x3 - x2
    v2y = y3 - y2

    v1 = math.sqrt(v1x * v1x + v1y * v1y)
    v2 = math.sqrt(v2x * v2x + v2y * v2y)
    if v1 <= tol or v2 <= tol:
        return 0.0

    cos = (v1x * v2x + v1y * v2y) / (v1 * v2)
    result = math.acos(max(-1.0, min(1.0, cos)))
    return math.degrees(result) if to_degrees else result


def is_clockwise(x0: float, y0: float, x1: float, y1: float, x2: float, y2: float) -> bool:
    """True if P0, P1, P2 are in clockwise order (collinear counts as clockwise)."""
    return not ((y2 - y0) * (x1 - x0) > (y1 - y0) * (x2 - x0))


def point_on_line(rx: float, ry: float, px: float, py: float, qx: float, qy: float,
                  tol: Optional[float] = None) -> bool:
    """Is (rx,ry) on the infinite line through (px,py) and (qx,qy)?

    Uses a small-determinant test; very close points of very small magnitude
    may lose significance.
    """
    tol = active_tolerances().on_line_tol if tol is None else tol
    det = (qx - px) * (ry - py) - (qy - py) * (rx - px)
    return abs(det) < tol


def triangle_area(x1: float, y1: float, x2: float, y2: float, x3: float, y3: float) -> float:
    a = x1 * (y2 - y3) + x2 * (y3 - y1) + x3 * (y1 - y2)
    return 0.5 * abs(a)


def circle_to_circle_intersection(x0: float, y0: float, r0: float,
                                  x1: float, y1: float, r1: float,
                                  tol: Optional[float] = None) -> List[Point]:
    """Intersection points of two circles.

    Empty when the circles are separate, one contains the other, or they are
    coincident (centers and radii within ``tol``); a single point when they
    touch externally.
    """
    dx = x1 - x0
    dy = y1 - y0
    d = math.sqrt(dx * dx + dy * dy)

    if d > r0 + r1 or d < abs(r0 - r1):
        return []
    tol = active_tolerances().circle_coincident_tol if tol is None else tol
    if abs(d) < tol and abs(r1 - r0) < tol:
        return []

    r0sq = r0 * r0
    a = (r0sq - r1 * r1 + d * d) / (2 * d)
    h = math.sqrt(max(0.0, r0sq - a * a))

    dx /= d
    dy /= d
    mx = x0 + a * dx
    my = y0 + a * dy

    points = [Point(mx + h * dy, my - h * dx)]
    if d != r0 + r1:
        points.append(Point(mx - h * dy, my + h * dx))
    return points


def point_to_segment_distance(p0x: float, p0y: float, p1x: float, p1y: float, px: float, py: float) -> float:
    """Distance from P to the segment P0-P1 (not to the infinite line)."""
    vx = p1x - p0x
    vy = p1y - p0y
    wx = px - p0x
    wy = py - p0y

    c1 = wx * vx + wy * vy
    if c1 <= 0:
        return math.sqrt(wx * wx + wy * wy)

    c2 = vx * vx + vy * vy
    if c2 <= c1:
        wx = p1x - px
        wy = p1y - py
        return math.sqrt(wx * wx + wy * wy)

    b = c1 / c2
    dx = px - (p0x + b * vx)
    dy = py - (p0y + b * vy)
    return math.sqrt(dx * dx + dy * dy)


def project_to_segment(p0x: float, p0y: float, p1x: float, p1y: float, px: float, py: float,
                       tol: Optional[float] = None) -> Point:
    """Closest point to P on the segment P0-P1; P0 for a degenerate segment."""
    tol = active_tolerances().zero_tol if tol is None else tol
    dx = p1x - p0x
    dy = p1y - p0y
    norm = dx * dx + dy * dy
    if norm < tol:
        return Point(p0x, p0y)

    t = ((px - p0x) * dx + (py - p0y) * dy) / norm
    if t <= 0:
        return Point(p0x, p0y)
    if t >= 1:
        return Point(p1x, p1y)
    return Point(p0x + t * dx, p0y + t * dy)


def _xy(p: Any) -> Tuple[float, float]:
    if isinstance(p, Point):
        return p.x, p.y
    if isinstance(p, dict):
        return p['x'], p['y']
    return p[0], p[1]


def reflect(points: Iterable[Any], x0: float, y0: float, x1: float, y1: float,
            tol: Optional[float] = None) -> List[Any]:
    """Reflect a point cloud about the line through (x0,y0) and (x1,y1).

    Points may be ``Point`` instances, ``{'x', 'y'}`` mappings or (x, y)
    pairs; reflected points are returned as ``Point``. A degenerate line is
    an identity transform, so the input points come back unchanged.
    """
    tol = active_tolerances().zero_tol if tol is None else tol
    points = list(points)
    dx = x1 - x0
    dy = y1 - y0
    d = dx * dx + dy * dy
    if abs(d) < tol or not points:
        return points

    a = (dx * dx - dy * dy) / d
    b = 2 * dx * dy / d

    out: List[Any] = []
    for p in points:
        px, py = _xy(p)
        ux = px - x0
        uy = py - y0
        out.append(Point(a * ux + b * uy + x0, b * ux - a * uy + y0))
    return out


__all__ = [
    "compare",
    "inside_box",
    "boxes_intersect",
    "point_orientation",
    "points_equal",
    "segments_intersect",
    "intersect_box",
    "line_rect_intersection",
    "lines_intersect",
    "line_intersection",
    "interior_angle",
    "is_clockwise",
    "point_on_line",
    "triangle_area",
    "circle_to_circle_intersection",
    "point_to_segment_distance",
    "project_to_segment",
    "reflect",
]
