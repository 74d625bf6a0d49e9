"""Tests for the closed-form planar primitives."""
import math

import pytest

from geometry import primitives as gp
from geometry.types import Box, Orientation, Point


# y-down box (bottom > top)
DOWN = dict(left=150, top=120, right=350, bottom=350)
# y-up box (top > bottom)
UP = dict(left=150, top=250, right=350, bottom=120)


@pytest.mark.parametrize("x, y, expected", [
    (100.0, 100.0, False),
    (375.0, 120.0, False),
    (175.0, 370.0, False),
    (150.0, 251.0, False),
    (200.0, 200.0, True),
    (150.0, 250.0, False),  # on the boundary
])
def test_inside_box_y_down(x, y, expected):
    assert gp.inside_box(x, y, **DOWN) is expected


@pytest.mark.parametrize("x, y, expected", [
    (100.0, 100.0, False),
    (375.0, 120.0, False),
    (200.0, 200.0, True),
    (150.0, 250.0, False),
])
def test_inside_box_y_up(x, y, expected):
    assert gp.inside_box(x, y, **UP) is expected


@pytest.mark.parametrize("box1, box2, expected", [
    (Box(50, 200, 150, 100), Box(175, 90, 375, 10), False),
    (Box(50, 200, 150, 100), Box(-20, 95, 20, 10), False),
    (Box(50, 200, 150, 100), Box(75, 325, 200, 201), False),
    (Box(50, 200, 150, 100), Box(110, 120, 200, 30), True),
    (Box(10, 10, 150, 100), Box(100, 150, 300, 250), False),
    (Box(10, 10, 150, 100), Box(-20, -95, 20, 0), False),
    (Box(10, 10, 150, 100), Box(175, 325, 200, 210), False),
    (Box(10, 10, 150, 100), Box(110, 30, 200, 120), True),
    (Box(0, 0, 10, 10), Box(10, 10, 20, 20), True),  # single corner of contact
])
def test_boxes_intersect(box1, box2, expected):
    assert gp.boxes_intersect(box1, box2) is expected
    assert gp.boxes_intersect(box2, box1) is expected


@pytest.mark.parametrize("x, y, expected", [
    (5, 1, Orientation.RIGHT),
    (-1, -7, Orientation.RIGHT),
    (4, 2, Orientation.ON),
    (2, 5, Orientation.LEFT),
    (-2, 2, Orientation.LEFT),
])
def test_point_orientation(x, y, expected):
    assert gp.point_orientation(1, 1, 7, 3, x, y) is expected


def test_point_orientation_custom_tolerance():
    assert gp.point_orientation(0, 0, 10, 0, 5, 0.01) is Orientation.LEFT
    assert gp.point_orientation(0, 0, 10, 0, 5, 0.01, tol=1.0) is Orientation.ON


def test_intersect_box():
    assert gp.intersect_box(25, 325, 300, 310, 50, 50, 150, 300) is False
    assert gp.intersect_box(140, 25, 200, 75, 50, 50, 150, 300) is False
    assert gp.intersect_box(-10, 40, 100, 40, 50, 50, 150, 300) is False
    assert gp.intersect_box(25, 100, 100, 75, 50, 50, 150, 300) is True
    # crosses the whole box
    assert gp.intersect_box(0, 200, 200, 200, 50, 50, 150, 300) is True


def test_line_rect_intersection_orders_by_x():
    a, b = gp.line_rect_intersection(200, 200, 0, 200, 50, 50, 150, 300)
    assert a == Point(50.0, 200.0)
    assert b == Point(150.0, 200.0)


def test_line_rect_intersection_single_crossing_is_none():
    assert gp.line_rect_intersection(100, 200, 0, 200, 50, 50, 150, 300) is None


def test_compare():
    assert gp.compare(1.0, 1.0, 0.0)
    assert gp.compare(0.0, 1e-12, 1e-3)
    assert not gp.compare(0.0, 1e-12, 1e-8)
    assert gp.compare(100.0, 100.05, 1e-3)
    assert not gp.compare(100.0, 100.5, 1e-3)


def test_points_equal():
    assert gp.points_equal(-10.2472, 40.0, -10.2471, 40.0)
    assert not gp.points_equal(-10.2472, 40.0, -10.2471, 40.1)


@pytest.mark.parametrize("coords, expected", [
    ((15, 10, 49, 25, 29, 5, 32, 32), True),
    ((1, 1, 7, 7, 2, 2, 8, 8), False),
    ((1, 1, 7, 1, 2, 2, 8, 2), False),
    ((1, 1, 1, 7, 2, 2, 2, 8), False),
    ((1, 1, 1, 7, 2, 2, 8, 8), True),
    ((0, 0, 5, 5, 5, 5, 9, 5), True),  # shared endpoint
])
def test_lines_intersect(coords, expected):
    assert gp.lines_intersect(*coords) is expected


@pytest.mark.parametrize("coords, expected", [
    ((1, 1, 8, 5, 5, 2, 6, -1), False),
    ((1, 1, 8, 5, 2, 2, 9, 6), False),
    ((1, 1, 8, 5, 5, 4, 6, -1), True),
    ((1, 1, 8, 5, 1, 1, 6, -1), True),
    ((0, 0, 4, 0, 2, 0, 6, 0), True),  # collinear overlap
    ((0, 0, 1, 0, 2, 0, 3, 0), False),  # collinear, disjoint
])
def test_segments_intersect(coords, expected):
    assert gp.segments_intersect(*coords) is expected


def test_line_intersection():
    p = gp.line_intersection(15, 10, 49, 25, 29, 5, 32, 32)
    assert abs(p.x - 30.305) < 0.01
    assert abs(p.y - 16.75) < 0.01


def test_interior_angle():
    angle = gp.interior_angle(1, 2, 7, 12, -1, 18, True)
    assert abs(angle - 95.91) < 0.01
    assert gp.interior_angle(1, 0, 0, 0, 0, 1) == pytest.approx(math.pi / 2)
    # zero-length leg
    assert gp.interior_angle(3, 3, 3, 3, 0, 1) == 0.0
    # opposite legs give a straight angle
    assert gp.interior_angle(1e8, 0, 0, 0, -3, 0) == pytest.approx(math.pi)


def test_is_clockwise():
    assert gp.is_clockwise(1, 1, 5, 8, 12, -2) is True
    assert gp.is_clockwise(1, 1, 10, 2, 5, 8) is False


def test_point_on_line():
    assert gp.point_on_line(4, 5, 1, 2, 9, 8) is False
    assert gp.point_on_line(5, 5, 1, 2, 9, 8) is True


def test_triangle_area():
    assert abs(gp.triangle_area(1, 8, 3, 12, 17, -2) - 42) < 0.01
    assert abs(gp.triangle_area(1, 8, 1, 8, 1, 8)) < 0.001


def test_circle_to_circle_intersection():
    p1, p2 = gp.circle_to_circle_intersection(-2, -3, 3, -1, 1, 4)
    assert abs(p1.x - 0.96) < 0.01
    assert abs(p1.y + 2.49) < 0.01
    assert abs(p2.x + 4.37) < 0.01
    assert abs(p2.y + 1.16) < 0.01


def test_circle_to_circle_degenerate_cases():
    assert gp.circle_to_circle_intersection(0, 0, 1, 10, 0, 1) == []  # separate
    assert gp.circle_to_circle_intersection(0, 0, 5, 1, 0, 1) == []  # contained
    assert gp.circle_to_circle_intersection(0, 0, 2, 0, 0, 2) == []  # coincident
    touching = gp.circle_to_circle_intersection(0, 0, 1, 2, 0, 1)
    assert touching == [Point(1.0, 0.0)]


def test_point_to_segment_distance():
    assert abs(gp.point_to_segment_distance(2, 0, 8, 4, 5, 6) - 3.3) < 0.1
    # beyond either endpoint the distance is to that endpoint
    assert gp.point_to_segment_distance(0, 0, 10, 0, -3, 4) == 5.0
    assert gp.point_to_segment_distance(0, 0, 10, 0, 13, 4) == 5.0


def test_project_to_segment():
    assert gp.project_to_segment(0, 0, 10, 0, 4, 7) == Point(4.0, 0.0)
    assert gp.project_to_segment(0, 0, 10, 0, -4, 7) == Point(0, 0)
    assert gp.project_to_segment(0, 0, 10, 0, 14, 7) == Point(10, 0)
    assert gp.project_to_segment(2, 3, 2, 3, 9, 9) == Point(2, 3)


def test_reflect_about_diagonal():
    pts = [Point(2, 1), Point(1, -1), Point(-1, 0), Point(4, 7), Point(6, -4), Point(7, 2)]

    assert gp.reflect([], 0, 0, 2, 2) == []
    # degenerate line is an identity transform
    assert gp.reflect(pts, 1, 1, 1, 1) == pts

    reflected = gp.reflect(pts, 0, 0, 2, 2)
    assert len(reflected) == len(pts)
    for original, r in zip(pts, reflected):
        assert original.x == r.y
        assert original.y == r.x


def test_reflect_accepts_mappings_and_pairs():
    out = gp.reflect([{'x': 3, 'y': 1}, (0, 5)], 0, 0, 1, 0)
    assert out == [Point(3, -1), Point(0, -5)]


def test_segment_params_report_both_parameters():
    hit, t, u = gp._segment_params(0, 0, 4, 0, 1, -1, 1, 3)
    assert hit is True
    assert t == pytest.approx(0.25)
    assert u == pytest.approx(0.25)
    assert gp._segment_params(0, 0, 4, 0, 0, 1, 4, 1) == (False, None, None)
    assert gp._segment_params(0, 0, 4, 0, 2, 0, 6, 0) == (True, None, None)


def test_tolerance_keywords_override_active_config():
    # a loose band treats the offset parallel segment as collinear overlap
    assert gp.segments_intersect(0, 0, 10, 0, 2, 0.001, 8, 0.001) is False
    assert gp.segments_intersect(0, 0, 10, 0, 2, 0.001, 8, 0.001, tol=1.0) is True
    assert gp.lines_intersect(0, 0, 1, 1, 0, 1, 1, 2.1) is True
    assert gp.lines_intersect(0, 0, 1, 1, 0, 1, 1, 2.1, tol=0.5) is False
    assert gp.interior_angle(1, 0, 0, 0, 0, 1, tol=2.0) == 0.0
    assert gp.circle_to_circle_intersection(0, 0, 5, 0.5, 0, 5, tol=1.0) == []
    assert gp.project_to_segment(0, 0, 0.1, 0, 5, 5, tol=1.0) == Point(0, 0)
    pts = [Point(1, 2)]
    assert gp.reflect(pts, 0, 0, 0.1, 0.1, tol=1.0) == pts
