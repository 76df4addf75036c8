from __future__ import annotations

import math

import pytest

from canvas_showcase.renderer import (
    FillRule,
    Path,
    Solidity,
    greedy_line_breaks,
    hsla,
    lerp_rgba,
)
from canvas_showcase.scene import star_path


def test_pentagram_center_depends_on_fill_rule() -> None:
    star = star_path()
    assert not star.contains_point(50.0, 45.0, FillRule.EVENODD)
    assert star.contains_point(50.0, 45.0, FillRule.NONZERO)


def test_pentagram_tip_is_inside_under_both_rules() -> None:
    star = star_path()
    for rule in (FillRule.EVENODD, FillRule.NONZERO):
        assert star.contains_point(50.0, 10.0, rule)
        assert not star.contains_point(0.0, 0.0, rule)


def test_hole_subpath_cuts_out_interior() -> None:
    path = Path().rect(0.0, 0.0, 10.0, 10.0)
    path.rect(2.0, 2.0, 6.0, 6.0).solidity(Solidity.HOLE)

    for rule in (FillRule.EVENODD, FillRule.NONZERO):
        assert not path.contains_point(5.0, 5.0, rule)
        assert path.contains_point(1.0, 5.0, rule)


def test_arc_direction_follows_solidity() -> None:
    ccw = Path().arc(0.0, 0.0, 10.0, 0.0, math.pi / 2.0, Solidity.HOLE)
    pts = ccw.subpaths[0].points
    assert pts[0] == pytest.approx((10.0, 0.0))
    assert pts[-1] == pytest.approx((0.0, 10.0), abs=1e-9)
    angles = [math.atan2(y, x) for x, y in pts]
    assert all(a < b for a, b in zip(angles, angles[1:]))

    # The solid direction sweeps the long way round with decreasing angle.
    cw = Path().arc(0.0, 0.0, 10.0, 0.0, math.pi / 2.0, Solidity.SOLID)
    pts = cw.subpaths[0].points
    assert pts[-1] == pytest.approx((0.0, 10.0), abs=1e-9)
    assert pts[1][1] < 0.0


def test_arc_continues_current_subpath() -> None:
    path = Path()
    path.arc(0.0, 0.0, 10.0, 0.0, 1.0, Solidity.HOLE)
    path.arc(0.0, 0.0, 5.0, 1.0, 0.0, Solidity.SOLID)
    path.close()
    assert len(path.subpaths) == 1
    assert path.subpaths[0].closed


def test_shapes_and_emptiness() -> None:
    assert Path().is_empty()
    circle = Path().circle(0.0, 0.0, 5.0)
    assert not circle.is_empty()
    assert circle.contains_point(0.0, 0.0)
    assert not circle.contains_point(5.5, 0.0)

    rr = Path().rounded_rect(0.0, 0.0, 40.0, 20.0, 5.0)
    assert rr.subpaths[0].closed
    assert rr.contains_point(20.0, 10.0)
    assert not rr.contains_point(0.2, 0.2)


def test_bezier_ends_at_target_point() -> None:
    path = Path().move_to(0.0, 0.0).bezier_to(10.0, 0.0, 20.0, 10.0, 30.0, 30.0)
    assert path.subpaths[0].points[-1] == pytest.approx((30.0, 30.0))


def test_line_breaks_on_words_newlines_and_long_words() -> None:
    width_of = len
    assert greedy_line_breaks(10.0, "", width_of) == []
    assert greedy_line_breaks(10.0, "hello world", width_of) == [(0, 5), (6, 11)]
    assert greedy_line_breaks(10.0, "ab\n\ncd", width_of) == [(0, 2), (3, 3), (4, 6)]
    assert greedy_line_breaks(4.0, "abcdefghij", width_of) == [(0, 4), (4, 8), (8, 10)]


def test_color_helpers() -> None:
    assert hsla(0.0, 1.0, 0.5) == (255, 0, 0, 255)
    assert hsla(1.0 / 3.0, 1.0, 0.5, 0.5) == (0, 255, 0, 128)
    assert lerp_rgba((0, 0, 0, 0), (200, 100, 50, 255), 0.5) == (100, 50, 25, 128)
    assert lerp_rgba((0, 0, 0, 0), (200, 100, 50, 255), 2.0) == (200, 100, 50, 255)
