from __future__ import annotations

import logging

import pytest

from canvas_showcase.errors import SingularTransform
from canvas_showcase.pointer import ViewNavigator, map_to_local, try_map_to_local
from canvas_showcase.transform import Transform


def test_map_to_local_inverts_translation_and_rotation() -> None:
    m = Transform.translation(100.0, 50.0) @ Transform.rotation(0.3)
    local = (12.0, -4.0)
    device = m.apply(*local)
    assert map_to_local(m, *device) == pytest.approx(local)


def test_map_to_local_raises_on_singular() -> None:
    with pytest.raises(SingularTransform):
        map_to_local(Transform.scaling(0.0, 0.0), 1.0, 1.0)


def test_try_map_to_local_returns_none_on_singular() -> None:
    assert try_map_to_local(Transform.scaling(1.0, 0.0), 1.0, 1.0) is None
    assert try_map_to_local(Transform.identity(), 3.0, 4.0) == (3.0, 4.0)


def test_drag_pans_scene_under_pointer() -> None:
    nav = ViewNavigator()
    nav.drag(10.0, 10.0, 25.0, 5.0)
    assert nav.view.apply(0.0, 0.0) == pytest.approx((15.0, -5.0))


def test_drag_in_zoomed_view_tracks_pointer() -> None:
    nav = ViewNavigator(Transform.scaling(2.0, 2.0))
    scene_point = map_to_local(nav.view, 40.0, 40.0)
    nav.drag(40.0, 40.0, 60.0, 80.0)
    assert nav.view.apply(*scene_point) == pytest.approx((60.0, 80.0))


def test_zoom_keeps_point_under_pointer_fixed() -> None:
    nav = ViewNavigator(Transform.translation(30.0, -10.0))
    before = map_to_local(nav.view, 200.0, 150.0)

    nav.zoom(200.0, 150.0, 2.0)

    assert nav.view.average_scale == pytest.approx(1.2)
    assert map_to_local(nav.view, 200.0, 150.0) == pytest.approx(before)


def test_zoom_out_to_zero_collapses_then_input_is_ignored(caplog: pytest.LogCaptureFixture) -> None:
    nav = ViewNavigator()
    nav.zoom(0.0, 0.0, -10.0)
    assert not nav.view.is_invertible()
    collapsed = nav.view

    with caplog.at_level(logging.WARNING, logger="canvas_showcase.pointer"):
        nav.drag(0.0, 0.0, 10.0, 10.0)
        nav.zoom(5.0, 5.0, 1.0)

    assert nav.view == collapsed
    assert "singular" in caplog.text

    nav.reset()
    assert nav.view == Transform.identity()
