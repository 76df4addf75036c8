"""Pointer state and the mapping of device coordinates into local frames."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .errors import SingularTransform
from .transform import Transform

logger = logging.getLogger(__name__)

WHEEL_ZOOM_STEP = 0.1


@dataclass(slots=True)
class PointerState:
    """Device-space pointer; written only by input events."""

    x: float = 0.0
    y: float = 0.0
    dragging: bool = False


def map_to_local(transform: Transform, x: float, y: float) -> tuple[float, float]:
    """Return ``transform⁻¹ · (x, y)``.

    Raises ``SingularTransform`` when the accumulated transform has collapsed.
    """

    return transform.inverse().apply(x, y)


def try_map_to_local(transform: Transform, x: float, y: float) -> tuple[float, float] | None:
    """Like :func:`map_to_local` but returns None instead of raising; for skipping hit tests."""

    try:
        return map_to_local(transform, x, y)
    except SingularTransform:
        logger.debug("pointer mapping skipped: singular transform %r", transform)
        return None


class ViewNavigator:
    """Scene-wide pan/zoom view transform driven by drag and wheel input."""

    def __init__(self, view: Transform | None = None) -> None:
        self._view = view or Transform.identity()

    @property
    def view(self) -> Transform:
        return self._view

    def reset(self) -> None:
        self._view = Transform.identity()

    def drag(self, x0: float, y0: float, x1: float, y1: float) -> None:
        """Pan so the scene point under ``(x0, y0)`` ends up under ``(x1, y1)``."""

        try:
            inv = self._view.inverse()
        except SingularTransform:
            logger.warning("ignoring drag: view transform is singular")
            return
        p0 = inv.apply(x0, y0)
        p1 = inv.apply(x1, y1)
        self._view = self._view @ Transform.translation(p1[0] - p0[0], p1[1] - p0[1])

    def zoom(self, x: float, y: float, wheel_y: float) -> None:
        """Zoom by ``1 + wheel_y / 10`` keeping the scene point under ``(x, y)`` fixed."""

        try:
            px, py = map_to_local(self._view, x, y)
        except SingularTransform:
            logger.warning("ignoring zoom: view transform is singular")
            return
        s = 1.0 + wheel_y * WHEEL_ZOOM_STEP
        view = self._view @ Transform.translation(px, py)
        view = view @ Transform.scaling(s, s)
        self._view = view @ Transform.translation(-px, -py)
        if not self._view.is_invertible():
            logger.debug("view collapsed after zoom (scale=%r)", s)
