from __future__ import annotations

import math
from dataclasses import dataclass

BLINK_EXPONENT = 200
BLINK_DEPTH = 0.8
PUPIL_REACH_X = 0.4
PUPIL_REACH_Y = 0.5


@dataclass(frozen=True, slots=True)
class EyePair:
    ex: float  # socket x radius
    ey: float  # socket y radius
    left: tuple[float, float]
    right: tuple[float, float]

    @property
    def pupil_radius(self) -> float:
        return min(self.ex, self.ey) * 0.5


def eye_pair(x: float, y: float, w: float, h: float) -> EyePair:
    ex = w * 0.23
    ey = h * 0.5
    return EyePair(ex=ex, ey=ey, left=(x + ex, y + ey), right=(x + w - ex, y + ey))


def blink(t: float) -> float:
    """``1 - sin(0.5 t)^200 · 0.8``: 1 almost always, dipping to 0.2 every 2π."""

    return 1.0 - math.sin(t * 0.5) ** BLINK_EXPONENT * BLINK_DEPTH


def pupil_offset(mx: float, my: float, cx: float, cy: float, ex: float, ey: float) -> tuple[float, float]:
    """Pointer-directed pupil displacement, saturating at ``(0.4 ex, 0.5 ey)``."""

    dx = (mx - cx) / (ex * 10.0)
    dy = (my - cy) / (ey * 10.0)
    d = math.hypot(dx, dy)
    if d > 1.0:
        dx /= d
        dy /= d
    return dx * ex * PUPIL_REACH_X, dy * ey * PUPIL_REACH_Y


def pupil_ellipse(
    center: tuple[float, float], eyes: EyePair, mx: float, my: float, blink_value: float
) -> tuple[float, float, float, float]:
    """``(cx, cy, rx, ry)`` of one pupil; the blink squashes it and drops it downward."""

    cx, cy = center
    dx, dy = pupil_offset(mx, my, cx, cy, eyes.ex, eyes.ey)
    br = eyes.pupil_radius
    return (cx + dx, cy + dy + eyes.ey * 0.25 * (1.0 - blink_value), br, br * blink_value)
