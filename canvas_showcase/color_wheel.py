from __future__ import annotations

import math
from dataclasses import dataclass

from .renderer import RGBA, LinearGradient, hsla

SECTORS = 6
RING_WIDTH = 20.0
RING_MARGIN = 5.0
TRIANGLE_INSET = 6.0
RING_LIGHTNESS = 0.55


@dataclass(frozen=True, slots=True)
class RingSector:
    a0: float
    a1: float
    start_color: RGBA
    end_color: RGBA
    # Gradient endpoints on the ring's mid radius.
    start: tuple[float, float]
    end: tuple[float, float]


@dataclass(frozen=True, slots=True)
class WheelGeometry:
    cx: float
    cy: float
    inner_radius: float
    outer_radius: float

    @property
    def triangle_radius(self) -> float:
        return self.inner_radius - TRIANGLE_INSET


def hue_at(t: float) -> float:
    return math.sin(t * 0.12) % 1.0


def wheel_geometry(x: float, y: float, w: float, h: float) -> WheelGeometry:
    r1 = min(w, h) * 0.5 - RING_MARGIN
    return WheelGeometry(cx=x + w * 0.5, cy=y + h * 0.5, inner_radius=r1 - RING_WIDTH, outer_radius=r1)


def seam_epsilon(outer_radius: float) -> float:
    return 0.5 / outer_radius


def ring_sectors(geom: WheelGeometry) -> list[RingSector]:
    """Six equal sectors, each widened by the seam epsilon on both sides."""

    aeps = seam_epsilon(geom.outer_radius)
    mid = (geom.inner_radius + geom.outer_radius) * 0.5
    sectors: list[RingSector] = []
    for i in range(SECTORS):
        a0 = i / SECTORS * math.tau - aeps
        a1 = (i + 1.0) / SECTORS * math.tau + aeps
        sectors.append(
            RingSector(
                a0=a0,
                a1=a1,
                start_color=hsla(a0 / math.tau, 1.0, RING_LIGHTNESS),
                end_color=hsla(a1 / math.tau, 1.0, RING_LIGHTNESS),
                start=(geom.cx + math.cos(a0) * mid, geom.cy + math.sin(a0) * mid),
                end=(geom.cx + math.cos(a1) * mid, geom.cy + math.sin(a1) * mid),
            )
        )
    return sectors


def marker_angle(hue: float) -> float:
    return hue * math.tau


def triangle_vertices(r: float) -> tuple[tuple[float, float], tuple[float, float], tuple[float, float]]:
    """Vertices at 0°, 120° and -120° on radius ``r`` in the selector frame."""

    a = math.radians(120.0)
    b = math.radians(-120.0)
    return ((r, 0.0), (math.cos(a) * r, math.sin(a) * r), (math.cos(b) * r, math.sin(b) * r))


def triangle_paints(hue: float, r: float) -> tuple[LinearGradient, LinearGradient]:
    """The two passes filled over the same triangle: hue-to-white, then transparent-to-black."""

    (tx, ty), (ax, ay), (bx, by) = triangle_vertices(r)
    hue_pass = LinearGradient(tx, ty, ax, ay, hsla(hue, 1.0, 0.5), (255, 255, 255, 255))
    shade_pass = LinearGradient((tx + ax) * 0.5, (ty + ay) * 0.5, bx, by, (0, 0, 0, 0), (0, 0, 0, 255))
    return hue_pass, shade_pass


def selection_marker(r: float) -> tuple[float, float]:
    a = math.radians(120.0)
    return (math.cos(a) * r * 0.3, math.sin(a) * r * 0.4)


def ring_hit(geom: WheelGeometry, x: float, y: float) -> float | None:
    """Hue under ``(x, y)`` (wheel-local coordinates) when it lies on the ring, else None."""

    dx = x - geom.cx
    dy = y - geom.cy
    d = math.hypot(dx, dy)
    if not (geom.inner_radius <= d <= geom.outer_radius):
        return None
    return (math.atan2(dy, dx) / math.tau) % 1.0
