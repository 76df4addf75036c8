from __future__ import annotations

import math
from dataclasses import dataclass

from .errors import SingularTransform

_SINGULAR_EPS = 1e-12


@dataclass(frozen=True, slots=True)
class Transform:
    """2D affine map ``(x, y) -> (a*x + c*y + e, b*x + d*y + f)``.

    ``m @ n`` composes so that ``n`` is applied first: ``(m @ n).apply(p) ==
    m.apply(n.apply(p))``. Canvas operations post-multiply, so the most
    recently pushed transform acts first on local coordinates.
    """

    a: float = 1.0
    b: float = 0.0
    c: float = 0.0
    d: float = 1.0
    e: float = 0.0
    f: float = 0.0

    @classmethod
    def identity(cls) -> Transform:
        return cls()

    @classmethod
    def translation(cls, dx: float, dy: float) -> Transform:
        return cls(e=float(dx), f=float(dy))

    @classmethod
    def rotation(cls, theta: float) -> Transform:
        cs = math.cos(theta)
        sn = math.sin(theta)
        return cls(a=cs, b=sn, c=-sn, d=cs)

    @classmethod
    def scaling(cls, sx: float, sy: float) -> Transform:
        return cls(a=float(sx), d=float(sy))

    def __matmul__(self, other: Transform) -> Transform:
        if not isinstance(other, Transform):
            return NotImplemented
        return Transform(
            a=self.a * other.a + self.c * other.b,
            b=self.b * other.a + self.d * other.b,
            c=self.a * other.c + self.c * other.d,
            d=self.b * other.c + self.d * other.d,
            e=self.a * other.e + self.c * other.f + self.e,
            f=self.b * other.e + self.d * other.f + self.f,
        )

    @property
    def determinant(self) -> float:
        return self.a * self.d - self.b * self.c

    @property
    def average_scale(self) -> float:
        """Geometric mean of the axis scales; used to size strokes and fonts."""

        return math.sqrt(abs(self.determinant))

    def is_invertible(self) -> bool:
        det = self.determinant
        return math.isfinite(det) and abs(det) > _SINGULAR_EPS

    def inverse(self) -> Transform:
        det = self.determinant
        if not math.isfinite(det) or abs(det) <= _SINGULAR_EPS:
            raise SingularTransform(f"transform is not invertible (det={det!r})")
        inv = 1.0 / det
        return Transform(
            a=self.d * inv,
            b=-self.b * inv,
            c=-self.c * inv,
            d=self.a * inv,
            e=(self.c * self.f - self.d * self.e) * inv,
            f=(self.b * self.e - self.a * self.f) * inv,
        )

    def apply(self, x: float, y: float) -> tuple[float, float]:
        return (self.a * x + self.c * y + self.e, self.b * x + self.d * y + self.f)


@dataclass(frozen=True, slots=True)
class Rect:
    x: float
    y: float
    w: float
    h: float

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def corners(self) -> tuple[tuple[float, float], ...]:
        return (
            (self.x, self.y),
            (self.right, self.y),
            (self.right, self.bottom),
            (self.x, self.bottom),
        )

    def nearest_point(self, x: float, y: float) -> tuple[float, float]:
        return (min(max(x, self.x), self.right), min(max(y, self.y), self.bottom))


def bounding_rect(points: list[tuple[float, float]]) -> Rect | None:
    if not points:
        return None
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    x0 = min(xs)
    y0 = min(ys)
    return Rect(x0, y0, max(xs) - x0, max(ys) - y0)
