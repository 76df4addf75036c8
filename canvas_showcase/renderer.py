"""Backend-agnostic drawing vocabulary: paints, paths, text and the Renderer protocol."""

from __future__ import annotations

import colorsys
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Protocol, Union

from .canvas_state import CanvasFrame

RGBA = tuple[int, int, int, int]

_ARC_STEP = math.pi / 24.0
_BEZIER_SEGMENTS = 12
_ELLIPSE_SEGMENTS = 40


class FillRule(StrEnum):
    NONZERO = "nonzero"
    EVENODD = "evenodd"


class Solidity(StrEnum):
    SOLID = "solid"
    HOLE = "hole"


class LineCap(StrEnum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"


class LineJoin(StrEnum):
    MITER = "miter"
    ROUND = "round"
    BEVEL = "bevel"


class Align(StrEnum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class Baseline(StrEnum):
    TOP = "top"
    MIDDLE = "middle"
    ALPHABETIC = "alphabetic"
    BOTTOM = "bottom"


def rgba(r: int, g: int, b: int, a: int = 255) -> RGBA:
    return (int(r), int(g), int(b), int(a))


def lerp_rgba(c0: RGBA, c1: RGBA, u: float) -> RGBA:
    u = 0.0 if u <= 0.0 else 1.0 if u >= 1.0 else u
    return tuple(int(round(p + (q - p) * u)) for p, q in zip(c0, c1))  # type: ignore[return-value]


def hsla(h: float, s: float, l: float, a: float = 1.0) -> RGBA:
    """HSL(A) to 8-bit RGBA; ``h`` wraps into [0, 1)."""

    r, g, b = colorsys.hls_to_rgb(h % 1.0, min(max(l, 0.0), 1.0), min(max(s, 0.0), 1.0))
    return (int(round(r * 255)), int(round(g * 255)), int(round(b * 255)), int(round(min(max(a, 0.0), 1.0) * 255)))


# -- Paints ---------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SolidPaint:
    color: RGBA
    line_width: float = 1.0
    fill_rule: FillRule = FillRule.NONZERO
    line_cap: LineCap = LineCap.BUTT
    line_join: LineJoin = LineJoin.MITER


@dataclass(frozen=True, slots=True)
class LinearGradient:
    sx: float
    sy: float
    ex: float
    ey: float
    start: RGBA
    end: RGBA
    line_width: float = 1.0
    fill_rule: FillRule = FillRule.NONZERO


@dataclass(frozen=True, slots=True)
class RadialGradient:
    cx: float
    cy: float
    inner_radius: float
    outer_radius: float
    inner: RGBA
    outer: RGBA
    line_width: float = 1.0
    fill_rule: FillRule = FillRule.NONZERO


@dataclass(frozen=True, slots=True)
class BoxGradient:
    x: float
    y: float
    w: float
    h: float
    radius: float
    feather: float
    inner: RGBA
    outer: RGBA
    line_width: float = 1.0
    fill_rule: FillRule = FillRule.NONZERO


@dataclass(frozen=True, slots=True)
class ImagePattern:
    image_id: int
    x: float
    y: float
    w: float
    h: float
    angle: float = 0.0
    alpha: float = 1.0
    line_width: float = 1.0
    fill_rule: FillRule = FillRule.NONZERO


Paint = Union[SolidPaint, LinearGradient, RadialGradient, BoxGradient, ImagePattern]


# -- Paths ----------------------------------------------------------------------


@dataclass(slots=True)
class SubPath:
    points: list[tuple[float, float]] = field(default_factory=list)
    closed: bool = False
    solidity: Solidity = Solidity.SOLID


class Path:
    """Path builder; curves are flattened to polylines in local space as they are added."""

    def __init__(self) -> None:
        self._subpaths: list[SubPath] = []

    @property
    def subpaths(self) -> list[SubPath]:
        return self._subpaths

    def is_empty(self) -> bool:
        return not any(sp.points for sp in self._subpaths)

    def move_to(self, x: float, y: float) -> Path:
        self._subpaths.append(SubPath(points=[(float(x), float(y))]))
        return self

    def line_to(self, x: float, y: float) -> Path:
        if not self._subpaths or self._subpaths[-1].closed:
            return self.move_to(x, y)
        self._subpaths[-1].points.append((float(x), float(y)))
        return self

    def bezier_to(self, c1x: float, c1y: float, c2x: float, c2y: float, x: float, y: float) -> Path:
        if not self._subpaths or not self._subpaths[-1].points:
            return self.move_to(x, y)
        x0, y0 = self._subpaths[-1].points[-1]
        for i in range(1, _BEZIER_SEGMENTS + 1):
            t = i / _BEZIER_SEGMENTS
            mt = 1.0 - t
            px = mt * mt * mt * x0 + 3 * mt * mt * t * c1x + 3 * mt * t * t * c2x + t * t * t * x
            py = mt * mt * mt * y0 + 3 * mt * mt * t * c1y + 3 * mt * t * t * c2y + t * t * t * y
            self._subpaths[-1].points.append((px, py))
        return self

    def arc(self, cx: float, cy: float, r: float, a0: float, a1: float, direction: Solidity) -> Path:
        """Arc from ``a0`` to ``a1``; ``HOLE`` sweeps with increasing angle, ``SOLID`` decreasing."""

        da = a1 - a0
        if direction is Solidity.HOLE:
            if abs(da) >= math.tau:
                da = math.tau
            else:
                while da < 0.0:
                    da += math.tau
        else:
            if abs(da) >= math.tau:
                da = -math.tau
            else:
                while da > 0.0:
                    da -= math.tau

        segments = max(1, int(math.ceil(abs(da) / _ARC_STEP)))
        for i in range(segments + 1):
            a = a0 + da * (i / segments)
            px = cx + math.cos(a) * r
            py = cy + math.sin(a) * r
            if i == 0:
                self.line_to(px, py)
            else:
                self._subpaths[-1].points.append((px, py))
        return self

    def close(self) -> Path:
        if self._subpaths:
            self._subpaths[-1].closed = True
        return self

    def solidity(self, solidity: Solidity) -> Path:
        if self._subpaths:
            self._subpaths[-1].solidity = solidity
        return self

    def rect(self, x: float, y: float, w: float, h: float) -> Path:
        self.move_to(x, y)
        self.line_to(x, y + h)
        self.line_to(x + w, y + h)
        self.line_to(x + w, y)
        return self.close()

    def rounded_rect(self, x: float, y: float, w: float, h: float, r: float) -> Path:
        r = max(0.0, min(r, abs(w) * 0.5, abs(h) * 0.5))
        if r < 0.1:
            return self.rect(x, y, w, h)
        self.move_to(x, y + r)
        self._corner(x + r, y + h - r, r, math.pi, math.pi * 0.5)
        self._corner(x + w - r, y + h - r, r, math.pi * 0.5, 0.0)
        self._corner(x + w - r, y + r, r, 0.0, -math.pi * 0.5)
        self._corner(x + r, y + r, r, -math.pi * 0.5, -math.pi)
        return self.close()

    def ellipse(self, cx: float, cy: float, rx: float, ry: float) -> Path:
        self.move_to(cx + rx, cy)
        for i in range(1, _ELLIPSE_SEGMENTS):
            a = math.tau * i / _ELLIPSE_SEGMENTS
            self._subpaths[-1].points.append((cx + math.cos(a) * rx, cy + math.sin(a) * ry))
        return self.close()

    def circle(self, cx: float, cy: float, r: float) -> Path:
        return self.ellipse(cx, cy, r, r)

    def _corner(self, cx: float, cy: float, r: float, a0: float, a1: float) -> None:
        steps = 6
        for i in range(steps + 1):
            a = a0 + (a1 - a0) * i / steps
            self._subpaths[-1].points.append((cx + math.cos(a) * r, cy + math.sin(a) * r))

    def contains_point(self, x: float, y: float, fill_rule: FillRule = FillRule.NONZERO) -> bool:
        """Point-in-path test in local space; hole sub-paths wind in reverse."""

        winding = 0
        crossings = 0
        for sp in self._subpaths:
            pts = sp.points
            if len(pts) < 3:
                continue
            sign = -1 if sp.solidity is Solidity.HOLE else 1
            n = len(pts)
            for i in range(n):
                x0, y0 = pts[i]
                x1, y1 = pts[(i + 1) % n]
                if y0 <= y < y1 or y1 <= y < y0:
                    ix = x0 + (y - y0) * (x1 - x0) / (y1 - y0)
                    if ix > x:
                        crossings += 1
                        winding += sign if y1 > y0 else -sign
        if fill_rule is FillRule.EVENODD:
            return crossings % 2 == 1
        return winding != 0


# -- Text -----------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class TextStyle:
    font: str = "regular"
    size: float = 16.0
    color: RGBA = (255, 255, 255, 255)
    align: Align = Align.LEFT
    baseline: Baseline = Baseline.ALPHABETIC


@dataclass(frozen=True, slots=True)
class GlyphBox:
    """Measured geometry of one rendered character, in local space."""

    index: int
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class TextMetrics:
    x: float
    y: float
    width: float
    height: float
    glyphs: tuple[GlyphBox, ...] = ()


class Renderer(Protocol):
    """Capability interface consumed by the scene.

    Path and paint coordinates are local; ``frame`` carries the transform,
    scissor and global alpha that apply to the call.
    """

    def fill_path(self, path: Path, paint: Paint, frame: CanvasFrame) -> None: ...
    def stroke_path(self, path: Path, paint: Paint, frame: CanvasFrame) -> None: ...
    def fill_text(self, x: float, y: float, text: str, style: TextStyle, frame: CanvasFrame) -> TextMetrics: ...
    def measure_text(self, x: float, y: float, text: str, style: TextStyle) -> TextMetrics: ...
    def break_text(self, max_width: float, text: str, style: TextStyle) -> Sequence[tuple[int, int]]: ...
    def image_size(self, image_id: int) -> tuple[int, int]: ...


def greedy_line_breaks(max_width: float, text: str, width_of) -> list[tuple[int, int]]:
    """Break ``text`` into ``(start, end)`` index ranges no wider than ``max_width``.

    Explicit newlines always break (an empty line yields an empty range);
    otherwise lines break after whitespace, and a single word longer than the
    budget is split by character. ``width_of(s)`` measures a string.
    """

    ranges: list[tuple[int, int]] = []
    if not text:
        return ranges
    para_start = 0
    for para in text.split("\n"):
        if para == "":
            ranges.append((para_start, para_start))
            para_start += 1
            continue

        line_start = 0
        last_break = -1
        i = 0
        while i < len(para):
            ch = para[i]
            if ch.isspace():
                last_break = i
            candidate = para[line_start : i + 1].rstrip()
            if candidate and width_of(candidate) > max_width and i > line_start:
                if last_break >= line_start:
                    end = last_break
                    ranges.append((para_start + line_start, para_start + end))
                    line_start = last_break + 1
                else:
                    ranges.append((para_start + line_start, para_start + i))
                    line_start = i
                while line_start < len(para) and para[line_start] == " ":
                    line_start += 1
                last_break = -1
                i = max(i, line_start)
                continue
            i += 1
        if line_start < len(para):
            ranges.append((para_start + line_start, para_start + len(para)))
        para_start += len(para) + 1
    return ranges
