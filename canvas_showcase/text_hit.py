"""Caret hit-testing against laid-out lines of text, plus the tooltip fade rule.

Everything here works in the paragraph's local coordinate frame; callers map
the device pointer through the canvas transform before calling in.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from .renderer import GlyphBox, TextMetrics, TextStyle
from .transform import Rect

# Glyphs count as "closer to their right edge": the caret boundary of each
# glyph sits at 70% of its width.
CARET_RIGHT_WEIGHT = 0.7
TOOLTIP_FADE_DISTANCE = 30.0


class TextLayout(Protocol):
    def break_text(self, max_width: float, text: str, style: TextStyle) -> Sequence[tuple[int, int]]: ...
    def measure_text(self, x: float, y: float, text: str, style: TextStyle) -> TextMetrics: ...


@dataclass(frozen=True, slots=True)
class LineLayout:
    index: int
    start: int
    end: int
    x: float
    y: float
    width: float
    height: float
    glyphs: tuple[GlyphBox, ...]


@dataclass(frozen=True, slots=True)
class CaretHit:
    line_index: int
    caret_x: float
    line_y: float
    line_height: float

    @property
    def line_number(self) -> int:
        return self.line_index + 1

    @property
    def gutter_y(self) -> float:
        return self.line_y + self.line_height * 0.5


def layout_lines(
    layout: TextLayout,
    x: float,
    y: float,
    width: float,
    text: str,
    style: TextStyle,
) -> list[LineLayout]:
    """Break ``text`` to ``width`` and stack the lines downward from ``(x, y)``.

    ``LayoutFailure`` from the layout capability propagates to the caller.
    """

    lines: list[LineLayout] = []
    cursor_y = y
    for idx, (start, end) in enumerate(layout.break_text(width, text, style)):
        metrics = layout.measure_text(x, cursor_y, text[start:end], style)
        lines.append(
            LineLayout(
                index=idx,
                start=start,
                end=end,
                x=x,
                y=cursor_y,
                width=metrics.width,
                height=metrics.height,
                glyphs=metrics.glyphs,
            )
        )
        cursor_y += metrics.height
    return lines


def line_is_hit(line: LineLayout, x: float, width: float, mx: float, my: float) -> bool:
    return x < mx < x + width and line.y <= my < line.y + line.height


def resolve_caret_x(line_x: float, line_width: float, glyphs: Sequence[GlyphBox], mx: float) -> float:
    """Pixel x of the caret for a pointer at ``mx`` on a line starting at ``line_x``."""

    px = line_x
    for glyph in glyphs:
        x0 = glyph.x
        x1 = x0 + glyph.width
        gx = x0 * (1.0 - CARET_RIGHT_WEIGHT) + x1 * CARET_RIGHT_WEIGHT
        if px <= mx < gx:
            return x0
        px = gx

    if mx < line_x + line_width * 0.5:
        return line_x
    return line_x + line_width


def hit_test_lines(lines: Sequence[LineLayout], x: float, width: float, mx: float, my: float) -> CaretHit | None:
    for line in lines:
        if line_is_hit(line, x, width, mx, my):
            return CaretHit(
                line_index=line.index,
                caret_x=resolve_caret_x(line.x, line.width, line.glyphs, mx),
                line_y=line.y,
                line_height=line.height,
            )
    return None


def text_block_bounds(lines: Sequence[LineLayout], x: float, y: float) -> Rect:
    width = max((line.width for line in lines), default=0.0)
    height = sum(line.height for line in lines)
    return Rect(x, y, width, height)


def tooltip_alpha(mx: float, my: float, box: Rect) -> float:
    """0 while the pointer touches ``box``, rising linearly to 1 at 30 units away."""

    nx, ny = box.nearest_point(mx, my)
    gx = nx - mx
    gy = ny - my
    a = (gx * gx + gy * gy) ** 0.5 / TOOLTIP_FADE_DISTANCE
    return 0.0 if a <= 0.0 else 1.0 if a >= 1.0 else a
