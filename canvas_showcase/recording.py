"""Renderer backend that records draw calls instead of rasterizing.

Text is laid out with fixed-advance glyphs (half the font size wide, line
height 1.25x the font size), which keeps hit-testing reproducible without a
font engine.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from .canvas_state import CanvasFrame
from .errors import LayoutFailure
from .renderer import (
    Align,
    Baseline,
    GlyphBox,
    Paint,
    Path,
    TextMetrics,
    TextStyle,
    greedy_line_breaks,
)

ADVANCE_RATIO = 0.5
LINE_HEIGHT_RATIO = 1.25


@dataclass(frozen=True, slots=True)
class DrawCall:
    op: str  # "fill" | "stroke" | "text"
    frame: CanvasFrame
    paint: Paint | None = None
    path: Path | None = None
    text: str = ""
    style: TextStyle | None = None
    metrics: TextMetrics | None = None


class RecordingRenderer:
    def __init__(self) -> None:
        self.calls: list[DrawCall] = []
        self._images: dict[int, tuple[int, int]] = {}

    def clear(self) -> None:
        self.calls.clear()

    def create_image(self, width: int, height: int) -> int:
        image_id = len(self._images) + 1
        self._images[image_id] = (int(width), int(height))
        return image_id

    def image_size(self, image_id: int) -> tuple[int, int]:
        try:
            return self._images[image_id]
        except KeyError:
            raise LayoutFailure(f"unknown image id {image_id}") from None

    def fill_path(self, path: Path, paint: Paint, frame: CanvasFrame) -> None:
        self.calls.append(DrawCall(op="fill", frame=frame, paint=paint, path=path))

    def stroke_path(self, path: Path, paint: Paint, frame: CanvasFrame) -> None:
        self.calls.append(DrawCall(op="stroke", frame=frame, paint=paint, path=path))

    def fill_text(self, x: float, y: float, text: str, style: TextStyle, frame: CanvasFrame) -> TextMetrics:
        metrics = self.measure_text(x, y, text, style)
        self.calls.append(DrawCall(op="text", frame=frame, text=text, style=style, metrics=metrics))
        return metrics

    def measure_text(self, x: float, y: float, text: str, style: TextStyle) -> TextMetrics:
        advance = style.size * ADVANCE_RATIO
        height = style.size * LINE_HEIGHT_RATIO
        width = advance * len(text)

        if style.align is Align.CENTER:
            x -= width * 0.5
        elif style.align is Align.RIGHT:
            x -= width

        if style.baseline is Baseline.MIDDLE:
            y -= height * 0.5
        elif style.baseline is Baseline.ALPHABETIC:
            y -= style.size
        elif style.baseline is Baseline.BOTTOM:
            y -= height

        glyphs = tuple(GlyphBox(index=i, x=x + i * advance, y=y, width=advance, height=height) for i in range(len(text)))
        return TextMetrics(x=x, y=y, width=width, height=height, glyphs=glyphs)

    def break_text(self, max_width: float, text: str, style: TextStyle) -> Sequence[tuple[int, int]]:
        if max_width <= 0.0:
            raise LayoutFailure(f"cannot break text into width {max_width!r}")
        advance = style.size * ADVANCE_RATIO
        return greedy_line_breaks(max_width, text, lambda s: advance * len(s))

    # -- Query helpers for tests -------------------------------------------
    def ops(self, op: str) -> list[DrawCall]:
        return [c for c in self.calls if c.op == op]

    def texts(self) -> list[str]:
        return [c.text for c in self.calls if c.op == "text"]
