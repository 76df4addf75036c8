from __future__ import annotations

from collections import deque

from .canvas import Canvas
from .renderer import Align, Baseline, Path, SolidPaint, TextStyle

HISTORY = 100
GRAPH_W = 200.0
GRAPH_H = 35.0


class PerfGraph:
    """Rolling frame-time history rendered as a small overlay panel."""

    def __init__(self, history: int = HISTORY) -> None:
        if history <= 0:
            raise ValueError("history must be > 0")
        self._values: deque[float] = deque([0.0] * history, maxlen=history)

    def update(self, frame_time_s: float) -> None:
        self._values.append(max(0.0, float(frame_time_s)))

    def values(self) -> list[float]:
        return list(self._values)

    def average(self) -> float:
        return sum(self._values) / len(self._values)

    def fps(self) -> float:
        avg = self.average()
        return 0.0 if avg <= 0.0 else 1.0 / avg

    def render(self, canvas: Canvas, x: float, y: float) -> None:
        path = Path()
        path.rect(x, y, GRAPH_W, GRAPH_H)
        canvas.fill_path(path, SolidPaint((0, 0, 0, 128)))

        n = len(self._values)
        path = Path()
        path.move_to(x, y + GRAPH_H)
        for i, v in enumerate(self._values):
            px = x + (i / max(1, n - 1)) * GRAPH_W
            # 0.05 s of frame time spans the full panel height.
            py = y + GRAPH_H - min(1.0, v / 0.05) * GRAPH_H
            path.line_to(px, py)
        path.line_to(x + GRAPH_W, y + GRAPH_H)
        canvas.fill_path(path, SolidPaint((255, 192, 0, 128)))

        title = TextStyle(font="regular", size=12.0, color=(240, 240, 240, 192), baseline=Baseline.TOP)
        canvas.fill_text(x + 5.0, y + 5.0, "Frame time", title)

        fps = TextStyle(font="regular", size=14.0, color=(240, 240, 240, 255), align=Align.RIGHT, baseline=Baseline.TOP)
        canvas.fill_text(x + GRAPH_W - 5.0, y + 5.0, f"{self.fps():.2f} FPS", fps)

        ms = TextStyle(font="regular", size=12.0, color=(240, 240, 240, 160), align=Align.RIGHT, baseline=Baseline.BOTTOM)
        canvas.fill_text(x + GRAPH_W - 5.0, y + GRAPH_H - 5.0, f"{self.average() * 1000.0:.2f} ms", ms)
