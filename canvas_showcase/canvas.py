from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from .canvas_state import CanvasState, ClipRect
from .renderer import Paint, Path, Renderer, TextMetrics, TextStyle
from .transform import Transform


class Canvas:
    """What widgets draw through: the transform/clip stack bound to a renderer backend."""

    def __init__(self, renderer: Renderer, state: CanvasState | None = None) -> None:
        self._renderer = renderer
        self._state = state or CanvasState()

    @property
    def renderer(self) -> Renderer:
        return self._renderer

    @property
    def state(self) -> CanvasState:
        return self._state

    # -- Stack --------------------------------------------------------------
    def begin_frame(self, base: Transform) -> None:
        self._state.begin_frame(base)

    def save(self) -> None:
        self._state.save()

    def restore(self) -> None:
        self._state.restore()

    @contextmanager
    def saved(self) -> Iterator[Canvas]:
        """``save()`` on entry and restore to the same depth on every exit path."""

        depth = self._state.depth
        self._state.save()
        try:
            yield self
        finally:
            self._state.unwind(depth)

    def reset(self) -> None:
        self._state.reset()

    def translate(self, dx: float, dy: float) -> None:
        self._state.translate(dx, dy)

    def rotate(self, theta: float) -> None:
        self._state.rotate(theta)

    def scale(self, sx: float, sy: float) -> None:
        self._state.scale(sx, sy)

    def scissor(self, x: float, y: float, w: float, h: float) -> None:
        self._state.scissor(x, y, w, h)

    def reset_scissor(self) -> None:
        self._state.reset_scissor()

    def set_global_alpha(self, alpha: float) -> None:
        self._state.set_global_alpha(alpha)

    @property
    def transform(self) -> Transform:
        return self._state.transform

    @property
    def clip(self) -> ClipRect | None:
        return self._state.clip

    # -- Drawing ------------------------------------------------------------
    def fill_path(self, path: Path, paint: Paint) -> None:
        if path.is_empty():
            return
        self._renderer.fill_path(path, paint, self._state.current)

    def stroke_path(self, path: Path, paint: Paint) -> None:
        if path.is_empty():
            return
        self._renderer.stroke_path(path, paint, self._state.current)

    def fill_text(self, x: float, y: float, text: str, style: TextStyle) -> TextMetrics:
        return self._renderer.fill_text(x, y, text, style, self._state.current)

    def measure_text(self, x: float, y: float, text: str, style: TextStyle) -> TextMetrics:
        return self._renderer.measure_text(x, y, text, style)

    def break_text(self, max_width: float, text: str, style: TextStyle) -> Sequence[tuple[int, int]]:
        return self._renderer.break_text(max_width, text, style)

    def image_size(self, image_id: int) -> tuple[int, int]:
        return self._renderer.image_size(image_id)
