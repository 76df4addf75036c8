"""One frame of scene composition: sampled inputs and the fixed widget pass."""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from .canvas import Canvas
from .errors import SceneError
from .pointer import PointerState
from .transform import Transform

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class FrameContext:
    """Inputs sampled at frame start and held fixed while the frame is composed."""

    t: float
    width: float
    height: float
    mouse_x: float
    mouse_y: float
    view: Transform


def make_context(
    *,
    t: float,
    size: tuple[float, float],
    pointer: PointerState,
    view: Transform,
) -> FrameContext:
    return FrameContext(
        t=float(t),
        width=float(size[0]),
        height=float(size[1]),
        mouse_x=float(pointer.x),
        mouse_y=float(pointer.y),
        view=view,
    )


@dataclass(frozen=True, slots=True)
class Widget:
    name: str
    draw: Callable[[Canvas, FrameContext], None]


@dataclass(slots=True)
class FrameReport:
    drawn: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)


class FrameDriver:
    """Runs every widget in order; a widget failure is logged and never aborts the frame."""

    def __init__(self, widgets: Sequence[Widget]) -> None:
        self._widgets = list(widgets)

    def compose(self, canvas: Canvas, ctx: FrameContext) -> FrameReport:
        report = FrameReport()
        canvas.begin_frame(ctx.view)
        for widget in self._widgets:
            depth = canvas.state.depth
            canvas.save()
            try:
                widget.draw(canvas, ctx)
            except SceneError as exc:
                logger.warning("widget %r skipped this frame: %s", widget.name, exc)
                report.failed.append(widget.name)
            else:
                leaked = canvas.state.depth - (depth + 1)
                if leaked > 0:
                    logger.warning("widget %r left %d unmatched save(s)", widget.name, leaked)
                report.drawn.append(widget.name)
            finally:
                canvas.state.unwind(depth)
        return report
