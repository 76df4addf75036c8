"""Save/restore stack of transform, scissor and paint defaults.

Every drawing call made through a :class:`~canvas_showcase.canvas.Canvas`
reads the top :class:`CanvasFrame` of this stack. Frames are immutable, so
``save()`` pushes the current frame as-is and ``restore()`` brings it back
verbatim.

Scissor semantics: each ``scissor()`` call *replaces* the active clip of the
current frame with the given rectangle expressed in the coordinate space that
is active at call time. Successive scissors are not intersected, and a nested
scissor can therefore widen the clip set by an enclosing frame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace

from .errors import StackUnderflow
from .transform import Rect, Transform, bounding_rect

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ClipRect:
    """Scissor rectangle in caller space plus the transform active when it was set."""

    rect: Rect
    transform: Transform

    def device_bounds(self) -> Rect:
        pts = [self.transform.apply(x, y) for x, y in self.rect.corners()]
        bounds = bounding_rect(pts)
        assert bounds is not None
        return bounds


@dataclass(frozen=True, slots=True)
class CanvasFrame:
    transform: Transform = Transform()
    clip: ClipRect | None = None
    alpha: float = 1.0


class CanvasState:
    def __init__(self, base: Transform | None = None) -> None:
        self._current = CanvasFrame(transform=base or Transform.identity())
        self._saved: list[CanvasFrame] = []

    @property
    def current(self) -> CanvasFrame:
        return self._current

    @property
    def transform(self) -> Transform:
        return self._current.transform

    @property
    def clip(self) -> ClipRect | None:
        return self._current.clip

    @property
    def alpha(self) -> float:
        return self._current.alpha

    @property
    def depth(self) -> int:
        return len(self._saved)

    def begin_frame(self, base: Transform) -> None:
        """Start a new frame from ``base`` with no clip and full alpha."""

        if self._saved:
            logger.warning("discarding %d unmatched save(s) from previous frame", len(self._saved))
            self._saved.clear()
        self._current = CanvasFrame(transform=base)

    def save(self) -> None:
        self._saved.append(self._current)

    def restore(self) -> None:
        if not self._saved:
            raise StackUnderflow("restore() without matching save()")
        self._current = self._saved.pop()

    def unwind(self, depth: int) -> None:
        """Pop saved frames until ``depth`` remain, restoring the frame at that level."""

        if depth < 0:
            raise ValueError("depth must be >= 0")
        while len(self._saved) > depth:
            self._current = self._saved.pop()

    def reset(self) -> None:
        self._current = CanvasFrame()

    def translate(self, dx: float, dy: float) -> None:
        self._set_transform(self._current.transform @ Transform.translation(dx, dy))

    def rotate(self, theta: float) -> None:
        self._set_transform(self._current.transform @ Transform.rotation(theta))

    def scale(self, sx: float, sy: float) -> None:
        self._set_transform(self._current.transform @ Transform.scaling(sx, sy))

    def scissor(self, x: float, y: float, w: float, h: float) -> None:
        clip = ClipRect(Rect(x, y, max(0.0, w), max(0.0, h)), self._current.transform)
        self._current = replace(self._current, clip=clip)

    def reset_scissor(self) -> None:
        self._current = replace(self._current, clip=None)

    def set_global_alpha(self, alpha: float) -> None:
        a = 0.0 if alpha <= 0.0 else 1.0 if alpha >= 1.0 else float(alpha)
        self._current = replace(self._current, alpha=a)

    def _set_transform(self, transform: Transform) -> None:
        self._current = replace(self._current, transform=transform)
