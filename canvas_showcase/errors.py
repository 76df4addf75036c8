from __future__ import annotations


class SceneError(Exception):
    """Base class for failures that are local to one widget.

    The frame driver catches these, unwinds the canvas stack and moves on to
    the next widget; nothing derived from this class may abort a frame.
    """


class StackUnderflow(SceneError):
    """``restore()`` was called with no matching ``save()``."""


class SingularTransform(SceneError):
    """The current transform cannot be inverted (determinant is zero)."""


class LayoutFailure(SceneError):
    """Text measurement or line breaking could not produce a layout."""
