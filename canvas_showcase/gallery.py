"""Time-driven thumbnail gallery: autonomous scroll, staggered reveal and scrollbar geometry.

All values are pure functions of elapsed time and item index; nothing is
carried between frames.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

THUMB_SIZE = 60.0
THUMB_GAP = 10.0
COLUMNS = 2
SCROLLBAR_INSET = 8.0


@dataclass(frozen=True, slots=True)
class ScrollbarGeometry:
    thumb_height: float
    thumb_offset: float


@dataclass(frozen=True, slots=True)
class ImageFit:
    """Cover-fit of an image into a square thumbnail, relative to the thumbnail origin."""

    x: float
    y: float
    w: float
    h: float


def scroll_phase(t: float) -> float:
    """``u(t) = (1 + cos(0.6 t)) / 2``."""

    return (1.0 + math.cos(t * 0.6)) * 0.5


def reveal_phase(t: float) -> float:
    """``u2(t) = (1 - cos(0.2 t)) / 2``."""

    return (1.0 - math.cos(t * 0.2)) * 0.5


def stack_height(count: int, thumb: float = THUMB_SIZE) -> float:
    return count / COLUMNS * (thumb + THUMB_GAP) + THUMB_GAP


def scroll_offset(count: int, view_height: float, t: float, thumb: float = THUMB_SIZE) -> float:
    """Vertical translation applied to the gallery contents."""

    return -(stack_height(count, thumb) - view_height) * scroll_phase(t)


def reveal_window(count: int) -> float:
    """``dv = 1 / (N - 1)``; a single item uses the whole sweep."""

    if count <= 1:
        return 1.0
    return 1.0 / (count - 1)


def reveal_progress(index: int, count: int, u2: float) -> float:
    """``a_i = clamp((u2 - i·dv) / dv, 0, 1)``."""

    dv = reveal_window(count)
    v = index * dv
    a = (u2 - v) / dv
    return 0.0 if a <= 0.0 else 1.0 if a >= 1.0 else a


def is_loading(progress: float) -> bool:
    return progress < 1.0


def slot_origin(index: int, x: float, y: float, thumb: float = THUMB_SIZE) -> tuple[float, float]:
    row = index // COLUMNS
    col = index % COLUMNS
    return (x + THUMB_GAP + col * (thumb + THUMB_GAP), y + THUMB_GAP + row * (thumb + THUMB_GAP))


def scrollbar(view_height: float, count: int, t: float, thumb: float = THUMB_SIZE) -> ScrollbarGeometry:
    track = view_height - SCROLLBAR_INSET
    thumb_h = (view_height / stack_height(count, thumb)) * track
    return ScrollbarGeometry(thumb_height=thumb_h, thumb_offset=(track - thumb_h) * scroll_phase(t))


def cover_fit(image_w: int, image_h: int, thumb: float = THUMB_SIZE) -> ImageFit:
    if image_w <= 0 or image_h <= 0:
        return ImageFit(0.0, 0.0, thumb, thumb)
    if image_w < image_h:
        iw = thumb
        ih = iw * image_h / image_w
        return ImageFit(0.0, -(ih - thumb) * 0.5, iw, ih)
    ih = thumb
    iw = ih * image_w / image_h
    return ImageFit(-(iw - thumb) * 0.5, 0.0, iw, ih)
