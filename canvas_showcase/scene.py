"""The showcase scene: every widget drawn through the backend-agnostic Canvas.

Widget functions only build paths and paints; animated and interactive values
come from the pure helpers in ``gallery``, ``color_wheel``, ``eyes`` and
``text_hit``.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, replace

from .canvas import Canvas
from .color_wheel import (
    hue_at,
    marker_angle,
    ring_hit,
    ring_sectors,
    selection_marker,
    triangle_paints,
    triangle_vertices,
    wheel_geometry,
)
from .errors import LayoutFailure
from .eyes import blink, eye_pair, pupil_ellipse
from .frame import FrameContext, Widget
from .gallery import (
    THUMB_SIZE,
    cover_fit,
    is_loading,
    reveal_phase,
    reveal_progress,
    scroll_offset,
    scrollbar,
    slot_origin,
)
from .perf import PerfGraph
from .pointer import try_map_to_local
from .renderer import (
    RGBA,
    Align,
    Baseline,
    BoxGradient,
    FillRule,
    ImagePattern,
    LinearGradient,
    LineCap,
    LineJoin,
    Path,
    RadialGradient,
    SolidPaint,
    Solidity,
    TextStyle,
)
from .text_hit import hit_test_lines, layout_lines, text_block_bounds, tooltip_alpha

logger = logging.getLogger(__name__)

PARAGRAPH_TEXT = (
    "This is longer chunk of text.\n\nWould have used lorem ipsum but she was busy jumping over "
    "the lazy dog with the fox and all the men who came to the aid of the party."
)
HOVER_TEXT = "Hover your mouse over the text to see calculated caret position."
CARET_COLOR: RGBA = (255, 192, 0, 255)
SCREENSHOT_SIZE = 512.0


@dataclass(slots=True)
class ScreenshotSlot:
    """Image handle of the last captured frame, if any."""

    image_id: int | None = None


@dataclass(frozen=True, slots=True)
class SceneAssets:
    images: tuple[int, ...]


def _local_pointer(canvas: Canvas, ctx: FrameContext) -> tuple[float, float] | None:
    return try_map_to_local(canvas.transform, ctx.mouse_x, ctx.mouse_y)


# -- Vignettes -------------------------------------------------------------------


def draw_graph(canvas: Canvas, x: float, y: float, w: float, h: float, t: float) -> None:
    dx = w / 5.0
    samples = [
        (1.0 + math.sin(t * 1.2345 + math.cos(t * 0.33457) * 0.44)) * 0.5,
        (1.0 + math.sin(t * 0.68363 + math.cos(t * 1.3) * 1.55)) * 0.5,
        (1.0 + math.sin(t * 1.1642 + math.cos(t * 0.33457) * 1.24)) * 0.5,
        (1.0 + math.sin(t * 0.56345 + math.cos(t * 1.63) * 0.14)) * 0.5,
        (1.0 + math.sin(t * 1.6245 + math.cos(t * 0.254) * 0.3)) * 0.5,
        (1.0 + math.sin(t * 0.345 + math.cos(t * 0.03) * 0.6)) * 0.5,
    ]
    sx = [x + i * dx for i in range(6)]
    sy = [y + h * s * 0.8 for s in samples]

    # Graph background
    path = Path()
    path.move_to(sx[0], sy[0])
    for i in range(1, 6):
        path.bezier_to(sx[i - 1] + dx * 0.5, sy[i - 1], sx[i] - dx * 0.5, sy[i], sx[i], sy[i])
    path.line_to(x + w, y + h)
    path.line_to(x, y + h)
    canvas.fill_path(path, LinearGradient(x, y, x, y + h, (0, 160, 192, 0), (0, 160, 192, 64)))

    # Graph line
    path = Path()
    path.move_to(sx[0], sy[0] + 2.0)
    for i in range(1, 6):
        path.bezier_to(sx[i - 1] + dx * 0.5, sy[i - 1], sx[i] - dx * 0.5, sy[i], sx[i], sy[i])
    canvas.stroke_path(path, SolidPaint((0, 160, 192, 255), line_width=3.0))

    # Sample points
    for px, py in zip(sx, sy):
        path = Path()
        path.rect(px - 10.0, py - 10.0 + 2.0, 20.0, 20.0)
        canvas.fill_path(path, RadialGradient(px, py + 2.0, 3.0, 8.0, (0, 0, 0, 32), (0, 0, 0, 0)))

    path = Path()
    for px, py in zip(sx, sy):
        path.circle(px, py, 4.0)
    canvas.fill_path(path, SolidPaint((0, 160, 192, 255)))

    path = Path()
    for px, py in zip(sx, sy):
        path.circle(px, py, 2.0)
    canvas.fill_path(path, SolidPaint((220, 220, 220, 255)))


def draw_eyes(
    canvas: Canvas,
    x: float,
    y: float,
    w: float,
    h: float,
    pointer: tuple[float, float] | None,
    t: float,
) -> None:
    eyes = eye_pair(x, y, w, h)
    (lx, ly), (rx, ry) = eyes.left, eyes.right
    ex, ey = eyes.ex, eyes.ey
    b = blink(t)

    path = Path()
    path.ellipse(lx + 3.0, ly + 16.0, ex, ey)
    path.ellipse(rx + 3.0, ry + 16.0, ex, ey)
    canvas.fill_path(path, LinearGradient(x, y + h * 0.5, x + w * 0.1, y + h, (0, 0, 0, 32), (0, 0, 0, 16)))

    path = Path()
    path.ellipse(lx, ly, ex, ey)
    path.ellipse(rx, ry, ex, ey)
    canvas.fill_path(
        path,
        LinearGradient(x, y + h * 0.25, x + w * 0.1, y + h, (220, 220, 220, 255), (128, 128, 128, 255)),
    )

    # Without a usable pointer the pupils rest at the socket centers.
    for center in (eyes.left, eyes.right):
        mx, my = pointer if pointer is not None else center
        pcx, pcy, prx, pry = pupil_ellipse(center, eyes, mx, my, b)
        path = Path()
        path.ellipse(pcx, pcy, prx, pry)
        canvas.fill_path(path, SolidPaint((32, 32, 32, 255)))

    for cx, cy in (eyes.left, eyes.right):
        path = Path()
        path.ellipse(cx, cy, ex, ey)
        canvas.fill_path(
            path,
            RadialGradient(cx - ex * 0.25, cy - ey * 0.5, ex * 0.1, ex * 0.75, (255, 255, 255, 128), (255, 255, 255, 0)),
        )


def draw_paragraph(
    canvas: Canvas,
    x: float,
    y: float,
    width: float,
    pointer: tuple[float, float] | None,
) -> None:
    style = TextStyle(font="regular", size=14.0, color=(255, 255, 255, 255), baseline=Baseline.TOP)

    try:
        lines = layout_lines(canvas, x, y, width, PARAGRAPH_TEXT, style)
    except LayoutFailure as exc:
        logger.debug("paragraph layout skipped: %s", exc)
        lines = []

    for line in lines:
        canvas.fill_text(line.x, line.y, PARAGRAPH_TEXT[line.start : line.end], style)

    hit = None if pointer is None else hit_test_lines(lines, x, width, pointer[0], pointer[1])
    if hit is not None:
        path = Path()
        path.rect(hit.caret_x, hit.line_y, 1.0, hit.line_height)
        canvas.fill_path(path, SolidPaint(CARET_COLOR))
        _draw_gutter_badge(canvas, x - 10.0, hit.gutter_y, hit.line_number)

    block = text_block_bounds(lines, x, y)
    _draw_tooltip(canvas, x, block.bottom + 20.0, pointer)


def _draw_gutter_badge(canvas: Canvas, x: float, y: float, number: int) -> None:
    style = TextStyle(font="regular", size=12.0, color=CARET_COLOR, align=Align.RIGHT, baseline=Baseline.MIDDLE)
    label = f"{number}"
    m = canvas.measure_text(x, y, label, style)
    path = Path()
    path.rounded_rect(m.x - 4.0, m.y - 2.0, m.width + 8.0, m.height + 4.0, (m.height + 4.0) / 2.0 - 1.0)
    canvas.fill_path(path, SolidPaint(CARET_COLOR))
    ink = TextStyle(font="regular", size=12.0, color=(32, 32, 32, 255), align=Align.RIGHT, baseline=Baseline.MIDDLE)
    canvas.fill_text(x, y, label, ink)


def _draw_tooltip(canvas: Canvas, x: float, y: float, pointer: tuple[float, float] | None) -> None:
    style = TextStyle(font="regular", size=11.0, color=(220, 220, 220, 255), baseline=Baseline.TOP)
    try:
        lines = layout_lines(canvas, x, y, 150.0, HOVER_TEXT, style)
    except LayoutFailure as exc:
        logger.debug("tooltip layout skipped: %s", exc)
        return

    box = text_block_bounds(lines, x, y)
    alpha = 1.0 if pointer is None else tooltip_alpha(pointer[0], pointer[1], box)

    with canvas.saved():
        # Fade the tooltip out when close to it.
        canvas.set_global_alpha(alpha)

        path = Path()
        path.rounded_rect(x - 2.0, y - 2.0, box.w + 4.0, box.h + 4.0, 3.0)
        px = x + box.w / 2.0
        path.move_to(px, y - 10.0)
        path.line_to(px + 7.0, y + 1.0)
        path.line_to(px - 7.0, y + 1.0)
        path.close()
        canvas.fill_path(path, SolidPaint((220, 220, 220, 255)))

        ink = TextStyle(font="regular", size=11.0, color=(0, 0, 0, 220), baseline=Baseline.TOP)
        for line in lines:
            canvas.fill_text(line.x, line.y, HOVER_TEXT[line.start : line.end], ink)


def draw_colorwheel(
    canvas: Canvas,
    x: float,
    y: float,
    w: float,
    h: float,
    t: float,
    ctx: FrameContext,
) -> None:
    hue = hue_at(t)
    geom = wheel_geometry(x, y, w, h)
    cx, cy = geom.cx, geom.cy
    r0, r1 = geom.inner_radius, geom.outer_radius

    for sector in ring_sectors(geom):
        path = Path()
        path.arc(cx, cy, r0, sector.a0, sector.a1, Solidity.HOLE)
        path.arc(cx, cy, r1, sector.a1, sector.a0, Solidity.SOLID)
        path.close()
        paint = LinearGradient(
            sector.start[0], sector.start[1], sector.end[0], sector.end[1], sector.start_color, sector.end_color
        )
        canvas.fill_path(path, paint)

    local = _local_pointer(canvas, ctx)
    ring_hovered = local is not None and ring_hit(geom, local[0], local[1]) is not None

    path = Path()
    path.circle(cx, cy, r0 - 0.5)
    path.circle(cx, cy, r1 + 0.5)
    outline = (255, 255, 255, 160) if ring_hovered else (0, 0, 0, 64)
    canvas.stroke_path(path, SolidPaint(outline, line_width=1.0))

    # Selector
    with canvas.saved():
        canvas.translate(cx, cy)
        canvas.rotate(marker_angle(hue))

        # Pointer in the rotated selector frame, for the marker hover state.
        sel = _local_pointer(canvas, ctx)
        marker_hovered = sel is not None and r0 - 1.0 <= sel[0] <= r1 + 1.0 and -3.0 <= sel[1] <= 3.0

        path = Path()
        path.rect(r0 - 1.0, -3.0, r1 - r0 + 2.0, 6.0)
        marker_alpha = 255 if marker_hovered else 192
        canvas.stroke_path(path, SolidPaint((255, 255, 255, marker_alpha), line_width=2.0))

        path = Path()
        path.rect(r0 - 2.0 - 10.0, -4.0 - 10.0, r1 - r0 + 4.0 + 20.0, 8.0 + 20.0)
        path.rect(r0 - 2.0, -4.0, r1 - r0 + 4.0, 8.0)
        path.solidity(Solidity.HOLE)
        canvas.fill_path(path, BoxGradient(r0 - 3.0, -5.0, r1 - r0 + 6.0, 10.0, 2.0, 4.0, (0, 0, 0, 128), (0, 0, 0, 0)))

        # Center triangle
        r = geom.triangle_radius
        (tx, ty), (ax, ay), (bx, by) = triangle_vertices(r)
        path = Path()
        path.move_to(tx, ty)
        path.line_to(ax, ay)
        path.line_to(bx, by)
        path.close()
        hue_pass, shade_pass = triangle_paints(hue, r)
        canvas.fill_path(path, hue_pass)
        canvas.fill_path(path, shade_pass)
        canvas.stroke_path(path, SolidPaint((0, 0, 0, 64)))

        # Select circle on triangle
        sx, sy = selection_marker(r)
        path = Path()
        path.circle(sx, sy, 5.0)
        canvas.stroke_path(path, SolidPaint((255, 255, 255, 192), line_width=2.0))

        path = Path()
        path.rect(sx - 20.0, sy - 20.0, 40.0, 40.0)
        path.circle(sx, sy, 7.0)
        path.solidity(Solidity.HOLE)
        canvas.fill_path(path, RadialGradient(sx, sy, 7.0, 9.0, (0, 0, 0, 64), (0, 0, 0, 0)))


def draw_lines(canvas: Canvas, x: float, y: float, w: float, t: float) -> None:
    pad = 5.0
    s = w / 9.0 - pad * 2.0
    joins = (LineJoin.MITER, LineJoin.ROUND, LineJoin.BEVEL)
    caps = (LineCap.BUTT, LineCap.ROUND, LineCap.SQUARE)

    pts = (
        (-s * 0.25 + math.cos(t * 0.3) * s * 0.5, math.sin(t * 0.3) * s * 0.5),
        (-s * 0.25, 0.0),
        (s * 0.25, 0.0),
        (s * 0.25 + math.cos(-t * 0.3) * s * 0.5, math.sin(-t * 0.3) * s * 0.5),
    )

    for i, cap in enumerate(caps):
        for j, join in enumerate(joins):
            fx = x + s * 0.5 + (i * 3.0 + j) / 9.0 * w + pad
            fy = y - s * 0.5 + pad

            path = Path()
            path.move_to(fx + pts[0][0], fy + pts[0][1])
            for px, py in pts[1:]:
                path.line_to(fx + px, fy + py)

            canvas.stroke_path(path, SolidPaint((0, 0, 0, 160), line_width=s * 0.3, line_cap=cap, line_join=join))
            canvas.stroke_path(
                path,
                SolidPaint((0, 192, 255, 255), line_width=1.0, line_cap=LineCap.BUTT, line_join=LineJoin.BEVEL),
            )


def draw_widths(canvas: Canvas, x: float, y: float, width: float) -> None:
    for i in range(20):
        path = Path()
        path.move_to(x, y)
        path.line_to(x + width, y + width * 0.3)
        canvas.stroke_path(path, SolidPaint((0, 0, 0, 255), line_width=(i + 0.5) * 0.1))
        y += 10.0


def draw_caps(canvas: Canvas, x: float, y: float, width: float) -> None:
    line_width = 8.0

    path = Path()
    path.rect(x - line_width / 2.0, y, width + line_width, 40.0)
    canvas.fill_path(path, SolidPaint((255, 255, 255, 32)))

    path = Path()
    path.rect(x, y, width, 40.0)
    canvas.fill_path(path, SolidPaint((255, 255, 255, 32)))

    for i, cap in enumerate((LineCap.BUTT, LineCap.ROUND, LineCap.SQUARE)):
        path = Path()
        path.move_to(x, y + i * 10.0 + 5.0)
        path.line_to(x + width, y + i * 10.0 + 5.0)
        canvas.stroke_path(path, SolidPaint((0, 0, 0, 255), line_width=line_width, line_cap=cap))


def star_path() -> Path:
    path = Path()
    path.move_to(50.0, 0.0)
    path.line_to(21.0, 90.0)
    path.line_to(98.0, 35.0)
    path.line_to(2.0, 35.0)
    path.line_to(79.0, 90.0)
    return path.close()


def draw_fills(canvas: Canvas, x: float, y: float, ctx: FrameContext) -> None:
    canvas.translate(x, y)
    for rule in (FillRule.EVENODD, FillRule.NONZERO):
        path = star_path()
        local = _local_pointer(canvas, ctx)
        inside = local is not None and path.contains_point(local[0], local[1], rule)
        color = (220, 220, 220, 255) if inside else (220, 220, 220, 120)
        canvas.fill_path(path, SolidPaint(color, fill_rule=rule))
        canvas.translate(100.0, 0.0)


def draw_scissor(canvas: Canvas, x: float, y: float, t: float) -> None:
    # Draw first rect and set scissor to its area.
    canvas.translate(x, y)
    canvas.rotate(math.radians(5.0))

    path = Path()
    path.rect(-20.0, -20.0, 60.0, 40.0)
    canvas.fill_path(path, SolidPaint((255, 0, 0, 255)))

    canvas.scissor(-20.0, -20.0, 60.0, 40.0)

    # Second rectangle with offset and rotation.
    canvas.translate(40.0, 0.0)
    canvas.rotate(t)

    # The intended second rectangle without any scissoring.
    with canvas.saved():
        canvas.reset_scissor()
        path = Path()
        path.rect(-20.0, -10.0, 60.0, 30.0)
        canvas.fill_path(path, SolidPaint((255, 128, 0, 64)))

    # The same rectangle clipped by the first one's scissor.
    path = Path()
    path.rect(-20.0, -10.0, 60.0, 30.0)
    canvas.fill_path(path, SolidPaint((255, 128, 0, 255)))


def draw_spinner(canvas: Canvas, cx: float, cy: float, r: float, t: float) -> None:
    a0 = 0.0 + t * 6.0
    a1 = math.pi + t * 6.0
    r0 = r
    r1 = r * 0.75

    path = Path()
    path.arc(cx, cy, r0, a0, a1, Solidity.HOLE)
    path.arc(cx, cy, r1, a1, a0, Solidity.SOLID)
    path.close()

    ax = cx + math.cos(a0) * (r0 + r1) * 0.5
    ay = cy + math.sin(a0) * (r0 + r1) * 0.5
    bx = cx + math.cos(a1) * (r0 + r1) * 0.5
    by = cy + math.sin(a1) * (r0 + r1) * 0.5
    canvas.fill_path(path, LinearGradient(ax, ay, bx, by, (0, 0, 0, 0), (0, 0, 0, 128)))


def draw_thumbnails(
    canvas: Canvas,
    x: float,
    y: float,
    w: float,
    h: float,
    images: Sequence[int],
    t: float,
) -> None:
    corner_radius = 3.0
    thumb = THUMB_SIZE
    arry = 30.5
    count = len(images)

    # Drop shadow
    path = Path()
    path.rect(x - 10.0, y - 10.0, w + 20.0, h + 30.0)
    path.rounded_rect(x, y, w, h, corner_radius)
    path.solidity(Solidity.HOLE)
    canvas.fill_path(path, BoxGradient(x, y + 4.0, w, h, corner_radius * 2.0, 20.0, (0, 0, 0, 128), (0, 0, 0, 0)))

    # Window
    path = Path()
    path.rounded_rect(x, y, w, h, corner_radius)
    path.move_to(x - 10.0, y + arry)
    path.line_to(x + 1.0, y + arry - 11.0)
    path.line_to(x + 1.0, y + arry + 11.0)
    path.close()
    canvas.fill_path(path, SolidPaint((200, 200, 200, 255)))

    u2 = reveal_phase(t)
    with canvas.saved():
        canvas.scissor(x, y, w, h)
        canvas.translate(0.0, scroll_offset(count, h, t, thumb))

        for i, image in enumerate(images):
            tx, ty = slot_origin(i, x, y, thumb)
            try:
                imgw, imgh = canvas.image_size(image)
            except LayoutFailure:
                imgw, imgh = 0, 0
            fit = cover_fit(imgw, imgh, thumb)

            a = reveal_progress(i, count, u2)
            if is_loading(a):
                draw_spinner(canvas, tx + thumb / 2.0, ty + thumb / 2.0, thumb * 0.25, t)

            path = Path()
            path.rounded_rect(tx, ty, thumb, thumb, 5.0)
            canvas.fill_path(path, ImagePattern(image, tx + fit.x, ty + fit.y, fit.w, fit.h, 0.0, a))

            path = Path()
            path.rect(tx - 5.0, ty - 5.0, thumb + 10.0, thumb + 10.0)
            path.rounded_rect(tx, ty, thumb, thumb, 6.0)
            path.solidity(Solidity.HOLE)
            canvas.fill_path(
                path, BoxGradient(tx - 1.0, ty, thumb + 2.0, thumb + 2.0, 5.0, 3.0, (0, 0, 0, 128), (0, 0, 0, 0))
            )

            path = Path()
            path.rounded_rect(tx + 0.5, ty + 0.5, thumb - 1.0, thumb - 1.0, 4.0 - 0.5)
            canvas.stroke_path(path, SolidPaint((255, 255, 255, 192)))

    # Hide fades
    path = Path()
    path.rect(x + 4.0, y, w - 8.0, 6.0)
    canvas.fill_path(path, LinearGradient(x, y, x, y + 6.0, (200, 200, 200, 255), (200, 200, 200, 0)))

    path = Path()
    path.rect(x + 4.0, y + h - 6.0, w - 8.0, 6.0)
    canvas.fill_path(path, LinearGradient(x, y + h, x, y + h - 6.0, (200, 200, 200, 255), (200, 200, 200, 0)))

    # Scroll bar
    path = Path()
    path.rounded_rect(x + w - 12.0, y + 4.0, 8.0, h - 8.0, 3.0)
    canvas.fill_path(path, BoxGradient(x + w - 12.0 + 1.0, y + 4.0 + 1.0, 8.0, h - 8.0, 3.0, 4.0, (0, 0, 0, 32), (0, 0, 0, 92)))

    bar = scrollbar(h, count, t, thumb)
    path = Path()
    path.rounded_rect(x + w - 12.0 + 1.0, y + 4.0 + 1.0 + bar.thumb_offset, 8.0 - 2.0, bar.thumb_height - 2.0, 2.0)
    canvas.fill_path(
        path,
        BoxGradient(
            x + w - 12.0 - 1.0,
            y + 4.0 + bar.thumb_offset - 1.0,
            8.0,
            bar.thumb_height,
            3.0,
            4.0,
            (220, 220, 220, 255),
            (128, 128, 128, 255),
        ),
    )


# -- Widgets ---------------------------------------------------------------------


def _draw_icon(canvas: Canvas, name: str, cx: float, cy: float, size: float, color: RGBA) -> None:
    s = size * 0.5
    path = Path()
    if name == "search":
        path.circle(cx - s * 0.15, cy - s * 0.15, s * 0.55)
        path.move_to(cx + s * 0.25, cy + s * 0.25)
        path.line_to(cx + s * 0.75, cy + s * 0.75)
    elif name == "close":
        path.move_to(cx - s * 0.5, cy - s * 0.5)
        path.line_to(cx + s * 0.5, cy + s * 0.5)
        path.move_to(cx + s * 0.5, cy - s * 0.5)
        path.line_to(cx - s * 0.5, cy + s * 0.5)
    elif name == "chevron":
        path.move_to(cx - s * 0.3, cy - s * 0.6)
        path.line_to(cx + s * 0.3, cy)
        path.line_to(cx - s * 0.3, cy + s * 0.6)
    elif name == "check":
        path.move_to(cx - s * 0.6, cy)
        path.line_to(cx - s * 0.15, cy + s * 0.5)
        path.line_to(cx + s * 0.6, cy - s * 0.55)
    elif name == "login":
        path.move_to(cx - s * 0.7, cy)
        path.line_to(cx + s * 0.3, cy)
        path.move_to(cx, cy - s * 0.35)
        path.line_to(cx + s * 0.35, cy)
        path.line_to(cx, cy + s * 0.35)
    elif name == "trash":
        path.rect(cx - s * 0.4, cy - s * 0.35, s * 0.8, s * 0.95)
        path.move_to(cx - s * 0.6, cy - s * 0.5)
        path.line_to(cx + s * 0.6, cy - s * 0.5)
    else:
        logger.debug("unknown icon %r", name)
        return
    canvas.stroke_path(path, SolidPaint(color, line_width=max(1.0, size * 0.08), line_cap=LineCap.ROUND))


def draw_window(canvas: Canvas, title: str, x: float, y: float, w: float, h: float) -> None:
    corner_radius = 3.0

    # Window
    path = Path()
    path.rounded_rect(x, y, w, h, corner_radius)
    canvas.fill_path(path, SolidPaint((28, 30, 34, 192)))

    # Drop shadow
    path = Path()
    path.rect(x - 10.0, y - 10.0, w + 20.0, h + 30.0)
    path.rounded_rect(x, y, w, h, corner_radius)
    path.solidity(Solidity.HOLE)
    canvas.fill_path(path, BoxGradient(x, y + 2.0, w, h, corner_radius * 2.0, 10.0, (0, 0, 0, 128), (0, 0, 0, 0)))

    # Header
    path = Path()
    path.rounded_rect(x + 1.0, y + 1.0, w - 2.0, 30.0, corner_radius - 1.0)
    canvas.fill_path(path, LinearGradient(x, y, x, y + 15.0, (255, 255, 255, 8), (0, 0, 0, 16)))

    path = Path()
    path.move_to(x + 0.5, y + 0.5 + 30.0)
    path.line_to(x + 0.5 + w - 1.0, y + 0.5 + 30.0)
    canvas.stroke_path(path, SolidPaint((0, 0, 0, 32)))

    canvas.fill_text(
        x + w / 2.0,
        y + 19.0,
        title,
        TextStyle(font="bold", size=16.0, color=(220, 220, 220, 160), align=Align.CENTER),
    )


def draw_search_box(canvas: Canvas, text: str, x: float, y: float, w: float, h: float) -> None:
    corner_radius = h / 2.0 - 1.0

    path = Path()
    path.rounded_rect(x, y, w, h, corner_radius)
    canvas.fill_path(path, BoxGradient(x, y + 1.5, w, h, h / 2.0, 5.0, (0, 0, 0, 16), (0, 0, 0, 92)))

    _draw_icon(canvas, "search", x + h * 0.55, y + h * 0.55, h * 0.6, (255, 255, 255, 64))
    canvas.fill_text(
        x + h,
        y + h * 0.5,
        text,
        TextStyle(font="regular", size=16.0, color=(255, 255, 255, 32), baseline=Baseline.MIDDLE),
    )
    _draw_icon(canvas, "close", x + w - h * 0.55, y + h * 0.45, h * 0.5, (255, 255, 255, 32))


def draw_drop_down(canvas: Canvas, text: str, x: float, y: float, w: float, h: float) -> None:
    corner_radius = 4.0

    path = Path()
    path.rounded_rect(x + 1.0, y + 1.0, w - 2.0, h - 2.0, corner_radius)
    canvas.fill_path(path, LinearGradient(x, y, x, y + h, (255, 255, 255, 16), (0, 0, 0, 16)))

    path = Path()
    path.rounded_rect(x + 0.5, y + 0.5, w - 1.0, h - 1.0, corner_radius - 0.5)
    canvas.stroke_path(path, SolidPaint((0, 0, 0, 48)))

    canvas.fill_text(
        x + h * 0.3,
        y + h * 0.5,
        text,
        TextStyle(font="regular", size=16.0, color=(255, 255, 255, 160), baseline=Baseline.MIDDLE),
    )
    _draw_icon(canvas, "chevron", x + w - h * 0.5, y + h * 0.45, h * 0.5, (255, 255, 255, 64))


def draw_label(canvas: Canvas, text: str, x: float, y: float, h: float) -> None:
    canvas.fill_text(
        x,
        y + h * 0.5,
        text,
        TextStyle(font="regular", size=14.0, color=(255, 255, 255, 128), baseline=Baseline.MIDDLE),
    )


def _draw_edit_box_base(canvas: Canvas, x: float, y: float, w: float, h: float) -> None:
    path = Path()
    path.rounded_rect(x + 1.0, y + 1.0, w - 2.0, h - 2.0, 3.0)
    canvas.fill_path(path, BoxGradient(x + 1.0, y + 2.5, w - 2.0, h - 2.0, 3.0, 4.0, (255, 255, 255, 32), (32, 32, 32, 32)))

    path = Path()
    path.rounded_rect(x + 0.5, y + 0.5, w - 1.0, h - 1.0, 3.5)
    canvas.stroke_path(path, SolidPaint((0, 0, 0, 48)))


def draw_edit_box(canvas: Canvas, text: str, x: float, y: float, w: float, h: float) -> None:
    _draw_edit_box_base(canvas, x, y, w, h)
    canvas.fill_text(
        x + h * 0.5,
        y + h * 0.5,
        text,
        TextStyle(font="regular", size=16.0, color=(255, 255, 255, 64), baseline=Baseline.MIDDLE),
    )


def draw_edit_box_num(canvas: Canvas, text: str, units: str, x: float, y: float, w: float, h: float) -> None:
    _draw_edit_box_base(canvas, x, y, w, h)

    units_style = TextStyle(font="regular", size=14.0, color=(255, 255, 255, 64), align=Align.RIGHT, baseline=Baseline.MIDDLE)
    units_w = canvas.measure_text(0.0, 0.0, units, units_style).width
    canvas.fill_text(x + w - h * 0.3, y + h * 0.5, units, units_style)

    value_style = TextStyle(font="regular", size=16.0, color=(255, 255, 255, 128), align=Align.RIGHT, baseline=Baseline.MIDDLE)
    canvas.fill_text(x + w - units_w - h * 0.5, y + h * 0.5, text, value_style)


def draw_check_box(canvas: Canvas, text: str, x: float, y: float, h: float) -> None:
    canvas.fill_text(
        x + 28.0,
        y + h * 0.5,
        text,
        TextStyle(font="regular", size=14.0, color=(255, 255, 255, 160), baseline=Baseline.MIDDLE),
    )

    box_y = y + math.floor(h * 0.5) - 9.0
    path = Path()
    path.rounded_rect(x + 1.0, box_y, 18.0, 18.0, 3.0)
    canvas.fill_path(path, BoxGradient(x + 1.0, box_y + 1.0, 18.0, 18.0, 3.0, 3.0, (0, 0, 0, 32), (0, 0, 0, 92)))

    _draw_icon(canvas, "check", x + 9.0 + 1.0, y + h * 0.5, 16.0, (255, 255, 255, 128))


def draw_button(
    canvas: Canvas,
    icon: str | None,
    text: str,
    x: float,
    y: float,
    w: float,
    h: float,
    color: RGBA,
) -> None:
    corner_radius = 4.0
    transparent = color[3] == 0
    a = 16 if transparent else 32

    path = Path()
    path.rounded_rect(x + 1.0, y + 1.0, w - 2.0, h - 2.0, corner_radius - 1.0)
    if not transparent:
        canvas.fill_path(path, SolidPaint(color))
    canvas.fill_path(path, LinearGradient(x, y, x, y + h, (255, 255, 255, a), (0, 0, 0, a)))

    path = Path()
    path.rounded_rect(x + 0.5, y + 0.5, w - 1.0, h - 1.0, corner_radius - 0.5)
    canvas.stroke_path(path, SolidPaint((0, 0, 0, 48)))

    label_style = TextStyle(font="bold", size=15.0, color=(255, 255, 255, 96), baseline=Baseline.MIDDLE)
    tw = canvas.measure_text(0.0, 0.0, text, label_style).width

    iw = 0.0
    if icon is not None:
        icon_size = h * 0.55
        iw = icon_size + h * 0.15
        _draw_icon(canvas, icon, x + w * 0.5 - tw * 0.5 - iw * 0.75, y + h * 0.5, icon_size, (255, 255, 255, 96))

    tx = x + w * 0.5 - tw * 0.5 + iw * 0.25
    canvas.fill_text(tx, y + h * 0.5 - 1.0, text, replace(label_style, color=(0, 0, 0, 160)))
    canvas.fill_text(tx, y + h * 0.5, text, replace(label_style, color=(255, 255, 255, 160)))


def draw_slider(canvas: Canvas, pos: float, x: float, y: float, w: float, h: float) -> None:
    cy = y + math.floor(h * 0.5)
    kr = math.floor(h * 0.25)
    kx = x + math.floor(pos * w)

    # Slot
    path = Path()
    path.rounded_rect(x, cy - 2.0, w, 4.0, 2.0)
    canvas.fill_path(path, BoxGradient(x, cy - 2.0 + 1.0, w, 4.0, 2.0, 2.0, (0, 0, 0, 32), (0, 0, 0, 128)))

    # Knob shadow
    path = Path()
    path.rect(kx - kr - 5.0, cy - kr - 5.0, kr * 2.0 + 5.0 + 5.0, kr * 2.0 + 5.0 + 5.0 + 3.0)
    path.circle(kx, cy, kr)
    path.solidity(Solidity.HOLE)
    canvas.fill_path(path, RadialGradient(kx, cy + 1.0, kr - 3.0, kr + 3.0, (0, 0, 0, 64), (0, 0, 0, 0)))

    # Knob
    path = Path()
    path.circle(kx, cy, kr - 1.0)
    canvas.fill_path(path, SolidPaint((40, 43, 48, 255)))
    canvas.fill_path(path, LinearGradient(x, cy - kr, x, cy + kr, (255, 255, 255, 16), (0, 0, 0, 16)))

    path = Path()
    path.circle(kx, cy, kr - 0.5)
    canvas.stroke_path(path, SolidPaint((0, 0, 0, 92)))


def draw_widgets_panel(canvas: Canvas, images: Sequence[int], t: float) -> None:
    draw_window(canvas, "Widgets `n Stuff", 50.0, 50.0, 300.0, 400.0)

    x = 60.0
    y = 95.0
    draw_search_box(canvas, "Search", x, y, 280.0, 25.0)
    y += 40.0
    draw_drop_down(canvas, "Effects", x, y, 280.0, 28.0)
    popy = y + 14.0
    y += 45.0

    draw_label(canvas, "Login", x, y, 20.0)
    y += 25.0
    draw_edit_box(canvas, "Email", x, y, 280.0, 28.0)
    y += 35.0
    draw_edit_box(canvas, "Password", x, y, 280.0, 28.0)
    y += 38.0
    draw_check_box(canvas, "Remember me", x, y, 28.0)
    draw_button(canvas, "login", "Sign in", x + 138.0, y, 140.0, 28.0, (0, 96, 128, 255))
    y += 45.0

    # Slider
    draw_label(canvas, "Diameter", x, y, 20.0)
    y += 25.0
    draw_edit_box_num(canvas, "123.00", "px", x + 180.0, y, 100.0, 28.0)
    draw_slider(canvas, 0.4, x, y, 170.0, 28.0)
    y += 55.0

    draw_button(canvas, "trash", "Delete", x, y, 160.0, 28.0, (128, 16, 8, 255))
    draw_button(canvas, None, "Cancel", x + 170.0, y, 110.0, 28.0, (0, 0, 0, 0))

    draw_thumbnails(canvas, 365.0, popy - 30.0, 160.0, 300.0, images, t)


def draw_screenshot(canvas: Canvas, slot: ScreenshotSlot, width: float, height: float) -> None:
    if slot.image_id is None:
        return
    x = width - SCREENSHOT_SIZE
    y = height - SCREENSHOT_SIZE
    path = Path()
    path.rect(x, y, SCREENSHOT_SIZE, SCREENSHOT_SIZE)
    canvas.fill_path(path, ImagePattern(slot.image_id, x, y, SCREENSHOT_SIZE, SCREENSHOT_SIZE, 0.0, 1.0))
    canvas.stroke_path(path, SolidPaint((0x45, 0x45, 0x45, 255)))


# -- Assembly --------------------------------------------------------------------


def build_widgets(assets: SceneAssets, *, perf: PerfGraph, screenshot: ScreenshotSlot) -> list[Widget]:
    """The fixed per-frame widget order."""

    def graph(canvas: Canvas, ctx: FrameContext) -> None:
        draw_graph(canvas, 0.0, ctx.height / 2.0, ctx.width, ctx.height / 2.0, ctx.t)

    def eyes(canvas: Canvas, ctx: FrameContext) -> None:
        draw_eyes(canvas, ctx.width - 250.0, 50.0, 150.0, 100.0, _local_pointer(canvas, ctx), ctx.t)

    def paragraph(canvas: Canvas, ctx: FrameContext) -> None:
        draw_paragraph(canvas, ctx.width - 450.0, 50.0, 150.0, _local_pointer(canvas, ctx))

    def colorwheel(canvas: Canvas, ctx: FrameContext) -> None:
        draw_colorwheel(canvas, ctx.width - 300.0, ctx.height - 350.0, 250.0, 250.0, ctx.t, ctx)

    def lines(canvas: Canvas, ctx: FrameContext) -> None:
        draw_lines(canvas, 120.0, ctx.height - 50.0, 600.0, ctx.t)

    def widths(canvas: Canvas, ctx: FrameContext) -> None:
        draw_widths(canvas, 10.0, 50.0, 30.0)

    def fills(canvas: Canvas, ctx: FrameContext) -> None:
        draw_fills(canvas, ctx.width - 200.0, ctx.height - 100.0, ctx)

    def caps(canvas: Canvas, ctx: FrameContext) -> None:
        draw_caps(canvas, 10.0, 300.0, 30.0)

    def scissor(canvas: Canvas, ctx: FrameContext) -> None:
        draw_scissor(canvas, 50.0, ctx.height - 80.0, ctx.t)

    def widgets_panel(canvas: Canvas, ctx: FrameContext) -> None:
        draw_widgets_panel(canvas, assets.images, ctx.t)

    def screenshot_overlay(canvas: Canvas, ctx: FrameContext) -> None:
        draw_screenshot(canvas, screenshot, ctx.width, ctx.height)

    def perf_graph(canvas: Canvas, ctx: FrameContext) -> None:
        canvas.reset()
        perf.render(canvas, 5.0, 5.0)

    return [
        Widget("graph", graph),
        Widget("eyes", eyes),
        Widget("paragraph", paragraph),
        Widget("colorwheel", colorwheel),
        Widget("lines", lines),
        Widget("widths", widths),
        Widget("fills", fills),
        Widget("caps", caps),
        Widget("scissor", scissor),
        Widget("widgets", widgets_panel),
        Widget("screenshot", screenshot_overlay),
        Widget("perf", perf_graph),
    ]
