"""Renderer backend that rasterizes onto a pygame Surface.

Fills are scanline-converted in device space so both fill rules and hole
sub-paths behave; the result is used as a coverage mask over a paint surface.
Gradients, feathering and rotated image patterns are approximations.
"""

from __future__ import annotations

import functools
import logging
import math
from collections.abc import Iterator, Mapping, Sequence
from contextlib import contextmanager
from pathlib import Path as FsPath

import pygame

from .canvas_state import CanvasFrame
from .errors import LayoutFailure
from .renderer import (
    RGBA,
    Align,
    Baseline,
    BoxGradient,
    FillRule,
    GlyphBox,
    ImagePattern,
    LinearGradient,
    LineCap,
    LineJoin,
    Paint,
    Path,
    RadialGradient,
    SolidPaint,
    Solidity,
    TextMetrics,
    TextStyle,
    greedy_line_breaks,
    lerp_rgba,
)
from .transform import Rect, bounding_rect

logger = logging.getLogger(__name__)

_WHITE = (255, 255, 255, 255)
_CLEAR = (0, 0, 0, 0)
_GRADIENT_STEPS = 48

FONT_CACHE_SIZE = 32
MAX_FONT_PX = 160
# Above this size text is rendered at a quantized pixel size and stretched.
_QUANTIZE_FROM_PX = 24
_FONT_PX_STEP = 8
# Upper bound on the pixel area of any intermediate rotated surface.
_MAX_SCRATCH_PIXELS = 4096 * 4096


class FontBook:
    """Named font faces, opened lazily per pixel size.

    Open faces are kept in a bounded LRU cache; pixel sizes are capped at
    ``MAX_FONT_PX`` so deep zoom cannot open arbitrarily large faces.
    """

    def __init__(self, paths: Mapping[str, FsPath | None] | None = None) -> None:
        self._paths: dict[str, FsPath | None] = dict(paths or {})
        self._load = functools.lru_cache(maxsize=FONT_CACHE_SIZE)(self._open)

    def get(self, name: str, px: int) -> pygame.font.Font:
        return self._load(name, min(MAX_FONT_PX, max(1, int(px))))

    def _open(self, name: str, px: int) -> pygame.font.Font:
        path = self._paths.get(name)
        if path is None:
            font = pygame.font.Font(None, px)
        else:
            try:
                font = pygame.font.Font(str(path), px)
            except (OSError, pygame.error) as exc:
                logger.warning("font %r could not be loaded from %s (%s); using default", name, path, exc)
                self._paths[name] = None
                font = pygame.font.Font(None, px)
        if name == "bold" and path is None:
            font.set_bold(True)
        return font


class PygameRenderer:
    def __init__(self, target: pygame.Surface, fonts: FontBook | None = None) -> None:
        self.target = target
        self.fonts = fonts or FontBook()
        self._images: dict[int, pygame.Surface] = {}
        self._next_image_id = 1

    # -- Images -------------------------------------------------------------
    def create_image(self, surface: pygame.Surface) -> int:
        image_id = self._next_image_id
        self._next_image_id += 1
        self._images[image_id] = _as_rgba(surface)
        return image_id

    def update_image(self, image_id: int, surface: pygame.Surface) -> None:
        if image_id not in self._images:
            raise LayoutFailure(f"unknown image id {image_id}")
        self._images[image_id] = _as_rgba(surface)

    def image_size(self, image_id: int) -> tuple[int, int]:
        return self._image(image_id).get_size()

    def _image(self, image_id: int) -> pygame.Surface:
        try:
            return self._images[image_id]
        except KeyError:
            raise LayoutFailure(f"unknown image id {image_id}") from None

    # -- Paths --------------------------------------------------------------
    def fill_path(self, path: Path, paint: Paint, frame: CanvasFrame) -> None:
        with _draw_guard("fill"):
            self._fill_path(path, paint, frame)

    def stroke_path(self, path: Path, paint: Paint, frame: CanvasFrame) -> None:
        with _draw_guard("stroke"):
            self._stroke_path(path, paint, frame)

    def _fill_path(self, path: Path, paint: Paint, frame: CanvasFrame) -> None:
        polys: list[tuple[list[tuple[float, float]], Solidity]] = []
        for sp in path.subpaths:
            if len(sp.points) >= 3:
                polys.append(([frame.transform.apply(x, y) for x, y in sp.points], sp.solidity))
        if not polys:
            return

        bounds = bounding_rect([p for pts, _ in polys for p in pts])
        area = self._device_area(bounds, frame)
        if area is None:
            return

        mask = pygame.Surface(area.size, pygame.SRCALPHA)
        mask.fill(_CLEAR)
        _scanline_fill(mask, area, polys, paint.fill_rule)
        self._composite(mask, area, paint, frame)

    def _stroke_path(self, path: Path, paint: Paint, frame: CanvasFrame) -> None:
        width = max(1.0, paint.line_width * frame.transform.average_scale)
        lines: list[tuple[list[tuple[float, float]], bool]] = []
        for sp in path.subpaths:
            if len(sp.points) >= 2:
                lines.append(([frame.transform.apply(x, y) for x, y in sp.points], sp.closed))
        if not lines:
            return

        bounds = bounding_rect([p for pts, _ in lines for p in pts])
        assert bounds is not None
        pad = width + 2.0
        bounds = Rect(bounds.x - pad, bounds.y - pad, bounds.w + pad * 2.0, bounds.h + pad * 2.0)
        area = self._device_area(bounds, frame)
        if area is None:
            return

        cap = getattr(paint, "line_cap", LineCap.BUTT)
        join = getattr(paint, "line_join", LineJoin.MITER)
        iw = max(1, round(width))
        mask = pygame.Surface(area.size, pygame.SRCALPHA)
        mask.fill(_CLEAR)
        for pts, closed in lines:
            local = [(x - area.x, y - area.y) for x, y in pts]
            pygame.draw.lines(mask, _WHITE, closed, local, iw)
            if iw > 2 and join is not LineJoin.BEVEL:
                for px, py in (local if closed else local[1:-1]):
                    pygame.draw.circle(mask, _WHITE, (px, py), width * 0.5)
            if not closed and cap is not LineCap.BUTT:
                for px, py in (local[0], local[-1]):
                    if cap is LineCap.ROUND:
                        pygame.draw.circle(mask, _WHITE, (px, py), width * 0.5)
                    else:
                        half = width * 0.5
                        pygame.draw.rect(mask, _WHITE, pygame.Rect(round(px - half), round(py - half), iw, iw))
        self._composite(mask, area, paint, frame)

    def _device_area(self, bounds: Rect | None, frame: CanvasFrame) -> pygame.Rect | None:
        if bounds is None:
            return None
        x0 = math.floor(bounds.x)
        y0 = math.floor(bounds.y)
        area = pygame.Rect(x0, y0, math.ceil(bounds.right) - x0 + 1, math.ceil(bounds.bottom) - y0 + 1)
        area = area.clip(self.target.get_rect())
        clip = _clip_rect(frame)
        if clip is not None:
            area = area.clip(clip)
        if area.width <= 0 or area.height <= 0:
            return None
        return area

    def _composite(self, mask: pygame.Surface, area: pygame.Rect, paint: Paint, frame: CanvasFrame) -> None:
        surface = self._paint_surface(paint, area, frame)
        surface.blit(mask, (0, 0), special_flags=pygame.BLEND_RGBA_MULT)
        if frame.alpha < 1.0:
            surface.fill((255, 255, 255, round(frame.alpha * 255)), special_flags=pygame.BLEND_RGBA_MULT)
        self.target.blit(surface, area.topleft)

    def _paint_surface(self, paint: Paint, area: pygame.Rect, frame: CanvasFrame) -> pygame.Surface:
        surface = pygame.Surface(area.size, pygame.SRCALPHA)
        xf = frame.transform

        def dev(x: float, y: float) -> tuple[float, float]:
            px, py = xf.apply(x, y)
            return px - area.x, py - area.y

        if isinstance(paint, SolidPaint):
            surface.fill(paint.color)
        elif isinstance(paint, LinearGradient):
            _linear(surface, dev(paint.sx, paint.sy), dev(paint.ex, paint.ey), paint.start, paint.end)
        elif isinstance(paint, RadialGradient):
            scale = xf.average_scale
            _radial(
                surface,
                dev(paint.cx, paint.cy),
                paint.inner_radius * scale,
                paint.outer_radius * scale,
                paint.inner,
                paint.outer,
            )
        elif isinstance(paint, BoxGradient):
            corners = [dev(x, y) for x, y in Rect(paint.x, paint.y, paint.w, paint.h).corners()]
            box = bounding_rect(corners)
            assert box is not None
            scale = xf.average_scale
            _box(surface, box, paint.radius * scale, paint.feather * scale, paint.inner, paint.outer)
        elif isinstance(paint, ImagePattern):
            self._pattern(surface, paint, dev, xf.average_scale)
        else:
            raise TypeError(f"unsupported paint {type(paint).__name__}")
        return surface

    def _pattern(self, surface: pygame.Surface, paint: ImagePattern, dev, scale: float) -> None:
        image = self._image(paint.image_id)
        w = max(1, round(paint.w * scale))
        h = max(1, round(paint.h * scale))
        ox, oy = dev(paint.x, paint.y)
        surface.fill(_CLEAR)
        if paint.angle:
            if w * h > _MAX_SCRATCH_PIXELS:
                raise LayoutFailure(f"rotated image pattern too large ({w}x{h})")
            scaled = pygame.transform.smoothscale(image, (w, h))
            surface.blit(pygame.transform.rotate(scaled, -math.degrees(paint.angle)), (ox, oy))
        else:
            piece = _stretch_visible(image, ox, oy, w, h, surface.get_rect())
            if piece is not None:
                surface.blit(*piece)
        if paint.alpha < 1.0:
            surface.fill((255, 255, 255, round(max(0.0, paint.alpha) * 255)), special_flags=pygame.BLEND_RGBA_MULT)

    # -- Text ---------------------------------------------------------------
    def fill_text(self, x: float, y: float, text: str, style: TextStyle, frame: CanvasFrame) -> TextMetrics:
        metrics = self.measure_text(x, y, text, style)
        if text:
            with _draw_guard("text"):
                self._blit_text(text, style, metrics, frame)
        return metrics

    def _blit_text(self, text: str, style: TextStyle, metrics: TextMetrics, frame: CanvasFrame) -> None:
        xf = frame.transform
        box = Rect(metrics.x, metrics.y, metrics.width, metrics.height)
        area = self._device_area(bounding_rect([xf.apply(x, y) for x, y in box.corners()]), frame)
        if area is None:
            return

        want = style.size * xf.average_scale
        px = _font_px(want)
        stretch = want / px if px != round(want) else 1.0
        font = self.fonts.get(style.font, px)
        r, g, b, a = style.color
        rendered = font.render(text, True, (r, g, b))

        angle = math.degrees(math.atan2(xf.b, xf.a))
        ox, oy = xf.apply(metrics.x, metrics.y)
        if stretch != 1.0:
            w = max(1, round(rendered.get_width() * stretch))
            h = max(1, round(rendered.get_height() * stretch))
            if abs(angle) <= 0.01:
                piece = _stretch_visible(rendered, ox, oy, w, h, area)
                if piece is None:
                    return
                rendered, (ox, oy) = piece
            elif w * h > _MAX_SCRATCH_PIXELS:
                raise LayoutFailure(f"rotated text too large ({w}x{h})")
            else:
                rendered = pygame.transform.smoothscale(rendered, (w, h))
        if abs(angle) > 0.01:
            rendered = pygame.transform.rotate(rendered, -angle)
            cx, cy = xf.apply(metrics.x + metrics.width * 0.5, metrics.y + metrics.height * 0.5)
            ox = cx - rendered.get_width() * 0.5
            oy = cy - rendered.get_height() * 0.5

        alpha = round(a * frame.alpha)
        if alpha < 255:
            rendered.set_alpha(alpha)

        previous = self.target.get_clip()
        clip = _clip_rect(frame)
        if clip is not None:
            self.target.set_clip(clip.clip(previous))
        try:
            self.target.blit(rendered, (round(ox), round(oy)))
        finally:
            self.target.set_clip(previous)

    def measure_text(self, x: float, y: float, text: str, style: TextStyle) -> TextMetrics:
        font = self.fonts.get(style.font, round(style.size))
        width = float(font.size(text)[0]) if text else 0.0
        height = float(font.get_linesize())

        if style.align is Align.CENTER:
            x -= width * 0.5
        elif style.align is Align.RIGHT:
            x -= width

        if style.baseline is Baseline.MIDDLE:
            y -= height * 0.5
        elif style.baseline is Baseline.ALPHABETIC:
            y -= float(font.get_ascent())
        elif style.baseline is Baseline.BOTTOM:
            y -= height

        glyphs: list[GlyphBox] = []
        prev = 0.0
        for i in range(len(text)):
            right = float(font.size(text[: i + 1])[0])
            glyphs.append(GlyphBox(index=i, x=x + prev, y=y, width=right - prev, height=height))
            prev = right
        return TextMetrics(x=x, y=y, width=width, height=height, glyphs=tuple(glyphs))

    def break_text(self, max_width: float, text: str, style: TextStyle) -> Sequence[tuple[int, int]]:
        if max_width <= 0.0:
            raise LayoutFailure(f"cannot break text into width {max_width!r}")
        font = self.fonts.get(style.font, round(style.size))
        return greedy_line_breaks(max_width, text, lambda s: font.size(s)[0])


@contextmanager
def _draw_guard(what: str) -> Iterator[None]:
    # pygame reports oversized or degenerate surfaces as pygame.error.
    try:
        yield
    except (pygame.error, MemoryError, OverflowError) as exc:
        raise LayoutFailure(f"{what} could not be rasterized: {exc}") from exc


def _font_px(size: float) -> int:
    px = max(1, round(size))
    if px > _QUANTIZE_FROM_PX:
        px = int(px / _FONT_PX_STEP + 0.5) * _FONT_PX_STEP
    return min(px, MAX_FONT_PX)


def _stretch_visible(
    image: pygame.Surface,
    x: float,
    y: float,
    w: int,
    h: int,
    region: pygame.Rect,
) -> tuple[pygame.Surface, tuple[int, int]] | None:
    """Stretch ``image`` to ``w`` x ``h`` at ``(x, y)``, scaling only the source pixels that land in ``region``.

    Returns the scaled piece and where to blit it, or None when nothing is visible.
    """

    iw, ih = image.get_size()
    if iw == 0 or ih == 0:
        return None
    dest = pygame.Rect(math.floor(x), math.floor(y), w, h)
    visible = dest.clip(region)
    if visible.width == 0 or visible.height == 0:
        return None

    sx0 = math.floor((visible.left - dest.x) * iw / w)
    sx1 = min(iw, max(sx0 + 1, math.ceil((visible.right - dest.x) * iw / w)))
    sy0 = math.floor((visible.top - dest.y) * ih / h)
    sy1 = min(ih, max(sy0 + 1, math.ceil((visible.bottom - dest.y) * ih / h)))

    dx0 = dest.x + round(sx0 * w / iw)
    dy0 = dest.y + round(sy0 * h / ih)
    size = (
        max(1, dest.x + round(sx1 * w / iw) - dx0),
        max(1, dest.y + round(sy1 * h / ih) - dy0),
    )
    part = image.subsurface(pygame.Rect(sx0, sy0, sx1 - sx0, sy1 - sy0))
    if size[0] <= visible.width * 2 and size[1] <= visible.height * 2:
        return pygame.transform.smoothscale(part, size), (dx0, dy0)

    # Magnified far past the region: paint each source pixel as a block.
    out = pygame.Surface(visible.size, pygame.SRCALPHA)
    out.fill(_CLEAR)
    for j in range(sy1 - sy0):
        by0 = dest.y + round((sy0 + j) * h / ih)
        by1 = dest.y + round((sy0 + j + 1) * h / ih)
        for i in range(sx1 - sx0):
            bx0 = dest.x + round((sx0 + i) * w / iw)
            bx1 = dest.x + round((sx0 + i + 1) * w / iw)
            block = pygame.Rect(bx0 - visible.x, by0 - visible.y, bx1 - bx0, by1 - by0)
            out.fill(part.get_at((i, j)), block)
    return out, visible.topleft


def _as_rgba(surface: pygame.Surface) -> pygame.Surface:
    # smoothscale only accepts 24 and 32 bit surfaces.
    if surface.get_bitsize() == 32 and surface.get_flags() & pygame.SRCALPHA:
        return surface
    out = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    out.blit(surface, (0, 0))
    return out


def _clip_rect(frame: CanvasFrame) -> pygame.Rect | None:
    if frame.clip is None:
        return None
    b = frame.clip.device_bounds()
    x0 = math.floor(b.x)
    y0 = math.floor(b.y)
    return pygame.Rect(x0, y0, max(0, math.ceil(b.right) - x0), max(0, math.ceil(b.bottom) - y0))


def _scanline_fill(
    mask: pygame.Surface,
    area: pygame.Rect,
    polys: Sequence[tuple[Sequence[tuple[float, float]], Solidity]],
    fill_rule: FillRule,
) -> None:
    edges: list[tuple[float, float, float, float, int]] = []
    for pts, solidity in polys:
        sign = -1 if solidity is Solidity.HOLE else 1
        n = len(pts)
        for i in range(n):
            x0, y0 = pts[i]
            x1, y1 = pts[(i + 1) % n]
            if y0 == y1:
                continue
            edges.append((x0 - area.x, y0 - area.y, x1 - area.x, y1 - area.y, sign if y1 > y0 else -sign))

    width = area.width
    for row in range(area.height):
        sy = row + 0.5
        hits: list[tuple[float, int]] = []
        for x0, y0, x1, y1, w in edges:
            if y0 <= sy < y1 or y1 <= sy < y0:
                hits.append((x0 + (sy - y0) * (x1 - x0) / (y1 - y0), w))
        if len(hits) < 2:
            continue
        hits.sort()

        winding = 0
        crossings = 0
        for (xa, w), (xb, _) in zip(hits, hits[1:]):
            winding += w
            crossings += 1
            inside = crossings % 2 == 1 if fill_rule is FillRule.EVENODD else winding != 0
            if not inside:
                continue
            left = max(0, round(xa))
            right = min(width, round(xb))
            if right > left:
                mask.fill(_WHITE, pygame.Rect(left, row, right - left, 1))


def _linear(surface: pygame.Surface, p0: tuple[float, float], p1: tuple[float, float], c0: RGBA, c1: RGBA) -> None:
    dx = p1[0] - p0[0]
    dy = p1[1] - p0[1]
    length = math.hypot(dx, dy)
    if length < 1e-6:
        surface.fill(c1)
        return

    ux, uy = dx / length, dy / length
    # Perpendicular direction spans the whole surface.
    nx, ny = -uy, ux
    reach = float(surface.get_width() + surface.get_height()) + length + abs(p0[0]) + abs(p0[1])

    def band(s0: float, s1: float, color: RGBA) -> None:
        ax, ay = p0[0] + ux * s0, p0[1] + uy * s0
        bx, by = p0[0] + ux * s1, p0[1] + uy * s1
        pygame.draw.polygon(
            surface,
            color,
            [
                (ax + nx * reach, ay + ny * reach),
                (bx + nx * reach, by + ny * reach),
                (bx - nx * reach, by - ny * reach),
                (ax - nx * reach, ay - ny * reach),
            ],
        )

    surface.fill(c0)
    steps = max(2, min(_GRADIENT_STEPS, round(length)))
    for i in range(steps):
        s0 = length * i / steps
        band(s0, length * (i + 1) / steps + 1.0, lerp_rgba(c0, c1, (i + 0.5) / steps))
    band(length, length + reach, c1)


def _radial(
    surface: pygame.Surface,
    center: tuple[float, float],
    inner: float,
    outer: float,
    c0: RGBA,
    c1: RGBA,
) -> None:
    sw, sh = surface.get_size()
    # Rings at least this large cover every pixel of the surface.
    cover = max(math.hypot(px - center[0], py - center[1]) for px in (0, sw) for py in (0, sh))
    surface.fill(c1)
    outer = max(outer, inner)
    span = outer - inner
    steps = max(1, min(_GRADIENT_STEPS, round(span)))
    for i in range(steps):
        r = outer - span * i / steps
        color = lerp_rgba(c0, c1, 1.0 - i / steps)
        if r >= cover:
            surface.fill(color)
        else:
            pygame.draw.circle(surface, color, center, r)
    if inner >= cover:
        surface.fill(c0)
    elif inner > 0.0:
        pygame.draw.circle(surface, c0, center, inner)


def _box(surface: pygame.Surface, box: Rect, radius: float, feather: float, c0: RGBA, c1: RGBA) -> None:
    surface.fill(c1)
    feather = max(1.0, feather)
    steps = max(1, min(_GRADIENT_STEPS // 2, round(feather)))
    for i in range(steps + 1):
        u = i / steps
        grow = feather * 0.5 - feather * u
        rect = pygame.Rect(
            round(box.x - grow),
            round(box.y - grow),
            max(0, round(box.w + grow * 2.0)),
            max(0, round(box.h + grow * 2.0)),
        )
        if rect.width == 0 or rect.height == 0:
            continue
        r = max(0, round(radius + grow))
        pygame.draw.rect(surface, lerp_rgba(c1, c0, u), rect, border_radius=r)
