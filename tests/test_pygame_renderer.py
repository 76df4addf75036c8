from __future__ import annotations

import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")

import pygame  # noqa: E402
import pytest  # noqa: E402

from canvas_showcase.canvas import Canvas  # noqa: E402
from canvas_showcase.errors import LayoutFailure  # noqa: E402
from canvas_showcase.pygame_renderer import FONT_CACHE_SIZE, MAX_FONT_PX, FontBook, PygameRenderer  # noqa: E402
from canvas_showcase.renderer import (  # noqa: E402
    Baseline,
    FillRule,
    ImagePattern,
    LinearGradient,
    Path,
    SolidPaint,
    Solidity,
    TextStyle,
)
from canvas_showcase.scene import star_path  # noqa: E402

RED = (255, 0, 0, 255)


@pytest.fixture()
def canvas() -> Canvas:
    pygame.font.init()
    target = pygame.Surface((100, 100))
    target.fill((0, 0, 0))
    return Canvas(PygameRenderer(target))


def _rgb(canvas: Canvas, x: int, y: int) -> tuple[int, int, int]:
    c = canvas.renderer.target.get_at((x, y))
    return (c.r, c.g, c.b)


def test_solid_fill_covers_rect_only(canvas: Canvas) -> None:
    canvas.fill_path(Path().rect(10.0, 10.0, 20.0, 20.0), SolidPaint(RED))
    assert _rgb(canvas, 20, 20) == (255, 0, 0)
    assert _rgb(canvas, 10, 10) == (255, 0, 0)
    assert _rgb(canvas, 5, 5) == (0, 0, 0)
    assert _rgb(canvas, 31, 20) == (0, 0, 0)


def test_fill_uses_current_transform(canvas: Canvas) -> None:
    canvas.translate(50.0, 50.0)
    canvas.fill_path(Path().rect(0.0, 0.0, 10.0, 10.0), SolidPaint(RED))
    assert _rgb(canvas, 55, 55) == (255, 0, 0)
    assert _rgb(canvas, 5, 5) == (0, 0, 0)


def test_hole_subpath_is_left_unpainted(canvas: Canvas) -> None:
    path = Path().rect(10.0, 10.0, 60.0, 60.0)
    path.rect(30.0, 30.0, 20.0, 20.0).solidity(Solidity.HOLE)
    canvas.fill_path(path, SolidPaint(RED))
    assert _rgb(canvas, 15, 40) == (255, 0, 0)
    assert _rgb(canvas, 40, 40) == (0, 0, 0)


def test_fill_rules_on_pentagram(canvas: Canvas) -> None:
    canvas.fill_path(star_path(), SolidPaint(RED, fill_rule=FillRule.EVENODD))
    assert _rgb(canvas, 50, 45) == (0, 0, 0)
    assert _rgb(canvas, 50, 10) == (255, 0, 0)

    canvas.fill_path(star_path(), SolidPaint(RED, fill_rule=FillRule.NONZERO))
    assert _rgb(canvas, 50, 45) == (255, 0, 0)


def test_scissor_limits_fill(canvas: Canvas) -> None:
    canvas.scissor(0.0, 0.0, 15.0, 100.0)
    canvas.fill_path(Path().rect(10.0, 10.0, 20.0, 20.0), SolidPaint(RED))
    assert _rgb(canvas, 12, 20) == (255, 0, 0)
    assert _rgb(canvas, 20, 20) == (0, 0, 0)


def test_zero_global_alpha_draws_nothing(canvas: Canvas) -> None:
    canvas.set_global_alpha(0.0)
    canvas.fill_path(Path().rect(10.0, 10.0, 20.0, 20.0), SolidPaint(RED))
    assert _rgb(canvas, 20, 20) == (0, 0, 0)


def test_linear_gradient_ramps_along_axis(canvas: Canvas) -> None:
    paint = LinearGradient(0.0, 0.0, 100.0, 0.0, (0, 0, 0, 255), (255, 255, 255, 255))
    canvas.fill_path(Path().rect(0.0, 0.0, 100.0, 10.0), paint)
    left = _rgb(canvas, 5, 5)[0]
    middle = _rgb(canvas, 50, 5)[0]
    right = _rgb(canvas, 95, 5)[0]
    assert left < middle < right


def test_stroke_marks_outline(canvas: Canvas) -> None:
    canvas.stroke_path(Path().rect(10.0, 10.0, 50.0, 50.0), SolidPaint(RED, line_width=2.0))
    assert _rgb(canvas, 10, 30) == (255, 0, 0)
    assert _rgb(canvas, 35, 35) == (0, 0, 0)


def test_image_pattern_and_registry(canvas: Canvas) -> None:
    renderer = canvas.renderer
    image = pygame.Surface((4, 4))
    image.fill((0, 0, 255))
    image_id = renderer.create_image(image)

    assert renderer.image_size(image_id) == (4, 4)
    with pytest.raises(LayoutFailure):
        renderer.image_size(image_id + 100)

    canvas.fill_path(Path().rect(0.0, 0.0, 40.0, 40.0), ImagePattern(image_id, 0.0, 0.0, 40.0, 40.0))
    assert _rgb(canvas, 20, 20) == (0, 0, 255)

    replacement = pygame.Surface((8, 2))
    renderer.update_image(image_id, replacement)
    assert renderer.image_size(image_id) == (8, 2)


def test_text_metrics_are_consistent(canvas: Canvas) -> None:
    style = TextStyle(size=20.0)
    m = canvas.measure_text(10.0, 40.0, "Hello", style)
    assert len(m.glyphs) == 5
    assert m.glyphs[0].x == 10.0
    last = m.glyphs[-1]
    assert last.x + last.width == pytest.approx(10.0 + m.width)
    assert m.y < 40.0

    drawn = canvas.fill_text(10.0, 40.0, "Hello", style)
    assert drawn == m


def test_break_text_rejects_non_positive_width(canvas: Canvas) -> None:
    with pytest.raises(LayoutFailure):
        canvas.break_text(0.0, "some words", TextStyle())
    assert canvas.break_text(1000.0, "some words", TextStyle()) == [(0, 10)]


def test_missing_font_file_falls_back_to_default(tmp_path) -> None:
    pygame.font.init()
    book = FontBook({"regular": tmp_path / "missing.ttf"})
    font = book.get("regular", 16)
    assert font.get_linesize() > 0
    assert book.get("regular", 16) is font


def test_text_at_deep_zoom_is_drawn_from_a_capped_face(canvas: Canvas) -> None:
    style = TextStyle(size=20.0, color=RED, baseline=Baseline.TOP)
    m = canvas.measure_text(0.0, 0.0, "I", style)

    # Centre the stem of the glyph on the target, magnified 400 times.
    canvas.translate(50.0, 50.0)
    canvas.scale(400.0, 400.0)
    canvas.translate(-(m.x + m.width * 0.5), -(m.y + m.height * 0.5))
    drawn = canvas.fill_text(0.0, 0.0, "I", style)

    assert drawn == m
    lit = [(x, y) for x in range(0, 100, 5) for y in range(0, 100, 5) if _rgb(canvas, x, y) != (0, 0, 0)]
    assert lit


def test_text_outside_the_target_is_skipped(canvas: Canvas) -> None:
    canvas.translate(5000.0, 5000.0)
    canvas.scale(50.0, 50.0)
    canvas.fill_text(0.0, 0.0, "far away", TextStyle(size=20.0, color=RED))
    assert all(_rgb(canvas, x, y) == (0, 0, 0) for x in range(0, 100, 10) for y in range(0, 100, 10))


def test_image_pattern_at_deep_zoom_scales_only_visible_pixels(canvas: Canvas) -> None:
    renderer = canvas.renderer
    image = pygame.Surface((4, 4))
    image.fill((0, 0, 255))
    image.fill((0, 255, 0), pygame.Rect(0, 0, 1, 1))
    image_id = renderer.create_image(image)

    canvas.scale(1000.0, 1000.0)
    canvas.fill_path(Path().rect(0.0, 0.0, 40.0, 40.0), ImagePattern(image_id, 0.0, 0.0, 40.0, 40.0))

    # One source pixel spans 10000 device pixels, so the view sees only the green corner.
    assert _rgb(canvas, 50, 50) == (0, 255, 0)


def test_rasterizer_errors_become_layout_failures(canvas: Canvas, monkeypatch: pytest.MonkeyPatch) -> None:
    fonts = canvas.renderer.fonts
    real_get = fonts.get

    class BrokenFont:
        def __init__(self, font: pygame.font.Font) -> None:
            self._font = font

        def __getattr__(self, name: str):
            return getattr(self._font, name)

        def render(self, *args):
            raise pygame.error("Passed a NULL pointer")

    monkeypatch.setattr(fonts, "get", lambda name, px: BrokenFont(real_get(name, px)))
    with pytest.raises(LayoutFailure):
        canvas.fill_text(10.0, 40.0, "Hello", TextStyle(size=20.0))


def test_font_book_caps_pixel_size_and_cache() -> None:
    pygame.font.init()
    book = FontBook()
    huge = book.get("regular", 5000)
    assert huge is book.get("regular", MAX_FONT_PX)

    for px in range(1, 200):
        book.get("regular", px)
    assert book._load.cache_info().currsize <= FONT_CACHE_SIZE
