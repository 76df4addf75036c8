from __future__ import annotations

import logging
from dataclasses import dataclass

import pytest

from canvas_showcase.canvas import Canvas
from canvas_showcase.errors import LayoutFailure, StackUnderflow
from canvas_showcase.frame import FrameDriver, Widget, make_context
from canvas_showcase.gallery import reveal_phase, reveal_progress
from canvas_showcase.perf import PerfGraph
from canvas_showcase.pointer import PointerState
from canvas_showcase.recording import RecordingRenderer
from canvas_showcase.renderer import ImagePattern, Path, SolidPaint
from canvas_showcase.scene import (
    CARET_COLOR,
    HOVER_TEXT,
    SCREENSHOT_SIZE,
    SceneAssets,
    ScreenshotSlot,
    build_widgets,
)
from canvas_showcase.transform import Rect, Transform

SIZE = (1000.0, 600.0)
WIDGET_ORDER = [
    "graph",
    "eyes",
    "paragraph",
    "colorwheel",
    "lines",
    "widths",
    "fills",
    "caps",
    "scissor",
    "widgets",
    "screenshot",
    "perf",
]


@dataclass
class FakeClock:
    t: float = 0.0

    def now(self) -> float:
        return self.t

    def advance(self, dt: float) -> None:
        self.t += dt


class Scene:
    """Recording canvas plus the full widget list, driven frame by frame."""

    def __init__(self, renderer: RecordingRenderer | None = None, image_count: int = 12) -> None:
        self.renderer = renderer or RecordingRenderer()
        self.canvas = Canvas(self.renderer)
        self.clock = FakeClock()
        self.pointer = PointerState(x=-1000.0, y=-1000.0)
        self.screenshot = ScreenshotSlot()
        sizes = [(120, 80), (80, 120), (100, 100)]
        images = tuple(self.renderer.create_image(*sizes[i % 3]) for i in range(image_count))
        self.images = images
        self.widgets = build_widgets(SceneAssets(images=images), perf=PerfGraph(), screenshot=self.screenshot)

    def frame(self, view: Transform | None = None, widgets: list[Widget] | None = None):
        self.renderer.clear()
        ctx = make_context(
            t=self.clock.now(),
            size=SIZE,
            pointer=self.pointer,
            view=view or Transform.identity(),
        )
        driver = FrameDriver(widgets if widgets is not None else self.widgets)
        return driver.compose(self.canvas, ctx)


def _caret_fills(renderer: RecordingRenderer):
    return [c for c in renderer.ops("fill") if c.paint == SolidPaint(CARET_COLOR)]


def _tooltip_texts(renderer: RecordingRenderer):
    return [c for c in renderer.ops("text") if c.text and c.text in HOVER_TEXT and c.style.size == 11.0]


def test_full_frame_draws_every_widget_in_order() -> None:
    scene = Scene()
    report = scene.frame()

    assert report.drawn == WIDGET_ORDER
    assert report.failed == []
    assert scene.canvas.state.depth == 0
    assert len(scene.renderer.calls) > 100


def test_stack_is_balanced_across_many_frames() -> None:
    scene = Scene()
    view = Transform.translation(20.0, 10.0) @ Transform.scaling(1.5, 1.5)
    for _ in range(30):
        scene.clock.advance(0.25)
        report = scene.frame(view)
        assert report.failed == []
        assert scene.canvas.state.depth == 0
        assert scene.canvas.transform == view


def test_failed_widget_is_skipped_and_stack_recovered(caplog: pytest.LogCaptureFixture) -> None:
    scene = Scene()

    def broken(canvas: Canvas, ctx) -> None:
        canvas.translate(1000.0, 0.0)
        canvas.save()
        canvas.scissor(0.0, 0.0, 1.0, 1.0)
        raise LayoutFailure("no font")

    def underflow(canvas: Canvas, ctx) -> None:
        canvas.restore()
        canvas.restore()

    def probe(canvas: Canvas, ctx) -> None:
        canvas.fill_path(Path().rect(0.0, 0.0, 1.0, 1.0), SolidPaint((1, 2, 3, 255)))

    widgets = [Widget("broken", broken), Widget("underflow", underflow), Widget("probe", probe)]
    view = Transform.translation(3.0, 4.0)
    with caplog.at_level(logging.WARNING, logger="canvas_showcase.frame"):
        report = scene.frame(view, widgets)

    assert report.failed == ["broken", "underflow"]
    assert report.drawn == ["probe"]
    assert "broken" in caplog.text

    (probe_call,) = scene.renderer.ops("fill")
    assert probe_call.frame.transform == view
    assert probe_call.frame.clip is None
    assert scene.canvas.state.depth == 0


def test_underflow_is_a_scene_error() -> None:
    canvas = Canvas(RecordingRenderer())
    with pytest.raises(StackUnderflow):
        canvas.restore()


def test_leaked_saves_are_discarded(caplog: pytest.LogCaptureFixture) -> None:
    scene = Scene()

    def leaky(canvas: Canvas, ctx) -> None:
        canvas.save()
        canvas.save()
        canvas.translate(50.0, 50.0)

    def probe(canvas: Canvas, ctx) -> None:
        canvas.fill_path(Path().rect(0.0, 0.0, 1.0, 1.0), SolidPaint((1, 2, 3, 255)))

    with caplog.at_level(logging.WARNING, logger="canvas_showcase.frame"):
        report = scene.frame(widgets=[Widget("leaky", leaky), Widget("probe", probe)])

    assert report.drawn == ["leaky", "probe"]
    assert "unmatched save" in caplog.text
    (probe_call,) = scene.renderer.ops("fill")
    assert probe_call.frame.transform == Transform.identity()


def test_caret_drawn_under_pointer_on_paragraph() -> None:
    scene = Scene()
    # Paragraph at x = 1000 - 450, y = 50; 14 px text is 7 units per glyph.
    scene.pointer.x = 550.0 + 2 * 7.0 + 0.71 * 7.0
    scene.pointer.y = 55.0
    scene.frame()

    caret, badge = _caret_fills(scene.renderer)
    assert caret.path is not None
    assert caret.path.subpaths[0].points[0] == pytest.approx((550.0 + 3 * 7.0, 50.0))
    assert "1" in scene.renderer.texts()


def test_caret_follows_view_transform() -> None:
    scene = Scene()
    view = Transform.translation(-100.0, 20.0) @ Transform.scaling(2.0, 2.0)
    local = (550.0 + 0.2 * 7.0, 55.0)
    scene.pointer.x, scene.pointer.y = view.apply(*local)
    scene.frame(view)

    fills = _caret_fills(scene.renderer)
    assert fills
    assert fills[0].path.subpaths[0].points[0] == pytest.approx((550.0, 50.0))
    assert fills[0].frame.transform == view


def test_no_caret_without_pointer_over_text() -> None:
    scene = Scene()
    scene.frame()
    assert _caret_fills(scene.renderer) == []


def test_tooltip_fades_when_pointer_reaches_it() -> None:
    scene = Scene()
    scene.frame()
    far = _tooltip_texts(scene.renderer)
    assert far
    assert all(c.frame.alpha == 1.0 for c in far)

    first = far[0].metrics
    assert first is not None
    scene.pointer.x = first.x + 1.0
    scene.pointer.y = first.y + 1.0
    scene.frame()
    near = _tooltip_texts(scene.renderer)
    assert all(c.frame.alpha == 0.0 for c in near)


def test_paragraph_layout_failure_does_not_abort_frame() -> None:
    class NoLayout(RecordingRenderer):
        def break_text(self, max_width, text, style):
            raise LayoutFailure("layout unavailable")

    scene = Scene(renderer=NoLayout())
    report = scene.frame()

    assert report.failed == []
    assert "paragraph" in report.drawn
    assert _tooltip_texts(scene.renderer) == []


def test_scissor_demo_clips_with_rect_from_rotated_frame() -> None:
    scene = Scene()
    scene.frame()

    fills = scene.renderer.ops("fill")
    unclipped = [c for c in fills if c.paint == SolidPaint((255, 128, 0, 64))]
    clipped = [c for c in fills if c.paint == SolidPaint((255, 128, 0, 255))]
    assert len(unclipped) == 1
    assert len(clipped) == 1
    assert unclipped[0].frame.clip is None
    assert clipped[0].frame.clip is not None
    assert clipped[0].frame.clip.rect == Rect(-20.0, -20.0, 60.0, 40.0)


def test_gallery_reveal_matches_phase() -> None:
    scene = Scene()
    scene.clock.t = 7.0
    scene.frame()

    patterns = [c for c in scene.renderer.ops("fill") if isinstance(c.paint, ImagePattern)]
    assert [c.paint.image_id for c in patterns] == list(scene.images)

    u2 = reveal_phase(7.0)
    n = len(scene.images)
    assert [c.paint.alpha for c in patterns] == pytest.approx([reveal_progress(i, n, u2) for i in range(n)])
    for c in patterns:
        assert c.frame.clip is not None
        assert c.frame.clip.rect == Rect(365.0, 119.0, 160.0, 300.0)


def test_screenshot_overlay_only_after_capture() -> None:
    scene = Scene()
    scene.frame()
    big = [
        c
        for c in scene.renderer.ops("fill")
        if isinstance(c.paint, ImagePattern) and c.paint.w == SCREENSHOT_SIZE
    ]
    assert big == []

    scene.screenshot.image_id = scene.renderer.create_image(1000, 600)
    scene.frame()
    big = [
        c
        for c in scene.renderer.ops("fill")
        if isinstance(c.paint, ImagePattern) and c.paint.w == SCREENSHOT_SIZE
    ]
    assert len(big) == 1
    assert big[0].paint.x == 1000.0 - SCREENSHOT_SIZE


def test_perf_overlay_ignores_view_transform() -> None:
    scene = Scene()
    scene.frame(Transform.scaling(3.0, 3.0))

    (label,) = [c for c in scene.renderer.ops("text") if c.text == "Frame time"]
    assert label.frame.transform == Transform.identity()


def test_collapsed_view_still_draws_every_widget() -> None:
    scene = Scene()
    scene.pointer.x = 600.0
    scene.pointer.y = 60.0
    report = scene.frame(Transform.scaling(0.0, 0.0))

    assert report.failed == []
    assert report.drawn == WIDGET_ORDER
    assert _caret_fills(scene.renderer) == []
