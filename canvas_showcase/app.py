from __future__ import annotations

import logging
from collections.abc import Callable

import pygame

from .assets import build_font_book, load_assets
from .canvas import Canvas
from .clock import Clock, FrameTimer, RealClock
from .config import ShowcaseConfig
from .frame import FrameDriver, FrameReport, make_context
from .perf import PerfGraph
from .pointer import PointerState, ViewNavigator
from .pygame_renderer import PygameRenderer
from .scene import SceneAssets, ScreenshotSlot, build_widgets

logger = logging.getLogger(__name__)


class App:
    """Window-side state: pointer, view navigation and the composed frame."""

    def __init__(
        self,
        surface: pygame.Surface,
        renderer: PygameRenderer,
        assets: SceneAssets,
        *,
        clock: Clock,
        clear_color: tuple[int, int, int] = (77, 77, 82),
    ) -> None:
        self._surface = surface
        self._renderer = renderer
        self._canvas = Canvas(renderer)
        self._clear_color = clear_color
        self._timer = FrameTimer(clock)
        self._perf = PerfGraph()
        self._screenshot = ScreenshotSlot()
        self._driver = FrameDriver(build_widgets(assets, perf=self._perf, screenshot=self._screenshot))
        self._pointer = PointerState()
        self._navigator = ViewNavigator()
        self._running = True

    @property
    def running(self) -> bool:
        return self._running

    @property
    def pointer(self) -> PointerState:
        return self._pointer

    @property
    def navigator(self) -> ViewNavigator:
        return self._navigator

    @property
    def screenshot(self) -> ScreenshotSlot:
        return self._screenshot

    def quit(self) -> None:
        self._running = False

    def handle_event(self, event: pygame.event.Event) -> None:
        if event.type == pygame.QUIT:
            self.quit()
            return

        if event.type == pygame.MOUSEMOTION:
            x, y = event.pos
            if self._pointer.dragging:
                self._navigator.drag(self._pointer.x, self._pointer.y, x, y)
            self._pointer.x = float(x)
            self._pointer.y = float(y)
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            x, y = event.pos
            self._pointer.x = float(x)
            self._pointer.y = float(y)
            self._pointer.dragging = True
            return
        if event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self._pointer.dragging = False
            return

        if event.type == pygame.MOUSEWHEEL:
            self._navigator.zoom(self._pointer.x, self._pointer.y, float(event.y))
            return

        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_ESCAPE:
            self.quit()
        elif event.key == pygame.K_s:
            self.take_screenshot()
        elif event.key == pygame.K_r:
            self._navigator.reset()

    def take_screenshot(self) -> None:
        # Captures whatever the display holds, i.e. the last presented frame.
        shot = self._surface.copy()
        if self._screenshot.image_id is None:
            self._screenshot.image_id = self._renderer.create_image(shot)
        else:
            self._renderer.update_image(self._screenshot.image_id, shot)
        logger.debug("screenshot captured into image %d", self._screenshot.image_id)

    def render(self) -> FrameReport:
        t, dt = self._timer.tick()
        self._perf.update(dt)

        self._surface.fill(self._clear_color)
        ctx = make_context(
            t=t,
            size=self._surface.get_size(),
            pointer=self._pointer,
            view=self._navigator.view,
        )
        return self._driver.compose(self._canvas, ctx)


def run(
    *,
    max_frames: int | None = None,
    event_injector: Callable[[int], None] | None = None,
    config: ShowcaseConfig | None = None,
) -> int:
    config = config or ShowcaseConfig.from_env()
    pygame.init()

    pygame.display.set_caption(config.title)
    surface = pygame.display.set_mode(config.window_size, pygame.RESIZABLE)

    renderer = PygameRenderer(surface, build_font_book(config))
    clock = pygame.time.Clock()

    app = App(
        surface=surface,
        renderer=renderer,
        assets=load_assets(renderer, config),
        clock=RealClock(),
        clear_color=config.clear_color,
    )

    frame = 0
    try:
        while app.running:
            if event_injector is not None:
                event_injector(frame)

            for event in pygame.event.get():
                app.handle_event(event)

            app.render()

            pygame.display.flip()

            frame += 1
            if max_frames is not None and frame >= max_frames:
                break

            clock.tick(config.target_fps)
    finally:
        pygame.quit()

    return 0
