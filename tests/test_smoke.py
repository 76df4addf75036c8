"""Smoke tests for the pygame shell.

These tests verify that the main loop can initialise, load placeholder
assets and composite a handful of frames without crashing when the SDL dummy
video driver is used. They do not check rendering correctness.
"""

from __future__ import annotations

import os

# Use the dummy drivers before importing pygame or the application
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")
os.environ.setdefault("PYGAME_HIDE_SUPPORT_PROMPT", "1")


def test_app_runs_headless() -> None:
    """Ensure the application can start and run a few frames headlessly."""
    # Import inside the test so that environment variables take effect
    from canvas_showcase.app import run
    from canvas_showcase.config import ShowcaseConfig

    exit_code = run(max_frames=3, config=ShowcaseConfig(window_size=(640, 480)))
    assert exit_code == 0


def test_escape_ends_loop() -> None:
    import pygame

    from canvas_showcase.app import run
    from canvas_showcase.config import ShowcaseConfig

    frames: list[int] = []

    def inject(frame: int) -> None:
        frames.append(frame)
        if frame == 1:
            pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0))

    exit_code = run(max_frames=50, event_injector=inject, config=ShowcaseConfig(window_size=(320, 240)))
    assert exit_code == 0
    assert frames == [0, 1]
