from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

FONT_ENV = "CANVAS_SHOWCASE_FONT"
BOLD_FONT_ENV = "CANVAS_SHOWCASE_BOLD_FONT"
IMAGE_DIR_ENV = "CANVAS_SHOWCASE_IMAGE_DIR"
FPS_ENV = "CANVAS_SHOWCASE_FPS"
LOG_LEVEL_ENV = "CANVAS_SHOWCASE_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class ShowcaseConfig:
    window_size: tuple[int, int] = (1000, 600)
    title: str = "Vector canvas demo"
    target_fps: int = 60
    font_path: Path | None = None
    bold_font_path: Path | None = None
    image_dir: Path | None = None
    image_count: int = 12
    log_level: str = "WARNING"
    clear_color: tuple[int, int, int] = (77, 77, 82)

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> ShowcaseConfig:
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            target_fps=_as_positive_int(env.get(FPS_ENV), defaults.target_fps),
            font_path=_as_path(env.get(FONT_ENV)),
            bold_font_path=_as_path(env.get(BOLD_FONT_ENV)),
            image_dir=_as_path(env.get(IMAGE_DIR_ENV)),
            log_level=_as_log_level(env.get(LOG_LEVEL_ENV), defaults.log_level),
        )


def _as_path(value: str | None) -> Path | None:
    if value is None or value.strip() == "":
        return None
    return Path(value.strip()).expanduser()


def _as_positive_int(value: str | None, fallback: int) -> int:
    if value is None:
        return fallback
    try:
        parsed = int(value.strip())
    except ValueError:
        return fallback
    return parsed if parsed > 0 else fallback


def _as_log_level(value: str | None, fallback: str) -> str:
    if value is None:
        return fallback
    name = value.strip().upper()
    if isinstance(logging.getLevelName(name), int):
        return name
    return fallback
