from __future__ import annotations

import colorsys
import logging
from pathlib import Path

import pygame

from .config import ShowcaseConfig
from .pygame_renderer import FontBook, PygameRenderer
from .scene import SceneAssets

logger = logging.getLogger(__name__)

IMAGE_SUFFIXES = (".png", ".jpg", ".jpeg", ".bmp", ".gif", ".tga")

# Mixed portrait, landscape and square placeholders so cover-fit crops both ways.
PLACEHOLDER_SIZES = (
    (120, 80),
    (80, 120),
    (100, 100),
    (160, 90),
    (90, 160),
    (128, 128),
)


def build_font_book(config: ShowcaseConfig) -> FontBook:
    return FontBook({"regular": config.font_path, "bold": config.bold_font_path})


def image_files(image_dir: Path | None, limit: int) -> list[Path]:
    if image_dir is None:
        return []
    if not image_dir.is_dir():
        logger.warning("image directory %s does not exist; using placeholders", image_dir)
        return []
    files = sorted(p for p in image_dir.iterdir() if p.is_file() and p.suffix.lower() in IMAGE_SUFFIXES)
    return files[:limit]


def placeholder_image(index: int) -> pygame.Surface:
    w, h = PLACEHOLDER_SIZES[index % len(PLACEHOLDER_SIZES)]
    surface = pygame.Surface((w, h), pygame.SRCALPHA)
    hue = (index * 0.137) % 1.0
    for row in range(h):
        u = row / max(1, h - 1)
        r, g, b = colorsys.hls_to_rgb(hue, 0.35 + 0.3 * u, 0.6)
        pygame.draw.line(surface, (round(r * 255), round(g * 255), round(b * 255), 255), (0, row), (w - 1, row))
    pygame.draw.circle(surface, (255, 255, 255, 90), (w // 2, h // 2), min(w, h) // 4)
    return surface


def load_images(renderer: PygameRenderer, config: ShowcaseConfig) -> tuple[int, ...]:
    images: list[int] = []
    for path in image_files(config.image_dir, config.image_count):
        try:
            surface = pygame.image.load(str(path))
        except (OSError, pygame.error) as exc:
            logger.warning("could not load image %s: %s", path, exc)
            continue
        images.append(renderer.create_image(surface))

    if config.image_dir is not None and not images:
        logger.warning("no usable images in %s; using placeholders", config.image_dir)
    while len(images) < config.image_count:
        images.append(renderer.create_image(placeholder_image(len(images))))
    return tuple(images)


def load_assets(renderer: PygameRenderer, config: ShowcaseConfig) -> SceneAssets:
    return SceneAssets(images=load_images(renderer, config))
