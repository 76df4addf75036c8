from __future__ import annotations

from pathlib import Path

from canvas_showcase.config import (
    BOLD_FONT_ENV,
    FONT_ENV,
    FPS_ENV,
    IMAGE_DIR_ENV,
    LOG_LEVEL_ENV,
    ShowcaseConfig,
)


def test_defaults_without_environment() -> None:
    cfg = ShowcaseConfig.from_env({})
    assert cfg == ShowcaseConfig()
    assert cfg.window_size == (1000, 600)
    assert cfg.target_fps == 60
    assert cfg.image_count == 12
    assert cfg.font_path is None
    assert cfg.image_dir is None


def test_environment_overrides(tmp_path: Path) -> None:
    cfg = ShowcaseConfig.from_env(
        {
            FONT_ENV: str(tmp_path / "Roboto-Regular.ttf"),
            BOLD_FONT_ENV: str(tmp_path / "Roboto-Bold.ttf"),
            IMAGE_DIR_ENV: f"  {tmp_path}  ",
            FPS_ENV: "30",
            LOG_LEVEL_ENV: "debug",
        }
    )
    assert cfg.font_path == tmp_path / "Roboto-Regular.ttf"
    assert cfg.bold_font_path == tmp_path / "Roboto-Bold.ttf"
    assert cfg.image_dir == tmp_path
    assert cfg.target_fps == 30
    assert cfg.log_level == "DEBUG"


def test_invalid_values_fall_back_to_defaults() -> None:
    cfg = ShowcaseConfig.from_env(
        {
            FONT_ENV: "   ",
            FPS_ENV: "fast",
            LOG_LEVEL_ENV: "chatty",
        }
    )
    assert cfg.font_path is None
    assert cfg.target_fps == 60
    assert cfg.log_level == "WARNING"

    assert ShowcaseConfig.from_env({FPS_ENV: "-5"}).target_fps == 60


def test_home_is_expanded_in_paths() -> None:
    cfg = ShowcaseConfig.from_env({IMAGE_DIR_ENV: "~/pictures"})
    assert cfg.image_dir is not None
    assert "~" not in str(cfg.image_dir)
