from __future__ import annotations

import logging
import sys
from pathlib import Path


def _ensure_repo_root_on_path() -> None:
    """Ensure the repository root (parent of this package) is on ``sys.path``.

    When this file is executed as a script (``python canvas_showcase/__main__.py``)
    the package is not importable by name; inserting the parent directory of
    the package fixes that.
    """
    pkg_dir = Path(__file__).resolve().parent
    repo_root_str = str(pkg_dir.parent)
    if repo_root_str not in sys.path:
        sys.path.insert(0, repo_root_str)


try:
    # Works when executed as a module: python -m canvas_showcase
    from .app import run  # type: ignore[attr-defined]
    from .config import ShowcaseConfig  # type: ignore[attr-defined]
except ImportError:
    # Works when executed as a script.
    _ensure_repo_root_on_path()
    from canvas_showcase.app import run  # type: ignore[attr-defined]
    from canvas_showcase.config import ShowcaseConfig  # type: ignore[attr-defined]


def main() -> int:
    """Entry point for running the showcase from the command line."""
    config = ShowcaseConfig.from_env()
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    return run(config=config)


if __name__ == "__main__":
    raise SystemExit(main())
