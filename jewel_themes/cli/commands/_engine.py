from __future__ import annotations

from argparse import Namespace
from pathlib import Path

from ...core.defaults import ThemeEngine
from ...core.theme_config import load_engine_config


def engine_from_args(args: Namespace) -> ThemeEngine:
    """Build an engine from --config, JEWEL_THEMES_DIR, --themes-dir and --strict."""
    config_path = getattr(args, "config", None)
    config = load_engine_config(Path(config_path) if config_path else None)
    config = config.with_env()

    extra = [Path(d) for d in getattr(args, "themes_dirs", None) or []]
    updates = {}
    if extra:
        updates["themes_dirs"] = extra + [
            d for d in config.themes_dirs if d not in extra
        ]
    if getattr(args, "strict", False):
        updates["strict_references"] = True
    if updates:
        config = config.model_copy(update=updates)
    return ThemeEngine(config)
