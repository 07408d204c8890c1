from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import ConfigError
from .logger import get_logger
from .resolver import DEFAULT_MAX_DEPTH
from .sources import DEFAULT_PARENT_IDENTITY, themes_dirs_from_env

log = get_logger(__name__)


class ThemeEngineConfig(BaseModel):
    # Extra theme folders, searched before the bundled themes
    themes_dirs: List[Path] = Field(default_factory=list)
    parent_identity: str = Field(DEFAULT_PARENT_IDENTITY, min_length=1)
    max_reference_depth: int = Field(DEFAULT_MAX_DEPTH, ge=1)
    # Raise on reference cycles instead of degrading the key to text
    strict_references: bool = False
    seed_control_defaults: bool = True

    def with_env(self, environ: Optional[Dict[str, str]] = None) -> "ThemeEngineConfig":
        """Copy with ``JEWEL_THEMES_DIR`` entries placed ahead of ``themes_dirs``."""
        env_dirs = themes_dirs_from_env(environ)
        if not env_dirs:
            return self
        merged = env_dirs + [d for d in self.themes_dirs if d not in env_dirs]
        return self.model_copy(update={"themes_dirs": merged})


def load_engine_config(path: Optional[Path] = None) -> ThemeEngineConfig:
    """Read a JSON config file; no path means all defaults."""
    if path is None:
        return ThemeEngineConfig()

    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise ConfigError(f"Cannot read config {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise ConfigError(f"Invalid JSON in config {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    try:
        config = ThemeEngineConfig.model_validate(data)
    except ValidationError as exc:
        raise ConfigError(f"Invalid config {path}: {exc}") from exc

    # Relative theme directories are relative to the config file
    base = Path(path).parent
    dirs = [d if d.is_absolute() else base / d for d in config.themes_dirs]
    log.debug("Loaded engine config from %s", path)
    return config.model_copy(update={"themes_dirs": dirs})
