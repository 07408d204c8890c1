"""
Defaults table assembly.

One pass: load the merged raw properties, expand ``*.`` globals, then resolve
and coerce every remaining styling key on top of a copy of the host's base
defaults. A load failure leaves the base defaults as they were.
"""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from typing import Any, Dict, Iterator, Mapping, Optional

from .control_defaults import apply_control_defaults
from .errors import CyclicReferenceError, LoadError
from .global_overrides import GLOBAL_PREFIX, apply_globals, expand_globals
from .logger import get_logger
from .resolver import VARIABLE_PREFIX, VariableResolver
from .sources import PropertySourceLoader, default_locator
from .theme_config import ThemeEngineConfig
from .themes import ThemeInfo, get_theme
from .value_parsers import Color, Integer, ResolvedValue, Text, coerce

log = get_logger(__name__)

__all__ = [
    "DefaultsTable",
    "build_defaults",
    "ThemeEngine",
]


class DefaultsTable(MappingABC):
    """Read-only ``key -> value`` mapping produced by one resolution pass."""

    __slots__ = ("_data", "theme", "fallback")

    def __init__(self, data: Mapping[str, Any], theme: str, fallback: bool = False):
        self._data: Dict[str, Any] = dict(data)
        self.theme = theme
        self.fallback = fallback

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return (
            f"DefaultsTable(theme={self.theme!r}, keys={len(self._data)}, "
            f"fallback={self.fallback})"
        )

    def get_color(self, key: str) -> Optional[Color]:
        value = self._data.get(key)
        return value if isinstance(value, Color) else None

    def resolved(self) -> Dict[str, ResolvedValue]:
        """Only the entries written by the engine."""
        return {
            k: v
            for k, v in self._data.items()
            if isinstance(v, (Color, Integer, Text))
        }

    def to_python(self) -> Dict[str, Any]:
        """Plain values (colours as ``#RRGGBB``), for JSON export."""
        out: Dict[str, Any] = {}
        for key, value in self._data.items():
            to_python = getattr(value, "to_python", None)
            out[key] = to_python() if callable(to_python) else value
        return out


def _is_styling_key(key: str) -> bool:
    return not key.startswith(VARIABLE_PREFIX) and not key.startswith(GLOBAL_PREFIX)


def build_defaults(
    theme_identity: str,
    base_defaults: Optional[Mapping[str, Any]] = None,
    *,
    loader: Optional[PropertySourceLoader] = None,
    config: Optional[ThemeEngineConfig] = None,
) -> DefaultsTable:
    """
    Resolve the defaults table for a theme.

    Args:
        theme_identity: Theme resource identity (e.g. ``JewelDarkLaf``)
        base_defaults: Host-supplied defaults; copied, never modified
        loader: Property source loader (built from ``config`` when omitted)
        config: Engine settings

    Returns:
        DefaultsTable with ``fallback=True`` when loading failed
    """
    config = config or ThemeEngineConfig()
    if loader is None:
        loader = PropertySourceLoader(
            default_locator(config.themes_dirs), config.parent_identity
        )

    defaults: Dict[str, Any] = dict(base_defaults or {})

    try:
        raw = loader.load(theme_identity)
    except LoadError as exc:
        log.error("Failed to load properties for %s: %s", theme_identity, exc)
        return DefaultsTable(defaults, theme_identity, fallback=True)

    strict = config.strict_references
    depth = config.max_reference_depth

    expanded, globals_ = expand_globals(
        raw, VariableResolver(raw, max_depth=depth), strict=strict
    )
    applied = apply_globals(defaults, globals_)
    if applied:
        log.debug("Applied globals to %s base keys", applied)

    resolver = VariableResolver(expanded, max_depth=depth)
    written = 0
    for key, value in expanded.items():
        if not _is_styling_key(key):
            continue
        try:
            resolved = resolver.resolve(value)
        except CyclicReferenceError as exc:
            if strict:
                raise
            log.warning("%s (key %s), keeping raw value", exc, key)
            resolved = value
        defaults[key] = coerce(resolved)
        written += 1

    log.info(
        "Resolved %s keys for %s (%s globals)", written, theme_identity, len(globals_)
    )
    return DefaultsTable(defaults, theme_identity)


class ThemeEngine:
    """Facade bundling configuration, loader and base-defaults preparation."""

    def __init__(
        self,
        config: Optional[ThemeEngineConfig] = None,
        *,
        loader: Optional[PropertySourceLoader] = None,
    ) -> None:
        self.config = config or ThemeEngineConfig()
        self.loader = loader or PropertySourceLoader(
            default_locator(self.config.themes_dirs), self.config.parent_identity
        )

    def theme(self, name: str) -> ThemeInfo:
        return get_theme(name)

    def identity_for(self, theme: str) -> str:
        """Registered theme identity, or ``theme`` itself when unregistered."""
        try:
            return get_theme(theme).identity
        except KeyError:
            return theme.strip()

    def defaults(
        self, theme: str, base_defaults: Optional[Mapping[str, Any]] = None
    ) -> DefaultsTable:
        """
        Resolve ``theme`` (display name or identity) over ``base_defaults``.

        Unregistered identities are resolved as-is so themes from extra theme
        directories work without registration.
        """
        identity = self.identity_for(theme)
        base: Dict[str, Any] = dict(base_defaults or {})
        if self.config.seed_control_defaults:
            apply_control_defaults(base)
        return build_defaults(identity, base, loader=self.loader, config=self.config)

    def raw_properties(self, theme: str) -> Dict[str, str]:
        return self.loader.load(self.identity_for(theme))
