"""
Bundled themes.

``JewelLaf.properties`` is the shared parent set; each theme adds its own
``<identity>.properties`` on top of it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from ..errors import UnknownThemeError

__all__ = [
    "ThemeInfo",
    "JEWEL_LIGHT",
    "JEWEL_DARK",
    "BUILTIN_THEMES",
    "available_themes",
    "get_theme",
]


@dataclass(frozen=True)
class ThemeInfo:
    name: str
    identity: str
    description: str
    dark: bool = False


JEWEL_LIGHT = ThemeInfo(
    name="Jewel Light",
    identity="JewelLightLaf",
    description="Jewel Light Look and Feel",
)
JEWEL_DARK = ThemeInfo(
    name="Jewel Dark",
    identity="JewelDarkLaf",
    description="Jewel Dark Look and Feel",
    dark=True,
)

BUILTIN_THEMES: Tuple[ThemeInfo, ...] = (JEWEL_LIGHT, JEWEL_DARK)


def available_themes() -> Tuple[ThemeInfo, ...]:
    return BUILTIN_THEMES


def get_theme(name: str) -> ThemeInfo:
    """Find a bundled theme by display name (any case) or identity."""
    wanted = name.strip()
    for theme in BUILTIN_THEMES:
        if wanted == theme.identity or wanted.lower() == theme.name.lower():
            return theme
    raise UnknownThemeError(name)
