"""Exception types raised by the theme engine."""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

__all__ = [
    "ThemeError",
    "LoadError",
    "ResourceReadError",
    "CyclicReferenceError",
    "UnknownThemeError",
    "ConfigError",
]


class ThemeError(Exception):
    """Base class for theme engine errors."""


class LoadError(ThemeError):
    """A property source could not be loaded."""


class ResourceReadError(LoadError):
    """Reading a resource that exists failed."""

    def __init__(self, resource: str, reason: Optional[BaseException] = None):
        self.resource = resource
        self.reason = reason
        message = f"Failed to read property resource '{resource}'"
        if reason is not None:
            message = f"{message}: {reason}"
        super().__init__(message)


class CyclicReferenceError(ThemeError):
    """A variable reference chain loops or exceeds the depth limit."""

    def __init__(self, chain: Sequence[str], *, depth_exceeded: bool = False):
        self.chain: Tuple[str, ...] = tuple(chain)
        self.depth_exceeded = depth_exceeded
        path = " -> ".join(self.chain)
        if depth_exceeded:
            message = f"Reference chain too deep: {path}"
        else:
            message = f"Cyclic variable reference: {path}"
        super().__init__(message)


class UnknownThemeError(ThemeError, KeyError):
    """No registered theme matches the requested name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown theme '{self.name}'"


class ConfigError(ThemeError):
    """The engine configuration file is missing fields or malformed."""
