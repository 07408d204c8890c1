"""
Wildcard (``*.suffix``) overrides.

``*.background=@background`` sets every key whose last dot segment is
``background`` (``Button.background``, ``Panel.background``, ...) to the same
value, so a theme can declare it once.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, MutableMapping, Optional, Tuple

from .errors import CyclicReferenceError
from .logger import get_logger
from .resolver import VariableResolver
from .value_parsers import ResolvedValue, coerce as coerce_value

log = get_logger(__name__)

__all__ = [
    "GLOBAL_PREFIX",
    "GlobalOverride",
    "GlobalOverrides",
    "key_suffix",
    "extract_globals",
    "expand_globals",
    "apply_globals",
]

GLOBAL_PREFIX = "*."


@dataclass(frozen=True)
class GlobalOverride:
    """A global value both as resolved text and as its typed form."""

    text: str
    value: ResolvedValue


GlobalOverrides = Dict[str, GlobalOverride]


def key_suffix(key: str) -> Optional[str]:
    """Final dot segment of ``key``, or None for keys without a dot."""
    if "." not in key:
        return None
    return key.rsplit(".", 1)[1]


def extract_globals(
    raw: Mapping[str, str],
    resolver: VariableResolver,
    coerce: Callable[[str], ResolvedValue] = coerce_value,
    strict: bool = False,
) -> GlobalOverrides:
    globals_: GlobalOverrides = {}
    for key, value in raw.items():
        if not key.startswith(GLOBAL_PREFIX):
            continue
        suffix = key[len(GLOBAL_PREFIX):]
        if not suffix:
            log.debug("Ignoring global override without suffix: %r", key)
            continue
        try:
            text = resolver.resolve(value)
        except CyclicReferenceError as exc:
            if strict:
                raise
            log.warning("%s (global %s), using raw value", exc, key)
            text = value
        globals_[suffix] = GlobalOverride(text=text.strip(), value=coerce(text))
    return globals_


def expand_globals(
    raw: Mapping[str, str],
    resolver: Optional[VariableResolver] = None,
    coerce: Callable[[str], ResolvedValue] = coerce_value,
    strict: bool = False,
) -> Tuple[Dict[str, str], GlobalOverrides]:
    """
    Split global overrides out of ``raw`` and apply them to matching keys.

    Global values are resolved against the complete, unexpanded property set.
    Dotted variable declarations (``@panel.background``) are rewritten too, so
    references to them see the global value.

    Args:
        raw: Merged raw properties; not modified
        resolver: Resolver bound to ``raw`` (created when omitted)
        coerce: Value coercer for the global's typed form
        strict: Propagate reference cycles instead of keeping the raw text

    Returns:
        Tuple of (expanded raw properties without ``*.`` keys, global overrides)
    """
    if resolver is None:
        resolver = VariableResolver(raw)

    globals_ = extract_globals(raw, resolver, coerce, strict=strict)

    expanded: Dict[str, str] = {}
    rewritten = 0
    for key, value in raw.items():
        if key.startswith(GLOBAL_PREFIX):
            continue
        override = None
        suffix = key_suffix(key)
        if suffix is not None:
            override = globals_.get(suffix)
        if override is not None:
            expanded[key] = override.text
            rewritten += 1
        else:
            expanded[key] = value

    if globals_:
        log.debug(
            "Expanded %s global overrides onto %s keys", len(globals_), rewritten
        )
    return expanded, globals_


def apply_globals(
    defaults: MutableMapping[str, object], globals_: Mapping[str, GlobalOverride]
) -> int:
    """Overwrite existing ``defaults`` keys whose suffix has a global value."""
    if not globals_:
        return 0
    count = 0
    for key in list(defaults.keys()):
        if not isinstance(key, str):
            continue
        suffix = key_suffix(key)
        if suffix is None:
            continue
        override = globals_.get(suffix)
        if override is not None:
            defaults[key] = override.value
            count += 1
    return count
