"""
Variable reference resolution.

A value starting with ``@`` refers to another key of the same raw property
set. Variables are conventionally declared with the marker in the key itself
(``@background=3C3F41``), so the literal value is tried first; if no such key
exists the marker is stripped and the value is looked up as a plain key
(``@Panel.background`` -> ``Panel.background``). ``@@`` always means a plain
key reference.

Unknown references resolve to their own text. Loops and overly long chains
raise :class:`CyclicReferenceError`.
"""

from __future__ import annotations

from typing import List, Mapping, Optional, Tuple

from .errors import CyclicReferenceError
from .logger import get_logger

log = get_logger(__name__)

__all__ = [
    "VARIABLE_PREFIX",
    "REFERENCE_PREFIX",
    "DEFAULT_MAX_DEPTH",
    "VariableResolver",
    "is_reference",
    "resolve_value",
]

VARIABLE_PREFIX = "@"
REFERENCE_PREFIX = VARIABLE_PREFIX + VARIABLE_PREFIX
DEFAULT_MAX_DEPTH = 32


def is_reference(value: str) -> bool:
    return value.startswith(VARIABLE_PREFIX)


class VariableResolver:
    """Resolves ``@`` references against one raw property set."""

    def __init__(
        self, properties: Mapping[str, str], max_depth: int = DEFAULT_MAX_DEPTH
    ):
        if max_depth < 1:
            raise ValueError("max_depth must be at least 1")
        self.properties = properties
        self.max_depth = max_depth

    def lookup(self, reference: str) -> Optional[Tuple[str, str]]:
        """
        Find the key a reference points at.

        Returns:
            ``(key, raw_value)`` or None when nothing matches
        """
        if reference.startswith(REFERENCE_PREFIX):
            candidates = [reference[len(REFERENCE_PREFIX):]]
        else:
            candidates = [reference, reference[len(VARIABLE_PREFIX):]]

        for key in candidates:
            if key and key in self.properties:
                return key, self.properties[key]
        return None

    def explain(self, value: str) -> List[str]:
        """Keys visited while resolving ``value``, in order."""
        chain, _ = self._walk(value)
        return chain

    def resolve(self, value: str) -> str:
        """
        Resolve ``value`` to a concrete string.

        Args:
            value: Raw property value, possibly a reference

        Returns:
            The first non-reference value in the chain, or the last
            unresolvable reference text unchanged
        """
        _, resolved = self._walk(value)
        return resolved

    def _walk(self, value: str) -> Tuple[List[str], str]:
        chain: List[str] = []
        visited = set()
        current = value

        while is_reference(current):
            found = self.lookup(current)
            if found is None:
                log.debug("Reference %s not found, keeping literal text", current)
                return chain, current

            key, next_value = found
            if key in visited:
                raise CyclicReferenceError(chain + [key])
            if len(chain) >= self.max_depth:
                raise CyclicReferenceError(chain + [key], depth_exceeded=True)
            visited.add(key)
            chain.append(key)
            current = next_value

        return chain, current


def resolve_value(
    properties: Mapping[str, str], value: str, max_depth: int = DEFAULT_MAX_DEPTH
) -> str:
    """Convenience wrapper around :meth:`VariableResolver.resolve`."""
    return VariableResolver(properties, max_depth=max_depth).resolve(value)
