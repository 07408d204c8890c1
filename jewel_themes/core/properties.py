"""
Line-oriented ``.properties`` parsing.

Format:
- blank lines and lines starting with ``#`` or ``!`` are comments
- entries are ``key=value`` or ``key:value``, split at the first separator
- whitespace around the separator and at both ends of the line is ignored
- a line without a separator defines the key with an empty value
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, Iterable, Optional, TextIO, Union

from .logger import get_logger

log = get_logger(__name__)

__all__ = [
    "COMMENT_PREFIXES",
    "parse_properties",
    "parse_properties_lines",
    "load_properties",
]

COMMENT_PREFIXES = ("#", "!")

_ENTRY_PATTERN = re.compile(r"^([^=:]*?)\s*[=:]\s*(.*)$")


def parse_properties_lines(
    lines: Iterable[str], source: Optional[str] = None
) -> Dict[str, str]:
    properties: Dict[str, str] = {}
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line or line.startswith(COMMENT_PREFIXES):
            continue

        match = _ENTRY_PATTERN.match(line)
        if match:
            key, value = match.group(1).strip(), match.group(2).strip()
        else:
            key, value = line, ""

        if not key:
            log.debug("Skipping entry without key at %s:%s", source or "<text>", lineno)
            continue
        if key in properties:
            log.debug(
                "Duplicate key '%s' at %s:%s, keeping last value",
                key,
                source or "<text>",
                lineno,
            )
        properties[key] = value
    return properties


def parse_properties(text: str, source: Optional[str] = None) -> Dict[str, str]:
    """Parse properties text into an ordered ``key -> raw value`` dict."""
    if text.startswith("\ufeff"):
        text = text[1:]
    return parse_properties_lines(text.splitlines(), source=source)


def load_properties(target: Union[Path, str, TextIO]) -> Dict[str, str]:
    """Parse a properties file from a path or an open text stream."""
    if isinstance(target, (str, Path)):
        path = Path(target)
        return parse_properties(path.read_text(encoding="utf-8"), source=str(path))
    name = getattr(target, "name", None)
    return parse_properties(target.read(), source=str(name) if name else None)
