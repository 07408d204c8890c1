"""
Typed values for resolved theme properties.

Every raw string ends up as exactly one of:
- Color: six hex digits, e.g. "3C3F41" -> Color(0x3C3F41)
- Integer: optionally signed base-10 number in the 32-bit range, e.g. "-4"
- Text: anything else, kept verbatim after trimming

The order is fixed by ``COERCION_RULES``; the first matching rule wins, so
"123456" is a colour and never an integer.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Pattern, Tuple, Union

from .logger import get_logger

log = get_logger(__name__)

__all__ = [
    "ValueKind",
    "Color",
    "Integer",
    "Text",
    "ResolvedValue",
    "CoercionRule",
    "COERCION_RULES",
    "parse_color_value",
    "parse_integer_value",
    "coerce",
]

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class ValueKind(Enum):
    """Variant tag of a resolved value."""

    COLOR = "color"
    INTEGER = "integer"
    TEXT = "text"


@dataclass(frozen=True)
class Color:
    """24-bit RGB colour."""

    rgb: int

    @property
    def kind(self) -> ValueKind:
        return ValueKind.COLOR

    @property
    def red(self) -> int:
        return (self.rgb >> 16) & 0xFF

    @property
    def green(self) -> int:
        return (self.rgb >> 8) & 0xFF

    @property
    def blue(self) -> int:
        return self.rgb & 0xFF

    @property
    def hex(self) -> str:
        return f"#{self.rgb:06X}"

    def to_python(self) -> str:
        return self.hex

    def __str__(self) -> str:
        return self.hex


@dataclass(frozen=True)
class Integer:
    value: int

    @property
    def kind(self) -> ValueKind:
        return ValueKind.INTEGER

    def to_python(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class Text:
    value: str

    @property
    def kind(self) -> ValueKind:
        return ValueKind.TEXT

    def to_python(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


ResolvedValue = Union[Color, Integer, Text]


_HEX_COLOR_PATTERN = re.compile(r"[0-9A-Fa-f]{6}")
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")


def parse_color_value(value: str) -> Optional[Color]:
    """
    Parse exactly six hex digits as an RGB colour.

    Examples:
        - "FF0000" -> Color(16711680)
        - "3c3f41" -> Color(3948353)
        - "#FF0000", "FFF", "FF000080" -> None
    """
    if not _HEX_COLOR_PATTERN.fullmatch(value):
        return None
    try:
        return Color(int(value, 16))
    except ValueError:
        return None


def parse_integer_value(value: str) -> Optional[Integer]:
    """
    Parse an optionally signed base-10 integer.

    Numbers outside the signed 32-bit range are rejected so they stay text,
    matching what the property files were written against.
    """
    if not _INTEGER_PATTERN.fullmatch(value):
        return None
    number = int(value, 10)
    if number < INT_MIN or number > INT_MAX:
        log.debug("Integer '%s' out of range, keeping as text", value)
        return None
    return Integer(number)


@dataclass(frozen=True)
class CoercionRule:
    name: str
    parse: Callable[[str], Optional[ResolvedValue]]
    pattern: Optional[Pattern[str]] = None


COERCION_RULES: Tuple[CoercionRule, ...] = (
    CoercionRule("color", parse_color_value, _HEX_COLOR_PATTERN),
    CoercionRule("integer", parse_integer_value, _INTEGER_PATTERN),
)


def coerce(value: str) -> ResolvedValue:
    """Classify a resolved string; falls back to ``Text`` when no rule matches."""
    trimmed = value.strip()
    for rule in COERCION_RULES:
        parsed = rule.parse(trimmed)
        if parsed is not None:
            return parsed
    return Text(trimmed)
