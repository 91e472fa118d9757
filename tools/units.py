"""Byte size parsing and formatting.

Sizes use decimal (1000-based) units with a single-letter suffix:
``k``, ``m``, ``g``, ``t`` and ``b`` (bytes), case-insensitive.
"""

from __future__ import annotations

import re

from core.errors import InvalidFormat, UnknownUnit

KB = 1000
MB = KB * KB
GB = MB * KB
TB = GB * KB

UNITS: dict[str, int] = {
    "t": TB,
    "g": GB,
    "m": MB,
    "k": KB,
    "b": 1,
}

# Leading whitespace and an optional sign are accepted, like strtol.
_NUMBER_RE = re.compile(r"\s*([+-]?[0-9]+)", re.ASCII)


def parse_size(text: str) -> int:
    """Parse ``text`` like ``"700m"`` or ``"4G"`` into a byte count.

    Raises:
        InvalidFormat: no digits at the start of ``text``.
        UnknownUnit: the suffix is not exactly one known unit char.
    """
    match = _NUMBER_RE.match(text)
    if match is None:
        raise InvalidFormat(text)
    num = int(match.group(1))
    unit = text[match.end() :]
    if not unit:
        return num
    if len(unit) == 1 and unit.lower() in UNITS:
        return num * UNITS[unit.lower()]
    raise UnknownUnit(unit)


def format_size(num: float) -> str:
    """Render ``num`` bytes with the largest unit it reaches.

    ``format_size(1500)`` gives ``"1.50K"``; values below 1K are plain bytes
    (``"999B"``).
    """
    if num >= TB:
        return f"{num / TB:.2f}T"
    if num >= GB:
        return f"{num / GB:.2f}G"
    if num >= MB:
        return f"{num / MB:.2f}M"
    if num >= KB:
        return f"{num / KB:.2f}K"
    return f"{num:.0f}B"


__all__ = ["KB", "MB", "GB", "TB", "UNITS", "parse_size", "format_size"]
