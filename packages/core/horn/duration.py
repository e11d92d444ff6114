"""
Hunt timer compaction.

The tray badge only fits a few glyphs, so "14:52" becomes "15m" and "45"
becomes "45s". Seconds above 30 round the minute up.
"""

from __future__ import annotations

import re

from .errors import UnrecognizedPayload

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def _leading_int(text: str) -> int:
    m = _LEADING_INT.match(text)
    if m is None:
        raise UnrecognizedPayload(f"No duration in {text!r}")
    return int(m.group(1))


def compact(raw: str) -> str:
    """
    Compact a remaining-time string into a badge token.

    "5 min" -> "5m", "2:45" -> "3m", "2:15" -> "2m", "45" -> "45s".
    Raises UnrecognizedPayload when the text has no leading number.
    """
    text = raw.replace(":", "", 1)
    value = _leading_int(text)

    if "min" in text:
        return f"{value}m"

    if value > 59:
        minutes, seconds = divmod(value, 100)
        if seconds > 30:
            minutes += 1
        return f"{minutes}m"
    return f"{value}s"
