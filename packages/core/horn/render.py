from __future__ import annotations

from typing import Optional

from packages.shared.config import AppConfig

from .types import (
    BadgeColor,
    BadgeUpdate,
    Blocked,
    InterpretedState,
    NoTarget,
    Pending,
    Ready,
    TransportError,
    Unrecognized,
)

HORN_GLYPH = "🎺"
BLOCKED_TEXT = "RRRRRRR"

CLEAR = BadgeUpdate(text="", color=None)


def render(state: InterpretedState, config: AppConfig) -> Optional[BadgeUpdate]:
    """
    Badge instruction for a state, or None to leave the badge untouched.

    With show_timer off, Ready and Blocked send nothing while Pending sends an
    explicit clear so a stale timer disappears.
    """
    if isinstance(state, (NoTarget, TransportError)):
        return CLEAR
    if isinstance(state, Ready):
        return BadgeUpdate(HORN_GLYPH, BadgeColor.AMBER) if config.show_timer else None
    if isinstance(state, Blocked):
        return BadgeUpdate(BLOCKED_TEXT, BadgeColor.RED) if config.show_timer else None

    if isinstance(state, Pending):
        token = state.duration_token
    elif isinstance(state, Unrecognized):
        token = state.raw
    else:
        raise TypeError(f"Unknown state {state!r}")
    return BadgeUpdate(token, BadgeColor.DARK_GRAY) if config.show_timer else CLEAR
