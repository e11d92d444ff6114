from __future__ import annotations

from .duration import compact
from .errors import UnrecognizedPayload
from .types import (
    Absence,
    Blocked,
    InterpretedState,
    NoTarget,
    Pending,
    RawStatus,
    Ready,
    TransportError,
    Unrecognized,
)

READY = "Ready!"
BLOCKED = frozenset({"King's Reward", "Logged out"})


def interpret(raw: RawStatus) -> InterpretedState:
    """Map one raw status reply onto the closed set of monitor states."""
    if raw in (Absence.TARGET_ABSENT, Absence.TARGET_LOADING):
        return NoTarget()
    if raw is Absence.TRANSPORT_FAILURE or not raw:
        return TransportError()
    if raw == READY:
        return Ready()
    if raw in BLOCKED:
        return Blocked()
    try:
        return Pending(compact(raw))
    except UnrecognizedPayload:
        return Unrecognized(raw)
