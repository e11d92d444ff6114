from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Absence(Enum):
    """Why a cycle has no status text to interpret."""
    TARGET_ABSENT = "target_absent"
    TARGET_LOADING = "target_loading"
    TRANSPORT_FAILURE = "transport_failure"


# Status text from the tab, an Absence marker, or None for an empty reply
RawStatus = Union[str, Absence, None]


@dataclass(frozen=True)
class NoTarget:
    pass


@dataclass(frozen=True)
class TransportError:
    pass


@dataclass(frozen=True)
class Ready:
    pass


@dataclass(frozen=True)
class Blocked:
    """King's Reward or logged out: the horn can't be sounded."""
    pass


@dataclass(frozen=True)
class Pending:
    duration_token: str


@dataclass(frozen=True)
class Unrecognized:
    raw: str


InterpretedState = Union[NoTarget, TransportError, Ready, Blocked, Pending, Unrecognized]


@dataclass(frozen=True)
class NotificationLatch:
    fired: bool = False


class BadgeColor(str, Enum):
    AMBER = "#9B7617"
    RED = "#FF0000"
    DARK_GRAY = "#222222"


@dataclass(frozen=True)
class BadgeUpdate:
    """Badge instruction. Empty text clears the badge; color None leaves it as is."""
    text: str
    color: Optional[BadgeColor] = None


@dataclass(frozen=True)
class PlaySound:
    url: str
    volume: float  # 0.0-1.0


@dataclass(frozen=True)
class DesktopAlert:
    title: str
    message: str
    icon: str


@dataclass(frozen=True)
class VisualAlert:
    bring_to_foreground: bool = True


SideEffectRequest = Union[PlaySound, DesktopAlert, VisualAlert]
