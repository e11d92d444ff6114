"""
Horn notification dedup.

The latch is armed until the first Ready observation fires the configured
alerts, then stays fired for the rest of that Ready streak. Any non-Ready,
non-Blocked observation re-arms it, so a tab that flaps between Ready and an
error will alert again on the next Ready.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from packages.shared.config import AppConfig
from packages.shared.paths import default_sound_path

from .types import (
    Blocked,
    DesktopAlert,
    InterpretedState,
    NotificationLatch,
    PlaySound,
    Ready,
    SideEffectRequest,
    VisualAlert,
)

ALERT_TITLE = "Horn Watch"
ALERT_MESSAGE = "MouseHunt Horn is ready!!! Good luck!"


@dataclass(frozen=True)
class Decision:
    effects: Tuple[SideEffectRequest, ...]
    latch: NotificationLatch


def _horn_effects(config: AppConfig) -> Tuple[SideEffectRequest, ...]:
    effects = []
    if config.notify_sound and config.sound_volume > 0:
        url = config.sound_url or default_sound_path().as_uri()
        effects.append(PlaySound(url=url, volume=round(config.sound_volume / 100, 2)))
    if config.notify_desktop:
        effects.append(DesktopAlert(title=ALERT_TITLE, message=ALERT_MESSAGE, icon=""))
    if config.notify_visual:
        effects.append(VisualAlert(bring_to_foreground=True))
    return tuple(effects)


def decide(state: InterpretedState, config: AppConfig, latch: NotificationLatch) -> Decision:
    if isinstance(state, Ready):
        if latch.fired:
            return Decision(effects=(), latch=latch)
        return Decision(effects=_horn_effects(config), latch=NotificationLatch(fired=True))
    if isinstance(state, Blocked):
        return Decision(effects=(), latch=NotificationLatch(fired=True))
    return Decision(effects=(), latch=NotificationLatch(fired=False))
