"""Tests for the horn notification latch."""

from __future__ import annotations

from packages.core.horn.notifications import ALERT_MESSAGE, ALERT_TITLE, decide
from packages.core.horn.types import (
    Blocked,
    DesktopAlert,
    NoTarget,
    NotificationLatch,
    Pending,
    PlaySound,
    Ready,
    TransportError,
    Unrecognized,
    VisualAlert,
)
from packages.shared.config import AppConfig
from packages.shared.paths import default_sound_path

ALL_ON = AppConfig(notify_sound=True, notify_desktop=True, notify_visual=True, sound_volume=75)


def bursts(states, config=ALL_ON) -> list:
    latch = NotificationLatch()
    out = []
    for state in states:
        decision = decide(state, config, latch)
        latch = decision.latch
        out.append(decision.effects)
    return out


def test_ready_streak_fires_once() -> None:
    out = bursts([Ready(), Ready(), Ready()])
    assert [bool(e) for e in out] == [True, False, False]


def test_non_ready_between_readies_rearms() -> None:
    out = bursts([Ready(), Pending("3m"), Ready()])
    assert [bool(e) for e in out] == [True, False, True]


def test_transient_error_rearms() -> None:
    for interruption in (NoTarget(), TransportError(), Unrecognized("??")):
        out = bursts([Ready(), interruption, Ready()])
        assert sum(1 for e in out if e) == 2


def test_blocked_sets_latch_without_effects() -> None:
    decision = decide(Blocked(), ALL_ON, NotificationLatch())
    assert decision.effects == ()
    assert decision.latch.fired is True

    # Ready right after Blocked stays quiet
    assert bursts([Blocked(), Ready()]) == [(), ()]


def test_burst_contents_and_order() -> None:
    decision = decide(Ready(), ALL_ON, NotificationLatch())
    sound, desktop, visual = decision.effects
    assert sound == PlaySound(url=default_sound_path().as_uri(), volume=0.75)
    assert isinstance(desktop, DesktopAlert)
    assert (desktop.title, desktop.message, desktop.icon) == (ALERT_TITLE, ALERT_MESSAGE, "")
    assert visual == VisualAlert(bring_to_foreground=True)


def test_custom_sound_and_volume_rounding() -> None:
    cfg = AppConfig(notify_sound=True, sound_url="file:///tmp/horn.mp3", sound_volume=33)
    (effect,) = decide(Ready(), cfg, NotificationLatch()).effects
    assert effect == PlaySound(url="file:///tmp/horn.mp3", volume=0.33)


def test_zero_volume_skips_sound() -> None:
    cfg = AppConfig(notify_sound=True, sound_volume=0)
    decision = decide(Ready(), cfg, NotificationLatch())
    assert decision.effects == ()
    assert decision.latch.fired is True


def test_nothing_enabled_still_latches() -> None:
    decision = decide(Ready(), AppConfig(), NotificationLatch())
    assert decision.effects == ()
    assert decision.latch == NotificationLatch(fired=True)
