"""
Horn timer poller.

Every tick reads the settings, finds the game tab, asks it for the hunt
timer, and applies the result: horn alerts first, then the badge. Ticks are
handed to a small worker pool, so a tab that never answers delays only its
own cycle; once every worker is stuck, further ticks are skipped.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Callable, Literal, Optional, Protocol, Tuple

from packages.core.target.types import StatusRequester, Target, TargetLocator
from packages.shared.config import AppConfig

from .errors import TransportFailure
from .interpreter import interpret
from .notifications import decide
from .render import render
from .types import (
    Absence,
    BadgeUpdate,
    DesktopAlert,
    InterpretedState,
    NotificationLatch,
    PlaySound,
    RawStatus,
    SideEffectRequest,
    VisualAlert,
)

log = logging.getLogger(__name__)


class BadgeSink(Protocol):
    def show(self, update: BadgeUpdate) -> None:
        ...


class SoundPlayer(Protocol):
    def play(self, url: str, volume: float) -> None:
        ...


class Notifier(Protocol):
    def notify(self, title: str, body: str, icon: str) -> None:
        ...


class VisualAlerter(Protocol):
    def show(self, target: Target, bring_to_foreground: bool = True) -> None:
        ...


@dataclass(frozen=True)
class CycleResult:
    state: InterpretedState
    effects: Tuple[SideEffectRequest, ...]
    badge: Optional[BadgeUpdate]
    latch: NotificationLatch


@dataclass
class SchedulerState:
    status: Literal["STOPPED", "RUNNING"] = "STOPPED"
    last_state: Optional[InterpretedState] = None
    last_badge: Optional[BadgeUpdate] = None
    cycles: int = 0
    failed_cycles: int = 0
    skipped_ticks: int = 0


class PollScheduler:
    def __init__(
        self,
        config_provider: Callable[[], AppConfig],
        locator: TargetLocator,
        requester: StatusRequester,
        badge_sink: Optional[BadgeSink] = None,
        sound: Optional[SoundPlayer] = None,
        notifier: Optional[Notifier] = None,
        visual: Optional[VisualAlerter] = None,
        max_workers: int = 4,
    ) -> None:
        self._config_provider = config_provider
        self._locator = locator
        self._requester = requester
        self._badge_sink = badge_sink
        self._sound = sound
        self._notifier = notifier
        self._visual = visual
        self._max_workers = max_workers

        self._latch = NotificationLatch()
        self._state = SchedulerState()
        self._interval_s = 1.0
        self._in_flight = 0
        self._lock = threading.Lock()

        self._cycle_cb: Optional[Callable[[CycleResult], None]] = None
        self._error_cb: Optional[Callable[[str], None]] = None

        self._thread: Optional[threading.Thread] = None
        self._pool: Optional[ThreadPoolExecutor] = None
        self._stop_evt = threading.Event()

    def on_cycle(self, cb: Callable[[CycleResult], None]) -> None:
        self._cycle_cb = cb

    def on_error(self, cb: Callable[[str], None]) -> None:
        self._error_cb = cb

    @property
    def latch(self) -> NotificationLatch:
        with self._lock:
            return self._latch

    def get_state(self) -> SchedulerState:
        with self._lock:
            return replace(self._state)

    def start(self) -> None:
        with self._lock:
            if self._state.status == "RUNNING":
                return
            self._state.status = "RUNNING"
            self._in_flight = 0

        self._stop_evt.clear()
        self._pool = ThreadPoolExecutor(max_workers=self._max_workers, thread_name_prefix="PollCycle")
        self._thread = threading.Thread(target=self._run, name="PollScheduler", daemon=True)
        self._thread.start()
        log.info("Poll scheduler started")

    def stop(self) -> None:
        self._stop_evt.set()
        with self._lock:
            self._state.status = "STOPPED"
        if self._pool is not None:
            self._pool.shutdown(wait=False, cancel_futures=True)
            self._pool = None
        log.info("Poll scheduler stopped")

    def run_cycle(self) -> CycleResult:
        """Run one poll cycle to completion and apply its decision."""
        config = self._config_provider()
        raw, target = self._observe(config)
        state = interpret(raw)

        with self._lock:
            decision = decide(state, config, self._latch)
            self._latch = decision.latch
            self._interval_s = config.poll_interval_ms / 1000.0

        for effect in decision.effects:
            self._dispatch(effect, target)

        badge = render(state, config)
        if badge is not None and self._badge_sink is not None:
            try:
                self._badge_sink.show(badge)
            except Exception:
                log.exception("Failed to update badge")

        with self._lock:
            self._state.last_state = state
            if badge is not None:
                self._state.last_badge = badge
            self._state.cycles += 1

        result = CycleResult(state=state, effects=decision.effects, badge=badge, latch=decision.latch)
        if self._cycle_cb:
            self._cycle_cb(result)
        return result

    def _observe(self, config: AppConfig) -> Tuple[RawStatus, Optional[Target]]:
        target = self._locator.find(config.target_patterns)
        if target is None:
            return Absence.TARGET_ABSENT, None
        if not target.complete:
            return Absence.TARGET_LOADING, target
        try:
            return self._requester.request_status(target), target
        except TransportFailure as e:
            log.info("Error occurred while updating badge icon timer (tab %s): %s", target.id, e)
            return Absence.TRANSPORT_FAILURE, target

    def _dispatch(self, effect: SideEffectRequest, target: Optional[Target]) -> None:
        try:
            if isinstance(effect, PlaySound):
                if self._sound is not None:
                    self._sound.play(effect.url, effect.volume)
            elif isinstance(effect, DesktopAlert):
                if self._notifier is not None:
                    self._notifier.notify(effect.title, effect.message, effect.icon)
            elif isinstance(effect, VisualAlert):
                if self._visual is not None and target is not None:
                    self._visual.show(target, bring_to_foreground=effect.bring_to_foreground)
        except Exception:
            log.exception("Failed to deliver %s", type(effect).__name__)

    def _safe_cycle(self) -> None:
        try:
            self.run_cycle()
        except Exception as e:
            log.exception("Poll cycle error")
            with self._lock:
                self._state.failed_cycles += 1
            if self._error_cb:
                self._error_cb(str(e))
        finally:
            with self._lock:
                self._in_flight = max(0, self._in_flight - 1)

    def _claim_worker(self) -> bool:
        """Reserve a worker for a new cycle, or count the tick as skipped."""
        with self._lock:
            if self._in_flight >= self._max_workers:
                self._state.skipped_ticks += 1
                return False
            self._in_flight += 1
            return True

    def _run(self) -> None:
        """
        Tick loop. Cycles are submitted without waiting on earlier ones, but
        never more than max_workers at a time: while every worker is stuck on
        an unresponsive tab, ticks are dropped instead of queued.
        """
        while not self._stop_evt.is_set():
            started = time.monotonic()
            pool = self._pool
            if pool is None:
                break
            if not self._claim_worker():
                log.debug("All %d poll workers busy, skipping tick", self._max_workers)
            else:
                try:
                    pool.submit(self._safe_cycle)
                except RuntimeError:
                    # Pool shut down between the check and the submit
                    break

            with self._lock:
                interval = self._interval_s
            self._stop_evt.wait(max(0.0, interval - (time.monotonic() - started)))
