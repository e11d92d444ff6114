"""
Settings window: notification options plus a live view of the poller.
"""

from __future__ import annotations

import logging
from PySide6.QtCore import QTimer, Signal
from PySide6.QtWidgets import (
    QCheckBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QMainWindow,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from packages.core.horn.scheduler import CycleResult, PollScheduler
from packages.core.horn.types import Blocked, NoTarget, Pending, Ready, TransportError, Unrecognized
from packages.core.logging_ import setup_logging
from packages.shared.config import AppConfig
from packages.shared.store import ConfigStore

from .components import Card, PrimaryButton, StatusPill
from .theme import Theme

log = logging.getLogger(__name__)

MAX_EVENTS = 200


def describe_state(state) -> str:
    if isinstance(state, NoTarget):
        return "No game tab"
    if isinstance(state, TransportError):
        return "Tab not responding"
    if isinstance(state, Ready):
        return "Horn ready"
    if isinstance(state, Blocked):
        return "King's Reward / logged out"
    if isinstance(state, Pending):
        return f"Next horn in {state.duration_token}"
    if isinstance(state, Unrecognized):
        return f"Timer: {state.raw}"
    return "Waiting"


class SettingsWindow(QMainWindow):
    _cycle_done = Signal(object)

    def __init__(self, store: ConfigStore, scheduler: PollScheduler) -> None:
        super().__init__()
        self.setWindowTitle("Horn Watch")
        self.resize(640, 620)

        self.theme = Theme("dark")
        self._dark_mode_enabled = True
        self.store = store
        self.scheduler = scheduler
        self.cfg: AppConfig = self.store.load()
        self._last_label = ""

        self._build_ui()
        self.setStyleSheet(self.theme.get_stylesheet())
        self._load_to_ui()

        self._cycle_done.connect(self._on_cycle)
        self.scheduler.on_cycle(self._cycle_done.emit)
        self.scheduler.on_error(lambda msg: log.error("Poll error: %s", msg))

        self._status_timer = QTimer(self)
        self._status_timer.timeout.connect(self._refresh_status)
        self._status_timer.start(800)

    def _toggle_dark_mode(self, checked: bool) -> None:
        if checked != self._dark_mode_enabled:
            self.theme.toggle_mode()
            self._dark_mode_enabled = checked
            self.setStyleSheet(self.theme.get_stylesheet())

    def _build_ui(self) -> None:
        root = QWidget()
        root.setObjectName("Root")
        self.setCentralWidget(root)
        layout = QVBoxLayout(root)
        layout.setContentsMargins(24, 24, 24, 24)
        layout.setSpacing(16)

        title = QLabel("Horn Watch")
        title.setObjectName("TitleLabel")
        layout.addWidget(title)

        status_row = QHBoxLayout()
        self.status_pill = StatusPill("STOPPED")
        status_row.addWidget(self.status_pill)
        self.state_pill = StatusPill("No game tab")
        status_row.addWidget(self.state_pill)
        status_row.addStretch()
        layout.addLayout(status_row)

        card = Card()
        section = QLabel("When the horn is ready")
        section.setObjectName("SectionLabel")
        card.layout.addWidget(section)

        self.chk_timer = QCheckBox("Show the hunt timer on the tray icon")
        self.chk_sound = QCheckBox("Play a sound")
        self.chk_desktop = QCheckBox("Show a desktop notification")
        self.chk_visual = QCheckBox("Switch to the game tab and show an alert")
        for chk in (self.chk_timer, self.chk_sound, self.chk_desktop, self.chk_visual):
            card.layout.addWidget(chk)

        sound_row = QHBoxLayout()
        sound_row.addWidget(QLabel("Sound URL:"))
        self.sound_url = QLineEdit()
        self.sound_url.setPlaceholderText("Leave empty for the bundled bell")
        sound_row.addWidget(self.sound_url, 1)
        sound_row.addWidget(QLabel("Volume (%):"))
        self.spin_volume = QSpinBox()
        self.spin_volume.setRange(0, 100)
        self.spin_volume.setSingleStep(5)
        sound_row.addWidget(self.spin_volume)
        card.layout.addLayout(sound_row)

        self.chk_crowns = QCheckBox("Track crowns")
        card.layout.addWidget(self.chk_crowns)
        self.chk_debug = QCheckBox("Debug logging")
        card.layout.addWidget(self.chk_debug)
        self.chk_dark_mode = QCheckBox("Dark mode")
        self.chk_dark_mode.setChecked(self._dark_mode_enabled)
        self.chk_dark_mode.toggled.connect(self._toggle_dark_mode)
        card.layout.addWidget(self.chk_dark_mode)

        hint = QLabel("Start the browser with --remote-debugging-port=9222 so the game tab can be found.")
        hint.setObjectName("HintLabel")
        hint.setWordWrap(True)
        card.layout.addWidget(hint)

        self.btn_save = PrimaryButton("Save Settings")
        self.btn_save.clicked.connect(self._save_config)
        card.layout.addWidget(self.btn_save)
        layout.addWidget(card)

        self.events = QListWidget()
        layout.addWidget(self.events, 1)

    def _load_to_ui(self) -> None:
        self.chk_timer.setChecked(self.cfg.show_timer)
        self.chk_sound.setChecked(self.cfg.notify_sound)
        self.chk_desktop.setChecked(self.cfg.notify_desktop)
        self.chk_visual.setChecked(self.cfg.notify_visual)
        self.sound_url.setText(self.cfg.sound_url)
        self.spin_volume.setValue(self.cfg.sound_volume)
        self.chk_crowns.setChecked(self.cfg.track_crowns)
        self.chk_debug.setChecked(self.cfg.debug_logging)

    def _refresh_status(self) -> None:
        state = self.scheduler.get_state()
        running = state.status == "RUNNING"
        self.status_pill.setText(state.status)
        self.status_pill.set_active(running)
        self.state_pill.setText(describe_state(state.last_state))
        self.state_pill.set_active(isinstance(state.last_state, Ready))
        # objectName changes need a restyle
        self.setStyleSheet(self.theme.get_stylesheet())

    def _append_event(self, line: str) -> None:
        self.events.insertItem(0, QListWidgetItem(line))
        while self.events.count() > MAX_EVENTS:
            self.events.takeItem(self.events.count() - 1)

    def _on_cycle(self, result: CycleResult) -> None:
        label = describe_state(result.state)
        if label != self._last_label and not isinstance(result.state, Pending):
            self._append_event(label)
        self._last_label = label
        for effect in result.effects:
            self._append_event(f"Sent {type(effect).__name__}")

    def _save_config(self) -> None:
        self.cfg = self.cfg.model_copy(update={
            "show_timer": self.chk_timer.isChecked(),
            "notify_sound": self.chk_sound.isChecked(),
            "notify_desktop": self.chk_desktop.isChecked(),
            "notify_visual": self.chk_visual.isChecked(),
            "sound_url": self.sound_url.text().strip(),
            "sound_volume": int(self.spin_volume.value()),
            "track_crowns": self.chk_crowns.isChecked(),
            "debug_logging": self.chk_debug.isChecked(),
        })
        self.store.save(self.cfg)
        setup_logging(debug=self.cfg.debug_logging)
        # The poller reads the file every cycle, so no restart is needed
        self._append_event("Config saved.")
