"""
Tray badge and horn alert delivery.

The poll scheduler calls these from worker threads, so every public method
only emits a signal; the actual Qt work runs on the GUI thread.
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QObject, QRectF, Qt, QUrl, Signal, Slot
from PySide6.QtGui import QColor, QFont, QIcon, QPainter, QPixmap
from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer
from PySide6.QtWidgets import QSystemTrayIcon

from packages.core.horn.types import BadgeColor, BadgeUpdate

from .theme import COLOR_ACCENTS

log = logging.getLogger(__name__)

ICON_SIZE = 64


class TrayBadge(QObject):
    """System tray icon: a plain disc with a small text badge over it."""

    _badge_requested = Signal(object)
    _alert_requested = Signal(str, str, str)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._text = ""
        self._color = QColor(BadgeColor.DARK_GRAY.value)

        self.tray = QSystemTrayIcon(self)
        self.tray.setIcon(self._paint())
        self.tray.setToolTip("Horn Watch")

        self._badge_requested.connect(self._apply_badge)
        self._alert_requested.connect(self._show_alert)

    def show(self, update: BadgeUpdate) -> None:
        self._badge_requested.emit(update)

    def notify(self, title: str, body: str, icon: str) -> None:
        self._alert_requested.emit(title, body, icon)

    @Slot(object)
    def _apply_badge(self, update: BadgeUpdate) -> None:
        if update.color is not None:
            self._color = QColor(update.color.value)
        self._text = update.text
        self.tray.setIcon(self._paint())
        self.tray.setToolTip(f"Horn Watch - {update.text}" if update.text else "Horn Watch")

    @Slot(str, str, str)
    def _show_alert(self, title: str, body: str, icon: str) -> None:
        pix = QPixmap(icon) if icon else QPixmap()
        if pix.isNull():
            self.tray.showMessage(title, body, QSystemTrayIcon.MessageIcon.Information, 6000)
        else:
            self.tray.showMessage(title, body, QIcon(pix), 6000)

    def _paint(self) -> QIcon:
        pix = QPixmap(ICON_SIZE, ICON_SIZE)
        pix.fill(Qt.transparent)
        p = QPainter(pix)
        p.setRenderHint(QPainter.Antialiasing)

        p.setBrush(QColor(COLOR_ACCENTS["brown"]))
        p.setPen(Qt.NoPen)
        p.drawEllipse(4, 4, ICON_SIZE - 8, ICON_SIZE - 8)

        if self._text:
            # Badge strip across the bottom half, like a browser action badge
            rect = QRectF(0, ICON_SIZE * 0.45, ICON_SIZE, ICON_SIZE * 0.55)
            p.setBrush(self._color)
            p.setPen(Qt.NoPen)
            p.drawRoundedRect(rect, 8, 8)
            font = QFont()
            font.setBold(True)
            font.setPixelSize(int(ICON_SIZE * 0.36))
            p.setFont(font)
            p.setPen(QColor("#FFFFFF"))
            p.drawText(rect, Qt.AlignCenter, self._text)

        p.end()
        return QIcon(pix)


class QtSoundPlayer(QObject):
    """Plays the horn sound through QtMultimedia."""

    _play_requested = Signal(str, float)

    def __init__(self, parent: Optional[QObject] = None) -> None:
        super().__init__(parent)
        self._audio = QAudioOutput(self)
        self._player = QMediaPlayer(self)
        self._player.setAudioOutput(self._audio)
        self._player.errorOccurred.connect(self._on_error)
        self._play_requested.connect(self._play)

    def play(self, url: str, volume: float) -> None:
        self._play_requested.emit(url, volume)

    @Slot(str, float)
    def _play(self, url: str, volume: float) -> None:
        self._audio.setVolume(volume)
        self._player.setSource(QUrl(url))
        self._player.play()

    def _on_error(self, error, message: str) -> None:
        log.error("Failed to play sound: %s", message)
