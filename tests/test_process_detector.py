"""Tests for browser process discovery."""

from __future__ import annotations

import psutil

from packages.core.target import process_detector


class FakeProc:
    def __init__(self, name) -> None:
        self.info = {"name": name}


def test_browser_running_matches_known_executables(monkeypatch) -> None:
    monkeypatch.setattr(psutil, "process_iter", lambda attrs=None: [FakeProc("bash"), FakeProc("Chrome.exe")])
    assert process_detector.browser_running() is True


def test_no_browser(monkeypatch) -> None:
    monkeypatch.setattr(psutil, "process_iter", lambda attrs=None: [FakeProc("bash"), FakeProc(None)])
    assert process_detector.running_exe_names_lower() == {"bash"}
    assert process_detector.browser_running() is False
