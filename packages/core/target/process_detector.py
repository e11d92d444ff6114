from __future__ import annotations

from typing import Iterable

import psutil

# Chromium-based browsers that expose the DevTools endpoint
BROWSER_EXES = frozenset({
    "chrome", "chrome.exe",
    "chromium", "chromium-browser",
    "msedge", "msedge.exe",
    "brave", "brave.exe",
    "google chrome",
})


def running_exe_names_lower() -> set[str]:
    names: set[str] = set()
    for p in psutil.process_iter(attrs=["name"]):
        try:
            n = p.info.get("name")
            if n:
                names.add(str(n).lower())
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
    return names


def browser_running(exe_names: Iterable[str] = BROWSER_EXES) -> bool:
    return not running_exe_names_lower().isdisjoint(exe_names)
