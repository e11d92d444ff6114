from __future__ import annotations

from typing import List
from pydantic import BaseModel, ConfigDict, Field

MOUSEHUNT_URL_PATTERNS = [
    "*://www.mousehuntgame.com/*",
    "*://apps.facebook.com/mousehunt/*",
]


class AppConfig(BaseModel):
    """
    Settings snapshot read once per poll cycle.
    Frozen: edits go through model_copy(update=...) and ConfigStore.save().
    """
    model_config = ConfigDict(frozen=True)

    show_timer: bool = True
    notify_sound: bool = False
    notify_desktop: bool = False
    notify_visual: bool = False
    sound_url: str = ""  # empty -> bundled bell
    sound_volume: int = Field(default=100, ge=0, le=100)

    track_crowns: bool = True
    debug_logging: bool = False
    poll_interval_ms: int = Field(default=1000, ge=250)
    devtools_url: str = "http://127.0.0.1:9222"
    target_patterns: List[str] = Field(default_factory=lambda: list(MOUSEHUNT_URL_PATTERNS))
