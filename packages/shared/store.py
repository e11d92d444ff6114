from __future__ import annotations

import json
import logging
import os
import tempfile
from typing import Any, Optional

from pydantic import ValidationError

from packages.shared.config import AppConfig
from packages.shared.paths import config_path, ensure_app_dirs

log = logging.getLogger(__name__)


class ConfigStore:
    def __init__(self, path=None) -> None:
        if path is None:
            ensure_app_dirs()
            path = config_path()
        self._path = path
        self._last_good: Optional[AppConfig] = None

    def load(self) -> AppConfig:
        """
        Read the settings file.

        Called by the poller every cycle, so a bad read never writes to disk:
        it falls back to the last snapshot that parsed, or to defaults.
        """
        if not self._path.exists():
            cfg = AppConfig()
            self.save(cfg)
            return cfg

        try:
            raw = self._path.read_text(encoding="utf-8")
            data: Any = json.loads(raw)
            cfg = AppConfig.model_validate(data)
        except (OSError, ValueError, ValidationError):
            log.warning("Config at %s is unreadable, using last good settings", self._path)
            return self._last_good or AppConfig()

        self._last_good = cfg
        return cfg

    def save(self, cfg: AppConfig) -> None:
        # Write beside the target and swap it in, so readers never see a partial file
        fd, tmp = tempfile.mkstemp(prefix=".config-", suffix=".json", dir=str(self._path.parent))
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(cfg.model_dump_json(indent=2))
            os.replace(tmp, self._path)
        except BaseException:
            try:
                os.unlink(tmp)
            except OSError:
                pass
            raise
        self._last_good = cfg

    def path(self) -> str:
        return str(self._path)
