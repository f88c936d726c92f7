from __future__ import annotations

import logging
from dataclasses import dataclass, asdict, fields, replace
from pathlib import Path
from typing import Any, Dict

from nonogram.core.storage import load_json, save_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    show_timer: bool = True
    show_mistakes: bool = True
    highlight_completed: bool = True
    # Kept so settings files from other clients round-trip; the desktop UI
    # neither shows nor applies them.
    auto_mark: bool = False
    dark_mode: bool = False


# Settings the desktop UI applies, with their toggle labels.
DISPLAY_SETTINGS: Dict[str, str] = {
    "show_timer": "Show timer",
    "show_mistakes": "Show mistakes",
    "highlight_completed": "Highlight solved lines",
}


class SettingsStore:
    """User preferences, saved to ``settings.json`` whenever they change."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._settings = self._load()

    @property
    def settings(self) -> Settings:
        return self._settings

    def update(self, **changes: Any) -> Settings:
        known = {f.name for f in fields(Settings)}
        for key in [k for k in changes if k not in known]:
            logger.warning("Ignoring unknown setting %r", key)
            del changes[key]
        if changes:
            self._settings = replace(self._settings, **{k: bool(v) for k, v in changes.items()})
            self._save()
        return self._settings

    def _load(self) -> Settings:
        payload = load_json(self._file_path)
        known = {f.name for f in fields(Settings)}
        return Settings(**{k: bool(v) for k, v in payload.items() if k in known})

    def _save(self) -> None:
        save_json(self._file_path, asdict(self._settings))
