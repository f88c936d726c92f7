"""Environment-driven configuration."""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import Optional


def user_data_dir() -> Path:
    """Directory holding progress, daily, achievement and settings files."""
    override = os.environ.get("NONOGRAM_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".nonogram"


def unlock_all_packs() -> bool:
    return os.environ.get("NONOGRAM_UNLOCK_ALL") == "1"


def today_override() -> Optional[date]:
    """Date from ``NONOGRAM_DATE`` (YYYY-MM-DD), used in place of the local date."""
    value = os.environ.get("NONOGRAM_DATE")
    if not value:
        return None
    return date.fromisoformat(value)


def local_today() -> date:
    return today_override() or date.today()


def creations_dir() -> Path:
    """Where puzzles made in the editor are saved."""
    return user_data_dir() / "creations"
