"""Resolve a calendar date to its daily puzzle."""

from __future__ import annotations

import dataclasses
import logging
import re
from datetime import date, timedelta
from pathlib import Path
from typing import Dict, List, Optional, Protocol

import yaml

from nonogram.core.generator import generate_puzzle
from nonogram.core.puzzle import Puzzle

logger = logging.getLogger(__name__)

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

WEEKEND_SIZE = 5
WEEKDAY_SIZE = 10


class OverrideSource(Protocol):
    def resolve_override(self, date_str: str) -> Optional[Puzzle]:
        ...


class NoOverrides:
    """Override source that never supersedes generation."""

    def resolve_override(self, date_str: str) -> Optional[Puzzle]:
        return None


def parse_date_string(value: str) -> date:
    """Parse a strict ``YYYY-MM-DD`` string, raising ValueError otherwise."""
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise ValueError(f"Invalid date format {value!r}. Use YYYY-MM-DD")
    return date.fromisoformat(value)


def format_date(day: date) -> str:
    return day.strftime("%Y-%m-%d")


def daily_seed(date_str: str) -> int:
    """Fold *date_str* through ``h = h * 31 + code`` with signed 32-bit wrap-around."""
    h = 0
    for ch in date_str:
        h = (h * 31 + ord(ch)) & 0xFFFFFFFF
        if h >= 0x80000000:
            h -= 0x100000000
    return abs(h)


def daily_size(date_str: str) -> int:
    """Weekend dailies are 5×5, weekday dailies 10×10."""
    weekday = parse_date_string(date_str).weekday()
    return WEEKEND_SIZE if weekday >= 5 else WEEKDAY_SIZE


class DailyResolver:
    """Maps dates to puzzles: scheduled overrides first, then the generator."""

    def __init__(self, overrides: Optional[OverrideSource] = None) -> None:
        self._overrides = overrides or NoOverrides()

    def resolve(self, date_str: str) -> Puzzle:
        override = self._overrides.resolve_override(date_str)
        if override is not None:
            return dataclasses.replace(override, date=date_str, is_override=True)
        puzzle = generate_puzzle(daily_seed(date_str), daily_size(date_str))
        return dataclasses.replace(puzzle, date=date_str)

    def resolve_range(self, start: str, end: str) -> List[Puzzle]:
        """Resolve every date from *start* to *end* inclusive, in order."""
        current = parse_date_string(start)
        last = parse_date_string(end)
        puzzles: List[Puzzle] = []
        while current <= last:
            puzzles.append(self.resolve(format_date(current)))
            current += timedelta(days=1)
        return puzzles


class ScheduledPuzzleRepository:
    """Hand-made daily puzzles keyed by date, loaded from ``data/daily/schedule.yaml``."""

    def __init__(self, schedule_path: Optional[Path] = None) -> None:
        if schedule_path is None:
            schedule_path = Path(__file__).resolve().parent.parent / "data" / "daily" / "schedule.yaml"
        self._schedule_path = schedule_path
        self._puzzles = self._load_schedule()

    def dates(self) -> List[str]:
        return sorted(self._puzzles)

    def resolve_override(self, date_str: str) -> Optional[Puzzle]:
        return self._puzzles.get(date_str)

    def _load_schedule(self) -> Dict[str, Puzzle]:
        if not self._schedule_path.exists():
            logger.info("No daily schedule at %s", self._schedule_path)
            return {}
        raw = yaml.safe_load(self._schedule_path.read_text(encoding="utf-8")) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"{self._schedule_path.name}: expected a mapping of dates to puzzles")

        puzzles: Dict[str, Puzzle] = {}
        for key, body in raw.items():
            # YAML reads unquoted dates as date objects.
            date_str = format_date(key) if isinstance(key, date) else str(key)
            parse_date_string(date_str)
            if not isinstance(body, dict):
                raise ValueError(f"{self._schedule_path.name}: entry {date_str} must be a mapping")
            puzzles[date_str] = Puzzle.from_dict(body, id=f"daily_{date_str}", date=date_str)
        return puzzles
