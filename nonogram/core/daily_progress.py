from __future__ import annotations

import logging
from dataclasses import dataclass, asdict
from datetime import date, timedelta
from pathlib import Path
from typing import Callable, Dict, List, Optional

from nonogram.core.config import local_today
from nonogram.core.daily import format_date
from nonogram.core.storage import load_json, save_json

logger = logging.getLogger(__name__)


@dataclass
class DailyResult:
    stars: int
    time_ms: int
    mistakes: int


@dataclass(frozen=True)
class CalendarDay:
    date: str
    day_name: str
    day_num: int
    completed: bool
    stars: int
    is_today: bool


class DailyProgressStore:
    """Daily challenge completions and the play streak.

    Dates are local calendar days as ``YYYY-MM-DD``. Only the first
    completion of a day is recorded; later ones that day are ignored.
    """

    def __init__(self, file_path: Path, today: Optional[Callable[[], date]] = None) -> None:
        self._file_path = file_path
        self._today = today or local_today
        self._completed: Dict[str, DailyResult] = {}
        self._current_streak = 0
        self._longest_streak = 0
        self._last_played: Optional[str] = None
        self._load()
        self.refresh_streak()

    @property
    def current_streak(self) -> int:
        return self._current_streak

    @property
    def longest_streak(self) -> int:
        return self._longest_streak

    @property
    def last_played_date(self) -> Optional[str]:
        return self._last_played

    @property
    def total_completed(self) -> int:
        return len(self._completed)

    def today_string(self) -> str:
        return format_date(self._today())

    def _yesterday_string(self) -> str:
        return format_date(self._today() - timedelta(days=1))

    def is_today_completed(self) -> bool:
        return self.today_string() in self._completed

    def today_result(self) -> Optional[DailyResult]:
        return self._completed.get(self.today_string())

    def result_for(self, date_str: str) -> Optional[DailyResult]:
        return self._completed.get(date_str)

    def complete_daily(self, stars: int, time_ms: int, mistakes: int) -> bool:
        """Record today's result and advance the streak. Returns False if today was already recorded."""
        today = self.today_string()
        if today in self._completed:
            return False

        self._completed[today] = DailyResult(stars=stars, time_ms=time_ms, mistakes=mistakes)
        if self._last_played is None or self._last_played == self._yesterday_string():
            self._current_streak += 1
        elif self._last_played != today:
            self._current_streak = 1
        self._longest_streak = max(self._longest_streak, self._current_streak)
        self._last_played = today
        logger.info("Daily %s completed, streak %d", today, self._current_streak)
        self._save()
        return True

    def refresh_streak(self) -> None:
        """Drop the current streak if the last daily was before yesterday."""
        if self._last_played is None:
            return
        if self._last_played in (self.today_string(), self._yesterday_string()):
            return
        if self._current_streak != 0:
            self._current_streak = 0
            self._save()

    def week_calendar(self) -> List[CalendarDay]:
        """The last seven days, oldest first, ending today."""
        today = self._today()
        days: List[CalendarDay] = []
        for offset in range(6, -1, -1):
            day = today - timedelta(days=offset)
            key = format_date(day)
            result = self._completed.get(key)
            days.append(
                CalendarDay(
                    date=key,
                    day_name=day.strftime("%a"),
                    day_num=day.day,
                    completed=result is not None,
                    stars=result.stars if result else 0,
                    is_today=offset == 0,
                )
            )
        return days

    def _load(self) -> None:
        payload = load_json(self._file_path)
        for key, value in (payload.get("completed") or {}).items():
            if isinstance(value, dict):
                self._completed[key] = DailyResult(
                    stars=int(value.get("stars", 0)),
                    time_ms=int(value.get("time_ms", 0)),
                    mistakes=int(value.get("mistakes", 0)),
                )
        self._current_streak = int(payload.get("current_streak", 0))
        self._longest_streak = int(payload.get("longest_streak", 0))
        last = payload.get("last_played_date")
        self._last_played = str(last) if last else None

    def _save(self) -> None:
        payload = {
            "completed": {key: asdict(value) for key, value in self._completed.items()},
            "current_streak": self._current_streak,
            "longest_streak": self._longest_streak,
            "last_played_date": self._last_played,
        }
        save_json(self._file_path, payload)
