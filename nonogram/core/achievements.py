from __future__ import annotations

import logging
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List, Optional

from nonogram.core.storage import load_json, save_json

logger = logging.getLogger(__name__)


@dataclass
class PlayStats:
    total_puzzles: int = 0
    total_stars: int = 0
    perfect_puzzles: int = 0
    no_mistake_puzzles: int = 0
    max_size: int = 5
    total_time_ms: int = 0
    longest_streak: int = 0
    total_dailies: int = 0


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    icon: str
    condition: Callable[[PlayStats], bool]


ACHIEVEMENTS: List[Achievement] = [
    Achievement("first_puzzle", "First Steps", "Complete your first puzzle", "🎯", lambda s: s.total_puzzles >= 1),
    Achievement("puzzles_10", "Getting Started", "Complete 10 puzzles", "📊", lambda s: s.total_puzzles >= 10),
    Achievement("puzzles_50", "Puzzle Enthusiast", "Complete 50 puzzles", "🏆", lambda s: s.total_puzzles >= 50),
    Achievement("puzzles_100", "Century", "Complete 100 puzzles", "💯", lambda s: s.total_puzzles >= 100),
    Achievement("stars_10", "Rising Star", "Earn 10 stars", "⭐", lambda s: s.total_stars >= 10),
    Achievement("stars_50", "Star Collector", "Earn 50 stars", "🌟", lambda s: s.total_stars >= 50),
    Achievement("stars_100", "Constellation", "Earn 100 stars", "✨", lambda s: s.total_stars >= 100),
    Achievement("streak_3", "On a Roll", "Maintain a 3-day streak", "🔥", lambda s: s.longest_streak >= 3),
    Achievement("streak_7", "Week Warrior", "Maintain a 7-day streak", "📅", lambda s: s.longest_streak >= 7),
    Achievement("streak_30", "Monthly Master", "Maintain a 30-day streak", "🗓️", lambda s: s.longest_streak >= 30),
    Achievement("daily_1", "Daily Debut", "Complete your first daily challenge", "📆", lambda s: s.total_dailies >= 1),
    Achievement("daily_10", "Daily Devotee", "Complete 10 daily challenges", "📰", lambda s: s.total_dailies >= 10),
    Achievement("perfect_3", "Perfectionist", "Get 3 stars on 3 puzzles", "💎", lambda s: s.perfect_puzzles >= 3),
    Achievement("perfect_10", "Flawless", "Get 3 stars on 10 puzzles", "👑", lambda s: s.perfect_puzzles >= 10),
    Achievement("no_mistakes", "Sharp Mind", "Complete a puzzle with no mistakes", "🧠", lambda s: s.no_mistake_puzzles >= 1),
    Achievement("size_10", "Growing Up", "Complete a 10x10 puzzle", "📐", lambda s: s.max_size >= 10),
    Achievement("size_15", "Big Thinker", "Complete a 15x15 puzzle", "📏", lambda s: s.max_size >= 15),
    Achievement("size_20", "Grandmaster", "Complete a 20x20 puzzle", "🎓", lambda s: s.max_size >= 20),
]


class AchievementStore:
    """Lifetime play stats and the achievements they have unlocked."""

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._stats = PlayStats()
        self._unlocked: List[str] = []
        self._pending: List[Achievement] = []
        self._load()

    @property
    def stats(self) -> PlayStats:
        return self._stats

    @property
    def unlocked_count(self) -> int:
        return len(self._unlocked)

    @property
    def total_count(self) -> int:
        return len(ACHIEVEMENTS)

    def is_unlocked(self, achievement_id: str) -> bool:
        return achievement_id in self._unlocked

    def all_achievements(self) -> List[tuple[Achievement, bool]]:
        return [(a, a.id in self._unlocked) for a in ACHIEVEMENTS]

    def record_puzzle(
        self,
        size: int,
        stars: int,
        mistakes: int,
        time_ms: int,
        longest_streak: int = 0,
        total_dailies: int = 0,
    ) -> List[Achievement]:
        """Fold one completed puzzle into the stats; return achievements it unlocked."""
        s = self._stats
        s.total_puzzles += 1
        s.total_stars += stars
        s.total_time_ms += time_ms
        if stars == 3:
            s.perfect_puzzles += 1
        if mistakes == 0:
            s.no_mistake_puzzles += 1
        s.max_size = max(s.max_size, size)
        s.longest_streak = max(s.longest_streak, longest_streak)
        s.total_dailies = max(s.total_dailies, total_dailies)
        unlocked = self.check_achievements()
        self._save()
        return unlocked

    def check_achievements(self) -> List[Achievement]:
        unlocked: List[Achievement] = []
        for achievement in ACHIEVEMENTS:
            if achievement.id in self._unlocked:
                continue
            if achievement.condition(self._stats):
                self._unlocked.append(achievement.id)
                self._pending.append(achievement)
                unlocked.append(achievement)
                logger.info("Achievement unlocked: %s", achievement.id)
        return unlocked

    def pop_new(self) -> Optional[Achievement]:
        """Next unlocked achievement not yet shown to the player."""
        if not self._pending:
            return None
        return self._pending.pop(0)

    def _load(self) -> None:
        payload = load_json(self._file_path)
        raw_stats = payload.get("stats") or {}
        if isinstance(raw_stats, dict):
            known = {f.name for f in fields(PlayStats)}
            values = {k: int(v) for k, v in raw_stats.items() if k in known}
            self._stats = PlayStats(**values)
        unlocked = payload.get("unlocked") or []
        if isinstance(unlocked, list):
            self._unlocked = [str(a) for a in unlocked]

    def _save(self) -> None:
        save_json(self._file_path, {"unlocked": list(self._unlocked), "stats": asdict(self._stats)})
