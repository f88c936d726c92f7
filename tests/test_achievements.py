"""Tests for nonogram.core.achievements – stats and achievement unlocks."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from nonogram.core.achievements import ACHIEVEMENTS, AchievementStore, PlayStats


@pytest.fixture()
def achievements_file(tmp_path: Path) -> Path:
    return tmp_path / "achievements.json"


@pytest.fixture()
def store(achievements_file: Path) -> AchievementStore:
    return AchievementStore(achievements_file)


# ===========================================================================
# Catalogue
# ===========================================================================

class TestCatalogue:
    def test_ids_unique(self):
        ids = [a.id for a in ACHIEVEMENTS]
        assert len(ids) == len(set(ids))

    def test_nothing_unlocked_by_default_stats(self):
        stats = PlayStats()
        assert [a.id for a in ACHIEVEMENTS if a.condition(stats)] == []


# ===========================================================================
# AchievementStore
# ===========================================================================

class TestRecordPuzzle:
    def test_first_puzzle(self, store: AchievementStore):
        unlocked = store.record_puzzle(size=5, stars=2, mistakes=1, time_ms=30000)
        assert [a.id for a in unlocked] == ["first_puzzle"]
        assert store.is_unlocked("first_puzzle") is True
        assert store.stats.total_puzzles == 1
        assert store.stats.total_stars == 2

    def test_perfect_clean_big_puzzle(self, store: AchievementStore):
        unlocked = {a.id for a in store.record_puzzle(size=10, stars=3, mistakes=0, time_ms=30000)}
        assert unlocked == {"first_puzzle", "no_mistakes", "size_10"}
        assert store.stats.perfect_puzzles == 1
        assert store.stats.no_mistake_puzzles == 1
        assert store.stats.max_size == 10

    def test_unlocks_only_once(self, store: AchievementStore):
        store.record_puzzle(size=5, stars=1, mistakes=2, time_ms=1000)
        assert store.record_puzzle(size=5, stars=1, mistakes=2, time_ms=1000) == []

    def test_streak_and_dailies(self, store: AchievementStore):
        unlocked = {
            a.id for a in store.record_puzzle(size=5, stars=1, mistakes=2, time_ms=1000, longest_streak=3, total_dailies=1)
        }
        assert {"streak_3", "daily_1"} <= unlocked

    def test_streak_never_decreases(self, store: AchievementStore):
        store.record_puzzle(size=5, stars=1, mistakes=2, time_ms=1000, longest_streak=4)
        store.record_puzzle(size=5, stars=1, mistakes=2, time_ms=1000, longest_streak=1)
        assert store.stats.longest_streak == 4

    def test_star_threshold(self, store: AchievementStore):
        for _ in range(4):
            store.record_puzzle(size=5, stars=3, mistakes=0, time_ms=1000)
        assert store.stats.total_stars == 12
        assert store.is_unlocked("stars_10") is True
        assert store.is_unlocked("perfect_3") is True

    def test_counts(self, store: AchievementStore):
        assert store.total_count == len(ACHIEVEMENTS)
        assert store.unlocked_count == 0
        store.record_puzzle(size=5, stars=2, mistakes=1, time_ms=1000)
        assert store.unlocked_count == 1
        flags = dict((a.id, unlocked) for a, unlocked in store.all_achievements())
        assert flags["first_puzzle"] is True
        assert flags["puzzles_10"] is False


class TestPendingQueue:
    def test_pop_new_in_unlock_order(self, store: AchievementStore):
        store.record_puzzle(size=10, stars=3, mistakes=0, time_ms=1000)
        popped = []
        achievement = store.pop_new()
        while achievement is not None:
            popped.append(achievement.id)
            achievement = store.pop_new()
        assert popped == [a.id for a in ACHIEVEMENTS if a.id in {"first_puzzle", "no_mistakes", "size_10"}]

    def test_empty_queue(self, store: AchievementStore):
        assert store.pop_new() is None


class TestPersistence:
    def test_round_trip(self, achievements_file: Path, store: AchievementStore):
        store.record_puzzle(size=10, stars=3, mistakes=0, time_ms=5000)
        reloaded = AchievementStore(achievements_file)
        assert reloaded.stats == store.stats
        assert reloaded.is_unlocked("size_10") is True
        assert reloaded.pop_new() is None

    def test_unknown_stat_keys_ignored(self, achievements_file: Path):
        achievements_file.write_text(
            json.dumps({"stats": {"total_puzzles": 9, "favourite_colour": 3}, "unlocked": ["first_puzzle"]}),
            encoding="utf-8",
        )
        store = AchievementStore(achievements_file)
        assert store.stats.total_puzzles == 9
        unlocked = store.record_puzzle(size=5, stars=1, mistakes=2, time_ms=1000)
        assert [a.id for a in unlocked] == ["puzzles_10"]
