"""Tests for nonogram.core.daily – date to puzzle resolution."""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Optional

import pytest

from nonogram.core.daily import (
    DailyResolver,
    NoOverrides,
    ScheduledPuzzleRepository,
    daily_seed,
    daily_size,
    format_date,
    parse_date_string,
)
from nonogram.core.generator import DAILY_COLORS, generate_solution
from nonogram.core.puzzle import Puzzle


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _FixedOverrides:
    def __init__(self, puzzles: dict[str, Puzzle]) -> None:
        self._puzzles = puzzles

    def resolve_override(self, date_str: str) -> Optional[Puzzle]:
        return self._puzzles.get(date_str)


def _write_schedule(tmp_path: Path, content: str) -> Path:
    path = tmp_path / "schedule.yaml"
    path.write_text(content, encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Date helpers
# ---------------------------------------------------------------------------

class TestDateStrings:
    def test_parse_valid(self):
        assert parse_date_string("2024-01-06") == date(2024, 1, 6)

    @pytest.mark.parametrize("value", ["2024-1-6", "06-01-2024", "2024/01/06", "", "2024-01-06T00:00"])
    def test_parse_rejects_bad_format(self, value: str):
        with pytest.raises(ValueError):
            parse_date_string(value)

    def test_parse_rejects_impossible_date(self):
        with pytest.raises(ValueError):
            parse_date_string("2024-02-30")

    def test_format_zero_pads(self):
        assert format_date(date(2024, 3, 7)) == "2024-03-07"


# ---------------------------------------------------------------------------
# daily_seed / daily_size
# ---------------------------------------------------------------------------

class TestDailySeed:
    def test_short_strings(self):
        assert daily_seed("a") == 97
        assert daily_seed("ab") == 97 * 31 + 98

    def test_deterministic(self):
        assert daily_seed("2024-01-06") == daily_seed("2024-01-06")

    def test_adjacent_dates_differ(self):
        assert daily_seed("2024-01-06") != daily_seed("2024-01-07")

    @pytest.mark.parametrize(
        "date_str, expected",
        [
            ("2024-01-06", 613341627),
            ("2024-01-01", 613341632),
            ("2025-03-14", 274221665),
            ("2099-12-31", 1155066661),
        ],
    )
    def test_matches_browser_client(self, date_str: str, expected: int):
        assert daily_seed(date_str) == expected

    @pytest.mark.parametrize("day", range(1, 29))
    def test_non_negative_and_32_bit(self, day: int):
        seed = daily_seed(f"2025-02-{day:02d}")
        assert 0 <= seed <= 2**31


class TestDailySize:
    def test_saturday_is_small(self):
        assert daily_size("2024-01-06") == 5

    def test_sunday_is_small(self):
        assert daily_size("2024-01-07") == 5

    def test_monday_is_large(self):
        assert daily_size("2024-01-08") == 10

    def test_friday_is_large(self):
        assert daily_size("2024-01-05") == 10

    def test_bad_date(self):
        with pytest.raises(ValueError):
            daily_size("not-a-date")


# ---------------------------------------------------------------------------
# DailyResolver
# ---------------------------------------------------------------------------

class TestDailyResolver:
    def test_generated_daily(self):
        puzzle = DailyResolver().resolve("2024-01-08")
        seed = daily_seed("2024-01-08")
        assert puzzle.size == 10
        assert puzzle.date == "2024-01-08"
        assert puzzle.is_override is False
        assert puzzle.id == f"daily_{seed}"
        assert puzzle.color == DAILY_COLORS[seed % 8]
        assert [list(row) for row in puzzle.solution] == generate_solution(seed, 10)

    @pytest.mark.parametrize(
        "date_str, rows",
        [
            ("2024-01-06", ["10011", "00001", "00010", "11111", "10100"]),
            ("2025-07-19", ["10000", "00110", "01000", "00001", "01000"]),
            (
                "2025-03-14",
                [
                    "0110000000", "0000111011", "1000010011", "0100010100", "1110010111",
                    "1110011000", "1111111001", "0101001111", "1000001011", "1000001110",
                ],
            ),
        ],
    )
    def test_same_puzzle_as_browser_client(self, date_str: str, rows: list[str]):
        puzzle = DailyResolver().resolve(date_str)
        assert ["".join(map(str, row)) for row in puzzle.solution] == rows

    def test_same_date_same_puzzle(self):
        a = DailyResolver().resolve("2024-01-06")
        b = DailyResolver(NoOverrides()).resolve("2024-01-06")
        assert a == b

    def test_override_wins(self):
        special = Puzzle(id="special", name="Special", size=3, solution=["010", "111", "010"])
        resolver = DailyResolver(_FixedOverrides({"2024-01-08": special}))
        puzzle = resolver.resolve("2024-01-08")
        assert puzzle.id == "special"
        assert puzzle.size == 3
        assert puzzle.date == "2024-01-08"
        assert puzzle.is_override is True

    def test_override_only_for_its_date(self):
        special = Puzzle(id="special", name="Special", size=3, solution=["010", "111", "010"])
        resolver = DailyResolver(_FixedOverrides({"2024-01-08": special}))
        assert resolver.resolve("2024-01-09").is_override is False

    def test_resolve_range_inclusive(self):
        puzzles = DailyResolver().resolve_range("2024-01-05", "2024-01-08")
        assert [p.date for p in puzzles] == ["2024-01-05", "2024-01-06", "2024-01-07", "2024-01-08"]
        assert [p.size for p in puzzles] == [10, 5, 5, 10]

    def test_resolve_range_empty_when_reversed(self):
        assert DailyResolver().resolve_range("2024-01-08", "2024-01-05") == []

    def test_invalid_date(self):
        with pytest.raises(ValueError):
            DailyResolver().resolve("20240108")


# ---------------------------------------------------------------------------
# ScheduledPuzzleRepository
# ---------------------------------------------------------------------------

class TestScheduledPuzzleRepository:
    def test_loads_quoted_and_unquoted_dates(self, tmp_path: Path):
        path = _write_schedule(
            tmp_path,
            """
"2024-02-14":
  name: Heart
  solution: ["01010", "11111", "11111", "01110", "00100"]
2024-03-17:
  name: Clover
  color: "#22C55E"
  solution: ["010", "111", "010"]
""",
        )
        repo = ScheduledPuzzleRepository(path)
        assert repo.dates() == ["2024-02-14", "2024-03-17"]
        heart = repo.resolve_override("2024-02-14")
        assert heart is not None
        assert heart.id == "daily_2024-02-14"
        assert heart.name == "Heart"
        assert heart.size == 5
        clover = repo.resolve_override("2024-03-17")
        assert clover.color == "#22C55E"

    def test_missing_file_means_no_overrides(self, tmp_path: Path):
        repo = ScheduledPuzzleRepository(tmp_path / "nope.yaml")
        assert repo.dates() == []
        assert repo.resolve_override("2024-01-01") is None

    def test_bad_date_key(self, tmp_path: Path):
        path = _write_schedule(tmp_path, '"Jan 1":\n  solution: ["1"]\n')
        with pytest.raises(ValueError):
            ScheduledPuzzleRepository(path)

    def test_entry_must_be_mapping(self, tmp_path: Path):
        path = _write_schedule(tmp_path, '"2024-01-01": ["1"]\n')
        with pytest.raises(ValueError):
            ScheduledPuzzleRepository(path)

    def test_bundled_schedule_resolves(self):
        resolver = DailyResolver(ScheduledPuzzleRepository())
        puzzle = resolver.resolve("2025-01-01")
        assert puzzle.is_override is True
        assert puzzle.name == "New Year Star"
        assert puzzle.size == 5
