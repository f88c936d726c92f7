"""Tests for nonogram.core.packs – pack loading and validation."""

from __future__ import annotations

from datetime import date
from pathlib import Path

import pytest

from nonogram.core.packs import (
    UNLOCK_AFTER_PACK,
    UNLOCK_ALWAYS,
    UNLOCK_TOTAL_PUZZLES,
    UNORDERED,
    Pack,
    PackRepository,
    UnlockRule,
    parse_pack,
)
from nonogram.core.puzzle import Puzzle


# ===========================================================================
# Helpers
# ===========================================================================

def _write_pack(directory: Path, filename: str, content: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / filename
    path.write_text(content, encoding="utf-8")
    return path


def _raw_pack(**extra) -> dict:
    raw = {
        "id": "tiny",
        "name": "Tiny",
        "puzzles": [
            {"id": "dot", "solution": ["1"]},
            {"id": "bar", "name": "Bar", "solution": ["11", "00"]},
        ],
    }
    raw.update(extra)
    return raw


# ===========================================================================
# parse_pack
# ===========================================================================

class TestParsePack:
    def test_minimal(self):
        pack = parse_pack(_raw_pack(), "pack1.yaml")
        assert pack.id == "tiny"
        assert [p.id for p in pack.puzzles] == ["dot", "bar"]
        assert pack.order == UNORDERED
        assert pack.published is True
        assert pack.unlock == UnlockRule(type=UNLOCK_ALWAYS)

    def test_puzzle_lookup(self):
        pack = parse_pack(_raw_pack(), "pack1.yaml")
        assert pack.puzzle("bar").name == "Bar"
        assert pack.puzzle("missing") is None

    def test_after_pack_unlock(self):
        pack = parse_pack(
            _raw_pack(unlock={"type": "after_pack", "pack_id": "starter", "puzzle_count": 3}),
            "pack2.yaml",
        )
        assert pack.unlock == UnlockRule(type=UNLOCK_AFTER_PACK, pack_id="starter", puzzle_count=3)

    def test_after_pack_needs_pack_id(self):
        with pytest.raises(ValueError):
            parse_pack(_raw_pack(unlock={"type": "after_pack"}), "pack2.yaml")

    def test_total_puzzles_unlock(self):
        pack = parse_pack(_raw_pack(unlock={"type": "total_puzzles", "puzzle_count": 10}), "pack3.yaml")
        assert pack.unlock.type == UNLOCK_TOTAL_PUZZLES
        assert pack.unlock.puzzle_count == 10

    def test_unlock_as_plain_string(self):
        pack = parse_pack(_raw_pack(unlock="always"), "pack1.yaml")
        assert pack.unlock.type == UNLOCK_ALWAYS

    def test_event_dates(self):
        pack = parse_pack(
            _raw_pack(is_event=True, event_start="2025-10-01", event_end=date(2025, 10, 31)),
            "pack9.yaml",
        )
        assert pack.event_start == date(2025, 10, 1)
        assert pack.event_end == date(2025, 10, 31)

    def test_bad_event_date(self):
        with pytest.raises(ValueError):
            parse_pack(_raw_pack(is_event=True, event_start="October"), "pack9.yaml")

    @pytest.mark.parametrize(
        "raw",
        [
            None,
            {},
            {"name": "No id", "puzzles": [{"id": "a", "solution": ["1"]}]},
            {"id": "x", "puzzles": [{"id": "a", "solution": ["1"]}]},
            {"id": "x", "name": "X", "puzzles": []},
        ],
    )
    def test_invalid(self, raw):
        with pytest.raises(ValueError):
            parse_pack(raw, "pack1.yaml")

    def test_duplicate_puzzle_id(self):
        raw = _raw_pack(puzzles=[{"id": "a", "solution": ["1"]}, {"id": "a", "solution": ["0"]}])
        with pytest.raises(ValueError, match="duplicate"):
            parse_pack(raw, "pack1.yaml")

    def test_bad_puzzle_names_the_file(self):
        raw = _raw_pack(puzzles=[{"id": "a", "solution": ["12"]}])
        with pytest.raises(ValueError, match="pack7.yaml"):
            parse_pack(raw, "pack7.yaml")


# ===========================================================================
# Pack.is_active
# ===========================================================================

class TestPackIsActive:
    @pytest.fixture()
    def event(self) -> Pack:
        return Pack(
            id="ev",
            name="Event",
            puzzles=(Puzzle(id="a", name="A", size=1, solution=["1"]),),
            is_event=True,
            event_start=date(2025, 10, 1),
            event_end=date(2025, 10, 31),
        )

    def test_regular_pack_always_active(self):
        pack = Pack(id="p", name="P", puzzles=())
        assert pack.is_active(date(1999, 1, 1)) is True

    @pytest.mark.parametrize(
        "today, expected",
        [
            (date(2025, 9, 30), False),
            (date(2025, 10, 1), True),
            (date(2025, 10, 15), True),
            (date(2025, 10, 31), True),
            (date(2025, 11, 1), False),
        ],
    )
    def test_event_window(self, event: Pack, today: date, expected: bool):
        assert event.is_active(today) is expected


# ===========================================================================
# PackRepository
# ===========================================================================

class TestPackRepository:
    def test_bundled_packs(self):
        repo = PackRepository()
        ids = [p.id for p in repo.all(include_inactive=True)]
        assert ids[:3] == ["starter", "garden", "big"]
        assert "spooky" in ids

    def test_bundled_puzzles_are_square_and_binary(self):
        repo = PackRepository()
        for pack in repo.all(include_inactive=True):
            for puzzle in pack.puzzles:
                assert len(puzzle.solution) == puzzle.size
                assert puzzle.filled_count > 0

    def test_event_pack_hidden_outside_window(self):
        repo = PackRepository()
        ids = [p.id for p in repo.all(today=date(2025, 6, 1))]
        assert "spooky" not in ids
        ids = [p.id for p in repo.all(today=date(2025, 10, 20))]
        assert "spooky" in ids

    def test_get_and_get_puzzle(self):
        repo = PackRepository()
        assert repo.get("starter").name == "Starter Shapes"
        assert repo.get_puzzle("starter", "heart").size == 5
        assert repo.get_puzzle("starter", "nope") is None
        assert repo.get_puzzle("nope", "heart") is None
        with pytest.raises(KeyError):
            repo.get("nope")

    def test_sorted_by_order(self, tmp_path: Path):
        _write_pack(tmp_path, "pack1_b.yaml", "id: b\nname: B\norder: 2\npuzzles:\n  - id: x\n    solution: ['1']\n")
        _write_pack(tmp_path, "pack2_a.yaml", "id: a\nname: A\norder: 1\npuzzles:\n  - id: y\n    solution: ['1']\n")
        repo = PackRepository(tmp_path)
        assert [p.id for p in repo.all()] == ["a", "b"]

    def test_unpublished_hidden(self, tmp_path: Path):
        _write_pack(tmp_path, "pack1.yaml", "id: a\nname: A\npuzzles:\n  - id: x\n    solution: ['1']\n")
        _write_pack(
            tmp_path, "pack2.yaml", "id: b\nname: B\npublished: false\npuzzles:\n  - id: y\n    solution: ['1']\n"
        )
        repo = PackRepository(tmp_path)
        assert [p.id for p in repo.all()] == ["a"]
        assert [p.id for p in repo.all(include_inactive=True)] == ["a", "b"]

    def test_ignores_non_pack_files(self, tmp_path: Path):
        _write_pack(tmp_path, "pack1.yaml", "id: a\nname: A\npuzzles:\n  - id: x\n    solution: ['1']\n")
        _write_pack(tmp_path, "notes.yaml", "not: a pack\n")
        repo = PackRepository(tmp_path)
        assert [p.id for p in repo.all()] == ["a"]

    def test_duplicate_pack_id(self, tmp_path: Path):
        body = "id: a\nname: A\npuzzles:\n  - id: x\n    solution: ['1']\n"
        _write_pack(tmp_path, "pack1.yaml", body)
        _write_pack(tmp_path, "pack2.yaml", body)
        with pytest.raises(ValueError, match="duplicate"):
            PackRepository(tmp_path)

    def test_missing_directory(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            PackRepository(tmp_path / "missing")

    def test_empty_directory(self, tmp_path: Path):
        with pytest.raises(ValueError):
            PackRepository(tmp_path)
