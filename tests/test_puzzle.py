"""Tests for nonogram.core.puzzle – the Puzzle value type."""

from __future__ import annotations

from dataclasses import FrozenInstanceError

import pytest

from nonogram.core.puzzle import DEFAULT_COLOR, Puzzle, parse_grid


# ---------------------------------------------------------------------------
# parse_grid
# ---------------------------------------------------------------------------

class TestParseGrid:
    def test_digit_strings(self):
        assert parse_grid(["010", "111", "010"], 3) == ((0, 1, 0), (1, 1, 1), (0, 1, 0))

    def test_int_lists(self):
        assert parse_grid([[1, 0], [0, 1]], 2) == ((1, 0), (0, 1))

    def test_spaces_ignored_in_strings(self):
        assert parse_grid(["1 0 1", "0 1 0", "1 0 1"], 3)[0] == (1, 0, 1)

    def test_wrong_row_count(self):
        with pytest.raises(ValueError):
            parse_grid(["01", "10", "11"], 2)

    def test_wrong_row_length(self):
        with pytest.raises(ValueError):
            parse_grid(["011", "10"], 2)

    def test_non_digit(self):
        with pytest.raises(ValueError):
            parse_grid(["0x", "10"], 2)

    def test_allowed_range(self):
        with pytest.raises(ValueError):
            parse_grid(["02", "10"], 2, range(0, 2))


# ---------------------------------------------------------------------------
# Puzzle
# ---------------------------------------------------------------------------

class TestPuzzle:
    def test_solution_normalised_to_tuples(self):
        p = Puzzle(id="p", name="P", size=2, solution=[[1, 0], [0, 1]])
        assert p.solution == ((1, 0), (0, 1))
        assert p.color == DEFAULT_COLOR

    def test_rejects_non_binary_solution(self):
        with pytest.raises(ValueError):
            Puzzle(id="p", name="P", size=2, solution=["12", "00"])

    def test_rejects_bad_size(self):
        with pytest.raises(ValueError):
            Puzzle(id="p", name="P", size=0, solution=[])

    def test_frozen(self):
        p = Puzzle(id="p", name="P", size=1, solution=["1"])
        with pytest.raises(FrozenInstanceError):
            p.name = "Other"  # type: ignore[misc]

    def test_filled_count(self):
        p = Puzzle(id="p", name="P", size=3, solution=["101", "010", "000"])
        assert p.filled_count == 3

    def test_reveal_color_uses_palette(self):
        p = Puzzle(
            id="p",
            name="P",
            size=2,
            solution=["11", "00"],
            color="#111111",
            palette=("#AA0000", "#00AA00"),
            reveal_image=[[1, 2], [0, 0]],
        )
        assert p.reveal_color(0, 0) == "#AA0000"
        assert p.reveal_color(0, 1) == "#00AA00"
        # Unpainted cells fall back to the puzzle colour.
        assert p.reveal_color(1, 0) == "#111111"

    def test_reveal_color_without_image(self):
        p = Puzzle(id="p", name="P", size=1, solution=["1"], color="#123456")
        assert p.reveal_color(0, 0) == "#123456"


# ---------------------------------------------------------------------------
# Puzzle.from_dict / to_dict
# ---------------------------------------------------------------------------

class TestPuzzleFromDict:
    def test_minimal_entry(self):
        p = Puzzle.from_dict({"id": "dot", "solution": ["1"]})
        assert p.name == "dot"
        assert p.size == 1
        assert p.color == DEFAULT_COLOR

    def test_colour_defaults_to_first_palette_entry(self):
        p = Puzzle.from_dict({"id": "x", "solution": ["10", "01"], "palette": ["#FF0000", "#00FF00"]})
        assert p.color == "#FF0000"
        assert p.palette == ("#FF0000", "#00FF00")

    def test_camel_case_reveal_image(self):
        p = Puzzle.from_dict(
            {"id": "x", "solution": ["10", "01"], "palette": ["#FF0000"], "revealImage": [[1, 0], [0, 1]]}
        )
        assert p.reveal_image == ((1, 0), (0, 1))

    def test_overrides(self):
        p = Puzzle.from_dict({"id": "x", "solution": ["1"]}, id="daily_2025-01-01", date="2025-01-01")
        assert p.id == "daily_2025-01-01"
        assert p.date == "2025-01-01"

    def test_missing_solution(self):
        with pytest.raises(ValueError):
            Puzzle.from_dict({"id": "x"})

    def test_missing_id(self):
        with pytest.raises(ValueError):
            Puzzle.from_dict({"solution": ["1"]})

    def test_not_a_mapping(self):
        with pytest.raises(ValueError):
            Puzzle.from_dict(["1"])  # type: ignore[arg-type]

    def test_to_dict_uses_digit_strings(self):
        p = Puzzle(id="p", name="P", size=2, solution=[[1, 0], [0, 1]], date="2025-01-01")
        payload = p.to_dict()
        assert payload["solution"] == ["10", "01"]
        assert payload["date"] == "2025-01-01"
        assert "palette" not in payload
        assert Puzzle.from_dict(payload).solution == p.solution
