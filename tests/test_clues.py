"""Tests for nonogram.core.clues – run-length clue derivation."""

from __future__ import annotations

import pytest

from nonogram.core.clues import column_clues, derive_clues, row_clues


# ===========================================================================
# derive_clues
# ===========================================================================

class TestDeriveClues:
    @pytest.mark.parametrize(
        "line, expected",
        [
            ([1, 1, 0, 1, 0], [2, 1]),
            ([0, 0, 0, 0, 0], [0]),
            ([1, 1, 1, 1, 1], [5]),
            ([0, 1, 0, 1, 0], [1, 1]),
            ([1, 0, 0, 0, 1], [1, 1]),
            ([0, 0, 1, 1, 1], [3]),
        ],
    )
    def test_runs(self, line, expected):
        assert derive_clues(line) == expected

    def test_empty_line(self):
        assert derive_clues([]) == [0]

    def test_clue_sum_matches_filled_cells(self):
        line = [1, 0, 1, 1, 0, 0, 1, 1, 1, 0]
        assert sum(derive_clues(line)) == sum(line)

    def test_returns_new_list(self):
        a = derive_clues([1, 0, 1])
        b = derive_clues([1, 0, 1])
        assert a == b
        assert a is not b


# ===========================================================================
# row_clues / column_clues
# ===========================================================================

class TestGridClues:
    @pytest.fixture()
    def heart(self) -> list[list[int]]:
        return [
            [0, 1, 0, 1, 0],
            [1, 1, 1, 1, 1],
            [1, 1, 1, 1, 1],
            [0, 1, 1, 1, 0],
            [0, 0, 1, 0, 0],
        ]

    def test_row_clues(self, heart):
        assert row_clues(heart) == [[1, 1], [5], [5], [3], [1]]

    def test_column_clues(self, heart):
        assert column_clues(heart) == [[2], [4], [4], [4], [2]]

    def test_clue_sums_equal_grid_total(self, heart):
        total = sum(sum(row) for row in heart)
        assert sum(sum(c) for c in row_clues(heart)) == total
        assert sum(sum(c) for c in column_clues(heart)) == total

    def test_empty_grid(self):
        assert row_clues([]) == []
        assert column_clues([]) == []

    def test_single_cell(self):
        assert row_clues([[1]]) == [[1]]
        assert column_clues([[0]]) == [[0]]
