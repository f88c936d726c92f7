"""Run-length clues for nonogram rows and columns."""

from __future__ import annotations

from typing import List, Sequence


def derive_clues(line: Sequence[int]) -> List[int]:
    """Return the lengths of the runs of 1s in *line*, in order.

    A line without any filled cell yields ``[0]``.
    """
    clues: List[int] = []
    count = 0
    for cell in line:
        if cell == 1:
            count += 1
        elif count > 0:
            clues.append(count)
            count = 0
    if count > 0:
        clues.append(count)
    return clues or [0]


def row_clues(solution: Sequence[Sequence[int]]) -> List[List[int]]:
    return [derive_clues(row) for row in solution]


def column_clues(solution: Sequence[Sequence[int]]) -> List[List[int]]:
    if not solution:
        return []
    return [derive_clues([row[c] for row in solution]) for c in range(len(solution[0]))]
