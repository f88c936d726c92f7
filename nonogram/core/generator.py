"""Deterministic puzzle synthesis for the daily challenge.

Every client must derive the same grid from the same seed, so the random
stream is a fixed floating-point recurrence rather than :mod:`random`:

    state = sin(state) * 10000;  draw = state - floor(state)

``sin`` is the fdlibm routine from :mod:`nonogram.core.fdlibm`, not
:func:`math.sin`, so the stream is bit-identical to the browser client on
every platform. The operation order below mirrors the recurrence exactly;
changing any arithmetic here changes every daily puzzle.
"""

from __future__ import annotations

import math
from typing import List

from nonogram.core import fdlibm
from nonogram.core.puzzle import Puzzle

DAILY_COLORS = (
    "#EF4444",  # red
    "#F97316",  # orange
    "#FBBF24",  # yellow
    "#22C55E",  # green
    "#06B6D4",  # cyan
    "#3B82F6",  # blue
    "#8B5CF6",  # purple
    "#EC4899",  # pink
)

MIN_FILL_RATIO = 0.3
FILL_RATIO_SPREAD = 0.3
ISOLATED_KEEP_CHANCE = 0.3


class SeededRandom:
    """Reproducible stream of floats in [0, 1) derived from a numeric seed."""

    def __init__(self, seed: float) -> None:
        self._state = float(seed)

    def random(self) -> float:
        self._state = fdlibm.sin(self._state) * 10000
        return self._state - math.floor(self._state)

    def randrange(self, stop: int) -> int:
        return math.floor(self.random() * stop)


def _count_neighbors(grid: List[List[int]], r: int, c: int, size: int) -> int:
    count = 0
    for dr, dc in ((-1, 0), (1, 0), (0, -1), (0, 1)):
        nr, nc = r + dr, c + dc
        if 0 <= nr < size and 0 <= nc < size:
            count += grid[nr][nc]
    return count


def generate_solution(seed: int, size: int) -> List[List[int]]:
    """Return the solution grid for *seed*: every row and column has a filled cell."""
    rng = SeededRandom(seed)
    fill_ratio = MIN_FILL_RATIO + rng.random() * FILL_RATIO_SPREAD

    solution: List[List[int]] = []
    for r in range(size):
        row = []
        for c in range(size):
            dr = (r - size / 2) / size
            dc = (c - size / 2) / size
            center_dist = math.sqrt(dr * dr + dc * dc)
            center_bias = 1 - center_dist * 0.5
            threshold = fill_ratio * center_bias
            row.append(1 if rng.random() < threshold else 0)
        solution.append(row)

    # Thin out isolated cells; the draw only happens for isolated ones.
    for r in range(size):
        for c in range(size):
            if solution[r][c] == 1:
                if _count_neighbors(solution, r, c, size) == 0 and rng.random() > ISOLATED_KEEP_CHANCE:
                    solution[r][c] = 0

    for r in range(size):
        if 1 not in solution[r]:
            solution[r][rng.randrange(size)] = 1

    for c in range(size):
        if not any(solution[r][c] == 1 for r in range(size)):
            solution[rng.randrange(size)][c] = 1

    return solution


def generate_puzzle(seed: int, size: int = 10) -> Puzzle:
    """Build the binary daily puzzle for *seed* at *size* × *size*."""
    return Puzzle(
        id=f"daily_{seed}",
        name="Daily Challenge",
        size=size,
        solution=generate_solution(seed, size),
        color=DAILY_COLORS[seed % len(DAILY_COLORS)],
    )
