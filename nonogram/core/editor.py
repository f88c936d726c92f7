"""Editable puzzle canvas used to author pack puzzles.

The canvas has two layers: the 0/1 solution and a reveal layer of palette
indices (0 = unpainted). Painting the solution keeps the reveal layer in
step: filling a cell gives it the current colour if it has none, clearing
it removes the colour.
"""

from __future__ import annotations

import copy
import logging
import re
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

import yaml

from nonogram.core.clues import column_clues, row_clues
from nonogram.core.puzzle import Puzzle

logger = logging.getLogger(__name__)

MAX_UNDO = 50
MAX_PALETTE = 8

SOLUTION_LAYER = "solution"
REVEAL_LAYER = "reveal"

_Snapshot = Tuple[List[List[int]], List[List[int]]]


def _blank(size: int) -> List[List[int]]:
    return [[0] * size for _ in range(size)]


class PuzzleCanvas:
    def __init__(self, size: int = 10, palette: Optional[Sequence[str]] = None) -> None:
        self.size = size
        self.solution = _blank(size)
        self.reveal = _blank(size)
        self.palette: List[str] = list(palette or ["#000000"])
        self.layer = SOLUTION_LAYER
        self.color_index = 1
        self._undo: List[_Snapshot] = []
        self._redo: List[_Snapshot] = []

    @classmethod
    def from_puzzle(cls, puzzle: Puzzle) -> "PuzzleCanvas":
        canvas = cls(puzzle.size, puzzle.palette or [puzzle.color])
        canvas.solution = [list(row) for row in puzzle.solution]
        if puzzle.reveal_image is not None:
            canvas.reveal = [list(row) for row in puzzle.reveal_image]
        else:
            canvas.reveal = [[1 if v else 0 for v in row] for row in puzzle.solution]
        return canvas

    # -- history -------------------------------------------------------------

    @property
    def is_empty(self) -> bool:
        return not any(any(row) for row in self.solution)

    @property
    def can_undo(self) -> bool:
        return bool(self._undo)

    @property
    def can_redo(self) -> bool:
        return bool(self._redo)

    def _snapshot(self) -> _Snapshot:
        return copy.deepcopy(self.solution), copy.deepcopy(self.reveal)

    def begin_stroke(self) -> None:
        """Record the current state so the next edit can be undone."""
        self._undo.append(self._snapshot())
        if len(self._undo) > MAX_UNDO:
            self._undo.pop(0)
        self._redo.clear()

    def undo(self) -> bool:
        if not self._undo:
            return False
        self._redo.append(self._snapshot())
        self.solution, self.reveal = self._undo.pop()
        self.size = len(self.solution)
        return True

    def redo(self) -> bool:
        if not self._redo:
            return False
        self._undo.append(self._snapshot())
        self.solution, self.reveal = self._redo.pop()
        self.size = len(self.solution)
        return True

    # -- painting ------------------------------------------------------------

    def _in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def set_cell(self, row: int, col: int, value: int) -> None:
        if self.layer == SOLUTION_LAYER:
            self.solution[row][col] = value
            if value == 1 and self.reveal[row][col] == 0:
                self.reveal[row][col] = self.color_index
            elif value == 0:
                self.reveal[row][col] = 0
        elif self.solution[row][col] == 1:
            self.reveal[row][col] = value

    def _active(self) -> List[List[int]]:
        return self.solution if self.layer == SOLUTION_LAYER else self.reveal

    def flood_fill(self, row: int, col: int, value: int) -> None:
        """Repaint the 4-connected region of equal values containing (row, col)."""
        grid = self._active()
        original = grid[row][col]
        if original == value:
            return
        stack = [(row, col)]
        visited = set()
        while stack:
            r, c = stack.pop()
            if (r, c) in visited or not self._in_bounds(r, c):
                continue
            if grid[r][c] != original:
                continue
            visited.add((r, c))
            self.set_cell(r, c, value)
            stack.extend(((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)))

    def draw_line(self, r1: int, c1: int, r2: int, c2: int, value: int) -> None:
        """Bresenham line between two cells, endpoints included."""
        dx = abs(c2 - c1)
        dy = abs(r2 - r1)
        sx = 1 if c1 < c2 else -1
        sy = 1 if r1 < r2 else -1
        err = dx - dy
        r, c = r1, c1
        while True:
            self.set_cell(r, c, value)
            if r == r2 and c == c2:
                break
            e2 = 2 * err
            if e2 > -dy:
                err -= dy
                c += sx
            if e2 < dx:
                err += dx
                r += sy

    def draw_rect(self, r1: int, c1: int, r2: int, c2: int, value: int, filled: bool = False) -> None:
        top, bottom = min(r1, r2), max(r1, r2)
        left, right = min(c1, c2), max(c1, c2)
        if filled:
            for r in range(top, bottom + 1):
                for c in range(left, right + 1):
                    self.set_cell(r, c, value)
            return
        for c in range(left, right + 1):
            self.set_cell(top, c, value)
            self.set_cell(bottom, c, value)
        for r in range(top, bottom + 1):
            self.set_cell(r, left, value)
            self.set_cell(r, right, value)

    def clear(self) -> None:
        self.begin_stroke()
        self.solution = _blank(self.size)
        self.reveal = _blank(self.size)

    def resize(self, new_size: int) -> None:
        """Change the grid size, keeping the overlapping top-left region."""
        self.begin_stroke()
        keep = min(self.size, new_size)
        solution, reveal = _blank(new_size), _blank(new_size)
        for r in range(keep):
            for c in range(keep):
                solution[r][c] = self.solution[r][c]
                reveal[r][c] = self.reveal[r][c]
        self.size = new_size
        self.solution, self.reveal = solution, reveal

    # -- palette -------------------------------------------------------------

    def add_color(self, color: str) -> bool:
        if len(self.palette) >= MAX_PALETTE:
            return False
        self.palette.append(color)
        return True

    def remove_color(self, index: int) -> bool:
        """Remove palette entry *index* (0-based); reveal cells using it fall back to colour 1."""
        if len(self.palette) <= 1 or not 0 <= index < len(self.palette):
            return False
        self.palette.pop(index)
        removed = index + 1
        for row in self.reveal:
            for c, value in enumerate(row):
                if value == removed:
                    row[c] = 1
                elif value > removed:
                    row[c] = value - 1
        self.color_index = min(self.color_index, len(self.palette))
        return True

    # -- export --------------------------------------------------------------

    def row_clues(self) -> List[List[int]]:
        return row_clues(self.solution)

    def column_clues(self) -> List[List[int]]:
        return column_clues(self.solution)

    def to_puzzle(self, puzzle_id: str, name: str) -> Puzzle:
        return Puzzle(
            id=puzzle_id,
            name=name,
            size=self.size,
            solution=self.solution,
            color=self.palette[0],
            palette=tuple(self.palette),
            reveal_image=self.reveal,
        )


# ---------------------------------------------------------------------------
# Saved creations
# ---------------------------------------------------------------------------

def creation_id(name: str) -> str:
    """Lower-case slug of *name* used as the puzzle id and file stem."""
    slug = re.sub(r"[^a-z0-9]+", "_", name.strip().lower()).strip("_")
    return slug or "untitled"


def save_creation(canvas: PuzzleCanvas, directory: Path, name: str) -> Optional[Path]:
    """Write the canvas as a pack-style YAML puzzle in *directory*.

    An existing file is never overwritten; a numeric suffix is added to the
    id instead. Returns the written path, or None when the canvas is empty
    or the file cannot be written (logged).
    """
    if canvas.is_empty:
        logger.warning("Not saving %r: the canvas has no filled cells", name)
        return None
    base = creation_id(name)
    puzzle_id = base
    counter = 2
    while (directory / f"{puzzle_id}.yaml").exists():
        puzzle_id = f"{base}_{counter}"
        counter += 1
    puzzle = canvas.to_puzzle(puzzle_id, name.strip() or "Untitled")
    path = directory / f"{puzzle_id}.yaml"
    try:
        directory.mkdir(parents=True, exist_ok=True)
        path.write_text(yaml.safe_dump(puzzle.to_dict(), sort_keys=False), encoding="utf-8")
    except OSError as e:
        logger.warning("Could not save %s: %s", path, e)
        return None
    logger.info("Saved creation %s", path)
    return path


def load_creations(directory: Path) -> List[Puzzle]:
    """Puzzles previously saved in *directory*, sorted by file name. Bad files are skipped."""
    if not directory.is_dir():
        return []
    puzzles: List[Puzzle] = []
    for path in sorted(directory.glob("*.yaml")):
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8"))
            puzzles.append(Puzzle.from_dict(data))
        except (OSError, yaml.YAMLError, ValueError) as e:
            logger.warning("Skipping creation %s: %s", path, e)
    return puzzles
