"""Nonogram play session: cell state machine, hints, completion and scoring."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional, Tuple

from nonogram.core.clues import column_clues, row_clues
from nonogram.core.puzzle import Puzzle

logger = logging.getLogger(__name__)

MAX_MISTAKES = 3
MAX_HINTS = 3


class CellState(str, Enum):
    EMPTY = "empty"
    FILLED = "filled"
    MARKED = "marked"
    WRONG = "wrong"


class SessionStatus(str, Enum):
    PLAYING = "playing"
    PAUSED = "paused"
    COMPLETED = "completed"
    GAME_OVER = "gameover"


class Tool(str, Enum):
    FILL = "fill"
    MARK = "mark"


class GameEvent(str, Enum):
    """Feedback emitted to listeners (sound, haptics, UI flashes)."""

    FILL = "fill"
    MARK = "mark"
    WRONG = "wrong"
    GAME_OVER = "gameover"
    AUTOMARK = "automark"
    HINT = "hint"
    WIN = "win"


@dataclass(frozen=True)
class PuzzleResult:
    """Outcome of a completed puzzle."""

    stars: int
    time_ms: int
    mistakes: int


Listener = Callable[[GameEvent], None]


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class GameSession:
    """State of one puzzle being played.

    Cells start ``empty`` and move at most once, to ``filled``, ``marked``
    or ``wrong``; none of those ever changes again. Completion compares the
    set of filled cells with the solution's 1-cells and ignores marks.

    Elapsed time only advances while the session is playing. Pausing folds
    the running segment into an accumulator; completion and game over
    freeze it.
    """

    def __init__(
        self,
        puzzle: Puzzle,
        clock: Optional[Callable[[], float]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._clock = clock or _monotonic_ms
        self._rng = rng or random.Random()
        self._listeners: List[Listener] = []
        self._tool = Tool.FILL
        self.load_puzzle(puzzle)

    # -- lifecycle ---------------------------------------------------------

    def load_puzzle(self, puzzle: Puzzle) -> None:
        """Start *puzzle* from scratch, discarding any previous session state."""
        self._puzzle = puzzle
        self._grid = [[CellState.EMPTY] * puzzle.size for _ in range(puzzle.size)]
        self._mistakes = 0
        self._hints_remaining = MAX_HINTS
        self._status = SessionStatus.PLAYING
        self._start_time = self._clock()
        self._segment_start = self._start_time
        self._accumulated_ms = 0.0
        self._row_clues = row_clues(puzzle.solution)
        self._col_clues = column_clues(puzzle.solution)
        logger.info("Loaded puzzle %s (%dx%d)", puzzle.id, puzzle.size, puzzle.size)

    def reset(self) -> None:
        self.load_puzzle(self._puzzle)

    def pause(self) -> None:
        if self._status != SessionStatus.PLAYING:
            return
        self._accumulated_ms += self._clock() - self._segment_start
        self._status = SessionStatus.PAUSED

    def resume(self) -> None:
        if self._status != SessionStatus.PAUSED:
            return
        self._segment_start = self._clock()
        self._status = SessionStatus.PLAYING

    # -- observers ---------------------------------------------------------

    def add_listener(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _emit(self, event: GameEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.debug("Feedback listener failed for %s", event.value, exc_info=True)

    # -- read access -------------------------------------------------------

    @property
    def puzzle(self) -> Puzzle:
        return self._puzzle

    @property
    def size(self) -> int:
        return self._puzzle.size

    @property
    def status(self) -> SessionStatus:
        return self._status

    @property
    def is_playing(self) -> bool:
        return self._status == SessionStatus.PLAYING

    @property
    def mistakes(self) -> int:
        return self._mistakes

    @property
    def hints_remaining(self) -> int:
        return self._hints_remaining

    @property
    def start_time(self) -> float:
        """Clock reading (ms) when the puzzle was loaded."""
        return self._start_time

    @property
    def elapsed_ms(self) -> float:
        if self._status == SessionStatus.PLAYING:
            return self._accumulated_ms + (self._clock() - self._segment_start)
        return self._accumulated_ms

    @property
    def tool(self) -> Tool:
        return self._tool

    def set_tool(self, tool: Tool | str) -> None:
        self._tool = Tool(tool)

    @property
    def row_clues(self) -> List[List[int]]:
        return self._row_clues

    @property
    def col_clues(self) -> List[List[int]]:
        return self._col_clues

    def cell(self, row: int, col: int) -> CellState:
        return self._grid[row][col]

    def grid(self) -> List[List[CellState]]:
        """Copy of the player grid."""
        return [list(row) for row in self._grid]

    def is_row_complete(self, row: int) -> bool:
        """True when every cell the solution fills in *row* is filled."""
        solution = self._puzzle.solution[row]
        return all(self._grid[row][c] == CellState.FILLED for c in range(self.size) if solution[c] == 1)

    def is_col_complete(self, col: int) -> bool:
        solution = self._puzzle.solution
        return all(self._grid[r][col] == CellState.FILLED for r in range(self.size) if solution[r][col] == 1)

    def is_solved(self) -> bool:
        solution = self._puzzle.solution
        return all(
            (solution[r][c] == 1) == (self._grid[r][c] == CellState.FILLED)
            for r in range(self.size)
            for c in range(self.size)
        )

    # -- actions -----------------------------------------------------------

    def toggle_cell(self, row: int, col: int) -> bool:
        """Apply the current tool to an empty cell.

        Returns False without side effects when the session is not playing
        or the cell is already resolved.
        """
        if self._status != SessionStatus.PLAYING:
            return False
        if self._grid[row][col] != CellState.EMPTY:
            return False

        should_fill = self._puzzle.solution[row][col] == 1
        if self._tool == Tool.FILL:
            if should_fill:
                self._grid[row][col] = CellState.FILLED
                self._emit(GameEvent.FILL)
            else:
                # A wrong cell never completes a line, so no cascade follows.
                self._grid[row][col] = CellState.WRONG
                self._record_mistake()
                return True
        else:
            if should_fill:
                # A wrong mark still reveals the true state of the cell.
                self._grid[row][col] = CellState.FILLED
                self._record_mistake()
            else:
                self._grid[row][col] = CellState.MARKED
                self._emit(GameEvent.MARK)

        self._auto_fill_marks()
        self._check_completion()
        return True

    def use_hint(self) -> Optional[Tuple[int, int]]:
        """Resolve one empty cell correctly, preferring cells that should be filled."""
        if self._hints_remaining <= 0 or self._status != SessionStatus.PLAYING:
            return None

        solution = self._puzzle.solution
        empty = [
            (r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self._grid[r][c] == CellState.EMPTY
        ]
        if not empty:
            return None

        fill_cells = [(r, c) for r, c in empty if solution[r][c] == 1]
        row, col = self._rng.choice(fill_cells or empty)
        self._grid[row][col] = CellState.FILLED if solution[row][col] == 1 else CellState.MARKED
        self._hints_remaining -= 1
        self._emit(GameEvent.HINT)

        self._auto_fill_marks()
        self._check_completion()
        return row, col

    def calculate_stars(self) -> int:
        """Score 1-3 stars from mistakes and time against one second per cell."""
        base_time = self.size * self.size * 1000
        time_ratio = self.elapsed_ms / base_time

        stars = 3
        if self._mistakes > 0:
            stars -= 1
        if self._mistakes > 3:
            stars -= 1
        if time_ratio > 2:
            stars -= 1
        if time_ratio > 4:
            stars -= 1
        return max(1, min(3, stars))

    def result(self) -> Optional[PuzzleResult]:
        if self._status != SessionStatus.COMPLETED:
            return None
        return PuzzleResult(
            stars=self.calculate_stars(),
            time_ms=int(self._accumulated_ms),
            mistakes=self._mistakes,
        )

    # -- internals ---------------------------------------------------------

    def _record_mistake(self) -> None:
        self._mistakes += 1
        self._emit(GameEvent.WRONG)
        if self._mistakes >= MAX_MISTAKES:
            self._finish(SessionStatus.GAME_OVER)
            logger.info("Game over on %s after %d mistakes", self._puzzle.id, self._mistakes)
            self._emit(GameEvent.GAME_OVER)

    def _auto_fill_marks(self) -> None:
        """Mark the empty cells of every row and column whose fills are all done."""
        changed = False
        for r in range(self.size):
            if self.is_row_complete(r):
                for c in range(self.size):
                    if self._grid[r][c] == CellState.EMPTY:
                        self._grid[r][c] = CellState.MARKED
                        changed = True
        for c in range(self.size):
            if self.is_col_complete(c):
                for r in range(self.size):
                    if self._grid[r][c] == CellState.EMPTY:
                        self._grid[r][c] = CellState.MARKED
                        changed = True
        if changed:
            self._emit(GameEvent.AUTOMARK)

    def _check_completion(self) -> None:
        if self._status != SessionStatus.PLAYING:
            return
        if self.is_solved():
            self._finish(SessionStatus.COMPLETED)
            logger.info("Completed %s in %.1fs", self._puzzle.id, self._accumulated_ms / 1000.0)
            self._emit(GameEvent.WIN)

    def _finish(self, status: SessionStatus) -> None:
        self._accumulated_ms += self._clock() - self._segment_start
        self._status = status
