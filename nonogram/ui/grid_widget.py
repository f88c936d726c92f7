"""Puzzle board: clue bands plus the clickable cell grid."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QRect, Qt
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from nonogram.core.game import CellState, GameSession, SessionStatus
from nonogram.ui.colors import GridColors, cell_background


class NonogramGridWidget(QWidget):
    """Draws a :class:`GameSession` and reports clicked cells."""

    def __init__(self, on_cell_clicked: Callable[[int, int], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._on_cell_clicked = on_cell_clicked
        self._session: Optional[GameSession] = None
        self._highlight_completed = True
        self.setMinimumSize(320, 320)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setCursor(Qt.PointingHandCursor)

    def set_session(self, session: Optional[GameSession]) -> None:
        self._session = session
        self.update()

    def set_highlight_completed(self, enabled: bool) -> None:
        self._highlight_completed = enabled
        self.update()

    def _layout(self) -> tuple[int, int, int]:
        """Return (cell_size, grid_left, grid_top) for the current widget size."""
        session = self._session
        size = session.size
        max_row_clues = max(len(c) for c in session.row_clues)
        max_col_clues = max(len(c) for c in session.col_clues)
        # Clue bands get roughly 0.6 of a cell per number.
        cols_needed = size + max_row_clues * 0.6
        rows_needed = size + max_col_clues * 0.6
        cell = int(min(self.width() / cols_needed, self.height() / rows_needed))
        cell = max(12, cell)
        band_w = int(max_row_clues * cell * 0.6)
        band_h = int(max_col_clues * cell * 0.6)
        total_w = band_w + size * cell
        total_h = band_h + size * cell
        left = max(0, (self.width() - total_w) // 2) + band_w
        top = max(0, (self.height() - total_h) // 2) + band_h
        return cell, left, top

    def _cell_at(self, x: int, y: int) -> Optional[tuple[int, int]]:
        if self._session is None:
            return None
        cell, left, top = self._layout()
        col = (x - left) // cell
        row = (y - top) // cell
        if x < left or y < top:
            return None
        if 0 <= row < self._session.size and 0 <= col < self._session.size:
            return int(row), int(col)
        return None

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        pos = event.position().toPoint()
        hit = self._cell_at(pos.x(), pos.y())
        if hit is not None:
            self._on_cell_clicked(*hit)

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        session = self._session
        if session is None:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        size = session.size
        cell, left, top = self._layout()
        puzzle = session.puzzle

        font = painter.font()
        font.setPointSize(max(7, int(cell * 0.32)))
        font.setBold(True)
        painter.setFont(font)

        clue_w = int(cell * 0.6)
        for r, clues in enumerate(session.row_clues):
            done = session.is_row_complete(r)
            painter.setPen(QColor(GridColors.CLUE_DONE if done else GridColors.CLUE_TEXT))
            for i, value in enumerate(reversed(clues)):
                x = left - (i + 1) * clue_w
                painter.drawText(QRect(x, top + r * cell, clue_w, cell), Qt.AlignCenter, str(value))
        for c, clues in enumerate(session.col_clues):
            done = session.is_col_complete(c)
            painter.setPen(QColor(GridColors.CLUE_DONE if done else GridColors.CLUE_TEXT))
            for i, value in enumerate(reversed(clues)):
                y = top - (i + 1) * clue_w
                painter.drawText(QRect(left + c * cell, y, cell, clue_w), Qt.AlignCenter, str(value))

        for r in range(size):
            row_done = self._highlight_completed and session.is_row_complete(r)
            for c in range(size):
                state = session.cell(r, c)
                highlight = row_done or (self._highlight_completed and session.is_col_complete(c))
                rect = QRect(left + c * cell, top + r * cell, cell, cell)
                fill = puzzle.reveal_color(r, c) if session.status == SessionStatus.COMPLETED else puzzle.color
                painter.fillRect(rect, QColor(cell_background(state, fill, highlight)))
                if state in (CellState.MARKED, CellState.WRONG):
                    color = GridColors.WRONG_CROSS if state == CellState.WRONG else GridColors.MARK_CROSS
                    painter.setPen(QPen(QColor(color), max(1, cell // 14)))
                    inset = cell // 4
                    inner = rect.adjusted(inset, inset, -inset, -inset)
                    painter.drawLine(inner.topLeft(), inner.bottomRight())
                    painter.drawLine(inner.topRight(), inner.bottomLeft())

        for i in range(size + 1):
            major = i % 5 == 0 or i == size
            painter.setPen(QPen(QColor(GridColors.GRID_LINE_MAJOR if major else GridColors.GRID_LINE), 2 if major else 1))
            painter.drawLine(left + i * cell, top, left + i * cell, top + size * cell)
            painter.drawLine(left, top + i * cell, left + size * cell, top + i * cell)
