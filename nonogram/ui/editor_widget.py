"""Drawing surface for the puzzle editor."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QRect, Qt
from PySide6.QtGui import QColor, QMouseEvent, QPainter, QPen
from PySide6.QtWidgets import QSizePolicy, QWidget

from nonogram.core.editor import PuzzleCanvas
from nonogram.ui.colors import GridColors

PENCIL = "pencil"
LINE = "line"
RECT = "rect"
FILL = "fill"


class EditorCanvasWidget(QWidget):
    """Paints a :class:`PuzzleCanvas` and edits it with the mouse.

    The left button paints filled cells, the right button erases. Pencil
    strokes follow the drag; line and rect are committed on release from
    the press cell to the release cell. Every press is one undo step.
    """

    def __init__(self, canvas: PuzzleCanvas, on_changed: Callable[[], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._canvas = canvas
        self._on_changed = on_changed
        self._tool = PENCIL
        self._value = 1
        self._anchor: Optional[tuple[int, int]] = None
        self._hover: Optional[tuple[int, int]] = None
        self.setMinimumSize(320, 320)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setCursor(Qt.CrossCursor)

    @property
    def canvas(self) -> PuzzleCanvas:
        return self._canvas

    def set_canvas(self, canvas: PuzzleCanvas) -> None:
        self._canvas = canvas
        self._anchor = None
        self.update()

    def set_tool(self, tool: str) -> None:
        self._tool = tool
        self._anchor = None

    def _layout(self) -> tuple[int, int, int]:
        size = self._canvas.size
        cell = max(8, min(self.width(), self.height()) // size)
        left = (self.width() - size * cell) // 2
        top = (self.height() - size * cell) // 2
        return cell, left, top

    def _cell_at(self, x: int, y: int) -> Optional[tuple[int, int]]:
        cell, left, top = self._layout()
        if x < left or y < top:
            return None
        row = (y - top) // cell
        col = (x - left) // cell
        if 0 <= row < self._canvas.size and 0 <= col < self._canvas.size:
            return int(row), int(col)
        return None

    # -- mouse ---------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() not in (Qt.LeftButton, Qt.RightButton):
            super().mousePressEvent(event)
            return
        pos = event.position().toPoint()
        hit = self._cell_at(pos.x(), pos.y())
        if hit is None:
            return
        self._value = 1 if event.button() == Qt.LeftButton else 0
        self._canvas.begin_stroke()
        if self._tool == PENCIL:
            self._canvas.set_cell(*hit, self._value)
            self._anchor = hit
        elif self._tool == FILL:
            self._canvas.flood_fill(*hit, self._value)
        else:
            self._anchor = hit
            self._hover = hit
        self._on_changed()
        self.update()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._anchor is None:
            return
        pos = event.position().toPoint()
        hit = self._cell_at(pos.x(), pos.y())
        if hit is None:
            return
        if self._tool == PENCIL:
            self._canvas.set_cell(*hit, self._value)
            self._on_changed()
        self._hover = hit
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        anchor, end = self._anchor, self._hover
        self._anchor = None
        self._hover = None
        if anchor is None or end is None:
            return
        if self._tool == LINE:
            self._canvas.draw_line(*anchor, *end, self._value)
        elif self._tool == RECT:
            self._canvas.draw_rect(*anchor, *end, self._value)
        else:
            return
        self._on_changed()
        self.update()

    # -- painting ------------------------------------------------------------

    def paintEvent(self, event) -> None:
        super().paintEvent(event)
        canvas = self._canvas
        painter = QPainter(self)
        cell, left, top = self._layout()
        size = canvas.size

        for r in range(size):
            for c in range(size):
                rect = QRect(left + c * cell, top + r * cell, cell, cell)
                color = GridColors.CELL_EMPTY
                if canvas.solution[r][c]:
                    index = canvas.reveal[r][c]
                    color = canvas.palette[index - 1] if 0 < index <= len(canvas.palette) else canvas.palette[0]
                painter.fillRect(rect, QColor(color))

        # Outline of the pending line or rect.
        if self._anchor is not None and self._hover is not None and self._tool in (LINE, RECT):
            (r1, c1), (r2, c2) = self._anchor, self._hover
            painter.setPen(QPen(QColor(GridColors.WRONG_CROSS), 2, Qt.DashLine))
            if self._tool == RECT:
                top_row, left_col = min(r1, r2), min(c1, c2)
                rows, cols = abs(r2 - r1) + 1, abs(c2 - c1) + 1
                painter.drawRect(QRect(left + left_col * cell, top + top_row * cell, cols * cell, rows * cell))
            else:
                half = cell // 2
                painter.drawLine(left + c1 * cell + half, top + r1 * cell + half, left + c2 * cell + half, top + r2 * cell + half)

        for i in range(size + 1):
            major = i % 5 == 0 or i == size
            painter.setPen(QPen(QColor(GridColors.GRID_LINE_MAJOR if major else GridColors.GRID_LINE), 2 if major else 1))
            painter.drawLine(left + i * cell, top, left + i * cell, top + size * cell)
            painter.drawLine(left, top + i * cell, left + size * cell, top + i * cell)
