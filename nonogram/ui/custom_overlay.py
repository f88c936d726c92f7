"""In-window overlay shown when a puzzle ends (solved or game over)."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QEvent, Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QSizePolicy,
    QVBoxLayout,
    QWidget,
)

from nonogram.ui.colors import HomeColors, format_elapsed


def _themed_card_container(radius: int = 20, object_name: str = "overlayContainer") -> QFrame:
    container = QFrame()
    container.setObjectName(object_name)
    container.setMinimumWidth(360)
    container.setMaximumWidth(460)
    container.setStyleSheet(
        f"""
        QFrame#{object_name} {{
            background: #ffffff;
            border: 1px solid rgba(79, 70, 229, 0.12);
            border-radius: {radius}px;
        }}
        """
    )
    shadow = QGraphicsDropShadowEffect(container)
    shadow.setBlurRadius(20)
    shadow.setOffset(0, 6)
    shadow.setColor(QColor(20, 20, 80, 25))
    container.setGraphicsEffect(shadow)
    return container


def _overlay_background(parent: QWidget, on_click: Callable[[], None]) -> QWidget:
    overlay_bg = QWidget(parent)
    overlay_bg.setStyleSheet("background: rgba(0, 0, 0, 0.2);")
    overlay_bg.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
    overlay_bg.setMinimumSize(1, 1)
    overlay_bg.mousePressEvent = lambda e: on_click()
    return overlay_bg


def _button_style(primary: bool) -> str:
    if primary:
        return f"""
            QPushButton {{
                background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                    stop:0 {HomeColors.PRIMARY_LIGHT}, stop:1 {HomeColors.PRIMARY});
                color: white;
                padding: 10px 16px;
                border: none;
                border-radius: 12px;
                font-weight: 700;
                font-size: 13px;
            }}
        """
    return f"""
        QPushButton {{
            background: #fafafa;
            color: {HomeColors.TEXT_PRIMARY};
            padding: 10px 16px;
            border: 1px solid #e0e0e0;
            border-radius: 12px;
            font-weight: 600;
            font-size: 13px;
        }}
        QPushButton:hover {{ border-color: {HomeColors.PRIMARY}; color: {HomeColors.PRIMARY}; }}
    """


class ResultOverlay(QWidget):
    """Shows stars/time/mistakes after a win, or a retry prompt after game over.

    ``closed`` carries True when the player asked to retry the puzzle.
    """

    closed = Signal(bool)

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        main_layout = QGridLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setRowStretch(0, 1)
        main_layout.setColumnStretch(0, 1)

        main_layout.addWidget(_overlay_background(self, lambda: self._close(False)), 0, 0)

        container = _themed_card_container(object_name="resultContainer")
        content = QVBoxLayout(container)
        content.setContentsMargins(28, 24, 28, 24)
        content.setSpacing(16)

        self._title = QLabel("")
        self._title.setStyleSheet(f"color: {HomeColors.PRIMARY}; font-size: 20px; font-weight: 800;")
        content.addWidget(self._title)

        self._stars = QLabel("")
        self._stars.setAlignment(Qt.AlignCenter)
        self._stars.setStyleSheet("font-size: 34px;")
        content.addWidget(self._stars)

        self._message = QLabel("")
        self._message.setWordWrap(True)
        self._message.setStyleSheet(f"color: {HomeColors.TEXT_PRIMARY}; font-size: 14px;")
        content.addWidget(self._message)

        buttons = QHBoxLayout()
        self._retry_btn = QPushButton("Try again")
        self._retry_btn.setStyleSheet(_button_style(False))
        self._retry_btn.clicked.connect(lambda: self._close(True))
        ok_btn = QPushButton("Continue")
        ok_btn.setStyleSheet(_button_style(True))
        ok_btn.clicked.connect(lambda: self._close(False))
        buttons.addWidget(self._retry_btn)
        buttons.addWidget(ok_btn)
        content.addLayout(buttons)

        main_layout.addWidget(container, 0, 0, 1, 1, Qt.AlignCenter)

    def show_win(self, puzzle_name: str, stars: int, time_ms: int, mistakes: int) -> None:
        self._title.setText(f"Solved: {puzzle_name}")
        self._stars.setText("⭐" * stars + "☆" * (3 - stars))
        self._stars.setVisible(True)
        self._message.setText(f"Time {format_elapsed(time_ms)}  ·  Mistakes {mistakes}")
        self._retry_btn.setVisible(False)
        self._popup()

    def show_game_over(self, puzzle_name: str) -> None:
        self._title.setText("Game over")
        self._stars.setVisible(False)
        self._message.setText(f"Three mistakes on {puzzle_name}. Give it another go?")
        self._retry_btn.setVisible(True)
        self._popup()

    def _popup(self) -> None:
        parent = self.parentWidget()
        if parent is not None:
            self.setGeometry(parent.rect())
        self.raise_()
        self.show()

    def _close(self, retry: bool) -> None:
        self.hide()
        self.closed.emit(retry)

    def eventFilter(self, obj: QWidget, event: QEvent) -> bool:
        if obj is self.parentWidget() and event.type() == QEvent.Type.Resize:
            self.setGeometry(obj.rect())
        return super().eventFilter(obj, event)

    def showEvent(self, event) -> None:
        super().showEvent(event)
        parent = self.parentWidget()
        if parent is not None:
            parent.installEventFilter(self)

    def hideEvent(self, event) -> None:
        parent = self.parentWidget()
        if parent is not None:
            parent.removeEventFilter(self)
        super().hideEvent(event)
