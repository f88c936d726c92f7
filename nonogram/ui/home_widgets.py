"""Home screen building blocks: background, cards and pack tiles."""

from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QPoint, Qt
from PySide6.QtGui import QColor, QLinearGradient, QPainter, QRadialGradient
from PySide6.QtWidgets import (
    QFrame,
    QGraphicsDropShadowEffect,
    QHBoxLayout,
    QLabel,
    QProgressBar,
    QVBoxLayout,
    QWidget,
)

from nonogram.ui.colors import HomeColors, blend_hex
from nonogram.ui.models import PackState


class CoolBackground(QWidget):
    """Gradient background with soft glows (light theme)."""

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        gradient = QLinearGradient(0, 0, self.width(), self.height())
        gradient.setColorAt(0.0, QColor(HomeColors.BG_TOP))
        gradient.setColorAt(0.5, QColor(HomeColors.BG_MIDDLE))
        gradient.setColorAt(1.0, QColor(HomeColors.BG_BOTTOM))
        painter.fillRect(self.rect(), gradient)

        painter.setPen(Qt.NoPen)
        for x_ratio, y_ratio, radius, alpha in ((0.85, 0.15, 220, 70), (0.12, 0.82, 170, 55)):
            radial = QRadialGradient(self.width() * x_ratio, self.height() * y_ratio, radius)
            radial.setColorAt(0, QColor(255, 255, 255, alpha))
            radial.setColorAt(1, QColor(255, 255, 255, 0))
            painter.setBrush(radial)
            painter.drawEllipse(QPoint(int(self.width() * x_ratio), int(self.height() * y_ratio)), radius, radius)


class GlassCard(QFrame):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("glassCard")
        self.setStyleSheet(
            f"""
            QFrame#glassCard {{
                background: {HomeColors.CARD_BG};
                border: 1px solid {HomeColors.CARD_BORDER};
                border-radius: 20px;
            }}
            """
        )
        shadow = QGraphicsDropShadowEffect(self)
        shadow.setBlurRadius(30)
        shadow.setOffset(0, 8)
        shadow.setColor(QColor(20, 20, 70, 40))
        self.setGraphicsEffect(shadow)


class HomeStatCard(QFrame):
    def __init__(self, icon: str, label: str, value: str, bg_color: str, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("homeStatCard")
        self.setStyleSheet(
            f"""
            QFrame#homeStatCard {{
                background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
                    stop:0 {bg_color}, stop:1 {QColor(bg_color).darker(112).name()});
                border-radius: 16px;
                border: none;
            }}
            """
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(18, 14, 18, 14)
        layout.setSpacing(4)
        label_widget = QLabel(f"{icon} {label}")
        label_widget.setStyleSheet("color: rgba(255,255,255,0.92); font-size: 12px; font-weight: 600;")
        layout.addWidget(label_widget)
        self.value_label = QLabel(str(value))
        self.value_label.setStyleSheet("color: white; font-size: 28px; font-weight: 900;")
        layout.addWidget(self.value_label)

    def set_value(self, value: str) -> None:
        self.value_label.setText(str(value))


class PackCard(QFrame):
    """Clickable tile for one puzzle pack: icon, name, progress and lock state."""

    def __init__(self, state: PackState, on_click: Callable[[str], None], parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._pack_id = state.pack.id
        self._unlocked = state.unlocked
        self._on_click = on_click
        self.setObjectName("packCard")
        self.setCursor(Qt.PointingHandCursor if state.unlocked else Qt.ForbiddenCursor)

        base = state.pack.color
        top = blend_hex(base, "#FFFFFF", 0.18)
        bottom = blend_hex(base, "#000000", 0.08)
        if not state.unlocked:
            top = blend_hex(top, "#9CA3AF", 0.7)
            bottom = blend_hex(bottom, "#6B7280", 0.7)
        self.setStyleSheet(
            f"""
            QFrame#packCard {{
                background: qlineargradient(x1:0, y1:0, x2:0, y2:1, stop:0 {top}, stop:1 {bottom});
                border-radius: 16px;
                border: 1px solid rgba(255, 255, 255, 0.40);
            }}
            QFrame#packCard:hover {{ border: 1px solid rgba(255, 255, 255, 0.68); }}
            QLabel {{ color: rgba(255, 255, 255, 0.95); background: transparent; }}
            QProgressBar {{ border: none; border-radius: 5px; background: rgba(255, 255, 255, 0.22); }}
            QProgressBar::chunk {{ border-radius: 5px; background: rgba(255, 255, 255, 0.70); }}
            """
        )

        layout = QVBoxLayout(self)
        layout.setContentsMargins(14, 12, 14, 12)
        layout.setSpacing(8)

        header = QHBoxLayout()
        icon = QLabel(state.pack.icon)
        icon.setStyleSheet("font-size: 26px;")
        title = QLabel(state.pack.name)
        title.setStyleSheet("font-size: 15px; font-weight: 900;")
        title.setWordWrap(True)
        header.addWidget(icon, 0)
        header.addWidget(title, 1)
        if not state.unlocked:
            lock = QLabel("🔒")
            lock.setStyleSheet("font-size: 14px;")
            header.addWidget(lock, 0, Qt.AlignRight)
        layout.addLayout(header)

        detail = state.requirement_text() if not state.unlocked else state.pack.description
        detail_label = QLabel(detail)
        detail_label.setWordWrap(True)
        detail_label.setStyleSheet("font-size: 12px; font-weight: 600;")
        layout.addWidget(detail_label)

        bar = QProgressBar()
        bar.setTextVisible(False)
        bar.setFixedHeight(10)
        bar.setRange(0, max(1, state.total))
        bar.setValue(state.completed)
        layout.addWidget(bar)

        footer = QLabel(f"{state.completed}/{state.total} solved  ⭐ {state.stars}/{state.max_stars}")
        footer.setStyleSheet("font-size: 12px; font-weight: 800;")
        layout.addWidget(footer)

    def mousePressEvent(self, event) -> None:
        if self._unlocked:
            self._on_click(self._pack_id)
        super().mousePressEvent(event)
