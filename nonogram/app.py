"""Application entry point and setup for the Nonogram puzzle game."""

import logging
import sys

from PySide6.QtGui import QFont, QGuiApplication
from PySide6.QtWidgets import QApplication

from nonogram.core.achievements import AchievementStore
from nonogram.core.config import user_data_dir
from nonogram.core.daily import DailyResolver, ScheduledPuzzleRepository
from nonogram.core.daily_progress import DailyProgressStore
from nonogram.core.packs import PackRepository
from nonogram.core.progress import ProgressStore
from nonogram.core.settings import SettingsStore
from nonogram.ui.main_window import MainWindow


def configure_logging() -> None:
    """Configure application-wide logging with a standard format."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def configure_font(app: QApplication) -> None:
    """Use the platform UI font with emoji fallbacks for stars, locks and icons."""
    app_font = QFont(app.font())
    app_font.setFamilies(
        [
            app_font.family(),
            "Noto Color Emoji",  # Linux (common)
            "Noto Emoji",
            "Segoe UI Emoji",  # Windows
            "Apple Color Emoji",  # macOS
        ]
    )
    app_font.setPointSize(11)
    app.setFont(app_font)
    QGuiApplication.setFont(app_font)


def run() -> None:
    """Build the stores, resolve today's puzzle source and start the main window."""
    configure_logging()
    app = QApplication(sys.argv)
    app.setApplicationName("Nonogram")
    app.setApplicationDisplayName("Nonogram")

    configure_font(app)

    data_dir = user_data_dir()
    packs = PackRepository()
    progress_store = ProgressStore(packs.all(include_inactive=True), data_dir / "progress.json")
    daily_store = DailyProgressStore(data_dir / "daily.json")
    achievements = AchievementStore(data_dir / "achievements.json")
    settings_store = SettingsStore(data_dir / "settings.json")
    daily_resolver = DailyResolver(ScheduledPuzzleRepository())
    logging.info("Using data directory %s", data_dir)

    window = MainWindow(
        packs=packs,
        progress_store=progress_store,
        daily_store=daily_store,
        achievements=achievements,
        settings_store=settings_store,
        daily_resolver=daily_resolver,
    )
    screen = QGuiApplication.primaryScreen()
    if screen is not None:
        geometry = screen.availableGeometry()
        window.resize(min(1280, geometry.width()), min(900, geometry.height()))
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    run()
