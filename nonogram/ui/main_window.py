from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import QTimer
from PySide6.QtGui import QCloseEvent, QKeySequence, QShortcut
from PySide6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QComboBox,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from nonogram.core.achievements import AchievementStore
from nonogram.core.config import creations_dir, unlock_all_packs
from nonogram.core.daily import DailyResolver
from nonogram.core.daily_progress import DailyProgressStore
from nonogram.core.editor import PuzzleCanvas, load_creations, save_creation
from nonogram.core.game import GameEvent, GameSession, SessionStatus, Tool
from nonogram.core.packs import PackRepository
from nonogram.core.progress import ProgressStore
from nonogram.core.puzzle import Puzzle
from nonogram.core.settings import DISPLAY_SETTINGS, SettingsStore
from nonogram.ui.colors import HomeColors, format_elapsed
from nonogram.ui.custom_overlay import ResultOverlay
from nonogram.ui.editor_widget import FILL, LINE, PENCIL, RECT, EditorCanvasWidget
from nonogram.ui.grid_widget import NonogramGridWidget
from nonogram.ui.home_widgets import CoolBackground, GlassCard, HomeStatCard, PackCard
from nonogram.ui.models import PackState

logger = logging.getLogger(__name__)

_BUTTON_STYLE = f"""
    QPushButton {{
        background: #ffffff;
        color: {HomeColors.TEXT_PRIMARY};
        padding: 8px 14px;
        border: 1px solid #d4d8f0;
        border-radius: 10px;
        font-weight: 700;
    }}
    QPushButton:checked {{
        background: {HomeColors.PRIMARY};
        color: white;
        border-color: {HomeColors.PRIMARY_DARK};
    }}
    QPushButton:disabled {{ color: #b0b4c8; }}
"""


class MainWindow(QMainWindow):
    """Home screen with the daily challenge and packs, a pack screen, the play screen and the editor.

    The window owns the wiring between the game session and the stores:
    when a session reports a win, the result is recorded in the daily or
    pack progress and folded into the achievements.
    """

    def __init__(
        self,
        packs: PackRepository,
        progress_store: ProgressStore,
        daily_store: DailyProgressStore,
        achievements: AchievementStore,
        settings_store: SettingsStore,
        daily_resolver: DailyResolver,
    ) -> None:
        super().__init__()
        self._packs = packs
        self._progress_store = progress_store
        self._daily_store = daily_store
        self._achievements = achievements
        self._settings_store = settings_store
        self._daily_resolver = daily_resolver
        self._unlock_all = unlock_all_packs()

        self._session: Optional[GameSession] = None
        self._current_pack_id: Optional[str] = None
        self._is_daily = False

        self._stack: Optional[QStackedWidget] = None
        self._home_screen: Optional[QWidget] = None
        self._pack_screen: Optional[QWidget] = None
        self._play_screen: Optional[QWidget] = None
        self._packs_layout: Optional[QGridLayout] = None
        self._pack_puzzles_layout: Optional[QGridLayout] = None
        self._pack_title_label: Optional[QLabel] = None
        self._daily_button: Optional[QPushButton] = None
        self._week_label: Optional[QLabel] = None
        self._stars_card: Optional[HomeStatCard] = None
        self._streak_card: Optional[HomeStatCard] = None
        self._best_streak_card: Optional[HomeStatCard] = None
        self._achievements_card: Optional[HomeStatCard] = None

        self._grid_widget: Optional[NonogramGridWidget] = None
        self._play_title_label: Optional[QLabel] = None
        self._time_label: Optional[QLabel] = None
        self._mistakes_label: Optional[QLabel] = None
        self._hint_button: Optional[QPushButton] = None
        self._pause_button: Optional[QPushButton] = None
        self._fill_button: Optional[QPushButton] = None
        self._mark_button: Optional[QPushButton] = None
        self._status_label: Optional[QLabel] = None

        self._editor_screen: Optional[QWidget] = None
        self._editor_widget: Optional[EditorCanvasWidget] = None
        self._editor_name_edit: Optional[QLineEdit] = None
        self._editor_size_box: Optional[QComboBox] = None
        self._editor_open_box: Optional[QComboBox] = None
        self._editor_undo_button: Optional[QPushButton] = None
        self._editor_redo_button: Optional[QPushButton] = None
        self._editor_status_label: Optional[QLabel] = None

        self._clock_timer = QTimer(self)
        self._clock_timer.setInterval(250)
        self._clock_timer.timeout.connect(self._update_play_stats)

        self._build_ui()
        self._refresh_home()

    # -- construction --------------------------------------------------------

    def _build_ui(self) -> None:
        self.setWindowTitle("Nonogram")
        self.setMinimumSize(960, 720)

        self._stack = QStackedWidget()
        self._home_screen = CoolBackground()
        self._pack_screen = CoolBackground()
        self._play_screen = CoolBackground()
        self._editor_screen = CoolBackground()
        for screen in (self._home_screen, self._pack_screen, self._play_screen, self._editor_screen):
            self._stack.addWidget(screen)
        self.setCentralWidget(self._stack)

        self._result_overlay = ResultOverlay(self._stack)
        self._result_overlay.hide()
        self._result_overlay.closed.connect(self._on_result_closed)

        self._build_home_screen()
        self._build_pack_screen()
        self._build_play_screen()
        self._build_editor_screen()

        for key, handler in (
            ("F", lambda: self._set_tool(Tool.FILL)),
            ("X", lambda: self._set_tool(Tool.MARK)),
            ("H", self._use_hint),
            ("P", self._toggle_pause),
        ):
            shortcut = QShortcut(QKeySequence(key), self)
            shortcut.activated.connect(handler)

    def _build_home_screen(self) -> None:
        layout = QVBoxLayout(self._home_screen)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(20)

        header = GlassCard()
        header_row = QHBoxLayout(header)
        header_row.setContentsMargins(16, 16, 16, 16)
        title_col = QVBoxLayout()
        title = QLabel("Nonogram")
        title.setStyleSheet(f"color: {HomeColors.PRIMARY}; font-size: 28px; font-weight: 900;")
        subtitle = QLabel("PICTURE LOGIC PUZZLES")
        subtitle.setStyleSheet(f"color: {HomeColors.TEXT_SECONDARY}; font-size: 12px; letter-spacing: 4px; font-weight: 600;")
        title_col.addWidget(title)
        title_col.addWidget(subtitle)
        header_row.addLayout(title_col, 1)
        create = QPushButton("✏️ Create puzzle")
        create.setStyleSheet(_BUTTON_STYLE)
        create.clicked.connect(self._show_editor)
        header_row.addWidget(create, 0)
        layout.addWidget(header, 0)

        content_row = QHBoxLayout()
        content_row.setSpacing(24)

        stats_panel = GlassCard()
        stats_panel.setFixedWidth(300)
        stats_layout = QVBoxLayout(stats_panel)
        stats_layout.setContentsMargins(20, 20, 20, 20)
        stats_layout.setSpacing(14)

        daily_title = QLabel("📅 Daily challenge")
        daily_title.setStyleSheet(f"color: {HomeColors.TEXT_PRIMARY}; font-size: 16px; font-weight: 900;")
        stats_layout.addWidget(daily_title)
        self._daily_button = QPushButton("")
        self._daily_button.setStyleSheet(_BUTTON_STYLE)
        self._daily_button.clicked.connect(self._start_daily)
        stats_layout.addWidget(self._daily_button)
        self._week_label = QLabel("")
        self._week_label.setStyleSheet(f"color: {HomeColors.TEXT_SECONDARY}; font-size: 12px;")
        stats_layout.addWidget(self._week_label)

        self._stars_card = HomeStatCard("⭐", "Stars", "0", HomeColors.AMBER)
        self._streak_card = HomeStatCard("🔥", "Streak", "0", HomeColors.CORAL)
        self._best_streak_card = HomeStatCard("🏅", "Best streak", "0", HomeColors.PRIMARY_LIGHT)
        self._achievements_card = HomeStatCard("🏆", "Achievements", "0", HomeColors.PRIMARY)
        for card in (self._stars_card, self._streak_card, self._best_streak_card, self._achievements_card):
            stats_layout.addWidget(card)
        settings = self._settings_store.settings
        for key, text in DISPLAY_SETTINGS.items():
            box = QCheckBox(text)
            box.setChecked(getattr(settings, key))
            box.setStyleSheet(f"color: {HomeColors.TEXT_SECONDARY}; font-size: 12px;")
            box.toggled.connect(lambda checked, k=key: self._settings_store.update(**{k: checked}))
            stats_layout.addWidget(box)
        stats_layout.addStretch(1)
        content_row.addWidget(stats_panel, 0)

        packs_container = QWidget()
        self._packs_layout = QGridLayout(packs_container)
        self._packs_layout.setSpacing(16)
        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setFrameShape(QFrame.NoFrame)
        scroll.setStyleSheet("background: transparent;")
        scroll.setWidget(packs_container)
        content_row.addWidget(scroll, 1)

        layout.addLayout(content_row, 1)

    def _build_pack_screen(self) -> None:
        layout = QVBoxLayout(self._pack_screen)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(16)

        top = QHBoxLayout()
        back = QPushButton("← Back")
        back.setStyleSheet(_BUTTON_STYLE)
        back.clicked.connect(self._show_home_screen)
        top.addWidget(back, 0)
        self._pack_title_label = QLabel("")
        self._pack_title_label.setStyleSheet(f"color: {HomeColors.PRIMARY}; font-size: 22px; font-weight: 900;")
        top.addWidget(self._pack_title_label, 1)
        layout.addLayout(top)

        card = GlassCard()
        self._pack_puzzles_layout = QGridLayout(card)
        self._pack_puzzles_layout.setContentsMargins(20, 20, 20, 20)
        self._pack_puzzles_layout.setSpacing(12)
        layout.addWidget(card, 0)
        layout.addStretch(1)

    def _build_play_screen(self) -> None:
        layout = QVBoxLayout(self._play_screen)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        back = QPushButton("← Back")
        back.setStyleSheet(_BUTTON_STYLE)
        back.clicked.connect(self._leave_play_screen)
        header.addWidget(back, 0)
        self._play_title_label = QLabel("")
        self._play_title_label.setStyleSheet(f"color: {HomeColors.PRIMARY}; font-size: 22px; font-weight: 900;")
        header.addWidget(self._play_title_label, 1)
        self._time_label = QLabel("00:00")
        self._time_label.setStyleSheet(f"color: {HomeColors.TEXT_PRIMARY}; font-size: 18px; font-weight: 800;")
        header.addWidget(self._time_label, 0)
        self._mistakes_label = QLabel("")
        self._mistakes_label.setStyleSheet(f"color: {HomeColors.CORAL}; font-size: 18px; font-weight: 800;")
        header.addWidget(self._mistakes_label, 0)
        layout.addLayout(header)

        board_card = GlassCard()
        board_layout = QVBoxLayout(board_card)
        board_layout.setContentsMargins(16, 16, 16, 16)
        self._grid_widget = NonogramGridWidget(self._on_cell_clicked)
        board_layout.addWidget(self._grid_widget, 1)
        layout.addWidget(board_card, 1)

        tools = QHBoxLayout()
        tools.setSpacing(10)
        self._fill_button = QPushButton("■ Fill")
        self._mark_button = QPushButton("✕ Mark")
        group = QButtonGroup(self)
        group.setExclusive(True)
        for button, tool in ((self._fill_button, Tool.FILL), (self._mark_button, Tool.MARK)):
            button.setCheckable(True)
            button.setStyleSheet(_BUTTON_STYLE)
            button.clicked.connect(lambda _checked=False, t=tool: self._set_tool(t))
            group.addButton(button)
            tools.addWidget(button)
        self._fill_button.setChecked(True)

        self._hint_button = QPushButton("")
        self._hint_button.setStyleSheet(_BUTTON_STYLE)
        self._hint_button.clicked.connect(self._use_hint)
        tools.addWidget(self._hint_button)

        self._pause_button = QPushButton("Pause")
        self._pause_button.setStyleSheet(_BUTTON_STYLE)
        self._pause_button.clicked.connect(self._toggle_pause)
        tools.addWidget(self._pause_button)

        reset = QPushButton("Restart")
        reset.setStyleSheet(_BUTTON_STYLE)
        reset.clicked.connect(self._restart_puzzle)
        tools.addWidget(reset)

        tools.addStretch(1)
        self._status_label = QLabel("")
        self._status_label.setStyleSheet(f"color: {HomeColors.TEXT_SECONDARY}; font-size: 13px; font-weight: 600;")
        tools.addWidget(self._status_label)
        layout.addLayout(tools)

    def _build_editor_screen(self) -> None:
        layout = QVBoxLayout(self._editor_screen)
        layout.setContentsMargins(16, 16, 16, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        back = QPushButton("← Back")
        back.setStyleSheet(_BUTTON_STYLE)
        back.clicked.connect(self._show_home_screen)
        header.addWidget(back, 0)
        title = QLabel("Puzzle editor")
        title.setStyleSheet(f"color: {HomeColors.PRIMARY}; font-size: 22px; font-weight: 900;")
        header.addWidget(title, 1)
        self._editor_open_box = QComboBox()
        self._editor_open_box.activated.connect(self._open_creation)
        header.addWidget(self._editor_open_box, 0)
        self._editor_name_edit = QLineEdit()
        self._editor_name_edit.setPlaceholderText("Puzzle name")
        header.addWidget(self._editor_name_edit, 0)
        save = QPushButton("💾 Save")
        save.setStyleSheet(_BUTTON_STYLE)
        save.clicked.connect(self._save_creation)
        header.addWidget(save, 0)
        layout.addLayout(header)

        board_card = GlassCard()
        board_layout = QVBoxLayout(board_card)
        board_layout.setContentsMargins(16, 16, 16, 16)
        self._editor_widget = EditorCanvasWidget(PuzzleCanvas(10), self._update_editor_stats)
        board_layout.addWidget(self._editor_widget, 1)
        layout.addWidget(board_card, 1)

        tools = QHBoxLayout()
        tools.setSpacing(10)
        group = QButtonGroup(self)
        group.setExclusive(True)
        for text, tool in (("✏️ Pencil", PENCIL), ("╱ Line", LINE), ("▭ Rect", RECT), ("🪣 Fill", FILL)):
            button = QPushButton(text)
            button.setCheckable(True)
            button.setChecked(tool == PENCIL)
            button.setStyleSheet(_BUTTON_STYLE)
            button.clicked.connect(lambda _checked=False, t=tool: self._editor_widget.set_tool(t))
            group.addButton(button)
            tools.addWidget(button)

        self._editor_undo_button = QPushButton("↶ Undo")
        self._editor_redo_button = QPushButton("↷ Redo")
        clear = QPushButton("Clear")
        for button, handler in (
            (self._editor_undo_button, self._editor_undo),
            (self._editor_redo_button, self._editor_redo),
            (clear, self._editor_clear),
        ):
            button.setStyleSheet(_BUTTON_STYLE)
            button.clicked.connect(handler)
            tools.addWidget(button)

        self._editor_size_box = QComboBox()
        for size in (5, 10, 15, 20):
            self._editor_size_box.addItem(f"{size}×{size}", size)
        self._editor_size_box.setCurrentIndex(1)
        self._editor_size_box.activated.connect(self._editor_resize)
        tools.addWidget(self._editor_size_box)

        tools.addStretch(1)
        self._editor_status_label = QLabel("")
        self._editor_status_label.setStyleSheet(f"color: {HomeColors.TEXT_SECONDARY}; font-size: 13px; font-weight: 600;")
        tools.addWidget(self._editor_status_label)
        layout.addLayout(tools)

    # -- home ----------------------------------------------------------------

    def _build_pack_states(self) -> list[PackState]:
        states: list[PackState] = []
        for pack in self._packs.all():
            unlocked = self._unlock_all or self._progress_store.is_pack_unlocked(pack.id)
            states.append(
                PackState(
                    pack=pack,
                    unlocked=unlocked,
                    completed=self._progress_store.completed_in_pack(pack.id),
                    stars=self._progress_store.pack_stars(pack.id),
                    requirement=None if unlocked else self._progress_store.get_unlock_requirement(pack.id),
                )
            )
        for state in states:
            if state.unlocked and state.completed < state.total:
                state.is_current = True
                break
        return states

    def _refresh_home(self) -> None:
        if self._packs_layout is not None:
            while self._packs_layout.count():
                item = self._packs_layout.takeAt(0)
                w = item.widget()
                if w is not None:
                    w.setParent(None)
                    w.deleteLater()
            for idx, state in enumerate(self._build_pack_states()):
                card = PackCard(state, on_click=self._show_pack)
                self._packs_layout.addWidget(card, idx // 2, idx % 2)

        if self._daily_button is not None:
            today = self._daily_store.today_string()
            result = self._daily_store.today_result()
            if result is not None:
                self._daily_button.setText(f"{today}  ✓ {'⭐' * result.stars}")
            else:
                self._daily_button.setText(f"Play {today}")
        if self._week_label is not None:
            marks = [
                f"{day.day_name[:2]} {'●' if day.completed else '○'}"
                for day in self._daily_store.week_calendar()
            ]
            self._week_label.setText("  ".join(marks))

        self._stars_card.set_value(f"{self._progress_store.total_stars}")
        self._streak_card.set_value(f"{self._daily_store.current_streak}")
        self._best_streak_card.set_value(f"{self._daily_store.longest_streak}")
        self._achievements_card.set_value(f"{self._achievements.unlocked_count}/{self._achievements.total_count}")

    def _show_home_screen(self) -> None:
        self._clock_timer.stop()
        self._refresh_home()
        self._stack.setCurrentWidget(self._home_screen)

    def _show_pack(self, pack_id: str) -> None:
        pack = self._packs.get(pack_id)
        self._current_pack_id = pack_id
        self._pack_title_label.setText(f"{pack.icon} {pack.name}")
        layout = self._pack_puzzles_layout
        while layout.count():
            item = layout.takeAt(0)
            w = item.widget()
            if w is not None:
                w.setParent(None)
                w.deleteLater()
        for idx, puzzle in enumerate(pack.puzzles):
            result = self._progress_store.get_puzzle_result(pack_id, puzzle.id)
            label = f"{puzzle.name}  {puzzle.size}×{puzzle.size}"
            if result is not None:
                label += f"  {'⭐' * result.stars}"
            button = QPushButton(label)
            button.setStyleSheet(_BUTTON_STYLE)
            button.clicked.connect(lambda _checked=False, p=puzzle: self._start_puzzle(p, is_daily=False))
            layout.addWidget(button, idx // 3, idx % 3)
        self._stack.setCurrentWidget(self._pack_screen)

    # -- play ----------------------------------------------------------------

    def _start_daily(self) -> None:
        puzzle = self._daily_resolver.resolve(self._daily_store.today_string())
        self._current_pack_id = None
        self._start_puzzle(puzzle, is_daily=True)

    def _start_puzzle(self, puzzle: Puzzle, is_daily: bool) -> None:
        self._is_daily = is_daily
        if self._session is None:
            self._session = GameSession(puzzle)
            self._session.add_listener(self._on_game_event)
        else:
            self._session.load_puzzle(puzzle)
        self._session.set_tool(Tool.FILL)
        self._fill_button.setChecked(True)
        settings = self._settings_store.settings
        self._grid_widget.set_highlight_completed(settings.highlight_completed)
        self._time_label.setVisible(settings.show_timer)
        self._mistakes_label.setVisible(settings.show_mistakes)
        self._grid_widget.set_session(self._session)
        title = puzzle.name if not is_daily else f"Daily · {puzzle.date}"
        self._play_title_label.setText(title)
        self._stack.setCurrentWidget(self._play_screen)
        self._update_play_stats()
        self._clock_timer.start()

    def _leave_play_screen(self) -> None:
        if self._session is not None and self._session.status == SessionStatus.PLAYING:
            self._session.pause()
        if self._current_pack_id is not None:
            self._clock_timer.stop()
            self._show_pack(self._current_pack_id)
        else:
            self._show_home_screen()

    def _on_cell_clicked(self, row: int, col: int) -> None:
        if self._session is None:
            return
        if self._session.toggle_cell(row, col):
            self._grid_widget.update()
            self._update_play_stats()

    def _set_tool(self, tool: Tool) -> None:
        if self._session is None:
            return
        self._session.set_tool(tool)
        button = self._fill_button if tool == Tool.FILL else self._mark_button
        button.setChecked(True)

    def _use_hint(self) -> None:
        if self._session is None:
            return
        if self._session.use_hint() is not None:
            self._grid_widget.update()
            self._update_play_stats()

    def _toggle_pause(self) -> None:
        session = self._session
        if session is None:
            return
        if session.status == SessionStatus.PLAYING:
            session.pause()
        elif session.status == SessionStatus.PAUSED:
            session.resume()
        self._update_play_stats()

    def _restart_puzzle(self) -> None:
        if self._session is None:
            return
        self._session.reset()
        self._grid_widget.update()
        self._update_play_stats()
        self._clock_timer.start()

    def _update_play_stats(self) -> None:
        session = self._session
        if session is None:
            return
        self._time_label.setText(format_elapsed(session.elapsed_ms))
        self._mistakes_label.setText("✕" * session.mistakes + "·" * (3 - session.mistakes))
        self._hint_button.setText(f"💡 Hint ({session.hints_remaining})")
        self._hint_button.setEnabled(session.hints_remaining > 0 and session.is_playing)
        self._pause_button.setText("Resume" if session.status == SessionStatus.PAUSED else "Pause")
        self._pause_button.setEnabled(session.status in (SessionStatus.PLAYING, SessionStatus.PAUSED))
        status_text = {
            SessionStatus.PLAYING: "",
            SessionStatus.PAUSED: "Paused",
            SessionStatus.COMPLETED: "Solved!",
            SessionStatus.GAME_OVER: "Game over",
        }
        self._status_label.setText(status_text[session.status])

    def _on_game_event(self, event: GameEvent) -> None:
        if event == GameEvent.WIN:
            self._clock_timer.stop()
            self._record_win()
        elif event == GameEvent.GAME_OVER:
            self._clock_timer.stop()
            self._result_overlay.show_game_over(self._session.puzzle.name)

    def _record_win(self) -> None:
        session = self._session
        result = session.result()
        if result is None:
            return
        puzzle = session.puzzle
        if self._is_daily:
            self._daily_store.complete_daily(result.stars, result.time_ms, result.mistakes)
        elif self._current_pack_id is not None:
            self._progress_store.complete_puzzle(
                self._current_pack_id, puzzle.id, result.stars, result.time_ms, result.mistakes
            )
        self._achievements.record_puzzle(
            puzzle.size,
            result.stars,
            result.mistakes,
            result.time_ms,
            longest_streak=self._daily_store.longest_streak,
            total_dailies=self._daily_store.total_completed,
        )
        achievement = self._achievements.pop_new()
        while achievement is not None:
            logger.info("New achievement to show: %s", achievement.name)
            self.statusBar().showMessage(f"{achievement.icon} {achievement.name}: {achievement.description}", 5000)
            achievement = self._achievements.pop_new()
        self._result_overlay.show_win(puzzle.name, result.stars, result.time_ms, result.mistakes)

    def _on_result_closed(self, retry: bool) -> None:
        if retry:
            self._restart_puzzle()
        else:
            self._leave_play_screen()

    # -- editor --------------------------------------------------------------

    def _show_editor(self) -> None:
        self._clock_timer.stop()
        self._refresh_creations()
        self._update_editor_stats()
        self._stack.setCurrentWidget(self._editor_screen)

    def _refresh_creations(self) -> None:
        box = self._editor_open_box
        box.clear()
        box.addItem("Open saved…", None)
        for puzzle in load_creations(creations_dir()):
            box.addItem(f"{puzzle.name}  {puzzle.size}×{puzzle.size}", puzzle)

    def _open_creation(self, index: int) -> None:
        puzzle = self._editor_open_box.itemData(index)
        if puzzle is None:
            return
        self._editor_widget.set_canvas(PuzzleCanvas.from_puzzle(puzzle))
        self._editor_name_edit.setText(puzzle.name)
        self._update_editor_stats()

    def _editor_undo(self) -> None:
        if self._editor_widget.canvas.undo():
            self._editor_widget.update()
            self._update_editor_stats()

    def _editor_redo(self) -> None:
        if self._editor_widget.canvas.redo():
            self._editor_widget.update()
            self._update_editor_stats()

    def _editor_clear(self) -> None:
        self._editor_widget.canvas.clear()
        self._editor_widget.update()
        self._update_editor_stats()

    def _editor_resize(self, index: int) -> None:
        size = self._editor_size_box.itemData(index)
        canvas = self._editor_widget.canvas
        if size != canvas.size:
            canvas.resize(size)
            self._editor_widget.update()
            self._update_editor_stats()

    def _update_editor_stats(self) -> None:
        canvas = self._editor_widget.canvas
        self._editor_undo_button.setEnabled(canvas.can_undo)
        self._editor_redo_button.setEnabled(canvas.can_redo)
        index = self._editor_size_box.findData(canvas.size)
        if index >= 0:
            self._editor_size_box.setCurrentIndex(index)
        filled = sum(sum(row) for row in canvas.solution)
        self._editor_status_label.setText(f"{filled} filled")

    def _save_creation(self) -> None:
        name = self._editor_name_edit.text().strip() or "Untitled"
        path = save_creation(self._editor_widget.canvas, creations_dir(), name)
        if path is None:
            self._editor_status_label.setText("Nothing saved")
            return
        self._editor_status_label.setText(f"Saved {path.name}")
        self._refresh_creations()

    def closeEvent(self, event: QCloseEvent) -> None:
        """Persist progress when closing the app."""
        self._progress_store.save()
        super().closeEvent(event)
