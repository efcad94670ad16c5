# -*- coding: utf-8 -*-
########################
# main_window.py
########################
# Purpose:
# - Primary Qt window and UI host.
# - Renders GamePhaseController snapshots as one of three pages: start, board (flash and recall)
#   and distraction. Forwards button presses, keys and board clicks as controller commands.
#
# Design notes:
# - MainWindow never decides game state. It only renders snapshots and forwards commands.
# - Notices are shown after the controller has already returned to IDLE, from a zero delay
#   single shot so the modal box does not run inside the controller call stack.
#
########################
# Interfaces:
# Public classes:
# - class MainWindow(PyQt6.QtWidgets.QMainWindow)
#   - __init__(controller: GamePhaseController, *, notice_presenter=None, parent=None)
#   - render_snapshot(snapshot: GameSnapshot) -> None
#   - on_action_fullscreen_toggle() -> None
#
# Inputs:
# - Controller snapshots and notices, QKeyEvent, button clicks, board clicks.
#
# Outputs:
# - Controller commands: start_or_continue_level, answer_distraction, click_cell.
#
########################
# Unit Tests:
# - Keep as manual UI smoke:
#   - python grid_recall.py --seed 1
# - Prefer controller tests for behaviors, since MainWindow should stay thin.
########################

from __future__ import annotations

from typing import Callable, Optional

from PyQt6.QtCore import Qt, QTimer
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from game_controller import GamePhaseController
from grid_board import GridBoardWidget
from grid_models import GameNotice, GameSnapshot, Phase
from shape_painter import ShapeWidget


THEME_BACKGROUND = "#f4f4f9"
THEME_CARD = "#ffffff"
THEME_TEXT = "#333333"
THEME_SUCCESS = "#4CAF50"
THEME_ACTION = "#2196F3"
THEME_WARNING = "red"

TIMER_WARNING_SECONDS = 5

NoticePresenter = Callable[[str, str], None]

_RULES_HTML = (
    "<b>Rules:</b><br/>"
    "1. You will see a grid of ash dots.<br/>"
    "2. Dots will flash <b style='color:#D4AF37'>Gold</b> with a number (1, 2...).<br/>"
    "3. Answer the distraction question between flashes.<br/>"
    "4. Finally, click the dots in the <b style='color:red'>EXACT ORDER</b>.<br/>"
    "5. <b style='color:blue'>Timer:</b> {short}s (Levels 1-{short_until}), {long}s (Levels {long_from}+)."
)


def _card_frame(object_name: str, parent: QWidget) -> QFrame:
    frame = QFrame(parent)
    frame.setObjectName(object_name)
    frame.setStyleSheet(
        f"QFrame#{object_name} {{"
        f"  background: {THEME_CARD};"
        "  border-radius: 10px;"
        "}"
    )
    return frame


def _action_button(text: str, color: str, parent: QWidget) -> QPushButton:
    button = QPushButton(text, parent)
    button.setCursor(Qt.CursorShape.PointingHandCursor)
    button.setStyleSheet(
        "QPushButton {"
        f"  background: {color};"
        "  color: white;"
        "  border: none;"
        "  border-radius: 5px;"
        "  padding: 12px 30px;"
        "  font-size: 16px;"
        "}"
    )
    return button


class MainWindow(QMainWindow):
    def __init__(
        self,
        controller: GamePhaseController,
        *,
        notice_presenter: Optional[NoticePresenter] = None,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._notice_presenter = notice_presenter or self._show_notice_box

        self.setWindowTitle("Grid Recall")
        self.setStyleSheet(f"QMainWindow {{ background: {THEME_BACKGROUND}; }}")

        central = QWidget(self)
        root_layout = QVBoxLayout(central)
        root_layout.setContentsMargins(20, 20, 20, 20)
        root_layout.setSpacing(10)
        root_layout.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)

        self._heading_label = QLabel("", central)
        self._heading_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._heading_label.setStyleSheet(f"color: {THEME_TEXT}; font-size: 28px; font-weight: bold;")

        self._timer_label = QLabel("", central)
        self._timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._timer_label.hide()

        self._pages = QStackedWidget(central)
        self._start_page = self._build_start_page()
        self._board_page = self._build_board_page()
        self._distraction_page = self._build_distraction_page()
        self._pages.addWidget(self._start_page)
        self._pages.addWidget(self._board_page)
        self._pages.addWidget(self._distraction_page)

        root_layout.addWidget(self._heading_label)
        root_layout.addWidget(self._timer_label)
        root_layout.addWidget(self._pages, 1)
        self.setCentralWidget(central)

        self._controller.add_state_listener(self.render_snapshot)
        self._controller.add_notice_listener(self._on_notice)

        self.render_snapshot(self._controller.snapshot())

    # -----------------
    # Page construction
    # -----------------

    def _build_start_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout(page)
        layout.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)

        card = _card_frame("startCard", page)
        card.setMaximumWidth(600)
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(30, 30, 30, 30)

        rules = self._controller.rules()
        self._rules_label = QLabel(
            _RULES_HTML.format(
                short=rules.recall_budget_short_seconds,
                short_until=max(1, rules.long_budget_from_level - 1),
                long=rules.recall_budget_long_seconds,
                long_from=rules.long_budget_from_level,
            ),
            card,
        )
        self._rules_label.setTextFormat(Qt.TextFormat.RichText)
        self._rules_label.setWordWrap(True)
        self._rules_label.setStyleSheet("font-size: 15px; line-height: 160%;")

        self._start_button = _action_button("Start Level 1", THEME_SUCCESS, card)
        self._start_button.clicked.connect(self._on_start_clicked)

        card_layout.addWidget(self._rules_label)
        card_layout.addSpacing(20)
        card_layout.addWidget(self._start_button, 0, Qt.AlignmentFlag.AlignHCenter)
        layout.addWidget(card)
        return page

    def _build_board_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout(page)
        layout.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)

        self._board_title_label = QLabel("", page)
        self._board_title_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self._board_title_label.setStyleSheet(f"color: {THEME_TEXT}; font-size: 20px; font-weight: bold;")

        self._board = GridBoardWidget(grid_size=self._controller.grid_size(), parent=page)
        self._board.cellClicked.connect(self._on_cell_clicked)

        layout.addWidget(self._board_title_label)
        layout.addWidget(self._board, 0, Qt.AlignmentFlag.AlignHCenter)
        return page

    def _build_distraction_page(self) -> QWidget:
        page = QWidget(self)
        layout = QVBoxLayout(page)
        layout.setAlignment(Qt.AlignmentFlag.AlignHCenter | Qt.AlignmentFlag.AlignTop)

        card = _card_frame("distractionCard", page)
        card_layout = QVBoxLayout(card)
        card_layout.setContentsMargins(40, 40, 40, 40)

        question_label = QLabel("Are these shapes IDENTICAL?", card)
        question_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        question_label.setStyleSheet("font-size: 22px; font-weight: bold;")

        shapes_row = QHBoxLayout()
        shapes_row.setSpacing(50)
        self._left_shape = ShapeWidget(size_pixels=80, parent=card)
        self._right_shape = ShapeWidget(size_pixels=80, parent=card)
        shapes_row.addStretch(1)
        shapes_row.addWidget(self._left_shape)
        shapes_row.addWidget(self._right_shape)
        shapes_row.addStretch(1)

        buttons_row = QHBoxLayout()
        buttons_row.setSpacing(20)
        self._yes_button = _action_button("YES", THEME_ACTION, card)
        self._no_button = _action_button("NO", THEME_ACTION, card)
        self._yes_button.clicked.connect(lambda: self._controller.answer_distraction(True))
        self._no_button.clicked.connect(lambda: self._controller.answer_distraction(False))
        buttons_row.addStretch(1)
        buttons_row.addWidget(self._yes_button)
        buttons_row.addWidget(self._no_button)
        buttons_row.addStretch(1)

        card_layout.addWidget(question_label)
        card_layout.addSpacing(30)
        card_layout.addLayout(shapes_row)
        card_layout.addSpacing(30)
        card_layout.addLayout(buttons_row)
        layout.addWidget(card)
        return page

    # -----------------
    # Rendering
    # -----------------

    def render_snapshot(self, snapshot: GameSnapshot) -> None:
        if snapshot.phase == Phase.IDLE:
            heading = "Keep Going!" if snapshot.level > 1 else "Visuospatial Memory Game"
        else:
            heading = "Visuospatial Memory Game"
        self._heading_label.setText(heading)

        self._render_timer(snapshot)

        if snapshot.phase == Phase.IDLE:
            level_text = "Start Level 1" if snapshot.level == 1 else f"Continue Level {snapshot.level}"
            self._start_button.setText(level_text)
            self._board.set_interactive(False)
            self._pages.setCurrentWidget(self._start_page)
            return

        if snapshot.phase == Phase.DISTRACTION:
            pair = snapshot.distraction_pair
            self._left_shape.set_descriptor(pair.left if pair is not None else None)
            self._right_shape.set_descriptor(pair.right if pair is not None else None)
            self._board.set_interactive(False)
            self._pages.setCurrentWidget(self._distraction_page)
            return

        if snapshot.phase == Phase.FLASHING:
            self._board_title_label.setText(f"Level {snapshot.level} - Memorize Dot {snapshot.step_index + 1}")
            self._board.set_interactive(False)
        else:
            self._board_title_label.setText(f"Select dots in order (1 to {len(snapshot.sequence)})")
            self._board.set_interactive(not snapshot.recall_resolved)

        self._board.set_snapshot(snapshot)
        self._pages.setCurrentWidget(self._board_page)

    def _render_timer(self, snapshot: GameSnapshot) -> None:
        if snapshot.phase != Phase.RECALLING or snapshot.seconds_remaining is None:
            self._timer_label.hide()
            return

        seconds_remaining = int(snapshot.seconds_remaining)
        color = THEME_WARNING if seconds_remaining <= TIMER_WARNING_SECONDS else THEME_TEXT
        self._timer_label.setText(f"Time Left: {seconds_remaining}s")
        self._timer_label.setStyleSheet(f"color: {color}; font-size: 24px; font-weight: bold;")
        self._timer_label.show()

    # -----------------
    # Controller wiring
    # -----------------

    def _on_start_clicked(self) -> None:
        self._controller.start_or_continue_level()

    def _on_cell_clicked(self, row: int, col: int) -> None:
        self._controller.click_cell(int(row), int(col))

    def _on_notice(self, notice: GameNotice, message: str) -> None:
        title = "Grid Recall"
        if notice in (GameNotice.LEVEL_COMPLETE, GameNotice.GAME_COMPLETE):
            title = "Well done"
        if self.statusBar() is not None:
            self.statusBar().showMessage(str(message))
        QTimer.singleShot(0, lambda: self._notice_presenter(title, message))

    def _show_notice_box(self, title: str, message: str) -> None:
        QMessageBox.information(self, title, message)

    # -----------------
    # Window behaviors
    # -----------------

    def on_action_fullscreen_toggle(self) -> None:
        if self.isFullScreen():
            self.showNormal()
        else:
            self.showFullScreen()

    def closeEvent(self, event) -> None:  # type: ignore[override]
        self._controller.shutdown()
        super().closeEvent(event)

    def keyPressEvent(self, event: QKeyEvent) -> None:  # type: ignore[override]
        if event.isAutoRepeat():
            super().keyPressEvent(event)
            return

        key = event.key()
        phase = self._controller.phase()

        if key == Qt.Key.Key_F11:
            self.on_action_fullscreen_toggle()
            event.accept()
            return

        if key == Qt.Key.Key_Escape and self.isFullScreen():
            self.showNormal()
            event.accept()
            return

        if phase == Phase.IDLE and key in (Qt.Key.Key_Return, Qt.Key.Key_Enter, Qt.Key.Key_Space):
            self._controller.start_or_continue_level()
            event.accept()
            return

        if phase == Phase.DISTRACTION and key in (Qt.Key.Key_Y, Qt.Key.Key_N):
            self._controller.answer_distraction(key == Qt.Key.Key_Y)
            event.accept()
            return

        super().keyPressEvent(event)
