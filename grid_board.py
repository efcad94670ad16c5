# -*- coding: utf-8 -*-
########################
# grid_board.py
########################
# Purpose:
# - Paints the dot grid for the flash and recall phases from a GameSnapshot.
# - Translates mouse presses on a dot into cellClicked(row, col).
#
# Design notes:
# - Render only. The board does not know the rules; it asks grid_models.cell_view for each cell.
# - Presses between dots are dropped.
#
########################
# Interfaces:
# Public dataclasses:
# - BoardGeometry(dot_radius_pixels: float, gap_pixels: float, padding_pixels: float)
#
# Public classes:
# - class GridBoardWidget(PyQt6.QtWidgets.QWidget)
#   - Signals:
#     - cellClicked(int, int)
#   - Methods:
#     - set_snapshot(snapshot: Optional[GameSnapshot]) -> None
#     - set_interactive(is_interactive: bool) -> None
#     - cell_at(position: QPointF) -> Optional[GridCoordinate]
#
########################

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from PyQt6.QtCore import QPointF, QSize, Qt, pyqtSignal
from PyQt6.QtGui import QBrush, QColor, QMouseEvent, QPainter
from PyQt6.QtWidgets import QSizePolicy, QWidget

from grid_models import CellRole, CellView, GameSnapshot, GridCoordinate, cell_view
from shape_painter import draw_dot


_IDLE_VIEW = CellView(role=CellRole.IDLE)


@dataclass(frozen=True)
class BoardGeometry:
    dot_radius_pixels: float = 25.0
    gap_pixels: float = 15.0
    padding_pixels: float = 20.0


class GridBoardWidget(QWidget):
    cellClicked = pyqtSignal(int, int)

    def __init__(self, *, grid_size: int = 5, config: Optional[BoardGeometry] = None, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._grid_size = int(grid_size)
        self._config = config or BoardGeometry()
        self._snapshot: Optional[GameSnapshot] = None
        self._is_interactive = False
        self.setSizePolicy(QSizePolicy.Policy.Fixed, QSizePolicy.Policy.Fixed)
        self.setFixedSize(self.sizeHint())

    def sizeHint(self) -> QSize:  # type: ignore[override]
        config = self._config
        pitch = config.dot_radius_pixels * 2.0 + config.gap_pixels
        side = config.padding_pixels * 2.0 + pitch * self._grid_size - config.gap_pixels
        return QSize(int(side), int(side))

    def set_snapshot(self, snapshot: Optional[GameSnapshot]) -> None:
        self._snapshot = snapshot
        self.update()

    def set_interactive(self, is_interactive: bool) -> None:
        self._is_interactive = bool(is_interactive)
        if self._is_interactive:
            self.setCursor(Qt.CursorShape.PointingHandCursor)
        else:
            self.unsetCursor()

    def _cell_centers(self) -> List[List[QPointF]]:
        config = self._config
        pitch = config.dot_radius_pixels * 2.0 + config.gap_pixels
        first = config.padding_pixels + config.dot_radius_pixels
        centers: List[List[QPointF]] = []
        for row in range(self._grid_size):
            row_centers: List[QPointF] = []
            for col in range(self._grid_size):
                row_centers.append(QPointF(first + col * pitch, first + row * pitch))
            centers.append(row_centers)
        return centers

    def cell_at(self, position: QPointF) -> Optional[GridCoordinate]:
        radius = float(self._config.dot_radius_pixels)
        for row, row_centers in enumerate(self._cell_centers()):
            for col, center in enumerate(row_centers):
                dx = float(position.x()) - float(center.x())
                dy = float(position.y()) - float(center.y())
                if dx * dx + dy * dy <= radius * radius:
                    return GridCoordinate(row=row, col=col)
        return None

    def mousePressEvent(self, event: QMouseEvent) -> None:  # type: ignore[override]
        if not self._is_interactive or event.button() != Qt.MouseButton.LeftButton:
            super().mousePressEvent(event)
            return

        coordinate = self.cell_at(event.position())
        if coordinate is None:
            super().mousePressEvent(event)
            return

        event.accept()
        self.cellClicked.emit(int(coordinate.row), int(coordinate.col))

    def paintEvent(self, event) -> None:  # type: ignore[override]
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), QBrush(QColor("white")))

        radius = float(self._config.dot_radius_pixels)
        for row, row_centers in enumerate(self._cell_centers()):
            for col, center in enumerate(row_centers):
                view = _IDLE_VIEW
                if self._snapshot is not None:
                    view = cell_view(self._snapshot, GridCoordinate(row=row, col=col))
                draw_dot(painter, center=center, radius=radius, view=view)

        painter.end()
