# -*- coding: utf-8 -*-
########################
# shape_painter.py
########################
# Purpose:
# - Draws interference shapes and grid dots into a QPainter.
# - ShapeWidget: a fixed size widget showing one ShapeDescriptor.
#
# Design notes:
# - Treat draw_shape and draw_dot as rendering contracts. Widgets call them, they never decide game state.
# - Shape geometry follows a 100x100 view box scaled to the target rect.
#
########################
# Interfaces:
# Public constants:
# - DOT_COLORS: CellRole -> QColor
#
# Public functions:
# - shape_qcolor(color: ShapeColor) -> QColor
# - draw_shape(painter: QPainter, *, descriptor: ShapeDescriptor, rect: QRectF) -> None
# - draw_dot(painter: QPainter, *, center: QPointF, radius: float, view: CellView) -> None
#
# Public classes:
# - class ShapeWidget(PyQt6.QtWidgets.QWidget)
#   - set_descriptor(descriptor: Optional[ShapeDescriptor]) -> None
#
########################

from __future__ import annotations

from typing import Dict, Optional

from PyQt6.QtCore import QPointF, QRectF, Qt
from PyQt6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QPolygonF
from PyQt6.QtWidgets import QWidget

from grid_models import CellRole, CellView, ShapeColor, ShapeDescriptor, ShapeKind


DOT_COLORS: Dict[CellRole, QColor] = {
    CellRole.IDLE: QColor("#B2BEB5"),
    CellRole.FLASH: QColor("#FFD700"),
    CellRole.SUCCESS: QColor("#4CAF50"),
    CellRole.ERROR: QColor("#F44336"),
}

_DOT_BORDER = QColor("#999999")

_SHAPE_COLORS: Dict[ShapeColor, QColor] = {
    ShapeColor.RED: QColor("red"),
    ShapeColor.BLUE: QColor("blue"),
    ShapeColor.GREEN: QColor("green"),
    ShapeColor.BLACK: QColor("black"),
}


def shape_qcolor(color: ShapeColor) -> QColor:
    return QColor(_SHAPE_COLORS.get(color, QColor("black")))


def draw_shape(painter: QPainter, *, descriptor: ShapeDescriptor, rect: QRectF) -> None:
    scale_x = float(rect.width()) / 100.0
    scale_y = float(rect.height()) / 100.0

    def point(x: float, y: float) -> QPointF:
        return QPointF(float(rect.left()) + x * scale_x, float(rect.top()) + y * scale_y)

    painter.save()
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(QBrush(shape_qcolor(descriptor.color)))

    if descriptor.shape_kind == ShapeKind.SQUARE:
        painter.drawRect(QRectF(point(10.0, 10.0), point(90.0, 90.0)))
    elif descriptor.shape_kind == ShapeKind.CIRCLE:
        painter.drawEllipse(point(50.0, 50.0), 40.0 * scale_x, 40.0 * scale_y)
    else:
        painter.drawPolygon(QPolygonF([point(50.0, 15.0), point(90.0, 85.0), point(10.0, 85.0)]))

    painter.restore()


def draw_dot(painter: QPainter, *, center: QPointF, radius: float, view: CellView) -> None:
    fill_color = DOT_COLORS.get(view.role, DOT_COLORS[CellRole.IDLE])

    painter.save()
    painter.setPen(QPen(_DOT_BORDER, 2.0))
    painter.setBrush(QBrush(fill_color))
    painter.drawEllipse(center, float(radius), float(radius))

    if view.label is not None:
        # Gold dots carry dark text, green ones white text.
        text_color = QColor("black") if view.role == CellRole.FLASH else QColor("white")
        font = QFont()
        font.setBold(True)
        font.setPixelSize(max(10, int(radius * 0.8)))
        painter.setFont(font)
        painter.setPen(QPen(text_color))
        label_rect = QRectF(center.x() - radius, center.y() - radius, radius * 2.0, radius * 2.0)
        painter.drawText(label_rect, int(Qt.AlignmentFlag.AlignCenter), str(view.label))

    painter.restore()


class ShapeWidget(QWidget):
    def __init__(self, *, size_pixels: int = 80, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._descriptor: Optional[ShapeDescriptor] = None
        self.setFixedSize(int(size_pixels), int(size_pixels))

    def set_descriptor(self, descriptor: Optional[ShapeDescriptor]) -> None:
        self._descriptor = descriptor
        self.update()

    def paintEvent(self, event) -> None:  # type: ignore[override]
        if self._descriptor is None:
            return

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)
        draw_shape(painter, descriptor=self._descriptor, rect=QRectF(self.rect()))
        painter.end()
