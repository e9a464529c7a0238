# Rev 0.1.0 — paints a GanttLayout; click a bar to set progress
from __future__ import annotations
from typing import Dict, List, Optional, Tuple

from PySide6.QtCore import Qt, QPointF, QRectF, Signal
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import QSizePolicy, QWidget

from ..gantt.coords import progress_from_click
from ..gantt.layout import GanttLayout, PhaseBar
from ..gantt.segments import min_chart_width

_TEXT    = "#222222"
_MUTED   = "#6b7280"
_BORDER  = "#e5e5e5"
_HEADER  = "#f4f4f5"
_LANE    = "#fafafa"
_TODAY   = "#ef4444"
_ARROW   = "#3b82f6"
_CRIT    = "#dc2626"
_BASE    = "#d1d5db"
_DONE    = "#10b981"
_OVERDUE = "#ef4444"

LABEL_PX = 320
HEADER_PX = 48
LANE_PX = 26
ROW_PX = 36


class GanttPanel(QWidget):
    progressRequested = Signal(str, int)  # phase_id, percent

    def __init__(self, parent=None):
        super().__init__(parent)
        self._layout: Optional[GanttLayout] = None
        self._bar_rects: List[Tuple[QRectF, str]] = []
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMinimumHeight(HEADER_PX + ROW_PX)

    def set_layout(self, layout: GanttLayout) -> None:
        self._layout = layout
        rows = sum(len(bars) for bars in layout.lanes.values())
        self.setMinimumHeight(HEADER_PX + len(layout.lanes) * LANE_PX + rows * ROW_PX + 8)
        self.setMinimumWidth(LABEL_PX + min_chart_width(layout.segments, layout.settings.zoom_level))
        self.update()

    # --- geometry helpers ---------------------------------------------------
    def _chart_width(self) -> float:
        return max(1.0, float(self.width() - LABEL_PX))

    def _x(self, percent: float) -> float:
        return LABEL_PX + percent / 100.0 * self._chart_width()

    # --- painting -----------------------------------------------------------
    def paintEvent(self, _event) -> None:
        p = QPainter(self)
        p.setRenderHint(QPainter.Antialiasing)
        p.fillRect(self.rect(), QColor("white"))
        self._bar_rects = []

        lay = self._layout
        if lay is None:
            p.setPen(QColor(_MUTED))
            p.drawText(self.rect(), Qt.AlignCenter, "No schedule loaded.")
            p.end()
            return

        self._paint_header(p, lay)
        row_y = self._paint_lanes(p, lay)
        if lay.settings.show_dependencies:
            self._paint_connectors(p, lay, row_y)
        if lay.settings.show_milestones:
            self._paint_milestones(p, lay)
        if lay.today_left is not None:
            x = self._x(lay.today_left)
            p.setPen(QPen(QColor(_TODAY), 2))
            p.drawLine(QPointF(x, HEADER_PX), QPointF(x, self.height()))
            p.drawText(QPointF(x + 3, HEADER_PX + 12), "Today")
        p.end()

    def _paint_header(self, p: QPainter, lay: GanttLayout) -> None:
        p.fillRect(QRectF(0, 0, self.width(), HEADER_PX), QColor(_HEADER))
        p.setPen(QColor(_TEXT))
        p.drawText(QRectF(8, 0, LABEL_PX - 16, HEADER_PX), Qt.AlignVCenter | Qt.AlignLeft, "Project Phases")

        for seg in lay.segments:
            rect = QRectF(self._x(seg.left), 0, seg.width / 100.0 * self._chart_width(), HEADER_PX)
            p.setPen(QColor(_TEXT))
            if seg.sublabel:
                p.drawText(rect.adjusted(0, 4, 0, -HEADER_PX / 2), Qt.AlignCenter, seg.label)
                p.setPen(QColor(_MUTED))
                p.drawText(rect.adjusted(0, HEADER_PX / 2, 0, -4), Qt.AlignCenter, seg.sublabel)
            else:
                p.drawText(rect, Qt.AlignCenter, seg.label)

        for line in lay.grid_lines:
            x = self._x(line.left)
            color = QColor(_BORDER if line.kind == "major" else "#f3f4f6")
            p.setPen(QPen(color, 1))
            p.drawLine(QPointF(x, 0 if line.kind == "major" else HEADER_PX), QPointF(x, self.height()))

        p.setPen(QPen(QColor(_BORDER), 1))
        p.drawLine(QPointF(0, HEADER_PX), QPointF(self.width(), HEADER_PX))
        p.drawLine(QPointF(LABEL_PX, 0), QPointF(LABEL_PX, self.height()))

    def _paint_lanes(self, p: QPainter, lay: GanttLayout) -> Dict[str, float]:
        """Paint lane headers and bars; returns phase_id -> row centre y."""
        row_y: Dict[str, float] = {}
        y = float(HEADER_PX)
        bold = QFont(self.font())
        bold.setBold(True)
        for key, bars in lay.lanes.items():
            p.fillRect(QRectF(0, y, self.width(), LANE_PX), QColor(_LANE))
            p.setFont(bold)
            p.setPen(QColor(_TEXT))
            title = f"{lay.lane_titles.get(key, key)}  ({len(bars)})"
            p.drawText(QRectF(8, y, LABEL_PX - 16, LANE_PX), Qt.AlignVCenter | Qt.AlignLeft, title)
            p.setFont(self.font())
            y += LANE_PX
            for bar in bars:
                self._paint_bar(p, lay, bar, y)
                row_y[bar.phase.id] = y + ROW_PX / 2
                y += ROW_PX
        return row_y

    def _paint_bar(self, p: QPainter, lay: GanttLayout, bar: PhaseBar, y: float) -> None:
        ph = bar.phase
        p.setPen(QColor(_TEXT))
        p.drawText(QRectF(20, y, LABEL_PX - 28, ROW_PX), Qt.AlignVCenter | Qt.AlignLeft, ph.name)
        if not bar.drawable:
            p.setPen(QColor(_MUTED))
            p.drawText(QRectF(LABEL_PX + 8, y, 200, ROW_PX), Qt.AlignVCenter | Qt.AlignLeft, "dates TBD")
            return

        if bar.baseline is not None and bar.baseline.baseline is not None:
            base = bar.baseline.baseline
            p.setPen(QPen(QColor("#9ca3af"), 1))
            p.setBrush(QBrush(QColor(_BASE)))
            p.drawRect(QRectF(self._x(base.left), y + 4, base.width / 100.0 * self._chart_width(), 8))

        pos = bar.planned
        rect = QRectF(self._x(pos.left), y + 10, max(2.0, pos.width / 100.0 * self._chart_width()), ROW_PX - 16)
        color = QColor(bar.color)
        p.setPen(QPen(QColor(_CRIT), 2) if bar.critical else Qt.NoPen)
        p.setBrush(QBrush(color.lighter(150)))
        p.drawRoundedRect(rect, 3, 3)
        if bar.progress is not None and bar.progress > 0:
            fill = QRectF(rect.x(), rect.y(), rect.width() * bar.progress / 100.0, rect.height())
            p.setPen(Qt.NoPen)
            p.setBrush(QBrush(color))
            p.drawRoundedRect(fill, 3, 3)
            p.setPen(QColor(_TEXT))
            p.drawText(rect, Qt.AlignVCenter | Qt.AlignRight, f"{bar.progress}% ")

        if bar.actual is not None:
            act = bar.actual
            p.setPen(QPen(QColor("#1f2937"), 1, Qt.DashLine))
            p.setBrush(Qt.NoBrush)
            p.drawRect(QRectF(self._x(act.left), y + ROW_PX - 5, act.width / 100.0 * self._chart_width(), 3))

        if bar.baseline is not None and bar.baseline.classification != "on_track":
            p.setPen(QColor(_CRIT if bar.baseline.delayed else "#ca8a04"))
            p.drawText(QPointF(rect.x(), y + 9), bar.baseline.describe())

        self._bar_rects.append((rect, ph.id))

    def _paint_connectors(self, p: QPainter, lay: GanttLayout, row_y: Dict[str, float]) -> None:
        pen = QPen(QColor(_ARROW), 1.5)
        for c in lay.connectors:
            y0 = row_y.get(c.predecessor_id)
            y1 = row_y.get(c.successor_id)
            if y0 is None or y1 is None:
                continue
            p.setPen(pen)
            for leg in c.legs:
                x = self._x(leg.left)
                if leg.orientation == "vertical":
                    # spans from the predecessor row into the successor row
                    p.drawLine(QPointF(x, y0), QPointF(x, y1))
                    continue
                y = y0 if leg.left < c.mid_x else y1
                p.drawLine(QPointF(x, y), QPointF(self._x(leg.left + leg.width), y))
            x1 = self._x(c.end_x)
            xa = min(self._x(c.arrow_left), x1 - 4)
            p.setBrush(QBrush(QColor(_ARROW)))
            p.drawPolygon(QPolygonF([QPointF(x1, y1), QPointF(xa, y1 - 4), QPointF(xa, y1 + 4)]))

    def _paint_milestones(self, p: QPainter, lay: GanttLayout) -> None:
        for m in lay.milestones:
            x = self._x(m.left)
            p.setPen(QPen(QColor("#9ca3af"), 1, Qt.DashLine))
            p.drawLine(QPointF(x, HEADER_PX), QPointF(x, self.height()))
            if m.completed:
                fill = _DONE
            elif m.overdue:
                fill = _OVERDUE
            else:
                fill = "#f97316" if m.milestone.is_critical else m.milestone.color
            p.setPen(QPen(QColor("white"), 1))
            p.setBrush(QBrush(QColor(fill)))
            cy = HEADER_PX - 8
            p.drawPolygon(QPolygonF([
                QPointF(x, cy - 7), QPointF(x + 7, cy), QPointF(x, cy + 7), QPointF(x - 7, cy),
            ]))

    # --- interaction --------------------------------------------------------
    def mousePressEvent(self, event) -> None:
        pos = event.position()
        for rect, phase_id in self._bar_rects:
            if rect.contains(pos):
                self.progressRequested.emit(phase_id, progress_from_click(pos.x() - rect.x(), rect.width()))
                return
        super().mousePressEvent(event)
