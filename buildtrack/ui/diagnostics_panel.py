# buildtrack diagnostics panel
# Rev 0.1.0
# Log tail (filtered by level) + stats of the last rendered Gantt layout

from __future__ import annotations
from pathlib import Path
from typing import Optional

from PySide6.QtWidgets import (
    QComboBox, QHBoxLayout, QLabel, QPushButton, QTextEdit, QVBoxLayout, QWidget,
)

from ..gantt.layout import GanttLayout
from ..utils.logging_setup import current_logfile

TAIL_LINES = 500
_LEVELS = ("ALL", "DEBUG", "INFO", "WARNING", "ERROR")


class DiagnosticsPanel(QWidget):
    def __init__(self, logfile: Optional[Path] = None, parent=None):
        super().__init__(parent)
        self.setObjectName("DiagnosticsPanel")
        self._logfile = logfile

        root = QVBoxLayout(self)

        bar = QHBoxLayout()
        self.stats = QLabel("No layout yet", self)
        self.stats.setStyleSheet("color: #555555;")
        bar.addWidget(self.stats, 1)
        bar.addWidget(QLabel("Min level:"))
        self.level = QComboBox(self)
        self.level.addItems(_LEVELS)
        self.level.setCurrentText("INFO")
        self.level.currentTextChanged.connect(lambda _t: self.refresh())
        bar.addWidget(self.level)
        self.btn_refresh = QPushButton("Tail Log", self)
        self.btn_refresh.clicked.connect(self.refresh)
        bar.addWidget(self.btn_refresh)
        root.addLayout(bar)

        self.text = QTextEdit(self)
        self.text.setReadOnly(True)
        self.text.setLineWrapMode(QTextEdit.NoWrap)
        root.addWidget(self.text)

        self.refresh()

    def show_layout(self, layout: GanttLayout) -> None:
        b = layout.bounds
        bars = sum(len(v) for v in layout.lanes.values())
        self.stats.setText(
            f"{layout.settings.zoom_level}: {b.start:%Y-%m-%d} .. {b.end:%Y-%m-%d} ({b.total_days}d) | "
            f"{len(layout.lanes)} lanes, {bars} bars, {len(layout.connectors)} arrows, "
            f"{len(layout.milestones)} milestones"
        )

    def refresh(self):
        """Reload the tail of the log file, keeping lines at or above the chosen level."""
        path = self._logfile or current_logfile()
        if path is None:
            self.text.setPlainText("<no log file configured>")
            return
        try:
            with open(path, "r", encoding="utf-8", errors="ignore") as f:
                lines = f.readlines()[-TAIL_LINES:]
        except OSError as e:
            self.text.setPlainText(f"<error reading log>\n{e}")
            return

        wanted = self.level.currentText()
        if wanted != "ALL":
            keep = set(_LEVELS[_LEVELS.index(wanted):]) | {"CRITICAL"}
            lines = [ln for ln in lines if _level_of(ln) in keep]
        self.text.setPlainText("".join(lines))
        self.text.verticalScrollBar().setValue(self.text.verticalScrollBar().maximum())


def _level_of(line: str) -> str:
    # LOG_FORMAT: "time | LEVEL | name | message"
    parts = line.split(" | ", 2)
    return parts[1].strip() if len(parts) > 2 else ""
