# Rev 0.1.0
# buildtrack — master Gantt window
# Toolbar: zoom | overlay toggles | group by | status filter | critical path, baseline, export

from __future__ import annotations
from datetime import date
from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox, QComboBox, QDockWidget, QFileDialog, QHBoxLayout, QLabel,
    QMainWindow, QMessageBox, QPushButton, QScrollArea, QToolButton, QVBoxLayout, QWidget,
)

from ..gantt.layout import GanttLayout
from ..models.types import GROUP_MODES, ZOOM_LEVELS
from ..models.view_settings import ViewSettings
from ..services.export import ExportOptions, default_filename
from ..utils.paths import export_dir
from ..viewmodels.gantt_viewmodel import GanttViewModel
from .diagnostics_panel import DiagnosticsPanel
from .gantt_panel import GanttPanel

# filter kind -> (fg, bg)
_CHIP_STYLES = {
    "status": ("#0066cc", "#e6f2ff"),
    "resource": ("#aa0066", "#ffe6f5"),
}

_TOGGLE_LABELS = {
    "show_critical_path": "Critical path",
    "show_baselines": "Baselines",
    "show_progress": "Progress",
    "show_milestones": "Milestones",
    "show_dependencies": "Dependencies",
}


class GanttWindow(QMainWindow):
    def __init__(self, viewmodel: GanttViewModel, *, logfile=None, parent=None):
        super().__init__(parent)
        self._vm = viewmodel
        self.setWindowTitle("buildtrack - Master Schedule")
        self.resize(1280, 720)

        central = QWidget(self)
        v = QVBoxLayout(central)

        # ---- zoom + refresh
        top = QHBoxLayout()
        self._zoom_buttons = {}
        for zoom in ZOOM_LEVELS:
            btn = QPushButton(zoom.capitalize())
            btn.setCheckable(True)
            btn.clicked.connect(lambda _=False, z=zoom: self._vm.set_zoom(z))
            top.addWidget(btn)
            self._zoom_buttons[zoom] = btn
        top.addSpacing(12)
        self._btn_refresh = QPushButton("Refresh")
        self._btn_refresh.clicked.connect(self._vm.reload)
        top.addWidget(self._btn_refresh)
        top.addStretch(1)

        self._project_pick = QComboBox()
        top.addWidget(QLabel("Project:"))
        top.addWidget(self._project_pick)
        btn_cp = QPushButton("Critical Path")
        btn_cp.clicked.connect(self._on_critical_path)
        btn_base = QPushButton("Baseline")
        btn_base.clicked.connect(self._on_baseline)
        btn_export = QPushButton("Export…")
        btn_export.clicked.connect(self._on_export)
        for b in (btn_cp, btn_base, btn_export):
            top.addWidget(b)
        v.addLayout(top)

        # ---- toggles, grouping, filters
        opts = QHBoxLayout()
        self._toggles = {}
        for name, label in _TOGGLE_LABELS.items():
            cb = QCheckBox(label)
            cb.toggled.connect(lambda checked, n=name: self._vm.set_toggle(n, checked))
            opts.addWidget(cb)
            self._toggles[name] = cb
        opts.addSpacing(12)
        opts.addWidget(QLabel("Group by:"))
        self._group = QComboBox()
        for mode in GROUP_MODES:
            self._group.addItem("Project" if mode == "none" else mode.capitalize(), userData=mode)
        self._group.currentIndexChanged.connect(lambda _=0: self._vm.set_group_by(self._group.currentData()))
        opts.addWidget(self._group)
        opts.addWidget(QLabel("Status:"))
        self._status = QComboBox()
        self._status.activated.connect(self._on_status_filter)
        opts.addWidget(self._status)
        opts.addWidget(QLabel("Resource:"))
        self._resource = QComboBox()
        self._resource.activated.connect(self._on_resource_filter)
        opts.addWidget(self._resource)
        self._chips = QHBoxLayout()
        self._chips.setSpacing(4)
        opts.addLayout(self._chips)
        btn_clear = QPushButton("Clear filters")
        btn_clear.clicked.connect(self._vm.clear_filters)
        opts.addWidget(btn_clear)
        opts.addStretch(1)
        self._risk = QLabel("")
        opts.addWidget(self._risk)
        v.addLayout(opts)

        # ---- chart
        self._panel = GanttPanel()
        self._panel.progressRequested.connect(self._vm.update_phase_progress)
        scroll = QScrollArea(self)
        scroll.setWidgetResizable(True)
        scroll.setWidget(self._panel)
        v.addWidget(scroll, 1)
        self.setCentralWidget(central)

        dock = QDockWidget("Diagnostics", self)
        dock.setObjectName("DiagnosticsDock")
        dock.setAllowedAreas(Qt.BottomDockWidgetArea | Qt.TopDockWidgetArea)
        self._diag = DiagnosticsPanel(logfile, self)
        dock.setWidget(self._diag)
        self.addDockWidget(Qt.BottomDockWidgetArea, dock)

        self._vm.layoutChanged.connect(self._on_layout)
        self._vm.settingsChanged.connect(self._sync_controls)
        self._vm.requestFinished.connect(self._on_request_finished)
        self._sync_controls(self._vm.settings())

    # -------------------- viewmodel → widgets --------------------

    def _sync_controls(self, settings: ViewSettings) -> None:
        for zoom, btn in self._zoom_buttons.items():
            btn.setChecked(zoom == settings.zoom_level)
        for name, cb in self._toggles.items():
            cb.blockSignals(True)
            cb.setChecked(getattr(settings, name))
            cb.blockSignals(False)
        self._group.blockSignals(True)
        self._group.setCurrentIndex(max(0, self._group.findData(settings.group_by)))
        self._group.blockSignals(False)
        self._rebuild_chips()

    def _on_layout(self, layout: GanttLayout) -> None:
        self._panel.set_layout(layout)
        self._diag.show_layout(layout)

        self._status.blockSignals(True)
        self._status.clear()
        self._status.addItem("Add status filter…", userData=None)
        for s in self._vm.statuses():
            self._status.addItem(s, userData=s)
        self._status.blockSignals(False)

        self._resource.blockSignals(True)
        self._resource.clear()
        self._resource.addItem("Add resource filter…", userData=None)
        for rid, name in sorted(self._vm.resources().items(), key=lambda kv: kv[1].lower()):
            self._resource.addItem(name, userData=rid)
        self._resource.blockSignals(False)
        self._rebuild_chips()

        current = self._project_pick.currentData()
        self._project_pick.clear()
        for proj in self._vm.projects():
            self._project_pick.addItem(f"{proj.code} - {proj.name}", userData=proj.id)
        if current is not None:
            self._project_pick.setCurrentIndex(max(0, self._project_pick.findData(current)))

        s = layout.critical_summary
        if s is None:
            self._risk.setText("")
        else:
            badge = "AT RISK" if s.at_risk else "on track"
            self._risk.setText(
                f"Critical path: {len(s.phase_ids)} phases, {s.total_duration}d, "
                f"{s.average_completion:.0f}% avg | {badge}"
            )
            self._risk.setStyleSheet("color: #dc2626;" if s.at_risk else "color: #15803d;")

    def _on_request_finished(self, action: str, ok: bool, message: str) -> None:
        self.statusBar().showMessage(message, 5000)
        if not ok:
            QMessageBox.warning(self, "Error", message)

    def _rebuild_chips(self) -> None:
        while self._chips.count():
            item = self._chips.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        for kind, value, label in self._vm.active_filters():
            fg, bg = _CHIP_STYLES[kind]
            chip = QToolButton()
            chip.setText(f"{label}  ×")
            chip.setToolTip(f"Remove {kind} filter")
            chip.setStyleSheet(
                "QToolButton {"
                f"  color: {fg};"
                f"  background-color: {bg};"
                f"  border: 1px solid {fg};"
                "  border-radius: 8px;"
                "  padding: 1px 6px;"
                "}"
            )
            chip.clicked.connect(lambda _=False, k=kind, v=value: self._vm.remove_filter(k, v))
            self._chips.addWidget(chip)

    # -------------------- actions --------------------

    def _on_status_filter(self, index: int) -> None:
        status = self._status.itemData(index)
        if status:
            self._vm.add_status_filter(status)

    def _on_resource_filter(self, index: int) -> None:
        rid = self._resource.itemData(index)
        if rid:
            self._vm.add_resource_filter(rid)
        self._resource.setCurrentIndex(0)

    def _on_critical_path(self) -> None:
        pid = self._project_pick.currentData()
        if pid is not None:
            self._vm.recompute_critical_path(pid)

    def _on_baseline(self) -> None:
        pid = self._project_pick.currentData()
        if pid is not None:
            self._vm.create_baseline(pid)

    def _on_export(self) -> None:
        path, selected = QFileDialog.getSaveFileName(
            self, "Export Gantt", str(export_dir() / default_filename("csv", date.today())),
            "CSV (*.csv);;Text report (*.txt)",
        )
        if not path:
            return
        fmt = "csv" if path.endswith(".csv") or selected.startswith("CSV") else "text"
        out = self._vm.export(Path(path), ExportOptions(format=fmt))
        self.statusBar().showMessage(f"Gantt chart exported to {out}", 5000)
