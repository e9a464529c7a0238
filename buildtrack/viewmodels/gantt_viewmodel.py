# Rev 0.1.0
from __future__ import annotations

from datetime import date, datetime
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from PySide6.QtCore import QObject, Signal

from ..gantt.grouping import distinct_resources, distinct_statuses
from ..gantt.layout import GanttLayout, build_layout
from ..models.entities import Milestone, Phase, Project
from ..models.view_settings import ViewSettings
from ..services.export import ExportOptions, select_export_data, write_export
from ..services.schedule_service import RequestResult, ScheduleService
from ..utils.logging_setup import get_logger


class GanttViewModel(QObject):
    """
    Holds the current records and view settings and republishes a fresh
    GanttLayout whenever either changes.

    Emits:
      layoutChanged(GanttLayout)
      settingsChanged(ViewSettings)
      requestFinished(action: str, ok: bool, message: str)
    """

    layoutChanged = Signal(object)
    settingsChanged = Signal(object)
    requestFinished = Signal(str, bool, str)

    def __init__(
        self,
        schedule_repo,
        service: ScheduleService,
        settings: Optional[ViewSettings] = None,
        *,
        save_settings: Optional[Callable[[ViewSettings], None]] = None,
        clock: Callable[[], date] = date.today,
    ):
        super().__init__()
        self._repo = schedule_repo
        self._service = service
        self._settings = settings or ViewSettings()
        self._save_settings = save_settings
        self._clock = clock
        self._log = get_logger("GanttViewModel")

        self._projects: List[Project] = []
        self._phases: List[Phase] = []
        self._milestones: List[Milestone] = []
        self._layout: Optional[GanttLayout] = None

    # ---- state
    def settings(self) -> ViewSettings:
        return self._settings

    def layout(self) -> Optional[GanttLayout]:
        return self._layout

    def projects(self) -> List[Project]:
        return list(self._projects)

    def statuses(self) -> List[str]:
        return distinct_statuses(self._phases)

    def resources(self) -> Dict[str, str]:
        return distinct_resources(self._phases)

    # ---- queries
    def reload(self) -> None:
        self._projects = self._repo.list_projects()
        self._phases = self._repo.list_phases()
        self._milestones = self._repo.list_milestones()
        self._log.info(
            "Loaded %d projects, %d phases, %d milestones",
            len(self._projects), len(self._phases), len(self._milestones),
        )
        self.rebuild()

    def rebuild(self) -> None:
        self._layout = build_layout(
            self._projects, self._phases, self._milestones, self._settings, self._clock(),
        )
        self.layoutChanged.emit(self._layout)

    # ---- settings
    def set_zoom(self, zoom_level: str) -> None:
        self._apply_settings(self._settings.with_zoom(zoom_level))

    def set_group_by(self, group_by: str) -> None:
        self._apply_settings(self._settings.with_group_by(group_by))

    def set_toggle(self, name: str, value: bool) -> None:
        self._apply_settings(self._settings.with_toggle(name, value))

    def add_status_filter(self, status: str) -> None:
        self._apply_settings(self._settings.with_status_filter(status))

    def remove_status_filter(self, status: str) -> None:
        self._apply_settings(self._settings.without_status_filter(status))

    def add_resource_filter(self, resource_id: str) -> None:
        self._apply_settings(self._settings.with_resource_filter(resource_id))

    def remove_resource_filter(self, resource_id: str) -> None:
        self._apply_settings(self._settings.without_resource_filter(resource_id))

    def clear_filters(self) -> None:
        self._apply_settings(self._settings.cleared_filters())

    def active_filters(self) -> List[Tuple[str, str, str]]:
        """(kind, value, label) per active filter chip; kind is "status" or "resource"."""
        names = self.resources()
        chips = [("status", s, s) for s in sorted(self._settings.filter_status)]
        chips += sorted(
            (("resource", r, names.get(r, r)) for r in self._settings.filter_resources),
            key=lambda c: c[2].lower(),
        )
        return chips

    def remove_filter(self, kind: str, value: str) -> None:
        if kind == "status":
            self.remove_status_filter(value)
        elif kind == "resource":
            self.remove_resource_filter(value)
        else:
            raise ValueError(f"unknown filter kind: {kind!r}")

    def _apply_settings(self, settings: ViewSettings) -> None:
        if settings == self._settings:
            return
        self._settings = settings
        if self._save_settings is not None:
            try:
                self._save_settings(settings)
            except OSError:
                # the view keeps working with the in-memory value
                self._log.exception("Failed to save view settings")
        self.settingsChanged.emit(settings)
        self.rebuild()

    # ---- commands
    def update_phase_progress(self, phase_id: str, progress: int) -> RequestResult:
        return self._finish("update_progress", self._service.update_phase_progress(phase_id, progress))

    def recompute_critical_path(self, project_id: str) -> RequestResult:
        return self._finish("critical_path", self._service.recompute_critical_path(project_id))

    def create_baseline(self, project_id: str, name: str = "Manual Baseline") -> RequestResult:
        return self._finish("create_baseline", self._service.create_baseline(project_id, name))

    def _finish(self, action: str, result: RequestResult) -> RequestResult:
        self.requestFinished.emit(action, result.ok, result.message)
        if result.ok:
            self.reload()
        return result

    def export(self, path: Path, options: ExportOptions) -> Path:
        data = select_export_data(
            self._projects, self._phases, self._milestones, options, datetime.now(),
        )
        return write_export(data, path)
