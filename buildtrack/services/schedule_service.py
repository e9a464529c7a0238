# Rev 0.1.0

"""Schedule request service (Rev 0.1.0)
Hands the Gantt view's mutation requests to the record store and reports
success/failure. Nothing is cached or rolled back here; callers re-fetch
records after a successful request.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional, Protocol

from ..gantt.critical_path import CriticalPathProvider
from ..utils.logging_setup import get_logger

ResultCode = Literal["applied", "invalid_progress", "not_found", "store_error"]


class ScheduleStore(Protocol):
    def update_phase_progress(self, phase_id: str, completion_percentage: int) -> bool: ...
    def set_critical_path(self, project_id: str, phase_ids: Iterable[str]) -> int: ...
    def create_project_baseline(self, project_id: str, name: str) -> Optional[int]: ...


@dataclass(frozen=True)
class RequestResult:
    ok: bool
    code: ResultCode
    message: str = ""
    critical_phase_ids: tuple[str, ...] = ()
    baseline_id: Optional[int] = None


class ScheduleService:
    def __init__(self, store: ScheduleStore, critical_path: CriticalPathProvider):
        self._store = store
        self._critical_path = critical_path
        self._log = get_logger("ScheduleService")

    def update_phase_progress(self, phase_id: str, progress: int) -> RequestResult:
        if not isinstance(progress, int) or isinstance(progress, bool) or not 0 <= progress <= 100:
            return RequestResult(False, "invalid_progress", f"Progress must be 0-100, got {progress!r}")
        try:
            ok = self._store.update_phase_progress(phase_id, progress)
        except Exception as e:
            self._log.exception("Failed to update progress for phase %s", phase_id)
            return RequestResult(False, "store_error", f"Failed to update progress: {e}")
        if not ok:
            return RequestResult(False, "not_found", f"Phase {phase_id} not found")
        self._log.info("Phase %s progress set to %d%%", phase_id, progress)
        return RequestResult(True, "applied", f"Phase progress set to {progress}%")

    def recompute_critical_path(self, project_id: str) -> RequestResult:
        try:
            ids: List[str] = list(self._critical_path.compute_critical_path(project_id))
            self._store.set_critical_path(project_id, ids)
        except Exception as e:
            self._log.exception("Failed to calculate critical path for project %s", project_id)
            return RequestResult(False, "store_error", f"Failed to calculate critical path: {e}")
        self._log.info("Project %s critical path: %d phases", project_id, len(ids))
        return RequestResult(
            True, "applied",
            f"Found {len(ids)} phases on critical path",
            critical_phase_ids=tuple(ids),
        )

    def create_baseline(self, project_id: str, name: str = "Manual Baseline") -> RequestResult:
        name = (name or "").strip() or "Manual Baseline"
        try:
            baseline_id = self._store.create_project_baseline(project_id, name)
        except Exception as e:
            self._log.exception("Failed to create baseline for project %s", project_id)
            return RequestResult(False, "store_error", f"Failed to create baseline: {e}")
        if baseline_id is None:
            return RequestResult(False, "not_found", f"Project {project_id} not found")
        self._log.info("Project %s baseline %r created (id=%s)", project_id, name, baseline_id)
        return RequestResult(True, "applied", f"Created baseline: {name}", baseline_id=baseline_id)
