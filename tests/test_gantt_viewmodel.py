# tests/test_gantt_viewmodel.py
from __future__ import annotations

from dataclasses import replace
from datetime import date

import pytest

pytest.importorskip("PySide6")

from buildtrack.models.entities import Milestone, Phase, Project  # noqa: E402
from buildtrack.models.view_settings import ViewSettings  # noqa: E402
from buildtrack.services.export import ExportOptions  # noqa: E402
from buildtrack.services.schedule_service import ScheduleService  # noqa: E402
from buildtrack.viewmodels.gantt_viewmodel import GanttViewModel  # noqa: E402


class _StubRepo:
    def __init__(self):
        self.loads = 0
        self.projects = [Project("p1", "BD-1", "Riverside")]
        self.phases = {
            "a": Phase("a", "p1", "Site", start_date=date(2024, 1, 1), end_date=date(2024, 1, 10),
                       status="Completed", resource_id="r1", resource_name="Crew A"),
            "b": Phase("b", "p1", "Frame", start_date=date(2024, 1, 14), end_date=date(2024, 1, 30),
                       status="In Progress"),
        }

    def list_projects(self):
        return list(self.projects)

    def list_phases(self, project_id=None):
        self.loads += 1
        return [p for p in self.phases.values() if project_id in (None, p.project_id)]

    def list_milestones(self, project_id=None):
        return [Milestone("m1", "p1", "Slab", target_date=date(2024, 1, 10))]

    def update_phase_progress(self, phase_id, completion_percentage):
        if phase_id not in self.phases:
            return False
        self.phases[phase_id] = replace(self.phases[phase_id], completion_percentage=completion_percentage)
        return True

    def set_critical_path(self, project_id, phase_ids):
        ids = set(phase_ids)
        for pid, p in self.phases.items():
            self.phases[pid] = replace(p, is_critical_path=pid in ids)
        return len(ids)

    def create_project_baseline(self, project_id, name):
        return 1 if project_id == "p1" else None


class _Provider:
    def compute_critical_path(self, project_id):
        return ["a", "b"]


@pytest.fixture()
def repo():
    return _StubRepo()


@pytest.fixture()
def saved():
    return []


@pytest.fixture()
def vm(repo, saved):
    model = GanttViewModel(
        repo, ScheduleService(repo, _Provider()),
        save_settings=saved.append, clock=lambda: date(2024, 1, 15),
    )
    model.reload()
    return model


def test_reload_publishes_layout(vm):
    layouts = []
    vm.layoutChanged.connect(layouts.append)
    vm.reload()
    assert len(layouts) == 1
    lay = layouts[0]
    assert lay is vm.layout()
    assert list(lay.lanes) == ["p1"]
    assert lay.today_left is not None
    assert vm.statuses() == ["Completed", "In Progress"]
    assert vm.resources() == {"r1": "Crew A"}


def test_settings_change_rebuilds_and_persists(vm, saved):
    changed, layouts = [], []
    vm.settingsChanged.connect(changed.append)
    vm.layoutChanged.connect(layouts.append)

    vm.set_zoom("months")
    assert vm.settings().zoom_level == "months"
    assert changed == [vm.settings()] and saved == [vm.settings()]
    assert layouts[-1].segments[0].label == "Dec 2023"

    vm.set_zoom("months")   # unchanged value is a no-op
    assert len(changed) == 1


def test_filters_and_grouping(vm):
    vm.add_status_filter("In Progress")
    assert [b.phase.id for bars in vm.layout().lanes.values() for b in bars] == ["b"]
    vm.set_group_by("status")
    assert list(vm.layout().lanes) == ["In Progress"]
    vm.clear_filters()
    assert vm.settings().filter_status == frozenset()
    vm.set_toggle("show_dependencies", False)
    assert vm.layout().connectors == []


def test_active_filters_can_be_removed_one_at_a_time(vm):
    vm.add_status_filter("In Progress")
    vm.add_resource_filter("r1")
    assert vm.active_filters() == [
        ("status", "In Progress", "In Progress"),
        ("resource", "r1", "Crew A"),
    ]
    vm.remove_filter("resource", "r1")
    assert vm.settings().filter_resources == frozenset()
    assert vm.settings().filter_status == frozenset({"In Progress"})
    assert vm.active_filters() == [("status", "In Progress", "In Progress")]
    vm.remove_filter("status", "In Progress")
    assert vm.active_filters() == []
    with pytest.raises(ValueError):
        vm.remove_filter("crew", "r1")


def test_invalid_setting_raises_and_keeps_state(vm):
    with pytest.raises(ValueError):
        vm.set_zoom("years")
    assert vm.settings() == ViewSettings()


def test_save_failure_keeps_in_memory_settings(repo):
    def _fail(_settings):
        raise OSError("read-only")

    vm = GanttViewModel(repo, ScheduleService(repo, _Provider()), save_settings=_fail)
    vm.set_group_by("priority")
    assert vm.settings().group_by == "priority"


def test_successful_command_reloads(vm, repo):
    finished = []
    vm.requestFinished.connect(lambda *args: finished.append(args))
    before = repo.loads

    res = vm.update_phase_progress("b", 70)
    assert res.ok
    assert finished == [("update_progress", True, "Phase progress set to 70%")]
    assert repo.loads == before + 1
    assert vm.layout().bar_for("b").progress == 70


def test_failed_command_does_not_reload(vm, repo):
    finished = []
    vm.requestFinished.connect(lambda *args: finished.append(args))
    before = repo.loads

    res = vm.update_phase_progress("b", 140)
    assert res.code == "invalid_progress"
    assert finished[0][:2] == ("update_progress", False)
    assert repo.loads == before


def test_critical_path_and_baseline_commands(vm):
    res = vm.recompute_critical_path("p1")
    assert res.critical_phase_ids == ("a", "b")
    assert vm.layout().critical_summary.phase_ids == ("a", "b")
    assert vm.create_baseline("p1").baseline_id == 1
    assert vm.create_baseline("zzz").code == "not_found"


def test_export(vm, tmp_path):
    path = vm.export(tmp_path / "gantt.csv", ExportOptions(format="csv"))
    assert "Site" in path.read_text(encoding="utf-8")
