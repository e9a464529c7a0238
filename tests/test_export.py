# tests/test_export.py
from __future__ import annotations

import csv
import io
from datetime import date, datetime

import pytest

from buildtrack.models.entities import Milestone, Phase, Project
from buildtrack.services.export import (
    MILESTONE_COLUMNS,
    PHASE_COLUMNS,
    ExportOptions,
    csv_report,
    default_filename,
    select_export_data,
    text_report,
    write_export,
)
from buildtrack.tools import export_schedule

GENERATED = datetime(2024, 2, 1, 9, 30, 0)

PROJECTS = [
    Project("p1", "BD-101", "Riverside Offices", start_target=date(2024, 1, 1), pm_name="Dana"),
    Project("p2", "BD-090", "Old Depot", status="Closed"),
]
PHASES = [
    Phase("a", "p1", "Site Prep", start_date=date(2024, 1, 2), end_date=date(2024, 1, 12),
          duration_days=10, completion_percentage=40, status="In Progress",
          is_critical_path=True, resource_name="Groundworks"),
    Phase("b", "p2", "Demolition", duration_days=5),
]
MILESTONES = [Milestone("m1", "p1", "Slab poured", target_date=date(2024, 1, 12), milestone_type="review")]


def _data(**kw):
    return select_export_data(PROJECTS, PHASES, MILESTONES, ExportOptions(**kw), GENERATED)


def test_text_report():
    out = text_report(_data())
    lines = out.splitlines()
    assert lines[:5] == [
        "GANTT CHART EXPORT REPORT",
        "Generated: 2024-02-01 09:30:00",
        "Projects: 2",
        "Phases: 2",
        "Milestones: 1",
    ]
    assert "PROJECT: BD-101 - Riverside Offices" in lines
    assert "Timeline: 2024-01-01 to TBD" in lines
    assert "PM: Dana" in lines
    assert "    Progress: 40%" in lines
    assert "    Critical Path: YES" in lines
    assert "    Dates: TBD to TBD" in lines
    assert "    Actual: Pending" in lines
    assert lines.count("=" * 80) == 2


def test_text_report_without_optional_sections():
    out = text_report(_data(include_progress=False, include_critical_path=False, include_milestones=False))
    assert "Progress:" not in out
    assert "Critical Path" not in out
    assert "Milestones:" not in out.splitlines()
    assert "Milestones: 0" in out


def test_active_filter():
    data = _data(project_filter="active")
    assert [p.id for p in data.projects] == ["p1"]
    assert [p.id for p in data.phases] == ["a"]


def test_csv_report():
    rows = list(csv.reader(io.StringIO(csv_report(_data(format="csv")))))
    assert rows[0] == PHASE_COLUMNS
    assert rows[1] == ["BD-101", "Riverside Offices", "Site Prep", "In Progress", "2024-01-02", "2024-01-12",
                       "10", "40", "Yes", "Groundworks"]
    assert rows[2][:3] == ["BD-090", "Old Depot", "Demolition"]
    assert rows[2][4:6] == ["", ""]
    assert rows[4] == ["Milestones"]
    assert rows[5] == MILESTONE_COLUMNS
    assert rows[6] == ["BD-101", "Riverside Offices", "Slab poured", "review", "2024-01-12", "", "0"]


def test_csv_without_milestones():
    rows = list(csv.reader(io.StringIO(csv_report(_data(format="csv", include_milestones=False)))))
    assert len(rows) == 3


@pytest.mark.parametrize("fmt,name", [("csv", "gantt-chart-2024-02-01.csv"), ("text", "gantt-chart-2024-02-01.txt")])
def test_default_filename(fmt, name):
    assert default_filename(fmt, date(2024, 2, 1)) == name


def test_write_export(tmp_path):
    path = write_export(_data(format="csv"), tmp_path / "out.csv")
    assert path.read_text(encoding="utf-8").startswith("Project Code,")


def test_export_cli(db, repo, tmp_path, capsys):
    repo.add_project(PROJECTS[0])
    repo.add_phase(PHASES[0])
    out = tmp_path / "schedule.txt"

    rc = export_schedule.main(["--db", str(db.path), "--out", str(out), "--no-progress"])
    assert rc == 0
    text = out.read_text(encoding="utf-8")
    assert "PROJECT: BD-101 - Riverside Offices" in text
    assert "Progress:" not in text
    assert str(out) in capsys.readouterr().out


def test_export_cli_missing_db(tmp_path, capsys):
    assert export_schedule.main(["--db", str(tmp_path / "none.db")]) == 2
    assert "Database not found" in capsys.readouterr().err


def test_export_cli_default_location(db, repo, tmp_path, monkeypatch):
    repo.add_project(PROJECTS[0])
    out_dir = tmp_path / "exports"
    out_dir.mkdir()
    monkeypatch.setenv("BUILDTRACK_EXPORT_DIR", str(out_dir))

    assert export_schedule.main(["--db", str(db.path), "--format", "csv"]) == 0
    (written,) = out_dir.glob("gantt-chart-*.csv")
    assert written.read_text(encoding="utf-8").splitlines()[0].startswith("Project Code,")
