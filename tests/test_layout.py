# tests/test_layout.py
from __future__ import annotations

from datetime import date

import pytest

from buildtrack.gantt.layout import DEFAULT_BAR_COLOR, PRIORITY_COLORS, build_layout
from buildtrack.models.entities import Milestone, Phase, Project
from buildtrack.models.view_settings import ViewSettings

TODAY = date(2024, 2, 1)

PROJECTS = [
    Project("p1", "BD-101", "Riverside Offices", start_target=date(2024, 1, 1), finish_target=date(2024, 4, 30)),
    Project("p2", "BD-102", "Depot Refit"),
]

PHASES = [
    Phase("site", "p1", "Site Prep", start_date=date(2024, 1, 2), end_date=date(2024, 1, 12),
          duration_days=10, completion_percentage=100, status="Completed", priority="High",
          is_critical_path=True, resource_id="r1", resource_name="Groundworks"),
    Phase("frame", "p1", "Framing", start_date=date(2024, 1, 16), end_date=date(2024, 2, 20),
          actual_start_date=date(2024, 1, 18), actual_end_date=date(2024, 2, 22),
          baseline_start_date=date(2024, 1, 15), baseline_end_date=date(2024, 2, 15),
          duration_days=35, baseline_duration_days=31, completion_percentage=30,
          status="In Progress", is_critical_path=True, resource_id="r2", resource_name="Carpentry"),
    Phase("fitout", "p2", "Fit-out", start_date=date(2024, 3, 1), end_date=date(2024, 3, 20),
          status="Planned", priority="Low", color="#123456"),
    Phase("tbd", "p2", "Snagging"),
]

MILESTONES = [
    Milestone("m1", "p1", "Slab poured", target_date=date(2024, 1, 12), actual_date=date(2024, 1, 14)),
    Milestone("m2", "p1", "Roof on", target_date=date(2024, 3, 1)),
    Milestone("m3", "p2", "Handover"),
]


def _layout(**kw):
    return build_layout(PROJECTS, PHASES, MILESTONES, ViewSettings(**kw), TODAY)


def test_default_layout():
    lay = _layout()
    assert list(lay.lanes) == ["p1", "p2"]
    assert lay.lane_titles == {"p1": "BD-101 - Riverside Offices", "p2": "BD-102 - Depot Refit"}
    assert lay.segments[0].start == lay.bounds.start
    assert lay.today_left is not None
    assert [(c.predecessor_id, c.successor_id) for c in lay.connectors] == [("site", "frame")]
    assert [m.id for m in lay.milestones] == ["m1", "m2"]
    assert lay.critical_summary.phase_ids == ("site", "frame")
    assert lay.critical_summary.total_duration == 45
    assert lay.critical_summary.at_risk is False


def test_phase_bars():
    lay = _layout()
    frame = lay.bar_for("frame")
    assert frame.critical is True
    assert frame.progress == 30
    assert frame.actual is not None
    assert frame.actual.left > frame.planned.left
    assert frame.baseline is None
    assert frame.color == PRIORITY_COLORS["Medium"]

    assert lay.bar_for("site").actual is None
    assert lay.bar_for("fitout").color == "#123456"
    assert lay.bar_for("tbd").drawable is False
    assert lay.bar_for("missing") is None


def test_toggles_switch_off_layers():
    lay = _layout(show_dependencies=False, show_milestones=False, show_critical_path=False, show_progress=False)
    assert lay.connectors == []
    assert lay.milestones == []
    assert lay.critical_summary is None
    assert lay.bar_for("frame").critical is False
    assert lay.bar_for("frame").progress is None


def test_baselines_toggle():
    frame = _layout(show_baselines=True).bar_for("frame")
    assert frame.baseline.start_variance == 1
    assert frame.baseline.duration_variance == 4
    assert frame.baseline.baseline is not None


def test_filters_do_not_move_the_window():
    full = _layout()
    filtered = _layout(filter_status={"Planned"})
    assert filtered.bounds == full.bounds
    assert list(filtered.lanes) == ["p2"]
    assert filtered.connectors == []
    # critical summary is over the whole schedule
    assert filtered.critical_summary == full.critical_summary


@pytest.mark.parametrize(
    "group_by,lanes",
    [("status", ["Completed", "In Progress", "Planned"]), ("resource", ["Groundworks", "Carpentry", "Unassigned"])],
)
def test_grouped_lanes_use_their_key_as_title(group_by, lanes):
    lay = _layout(group_by=group_by)
    assert list(lay.lanes) == lanes
    assert list(lay.lane_titles.values()) == lanes


def test_unknown_priority_uses_default_colour():
    lay = build_layout([], [Phase("x", "p", "X", priority="Urgent")], [], ViewSettings(), TODAY)
    assert lay.bar_for("x").color == DEFAULT_BAR_COLOR


def test_today_off_scale():
    lay = build_layout(PROJECTS, PHASES, MILESTONES, ViewSettings(), date(2030, 1, 1))
    assert lay.today_left is None
    assert lay.milestones[1].overdue is True


def test_layout_is_deterministic():
    assert _layout(zoom_level="months") == _layout(zoom_level="months")
