# tests/test_grouping.py
from __future__ import annotations

import pytest

from buildtrack.gantt.grouping import (
    UNASSIGNED,
    distinct_resources,
    distinct_statuses,
    filter_phases,
    group_phases,
)
from buildtrack.models.entities import Phase


def _ph(pid, project="p1", status="Planned", priority="Medium", resource_id=None, resource_name=None):
    return Phase(pid, project, pid, status=status, priority=priority,
                 resource_id=resource_id, resource_name=resource_name)


PHASES = [
    _ph("a", status="In Progress", priority="High", resource_id="r1", resource_name="Crew A"),
    _ph("b", status="Planned", resource_id="r2", resource_name="Crew B"),
    _ph("c", project="p2", status="In Progress", resource_id="r2", resource_name="Crew B"),
    _ph("d", project="p2", status="Completed", priority="High"),
]


def _ids(phases):
    return [p.id for p in phases]


def test_empty_filters_pass_everything():
    assert _ids(filter_phases(PHASES)) == ["a", "b", "c", "d"]


def test_status_filter_alone():
    assert _ids(filter_phases(PHASES, {"In Progress"}, set())) == ["a", "c"]


def test_resource_filter_alone_drops_unassigned():
    assert _ids(filter_phases(PHASES, (), {"r2"})) == ["b", "c"]


def test_filters_are_conjunctive():
    assert _ids(filter_phases(PHASES, {"In Progress"}, {"r2"})) == ["c"]
    assert filter_phases(PHASES, {"Completed"}, {"r1"}) == []


@pytest.mark.parametrize(
    "mode,keys",
    [
        ("none", ["p1", "p2"]),
        ("status", ["In Progress", "Planned", "Completed"]),
        ("resource", ["Crew A", "Crew B", UNASSIGNED]),
        ("priority", ["High", "Medium"]),
    ],
)
def test_lanes_in_first_occurrence_order(mode, keys):
    lanes = group_phases(PHASES, mode)
    assert list(lanes) == keys
    assert sum(len(v) for v in lanes.values()) == len(PHASES)


def test_unknown_grouping_mode():
    with pytest.raises(ValueError):
        group_phases(PHASES, "crew")


def test_distinct_values():
    assert distinct_statuses(PHASES) == ["In Progress", "Planned", "Completed"]
    assert distinct_resources(PHASES) == {"r1": "Crew A", "r2": "Crew B"}
