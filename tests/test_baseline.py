# tests/test_baseline.py
from __future__ import annotations

from datetime import date

import pytest

from buildtrack.gantt.baseline import compare_baseline
from buildtrack.gantt.bounds import TimelineBounds
from buildtrack.models.entities import Phase


def _ph(start, end, b_start, b_end, duration=10, b_duration=10):
    return Phase(
        "p1", "prj", "Framing",
        start_date=start, end_date=end,
        baseline_start_date=b_start, baseline_end_date=b_end,
        duration_days=duration, baseline_duration_days=b_duration,
    )


def test_slipped_and_shortened_phase():
    v = compare_baseline(_ph(date(2024, 2, 5), date(2024, 2, 14),
                             date(2024, 2, 1), date(2024, 2, 12), duration=10, b_duration=12))
    assert v.start_variance == 4
    assert v.delayed is True
    assert v.duration_variance == -2
    assert v.duration_changed is True
    assert v.shrink is True
    assert v.growth is False
    assert v.classification == "delayed"
    assert v.describe() == "+4d -2d duration"


def test_early_start_with_growth():
    v = compare_baseline(_ph(date(2024, 1, 29), date(2024, 2, 11),
                             date(2024, 2, 1), date(2024, 2, 12), duration=14, b_duration=12))
    assert v.start_variance == -3
    assert v.delayed is False
    assert v.classification == "growth"
    assert v.describe() == "+2d duration"


def test_on_track():
    v = compare_baseline(_ph(date(2024, 2, 1), date(2024, 2, 10), date(2024, 2, 1), date(2024, 2, 10)))
    assert v.classification == "on_track"
    assert v.describe() == ""


@pytest.mark.parametrize(
    "dates",
    [
        (date(2024, 2, 1), date(2024, 2, 10), None, None),
        (date(2024, 2, 1), None, date(2024, 2, 1), date(2024, 2, 10)),
        (None, date(2024, 2, 10), date(2024, 2, 1), date(2024, 2, 10)),
        (date(2024, 2, 1), date(2024, 2, 10), date(2024, 2, 1), None),
    ],
)
def test_incomplete_phases_are_not_comparable(dates):
    assert compare_baseline(_ph(*dates)) is None


def test_positions_when_bounds_given():
    bounds = TimelineBounds(date(2024, 1, 1), date(2024, 4, 10), 100)
    v = compare_baseline(_ph(date(2024, 1, 15), date(2024, 1, 24), date(2024, 1, 11), date(2024, 1, 20)), bounds)
    assert v.planned.left == pytest.approx(14.0)
    assert v.baseline.left == pytest.approx(10.0)
    assert v.baseline.width == pytest.approx(10.0)

    assert compare_baseline(_ph(date(2024, 1, 15), date(2024, 1, 24),
                                date(2024, 1, 11), date(2024, 1, 20))).planned is None
