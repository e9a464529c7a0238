# tests/test_coords.py
from __future__ import annotations

from datetime import date

import pytest

from buildtrack.gantt.bounds import TimelineBounds
from buildtrack.gantt.coords import point, position, progress_from_click

# 2024-01-01 .. 2024-04-09 inclusive: exactly 100 day columns, so 1 day == 1%
BOUNDS = TimelineBounds(date(2024, 1, 1), date(2024, 4, 10), 100)


def test_absent_dates_are_not_drawable():
    assert position(None, date(2024, 1, 5), BOUNDS) is None
    assert position(date(2024, 1, 5), None, BOUNDS) is None
    assert point(None, BOUNDS) is None


def test_width_is_end_inclusive():
    pos = position(date(2024, 1, 11), date(2024, 1, 20), BOUNDS)
    assert pos.left == pytest.approx(10.0)
    assert pos.width == pytest.approx(10.0)

    single = position(date(2024, 1, 11), date(2024, 1, 11), BOUNDS)
    assert single.width == pytest.approx(1.0)


def test_range_starting_before_window_is_clipped():
    pos = position(date(2023, 12, 20), date(2024, 1, 5), BOUNDS)
    assert pos.left == pytest.approx(0.0)
    assert pos.width == pytest.approx(5.0)


def test_range_ending_after_window_is_clipped():
    pos = position(date(2024, 4, 1), date(2024, 5, 1), BOUNDS)
    assert pos.left == pytest.approx(91.0)
    assert pos.right == pytest.approx(100.0)


def test_inverted_range_gets_zero_width():
    # not rejected; the repository logs these at load time
    pos = position(date(2024, 1, 20), date(2024, 1, 11), BOUNDS)
    assert pos.left == pytest.approx(19.0)
    assert pos.width == 0.0


def test_range_outside_window_collapses_to_edge():
    after = position(date(2024, 5, 1), date(2024, 5, 3), BOUNDS)
    assert after.width == 0.0
    assert after.left == pytest.approx(99.0)

    before = position(date(2023, 11, 1), date(2023, 11, 3), BOUNDS)
    assert before.width == 0.0
    assert before.left == pytest.approx(0.0)


def test_adjacent_ranges_do_not_overlap():
    a = position(date(2024, 1, 5), date(2024, 1, 10), BOUNDS)
    b = position(date(2024, 1, 11), date(2024, 1, 12), BOUNDS)
    assert a.right <= b.left + 1e-9


def test_point_is_left_offset():
    assert point(date(2024, 1, 11), BOUNDS) == pytest.approx(10.0)
    assert point(date(2030, 1, 1), BOUNDS) == pytest.approx(99.0)


@pytest.mark.parametrize(
    "x,width,expected",
    [(50, 200, 25), (0, 120, 0), (-5, 100, 0), (150, 100, 100), (99.6, 100, 100), (10, 0, 0)],
)
def test_progress_from_click(x, width, expected):
    assert progress_from_click(x, width) == expected
