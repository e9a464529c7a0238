# Rev 0.1.0
"""Visible date window for the Gantt view.

The window is ``[start, end)``: ``end`` is the first day after the last
visible day, so ``total_days`` equals the number of day columns and header
segments tile it exactly.
"""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Iterable, Iterator, List, Optional

from ..models.entities import Milestone, Phase, Project
from ..models.types import ZoomLevel
from ..utils.logging_setup import get_logger
from . import dates as d

_log = get_logger(__name__)

DEFAULT_SPAN_DAYS = 365

# (pad before/after in days, snap-to-period-start, next-period-start)
_PADDING = {
    "days": (7, None, None),
    "weeks": (14, d.start_of_week, d.next_week),
    "months": (30, d.start_of_month, d.next_month),
    "quarters": (90, d.start_of_quarter, d.next_quarter),
}


@dataclass(frozen=True)
class TimelineBounds:
    start: date
    end: date
    total_days: int

    def contains(self, day: date) -> bool:
        return self.start <= day < self.end


def collect_dates(
    projects: Iterable[Project] = (),
    phases: Iterable[Phase] = (),
    milestones: Iterable[Milestone] = (),
) -> List[date]:
    """Every present date on the input records, absent values dropped."""
    def _iter() -> Iterator[Optional[date]]:
        for p in projects:
            yield p.start_target
            yield p.finish_target
        for ph in phases:
            yield ph.start_date
            yield ph.end_date
            yield ph.actual_start_date
            yield ph.actual_end_date
            yield ph.baseline_start_date
            yield ph.baseline_end_date
        for m in milestones:
            yield m.target_date

    return [x for x in _iter() if x is not None]


def bounds_for_dates(all_dates: List[date], zoom_level: ZoomLevel, today: date) -> TimelineBounds:
    if not all_dates:
        return TimelineBounds(today, d.add_days(today, DEFAULT_SPAN_DAYS), DEFAULT_SPAN_DAYS)

    if zoom_level not in _PADDING:
        raise ValueError(f"unknown zoom level: {zoom_level!r}")
    pad, snap_start, snap_next = _PADDING[zoom_level]

    lo = d.add_days(min(all_dates), -pad)
    hi = d.add_days(max(all_dates), pad)
    if snap_start is None:
        start, end = lo, d.add_days(hi, 1)
    else:
        start, end = snap_start(lo), snap_next(hi)

    return TimelineBounds(start, end, d.days_between(end, start))


def compute_bounds(
    projects: Iterable[Project],
    phases: Iterable[Phase],
    milestones: Iterable[Milestone],
    zoom_level: ZoomLevel,
    today: date,
) -> TimelineBounds:
    """Derive the visible window from all records for the active zoom level."""
    all_dates = collect_dates(projects, phases, milestones)
    bounds = bounds_for_dates(all_dates, zoom_level, today)
    _log.debug(
        "bounds zoom=%s dates=%d -> %s..%s (%d days)",
        zoom_level, len(all_dates), bounds.start, bounds.end, bounds.total_days,
    )
    return bounds
