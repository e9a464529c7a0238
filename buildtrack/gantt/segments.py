# Rev 0.1.0
"""Timeline header: zoom segments, grid lines and the today marker."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Callable, Dict, List, Literal, Optional, Tuple

from ..models.types import ZoomLevel
from . import dates as d
from .bounds import TimelineBounds
from .coords import point, position

GridKind = Literal["major", "minor"]


@dataclass(frozen=True)
class Segment:
    start: date        # first day inside the window
    end: date          # exclusive
    label: str
    sublabel: str
    left: float
    width: float

    @property
    def days(self) -> int:
        return d.days_between(self.end, self.start)


@dataclass(frozen=True)
class GridLine:
    left: float
    kind: GridKind


def _day_labels(s: date) -> Tuple[str, str]:
    return str(s.day), s.strftime("%a")


def _week_labels(s: date) -> Tuple[str, str]:
    return f"{s.strftime('%b')} {s.day}", "Week"


def _month_labels(s: date) -> Tuple[str, str]:
    return s.strftime("%b %Y"), ""


def _quarter_labels(s: date) -> Tuple[str, str]:
    return f"Q{d.quarter_of(s)} {s.year}", ""


# zoom -> (period start, next period start, labels)
_PERIODS: Dict[str, Tuple[Callable[[date], date], Callable[[date], date], Callable[[date], Tuple[str, str]]]] = {
    "days": (lambda x: x, lambda x: d.add_days(x, 1), _day_labels),
    "weeks": (d.start_of_week, d.next_week, _week_labels),
    "months": (d.start_of_month, d.next_month, _month_labels),
    "quarters": (d.start_of_quarter, d.next_quarter, _quarter_labels),
}

# Minimum header cell width in pixels per zoom level
MIN_SEGMENT_PX = {"days": 40, "weeks": 80, "months": 120, "quarters": 160}


def min_chart_width(segments: List[Segment], zoom_level: ZoomLevel) -> int:
    """Pixels the chart area needs so no header cell drops below its minimum width."""
    if zoom_level not in MIN_SEGMENT_PX:
        raise ValueError(f"unknown zoom level: {zoom_level!r}")
    return len(segments) * MIN_SEGMENT_PX[zoom_level]


def build_segments(bounds: TimelineBounds, zoom_level: ZoomLevel) -> List[Segment]:
    """Partition the window into ordered, non-overlapping header cells.

    Cells are clipped to the window, so together they cover exactly
    ``bounds.total_days`` days.
    """
    if zoom_level not in _PERIODS:
        raise ValueError(f"unknown zoom level: {zoom_level!r}")
    period_start, period_next, labels = _PERIODS[zoom_level]

    out: List[Segment] = []
    cur = period_start(bounds.start)
    while cur < bounds.end:
        nxt = period_next(cur)
        seg_start = max(cur, bounds.start)
        seg_end = min(nxt, bounds.end)
        pos = position(seg_start, d.add_days(seg_end, -1), bounds)
        label, sublabel = labels(cur)
        out.append(Segment(seg_start, seg_end, label, sublabel, pos.left, pos.width))
        cur = nxt
    return out


def build_grid_lines(segments: List[Segment], zoom_level: ZoomLevel) -> List[GridLine]:
    # Major line at every boundary between segments; the left frame edge is skipped.
    lines = [GridLine(seg.left, "major") for seg in segments[1:]]

    if zoom_level == "weeks":
        for seg in segments:
            n = seg.days
            for day in range(1, n):
                lines.append(GridLine(seg.left + day / n * seg.width, "minor"))
    return lines


def today_marker(bounds: TimelineBounds, today: date) -> Optional[float]:
    """Left offset of the "Today" line, or None when today is off-scale."""
    if not bounds.contains(today):
        return None
    return point(today, bounds)
