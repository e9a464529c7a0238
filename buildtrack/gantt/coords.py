# Rev 0.1.0
"""Date → percentage mapping for bars and markers."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Optional

from . import dates as d
from .bounds import TimelineBounds


@dataclass(frozen=True)
class Position:
    left: float    # percent of the timeline width
    width: float   # percent of the timeline width

    @property
    def right(self) -> float:
        return self.left + self.width


def position(
    range_start: Optional[date],
    range_end: Optional[date],
    bounds: TimelineBounds,
) -> Optional[Position]:
    """Map an end-inclusive day range onto the bounds.

    Returns None when either date is absent; callers treat that as "not
    drawable". Ranges are clipped to the visible window first; a range lying
    wholly outside it collapses to zero width at the nearest edge. An inverted
    range (end before start) is not rejected and maps to a zero-width bar.
    """
    if range_start is None or range_end is None:
        return None

    last_day = d.add_days(bounds.end, -1)
    start = min(max(range_start, bounds.start), last_day)
    end = min(max(range_end, bounds.start), last_day)

    total = bounds.total_days
    left = max(0, d.days_between(start, bounds.start)) / total * 100
    width = (d.days_between(end, start) + 1) / total * 100
    if range_end < range_start or range_end < bounds.start or range_start > last_day:
        width = 0.0
    return Position(left, width)


def point(day: Optional[date], bounds: TimelineBounds) -> Optional[float]:
    """Left offset of a zero-width marker, clipped to the window."""
    if day is None:
        return None
    pos = position(day, day, bounds)
    return pos.left if pos is not None else None


def progress_from_click(x: float, bar_width: float) -> int:
    """Completion percentage for a click at ``x`` pixels inside a bar."""
    if bar_width <= 0:
        return 0
    return max(0, min(100, round(x / bar_width * 100)))
