# Rev 0.1.0
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional

from ..models.entities import Milestone
from . import dates as d
from .bounds import TimelineBounds
from .coords import point


@dataclass(frozen=True)
class MilestoneMarker:
    milestone: Milestone
    left: float
    completed: bool
    overdue: bool
    variance: Optional[int]   # actual minus target; only set once completed

    @property
    def id(self) -> str:
        return self.milestone.id


def classify_milestone(milestone: Milestone, today: date) -> tuple[bool, bool, Optional[int]]:
    """(completed, overdue, variance) for a milestone that has a target date."""
    completed = milestone.actual_date is not None
    overdue = not completed and milestone.target_date < today
    variance = d.days_between(milestone.actual_date, milestone.target_date) if completed else None
    return completed, overdue, variance


def position_milestones(
    milestones: Iterable[Milestone],
    bounds: TimelineBounds,
    today: date,
) -> List[MilestoneMarker]:
    """Markers for milestones with a target date; the rest are left out."""
    out: List[MilestoneMarker] = []
    for m in milestones:
        if m.target_date is None:
            continue
        completed, overdue, variance = classify_milestone(m, today)
        out.append(MilestoneMarker(m, point(m.target_date, bounds), completed, overdue, variance))
    return out
