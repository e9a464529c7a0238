# Rev 0.1.0
"""Planned vs. baseline comparison for a single phase."""
from __future__ import annotations
from dataclasses import dataclass
from typing import Literal, Optional

from ..models.entities import Phase
from . import dates as d
from .bounds import TimelineBounds
from .coords import Position, position

VarianceClass = Literal["delayed", "growth", "shrink", "on_track"]


@dataclass(frozen=True)
class BaselineVariance:
    phase_id: str
    start_variance: int        # days; positive means the plan slipped later
    duration_variance: int     # days; planned minus baseline
    planned: Optional[Position] = None
    baseline: Optional[Position] = None

    @property
    def delayed(self) -> bool:
        return self.start_variance > 0

    @property
    def duration_changed(self) -> bool:
        return self.duration_variance != 0

    @property
    def growth(self) -> bool:
        return self.duration_variance > 0

    @property
    def shrink(self) -> bool:
        return self.duration_variance < 0

    @property
    def classification(self) -> VarianceClass:
        if self.delayed:
            return "delayed"
        if self.growth:
            return "growth"
        if self.shrink:
            return "shrink"
        return "on_track"

    def describe(self) -> str:
        parts = []
        if self.delayed:
            parts.append(f"+{self.start_variance}d")
        if self.duration_changed:
            sign = "+" if self.duration_variance > 0 else ""
            parts.append(f"{sign}{self.duration_variance}d duration")
        return " ".join(parts)


def compare_baseline(phase: Phase, bounds: Optional[TimelineBounds] = None) -> Optional[BaselineVariance]:
    """Variance against the baseline, or None when the phase is not comparable."""
    if None in (phase.start_date, phase.end_date, phase.baseline_start_date, phase.baseline_end_date):
        return None
    planned_pos = baseline_pos = None
    if bounds is not None:
        planned_pos = position(phase.start_date, phase.end_date, bounds)
        baseline_pos = position(phase.baseline_start_date, phase.baseline_end_date, bounds)
    return BaselineVariance(
        phase_id=phase.id,
        start_variance=d.days_between(phase.start_date, phase.baseline_start_date),
        duration_variance=phase.duration_days - (phase.baseline_duration_days or 0),
        planned=planned_pos,
        baseline=baseline_pos,
    )
