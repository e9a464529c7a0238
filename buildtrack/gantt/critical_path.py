# Rev 0.1.0
"""Critical-path badge data.

The ``is_critical_path`` flag on each phase is produced elsewhere (a store
procedure or any ``CriticalPathProvider``); this module only aggregates over
it.
"""
from __future__ import annotations
from dataclasses import dataclass, replace
from typing import Iterable, List, Optional, Protocol, Sequence

from ..models.entities import Phase

AT_RISK_BELOW = 50


class CriticalPathProvider(Protocol):
    def compute_critical_path(self, project_id: str) -> List[str]:
        """Return the ids of the phases on the project's critical path."""
        ...


@dataclass(frozen=True)
class CriticalPathSummary:
    phase_ids: tuple[str, ...]
    total_duration: int
    average_completion: float
    at_risk: bool


def summarize_critical_path(phases: Iterable[Phase]) -> Optional[CriticalPathSummary]:
    """Aggregate the flagged phases; None when nothing is flagged (no badge)."""
    flagged = [p for p in phases if p.is_critical_path]
    if not flagged:
        return None
    total = sum(p.duration_days for p in flagged)
    avg = sum(p.completion_percentage for p in flagged) / len(flagged)
    at_risk = avg < AT_RISK_BELOW and any(p.status == "In Progress" for p in flagged)
    return CriticalPathSummary(
        phase_ids=tuple(p.id for p in flagged),
        total_duration=total,
        average_completion=avg,
        at_risk=at_risk,
    )


def apply_critical_path(phases: Sequence[Phase], project_id: str, phase_ids: Iterable[str]) -> List[Phase]:
    """Copy of ``phases`` with the project's flags replaced by ``phase_ids``."""
    ids = set(phase_ids)
    return [
        replace(p, is_critical_path=p.id in ids) if p.project_id == project_id else p
        for p in phases
    ]


def summarize_with_provider(
    provider: CriticalPathProvider,
    project_id: str,
    phases: Sequence[Phase],
) -> Optional[CriticalPathSummary]:
    flagged = apply_critical_path(phases, project_id, provider.compute_critical_path(project_id))
    return summarize_critical_path(p for p in flagged if p.project_id == project_id)
