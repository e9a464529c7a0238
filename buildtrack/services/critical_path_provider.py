# Rev 0.1.0
# Stand-in for a scheduling service: walks inferred predecessors backwards.

from __future__ import annotations
from typing import Callable, List, Sequence

from ..gantt.dependencies import DEFAULT_MAX_GAP_DAYS, infer_predecessors
from ..models.entities import Phase


class AdjacencyCriticalPathProvider:
    """
    Traces back from the project's latest-finishing phase, at each step taking
    the inferred predecessor that ends latest. Not a CPM pass: there is no
    float, and dependencies are the same date-adjacency guesses the Gantt
    arrows use.
    """

    def __init__(self, load_phases: Callable[[str], Sequence[Phase]], max_gap_days: int = DEFAULT_MAX_GAP_DAYS):
        self._load_phases = load_phases
        self._max_gap_days = max_gap_days

    def compute_critical_path(self, project_id: str) -> List[str]:
        phases = [p for p in self._load_phases(project_id)
                  if p.end_date is not None and p.status != "Cancelled"]
        if not phases:
            return []

        current = max(phases, key=lambda p: (p.end_date, p.id))
        path = [current.id]
        seen = {current.id}
        while True:
            preds = [q for q in infer_predecessors(current, phases, self._max_gap_days) if q.id not in seen]
            if not preds:
                break
            current = max(preds, key=lambda p: (p.end_date, p.id))
            path.append(current.id)
            seen.add(current.id)
        path.reverse()
        return path
