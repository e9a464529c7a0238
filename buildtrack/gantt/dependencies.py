# Rev 0.1.0
"""Inferred phase dependencies and their connector geometry.

Phases carry no explicit predecessor link, so ordering is guessed from date
adjacency: Q precedes P when both belong to the same project, Q ends on or
before P starts, and the gap is at most ``max_gap_days``. This is a heuristic
and will report false positives for unrelated work that happens to abut.
Replace ``infer_predecessors`` with a lookup once the store records real
dependencies; the routing below only needs the (Q, P) pairs.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional, Sequence

from ..models.entities import Phase
from . import dates as d
from .bounds import TimelineBounds
from .coords import position

DEFAULT_MAX_GAP_DAYS = 5

# An arrow is drawn only when the successor starts at least this far
# (percent of timeline width) to the right of the predecessor's end.
MIN_CONNECTOR_SPAN = 1.0

# Vertical leg placement within the successor's row, percent of row height.
_VERTICAL_TOP = 25.0
_VERTICAL_HEIGHT = 50.0


def infer_predecessors(
    phase: Phase,
    phases: Iterable[Phase],
    max_gap_days: int = DEFAULT_MAX_GAP_DAYS,
) -> List[Phase]:
    if phase.start_date is None:
        return []
    out: List[Phase] = []
    for q in phases:
        if q.id == phase.id or q.project_id != phase.project_id or q.end_date is None:
            continue
        if q.end_date <= phase.start_date and d.days_between(phase.start_date, q.end_date) <= max_gap_days:
            out.append(q)
    return out


@dataclass(frozen=True)
class ConnectorLeg:
    orientation: Literal["horizontal", "vertical"]
    left: float
    width: float = 0.0
    top: float = 50.0      # percent of row height
    height: float = 0.0


@dataclass(frozen=True)
class Connector:
    predecessor_id: str
    successor_id: str
    label: str
    start_x: float
    mid_x: float
    end_x: float
    legs: tuple[ConnectorLeg, ...]
    arrow_left: float


def route_connector(pred: Phase, succ: Phase, bounds: TimelineBounds) -> Optional[Connector]:
    """Three-leg orthogonal connector from pred's right edge into succ's left edge."""
    pred_pos = position(pred.start_date, pred.end_date, bounds)
    succ_pos = position(succ.start_date, succ.end_date, bounds)
    if pred_pos is None or succ_pos is None:
        return None

    start_x = pred_pos.right
    end_x = succ_pos.left
    if end_x <= start_x + MIN_CONNECTOR_SPAN:
        return None
    mid_x = (start_x + end_x) / 2

    legs = (
        ConnectorLeg("horizontal", start_x, mid_x - start_x),
        ConnectorLeg("vertical", mid_x, top=_VERTICAL_TOP, height=_VERTICAL_HEIGHT),
        ConnectorLeg("horizontal", mid_x, end_x - mid_x),
    )
    return Connector(
        predecessor_id=pred.id,
        successor_id=succ.id,
        label=f"{pred.name} → {succ.name}",
        start_x=start_x,
        mid_x=mid_x,
        end_x=end_x,
        legs=legs,
        arrow_left=end_x - MIN_CONNECTOR_SPAN,
    )


def infer_dependencies(
    phases: Sequence[Phase],
    bounds: TimelineBounds,
    max_gap_days: int = DEFAULT_MAX_GAP_DAYS,
) -> List[Connector]:
    """Connectors for every accepted (predecessor, successor) pair among ``phases``."""
    out: List[Connector] = []
    for succ in phases:
        for pred in infer_predecessors(succ, phases, max_gap_days):
            conn = route_connector(pred, succ, bounds)
            if conn is not None:
                out.append(conn)
    return out
