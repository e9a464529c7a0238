# Rev 0.1.0
"""Phase filtering and lane grouping."""
from __future__ import annotations
from typing import Callable, Collection, Dict, Iterable, List

from ..models.entities import Phase
from ..models.types import GroupBy

UNASSIGNED = "Unassigned"

_KEYS: Dict[str, Callable[[Phase], str]] = {
    "none": lambda p: p.project_id,
    "status": lambda p: p.status,
    "resource": lambda p: p.resource_name or UNASSIGNED,
    "priority": lambda p: p.priority,
}


def filter_phases(
    phases: Iterable[Phase],
    status_filter: Collection[str] = (),
    resource_filter: Collection[str] = (),
) -> List[Phase]:
    """Both filters must pass; an empty filter passes everything."""
    return [
        p for p in phases
        if (not status_filter or p.status in status_filter)
        and (not resource_filter or p.resource_id in resource_filter)
    ]


def group_phases(phases: Iterable[Phase], group_by: GroupBy = "none") -> Dict[str, List[Phase]]:
    """Lanes keyed by project id (``none``) or by the chosen attribute.

    Lanes appear in order of first occurrence; sort the keys if a stable
    order is needed.
    """
    if group_by not in _KEYS:
        raise ValueError(f"unknown grouping mode: {group_by!r}")
    key = _KEYS[group_by]
    grouped: Dict[str, List[Phase]] = {}
    for p in phases:
        grouped.setdefault(key(p), []).append(p)
    return grouped


def distinct_statuses(phases: Iterable[Phase]) -> List[str]:
    return list(dict.fromkeys(p.status for p in phases))


def distinct_resources(phases: Iterable[Phase]) -> Dict[str, str]:
    """resource_id -> display name for phases that have a resource."""
    out: Dict[str, str] = {}
    for p in phases:
        if p.resource_id and p.resource_id not in out:
            out[p.resource_id] = p.resource_name or p.resource_id
    return out
