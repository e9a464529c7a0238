# buildtrack type definitions
# Rev 0.1.0

from __future__ import annotations
from typing import Literal

PhaseStatus = Literal["Planned", "In Progress", "Completed", "On Hold", "Cancelled"]
Priority = Literal["Low", "Medium", "High", "Critical"]
MilestoneType = Literal["delivery", "review", "payment", "approval", "start", "finish"]

# Header granularity and lane grouping for the Gantt view
ZoomLevel = Literal["days", "weeks", "months", "quarters"]
GroupBy = Literal["none", "status", "resource", "priority"]

PHASE_STATUSES: tuple[str, ...] = ("Planned", "In Progress", "Completed", "On Hold", "Cancelled")
PRIORITIES: tuple[str, ...] = ("Low", "Medium", "High", "Critical")
MILESTONE_TYPES: tuple[str, ...] = ("delivery", "review", "payment", "approval", "start", "finish")
ZOOM_LEVELS: tuple[str, ...] = ("days", "weeks", "months", "quarters")
GROUP_MODES: tuple[str, ...] = ("none", "status", "resource", "priority")
