# Rev 0.1.0
"""Timeline engine behind the master Gantt view. Pure functions, no I/O."""
from .baseline import BaselineVariance, compare_baseline
from .bounds import TimelineBounds, compute_bounds
from .coords import Position, point, position, progress_from_click
from .critical_path import (
    CriticalPathProvider,
    CriticalPathSummary,
    apply_critical_path,
    summarize_critical_path,
    summarize_with_provider,
)
from .dependencies import Connector, infer_dependencies, infer_predecessors, route_connector
from .grouping import filter_phases, group_phases
from .layout import GanttLayout, PhaseBar, build_layout
from .milestones import MilestoneMarker, position_milestones
from .segments import GridLine, Segment, build_grid_lines, build_segments, today_marker

__all__ = [
    "BaselineVariance", "compare_baseline",
    "TimelineBounds", "compute_bounds",
    "Position", "point", "position", "progress_from_click",
    "CriticalPathProvider", "CriticalPathSummary", "apply_critical_path",
    "summarize_critical_path", "summarize_with_provider",
    "Connector", "infer_dependencies", "infer_predecessors", "route_connector",
    "filter_phases", "group_phases",
    "GanttLayout", "PhaseBar", "build_layout",
    "MilestoneMarker", "position_milestones",
    "GridLine", "Segment", "build_grid_lines", "build_segments", "today_marker",
]
