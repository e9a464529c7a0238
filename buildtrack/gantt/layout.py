# Rev 0.1.0
"""One render pass of the Gantt view: records + settings in, geometry out."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from ..models.entities import Milestone, Phase, Project
from ..models.view_settings import ViewSettings
from ..utils.logging_setup import get_logger
from .baseline import BaselineVariance, compare_baseline
from .bounds import TimelineBounds, compute_bounds
from .coords import Position, position
from .critical_path import CriticalPathSummary, summarize_critical_path
from .dependencies import Connector, infer_dependencies
from .grouping import filter_phases, group_phases
from .milestones import MilestoneMarker, position_milestones
from .segments import GridLine, Segment, build_grid_lines, build_segments, today_marker

_log = get_logger(__name__)

PRIORITY_COLORS = {
    "Critical": "#ef4444",
    "High": "#f97316",
    "Medium": "#eab308",
    "Low": "#22c55e",
}
DEFAULT_BAR_COLOR = "#9ca3af"


@dataclass(frozen=True)
class PhaseBar:
    phase: Phase
    planned: Optional[Position]
    actual: Optional[Position] = None
    baseline: Optional[BaselineVariance] = None
    critical: bool = False
    progress: Optional[int] = None
    color: str = DEFAULT_BAR_COLOR

    @property
    def drawable(self) -> bool:
        return self.planned is not None


@dataclass(frozen=True)
class GanttLayout:
    settings: ViewSettings
    bounds: TimelineBounds
    segments: List[Segment]
    grid_lines: List[GridLine]
    today_left: Optional[float]
    lanes: Dict[str, List[PhaseBar]]
    lane_titles: Dict[str, str]
    connectors: List[Connector]
    milestones: List[MilestoneMarker]
    critical_summary: Optional[CriticalPathSummary]

    def bar_for(self, phase_id: str) -> Optional[PhaseBar]:
        for bars in self.lanes.values():
            for bar in bars:
                if bar.phase.id == phase_id:
                    return bar
        return None


def bar_color(phase: Phase) -> str:
    return phase.color or PRIORITY_COLORS.get(phase.priority, DEFAULT_BAR_COLOR)


def build_phase_bar(phase: Phase, bounds: TimelineBounds, settings: ViewSettings) -> PhaseBar:
    actual = None
    if phase.actual_start_date is not None and phase.actual_start_date != phase.start_date:
        actual = position(phase.actual_start_date, phase.actual_end_date, bounds)
    return PhaseBar(
        phase=phase,
        planned=position(phase.start_date, phase.end_date, bounds),
        actual=actual,
        baseline=compare_baseline(phase, bounds) if settings.show_baselines else None,
        critical=settings.show_critical_path and phase.is_critical_path,
        progress=phase.completion_percentage if settings.show_progress else None,
        color=bar_color(phase),
    )


def _lane_titles(lanes: Dict[str, List[PhaseBar]], projects: Sequence[Project], group_by: str) -> Dict[str, str]:
    if group_by != "none":
        return {k: k for k in lanes}
    by_id = {p.id: p for p in projects}
    titles: Dict[str, str] = {}
    for key in lanes:
        proj = by_id.get(key)
        titles[key] = f"{proj.code} - {proj.name}" if proj else key
    return titles


def build_layout(
    projects: Sequence[Project],
    phases: Sequence[Phase],
    milestones: Sequence[Milestone],
    settings: ViewSettings,
    today: date,
) -> GanttLayout:
    bounds = compute_bounds(projects, phases, milestones, settings.zoom_level, today)
    segments = build_segments(bounds, settings.zoom_level)

    visible = filter_phases(phases, settings.filter_status, settings.filter_resources)
    grouped = group_phases(visible, settings.group_by)
    lanes = {
        key: [build_phase_bar(p, bounds, settings) for p in members]
        for key, members in grouped.items()
    }

    connectors = infer_dependencies(visible, bounds) if settings.show_dependencies else []
    markers = position_milestones(milestones, bounds, today) if settings.show_milestones else []
    summary = summarize_critical_path(phases) if settings.show_critical_path else None

    _log.debug(
        "layout: %d/%d phases visible in %d lanes, %d connectors, %d milestones",
        len(visible), len(phases), len(lanes), len(connectors), len(markers),
    )
    return GanttLayout(
        settings=settings,
        bounds=bounds,
        segments=segments,
        grid_lines=build_grid_lines(segments, settings.zoom_level),
        today_left=today_marker(bounds, today),
        lanes=lanes,
        lane_titles=_lane_titles(lanes, projects, settings.group_by),
        connectors=connectors,
        milestones=markers,
        critical_summary=summary,
    )
