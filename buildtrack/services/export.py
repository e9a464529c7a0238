# Rev 0.1.0
"""Plain-text and CSV renderings of the schedule records."""
from __future__ import annotations
import csv
import io
from dataclasses import dataclass
from datetime import date, datetime
from pathlib import Path
from typing import List, Literal, Optional, Sequence

from ..models.entities import Milestone, Phase, Project
from ..utils.logging_setup import get_logger

_log = get_logger(__name__)

ExportFormat = Literal["text", "csv"]

PHASE_COLUMNS = [
    "Project Code", "Project Name", "Phase Name", "Status", "Start Date", "End Date",
    "Duration (Days)", "Progress (%)", "Critical Path", "Resource",
]
MILESTONE_COLUMNS = [
    "Project Code", "Project Name", "Milestone Name", "Type", "Target Date", "Actual Date", "Progress (%)",
]


@dataclass(frozen=True)
class ExportOptions:
    format: ExportFormat = "text"
    include_milestones: bool = True
    include_progress: bool = True
    include_critical_path: bool = True
    project_filter: Literal["all", "active"] = "all"


@dataclass(frozen=True)
class ExportData:
    projects: List[Project]
    phases: List[Phase]
    milestones: List[Milestone]
    options: ExportOptions
    generated_at: datetime


def select_export_data(
    projects: Sequence[Project],
    phases: Sequence[Phase],
    milestones: Sequence[Milestone],
    options: ExportOptions,
    generated_at: datetime,
) -> ExportData:
    if options.project_filter == "active":
        projects = [p for p in projects if p.status == "Active"]
        ids = {p.id for p in projects}
        phases = [ph for ph in phases if ph.project_id in ids]
        milestones = [m for m in milestones if m.project_id in ids]
    return ExportData(
        projects=list(projects),
        phases=list(phases),
        milestones=list(milestones) if options.include_milestones else [],
        options=options,
        generated_at=generated_at,
    )


def _d(value: Optional[date], missing: str) -> str:
    return value.isoformat() if value is not None else missing


def text_report(data: ExportData) -> str:
    opts = data.options
    lines = [
        "GANTT CHART EXPORT REPORT",
        f"Generated: {data.generated_at:%Y-%m-%d %H:%M:%S}",
        f"Projects: {len(data.projects)}",
        f"Phases: {len(data.phases)}",
        f"Milestones: {len(data.milestones)}",
        "",
    ]
    for project in data.projects:
        lines += [
            "",
            f"PROJECT: {project.code} - {project.name}",
            f"Status: {project.status}",
            f"PM: {project.pm_name or 'Unassigned'}",
            f"Timeline: {_d(project.start_target, 'TBD')} to {_d(project.finish_target, 'TBD')}",
        ]
        phases = [ph for ph in data.phases if ph.project_id == project.id]
        if phases:
            lines += ["", "Phases:"]
            for ph in phases:
                lines += [
                    f"  - {ph.name}",
                    f"    Status: {ph.status}",
                    f"    Duration: {ph.duration_days} days",
                    f"    Dates: {_d(ph.start_date, 'TBD')} to {_d(ph.end_date, 'TBD')}",
                ]
                if opts.include_progress:
                    lines.append(f"    Progress: {ph.completion_percentage}%")
                if opts.include_critical_path and ph.is_critical_path:
                    lines.append("    Critical Path: YES")
                lines.append("")
        milestones = [m for m in data.milestones if m.project_id == project.id]
        if milestones:
            lines.append("Milestones:")
            for m in milestones:
                lines += [
                    f"  - {m.name}",
                    f"    Type: {m.milestone_type}",
                    f"    Target: {_d(m.target_date, 'TBD')}",
                    f"    Actual: {_d(m.actual_date, 'Pending')}",
                    "",
                ]
        lines.append("=" * 80)
    return "\n".join(lines) + "\n"


def csv_report(data: ExportData) -> str:
    by_id = {p.id: p for p in data.projects}
    buf = io.StringIO()
    w = csv.writer(buf, lineterminator="\n")
    w.writerow(PHASE_COLUMNS)
    for ph in data.phases:
        proj = by_id.get(ph.project_id)
        w.writerow([
            proj.code if proj else "",
            proj.name if proj else "",
            ph.name,
            ph.status,
            _d(ph.start_date, ""),
            _d(ph.end_date, ""),
            ph.duration_days,
            ph.completion_percentage,
            "Yes" if ph.is_critical_path else "No",
            ph.resource_name or "",
        ])
    if data.options.include_milestones:
        w.writerow([])
        w.writerow(["Milestones"])
        w.writerow(MILESTONE_COLUMNS)
        for m in data.milestones:
            proj = by_id.get(m.project_id)
            w.writerow([
                proj.code if proj else "",
                proj.name if proj else "",
                m.name,
                m.milestone_type,
                _d(m.target_date, ""),
                _d(m.actual_date, ""),
                m.completion_percentage,
            ])
    return buf.getvalue()


def default_filename(fmt: ExportFormat, day: date) -> str:
    ext = "csv" if fmt == "csv" else "txt"
    return f"gantt-chart-{day:%Y-%m-%d}.{ext}"


def render(data: ExportData) -> str:
    return csv_report(data) if data.options.format == "csv" else text_report(data)


def write_export(data: ExportData, path: Path) -> Path:
    path = Path(path)
    path.write_text(render(data), encoding="utf-8")
    _log.info(
        "Exported %d phases / %d milestones as %s to %s",
        len(data.phases), len(data.milestones), data.options.format, path,
    )
    return path
