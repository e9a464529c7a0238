# Rev 0.1.0
"""Schedule entities as read from the record store. Dates are day-granular."""
from __future__ import annotations
from dataclasses import dataclass
from datetime import date
from typing import Optional

from .types import MilestoneType, PhaseStatus, Priority


@dataclass(frozen=True)
class Project:
    id: str
    code: str
    name: str
    status: str = "Active"
    start_target: Optional[date] = None
    finish_target: Optional[date] = None
    completion_percentage: int = 0
    pm_name: Optional[str] = None


@dataclass(frozen=True)
class Phase:
    id: str
    project_id: str
    name: str
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    actual_start_date: Optional[date] = None
    actual_end_date: Optional[date] = None
    baseline_start_date: Optional[date] = None
    baseline_end_date: Optional[date] = None
    duration_days: int = 0
    baseline_duration_days: int = 0
    completion_percentage: int = 0
    status: PhaseStatus = "Planned"
    priority: Priority = "Medium"
    is_critical_path: bool = False   # set upstream, never computed here
    resource_id: Optional[str] = None
    resource_name: Optional[str] = None
    effort_hours: float = 0.0
    color: Optional[str] = None
    project_code: Optional[str] = None
    project_name: Optional[str] = None

    @property
    def has_inverted_dates(self) -> bool:
        return (
            self.start_date is not None
            and self.end_date is not None
            and self.end_date < self.start_date
        )


@dataclass(frozen=True)
class Milestone:
    id: str
    project_id: str
    name: str
    target_date: Optional[date] = None
    actual_date: Optional[date] = None
    milestone_type: MilestoneType = "delivery"
    is_critical: bool = False
    completion_percentage: int = 0
    color: str = "#3b82f6"

    @property
    def is_completed(self) -> bool:
        return self.actual_date is not None
