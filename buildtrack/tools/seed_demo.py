# Rev 0.1.0
"""
Developer seed: one construction project with phases, resources and milestones
laid out relative to today, so every overlay of the Gantt view has data.

Usage:
    python -m buildtrack.tools.seed_demo [--db PATH]
"""
from __future__ import annotations

import argparse
from datetime import date, timedelta
from pathlib import Path
from typing import Optional, Sequence

from ..models.entities import Milestone, Phase, Project
from ..repositories.db import Database
from ..repositories.sqlite_schedule_repository import SQLiteScheduleRepository
from ..utils.paths import DB_PATH

# name, offset from project start, duration, status, priority, resource, progress
_PHASES = [
    ("Site preparation", 0, 10, "Completed", "High", "crew-a", 100),
    ("Foundation", 12, 14, "Completed", "Critical", "crew-a", 100),
    ("Framing", 28, 21, "In Progress", "Critical", "crew-b", 45),
    ("Roofing", 51, 10, "Planned", "High", "crew-b", 0),
    ("Electrical rough-in", 51, 12, "Planned", "Medium", "sparks", 0),
    ("Interior finish", 66, 25, "Planned", "Medium", None, 0),
]


def seed(repo: SQLiteScheduleRepository, today: date) -> str:
    start = today - timedelta(days=30)
    project = Project(
        id="demo-1", code="BD-101", name="Barndominium – Lot 7", status="Active",
        start_target=start, finish_target=start + timedelta(days=95), pm_name="Site PM",
    )
    repo.add_project(project)
    repo.add_resource("crew-a", "Crew A")
    repo.add_resource("crew-b", "Crew B")
    repo.add_resource("sparks", "Sparks Electric")

    for i, (name, offset, days, status, prio, res, pct) in enumerate(_PHASES):
        s = start + timedelta(days=offset)
        repo.add_phase(Phase(
            id=f"demo-1-ph{i + 1}", project_id=project.id, name=name,
            start_date=s, end_date=s + timedelta(days=days - 1),
            actual_start_date=s if status != "Planned" else None,
            duration_days=days, completion_percentage=pct,
            status=status, priority=prio, resource_id=res, effort_hours=days * 8.0,
        ), sort_order=i)

    repo.add_milestone(Milestone("demo-1-m1", project.id, "Foundation inspection",
                                 target_date=start + timedelta(days=26),
                                 actual_date=start + timedelta(days=27),
                                 milestone_type="review", completion_percentage=100))
    repo.add_milestone(Milestone("demo-1-m2", project.id, "Draw #2",
                                 target_date=start + timedelta(days=50),
                                 milestone_type="payment", is_critical=True))
    repo.add_milestone(Milestone("demo-1-m3", project.id, "Handover",
                                 target_date=start + timedelta(days=95),
                                 milestone_type="finish"))
    return project.id


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="seed_demo")
    ap.add_argument("--db", type=Path, default=DB_PATH)
    args = ap.parse_args(argv)

    db = Database(args.db)
    try:
        db.run_migrations()
        project_id = seed(SQLiteScheduleRepository(db), date.today())
    finally:
        db.close()
    print(f"Seeded project {project_id} into {args.db}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
