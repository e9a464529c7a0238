# File: buildtrack/tools/export_schedule.py
# Usage examples:
#   python -m buildtrack.tools.export_schedule
#   python -m buildtrack.tools.export_schedule --format csv --out schedule.csv
#   python -m buildtrack.tools.export_schedule --active-only --no-milestones --db /path/to/buildtrack.db
#
# Notes:
# - DB path defaults to env BUILDTRACK_DB or data/buildtrack.db
# - Output file defaults to gantt-chart-YYYY-MM-DD.{txt,csv} in BUILDTRACK_EXPORT_DIR (or the current directory)

from __future__ import annotations

import argparse
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, Sequence

from ..repositories.db import Database
from ..repositories.sqlite_schedule_repository import SQLiteScheduleRepository
from ..services.export import ExportOptions, default_filename, select_export_data, write_export
from ..utils.paths import DB_PATH, export_dir


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="export_schedule", description="Export the master schedule")
    ap.add_argument("--db", type=Path, default=DB_PATH, help="SQLite database path")
    ap.add_argument("--format", choices=("text", "csv"), default="text")
    ap.add_argument("--out", type=Path, default=None, help="output file")
    ap.add_argument("--active-only", action="store_true", help="only projects with status Active")
    ap.add_argument("--no-milestones", action="store_true")
    ap.add_argument("--no-progress", action="store_true")
    ap.add_argument("--no-critical-path", action="store_true")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    if not args.db.exists():
        print(f"Database not found: {args.db}", file=sys.stderr)
        return 2

    db = Database(args.db)
    try:
        db.run_migrations()
        repo = SQLiteScheduleRepository(db)
        options = ExportOptions(
            format=args.format,
            include_milestones=not args.no_milestones,
            include_progress=not args.no_progress,
            include_critical_path=not args.no_critical_path,
            project_filter="active" if args.active_only else "all",
        )
        now = datetime.now()
        data = select_export_data(repo.list_projects(), repo.list_phases(), repo.list_milestones(), options, now)
        out = args.out or export_dir() / default_filename(args.format, now.date())
        write_export(data, out)
    finally:
        db.close()
    print(f"Wrote {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
