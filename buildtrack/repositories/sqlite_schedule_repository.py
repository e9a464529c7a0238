# Rev 0.1.0
# buildtrack – SQLiteScheduleRepository (Rev 0.1.0)
# Record provider for the Gantt view: projects, phases, milestones, baselines.

from __future__ import annotations
import sqlite3
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from ..gantt.dates import parse_date
from ..models.entities import Milestone, Phase, Project
from ..utils.logging_setup import get_logger
from .db import transaction

_PHASE_SELECT = """
    SELECT
        ph.id, ph.project_id, ph.name,
        ph.start_date, ph.end_date,
        ph.actual_start_date, ph.actual_end_date,
        ph.baseline_start_date, ph.baseline_end_date,
        ph.duration_days, ph.baseline_duration_days,
        ph.completion_percentage, ph.status, ph.priority,
        ph.is_critical_path, ph.resource_id, ph.effort_hours, ph.color,
        r.name  AS resource_name,
        p.code  AS project_code,
        p.name  AS project_name
    FROM project_phases ph
    JOIN projects p ON p.id = ph.project_id
    LEFT JOIN resources r ON r.id = ph.resource_id
"""


def _iso(d: Optional[date]) -> Optional[str]:
    return d.isoformat() if d is not None else None


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


class SQLiteScheduleRepository:
    """
    Reads schedule records as entity dataclasses and performs the handful of
    writes the Gantt view requests (progress, baselines, critical-path flags).
    """

    def __init__(self, db_or_conn):
        self._db = db_or_conn
        self._log = get_logger("SQLiteScheduleRepository")

    # ---------- projects ----------

    def list_projects(self) -> List[Project]:
        rows = self._fetch_all(
            """
            SELECT id, code, name, status, pm_name, start_target, finish_target, completion_percentage
            FROM projects
            ORDER BY code COLLATE NOCASE ASC, id ASC;
            """
        )
        return [self._to_project(r) for r in rows]

    def get_project(self, project_id: str) -> Optional[Project]:
        rows = self._fetch_all(
            """
            SELECT id, code, name, status, pm_name, start_target, finish_target, completion_percentage
            FROM projects WHERE id = ?;
            """,
            (project_id,),
        )
        return self._to_project(rows[0]) if rows else None

    def add_project(self, project: Project) -> None:
        self._conn().execute(
            """
            INSERT INTO projects(id, code, name, status, pm_name, start_target, finish_target, completion_percentage)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (project.id, project.code, project.name, project.status, project.pm_name,
             _iso(project.start_target), _iso(project.finish_target), project.completion_percentage),
        )
        self._commit()

    def add_resource(self, resource_id: str, name: str) -> None:
        self._conn().execute("INSERT INTO resources(id, name) VALUES (?, ?);", (resource_id, name))
        self._commit()

    # ---------- phases ----------

    def list_phases(self, project_id: Optional[str] = None) -> List[Phase]:
        sql = _PHASE_SELECT
        params: tuple = ()
        if project_id is not None:
            sql += " WHERE ph.project_id = ?"
            params = (project_id,)
        sql += " ORDER BY p.code COLLATE NOCASE, ph.sort_order, ph.start_date, ph.id;"
        phases = [self._to_phase(r) for r in self._fetch_all(sql, params)]
        for ph in phases:
            if ph.has_inverted_dates:
                self._log.warning(
                    "Phase %s (%s) ends %s before it starts %s",
                    ph.id, ph.name, ph.end_date, ph.start_date,
                )
        return phases

    def get_phase(self, phase_id: str) -> Optional[Phase]:
        rows = self._fetch_all(_PHASE_SELECT + " WHERE ph.id = ?;", (phase_id,))
        return self._to_phase(rows[0]) if rows else None

    def add_phase(self, phase: Phase, sort_order: int = 0) -> None:
        self._conn().execute(
            """
            INSERT INTO project_phases(
                id, project_id, name, sort_order,
                start_date, end_date, actual_start_date, actual_end_date,
                baseline_start_date, baseline_end_date,
                duration_days, baseline_duration_days, completion_percentage,
                status, priority, is_critical_path, resource_id, effort_hours, color, updated_at_utc)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (phase.id, phase.project_id, phase.name, sort_order,
             _iso(phase.start_date), _iso(phase.end_date),
             _iso(phase.actual_start_date), _iso(phase.actual_end_date),
             _iso(phase.baseline_start_date), _iso(phase.baseline_end_date),
             phase.duration_days, phase.baseline_duration_days, phase.completion_percentage,
             phase.status, phase.priority, int(phase.is_critical_path), phase.resource_id,
             phase.effort_hours, phase.color, _utc_now()),
        )
        self._commit()

    def update_phase_progress(self, phase_id: str, completion_percentage: int) -> bool:
        cur = self._conn().execute(
            "UPDATE project_phases SET completion_percentage = ?, updated_at_utc = ? WHERE id = ?;",
            (completion_percentage, _utc_now(), phase_id),
        )
        self._commit()
        return cur.rowcount > 0

    def set_critical_path(self, project_id: str, phase_ids: Iterable[str]) -> int:
        """Replace the project's critical-path flags; returns how many phases are flagged."""
        ids = list(phase_ids)
        con = self._conn()
        with transaction(con):
            con.execute(
                "UPDATE project_phases SET is_critical_path = 0 WHERE project_id = ?;",
                (project_id,),
            )
            flagged = 0
            for pid in ids:
                cur = con.execute(
                    "UPDATE project_phases SET is_critical_path = 1 WHERE project_id = ? AND id = ?;",
                    (project_id, pid),
                )
                flagged += cur.rowcount
        return flagged

    # ---------- baselines ----------

    def create_project_baseline(self, project_id: str, name: str) -> Optional[int]:
        """Snapshot planned dates/durations into the baseline columns."""
        if self.get_project(project_id) is None:
            return None
        con = self._conn()
        with transaction(con):
            cur = con.execute(
                """
                UPDATE project_phases
                SET baseline_start_date = start_date,
                    baseline_end_date = end_date,
                    baseline_duration_days = duration_days
                WHERE project_id = ?;
                """,
                (project_id,),
            )
            count = cur.rowcount
            cur = con.execute(
                """
                INSERT INTO project_baselines(project_id, baseline_name, created_at_utc, phase_count)
                VALUES (?, ?, ?, ?);
                """,
                (project_id, name, _utc_now(), count),
            )
        return int(cur.lastrowid)

    def list_baselines(self, project_id: str) -> List[Dict[str, Any]]:
        return self._fetch_all(
            """
            SELECT id, project_id, baseline_name, created_at_utc, phase_count
            FROM project_baselines WHERE project_id = ? ORDER BY id DESC;
            """,
            (project_id,),
        )

    # ---------- milestones ----------

    def list_milestones(self, project_id: Optional[str] = None) -> List[Milestone]:
        sql = """
            SELECT id, project_id, milestone_name, target_date, actual_date,
                   milestone_type, is_critical, completion_percentage, color
            FROM project_milestones
        """
        params: tuple = ()
        if project_id is not None:
            sql += " WHERE project_id = ?"
            params = (project_id,)
        sql += " ORDER BY target_date IS NULL, target_date, id;"
        return [self._to_milestone(r) for r in self._fetch_all(sql, params)]

    def add_milestone(self, milestone: Milestone) -> None:
        self._conn().execute(
            """
            INSERT INTO project_milestones(
                id, project_id, milestone_name, target_date, actual_date,
                milestone_type, is_critical, completion_percentage, color)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?);
            """,
            (milestone.id, milestone.project_id, milestone.name,
             _iso(milestone.target_date), _iso(milestone.actual_date),
             milestone.milestone_type, int(milestone.is_critical),
             milestone.completion_percentage, milestone.color),
        )
        self._commit()

    # ---------- internals ----------

    def _conn(self) -> sqlite3.Connection:
        # You can pass a raw sqlite3.Connection directly
        if isinstance(self._db, sqlite3.Connection):
            return self._db
        if hasattr(self._db, "conn") and isinstance(self._db.conn, sqlite3.Connection):
            return self._db.conn
        raise RuntimeError(
            "SQLiteScheduleRepository: could not obtain sqlite3.Connection from db wrapper (.conn)."
        )

    def _commit(self) -> None:
        # no-op on autocommit connections (Database opens with isolation_level=None)
        con = self._conn()
        if con.in_transaction:
            con.commit()

    def _fetch_all(self, sql: str, params: tuple = ()) -> List[Dict[str, Any]]:
        cur = self._conn().execute(sql, params)
        cols = [c[0] for c in cur.description]
        return [{cols[i]: row[i] for i in range(len(cols))} for row in cur.fetchall()]

    @staticmethod
    def _to_project(r: Dict[str, Any]) -> Project:
        return Project(
            id=str(r["id"]),
            code=r["code"] or "",
            name=r["name"] or "",
            status=r["status"] or "Active",
            pm_name=r.get("pm_name"),
            start_target=parse_date(r.get("start_target")),
            finish_target=parse_date(r.get("finish_target")),
            completion_percentage=int(r.get("completion_percentage") or 0),
        )

    @staticmethod
    def _to_phase(r: Dict[str, Any]) -> Phase:
        return Phase(
            id=str(r["id"]),
            project_id=str(r["project_id"]),
            name=r["name"] or "",
            start_date=parse_date(r["start_date"]),
            end_date=parse_date(r["end_date"]),
            actual_start_date=parse_date(r["actual_start_date"]),
            actual_end_date=parse_date(r["actual_end_date"]),
            baseline_start_date=parse_date(r["baseline_start_date"]),
            baseline_end_date=parse_date(r["baseline_end_date"]),
            duration_days=int(r["duration_days"] or 0),
            baseline_duration_days=int(r["baseline_duration_days"] or 0),
            completion_percentage=int(r["completion_percentage"] or 0),
            status=r["status"],
            priority=r["priority"],
            is_critical_path=bool(r["is_critical_path"]),
            resource_id=r["resource_id"],
            resource_name=r.get("resource_name"),
            effort_hours=float(r["effort_hours"] or 0),
            color=r["color"],
            project_code=r.get("project_code"),
            project_name=r.get("project_name"),
        )

    @staticmethod
    def _to_milestone(r: Dict[str, Any]) -> Milestone:
        return Milestone(
            id=str(r["id"]),
            project_id=str(r["project_id"]),
            name=r["milestone_name"] or "",
            target_date=parse_date(r["target_date"]),
            actual_date=parse_date(r["actual_date"]),
            milestone_type=r["milestone_type"],
            is_critical=bool(r["is_critical"]),
            completion_percentage=int(r["completion_percentage"] or 0),
            color=r["color"],
        )
