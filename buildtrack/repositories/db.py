# Rev 0.1.0

"""SQLite connection, transactions & schema migrations (Rev 0.1.0)
- Connections run in autocommit mode (isolation_level=None) with WAL and
  foreign keys on; multi-statement writes go through ``transaction()``
- Schema files live in buildtrack/migrations and are applied in lexical order,
  each inside its own transaction, recorded in schema_migrations
"""
from __future__ import annotations
import sqlite3
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from ..utils.logging_setup import get_logger
from ..utils.paths import DB_PATH, MIGRATIONS_DIR

_log = get_logger("Database")

BUSY_TIMEOUT_MS = 5000


@contextmanager
def transaction(con: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
    """BEGIN ... COMMIT on an autocommit connection; ROLLBACK if the block raises."""
    if con.in_transaction:
        # a legacy-mode connection may have an implicit transaction open
        con.commit()
    con.execute("BEGIN;")
    try:
        yield con
    except BaseException:
        con.execute("ROLLBACK;")
        raise
    con.execute("COMMIT;")


class Database:
    def __init__(self, path: Path | str = DB_PATH) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.conn = sqlite3.connect(self.path, isolation_level=None, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        for pragma in ("journal_mode=WAL", "foreign_keys=ON", f"busy_timeout={BUSY_TIMEOUT_MS}"):
            self.conn.execute(f"PRAGMA {pragma};")
        self.conn.execute(
            "CREATE TABLE IF NOT EXISTS schema_migrations (filename TEXT PRIMARY KEY, applied_at TEXT NOT NULL)"
        )
        _log.info("SQLite open %s", self.path)

    def close(self) -> None:
        self.conn.close()

    # ---- schema
    def applied(self) -> set[str]:
        rows = self.conn.execute("SELECT filename FROM schema_migrations").fetchall()
        return {r[0] for r in rows}

    def pending(self, migrations_dir: Path = MIGRATIONS_DIR) -> List[Path]:
        done = self.applied()
        return [p for p in sorted(migrations_dir.glob("*.sql")) if p.name not in done]

    def schema_version(self) -> Optional[str]:
        """Filename of the newest applied migration, or None on a blank database."""
        row = self.conn.execute("SELECT MAX(filename) FROM schema_migrations").fetchone()
        return row[0] if row else None

    def run_migrations(self, migrations_dir: Path = MIGRATIONS_DIR) -> list[str]:
        todo = self.pending(migrations_dir)
        for p in todo:
            statements = p.read_text(encoding="utf-8")
            with transaction(self.conn) as con:
                # executescript() would COMMIT first; run statement by statement instead
                for stmt in _split_sql(statements):
                    con.execute(stmt)
                con.execute(
                    "INSERT INTO schema_migrations(filename, applied_at) VALUES(?, ?)",
                    (p.name, datetime.now(timezone.utc).isoformat()),
                )
            _log.info("Applied migration %s", p.name)
        if not todo:
            _log.debug("Schema up to date (%s)", self.schema_version())
        return [p.name for p in todo]


def _split_sql(script: str) -> Iterator[str]:
    """Yield complete statements from a migration script."""
    buf = ""
    for line in script.splitlines(keepends=True):
        if line.lstrip().startswith("--"):
            continue
        buf += line
        if sqlite3.complete_statement(buf):
            stmt = buf.strip()
            buf = ""
            if stmt:
                yield stmt
    if buf.strip():
        raise ValueError(f"incomplete SQL statement in migration: {buf.strip()[:60]!r}")
