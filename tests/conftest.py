# Rev 0.1.0

"""Pytest fixtures for buildtrack (Rev 0.1.0)"""
from __future__ import annotations
from pathlib import Path

import pytest

from buildtrack.repositories.db import Database
from buildtrack.repositories.sqlite_schedule_repository import SQLiteScheduleRepository


@pytest.fixture()
def db(tmp_path: Path):
    database = Database(path=tmp_path / "test.db")
    try:
        database.run_migrations()
        yield database
    finally:
        database.close()


@pytest.fixture()
def db_conn(db):
    return db.conn


@pytest.fixture()
def repo(db) -> SQLiteScheduleRepository:
    return SQLiteScheduleRepository(db)
