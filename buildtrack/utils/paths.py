# Rev 0.1.0

"""Paths and XDG helpers (Rev 0.1.0)
- Logs/state/config under the XDG base directories
- Schedule DB in the checkout's ./data/buildtrack.db unless BUILDTRACK_DB is set
- Exports default to BUILDTRACK_EXPORT_DIR, else the current directory
- SQL migrations ship inside the package
"""
from __future__ import annotations
import os
from pathlib import Path


APP_NAME = "buildtrack"


def _xdg(var: str, *fallback: str) -> Path:
    return Path(os.environ.get(var, Path.home().joinpath(*fallback)))


XDG_DATA_HOME = _xdg("XDG_DATA_HOME", ".local", "share")
XDG_STATE_HOME = _xdg("XDG_STATE_HOME", ".local", "state")
XDG_CONFIG_HOME = _xdg("XDG_CONFIG_HOME", ".config")

STATE_DIR = XDG_STATE_HOME / APP_NAME
LOGS_DIR = STATE_DIR / "logs"
CONFIG_DIR = XDG_CONFIG_HOME / APP_NAME

PACKAGE_DIR = Path(__file__).resolve().parents[1]
PROJECT_DATA_DIR = (PACKAGE_DIR.parent / "data").resolve()
MIGRATIONS_DIR = PACKAGE_DIR / "migrations"


def db_path() -> Path:
    """Schedule database location; BUILDTRACK_DB wins over the checkout default."""
    env = os.environ.get("BUILDTRACK_DB")
    return Path(env).expanduser() if env else PROJECT_DATA_DIR / "buildtrack.db"


def export_dir() -> Path:
    env = os.environ.get("BUILDTRACK_EXPORT_DIR")
    return Path(env).expanduser() if env else Path.cwd()


DB_PATH = db_path()


def ensure_dirs() -> None:
    for p in (STATE_DIR, LOGS_DIR, CONFIG_DIR, db_path().parent):
        p.mkdir(parents=True, exist_ok=True)


def config_dir() -> Path:
    CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    return CONFIG_DIR
