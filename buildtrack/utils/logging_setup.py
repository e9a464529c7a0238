# Rev 0.1.0

# buildtrack – logging setup (Rev 0.1.0)
# Root logger gets a rotating file + stdout; app modules log under "buildtrack.*".
# BUILDTRACK_LOG_LEVEL sets the global level, BUILDTRACK_DEBUG lists app
# namespaces to force to DEBUG (e.g. "gantt.bounds,gantt.layout").
from __future__ import annotations
import logging, os, sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import List

try:
    # Optional: pipe Qt messages into Python logging if Qt exists
    from PySide6.QtCore import qInstallMessageHandler, QtMsgType
    def _qt_handler(msg_type, context, message):
        lvl = {
            QtMsgType.QtDebugMsg: logging.DEBUG,
            QtMsgType.QtInfoMsg: logging.INFO,
            QtMsgType.QtWarningMsg: logging.WARNING,
            QtMsgType.QtCriticalMsg: logging.ERROR,
            QtMsgType.QtFatalMsg: logging.CRITICAL,
        }.get(msg_type, logging.INFO)
        logging.getLogger("qt").log(lvl, message)
except ImportError:
    qInstallMessageHandler = None  # headless tools and tests run without Qt

APP_NAME = "buildtrack"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"
MAX_BYTES = 5_000_000
BACKUP_COUNT = 7

_OWNED = "_buildtrack_handler"


def _state_dir(app: str = APP_NAME) -> Path:
    base = os.environ.get("XDG_STATE_HOME", os.path.expanduser("~/.local/state"))
    d = Path(base) / app / "logs"
    d.mkdir(parents=True, exist_ok=True)
    return d


def get_logger(name: str) -> logging.Logger:
    """Return a logger namespaced under the app root logger."""
    if name == APP_NAME or name.startswith(APP_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{APP_NAME}.{name}")


def _debug_namespaces() -> List[str]:
    raw = os.environ.get("BUILDTRACK_DEBUG", "")
    return [n.strip() for n in raw.split(",") if n.strip()]


def setup_logging(app_name: str = APP_NAME, *, console: bool = True) -> Path:
    """Install handlers on the root logger and return the log file path.

    Safe to call more than once: handlers from an earlier call are replaced.
    """
    level_name = os.environ.get("BUILDTRACK_LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logfile = _state_dir(app_name) / f"{app_name}.log"
    formatter = logging.Formatter(LOG_FORMAT, LOG_DATEFMT)

    root = logging.getLogger()
    for h in [h for h in root.handlers if getattr(h, _OWNED, False)]:
        root.removeHandler(h)
        h.close()
    root.setLevel(level)

    handlers: List[logging.Handler] = [
        RotatingFileHandler(logfile, maxBytes=MAX_BYTES, backupCount=BACKUP_COUNT, encoding="utf-8"),
    ]
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))
    for h in handlers:
        h.setFormatter(formatter)
        setattr(h, _OWNED, True)
        root.addHandler(h)

    for ns in _debug_namespaces():
        get_logger(ns).setLevel(logging.DEBUG)
    if _debug_namespaces():
        # namespaced DEBUG records must get past the handlers
        for h in handlers:
            h.setLevel(logging.DEBUG)
    else:
        for h in handlers:
            h.setLevel(level)

    # Uncaught exceptions → log as ERROR
    def _excepthook(exctype, value, tb):
        logging.getLogger("unhandled").exception("Uncaught exception", exc_info=(exctype, value, tb))
        sys.__excepthook__(exctype, value, tb)
    sys.excepthook = _excepthook

    if qInstallMessageHandler is not None:
        qInstallMessageHandler(_qt_handler)

    get_logger(__name__).info("Logging initialized at %s; file: %s", level_name, logfile)
    return logfile


def current_logfile() -> Path | None:
    """Path of the rotating file installed by setup_logging(), if any."""
    for h in logging.getLogger().handlers:
        if getattr(h, _OWNED, False) and isinstance(h, RotatingFileHandler):
            return Path(h.baseFilename)
    return None
