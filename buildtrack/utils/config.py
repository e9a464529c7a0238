# Rev 0.1.0
# buildtrack/utils/config.py
import json
from pathlib import Path
from typing import Any, Dict, Optional

from ..models.view_settings import ViewSettings
from .logging_setup import get_logger
from .paths import config_dir

_log = get_logger(__name__)

_DEFAULTS: Dict[str, Any] = {
    "main_window": {
        "width": 1280,
        "height": 720,
        "is_maximized": False,
    },
    "ui": {
        "diagnostics_dock_visible": True
    },
    "gantt": ViewSettings().to_dict(),
}


def settings_file() -> Path:
    return config_dir() / "settings.json"


def _defaults() -> Dict[str, Any]:
    return json.loads(json.dumps(_DEFAULTS))


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    path = path or settings_file()
    if not path.exists():
        return _defaults()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        _log.warning("Unreadable settings file %s; using defaults", path)
        return _defaults()
    if not isinstance(data, dict):
        _log.warning("Settings file %s is not a JSON object; using defaults", path)
        return _defaults()
    return {**_defaults(), **data}


def save_settings(data: Dict[str, Any], path: Optional[Path] = None) -> None:
    path = path or settings_file()
    path.write_text(json.dumps(data, indent=2), encoding="utf-8")


def load_view_settings(path: Optional[Path] = None) -> ViewSettings:
    try:
        return ViewSettings.from_dict(load_settings(path).get("gantt"))
    except ValueError:
        _log.warning("Invalid gantt view settings; using defaults")
        return ViewSettings()


def save_view_settings(settings: ViewSettings, path: Optional[Path] = None) -> None:
    data = load_settings(path)
    data["gantt"] = settings.to_dict()
    save_settings(data, path)
    _log.debug("Saved gantt view settings: %s", data["gantt"])
