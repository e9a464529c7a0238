# Rev 0.1.0
"""Gantt view settings.

ViewSettings is an immutable value: every user action (zoom click, toggle,
filter chip) produces a new instance through the ``with_*`` helpers, and the
engine recomputes its outputs from that fresh value.
"""
from __future__ import annotations
from dataclasses import dataclass, field, replace, asdict
from typing import Any, Dict

from .types import GROUP_MODES, ZOOM_LEVELS, GroupBy, ZoomLevel

TOGGLES = (
    "show_critical_path",
    "show_baselines",
    "show_progress",
    "show_milestones",
    "show_dependencies",
)


@dataclass(frozen=True)
class ViewSettings:
    zoom_level: ZoomLevel = "weeks"
    show_critical_path: bool = True
    show_baselines: bool = False
    show_progress: bool = True
    show_milestones: bool = True
    show_dependencies: bool = True
    group_by: GroupBy = "none"
    filter_status: frozenset[str] = field(default_factory=frozenset)
    filter_resources: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        if self.zoom_level not in ZOOM_LEVELS:
            raise ValueError(f"unknown zoom level: {self.zoom_level!r}")
        if self.group_by not in GROUP_MODES:
            raise ValueError(f"unknown grouping mode: {self.group_by!r}")
        # accept any iterable for the filters but store them frozen
        object.__setattr__(self, "filter_status", frozenset(self.filter_status))
        object.__setattr__(self, "filter_resources", frozenset(self.filter_resources))

    # ---- derivations
    def with_zoom(self, zoom_level: ZoomLevel) -> "ViewSettings":
        return replace(self, zoom_level=zoom_level)

    def with_group_by(self, group_by: GroupBy) -> "ViewSettings":
        return replace(self, group_by=group_by)

    def with_toggle(self, name: str, value: bool) -> "ViewSettings":
        if name not in TOGGLES:
            raise ValueError(f"unknown toggle: {name!r}")
        return replace(self, **{name: bool(value)})

    def with_status_filter(self, status: str) -> "ViewSettings":
        return replace(self, filter_status=self.filter_status | {status})

    def without_status_filter(self, status: str) -> "ViewSettings":
        return replace(self, filter_status=self.filter_status - {status})

    def with_resource_filter(self, resource_id: str) -> "ViewSettings":
        return replace(self, filter_resources=self.filter_resources | {resource_id})

    def without_resource_filter(self, resource_id: str) -> "ViewSettings":
        return replace(self, filter_resources=self.filter_resources - {resource_id})

    def cleared_filters(self) -> "ViewSettings":
        return replace(self, filter_status=frozenset(), filter_resources=frozenset())

    # ---- serialization for the settings file
    def to_dict(self) -> Dict[str, Any]:
        d = asdict(self)
        d["filter_status"] = sorted(self.filter_status)
        d["filter_resources"] = sorted(self.filter_resources)
        return d

    @classmethod
    def from_dict(cls, data: Dict[str, Any] | None) -> "ViewSettings":
        """Build from a persisted dict; unknown keys are ignored, missing keys default.

        Raises ValueError when the value or a filter list has the wrong shape.
        """
        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ValueError(f"view settings must be a mapping, got {type(data).__name__}")
        kwargs: Dict[str, Any] = {}
        for key in ("zoom_level", "group_by"):
            if data.get(key):
                kwargs[key] = data[key]
        for key in TOGGLES:
            if key in data:
                kwargs[key] = bool(data[key])
        for key in ("filter_status", "filter_resources"):
            values = data.get(key) or ()
            if not isinstance(values, (list, tuple)):
                raise ValueError(f"{key} must be a list, got {type(values).__name__}")
            kwargs[key] = frozenset(str(v) for v in values)
        return cls(**kwargs)
