"""daylane.api

Stable *library* entrypoint for daylane.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from daylane.config import DESKTOP_WINDOW, MOBILE_WINDOW, default_axis_tz, window_preset
from daylane.engine import layout_day
from daylane.geometry import hour_rows, skeleton_blocks
from daylane.jobs import axis_timezone_for, job_to_event, jobs_to_events
from daylane.model import (
    BoundaryChip,
    ChipRow,
    InvalidWindowConfig,
    LayoutBlock,
    LayoutResult,
    OverflowBadge,
    RawEvent,
    WindowConfig,
)
from daylane.month import day_rail, group_jobs_by_day, month_grid, month_range
from daylane.payload import dumps_payload, layout_to_payload
from daylane.slots import time_slots
from daylane.util.tz import civil_time_in_zone, day_key, to_instant
from daylane.validate import LayoutValidationError, assert_valid_layout, validate_layout

JsonPath = Union[str, Path]
Job = Mapping[str, Any]


def load_jobs_from_json(path: JsonPath) -> List[Dict[str, Any]]:
    """Load job documents from a JSON file: a list, or an object with a "jobs" list."""
    p = Path(path)
    obj = json.loads(p.read_text(encoding="utf-8", errors="replace"))
    if isinstance(obj, dict):
        obj = obj.get("jobs")
    if not isinstance(obj, list):
        raise ValueError("jobs JSON must be a list or an object with a 'jobs' list")
    return [j for j in obj if isinstance(j, dict)]


def layout_jobs(
    jobs: Iterable[Job],
    *,
    preset: str = "desktop",
    axis_timezone: Optional[str] = None,
    day: Optional[str] = None,
    **overrides: Any,
) -> tuple[LayoutResult, WindowConfig]:
    """Lay out job documents with a named window preset.

    The axis timezone defaults to the first job's zone. When `day` (YYYY-MM-DD)
    is given, only jobs starting on that civil day in the axis timezone are kept.
    """
    events = jobs_to_events(jobs, default_timezone=axis_timezone)
    tz = axis_timezone or axis_timezone_for(events, default=default_axis_tz())
    window = window_preset(preset, axis_timezone=tz, **overrides)
    if day:
        events = [e for e in events if day_key(to_instant(e.start), tz) == day]
    return layout_day(events, window), window


__all__ = [
    "BoundaryChip",
    "ChipRow",
    "DESKTOP_WINDOW",
    "InvalidWindowConfig",
    "LayoutBlock",
    "LayoutResult",
    "LayoutValidationError",
    "MOBILE_WINDOW",
    "OverflowBadge",
    "RawEvent",
    "WindowConfig",
    "assert_valid_layout",
    "civil_time_in_zone",
    "day_rail",
    "dumps_payload",
    "group_jobs_by_day",
    "hour_rows",
    "job_to_event",
    "jobs_to_events",
    "layout_day",
    "layout_jobs",
    "layout_to_payload",
    "load_jobs_from_json",
    "month_grid",
    "month_range",
    "skeleton_blocks",
    "time_slots",
    "validate_layout",
    "window_preset",
]
