# daylane/util/duration.py
from __future__ import annotations

import datetime as dt
from typing import Any, Mapping, Optional

DEFAULT_DURATION_MIN = 120
MIN_INFERRED_DURATION_MIN = 30


def _as_number(v: Any) -> Optional[float]:
    if v is None or isinstance(v, bool):
        return None
    try:
        f = float(v)
    except (TypeError, ValueError):
        return None
    if f != f:  # NaN
        return None
    return f


def job_duration_minutes(
    details: Mapping[str, Any],
    start: Optional[dt.datetime],
    end: Optional[dt.datetime],
) -> int:
    """
    Duration precedence for a job document:
      1) duration_minutes
      2) duration_hours / estimated_duration_hours / duration (hours)
      3) end - start, floored at 30 minutes
      4) 120 minutes
    """
    mins = _as_number(details.get("duration_minutes"))
    if mins:
        return int(mins)

    for key in ("duration_hours", "estimated_duration_hours", "duration"):
        hrs = _as_number(details.get(key))
        if hrs is not None and (hrs or key == "duration"):
            return int(round(hrs * 60))

    if start is not None and end is not None:
        return max(MIN_INFERRED_DURATION_MIN, int(round((end - start).total_seconds() / 60)))
    return DEFAULT_DURATION_MIN


def format_duration(mins: int) -> str:
    h, m = divmod(int(mins), 60)
    if h and m:
        return f"{h}h {m}m"
    if h:
        return f"{h}h"
    return f"{m}m"
