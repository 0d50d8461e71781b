# daylane/util/labels.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional

from .tz import local_datetime


def hour_labels(start_hour: int, end_hour: int) -> List[int]:
    """Hours drawn on the axis; the exclusive window end gets no row."""
    return list(range(int(start_hour), int(end_hour)))


def format_hour_label(h: int) -> str:
    # Plain 12h arithmetic, independent of DST.
    hh = ((h + 11) % 12) + 1
    ampm = "AM" if (h % 24) < 12 else "PM"
    return f"{hh} {ampm}"


def format_time(instant: dt.datetime, tz_name: Optional[str]) -> Optional[str]:
    local = local_datetime(instant, tz_name)
    if local is None:
        return None
    hh = ((local.hour + 11) % 12) + 1
    ampm = "AM" if local.hour < 12 else "PM"
    return f"{hh}:{local.minute:02d} {ampm}"


def time_range_label(start: dt.datetime, end: dt.datetime, tz_name: Optional[str]) -> Optional[str]:
    """E.g. "2:00 PM – 4:00 PM", suffixed with " (next day)" across midnight."""
    local_start = local_datetime(start, tz_name)
    local_end = local_datetime(end, tz_name)
    if local_start is None or local_end is None:
        return None
    next_day = local_end.date() != local_start.date()
    label = f"{format_time(start, tz_name)} – {format_time(end, tz_name)}"
    return label + (" (next day)" if next_day else "")
