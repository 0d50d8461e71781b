# daylane/util/timeparse.py
from __future__ import annotations

import datetime as dt
import re
from typing import Tuple

_HHMM_RE = re.compile(r"^(\d{1,2})(?::(\d{2}))?$")


def parse_hhmm(s: str) -> Tuple[int, int]:
    m = _HHMM_RE.match(s.strip())
    if not m:
        raise ValueError(f"Invalid HH:MM: {s!r}")
    hh = int(m.group(1))
    mm = int(m.group(2) or 0)
    if not (0 <= hh <= 24 and 0 <= mm <= 59) or (hh == 24 and mm):
        raise ValueError(f"Invalid HH:MM: {s!r}")
    return hh, mm


def parse_window(s: str) -> Tuple[int, int]:
    """Parse a display window like "07-23" or "07:00-23:00" into whole hours."""
    parts = s.split("-")
    if len(parts) != 2:
        raise ValueError("window must be like 07:00-23:00")
    sh, sm = parse_hhmm(parts[0])
    eh, em = parse_hhmm(parts[1])
    if sm or em:
        raise ValueError("window bounds must be whole hours")
    if eh <= sh:
        raise ValueError("window end must be after start")
    return sh, eh


def parse_date_yyyy_mm_dd(s: str) -> dt.date:
    return dt.datetime.strptime(s, "%Y-%m-%d").date()
