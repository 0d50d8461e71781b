# daylane/slots.py
from __future__ import annotations

import datetime as dt
from typing import List, Optional

FIRST_SLOT_HOUR = 7
LAST_SLOT_HOUR = 22


def next_bookable_hour(now: dt.datetime) -> int:
    """Round `now` up to the hour, then add one hour of lead time.

    Counted from `now`'s midnight, so late-evening values can exceed 23.
    """
    n = now
    if n.minute or n.second or n.microsecond:
        n = n.replace(minute=0, second=0, microsecond=0) + dt.timedelta(hours=1)
    day_start = now.replace(hour=0, minute=0, second=0, microsecond=0)
    return int((n + dt.timedelta(hours=1) - day_start).total_seconds() // 3600)


def time_slots(day: dt.date, now: Optional[dt.datetime] = None) -> List[str]:
    """Hourly "HH:00" booking slots for `day`; today's list starts after the lead time."""
    now = now or dt.datetime.now()
    first = FIRST_SLOT_HOUR
    if day == now.date():
        first = max(next_bookable_hour(now), FIRST_SLOT_HOUR)
    if first > LAST_SLOT_HOUR:
        return []
    return [f"{h:02d}:00" for h in range(first, LAST_SLOT_HOUR + 1)]
