# daylane/month.py
from __future__ import annotations

import calendar
import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from .jobs import is_cancelled, is_worker_no_show, job_details, job_start, job_timezone
from .util.tz import day_key

GRID_DAYS = 42          # six Sunday-first weeks
MAX_RAIL_PILLS = 2
MAX_DOTS = 3


@dataclass(frozen=True)
class DayRail:
    jobs: Tuple[Mapping[str, Any], ...]
    dot_count: int
    has_no_show: bool
    total: int


def month_range(year: int, month: int) -> Tuple[dt.date, dt.date]:
    """First and last calendar day of `month` (1-12)."""
    last = calendar.monthrange(year, month)[1]
    return dt.date(year, month, 1), dt.date(year, month, last)


def month_grid(year: int, month: int) -> List[dt.date]:
    first = dt.date(year, month, 1)
    # date.weekday(): Monday=0 .. Sunday=6; shift so the grid starts on Sunday.
    start = first - dt.timedelta(days=(first.weekday() + 1) % 7)
    return [start + dt.timedelta(days=i) for i in range(GRID_DAYS)]


def job_day_key(job: Mapping[str, Any], default_timezone: Optional[str] = "UTC") -> Optional[str]:
    """`job_date` when the document has one, else the start date in the job's zone."""
    jd = job_details(job)
    jdate = jd.get("job_date")
    if isinstance(jdate, str) and jdate.strip():
        return jdate.strip()
    return day_key(job_start(job), job_timezone(job, default_timezone))


def group_jobs_by_day(
    jobs: Iterable[Mapping[str, Any]],
    default_timezone: Optional[str] = "UTC",
) -> Dict[str, List[Mapping[str, Any]]]:
    by_day: Dict[str, List[Mapping[str, Any]]] = {}
    for job in jobs:
        if not isinstance(job, Mapping) or is_cancelled(job):
            continue
        key = job_day_key(job, default_timezone)
        if not key:
            continue
        by_day.setdefault(key, []).append(job)

    epoch = dt.datetime.min.replace(tzinfo=dt.timezone.utc)
    for key in by_day:
        by_day[key] = sorted(by_day[key], key=lambda j: job_start(j) or epoch)
    return by_day


def day_rail(jobs: Iterable[Mapping[str, Any]], limit: int = MAX_RAIL_PILLS) -> DayRail:
    live = [j for j in jobs if not is_cancelled(j)]
    return DayRail(
        jobs=tuple(live[:limit]),
        dot_count=min(len(live), MAX_DOTS),
        has_no_show=any(is_worker_no_show(j) for j in live),
        total=len(live),
    )
