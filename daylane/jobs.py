# daylane/jobs.py
from __future__ import annotations

import datetime as dt
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from .model import RawEvent
from .util.console import obs_warn
from .util.duration import job_duration_minutes
from .util.tz import normalize_tz_name, to_instant

CANCELLED = "cancelled"
WORKER_NO_SHOW = "worker_no_show"


def job_details(job: Mapping[str, Any]) -> Mapping[str, Any]:
    """`job_details` map, read from the job itself or its raw document."""
    jd = job.get("job_details")
    if isinstance(jd, Mapping):
        return jd
    raw = job.get("raw")
    if isinstance(raw, Mapping) and isinstance(raw.get("job_details"), Mapping):
        return raw["job_details"]
    return {}


def _first_instant(*values: Any) -> Optional[dt.datetime]:
    for v in values:
        inst = to_instant(v)
        if inst is not None:
            return inst
    return None


def job_start(job: Mapping[str, Any]) -> Optional[dt.datetime]:
    jd = job_details(job)
    return _first_instant(job.get("start"), jd.get("job_start_timestamp"), jd.get("job_start_iso"))


def job_end(job: Mapping[str, Any]) -> Optional[dt.datetime]:
    jd = job_details(job)
    return _first_instant(job.get("end"), jd.get("job_end_timestamp"), jd.get("job_end_iso"))


def job_status(job: Mapping[str, Any]) -> str:
    jd = job_details(job)
    return str(jd.get("status") or job.get("status") or "").strip().lower()


def is_cancelled(job: Mapping[str, Any]) -> bool:
    return job_status(job) == CANCELLED


def job_issue(job: Mapping[str, Any]) -> Optional[Mapping[str, Any]]:
    issue = job.get("issue")
    if not isinstance(issue, Mapping):
        raw = job.get("raw")
        issue = raw.get("issue") if isinstance(raw, Mapping) else None
    return issue if isinstance(issue, Mapping) else None


def is_worker_no_show(job: Mapping[str, Any]) -> bool:
    issue = job_issue(job)
    return issue is not None and issue.get("tag") == WORKER_NO_SHOW


def job_service(jd: Mapping[str, Any]) -> str:
    services = jd.get("services_requested")
    if isinstance(services, Sequence) and not isinstance(services, str) and services:
        if services[0]:
            return str(services[0])
    return str(jd.get("service") or "Job")


def job_workers(jd: Mapping[str, Any]) -> int:
    for key in ("workers", "workers_required", "num_workers", "requested_workers", "headcount"):
        v = jd.get(key)
        if isinstance(v, bool) or v is None:
            continue
        try:
            n = int(v)
        except (TypeError, ValueError):
            continue
        if n:
            return n
    return 1


def job_city_state(jd: Mapping[str, Any]) -> str:
    """City and state only; the street address is never shown on the timeline."""
    address = jd.get("address") if isinstance(jd.get("address"), Mapping) else {}
    location = jd.get("location") if isinstance(jd.get("location"), Mapping) else {}
    city = address.get("city") or jd.get("city") or location.get("city")
    state = address.get("state") or jd.get("state") or location.get("region") or location.get("state")
    return ", ".join(str(x) for x in (city, state) if x).strip()


def job_timezone(job: Mapping[str, Any], default: Optional[str] = None) -> Optional[str]:
    jd = job_details(job)
    tz = jd.get("timezone") or job.get("timezone") or job.get("tz") or default
    return normalize_tz_name(tz) if tz else None


def job_to_event(job: Mapping[str, Any], default_timezone: Optional[str] = None) -> RawEvent:
    """
    Build a RawEvent from a job document.

    A missing end is derived from start + duration. A missing start is kept
    as None so the engine reports the job as dropped rather than failing here.
    """
    jd = job_details(job)
    start = job_start(job)
    end = job_end(job)
    duration_min = job_duration_minutes(jd, start, end)
    if end is None and start is not None:
        try:
            end = start + dt.timedelta(minutes=duration_min)
        except OverflowError:
            obs_warn("jobs", f"cannot derive end for job id={job.get('id')!r}: past datetime range")

    meta: Dict[str, Any] = {
        "service": job_service(jd),
        "workers": job_workers(jd),
        "city_state": job_city_state(jd),
        "duration_min": duration_min,
        "status": job_status(job) or "scheduled",
        "worker_no_show": is_worker_no_show(job),
    }
    return RawEvent(
        id=str(job.get("id") or ""),
        start=start,
        end=end,
        timezone=job_timezone(job, default_timezone),
        meta=meta,
    )


def jobs_to_events(jobs: Iterable[Mapping[str, Any]], default_timezone: Optional[str] = None) -> List[RawEvent]:
    """Convert job documents to events, skipping cancelled jobs, ordered by start."""
    out: List[RawEvent] = []
    for job in jobs:
        if not isinstance(job, Mapping):
            obs_warn("jobs", f"skipping non-object job record: {type(job).__name__}")
            continue
        if is_cancelled(job):
            continue
        out.append(job_to_event(job, default_timezone))

    epoch = dt.datetime.min.replace(tzinfo=dt.timezone.utc)
    out.sort(key=lambda e: (e.start if isinstance(e.start, dt.datetime) else epoch, e.id))
    return out


def axis_timezone_for(events: Sequence[RawEvent], default: str = "UTC") -> str:
    """Zone of the first event, else `default`."""
    for ev in events:
        if ev.timezone:
            return normalize_tz_name(ev.timezone)
        break
    return normalize_tz_name(default)
