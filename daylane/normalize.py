# daylane/normalize.py
from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from .model import DroppedEvent, NormalizedEvent, RawEvent, WindowConfig
from .util.console import obs_warn
from .util.tz import civil_time_in_zone, normalize_tz_name, to_instant, try_resolve_tz


def _event_zone(event: RawEvent, axis_tz: str) -> str:
    if event.timezone is None or not str(event.timezone).strip():
        return axis_tz
    zone = normalize_tz_name(event.timezone)
    if try_resolve_tz(zone) is None:
        obs_warn("normalize", f"unknown timezone id={event.id!r} tz={event.timezone!r}; using axis {axis_tz!r}")
        return axis_tz
    return zone


def normalize_event(event: RawEvent, window: WindowConfig) -> Tuple[Optional[NormalizedEvent], Optional[DroppedEvent]]:
    start = to_instant(event.start)
    if start is None:
        return None, DroppedEvent(event_id=str(event.id), reason="missing or unparseable start")
    end = to_instant(event.end)
    if end is None:
        return None, DroppedEvent(event_id=str(event.id), reason="missing or unparseable end")

    axis_tz = normalize_tz_name(window.axis_timezone)
    zone = _event_zone(event, axis_tz)

    s_civil = civil_time_in_zone(start, zone, fallback=axis_tz)
    if s_civil is None:
        return None, DroppedEvent(event_id=str(event.id), reason="start out of representable range")
    e_civil = civil_time_in_zone(end, zone, fallback=axis_tz)
    if e_civil is None:
        return None, DroppedEvent(event_id=str(event.id), reason="end out of representable range")

    s = s_civil.hour_float
    e = e_civil.hour_float
    # Single cross-midnight correction; spans over 24h are not representable.
    if e <= s:
        e += 24

    return NormalizedEvent(event=event, timezone=zone, start_hour=s, end_hour=e), None


def normalize_events(
    events: Iterable[RawEvent],
    window: WindowConfig,
) -> Tuple[Tuple[NormalizedEvent, ...], Tuple[DroppedEvent, ...]]:
    """Hour-float events sorted by (start_hour, end_hour, id), plus the drops."""
    kept: List[NormalizedEvent] = []
    dropped: List[DroppedEvent] = []
    for ev in events:
        ne, drop = normalize_event(ev, window)
        if drop is not None:
            obs_warn("normalize", f"dropped event id={drop.event_id!r}: {drop.reason}")
            dropped.append(drop)
            continue
        kept.append(ne)  # type: ignore[arg-type]

    kept.sort(key=lambda x: x.sort_key())
    return tuple(kept), tuple(dropped)
