# daylane/util/tz.py
from __future__ import annotations

import datetime as dt
import re
from typing import Any, Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from daylane.model import CivilTime

_UTC_ALIASES = frozenset({"utc", "z", "gmt", "utc0", "utc+0", "etc/utc"})
_LOCAL_ALIASES = frozenset({"local", "system", "native"})
_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")
_ISO_FRACTION_RE = re.compile(r"(\d{2}:\d{2}:\d{2})[.,](\d{1,9})(?!\d)")
_ISO_COMPACT_OFFSET_RE = re.compile(r"(\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)([+-])(\d{2})(\d{2})$")


def normalize_tz_name(name: Optional[str]) -> str:
    """Canonical spelling of a zone name.

    Blank or missing zones mean UTC (jobs without a zone are stored as UTC
    upstream). UTC aliases collapse to "UTC", machine-local aliases to
    "local"; IANA names and fixed offsets ("+02:00", "-0500") pass through.
    """
    s = "" if name is None else str(name).strip()
    if not s or s.lower() in _UTC_ALIASES:
        return "UTC"
    if s.lower() in _LOCAL_ALIASES:
        return "local"
    return s


def _fixed_offset(tz_name: str) -> Optional[dt.tzinfo]:
    m = _OFFSET_RE.match(tz_name)
    if m is None:
        return None
    sign, hours, minutes = m.group(1), int(m.group(2)), int(m.group(3))
    if hours > 23 or minutes > 59:
        raise ValueError(f"Invalid timezone offset: {tz_name!r}")
    delta = dt.timedelta(hours=hours, minutes=minutes)
    return dt.timezone(-delta if sign == "-" else delta)


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """tzinfo for `name`; ValueError when the zone is unknown."""
    tz_name = normalize_tz_name(name)
    if tz_name == "UTC":
        return dt.timezone.utc
    if tz_name == "local":
        return dt.datetime.now().astimezone().tzinfo or dt.timezone.utc

    fixed = _fixed_offset(tz_name)
    if fixed is not None:
        return fixed
    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError, OSError) as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def try_resolve_tz(name: Optional[str]) -> Optional[dt.tzinfo]:
    try:
        return resolve_tz(name)
    except ValueError:
        return None


def to_instant(value: Any) -> Optional[dt.datetime]:
    """Coerce an upstream timestamp into an aware datetime.

    Accepts aware/naive datetimes (naive is read as UTC), epoch milliseconds
    and ISO-8601 strings. Anything else, including bools, returns None.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, dt.datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=dt.timezone.utc)
        return value
    if isinstance(value, (int, float)):
        try:
            return dt.datetime.fromtimestamp(float(value) / 1000.0, tz=dt.timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(value, str):
        s = _canonical_iso(value)
        if not s:
            return None
        try:
            parsed = dt.datetime.fromisoformat(s)
        except ValueError:
            return None
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=dt.timezone.utc)
        return parsed
    return None


def _canonical_iso(value: str) -> str:
    """Rewrite ISO forms `datetime.fromisoformat` rejects before Python 3.11.

    "Z" suffix -> "+00:00", 1-9 digit fractions -> microseconds, "+0530" -> "+05:30".
    """
    s = value.strip()
    if not s:
        return s
    if s[-1] in {"Z", "z"}:
        s = s[:-1] + "+00:00"
    s = _ISO_FRACTION_RE.sub(lambda m: f"{m.group(1)}.{m.group(2)[:6].ljust(6, '0')}", s)
    return _ISO_COMPACT_OFFSET_RE.sub(r"\1\2\3:\4", s)


def local_datetime(instant: dt.datetime, zone: Optional[str], fallback: Optional[str] = "UTC") -> Optional[dt.datetime]:
    """`instant` on a wall clock in `zone` (else `fallback`, else UTC).

    None when the local time falls outside the datetime range, e.g. 9999-12-31
    late evening UTC viewed from a zone east of UTC.
    """
    tz = try_resolve_tz(zone) or try_resolve_tz(fallback) or dt.timezone.utc
    try:
        return instant.astimezone(tz)
    except (OverflowError, ValueError):
        return None


def civil_time_in_zone(instant: dt.datetime, zone: Optional[str], fallback: Optional[str] = "UTC") -> Optional[CivilTime]:
    """Hour and minute of `instant` as observed on a wall clock in `zone`.

    Never raises: an unresolvable `zone` falls back to `fallback`, and an
    unresolvable fallback to UTC. Returns None for unrepresentable local times.
    """
    local = local_datetime(instant, zone, fallback)
    if local is None:
        return None
    return CivilTime(hour=local.hour, minute=local.minute)


def civil_date_in_zone(instant: dt.datetime, zone: Optional[str], fallback: Optional[str] = "UTC") -> Optional[dt.date]:
    local = local_datetime(instant, zone, fallback)
    return local.date() if local is not None else None


def day_key(instant: Optional[dt.datetime], zone: Optional[str]) -> Optional[str]:
    if instant is None:
        return None
    d = civil_date_in_zone(instant, zone)
    return d.isoformat() if d is not None else None
