#!/usr/bin/env python3
from __future__ import annotations

import argparse
import datetime as dt
import json
import random
import statistics
import sys
import time
from typing import List, Tuple

from daylane.config import window_preset
from daylane.engine import layout_day
from daylane.model import RawEvent
from daylane.validate import validate_layout


def _die(msg: str, rc: int = 2) -> int:
    print(f"[daylane-bench] ERROR: {msg}", file=sys.stderr)
    return rc


def _now_ns() -> int:
    return time.perf_counter_ns()


def _time_one(fn, *, repeats: int, warmup: int) -> Tuple[float, float, float]:
    for _ in range(max(0, warmup)):
        fn()

    samples_ms: List[float] = []
    for _ in range(max(1, repeats)):
        t0 = _now_ns()
        fn()
        t1 = _now_ns()
        samples_ms.append((t1 - t0) / 1_000_000.0)

    return (min(samples_ms), statistics.fmean(samples_ms), max(samples_ms))


def random_day_events(n: int, *, seed: int, day: dt.date) -> List[RawEvent]:
    """Deterministic events on `day` (UTC), 15-minute aligned, 15 min to 4 h long."""
    rng = random.Random(seed)
    base = dt.datetime(day.year, day.month, day.day, tzinfo=dt.timezone.utc)
    out: List[RawEvent] = []
    for i in range(n):
        start = base + dt.timedelta(minutes=15 * rng.randrange(0, 96))
        end = start + dt.timedelta(minutes=15 * rng.randrange(1, 17))
        out.append(RawEvent(id=f"bench-{i:06d}", start=start, end=end, timezone="UTC"))
    return out


def main(argv: List[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="daylane-bench", description="Micro-benchmark the day layout engine.")
    ap.add_argument("--n", type=int, default=250, help="Number of events per day")
    ap.add_argument("--seed", type=int, default=1, help="RNG seed for event generation")
    ap.add_argument("--repeats", type=int, default=5, help="Measurement repeats (min/avg/max over repeats)")
    ap.add_argument("--warmup", type=int, default=1, help="Warmup runs before measuring")
    ap.add_argument("--preset", default="desktop", help="Window preset (desktop|mobile)")
    ns = ap.parse_args(argv)

    if ns.n < 0:
        return _die("--n must be >= 0")
    try:
        window = window_preset(ns.preset, axis_timezone="UTC")
    except ValueError as e:
        return _die(str(e))

    events = random_day_events(ns.n, seed=ns.seed, day=dt.date(2024, 1, 15))
    result = layout_day(events, window)
    errs = validate_layout(result)
    if errs:
        return _die(f"layout invalid: {errs[0]}", rc=3)

    mn, avg, mx = _time_one(lambda: layout_day(events, window), repeats=ns.repeats, warmup=ns.warmup)
    report = {
        "n": ns.n,
        "preset": ns.preset,
        "blocks": len(result.blocks),
        "badges": len(result.overflow_badges),
        "early": result.early_chips.total,
        "late": result.late_chips.total,
        "layout_ms": {"min": round(mn, 3), "avg": round(avg, 3), "max": round(mx, 3)},
    }
    print(json.dumps(report, sort_keys=True))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
