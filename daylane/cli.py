from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .api import layout_jobs, load_jobs_from_json
from .config import PRESETS
from .model import InvalidWindowConfig
from .payload import dumps_payload, layout_to_payload
from .util.timeparse import parse_date_yyyy_mm_dd, parse_window
from .util.tz import normalize_tz_name, resolve_tz
from .validate import validate_layout


def main(argv: list[str] | None = None) -> None:
    default_out = os.path.join("build", "daylane_layout.json")
    ap = argparse.ArgumentParser(
        description="Lay out one day of booked jobs on a timeline (blocks, overflow badges, early/late chips)."
    )
    ap.add_argument("--jobs", required=True, help="Jobs JSON path (a list, or an object with a 'jobs' list)")
    ap.add_argument("--date", default=None, help="Keep only jobs starting on this day, YYYY-MM-DD in the axis timezone")
    ap.add_argument(
        "--tz",
        default=None,
        help="Axis timezone (default: first job's timezone, else env DAYLANE_TZ or 'UTC')",
    )
    ap.add_argument("--preset", default="desktop", choices=sorted(PRESETS), help="Window preset (default: desktop)")
    ap.add_argument("--window", default=None, help="Display window, e.g. 07:00-23:00 (default: preset window)")
    ap.add_argument("--max-columns", type=int, default=None, help="Visible lanes per cluster before '+N more'")
    ap.add_argument("--out", default=default_out, help="Output JSON path (default: ./build/daylane_layout.json)")
    ap.add_argument("--pretty", action="store_true", help="Pretty JSON output")
    ap.add_argument("--check", action="store_true", help="Validate layout invariants; exit non-zero on violation")

    args = ap.parse_args(argv)

    tz_name = None
    if args.tz:
        tz_name = normalize_tz_name(args.tz)
        try:
            resolve_tz(tz_name)
        except ValueError as e:
            raise SystemExit(f"Invalid --tz value: {e}")

    day = None
    if args.date:
        try:
            day = parse_date_yyyy_mm_dd(args.date).isoformat()
        except ValueError as e:
            raise SystemExit(f"Invalid --date value: {e}")

    overrides = {}
    if args.window:
        try:
            overrides["start_hour"], overrides["end_hour"] = parse_window(args.window)
        except ValueError as e:
            raise SystemExit(f"Invalid --window value: {e}")
    if args.max_columns is not None:
        overrides["max_visible_columns"] = int(args.max_columns)

    try:
        jobs = load_jobs_from_json(Path(args.jobs))
    except (OSError, ValueError) as e:
        raise SystemExit(f"Failed to load jobs: {e}")

    try:
        result, window = layout_jobs(
            jobs,
            preset=args.preset,
            axis_timezone=tz_name,
            day=day,
            **overrides,
        )
    except InvalidWindowConfig as e:
        raise SystemExit(f"Invalid window: {e}")

    if args.check:
        errs = validate_layout(result)
        if errs:
            for msg in errs:
                print(f"[daylane] ERROR: {msg}", file=sys.stderr)
            raise SystemExit(3)

    if result.dropped:
        print(f"[daylane] WARN: dropped {len(result.dropped)} job(s) with unusable start/end", file=sys.stderr)

    out_path = os.path.abspath(args.out)
    try:
        Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise SystemExit(f"Cannot create output directory '{Path(out_path).parent}': {e}")
    with open(out_path, "w", encoding="utf-8") as f:
        f.write(dumps_payload(layout_to_payload(result, window), pretty=args.pretty))
        f.write("\n")

    print(out_path)


if __name__ == "__main__":
    main()
