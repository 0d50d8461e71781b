# daylane/config.py
from __future__ import annotations

import os
from dataclasses import replace
from typing import Optional

from .model import WindowConfig
from .util.tz import normalize_tz_name

DAY_START = 7
WINDOW_END = 23     # exclusive; the last labelled row is 10 PM
GAP_PX = 4

DESKTOP_WINDOW = WindowConfig(
    start_hour=DAY_START,
    end_hour=WINDOW_END,
    axis_timezone="UTC",
    row_height_px=44,
    max_visible_columns=3,
    column_gap_px=GAP_PX,
)

MOBILE_WINDOW = WindowConfig(
    start_hour=DAY_START,
    end_hour=WINDOW_END,
    axis_timezone="UTC",
    row_height_px=36,
    max_visible_columns=2,
    column_gap_px=GAP_PX,
)

PRESETS = {
    "desktop": DESKTOP_WINDOW,
    "mobile": MOBILE_WINDOW,
}


def default_axis_tz() -> str:
    return normalize_tz_name(os.getenv("DAYLANE_TZ", "UTC"))


def window_preset(name: str = "desktop", *, axis_timezone: Optional[str] = None, **overrides) -> WindowConfig:
    """Named preset with the axis timezone (and any other field) swapped in.

    Raises ValueError for unknown preset names and InvalidWindowConfig for bad overrides.
    """
    key = (name or "").strip().lower()
    if key not in PRESETS:
        raise ValueError(f"Unknown window preset: {name!r} (expected one of {sorted(PRESETS)})")
    tz = normalize_tz_name(axis_timezone) if axis_timezone else default_axis_tz()
    return replace(PRESETS[key], axis_timezone=tz, **overrides)
