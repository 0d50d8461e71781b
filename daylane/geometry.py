# daylane/geometry.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .model import WindowConfig
from .util.labels import format_hour_label, hour_labels

# Hour gridlines sit at the middle of each row, so event edges are offset half a row.
ROW_CENTER_OFFSET = 0.5
MIN_BLOCK_HEIGHT_PX = 1.0

BADGE_INSET_PX = 4.0
BADGE_HEIGHT_PX = 24.0

SKELETON_MIN_HEIGHT_PX = 12.0
_SKELETON_DESKTOP = ((9, 1.1), (13, 1.3), (16, 1.0))
_SKELETON_MOBILE = ((9, 1.0), (13, 1.0), (16, 0.8))


@dataclass(frozen=True)
class HourRow:
    hour: int
    label: str
    top_px: float
    height_px: float
    line_px: float


@dataclass(frozen=True)
class SkeletonBlock:
    top_px: float
    height_px: float


def top_px(hour_float: float, window: WindowConfig) -> float:
    return (hour_float - window.start_hour + ROW_CENTER_OFFSET) * window.row_height_px


def height_px(clipped_start: float, clipped_end: float, window: WindowConfig) -> float:
    return max(MIN_BLOCK_HEIGHT_PX, top_px(clipped_end, window) - top_px(clipped_start, window))


def column_geometry(column_index: int, shown_columns: int, window: WindowConfig) -> Tuple[float, float, float, float]:
    """(left_percent, width_percent, left_offset_px, width_offset_px) for one lane.

    Each lane gives up `column_gap_px` of width.
    """
    width_pct = 100 / shown_columns
    return (
        column_index * width_pct,
        width_pct,
        column_index * window.column_gap_px,
        -window.column_gap_px,
    )


def badge_top_px(cluster_top_px: float, window: WindowConfig) -> float:
    """Badge sits just inside the cluster's top edge, kept within the frame."""
    return max(0.0, min(cluster_top_px + BADGE_INSET_PX, window.frame_height_px - BADGE_HEIGHT_PX))


def hour_rows(window: WindowConfig) -> Tuple[HourRow, ...]:
    rows = []
    for i, h in enumerate(hour_labels(window.start_hour, window.end_hour)):
        top = i * window.row_height_px
        rows.append(
            HourRow(
                hour=h,
                label=format_hour_label(h),
                top_px=top,
                height_px=window.row_height_px,
                line_px=top_px(h, window),
            )
        )
    return tuple(rows)


def skeleton_blocks(window: WindowConfig, mobile: bool = False) -> Tuple[SkeletonBlock, ...]:
    """Fixed loading placeholders at 9, 13 and 16 o'clock."""
    placeholders = _SKELETON_MOBILE if mobile else _SKELETON_DESKTOP
    return tuple(
        SkeletonBlock(
            top_px=top_px(hr, window),
            height_px=max(SKELETON_MIN_HEIGHT_PX, dur * window.row_height_px),
        )
        for hr, dur in placeholders
    )
