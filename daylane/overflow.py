# daylane/overflow.py
from __future__ import annotations

from typing import List, Tuple

from .geometry import badge_top_px, column_geometry, height_px, top_px
from .model import ColumnAssignment, LayoutBlock, LayoutItem, OverflowBadge, WindowConfig


def shown_columns(total_columns: int, window: WindowConfig) -> int:
    return min(total_columns, window.max_visible_columns)


def resolve_overflow(assignment: ColumnAssignment, window: WindowConfig) -> Tuple[LayoutItem, ...]:
    """
    Lay out one cluster, capping it at window.max_visible_columns lanes.

    When the cluster needs more lanes than that, the last visible slot is
    reserved for a single "+N more" badge and every event in lane
    max_visible_columns - 1 or beyond is hidden behind it.
    """
    cluster = assignment.cluster
    total = assignment.total_columns
    cap = window.max_visible_columns
    has_overflow = total > cap
    shown = shown_columns(total, window)
    first_hidden = cap - 1 if has_overflow else total

    items: List[LayoutItem] = []
    hidden: List[str] = []
    for ev, col in assignment.pairs():
        if col >= first_hidden:
            hidden.append(str(ev.id))
            continue
        left_pct, width_pct, left_px, width_px = column_geometry(col, shown, window)
        top = top_px(ev.clipped_start, window)
        items.append(
            LayoutBlock(
                event=ev.event,
                cluster_id=cluster.cluster_id,
                column_index=col,
                clipped_start=ev.clipped_start,
                clipped_end=ev.clipped_end,
                top_px=top,
                height_px=height_px(ev.clipped_start, ev.clipped_end, window),
                left_percent=left_pct,
                width_percent=width_pct,
                left_offset_px=left_px,
                width_offset_px=width_px,
                top_clipped=ev.top_clipped,
                bottom_clipped=ev.bottom_clipped,
            )
        )

    if has_overflow and hidden:
        slot = cap - 1
        cluster_top = min(top_px(ev.clipped_start, window) for ev in cluster.events)
        left_pct, width_pct, left_px, width_px = column_geometry(slot, shown, window)
        items.append(
            OverflowBadge(
                cluster_id=cluster.cluster_id,
                cluster_top_px=badge_top_px(cluster_top, window),
                column_slot=slot,
                hidden_count=len(hidden),
                hidden_ids=tuple(hidden),
                left_percent=left_pct,
                width_percent=width_pct,
                left_offset_px=left_px,
                width_offset_px=width_px,
            )
        )

    return tuple(items)
