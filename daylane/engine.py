# daylane/engine.py
from __future__ import annotations

from typing import Iterable, List

from .boundary import EARLY, LATE, classify_events
from .chips import build_chip_row
from .interval import assign_all_columns, build_clusters
from .model import LayoutItem, LayoutResult, RawEvent, WindowConfig
from .normalize import normalize_events
from .overflow import resolve_overflow


def layout_day(events: Iterable[RawEvent], window: WindowConfig) -> LayoutResult:
    """
    Lay out one day of events inside `window`.

    Pure: inputs are not mutated, nothing is cached, and equal inputs give
    equal results. An empty input yields an empty (but valid) result.
    """
    normalized, dropped = normalize_events(events, window)
    partition = classify_events(normalized, window)

    items: List[LayoutItem] = []
    for assignment in assign_all_columns(build_clusters(partition.visible)):
        items.extend(resolve_overflow(assignment, window))

    return LayoutResult(
        items=tuple(items),
        early_chips=build_chip_row(EARLY, partition.early),
        late_chips=build_chip_row(LATE, partition.late),
        frame_height_px=window.frame_height_px,
        dropped=dropped,
    )
