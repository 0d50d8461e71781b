# daylane/boundary.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List, Tuple

from .model import NormalizedEvent, VisibleEvent, WindowConfig

VISIBLE = "visible"
EARLY = "early"
LATE = "late"


@dataclass(frozen=True)
class BoundaryPartition:
    visible: Tuple[VisibleEvent, ...]   # sorted by (clipped_start, clipped_end, id)
    early: Tuple[NormalizedEvent, ...]
    late: Tuple[NormalizedEvent, ...]

    def __len__(self) -> int:
        return len(self.visible) + len(self.early) + len(self.late)


def _clamp(x: float, lo: float, hi: float) -> float:
    return max(lo, min(x, hi))


def classify_event(ev: NormalizedEvent, window: WindowConfig) -> str:
    ws, we = window.start_hour, window.end_hour
    # Strict on both sides: touching a window edge is not visible.
    if ev.start_hour < we and ev.end_hour > ws:
        return VISIBLE
    if ev.end_hour <= ws:
        return EARLY
    return LATE


def clip_event(ev: NormalizedEvent, window: WindowConfig) -> VisibleEvent:
    ws, we = window.start_hour, window.end_hour
    return VisibleEvent(
        normalized=ev,
        clipped_start=_clamp(ev.start_hour, ws, we),
        clipped_end=_clamp(ev.end_hour, ws, we),
        top_clipped=ev.start_hour < ws,
        bottom_clipped=ev.end_hour > we,
    )


def classify_events(events: Iterable[NormalizedEvent], window: WindowConfig) -> BoundaryPartition:
    """Split events into visible (clipped), early and late; every event lands in exactly one."""
    visible: List[VisibleEvent] = []
    early: List[NormalizedEvent] = []
    late: List[NormalizedEvent] = []

    for ev in events:
        kind = classify_event(ev, window)
        if kind == VISIBLE:
            visible.append(clip_event(ev, window))
        elif kind == EARLY:
            early.append(ev)
        else:
            late.append(ev)

    visible.sort(key=lambda v: v.sort_key())
    early.sort(key=lambda e: e.sort_key())
    late.sort(key=lambda e: e.sort_key())
    return BoundaryPartition(visible=tuple(visible), early=tuple(early), late=tuple(late))
