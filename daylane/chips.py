# daylane/chips.py
from __future__ import annotations

from typing import Sequence

from .model import BoundaryChip, ChipRow, NormalizedEvent

MAX_CHIPS = 2


def build_chip_row(category: str, events: Sequence[NormalizedEvent], limit: int = MAX_CHIPS) -> ChipRow:
    """First `limit` events by start become chips; the rest fold into "+N more"."""
    ordered = sorted(events, key=lambda e: e.sort_key())
    chips = tuple(
        BoundaryChip(event=e.event, category=category, start_hour=e.start_hour, end_hour=e.end_hour)
        for e in ordered[:limit]
    )
    return ChipRow(category=category, chips=chips, hidden_count=max(0, len(ordered) - limit))
