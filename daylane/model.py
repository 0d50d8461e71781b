# daylane/model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Tuple, Union


class InvalidWindowConfig(ValueError):
    """Raised when a display window cannot produce a sane layout."""


@dataclass(frozen=True)
class CivilTime:
    hour: int
    minute: int

    @property
    def hour_float(self) -> float:
        return self.hour + self.minute / 60


@dataclass(frozen=True)
class RawEvent:
    id: str
    start: Any                  # datetime | epoch ms | ISO string | None
    end: Any
    timezone: Optional[str] = None
    meta: Mapping[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class WindowConfig:
    start_hour: int = 7
    end_hour: int = 23          # exclusive
    axis_timezone: str = "UTC"
    row_height_px: float = 44
    max_visible_columns: int = 3
    column_gap_px: float = 4

    def __post_init__(self) -> None:
        if self.end_hour <= self.start_hour:
            raise InvalidWindowConfig(
                f"end_hour must be after start_hour, got [{self.start_hour}, {self.end_hour})"
            )
        if self.max_visible_columns < 1:
            raise InvalidWindowConfig(f"max_visible_columns must be >= 1, got {self.max_visible_columns}")
        if self.row_height_px <= 0:
            raise InvalidWindowConfig(f"row_height_px must be positive, got {self.row_height_px}")

    @property
    def frame_height_px(self) -> float:
        return (self.end_hour - self.start_hour) * self.row_height_px


@dataclass(frozen=True)
class NormalizedEvent:
    event: RawEvent
    timezone: str
    start_hour: float
    end_hour: float             # may exceed 24 after cross-midnight correction

    @property
    def id(self) -> str:
        return self.event.id

    def sort_key(self) -> Tuple[float, float, str]:
        return (self.start_hour, self.end_hour, str(self.event.id))


@dataclass(frozen=True)
class VisibleEvent:
    normalized: NormalizedEvent
    clipped_start: float
    clipped_end: float
    top_clipped: bool
    bottom_clipped: bool

    @property
    def id(self) -> str:
        return self.normalized.event.id

    @property
    def event(self) -> RawEvent:
        return self.normalized.event

    def sort_key(self) -> Tuple[float, float, str]:
        return (self.clipped_start, self.clipped_end, str(self.id))


@dataclass(frozen=True)
class DroppedEvent:
    event_id: str
    reason: str


@dataclass(frozen=True)
class Cluster:
    cluster_id: int
    events: Tuple[VisibleEvent, ...]

    @property
    def start(self) -> float:
        return self.events[0].clipped_start

    @property
    def end(self) -> float:
        return max(e.clipped_end for e in self.events)


@dataclass(frozen=True)
class ColumnAssignment:
    cluster: Cluster
    columns: Tuple[int, ...]    # aligned with cluster.events
    total_columns: int

    def pairs(self) -> Tuple[Tuple[VisibleEvent, int], ...]:
        return tuple(zip(self.cluster.events, self.columns))

    def column_of(self, event_id: str) -> int:
        for ev, col in self.pairs():
            if ev.id == event_id:
                return col
        raise KeyError(event_id)


@dataclass(frozen=True)
class LayoutBlock:
    event: RawEvent
    cluster_id: int
    column_index: int
    clipped_start: float
    clipped_end: float
    top_px: float
    height_px: float
    left_percent: float
    width_percent: float
    left_offset_px: float
    width_offset_px: float
    top_clipped: bool
    bottom_clipped: bool

    @property
    def key(self) -> Tuple[int, int, str]:
        return (self.cluster_id, self.column_index, self.event.id)

    def css_left(self) -> str:
        return f"calc({self.left_percent}% + {self.left_offset_px}px)"

    def css_width(self) -> str:
        return f"calc({self.width_percent}% - {-self.width_offset_px}px)"


@dataclass(frozen=True)
class OverflowBadge:
    cluster_id: int
    cluster_top_px: float
    column_slot: int
    hidden_count: int
    hidden_ids: Tuple[str, ...]
    left_percent: float
    width_percent: float
    left_offset_px: float
    width_offset_px: float

    @property
    def key(self) -> Tuple[int, int]:
        return (self.cluster_id, self.column_slot)

    @property
    def label(self) -> str:
        return f"+{self.hidden_count} more"

    def css_left(self) -> str:
        return f"calc({self.left_percent}% + {self.left_offset_px}px)"

    def css_width(self) -> str:
        return f"calc({self.width_percent}% - {-self.width_offset_px}px)"


LayoutItem = Union[LayoutBlock, OverflowBadge]


@dataclass(frozen=True)
class BoundaryChip:
    event: RawEvent
    category: str               # "early" | "late"
    start_hour: float
    end_hour: float


@dataclass(frozen=True)
class ChipRow:
    category: str
    chips: Tuple[BoundaryChip, ...] = ()
    hidden_count: int = 0

    @property
    def total(self) -> int:
        return len(self.chips) + self.hidden_count

    @property
    def more_label(self) -> Optional[str]:
        if self.hidden_count <= 0:
            return None
        return f"+{self.hidden_count} more"


@dataclass(frozen=True)
class LayoutResult:
    items: Tuple[LayoutItem, ...]
    early_chips: ChipRow
    late_chips: ChipRow
    frame_height_px: float
    dropped: Tuple[DroppedEvent, ...] = ()

    @property
    def blocks(self) -> Tuple[LayoutBlock, ...]:
        return tuple(x for x in self.items if isinstance(x, LayoutBlock))

    @property
    def overflow_badges(self) -> Tuple[OverflowBadge, ...]:
        return tuple(x for x in self.items if isinstance(x, OverflowBadge))

    @property
    def is_empty(self) -> bool:
        return not self.items and self.early_chips.total == 0 and self.late_chips.total == 0


__all__ = [
    "InvalidWindowConfig",
    "CivilTime",
    "RawEvent",
    "WindowConfig",
    "NormalizedEvent",
    "VisibleEvent",
    "DroppedEvent",
    "Cluster",
    "ColumnAssignment",
    "LayoutBlock",
    "OverflowBadge",
    "LayoutItem",
    "BoundaryChip",
    "ChipRow",
    "LayoutResult",
]
