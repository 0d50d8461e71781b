"""Layout validation helpers (library-facing)."""

from __future__ import annotations

from typing import Dict, List, Tuple

from .chips import MAX_CHIPS
from .model import ChipRow, LayoutBlock, LayoutResult


class LayoutValidationError(ValueError):
    """Raised when a layout breaks one of its geometric invariants."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _validate_blocks(blocks: Tuple[LayoutBlock, ...], errs: List[str]) -> None:
    lanes: Dict[Tuple[int, int], List[LayoutBlock]] = {}
    for b in blocks:
        eid = b.event.id
        _require(b.height_px >= 1, f"block {eid!r}: height_px must be >= 1 (got {b.height_px})", errs)
        _require(b.top_px >= 0, f"block {eid!r}: top_px must be >= 0 (got {b.top_px})", errs)
        _require(b.clipped_end > b.clipped_start, f"block {eid!r}: clipped range must be non-empty", errs)
        _require(0 < b.width_percent <= 100, f"block {eid!r}: width_percent out of range ({b.width_percent})", errs)
        lanes.setdefault((b.cluster_id, b.column_index), []).append(b)

    for (cid, col), lane in lanes.items():
        lane = sorted(lane, key=lambda x: (x.clipped_start, x.clipped_end))
        for prev, cur in zip(lane, lane[1:]):
            if cur.clipped_start < prev.clipped_end:
                errs.append(
                    f"cluster {cid} column {col}: {prev.event.id!r} and {cur.event.id!r} overlap"
                )


def _validate_chips(row: ChipRow, errs: List[str]) -> None:
    _require(len(row.chips) <= MAX_CHIPS, f"{row.category} chips: more than {MAX_CHIPS} chips rendered", errs)
    _require(row.hidden_count >= 0, f"{row.category} chips: hidden_count must be >= 0", errs)
    if row.hidden_count:
        _require(len(row.chips) == MAX_CHIPS, f"{row.category} chips: folded chips before row is full", errs)
    for c in row.chips:
        _require(c.category == row.category, f"{row.category} chips: chip {c.event.id!r} has category {c.category!r}", errs)


def validate_layout(result: LayoutResult) -> List[str]:
    errs: List[str] = []
    _require(result.frame_height_px > 0, "frame_height_px must be positive", errs)
    _validate_blocks(result.blocks, errs)

    seen_badges = set()
    for badge in result.overflow_badges:
        _require(badge.cluster_id not in seen_badges, f"cluster {badge.cluster_id}: more than one overflow badge", errs)
        seen_badges.add(badge.cluster_id)
        _require(badge.hidden_count > 0, f"cluster {badge.cluster_id}: badge hides nothing", errs)
        _require(
            badge.hidden_count == len(badge.hidden_ids),
            f"cluster {badge.cluster_id}: hidden_count does not match hidden_ids",
            errs,
        )
        for b in result.blocks:
            if b.cluster_id == badge.cluster_id and b.column_index >= badge.column_slot:
                errs.append(f"cluster {badge.cluster_id}: block {b.event.id!r} rendered in the badge slot")

    _validate_chips(result.early_chips, errs)
    _validate_chips(result.late_chips, errs)
    return errs


def assert_valid_layout(result: LayoutResult) -> None:
    errs = validate_layout(result)
    if errs:
        raise LayoutValidationError(errs[0])


__all__ = [
    "LayoutValidationError",
    "assert_valid_layout",
    "validate_layout",
]
