# daylane/payload.py
from __future__ import annotations

import datetime as dt
import json
from typing import Any, Dict, List

from .geometry import hour_rows
from .model import BoundaryChip, ChipRow, LayoutBlock, LayoutResult, OverflowBadge, RawEvent, WindowConfig
from .util.labels import time_range_label
from .util.tz import to_instant

try:
    import orjson  # type: ignore
except Exception:  # pragma: no cover
    orjson = None  # type: ignore

SCHEMA_VERSION = 1


def _json_safe(v: Any) -> Any:
    if isinstance(v, dt.datetime):
        return v.isoformat()
    if isinstance(v, dict):
        return {str(k): _json_safe(x) for k, x in v.items()}
    if isinstance(v, (list, tuple)):
        return [_json_safe(x) for x in v]
    return v


def _event_dict(ev: RawEvent, tz_fallback: str) -> Dict[str, Any]:
    start = to_instant(ev.start)
    end = to_instant(ev.end)
    tz = ev.timezone or tz_fallback
    return {
        "id": ev.id,
        "start": start.isoformat() if start is not None else None,
        "end": end.isoformat() if end is not None else None,
        "tz": tz,
        "range_label": time_range_label(start, end, tz) if start is not None and end is not None else None,
        "meta": _json_safe(dict(ev.meta)),
    }


def _block_dict(b: LayoutBlock, tz_fallback: str) -> Dict[str, Any]:
    return {
        "event": _event_dict(b.event, tz_fallback),
        "cluster_id": b.cluster_id,
        "column": b.column_index,
        "top_px": b.top_px,
        "height_px": b.height_px,
        "left": b.css_left(),
        "width": b.css_width(),
        "left_pct": b.left_percent,
        "width_pct": b.width_percent,
        "top_clipped": b.top_clipped,
        "bottom_clipped": b.bottom_clipped,
    }


def _badge_dict(b: OverflowBadge) -> Dict[str, Any]:
    return {
        "cluster_id": b.cluster_id,
        "slot": b.column_slot,
        "top_px": b.cluster_top_px,
        "left": b.css_left(),
        "width": b.css_width(),
        "count": b.hidden_count,
        "hidden_ids": list(b.hidden_ids),
        "label": b.label,
    }


def _chip_row_dict(row: ChipRow, tz_fallback: str) -> Dict[str, Any]:
    def chip(c: BoundaryChip) -> Dict[str, Any]:
        return {"event": _event_dict(c.event, tz_fallback), "start_hour": c.start_hour, "end_hour": c.end_hour}

    return {
        "category": row.category,
        "chips": [chip(c) for c in row.chips],
        "hidden_count": row.hidden_count,
        "more_label": row.more_label,
    }


def layout_to_payload(result: LayoutResult, window: WindowConfig) -> Dict[str, Any]:
    """JSON-safe view of a layout for a renderer on the other side of the wire."""
    tz = window.axis_timezone
    rows: List[Dict[str, Any]] = [
        {"hour": r.hour, "label": r.label, "line_px": r.line_px} for r in hour_rows(window)
    ]
    return {
        "schema_version": SCHEMA_VERSION,
        "cfg": {
            "start_hour": window.start_hour,
            "end_hour": window.end_hour,
            "axis_tz": tz,
            "row_height_px": window.row_height_px,
            "max_visible_columns": window.max_visible_columns,
            "column_gap_px": window.column_gap_px,
        },
        "frame_height_px": result.frame_height_px,
        "hours": rows,
        "blocks": [_block_dict(b, tz) for b in result.blocks],
        "badges": [_badge_dict(b) for b in result.overflow_badges],
        "early": _chip_row_dict(result.early_chips, tz),
        "late": _chip_row_dict(result.late_chips, tz),
        "dropped": [{"id": d.event_id, "reason": d.reason} for d in result.dropped],
    }


def dumps_payload(payload: Dict[str, Any], *, pretty: bool = False) -> str:
    if orjson is not None:
        opts = orjson.OPT_INDENT_2 if pretty else 0
        return orjson.dumps(payload, option=opts).decode("utf-8")
    return json.dumps(payload, ensure_ascii=False, indent=2 if pretty else None, separators=None if pretty else (",", ":"))
