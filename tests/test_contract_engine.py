from __future__ import annotations

import datetime as dt
import random
import unittest

from daylane.engine import layout_day
from daylane.model import InvalidWindowConfig, RawEvent, WindowConfig
from daylane.validate import validate_layout

UTC = dt.timezone.utc
BASE = dt.datetime(2024, 1, 15, tzinfo=UTC)


def _random_events(seed: int, n: int):
    rng = random.Random(seed)
    out = []
    for i in range(n):
        start = BASE + dt.timedelta(minutes=15 * rng.randrange(0, 96))
        end = start + dt.timedelta(minutes=15 * rng.randrange(1, 20))
        if rng.random() < 0.05:
            start = None
        out.append(RawEvent(id=f"ev-{i:03d}", start=start, end=end))
    return out


class TestEngineContract(unittest.TestCase):
    def test_empty_input_yields_empty_result(self) -> None:
        window = WindowConfig()
        result = layout_day([], window)
        self.assertTrue(result.is_empty)
        self.assertEqual(result.items, ())
        self.assertEqual(result.dropped, ())
        self.assertEqual(result.frame_height_px, 704)
        self.assertEqual(validate_layout(result), [])

    def test_invalid_window_is_rejected_up_front(self) -> None:
        with self.assertRaises(InvalidWindowConfig):
            WindowConfig(start_hour=10, end_hour=10)
        with self.assertRaises(InvalidWindowConfig):
            WindowConfig(start_hour=12, end_hour=8)
        with self.assertRaises(InvalidWindowConfig):
            WindowConfig(max_visible_columns=0)
        with self.assertRaises(ValueError):
            WindowConfig(row_height_px=0)

    def test_every_event_is_accounted_for(self) -> None:
        for seed in range(40):
            rng = random.Random(1000 + seed)
            events = _random_events(seed, rng.randrange(0, 40))
            window = WindowConfig(axis_timezone="UTC", max_visible_columns=rng.randrange(1, 4))
            result = layout_day(events, window)

            shown = [b.event.id for b in result.blocks]
            hidden = [i for badge in result.overflow_badges for i in badge.hidden_ids]
            chips = [c.event.id for c in result.early_chips.chips + result.late_chips.chips]
            dropped = [d.event_id for d in result.dropped]

            ids = shown + hidden + chips + dropped
            self.assertEqual(len(ids), len(set(ids)), f"seed={seed}")
            folded = result.early_chips.hidden_count + result.late_chips.hidden_count
            self.assertEqual(len(ids) + folded, len(events), f"seed={seed}")
            self.assertEqual(validate_layout(result), [], f"seed={seed}")

    def test_layout_is_deterministic_and_order_independent(self) -> None:
        events = _random_events(7, 30)
        window = WindowConfig(axis_timezone="UTC")
        first = layout_day(events, window)

        self.assertEqual(layout_day(events, window), first)

        shuffled = list(events)
        random.Random(3).shuffle(shuffled)
        again = layout_day(shuffled, window)
        self.assertEqual(again.items, first.items)
        self.assertEqual((again.early_chips, again.late_chips), (first.early_chips, first.late_chips))
        self.assertEqual(
            sorted(d.event_id for d in again.dropped),
            sorted(d.event_id for d in first.dropped),
        )

    def test_inputs_are_not_mutated(self) -> None:
        events = _random_events(11, 20)
        snapshot = [(e.id, e.start, e.end, e.timezone, dict(e.meta)) for e in events]
        layout_day(events, WindowConfig(axis_timezone="UTC"))
        self.assertEqual([(e.id, e.start, e.end, e.timezone, dict(e.meta)) for e in events], snapshot)

    def test_accepts_any_iterable(self) -> None:
        events = _random_events(5, 10)
        window = WindowConfig(axis_timezone="UTC")
        self.assertEqual(layout_day(iter(events), window), layout_day(events, window))


if __name__ == "__main__":
    unittest.main(verbosity=2)
