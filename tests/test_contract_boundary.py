from __future__ import annotations

import datetime as dt
import unittest

from daylane.boundary import EARLY, LATE, VISIBLE, classify_event, classify_events
from daylane.engine import layout_day
from daylane.model import RawEvent, WindowConfig
from daylane.normalize import normalize_events

UTC = dt.timezone.utc


def _at(h: int, m: int = 0, day: int = 15) -> dt.datetime:
    return dt.datetime(2024, 1, day, h, m, tzinfo=UTC)


class TestBoundaryClassificationContract(unittest.TestCase):
    def setUp(self) -> None:
        self.window = WindowConfig(start_hour=7, end_hour=23, axis_timezone="UTC")

    def _normalize(self, *events: RawEvent):
        normalized, dropped = normalize_events(events, self.window)
        self.assertEqual(dropped, ())
        return normalized

    def test_event_straddling_window_start_is_clipped_at_top(self) -> None:
        (n,) = self._normalize(RawEvent(id="a", start=_at(6), end=_at(8)))
        self.assertEqual(classify_event(n, self.window), VISIBLE)

        part = classify_events([n], self.window)
        (v,) = part.visible
        self.assertEqual((v.clipped_start, v.clipped_end), (7.0, 8.0))
        self.assertTrue(v.top_clipped)
        self.assertFalse(v.bottom_clipped)

        (block,) = layout_day([n.event], self.window).blocks
        self.assertEqual(block.top_px, 22.0)
        self.assertEqual(block.height_px, 44.0)

    def test_cross_midnight_event_is_clipped_at_bottom(self) -> None:
        ev = RawEvent(id="b", start=_at(22, 30), end=_at(0, 30, day=16))
        (n,) = self._normalize(ev)
        self.assertEqual((n.start_hour, n.end_hour), (22.5, 24.5))

        (v,) = classify_events([n], self.window).visible
        self.assertEqual((v.clipped_start, v.clipped_end), (22.5, 23.0))
        self.assertFalse(v.top_clipped)
        self.assertTrue(v.bottom_clipped)

        (block,) = layout_day([ev], self.window).blocks
        self.assertEqual(block.top_px, 704.0)
        self.assertEqual(block.height_px, 22.0)

    def test_cross_midnight_event_starting_at_window_end_is_late(self) -> None:
        (n,) = self._normalize(RawEvent(id="c", start=_at(23, 30), end=_at(0, 30, day=16)))
        self.assertEqual(n.end_hour, 24.5)
        self.assertEqual(classify_event(n, self.window), LATE)

    def test_touching_window_edges_is_not_visible(self) -> None:
        early, late = self._normalize(
            RawEvent(id="early", start=_at(6), end=_at(7)),
            RawEvent(id="late", start=_at(23), end=_at(23, 45)),
        )
        self.assertEqual(classify_event(early, self.window), EARLY)
        self.assertEqual(classify_event(late, self.window), LATE)

        result = layout_day([early.event, late.event], self.window)
        self.assertEqual(result.items, ())
        self.assertEqual([c.event.id for c in result.early_chips.chips], ["early"])
        self.assertEqual([c.event.id for c in result.late_chips.chips], ["late"])

    def test_every_event_lands_in_exactly_one_bucket(self) -> None:
        events = [
            RawEvent(id="e1", start=_at(1), end=_at(2)),
            RawEvent(id="e2", start=_at(5), end=_at(6, 59)),
            RawEvent(id="v1", start=_at(6, 30), end=_at(7, 1)),
            RawEvent(id="v2", start=_at(12), end=_at(13)),
            RawEvent(id="v3", start=_at(22, 59), end=_at(23, 30)),
            RawEvent(id="l1", start=_at(23), end=_at(23, 59)),
        ]
        part = classify_events(self._normalize(*events), self.window)

        self.assertEqual(len(part), len(events))
        self.assertEqual([v.id for v in part.visible], ["v1", "v2", "v3"])
        self.assertEqual([e.id for e in part.early], ["e1", "e2"])
        self.assertEqual([e.id for e in part.late], ["l1"])
        for v in part.visible:
            self.assertGreaterEqual(v.clipped_start, 7.0)
            self.assertLessEqual(v.clipped_end, 23.0)
            self.assertLess(v.clipped_start, v.clipped_end)


class TestChipRowContract(unittest.TestCase):
    def test_chip_row_keeps_two_and_folds_the_rest(self) -> None:
        window = WindowConfig(start_hour=7, end_hour=23, axis_timezone="UTC")
        events = [RawEvent(id=f"e{i}", start=_at(i), end=_at(i, 30)) for i in range(1, 6)]
        row = layout_day(events, window).early_chips

        self.assertEqual([c.event.id for c in row.chips], ["e1", "e2"])
        self.assertEqual(row.hidden_count, 3)
        self.assertEqual(row.total, 5)
        self.assertEqual(row.more_label, "+3 more")

    def test_short_chip_row_has_no_more_label(self) -> None:
        window = WindowConfig(start_hour=7, end_hour=23, axis_timezone="UTC")
        row = layout_day([RawEvent(id="x", start=_at(23, 15), end=_at(23, 45))], window).late_chips
        self.assertEqual(row.hidden_count, 0)
        self.assertIsNone(row.more_label)


if __name__ == "__main__":
    unittest.main(verbosity=2)
