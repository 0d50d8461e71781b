from __future__ import annotations

import datetime as dt
import json
import unittest

from daylane.config import window_preset
from daylane.engine import layout_day
from daylane.model import RawEvent
from daylane.payload import SCHEMA_VERSION, dumps_payload, layout_to_payload

UTC = dt.timezone.utc


def _at(h: int, m: int = 0, day: int = 15) -> dt.datetime:
    return dt.datetime(2024, 1, day, h, m, tzinfo=UTC)


class TestLayoutPayloadContract(unittest.TestCase):
    def setUp(self) -> None:
        self.window = window_preset("desktop", axis_timezone="UTC")
        events = [RawEvent(id=f"j{i}", start=_at(9), end=_at(10), meta={"service": "Cleaning"}) for i in range(4)]
        events += [
            RawEvent(id="dawn", start=_at(5), end=_at(6)),
            RawEvent(id="night", start=_at(22, 30), end=_at(0, 30, day=16)),
            RawEvent(id="broken", start="??", end=_at(1)),
        ]
        self.result = layout_day(events, self.window)

    def test_payload_shape(self) -> None:
        p = layout_to_payload(self.result, self.window)

        self.assertEqual(p["schema_version"], SCHEMA_VERSION)
        self.assertEqual(p["cfg"]["axis_tz"], "UTC")
        self.assertEqual(p["cfg"]["max_visible_columns"], 3)
        self.assertEqual(p["frame_height_px"], 704)
        self.assertEqual(len(p["hours"]), 16)

        self.assertEqual([b["event"]["id"] for b in p["blocks"]], ["j0", "j1", "night"])
        first = p["blocks"][0]
        self.assertEqual(first["left"], "calc(0.0% + 0px)")
        self.assertEqual(first["event"]["range_label"], "9:00 AM – 10:00 AM")
        self.assertEqual(first["event"]["meta"], {"service": "Cleaning"})
        self.assertEqual(
            (first["event"]["start"], first["event"]["end"]),
            ("2024-01-15T09:00:00+00:00", "2024-01-15T10:00:00+00:00"),
        )

        night = p["blocks"][2]
        self.assertTrue(night["bottom_clipped"])
        self.assertTrue(night["event"]["range_label"].endswith("(next day)"))

        (badge,) = p["badges"]
        self.assertEqual((badge["count"], badge["label"], badge["slot"]), (2, "+2 more", 2))
        self.assertEqual(badge["hidden_ids"], ["j2", "j3"])

        self.assertEqual([c["event"]["id"] for c in p["early"]["chips"]], ["dawn"])
        self.assertIsNone(p["early"]["more_label"])
        self.assertEqual(p["late"]["chips"], [])
        self.assertEqual(p["dropped"], [{"id": "broken", "reason": "missing or unparseable start"}])

    def test_dumps_is_valid_json(self) -> None:
        p = layout_to_payload(self.result, self.window)
        for pretty in (False, True):
            text = dumps_payload(p, pretty=pretty)
            self.assertEqual(json.loads(text), json.loads(json.dumps(p)))


if __name__ == "__main__":
    unittest.main(verbosity=2)
