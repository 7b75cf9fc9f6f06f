from __future__ import annotations

import unittest

from chartbox.formatting import format_value, percent_value_formatter
from chartbox.ranges import ContinuousRange
from chartbox.style import Style
from chartbox.ticks import Tick, generate_nice_ticks, generate_ticks, ticks_within_range

from fakes import RecordingRenderer


class GenerateTicksTests(unittest.TestCase):
    def setUp(self) -> None:
        self.r = RecordingRenderer()

    def test_vertical_ticks_are_ascending_and_inside_range(self) -> None:
        rng = ContinuousRange(min=0.0, max=10.0).set_domain(300)
        ticks = generate_ticks(self.r, rng, Style(), vertical=True)
        values = [t.value for t in ticks]
        self.assertEqual(values, sorted(values))
        self.assertEqual(values[0], 0.0)
        self.assertEqual(values[-1], 10.0)
        self.assertEqual(len(set(values)), len(values))
        self.assertTrue(all(0.0 <= v <= 10.0 for v in values))
        self.assertEqual(len(ticks), 11)

    def test_label_width_limits_horizontal_tick_count(self) -> None:
        # "0.00" is 24px wide, so 100px holds two 44px slots.
        rng = ContinuousRange(min=0.0, max=10.0).set_domain(100)
        ticks = generate_ticks(self.r, rng, Style(), vertical=False)
        self.assertEqual([t.value for t in ticks], [0.0, 10.0])

    def test_tiny_domain_keeps_only_endpoints(self) -> None:
        rng = ContinuousRange(min=1.0, max=2.0).set_domain(20)
        ticks = generate_ticks(self.r, rng, Style(), vertical=True)
        self.assertEqual(ticks, [Tick(1.0, "1.00"), Tick(2.0, "2.00")])

    def test_single_value_range_yields_one_tick(self) -> None:
        rng = ContinuousRange(min=3.0, max=3.0).set_domain(200)
        self.assertEqual(len(generate_ticks(self.r, rng, Style(), vertical=True)), 1)

    def test_formatter_produces_labels(self) -> None:
        rng = ContinuousRange(min=0.0, max=1.0).set_domain(20)
        ticks = generate_ticks(self.r, rng, Style(), percent_value_formatter, vertical=True)
        self.assertEqual([t.label for t in ticks], ["0%", "100%"])


class NiceTickTests(unittest.TestCase):
    def test_nice_ticks_cover_span(self) -> None:
        ticks = generate_nice_ticks(0.0, 10.0, 6)
        self.assertLessEqual(ticks[0], 0.0)
        self.assertGreaterEqual(ticks[-1], 10.0)
        self.assertTrue(all(b > a for a, b in zip(ticks, ticks[1:])))

    def test_nice_ticks_snap_zero(self) -> None:
        ticks = generate_nice_ticks(-0.3, 0.3, 7)
        self.assertIn(0.0, ticks.tolist())

    def test_target_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            generate_nice_ticks(0.0, 1.0, 0)


class TicksWithinRangeTests(unittest.TestCase):
    def test_filters_and_sorts(self) -> None:
        rng = ContinuousRange(min=0.0, max=5.0)
        ticks = [Tick(6.0, "6"), Tick(5.0, "5"), Tick(-1.0, "-1"), Tick(0.0, "0")]
        self.assertEqual(ticks_within_range(ticks, rng), [Tick(0.0, "0"), Tick(5.0, "5")])


class FormatValueTests(unittest.TestCase):
    def test_short_decimal_text(self) -> None:
        self.assertEqual(format_value(2.55), "2.55")
        self.assertEqual(format_value(1.0), "1")
        self.assertEqual(format_value(30.0), "30")
        self.assertEqual(format_value(-0.0), "0")


if __name__ == "__main__":
    unittest.main()
