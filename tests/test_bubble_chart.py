from __future__ import annotations

import io
import unittest
from unittest import mock

from chartbox.box import Box
from chartbox.bubble import Bubble, BubbleChart, BubbleValue, bubble_label_anchor, bubble_radius, place_bubble
from chartbox.demo import demo_bubble_chart
from chartbox import defaults as d
from chartbox.errors import ChartConfigError, FontLoadError
from chartbox.layout import AxisSide, ChartFrame
from chartbox.ranges import ContinuousRange
from chartbox.renderer import PNG
from chartbox.style import style_show
from chartbox.value import Value

from fakes import RecordingRenderer


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"


class BubbleGeometryTests(unittest.TestCase):
    def test_radius_is_linear_in_magnitude(self) -> None:
        for k in (0.5, 2.0, 3.0):
            for value in (1.0, 2.55, 5.5):
                self.assertAlmostEqual(bubble_radius(k * value, 1.5), k * bubble_radius(value, 1.5))

    def test_place_bubble_inverts_y(self) -> None:
        canvas = Box(top=10, left=20, right=220, bottom=110)
        xr = ContinuousRange(min=0.0, max=10.0).set_domain(200)
        yr = ContinuousRange(min=0.0, max=5.0).set_domain(100)
        bubble = place_bubble(BubbleValue(value=Value(4.0), x=5.0, y=2.5), canvas, xr, yr, 2.0)
        self.assertEqual(bubble, Bubble(x=120, y=60, radius=8.0, is_set=True))

    def test_negative_magnitude_is_not_set(self) -> None:
        canvas = Box(top=0, left=0, right=100, bottom=100)
        xr = ContinuousRange(min=0.0, max=1.0).set_domain(100)
        yr = ContinuousRange(min=0.0, max=1.0).set_domain(100)
        bubble = place_bubble(BubbleValue(value=Value(-3.0), x=0.5, y=0.5), canvas, xr, yr, 1.0)
        self.assertFalse(bubble.is_set)
        self.assertEqual(bubble.radius, 0.0)

    def test_label_hangs_below_bubble(self) -> None:
        anchor = bubble_label_anchor(Bubble(x=100, y=50, radius=8.0), Box(right=24, bottom=10))
        self.assertEqual(anchor, (88, 68))


class BubbleChartTests(unittest.TestCase):
    def test_empty_bubble_list_is_config_error_before_renderer(self) -> None:
        provider = mock.Mock()
        sink = io.BytesIO()
        with self.assertRaises(ChartConfigError):
            BubbleChart().render(provider, sink)
        provider.assert_not_called()
        self.assertEqual(sink.getvalue(), b"")

    def test_draws_one_circle_and_label_per_bubble(self) -> None:
        r = RecordingRenderer(width=1024, height=800)
        chart = demo_bubble_chart()
        sink = io.BytesIO()
        chart.render(lambda w, h: r, sink)

        self.assertEqual(len(r.named("circle")), 5)
        labels = [c[1] for c in r.named("text")]
        for expected in ("2.55", "1", "4.2", "3.2", "5.5", "Test Bubble Chart"):
            self.assertIn(expected, labels)
        self.assertEqual(sink.getvalue(), b"fake")

    def test_configuration_is_not_mutated_by_render(self) -> None:
        xr = ContinuousRange(min=0.0, max=4.0)
        chart = demo_bubble_chart()
        chart.x_axis.range = xr
        chart.render(lambda w, h: RecordingRenderer(w, h), io.BytesIO())
        self.assertIsNone(xr.domain)

    def test_point_labels_never_grow_the_x_axis(self) -> None:
        chart = BubbleChart(
            bubbles=[
                BubbleValue(value=Value(1.0, label="a rather long point label"), x=1.0, y=1.0),
                BubbleValue(value=Value(2.0, label="another label that wraps twice"), x=2.0, y=2.0),
            ]
        )
        frame = ChartFrame(width=400, height=300)
        canvas_box = Box(top=20, left=20, right=380, bottom=250)
        footprint = chart._x_axis_footprint(frame, AxisSide(style=style_show()), RecordingRenderer(), canvas_box, [])
        self.assertEqual(footprint.bottom - canvas_box.bottom, d.DEFAULT_VERTICAL_TICK_HEIGHT)
        self.assertEqual((footprint.left, footprint.right), (canvas_box.left, canvas_box.right))

    def test_default_font_failure_propagates_before_output(self) -> None:
        sink = io.BytesIO()
        with mock.patch("chartbox.layout.load_font", side_effect=FontLoadError("no fonts")):
            with self.assertRaises(FontLoadError):
                demo_bubble_chart().render(lambda w, h: RecordingRenderer(w, h), sink)
        self.assertEqual(sink.getvalue(), b"")

    def test_explicit_font_skips_default_font_loading(self) -> None:
        chart = demo_bubble_chart()
        chart.font = "DejaVu Sans"
        sink = io.BytesIO()
        with mock.patch("chartbox.layout.load_font", side_effect=FontLoadError("no fonts")) as load_font:
            chart.render(lambda w, h: RecordingRenderer(w, h), sink)
        load_font.assert_not_called()
        self.assertEqual(sink.getvalue(), b"fake")

    def test_scenario_a_renders_png(self) -> None:
        data = demo_bubble_chart().render_bytes(PNG)
        self.assertTrue(data.startswith(PNG_SIGNATURE))
        self.assertGreater(len(data), len(PNG_SIGNATURE))

    def test_render_is_byte_identical(self) -> None:
        self.assertEqual(demo_bubble_chart().render_bytes(), demo_bubble_chart().render_bytes())


if __name__ == "__main__":
    unittest.main()
