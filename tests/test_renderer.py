from __future__ import annotations

import io
import unittest
from unittest import mock

import numpy as np
from PIL import Image

from chartbox.errors import OutputWriteError, RendererError
from chartbox.raster.canvas import draw_pixel, fill_rect, new_canvas
from chartbox.raster.draw_lines import draw_polyline
from chartbox.raster.draw_shapes import draw_circle
from chartbox.raster.draw_text import draw_text as raster_draw_text
from chartbox.raster.draw_text import text_size as raster_text_size
from chartbox.renderer import RasterRenderer, renderer_provider


RED = (255, 0, 0, 255)


class _BrokenSink:
    def write(self, data: bytes) -> int:
        raise OSError("disk full")


class RasterRendererTests(unittest.TestCase):
    def test_invalid_dimensions_raise(self) -> None:
        with self.assertRaises(RendererError):
            RasterRenderer(width=0, height=10)
        with self.assertRaises(RendererError):
            renderer_provider("PNG")(10, -1)

    def test_unsupported_format_raises(self) -> None:
        with self.assertRaises(RendererError):
            renderer_provider("GIF")

    def test_closed_path_fill(self) -> None:
        r = RasterRenderer(width=20, height=20)
        r.set_fill_color(RED)
        r.move_to(2, 2)
        r.line_to(12, 2)
        r.line_to(12, 12)
        r.line_to(2, 12)
        r.close()
        r.fill()
        self.assertEqual(tuple(int(v) for v in r.canvas[7, 7]), RED)
        self.assertEqual(int(r.canvas[15, 15, 3]), 0)

    def test_circle_fill(self) -> None:
        r = RasterRenderer(width=30, height=30)
        r.set_fill_color(RED)
        r.circle(6.0, 15, 15)
        r.fill()
        self.assertEqual(tuple(int(v) for v in r.canvas[15, 15]), RED)
        self.assertEqual(int(r.canvas[0, 0, 3]), 0)

    def test_font_size_scales_with_dpi(self) -> None:
        r = RasterRenderer(width=10, height=10)
        r.set_font_size(10.0)
        r.set_dpi(144.0)
        self.assertEqual(r.font_size_px(), 20.0)

    def test_measure_text_grows_with_length(self) -> None:
        r = RasterRenderer(width=10, height=10)
        self.assertGreater(r.measure_text("wider text").width, r.measure_text("w").width)
        self.assertGreater(r.measure_text("w").height, 0)

    def test_save_writes_encoded_bytes_once(self) -> None:
        r = RasterRenderer(width=8, height=8)
        sink = io.BytesIO()
        r.save(sink)
        self.assertTrue(sink.getvalue().startswith(b"\x89PNG"))

    def test_bmp_provider(self) -> None:
        sink = io.BytesIO()
        renderer_provider("bmp")(8, 8).save(sink)
        self.assertTrue(sink.getvalue().startswith(b"BM"))

    def test_failing_sink_raises_output_write_error(self) -> None:
        with self.assertRaises(OutputWriteError):
            RasterRenderer(width=8, height=8).save(_BrokenSink())


class RasterPrimitiveTests(unittest.TestCase):
    def test_pixel_and_rect_clip_to_canvas(self) -> None:
        canvas = new_canvas(10, 10)
        draw_pixel(canvas, 3, 4, RED)
        draw_pixel(canvas, 30, 4, RED)
        fill_rect(canvas, 8, 8, 20, 20, RED)
        self.assertEqual(tuple(int(v) for v in canvas[4, 3]), RED)
        self.assertEqual(int(canvas[9, 9, 3]), 255)
        self.assertEqual(int(canvas[7, 7, 3]), 0)

    def test_diagonal_polyline_touches_endpoints(self) -> None:
        canvas = new_canvas(10, 10)
        draw_polyline(canvas, [(0, 0), (9, 9)], RED, width=1)
        self.assertEqual(int(canvas[0, 0, 3]), 255)
        self.assertEqual(int(canvas[9, 9, 3]), 255)
        self.assertEqual(int(canvas[0, 9, 3]), 0)


    def test_oversized_circle_mask_is_clipped_to_canvas(self) -> None:
        canvas = new_canvas(30, 20)
        with mock.patch("chartbox.raster.draw_shapes.Image.new", wraps=Image.new) as image_new:
            draw_circle(canvas, 15, 10, 40000.0, fill=RED, stroke=RED)
        self.assertEqual(image_new.call_count, 2)
        for call in image_new.call_args_list:
            w, h = call.args[1]
            self.assertLessEqual(w, 30)
            self.assertLessEqual(h, 20)
        self.assertEqual(tuple(int(v) for v in canvas[10, 15]), RED)
        self.assertEqual(tuple(int(v) for v in canvas[0, 0]), RED)

    def test_off_canvas_circle_draws_nothing(self) -> None:
        canvas = new_canvas(10, 10)
        draw_circle(canvas, -50, -50, 5.0, fill=RED)
        self.assertFalse(np.any(canvas[:, :, 3]))


class RasterTextTests(unittest.TestCase):
    def test_text_renderer_uses_antialias_coverage(self) -> None:
        canvas = new_canvas(220, 80, color=(0, 0, 0, 0))
        raster_draw_text(canvas, 10, 20, "Static chart", (255, 255, 255, 255), font_size_px=24.0)
        alpha = canvas[:, :, 3]
        self.assertTrue(np.any(alpha > 0))
        self.assertEqual(int(canvas[0, 0, 3]), 0)

    def test_text_size_is_positive(self) -> None:
        w, h = raster_text_size("value", font_size_px=18.0)
        self.assertGreater(w, 0)
        self.assertGreater(h, 0)


if __name__ == "__main__":
    unittest.main()
