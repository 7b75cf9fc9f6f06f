from __future__ import annotations

import unittest

from chartbox.box import Box
from chartbox.style import Style
from chartbox.text import draw_text_within, measure_lines, wrap_fit

from fakes import RecordingRenderer


class WrapFitTests(unittest.TestCase):
    def setUp(self) -> None:
        self.r = RecordingRenderer()

    def test_word_wrap(self) -> None:
        self.assertEqual(wrap_fit(self.r, "hello world foo", 66, Style()), ["hello world", "foo"])

    def test_long_word_is_split_by_character(self) -> None:
        self.assertEqual(wrap_fit(self.r, "abcdefghij", 30, Style()), ["abcde", "fghij"])

    def test_rune_wrap(self) -> None:
        lines = wrap_fit(self.r, "ab cd", 18, Style(text_wrap="rune"))
        self.assertEqual(lines, ["ab ", "cd"])

    def test_no_wrap(self) -> None:
        self.assertEqual(wrap_fit(self.r, "hello world", 6, Style(text_wrap="none")), ["hello world"])


class MeasureLinesTests(unittest.TestCase):
    def test_height_includes_line_spacing(self) -> None:
        r = RecordingRenderer()
        box = measure_lines(r, ["abc", "abcdef"], Style(text_line_spacing=4))
        self.assertEqual(box.width, 36)
        self.assertEqual(box.height, 24)

    def test_default_spacing(self) -> None:
        box = measure_lines(RecordingRenderer(), ["a", "b"], Style())
        self.assertEqual(box.height, 22)


class DrawTextWithinTests(unittest.TestCase):
    def test_center_aligned_lines_use_baselines(self) -> None:
        r = RecordingRenderer()
        box = Box(top=100, left=0, right=60, bottom=200)
        draw_text_within(r, "ab abcdefgh", box, Style(text_horizontal_align="center"))
        self.assertEqual(r.named("text"), [("text", "ab", 24, 110), ("text", "abcdefgh", 6, 122)])

    def test_right_and_bottom_alignment(self) -> None:
        r = RecordingRenderer()
        box = Box(top=0, left=0, right=60, bottom=50)
        draw_text_within(r, "abc", box, Style(text_horizontal_align="right", text_vertical_align="bottom"))
        self.assertEqual(r.named("text"), [("text", "abc", 42, 50)])


if __name__ == "__main__":
    unittest.main()
