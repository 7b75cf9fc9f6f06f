from __future__ import annotations

import unittest

from chartbox.box import Box, Padding, merge_padding


class BoxTests(unittest.TestCase):
    def test_dimensions(self) -> None:
        box = Box(top=10, left=20, right=120, bottom=60)
        self.assertEqual(box.width, 100)
        self.assertEqual(box.height, 50)
        self.assertEqual(box.center, (70, 35))

    def test_grow_is_union(self) -> None:
        a = Box(top=10, left=10, right=50, bottom=50)
        b = Box(top=0, left=30, right=80, bottom=40)
        self.assertEqual(a.grow(b), Box(top=0, left=10, right=80, bottom=50))

    def test_outer_constrain_pulls_in_overflowing_sides(self) -> None:
        bounds = Box(top=20, left=20, right=1014, bottom=350)
        footprint = Box(top=20, left=20, right=1050, bottom=370)
        self.assertEqual(
            bounds.outer_constrain(bounds, footprint),
            Box(top=20, left=20, right=978, bottom=330),
        )

    def test_outer_constrain_leaves_fitting_box_alone(self) -> None:
        bounds = Box(top=0, left=0, right=100, bottom=100)
        inner = Box(top=10, left=10, right=90, bottom=90)
        self.assertEqual(inner.outer_constrain(bounds, inner), inner)

    def test_normalized_collapses_inverted_sides(self) -> None:
        box = Box(top=50, left=40, right=20, bottom=10).normalized()
        self.assertEqual(box.width, 0)
        self.assertEqual(box.height, 0)
        self.assertEqual((box.top, box.left), (30, 30))

    def test_clone_and_shift(self) -> None:
        box = Box(top=1, left=2, right=3, bottom=4)
        self.assertEqual(box.clone(), box)
        self.assertEqual(box.shift(dx=10, dy=-1), Box(top=0, left=12, right=13, bottom=3))
        self.assertFalse(box.is_zero())
        self.assertTrue(Box().is_zero())


class PaddingTests(unittest.TestCase):
    def test_side_defaults(self) -> None:
        pad = Padding(top=5)
        self.assertEqual(pad.top_or(20), 5)
        self.assertEqual(pad.left_or(20), 20)
        self.assertEqual(Padding(bottom=0).bottom_or(50), 0)

    def test_merge_is_per_side(self) -> None:
        merged = merge_padding(Padding(top=40), Padding(top=20, left=20, right=10, bottom=50))
        self.assertEqual(merged, Padding(top=40, left=20, right=10, bottom=50))
        self.assertIsNone(merge_padding(None, None))


if __name__ == "__main__":
    unittest.main()
