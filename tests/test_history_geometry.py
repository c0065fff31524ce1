import math
import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from history_errors import LayoutError
from history_geometry import pointer_anchors, tag_index, tag_kind, tag_offset, tag_width


class TestPointerAnchors(unittest.TestCase):
    def test_horizontal_pointer(self):
        x1, y1, x2, y2 = pointer_anchors((140, 200), (50, 200), 26)
        self.assertAlmostEqual(x1, 114)
        self.assertAlmostEqual(y1, 200)
        self.assertAlmostEqual(x2, 81.2)
        self.assertAlmostEqual(y2, 200)

    def test_diagonal_pointer(self):
        # Child sits up and to the right of its parent at 45 degrees
        x1, y1, x2, y2 = pointer_anchors((50, 110), (-40, 200), 26)
        step = math.sqrt(0.5)
        self.assertAlmostEqual(x1, 50 - 26 * step)
        self.assertAlmostEqual(y1, 110 + 26 * step)
        self.assertAlmostEqual(x2, -40 + 31.2 * step)
        self.assertAlmostEqual(y2, 200 - 31.2 * step)

    def test_start_is_margin_away_from_child_center(self):
        x1, y1, _, _ = pointer_anchors((230, 20), (140, 200), 26)
        self.assertAlmostEqual(math.hypot(x1 - 230, y1 - 20), 26)

    def test_coincident_centers(self):
        with self.assertRaises(LayoutError):
            pointer_anchors((50, 200), (50, 200), 26)


class TestTagPlacement(unittest.TestCase):
    def test_offset_above_centerline(self):
        tags = ["master", "HEAD"]
        self.assertEqual(tag_offset(tags, "master", 110, 200), -45)
        self.assertEqual(tag_offset(tags, "HEAD", 110, 200), -70)

    def test_offset_on_or_below_centerline(self):
        tags = ["master", "HEAD"]
        self.assertEqual(tag_offset(tags, "master", 200, 200), 40)
        self.assertEqual(tag_offset(tags, "HEAD", 290, 200), 65)

    def test_missing_tag_stacks_after_existing(self):
        self.assertEqual(tag_index(["master", "HEAD"], "feature"), 2)
        self.assertEqual(tag_offset(["master", "HEAD"], "feature", 110, 200), -95)

    def test_tag_kind(self):
        self.assertEqual(tag_kind("origin/master"), "remote")
        self.assertEqual(tag_kind("origin/HEAD"), "remote")
        self.assertEqual(tag_kind("HEAD"), "head")
        self.assertEqual(tag_kind("head"), "head")
        self.assertEqual(tag_kind("master"), "branch")

    def test_tag_width(self):
        self.assertEqual(tag_width("HEAD"), 34)


if __name__ == "__main__":
    unittest.main()
