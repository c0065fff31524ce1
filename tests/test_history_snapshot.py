import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from history_model import HistoryModel
from history_snapshot import current_branch_label


class TestHistorySnapshot(unittest.TestCase):
    def setUp(self):
        self.model = HistoryModel(
            commit_data=[
                {"id": "a"},
                {"id": "b", "parent": "a", "tags": ["master"]},
                {"id": "c", "parent": "a", "tags": ["origin/master"]},
            ]
        )
        self.snapshot = self.model.snapshot()

    def test_commits(self):
        self.assertEqual([c.id for c in self.snapshot.commits], ["a", "b", "c"])
        b = self.snapshot.commit("b")
        self.assertEqual((b.cx, b.cy), (140, 200))
        self.assertEqual(b.tags, ("master", "HEAD"))
        self.assertTrue(b.is_current)
        self.assertFalse(self.snapshot.commit("a").is_current)
        self.assertIsNone(self.snapshot.commit("zzz"))

    def test_root_position(self):
        self.assertEqual(self.snapshot.root, (-40, 200))

    def test_one_pointer_per_commit(self):
        pointers = {p.commit_id: p for p in self.snapshot.pointers}
        self.assertEqual(set(pointers), {"a", "b", "c"})
        self.assertEqual(pointers["a"].parent_id, "initial")
        self.assertAlmostEqual(pointers["b"].x1, 114)
        self.assertAlmostEqual(pointers["b"].x2, 81.2)

    def test_tag_placement(self):
        tags = {t.name: t for t in self.snapshot.tags}
        self.assertEqual(set(tags), {"master", "HEAD", "origin/master"})

        self.assertEqual((tags["master"].x, tags["master"].y, tags["master"].index), (140, 240, 0))
        self.assertEqual((tags["HEAD"].y, tags["HEAD"].index), (265, 1))
        self.assertEqual(tags["HEAD"].kind, "head")
        self.assertEqual(tags["master"].kind, "branch")

        # c sits above the centerline, its label stacks upward
        self.assertEqual((tags["origin/master"].y, tags["origin/master"].kind), (110 - 45, "remote"))
        self.assertEqual([t.name for t in self.snapshot.tags_for("b")], ["master", "HEAD"])

    def test_current_branch_label(self):
        self.assertEqual(self.snapshot.current_branch_label, "Current Branch: master")
        self.model.checkout("a")
        self.assertEqual(self.model.snapshot().current_branch_label, "Current Branch: DETACHED HEAD")
        self.assertEqual(current_branch_label(None), "Current Branch: DETACHED HEAD")

    def test_snapshot_is_detached_from_model(self):
        self.model.commit({"id": "d"})
        self.assertEqual(len(self.snapshot.commits), 3)
        self.assertEqual(self.snapshot.commit("b").tags, ("master", "HEAD"))


if __name__ == "__main__":
    unittest.main()
