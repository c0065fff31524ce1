import os
import sys
import unittest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))
from history_data import Commit
from history_errors import LayoutError
from history_layout import LayoutParams, branch_cy, calculate_commit_positions


def make_commits(*pairs):
    """(id, parent) pairs -> Commit records in the given order."""
    return [Commit(commit_id, parent) for commit_id, parent in pairs]


class TestLayoutParams(unittest.TestCase):
    def test_derived_spacing(self):
        params = LayoutParams(commit_radius=20, height=400, width=700)
        self.assertEqual(params.shift, 90)
        self.assertAlmostEqual(params.pointer_margin, 26)
        self.assertEqual(params.centerline, 200)
        self.assertEqual(params.root_position, (-40, 200))


class TestBranchCy(unittest.TestCase):
    def setUp(self):
        self.params = LayoutParams(commit_radius=20, height=400)

    def test_centerline_siblings_alternate(self):
        self.assertEqual(
            [branch_cy(200, i, self.params) for i in range(5)],
            [200, 110, 290, 20, 380],
        )

    def test_above_centerline_fans_upward(self):
        self.assertEqual([branch_cy(110, i, self.params) for i in range(3)], [110, 20, -70])

    def test_below_centerline_fans_downward(self):
        self.assertEqual([branch_cy(290, i, self.params) for i in range(3)], [290, 380, 470])


class TestCalculateCommitPositions(unittest.TestCase):
    def setUp(self):
        self.params = LayoutParams(commit_radius=20, height=400)

    def test_empty(self):
        self.assertEqual(calculate_commit_positions([], self.params), {})

    def test_straight_line(self):
        commits = make_commits(("a", "initial"), ("b", "a"), ("c", "b"))
        positions = calculate_commit_positions(commits, self.params)
        self.assertEqual(positions, {"a": (50, 200), "b": (140, 200), "c": (230, 200)})

    def test_fork_from_centerline(self):
        commits = make_commits(("a", "initial"), ("b", "a"), ("c", "a"))
        positions = calculate_commit_positions(commits, self.params)
        self.assertEqual(positions["b"], (140, 200))
        self.assertEqual(positions["c"], (140, 110))

    def test_records_are_not_modified(self):
        commits = make_commits(("a", "initial"), ("b", "a"))
        calculate_commit_positions(commits, self.params)
        self.assertIsNone(commits[0].cx)
        self.assertIsNone(commits[1].cy)

    def test_overlap_above_keeps_commit_with_higher_parent(self):
        # a2 (child of the centerline commit a) and b1 (first child of b) both land on (140, 110)
        commits = make_commits(("a", "initial"), ("b", "initial"), ("a1", "a"), ("a2", "a"), ("b1", "b"))
        positions = calculate_commit_positions(commits, self.params)
        self.assertEqual(positions["b"], (50, 110))
        self.assertEqual(positions["b1"], (140, 110))
        self.assertEqual(positions["a2"], (140, 20))

    def test_overlap_below_keeps_commit_with_lower_parent(self):
        commits = make_commits(
            ("a", "initial"),
            ("b", "initial"),
            ("c", "initial"),
            ("a1", "a"),
            ("a2", "a"),
            ("a3", "a"),
            ("c1", "c"),
        )
        positions = calculate_commit_positions(commits, self.params)
        self.assertEqual(positions["c"], (50, 290))
        self.assertEqual(positions["c1"], (140, 290))
        self.assertEqual(positions["a3"], (140, 380))

    def test_displacement_chain_moves_one_commit_until_free(self):
        # Pushing a2 up from b1's spot lands it on d1, so a2 moves again
        commits = make_commits(
            ("a", "initial"),
            ("b", "initial"),
            ("c", "initial"),
            ("d", "initial"),
            ("a1", "a"),
            ("a2", "a"),
            ("d1", "d"),
            ("b1", "b"),
        )
        positions = calculate_commit_positions(commits, self.params)
        self.assertEqual(positions["d"], (50, 20))
        self.assertEqual(positions["d1"], (140, 20))
        self.assertEqual(positions["b1"], (140, 110))
        self.assertEqual(positions["a2"], (140, -70))

    def test_positions_are_distinct_for_bushy_tree(self):
        pairs = [("a", "initial"), ("b", "initial"), ("c", "initial")]
        for parent in ("a", "b", "c"):
            for i in range(4):
                pairs.append((f"{parent}{i}", parent))
        for i in range(3):
            pairs.append((f"b0-{i}", "b0"))
        positions = calculate_commit_positions(make_commits(*pairs), self.params)

        self.assertEqual(len(positions), len(pairs))
        self.assertEqual(len(set(positions.values())), len(pairs))

    def test_idempotent(self):
        commits = make_commits(("a", "initial"), ("b", "a"), ("c", "a"), ("d", "c"), ("e", "initial"))
        first = calculate_commit_positions(commits, self.params)
        for commit in commits:
            commit.cx, commit.cy = first[commit.id]
        second = calculate_commit_positions(commits, self.params)
        self.assertEqual(first, second)

    def test_x_depends_only_on_depth(self):
        commits = make_commits(("a", "initial"), ("b", "initial"), ("a1", "a"), ("b1", "b"), ("b2", "b1"))
        positions = calculate_commit_positions(commits, self.params)
        self.assertEqual(positions["a"][0], positions["b"][0])
        self.assertEqual(positions["a1"][0], positions["b1"][0])
        self.assertEqual(positions["b2"][0], 230)

    def test_child_before_parent_is_rejected(self):
        commits = make_commits(("b", "a"), ("a", "initial"))
        with self.assertRaises(LayoutError):
            calculate_commit_positions(commits, self.params)


if __name__ == "__main__":
    unittest.main()
