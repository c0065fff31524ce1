# history_layout.py

import logging
import math
from collections import deque
from typing import Iterable

from history_data import ROOT_ID, Commit
from history_errors import LayoutError
from history_geometry import POINTER_MARGIN_FACTOR, STEP_FACTOR

Position = tuple[float, float]


class LayoutParams:
    """View parameters the layout is computed from; every spacing derives from the radius."""

    def __init__(self, commit_radius: float = 20, height: float = 400, width: float = 700):
        self.commit_radius = commit_radius
        self.height = height
        self.width = width

    @property
    def shift(self) -> float:
        return self.commit_radius * STEP_FACTOR

    @property
    def pointer_margin(self) -> float:
        return self.commit_radius * POINTER_MARGIN_FACTOR

    @property
    def centerline(self) -> float:
        return self.height / 2

    @property
    def root_position(self) -> Position:
        return -(self.commit_radius * 2), self.height / 2

    def __repr__(self) -> str:
        return f"LayoutParams(commit_radius={self.commit_radius}, height={self.height}, width={self.width})"


def calculate_commit_positions(commits: Iterable[Commit], params: LayoutParams) -> dict[str, Position]:
    """
    Calculates the (cx, cy) position of every commit and returns them keyed by id.
    The input is expected in graph order: a parent always comes before its children.
    Each commit is placed relative to its parent's already resolved position:
    depth alone decides x, the commit's index among its siblings decides y.
    Overlaps are resolved as soon as a commit is placed, against the commits
    placed before it, so the result only depends on topology and order.
    The records themselves are left untouched.
    """
    positions: dict[str, Position] = {}
    parents: dict[str, str] = {}
    sibling_counts: dict[str, int] = {}

    for commit in commits:
        parent_cx, parent_cy = _parent_position(commit.parent, positions, params)

        branch_index = sibling_counts.get(commit.parent, 0)
        sibling_counts[commit.parent] = branch_index + 1

        positions[commit.id] = (parent_cx + params.shift, branch_cy(parent_cy, branch_index, params))
        parents[commit.id] = commit.parent
        _prevent_overlap(commit.id, positions, parents, params)

    logging.debug("Layout calculated for %d commits", len(positions))
    return positions


def branch_cy(parent_cy: float, branch_index: int, params: LayoutParams) -> float:
    shift = params.shift
    centerline = params.centerline

    if parent_cy == centerline:
        # 0 stays on the line, then -1, +1, -2, +2, ... shifts
        direction = -1 if branch_index % 2 else 1
        return parent_cy + shift * math.ceil(branch_index / 2) * direction
    if parent_cy < centerline:
        return parent_cy - shift * branch_index
    return parent_cy + shift * branch_index


def _parent_position(parent: str | None, positions: dict[str, Position], params: LayoutParams) -> Position:
    if parent == ROOT_ID:
        return params.root_position
    if parent not in positions:
        raise LayoutError(f"Parent {parent} must be placed before its children.")
    return positions[parent]


def _find_overlap(commit_id: str, positions: dict[str, Position]) -> str | None:
    position = positions[commit_id]
    for other_id, other_position in positions.items():
        if other_id != commit_id and other_position == position:
            return other_id
    return None


def _prevent_overlap(
    commit_id: str, positions: dict[str, Position], parents: dict[str, str], params: LayoutParams
):
    centerline = params.centerline
    shift = params.shift
    # Each move pushes one commit further from the centerline
    max_steps = len(positions) ** 2
    steps = 0

    pending = deque([commit_id])
    while pending:
        current = pending.popleft()
        other = _find_overlap(current, positions)
        if other is None:
            continue

        steps += 1
        if steps > max_steps:
            raise LayoutError(f"Overlap resolution did not converge after {max_steps} moves.")

        current_parent_cy = _parent_position(parents[current], positions, params)[1]
        other_parent_cy = _parent_position(parents[other], positions, params)[1]
        cx, cy = positions[other]

        if cy < centerline:
            moved = other if current_parent_cy < other_parent_cy else current
            positions[moved] = (cx, cy - shift)
        else:
            moved = other if current_parent_cy > other_parent_cy else current
            positions[moved] = (cx, cy + shift)

        logging.debug("Commit %s overlapped %s, moved %s to %s", current, other, moved, positions[moved])
        pending.append(moved)
