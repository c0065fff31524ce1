# history_geometry.py

import math

from history_data import is_head
from history_errors import LayoutError

# --- Spacing derived from the commit radius ---
STEP_FACTOR = 4.5
POINTER_MARGIN_FACTOR = 1.3
# The pointer end is inset further to leave room for the arrowhead
POINTER_END_FACTOR = 1.2

# --- Tag label stacking ---
TAG_OFFSET_ABOVE = 45
TAG_OFFSET_BELOW = 40
TAG_STACK_STEP = 25
TAG_HEIGHT = 20
TAG_TEXT_BASELINE = 14

TAG_KIND_REMOTE = "remote"
TAG_KIND_HEAD = "head"
TAG_KIND_BRANCH = "branch"


def pointer_anchors(
    child: tuple[float, float], parent: tuple[float, float], margin: float
) -> tuple[float, float, float, float]:
    """
    Calculates the (x1, y1, x2, y2) endpoints of the line from a commit to its parent.

    The start point sits on the child's circle edge, ``margin`` away from its
    center toward the parent. The end point is ``1.2 * margin`` away from the
    parent's center toward the child.
    """
    cx, cy = child
    px, py = parent
    diff_x = cx - px
    diff_y = py - cy
    length = math.hypot(diff_x, diff_y)
    if length == 0:
        raise LayoutError(f"Commit at {child} coincides with its parent.")

    unit_x = diff_x / length
    unit_y = diff_y / length
    x1 = cx - margin * unit_x
    y1 = cy + margin * unit_y
    x2 = px + margin * POINTER_END_FACTOR * unit_x
    y2 = py - margin * POINTER_END_FACTOR * unit_y
    return x1, y1, x2, y2


def tag_offset(tags: list[str], name: str, cy: float, centerline: float) -> float:
    """Vertical offset of a tag label from its commit; labels stack away from the centerline."""
    index = tag_index(tags, name)
    if cy < centerline:
        return -TAG_OFFSET_ABOVE - index * TAG_STACK_STEP
    return TAG_OFFSET_BELOW + index * TAG_STACK_STEP


def tag_index(tags: list[str], name: str) -> int:
    # A tag not yet on the commit is stacked after the existing ones
    return tags.index(name) if name in tags else len(tags)


def tag_kind(name: str) -> str:
    if "/" in name:
        return TAG_KIND_REMOTE
    if is_head(name):
        return TAG_KIND_HEAD
    return TAG_KIND_BRANCH


def tag_width(name: str) -> float:
    return len(name) * 6 + 10
