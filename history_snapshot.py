# history_snapshot.py

from dataclasses import dataclass, field
from typing import Optional, Protocol

from history_data import Commit
from history_geometry import pointer_anchors, tag_index, tag_kind, tag_offset
from history_layout import LayoutParams

DETACHED_LABEL = "DETACHED HEAD"


@dataclass(frozen=True)
class CommitSnapshot:
    id: str
    parent: str
    tags: tuple[str, ...]
    cx: float
    cy: float
    is_current: bool = False


@dataclass(frozen=True)
class PointerSnapshot:
    commit_id: str
    parent_id: str
    x1: float
    y1: float
    x2: float
    y2: float


@dataclass(frozen=True)
class TagSnapshot:
    name: str
    commit_id: str
    x: float
    y: float  # top of the label box
    index: int
    kind: str


@dataclass(frozen=True)
class HistorySnapshot:
    name: str
    params: LayoutParams
    commits: tuple[CommitSnapshot, ...] = ()
    pointers: tuple[PointerSnapshot, ...] = ()
    tags: tuple[TagSnapshot, ...] = ()
    current_branch: Optional[str] = None
    head_id: Optional[str] = None
    previous_head_id: Optional[str] = None
    root: tuple[float, float] = field(default=(0.0, 0.0))

    @property
    def current_branch_label(self) -> str:
        return current_branch_label(self.current_branch)

    def commit(self, commit_id: str) -> Optional[CommitSnapshot]:
        for commit in self.commits:
            if commit.id == commit_id:
                return commit
        return None

    def tags_for(self, commit_id: str) -> list[TagSnapshot]:
        return [t for t in self.tags if t.commit_id == commit_id]


class HistoryRenderer(Protocol):
    """Anything that can draw a snapshot; the model calls it after every mutation."""

    def show_snapshot(self, snapshot: HistorySnapshot) -> None: ...


def current_branch_label(branch: Optional[str]) -> str:
    return f"Current Branch: {branch or DETACHED_LABEL}"


def build_snapshot(
    name: str,
    commits: list[Commit],
    root: Commit,
    params: LayoutParams,
    current_branch: Optional[str],
    head_id: Optional[str],
    previous_head_id: Optional[str] = None,
) -> HistorySnapshot:
    """Freezes the positioned commits into the read-only view handed to a renderer."""
    by_id = {c.id: c for c in commits}
    by_id[root.id] = root

    commit_snapshots = []
    pointer_snapshots = []
    tag_snapshots = []
    for commit in commits:
        commit_snapshots.append(
            CommitSnapshot(
                id=commit.id,
                parent=commit.parent,
                tags=tuple(commit.tags),
                cx=commit.cx,
                cy=commit.cy,
                is_current=commit.id == head_id,
            )
        )

        parent = by_id[commit.parent]
        x1, y1, x2, y2 = pointer_anchors(commit.position, parent.position, params.pointer_margin)
        pointer_snapshots.append(PointerSnapshot(commit.id, parent.id, x1, y1, x2, y2))

        for tag in commit.tags:
            tag_snapshots.append(
                TagSnapshot(
                    name=tag,
                    commit_id=commit.id,
                    x=commit.cx,
                    y=commit.cy + tag_offset(commit.tags, tag, commit.cy, params.centerline),
                    index=tag_index(commit.tags, tag),
                    kind=tag_kind(tag),
                )
            )

    return HistorySnapshot(
        name=name,
        params=params,
        commits=tuple(commit_snapshots),
        pointers=tuple(pointer_snapshots),
        tags=tuple(tag_snapshots),
        current_branch=current_branch,
        head_id=head_id,
        previous_head_id=previous_head_id,
        root=root.position,
    )
