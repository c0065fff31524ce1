# history_model.py

import logging
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from history_data import HEAD, ROOT_ID, Commit, generate_id, is_head
from history_errors import InvalidStateError, NotFoundError, ValidationError
from history_layout import LayoutParams, calculate_commit_positions
from history_snapshot import HistoryRenderer, HistorySnapshot, build_snapshot, current_branch_label
from history_store import CommitGraph

if TYPE_CHECKING:
    from settings import Settings

CommitData = Mapping[str, Any] | Commit


class HistoryModel:
    """
    Commit graph plus the refs pointing into it.

    Every public mutation runs its checks first, then changes the graph,
    recomputes the whole layout and hands a fresh snapshot to the renderer
    before returning.
    """

    def __init__(
        self,
        commit_data: Optional[Iterable[CommitData]] = None,
        name: str = "UnnamedHistoryView",
        current_branch: Optional[str] = "master",
        width: float = 700,
        height: float = 400,
        commit_radius: float = 20,
        renderer: Optional[HistoryRenderer] = None,
    ):
        self.name = name
        self.params = LayoutParams(commit_radius=commit_radius, height=height, width=width)
        self.graph = CommitGraph(commit_radius, height)
        self.renderer = renderer

        self._branches: list[str] = [HEAD]
        self._current_branch: Optional[str] = current_branch
        self._previous_head_id: Optional[str] = None

        for data in commit_data or []:
            commit = Commit.from_data(data, id_factory=self._unique_id)
            commit.parent = commit.parent or ROOT_ID
            commit.tags = [HEAD if is_head(t) else t for t in commit.tags]
            self._check_new_tags(commit.tags, allow_head=True)
            self.graph.add(commit)

        if len(self.graph):
            if current_branch:
                self._checkout(current_branch)
            elif self.head_commit is None:
                raise InvalidStateError("A detached history needs a commit tagged HEAD.")

        self._refresh()

    @classmethod
    def from_settings(cls, settings: "Settings", renderer: Optional[HistoryRenderer] = None) -> "HistoryModel":
        return cls(renderer=renderer, **settings.view_config())

    # --- Read access ---

    @property
    def current_branch(self) -> Optional[str]:
        return self._current_branch

    @property
    def current_branch_label(self) -> str:
        return current_branch_label(self._current_branch)

    @property
    def branches(self) -> list[str]:
        return list(self._branches)

    @property
    def is_detached(self) -> bool:
        return self._current_branch is None

    @property
    def head_commit(self) -> Optional[Commit]:
        return self.graph.holder_of(HEAD)

    def get_commit(self, ref: str) -> Commit:
        return self.graph.resolve(ref)

    def snapshot(self) -> HistorySnapshot:
        head = self.head_commit
        return build_snapshot(
            name=self.name,
            commits=self.graph.commits,
            root=self.graph.root,
            params=self.params,
            current_branch=self._current_branch,
            head_id=head.id if head else None,
            previous_head_id=self._previous_head_id,
        )

    # --- Operations ---

    def commit(self, data: Optional[CommitData] = None) -> Commit:
        """Appends a commit and moves the current branch onto it.

        Without an explicit parent the new commit goes on top of the current
        branch, or on top of the root while that branch has no commits yet.
        A detached HEAD can only commit with an explicit parent; HEAD then
        advances to the new commit.
        """
        commit = Commit.from_data(data, id_factory=self._unique_id)

        if commit.parent is None:
            if self._current_branch is None:
                raise InvalidStateError("Not a good idea to make commits while in a detached HEAD state.")
            holder = self.graph.holder_of(self._current_branch)
            commit.parent = holder.id if holder else ROOT_ID
        else:
            commit.parent = self.graph.resolve(commit.parent).id

        self._check_new_tags(commit.tags)

        previous_head = self.head_commit
        self.graph.add(commit)
        if self._current_branch:
            self.graph.move_tag(self._current_branch, commit.id)
            self._checkout(self._current_branch)
        else:
            self.graph.move_tag(HEAD, commit.id)
            self._previous_head_id = previous_head.id if previous_head else None

        logging.info("Committed %s on top of %s (%s)", commit.id, commit.parent, self.current_branch_label)
        self._refresh()
        return commit

    def branch(self, name: str) -> Commit:
        """Creates ``name`` on the commit HEAD points to, without switching to it."""
        self._check_ref_name(name)
        if name in self._branches or is_head(name):
            raise ValidationError(f'Branch "{name}" already exists.')

        head = self.head_commit
        if head is None:
            raise NotFoundError(HEAD)
        head.tags.append(name)
        self._branches.append(name)

        logging.info("Created branch %s at %s", name, head.id)
        self._refresh()
        return head

    def checkout(self, ref: str) -> Commit:
        commit = self._checkout(ref)
        logging.info("Checked out %s at %s (%s)", ref, commit.id, self.current_branch_label)
        self._refresh()
        return commit

    def reset(self, ref: str) -> Commit:
        """Points the current branch at ``ref``; a detached HEAD just moves there."""
        commit = self.graph.resolve(HEAD if is_head(ref) else ref)
        self._reject_root(commit)

        if self._current_branch:
            self.graph.move_tag(self._current_branch, commit.id)
            self._checkout(self._current_branch)
        else:
            self._checkout(commit.id)

        logging.info("Reset %s to %s", self._current_branch or HEAD, commit.id)
        self._refresh()
        return commit

    def move_tag(self, tag: str, ref: str) -> Commit:
        """Moves a single ref onto ``ref``; moving HEAD is a checkout."""
        if is_head(tag):
            commit = self._checkout(ref)
        else:
            self._check_ref_name(tag)
            commit = self.graph.move_tag(tag, ref)

        logging.info("Moved %s to %s", tag, commit.id)
        self._refresh()
        return commit

    def close(self):
        self.renderer = None

    # --- Internals ---

    def _checkout(self, ref: str) -> Commit:
        commit = self.graph.resolve(HEAD if is_head(ref) else ref)
        self._reject_root(commit)

        if is_head(ref):
            branch = self._current_branch
        elif ref == commit.id:
            branch = None
        else:
            branch = ref

        previous = self.head_commit
        self.graph.move_tag(HEAD, commit.id)
        self._previous_head_id = previous.id if previous and previous is not commit else None
        self._current_branch = branch
        return commit

    def _reject_root(self, commit: Commit):
        if commit.is_root:
            raise ValidationError(f"Refs cannot point at the {ROOT_ID} commit.")

    def _check_ref_name(self, name: str):
        if not name or not name.strip():
            raise ValidationError("You need to give a branch name.")
        if " " in name:
            raise ValidationError("Branch names cannot contain spaces.")
        if name == ROOT_ID:
            raise ValidationError(f'"{ROOT_ID}" is reserved for the root commit.')

    def _check_new_tags(self, tags: list[str], allow_head: bool = False):
        """Refs given to a new commit must be valid, distinct and not placed anywhere yet."""
        seen = set()
        for tag in tags:
            if is_head(tag):
                if not allow_head:
                    raise ValidationError(f'Ref "{tag}" already points to another commit.')
            else:
                self._check_ref_name(tag)
            if tag in seen:
                raise ValidationError(f'Ref "{tag}" is listed twice on one commit.')
            if self.graph.holder_of(tag) is not None:
                raise ValidationError(f'Ref "{tag}" already points to another commit.')
            seen.add(tag)

    def _unique_id(self) -> str:
        commit_id = generate_id()
        while commit_id in self.graph:
            commit_id = generate_id()
        return commit_id

    def _register_tags(self):
        for commit in self.graph:
            for tag in commit.tags:
                if tag not in self._branches and not is_head(tag):
                    self._branches.append(tag)

    def _layout(self):
        positions = calculate_commit_positions(self.graph, self.params)
        self.graph.apply_positions(positions)

    def _refresh(self):
        self._register_tags()
        self._layout()
        if self.renderer is not None:
            self.renderer.show_snapshot(self.snapshot())
