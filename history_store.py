# history_store.py

import logging
from typing import Callable, Iterator, Optional

from history_data import ROOT_ID, Commit, make_root
from history_errors import NotFoundError, ValidationError


def _match_by_id(commit: Commit, ref: str) -> bool:
    return commit.id == ref


def _match_by_tag(commit: Commit, ref: str) -> bool:
    return ref in commit.tags


# Tried in order over the whole list: an id always wins over a tag of the same name.
LOOKUP_STRATEGIES: tuple[Callable[[Commit, str], bool], ...] = (_match_by_id, _match_by_tag)


class CommitGraph:
    """Ordered collection of commits hanging off the ``initial`` sentinel."""

    def __init__(self, commit_radius: float, height: float):
        self.root: Commit = make_root(commit_radius, height)
        self._commits: list[Commit] = []

    def __iter__(self) -> Iterator[Commit]:
        return iter(self._commits)

    def __len__(self) -> int:
        return len(self._commits)

    def __contains__(self, commit_id: str) -> bool:
        return any(c.id == commit_id for c in self._commits)

    @property
    def commits(self) -> list[Commit]:
        return list(self._commits)

    def find(self, ref: str) -> Optional[Commit]:
        if ref == ROOT_ID:
            return self.root
        for matches in LOOKUP_STRATEGIES:
            for commit in self._commits:
                if matches(commit, ref):
                    return commit
        return None

    def resolve(self, ref: str) -> Commit:
        """
        Returns the commit that ``ref`` names, either by id or by one of its tags.

        Raises NotFoundError when nothing matches.
        """
        commit = self.find(ref)
        if commit is None:
            raise NotFoundError(ref)
        return commit

    def holder_of(self, tag: str) -> Optional[Commit]:
        for commit in self._commits:
            if tag in commit.tags:
                return commit
        return None

    def add(self, commit: Commit) -> Commit:
        if commit.id == ROOT_ID or commit.id in self:
            raise ValidationError(f'Commit "{commit.id}" already exists.')
        if commit.parent is None:
            raise ValidationError(f'Commit "{commit.id}" has no parent.')
        if commit.parent != ROOT_ID and commit.parent not in self:
            raise NotFoundError(commit.parent)

        self._commits.append(commit)
        logging.debug("Added commit %s on top of %s", commit.id, commit.parent)
        return commit

    def move_tag(self, tag: str, ref: str) -> Commit:
        """Moves ``tag`` onto the commit ``ref`` resolves to.

        The target is resolved before the old holder is touched, so a failing
        lookup leaves every tag list as it was.
        """
        target = self.resolve(ref)
        if target.is_root:
            raise ValidationError(f'Cannot point "{tag}" at the {ROOT_ID} commit.')

        current = self.holder_of(tag)
        if current is not None:
            current.tags.remove(tag)
        target.tags.append(tag)

        logging.debug("Moved %s from %s to %s", tag, current.id if current else None, target.id)
        return target

    def apply_positions(self, positions: dict[str, tuple[float, float]]):
        for commit in self._commits:
            commit.cx, commit.cy = positions[commit.id]
