# history_data.py

import random
import string
from typing import Any, Callable, Mapping

ROOT_ID = "initial"
HEAD = "HEAD"

_ID_ALPHABET = string.ascii_lowercase + string.digits
_ID_LENGTH = 7


def generate_id() -> str:
    """Return a short random token used as the id of a commit created without one."""
    return "".join(random.choice(_ID_ALPHABET) for _ in range(_ID_LENGTH))


def is_head(name: str) -> bool:
    return name.upper() == HEAD


class Commit:
    def __init__(self, id: str, parent: str | None = ROOT_ID, tags: list[str] | None = None):
        self.id: str = id
        self.parent: str | None = parent
        self.tags: list[str] = list(tags) if tags else []

        # Layout-related attributes, filled in after each layout pass
        self.cx: float | None = None
        self.cy: float | None = None

    @property
    def is_root(self) -> bool:
        return self.id == ROOT_ID

    @property
    def position(self) -> tuple[float, float] | None:
        if self.cx is None or self.cy is None:
            return None
        return self.cx, self.cy

    @classmethod
    def from_data(
        cls, data: "Mapping[str, Any] | Commit | None", id_factory: Callable[[], str] = generate_id
    ) -> "Commit":
        """Build a fresh record from a caller mapping, filling in the defaults.

        A missing id gets one from ``id_factory``, a missing parent stays ``None``
        so the caller can pick the implicit parent, and missing tags become an
        empty list.
        """
        if isinstance(data, Commit):
            return cls(data.id or id_factory(), data.parent, data.tags)
        data = data or {}
        return cls(
            id=data.get("id") or id_factory(),
            parent=data.get("parent") or None,
            tags=data.get("tags") or [],
        )

    def __repr__(self) -> str:
        return (
            f"Commit(id='{self.id}', "
            f"parent='{self.parent}', "
            f"tags={self.tags}, "
            f"cx={self.cx}, cy={self.cy})"
        )


def make_root(commit_radius: float, height: float) -> Commit:
    """The fixed sentinel every history grows from: left edge, vertical center."""
    root = Commit(ROOT_ID, parent=None)
    root.cx = -(commit_radius * 2)
    root.cy = height / 2
    return root
