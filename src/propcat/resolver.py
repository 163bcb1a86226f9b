"""Canonical path resolution from a linear class-entry history.

The resolver keeps one ordered buffer of class names that stands for the
lineage of the class most recently entered. Entering a class truncates the
buffer just after the last occurrence of the new class's parent name and
appends the class, which is how a walker that only reports entries moves
back up to a sibling branch:

    enter_class(None, "A")   -> [None, A]
    enter_class("A", "B")    -> [None, A, B]
    enter_class("B", "C")    -> [None, A, B, C]
    enter_class("A", "D")    -> [None, A, D]        (B and C dropped)

A leading ``None`` is the root sentinel: entry from the unnamed root or
from a scope that is not a class.

Truncation alone is only correct while class names are unique across the
tree, since the parent lookup matches by name. By default
(``track_exits=True``) the walker also reports exits and ``exit_class``
restores the buffer to exactly what it was before the matching
``enter_class``. ``track_exits=False`` keeps truncation only.
"""

from __future__ import annotations

from propcat.exit_codes import ResolverStateError

ROOT = None


class CanonicalPathResolver:
    """Ancestor buffer plus the operations that maintain and read it."""

    def __init__(self, track_exits: bool = True) -> None:
        self.track_exits = track_exits
        self._buffer: list[str | None] = []
        self._saved: list[list[str | None]] = []

    def enter_class(self, parent_name: str | None, class_name: str) -> None:
        buf = self._buffer
        if self.track_exits:
            self._saved.append(list(buf))
        if not buf:
            buf.append(parent_name)
        idx = _last_index(buf, parent_name)
        if idx is not None:
            del buf[idx + 1 :]
        buf.append(class_name)

    def exit_class(self) -> str:
        """Leave the most recently entered class and return its name."""
        if not self.track_exits:
            raise ResolverStateError("exit_class() needs a resolver created with track_exits=True")
        if not self._saved:
            raise ResolverStateError("exit_class() called with no class entered")
        name = self._buffer[-1]
        self._buffer = self._saved.pop()
        return name

    def path_for(self, property_name: str) -> str:
        return ".".join(self.lineage + (property_name,))

    @property
    def lineage(self) -> tuple[str, ...]:
        """Class names of the current lineage, sentinels dropped."""
        return tuple(name for name in self._buffer if name is not ROOT)

    @property
    def current_class(self) -> str | None:
        lineage = self.lineage
        return lineage[-1] if lineage else None

    @property
    def buffer(self) -> tuple[str | None, ...]:
        return tuple(self._buffer)

    def reset(self) -> None:
        self._buffer.clear()
        self._saved.clear()


def _last_index(items: list, value) -> int | None:
    for i in range(len(items) - 1, -1, -1):
        if items[i] == value:
            return i
    return None
