"""Data models for downward file search."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable

INCLUDE = 1
SKIP = 4
BREAK = 8


@dataclass(frozen=True)
class VFile:
    """Lightweight handle for a found file or directory.

    Files are never read; only the path and its derived name parts are exposed.
    """

    path: str

    @property
    def basename(self) -> str:
        """Return the final path component."""
        return os.path.basename(self.path)

    @property
    def dirname(self) -> str:
        """Return the parent directory of the path."""
        return os.path.dirname(self.path)

    @property
    def extname(self) -> str:
        """Return the extension including its leading dot, or an empty string."""
        return os.path.splitext(self.basename)[1]

    @property
    def stem(self) -> str:
        """Return the basename without its extension."""
        return os.path.splitext(self.basename)[0]

    def __fspath__(self) -> str:
        return self.path


@dataclass(frozen=True)
class VisitOutcome:
    """What to do with one visited path.

    The three decisions are independent and may be combined.
    """

    include: bool = False
    skip: bool = False
    break_: bool = False

    def __bool__(self) -> bool:
        return self.include or self.skip or self.break_

    @classmethod
    def from_flags(cls, flags: int) -> VisitOutcome:
        """Create from an ``INCLUDE | SKIP | BREAK`` bitmask."""
        return cls(
            include=flags & INCLUDE == INCLUDE,
            skip=flags & SKIP == SKIP,
            break_=flags & BREAK == BREAK,
        )

    def to_flags(self) -> int:
        """Return the equivalent bitmask."""
        return (
            (INCLUDE if self.include else 0)
            | (SKIP if self.skip else 0)
            | (BREAK if self.break_ else 0)
        )


NO_DECISION = VisitOutcome()

Predicate = Callable[[VFile, os.stat_result], VisitOutcome]


@dataclass
class SearchState:
    """Mutable state shared by every branch of one search call."""

    test: Predicate
    want_first: bool = False
    terminated: bool = False
    visited: set[str] = field(default_factory=set)

    def claim(self, path: str) -> bool:
        """Mark ``path`` visited, returning False when it cannot be visited.

        Must not await between the check and the insert so that two branches
        never both claim the same path.
        """
        if self.terminated or path in self.visited:
            return False
        self.visited.add(path)
        return True

    def terminate(self) -> None:
        """Stop scheduling new work for this search."""
        self.terminated = True

