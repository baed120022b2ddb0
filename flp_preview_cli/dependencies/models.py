"""Data models for dependency collection."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from dataclasses import field


@dataclass(frozen=True)
class SkippedApplication:
    """An application whose manifest was unreachable or unusable."""

    url: str
    reason: str


@dataclass
class CustomDependencySet:
    """Custom dependency ids collected in one resolution run.

    Behaves like a set of ids for membership, iteration, length and
    equality. ``skipped`` lists the applications that did not contribute
    because their manifest could not be retrieved.
    """

    ids: set[str] = field(default_factory=set)
    skipped: list[SkippedApplication] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.ids)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.ids

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CustomDependencySet):
            return self.ids == other.ids and self.skipped == other.skipped
        if isinstance(other, set | frozenset):
            return self.ids == other
        return NotImplemented
