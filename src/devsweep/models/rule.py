"""Artifact matching rules."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    """Coarse classification used for filtering and profiles."""

    DEPS = "deps"
    BUILD = "build"
    CACHE = "cache"
    TEST = "test"
    LOGS = "logs"
    IDE = "ide"


class MatchKind(str, Enum):
    EXACT = "exact"
    WILDCARD = "wildcard"


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "dir"


def _compile_wildcard(pattern: str) -> re.Pattern[str]:
    """Compile a ``*`` pattern into an anchored regex with literals escaped."""
    return re.compile("^" + ".*".join(re.escape(part) for part in pattern.split("*")) + "$")


@dataclass(frozen=True)
class ArtifactRule:
    """One catalogue entry.

    Exact rules compare the entry name verbatim and require the entry
    kind to agree. Wildcard rules contain a single ``*`` and only ever
    match directories.
    """

    pattern: str
    entry_kind: EntryKind
    category: Category
    description: str
    match_kind: MatchKind = MatchKind.EXACT
    _regex: re.Pattern[str] | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.match_kind is MatchKind.WILDCARD:
            if self.pattern.count("*") != 1:
                raise ValueError(f"Wildcard rule needs exactly one '*': {self.pattern!r}")
            object.__setattr__(self, "_regex", _compile_wildcard(self.pattern))

    @classmethod
    def exact_dir(cls, name: str, category: Category, description: str) -> ArtifactRule:
        return cls(name, EntryKind.DIRECTORY, category, description)

    @classmethod
    def exact_file(cls, name: str, category: Category, description: str) -> ArtifactRule:
        return cls(name, EntryKind.FILE, category, description)

    @classmethod
    def wildcard_dir(cls, pattern: str, category: Category, description: str) -> ArtifactRule:
        return cls(pattern, EntryKind.DIRECTORY, category, description, MatchKind.WILDCARD)

    @property
    def is_wildcard(self) -> bool:
        return self.match_kind is MatchKind.WILDCARD

    def matches(self, name: str, is_directory: bool) -> bool:
        """Check whether a directory entry satisfies this rule."""
        if self._regex is not None:
            return is_directory and self._regex.match(name) is not None
        wants_dir = self.entry_kind is EntryKind.DIRECTORY
        return name == self.pattern and wants_dir == is_directory


@dataclass(frozen=True)
class IDERule:
    """Editor/IDE data directory rooted at the user's home."""

    relative_home_path: str
    description: str

    @property
    def category(self) -> Category:
        return Category.IDE
