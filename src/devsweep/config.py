"""Per-invocation scan configuration."""

from __future__ import annotations

import math
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from devsweep.catalogue import PROFILES, SCAN_CATEGORIES
from devsweep.models.rule import Category

DEFAULT_MAX_DEPTH = 5
DEFAULT_MIN_SIZE_MB = 1.0


class ConfigError(ValueError):
    """Raised when a scan configuration cannot be honoured."""


class SortKey(str, Enum):
    SIZE = "size"
    NAME = "name"
    TYPE = "type"


def parse_category(value: str | Category | None) -> Category | None:
    """Normalize a user-supplied category name."""
    if value is None or isinstance(value, Category):
        return value
    name = value.strip().lower()
    for category in SCAN_CATEGORIES:
        if category.value == name:
            return category
    choices = ", ".join(c.value for c in SCAN_CATEGORIES)
    raise ConfigError(f"Unknown category '{value}' (expected one of: {choices})")


def parse_profile(value: str | None) -> str | None:
    """Normalize a user-supplied profile name."""
    if value is None:
        return None
    name = value.strip().lower()
    if name not in PROFILES:
        raise ConfigError(f"Unknown profile '{value}' (expected one of: {', '.join(PROFILES)})")
    return name


def parse_sort_key(value: str | SortKey) -> SortKey:
    if isinstance(value, SortKey):
        return value
    try:
        return SortKey(value.strip().lower())
    except ValueError:
        choices = ", ".join(k.value for k in SortKey)
        raise ConfigError(f"Unknown sort key '{value}' (expected one of: {choices})") from None


@dataclass(frozen=True)
class ScanConfig:
    """Immutable settings for one scan/clean cycle.

    String values for ``category``, ``profile`` and ``sort`` are
    normalized on construction; anything unrecognized raises
    :class:`ConfigError` before a scan can begin.
    """

    root: Path = field(default_factory=lambda: Path(os.getcwd()))
    max_depth: int = DEFAULT_MAX_DEPTH
    min_size_mb: float = DEFAULT_MIN_SIZE_MB
    category: Category | None = None
    profile: str | None = None
    include_ide: bool = False
    sort: SortKey = SortKey.SIZE

    def __post_init__(self) -> None:
        if self.max_depth < 0:
            raise ConfigError(f"max depth must be non-negative, got {self.max_depth}")
        if not math.isfinite(self.min_size_mb) or self.min_size_mb < 0:
            raise ConfigError(f"min size must be a non-negative number, got {self.min_size_mb}")
        object.__setattr__(self, "root", Path(self.root))
        object.__setattr__(self, "category", parse_category(self.category))
        object.__setattr__(self, "profile", parse_profile(self.profile))
        object.__setattr__(self, "sort", parse_sort_key(self.sort))

    @property
    def profile_categories(self) -> frozenset[Category] | None:
        return PROFILES[self.profile] if self.profile else None

    def to_dict(self) -> dict[str, Any]:
        return {
            "root": str(self.root),
            "max_depth": self.max_depth,
            "min_size_mb": self.min_size_mb,
            "category": self.category.value if self.category else None,
            "profile": self.profile,
            "include_ide": self.include_ide,
            "sort": self.sort.value,
        }
