"""Scan result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from devsweep.models.rule import Category
from devsweep.utils import bytes_to_mb


@dataclass(frozen=True, slots=True)
class Finding:
    """Single discovered artifact.

    IDE findings are reported but never deleted.
    """

    path: Path
    size_bytes: int
    category: Category
    description: str
    matched_name: str
    is_ide: bool = False

    def __post_init__(self) -> None:
        if self.size_bytes < 0:
            raise ValueError(f"Negative size for {self.path}: {self.size_bytes}")

    @property
    def size_mb(self) -> float:
        return bytes_to_mb(self.size_bytes)

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "name": self.matched_name,
            "size_bytes": self.size_bytes,
            "size_mb": round(self.size_mb, 2),
            "category": self.category.value,
            "description": self.description,
            "is_ide": self.is_ide,
        }


@dataclass(slots=True)
class ScanReport:
    """Aggregate outcome of one scan."""

    version: str
    config: dict[str, Any]
    findings: list[Finding] = field(default_factory=list)
    dirs_visited: int = 0

    @property
    def total_bytes(self) -> int:
        return sum(f.size_bytes for f in self.findings)

    @property
    def total_count(self) -> int:
        return len(self.findings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "version": self.version,
            "config": self.config,
            "findings": [f.to_dict() for f in self.findings],
            "total_count": self.total_count,
            "total_bytes": self.total_bytes,
            "dirs_visited": self.dirs_visited,
        }
