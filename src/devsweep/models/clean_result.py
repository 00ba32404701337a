"""Cleaning result dataclass."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass(slots=True)
class CleanupResult:
    """Result of a cleanup pass."""

    mode: str
    deleted_count: int = 0
    deleted_bytes: int = 0
    deleted: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    skipped_ide: list[Path] = field(default_factory=list)
    would_delete: list[Path] = field(default_factory=list)
    failed: list[tuple[Path, str]] = field(default_factory=list)

    @property
    def errors(self) -> list[str]:
        return [f"{path}: {reason}" for path, reason in self.failed]

    def to_dict(self) -> dict[str, Any]:
        return {
            "mode": self.mode,
            "deleted_count": self.deleted_count,
            "deleted_bytes": self.deleted_bytes,
            "deleted": [str(p) for p in self.deleted],
            "skipped": [str(p) for p in self.skipped],
            "skipped_ide": [str(p) for p in self.skipped_ide],
            "would_delete": [str(p) for p in self.would_delete],
            "errors": self.errors,
        }
