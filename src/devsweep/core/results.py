"""Filtering and ordering of scan findings."""

from __future__ import annotations

from collections.abc import Iterable

from devsweep.config import ScanConfig, SortKey
from devsweep.models.rule import Category
from devsweep.models.scan_result import Finding
from devsweep.utils import bytes_to_mb


class FindingFilter:
    """Admission predicate applied while findings are discovered.

    A finding is kept when it reaches the minimum size and its category
    passes both the category filter and the profile. IDE findings skip
    the category checks but still honour the minimum size.
    """

    def __init__(
        self,
        min_size_mb: float = 0.0,
        category: Category | None = None,
        profile: frozenset[Category] | None = None,
    ) -> None:
        self.min_size_mb = min_size_mb
        self.category = category
        self.profile = profile

    @classmethod
    def from_config(cls, config: ScanConfig) -> FindingFilter:
        return cls(
            min_size_mb=config.min_size_mb,
            category=config.category,
            profile=config.profile_categories,
        )

    def admits_category(self, category: Category, is_ide: bool = False) -> bool:
        if is_ide:
            return True
        if self.category is not None and category is not self.category:
            return False
        return self.profile is None or category in self.profile

    def admits_size(self, size_bytes: int) -> bool:
        return bytes_to_mb(size_bytes) >= self.min_size_mb

    def __call__(self, finding: Finding) -> bool:
        return self.admits_category(finding.category, finding.is_ide) and self.admits_size(finding.size_bytes)

    def apply(self, findings: Iterable[Finding]) -> list[Finding]:
        return [f for f in findings if self(f)]


def sort_findings(findings: list[Finding], key: SortKey = SortKey.SIZE) -> None:
    """Sort findings in place.

    ``size`` is largest first, ``name`` is by full path, and ``type``
    groups by category with the largest first inside each group.
    """
    match key:
        case SortKey.NAME:
            findings.sort(key=lambda f: str(f.path))
        case SortKey.TYPE:
            findings.sort(key=lambda f: (f.category.value, -f.size_bytes))
        case _:
            findings.sort(key=lambda f: f.size_bytes, reverse=True)
