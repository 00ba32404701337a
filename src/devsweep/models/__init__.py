"""devsweep data models."""

from devsweep.models.rule import ArtifactRule, Category, EntryKind, IDERule, MatchKind
from devsweep.models.scan_result import Finding, ScanReport
from devsweep.models.clean_result import CleanupResult

__all__ = [
    "ArtifactRule",
    "Category",
    "CleanupResult",
    "EntryKind",
    "Finding",
    "IDERule",
    "MatchKind",
    "ScanReport",
]
