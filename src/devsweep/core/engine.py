"""Scanning and cleaning orchestration engine."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import Callable

from devsweep import __version__
from devsweep.catalogue import CATALOGUE, IDE_CACHES
from devsweep.config import ScanConfig
from devsweep.core.cleanup import CleanupExecutor, CleanupMode, ConfirmCallback, EventCallback
from devsweep.core.matcher import Matcher
from devsweep.core.results import FindingFilter, sort_findings
from devsweep.core.walker import Walker
from devsweep.models.clean_result import CleanupResult
from devsweep.models.rule import ArtifactRule, IDERule
from devsweep.models.scan_result import Finding, ScanReport
from devsweep.utils import home_dir, size_of

log = logging.getLogger(__name__)

ProgressCallback = Callable[[Path], None]


class SweepEngine:
    """Orchestrates artifact discovery and cleanup."""

    def __init__(
        self,
        rules: Iterable[ArtifactRule] = CATALOGUE,
        ide_rules: Iterable[IDERule] = IDE_CACHES,
    ) -> None:
        self.matcher = Matcher(rules)
        self.ide_rules = tuple(ide_rules)

    def scan(self, config: ScanConfig, on_progress: ProgressCallback | None = None) -> ScanReport:
        """Scan ``config.root`` and return a sorted report.

        Args:
            config: Validated scan configuration.
            on_progress: Optional callback fired with each path about to be sized.

        Raises:
            ScanError: if the root directory cannot be listed.
        """
        finding_filter = FindingFilter.from_config(config)
        walker = Walker(self.matcher, finding_filter, on_match=on_progress)
        findings = walker.walk(config.root, config.max_depth)

        if config.include_ide:
            findings.extend(self.scan_ide(finding_filter, on_progress))

        sort_findings(findings, config.sort)
        report = ScanReport(
            version=__version__,
            config=config.to_dict(),
            findings=findings,
            dirs_visited=walker.dirs_visited,
        )
        log.info("Scan of %s found %d artifacts (%d bytes)", config.root, report.total_count, report.total_bytes)
        return report

    def scan_ide(
        self,
        finding_filter: FindingFilter,
        on_progress: ProgressCallback | None = None,
        home: Path | None = None,
    ) -> list[Finding]:
        """Size the IDE data directories that exist under the home directory."""
        home = home or home_dir()
        if home is None:
            log.info("No home directory in the environment, skipping IDE caches")
            return []

        findings: list[Finding] = []
        for rule in self.ide_rules:
            path = home / rule.relative_home_path
            if not os.path.isdir(path):
                continue
            if on_progress:
                on_progress(path)
            finding = Finding(
                path=path,
                size_bytes=size_of(path, True),
                category=rule.category,
                description=rule.description,
                matched_name=path.name,
                is_ide=True,
            )
            if finding_filter(finding):
                findings.append(finding)
        return findings

    def clean(
        self,
        findings: Iterable[Finding],
        mode: CleanupMode,
        confirm: ConfirmCallback | None = None,
        on_event: EventCallback | None = None,
    ) -> CleanupResult:
        """Delete or simulate deleting findings in their current order."""
        return CleanupExecutor(confirm=confirm, on_event=on_event).execute(findings, mode)
