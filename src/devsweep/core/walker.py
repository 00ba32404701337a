"""Bounded-depth discovery of artifacts beneath a root directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Callable

from devsweep.core.matcher import Matcher
from devsweep.core.results import FindingFilter
from devsweep.models.rule import ArtifactRule
from devsweep.models.scan_result import Finding
from devsweep.utils import size_of

log = logging.getLogger(__name__)

MatchCallback = Callable[[Path], None]


class ScanError(Exception):
    """Raised when the scan root itself cannot be listed."""


def is_pruned_match(rule: ArtifactRule | None) -> bool:
    """Matched entries are leaves: their contents are sized, never walked."""
    return rule is not None


def is_hidden_dir(name: str, is_directory: bool) -> bool:
    """Unmatched dot-directories (``.git``, ``.idea``...) are not descended into."""
    return is_directory and name.startswith(".")


class Walker:
    """Walks a directory tree collecting catalogue matches.

    Classification is depth-limited; sizing of a matched directory is
    not. ``dirs_visited`` counts every directory that was listed.
    """

    def __init__(
        self,
        matcher: Matcher,
        finding_filter: FindingFilter | None = None,
        on_match: MatchCallback | None = None,
    ) -> None:
        self.matcher = matcher
        self.finding_filter = finding_filter or FindingFilter()
        self.on_match = on_match
        self.dirs_visited = 0

    def walk(self, root: Path | str, max_depth: int) -> list[Finding]:
        """Return the findings under ``root``, current level before descendants.

        Raises:
            ScanError: if ``root`` cannot be listed.
        """
        self.dirs_visited = 0
        findings: list[Finding] = []
        # LIFO of (directory, depth); children are pushed in reverse so
        # they pop in listing order.
        stack: list[tuple[Path, int]] = [(Path(root), 0)]
        is_root = True
        while stack:
            directory, depth = stack.pop()
            if depth > max_depth:
                continue
            subdirs = self._visit_dir(directory, findings, is_root)
            is_root = False
            stack.extend((subdir, depth + 1) for subdir in reversed(subdirs))
        log.info("Visited %d directories, %d findings", self.dirs_visited, len(findings))
        return findings

    def _visit_dir(self, directory: Path, findings: list[Finding], is_root: bool) -> list[Path]:
        """Record matches in one directory and return the subdirectories to walk."""
        try:
            with os.scandir(directory) as it:
                entries = list(it)
        except OSError as e:
            if is_root:
                raise ScanError(f"Cannot read {directory}: {e.strerror or e}") from e
            log.debug("Cannot list %s: %s", directory, e)
            return []

        self.dirs_visited += 1

        subdirs: list[Path] = []
        for entry in entries:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            rule = self.matcher.classify(entry.name, is_dir)
            if is_pruned_match(rule):
                self._record(Path(entry.path), entry.name, is_dir, rule, findings)
            elif is_hidden_dir(entry.name, is_dir):
                log.debug("Skipping hidden directory: %s", entry.path)
            elif is_dir:
                subdirs.append(Path(entry.path))

        return subdirs

    def _record(
        self,
        path: Path,
        name: str,
        is_dir: bool,
        rule: ArtifactRule,
        findings: list[Finding],
    ) -> None:
        if not self.finding_filter.admits_category(rule.category):
            return
        if self.on_match:
            self.on_match(path)
        size = size_of(path, is_dir)
        if not self.finding_filter.admits_size(size):
            log.debug("Below size threshold: %s (%d bytes)", path, size)
            return
        findings.append(
            Finding(
                path=path,
                size_bytes=size,
                category=rule.category,
                description=rule.description,
                matched_name=name,
            )
        )
