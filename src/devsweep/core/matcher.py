"""Classify directory entries against the artifact catalogue."""

from __future__ import annotations

from collections.abc import Iterable

from devsweep.catalogue import CATALOGUE
from devsweep.models.rule import ArtifactRule, EntryKind


class Matcher:
    """Decides whether a single directory entry is a catalogue hit.

    Exact rules are consulted first and require the entry kind to agree
    with the rule. Wildcard rules are tried afterwards in catalogue
    order and only ever match directories.
    """

    def __init__(self, rules: Iterable[ArtifactRule] = CATALOGUE) -> None:
        self._exact: dict[tuple[str, bool], ArtifactRule] = {}
        self._wildcards: list[ArtifactRule] = []
        for rule in rules:
            if rule.is_wildcard:
                self._wildcards.append(rule)
            else:
                self._exact.setdefault((rule.pattern, rule.entry_kind is EntryKind.DIRECTORY), rule)

    def classify(self, name: str, is_directory: bool) -> ArtifactRule | None:
        """Return the matching rule, or None when the entry is not an artifact."""
        rule = self._exact.get((name, is_directory))
        if rule is not None:
            return rule
        if not is_directory:
            return None
        for rule in self._wildcards:
            if rule.matches(name, is_directory):
                return rule
        return None
