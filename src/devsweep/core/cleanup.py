"""Deletion of discovered artifacts."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from enum import Enum
from pathlib import Path
from typing import Callable

from devsweep.models.clean_result import CleanupResult
from devsweep.models.scan_result import Finding
from devsweep.utils import remove_path

log = logging.getLogger(__name__)

ConfirmCallback = Callable[[Finding], bool]
EventCallback = Callable[[Finding, str, str], None]  # (finding, status, detail)
Remover = Callable[[Path], None]


class CleanupMode(str, Enum):
    DRY_RUN = "dry_run"
    INTERACTIVE = "interactive"
    NON_INTERACTIVE = "non_interactive"


class CleanupExecutor:
    """Deletes (or simulates deleting) findings one at a time.

    IDE findings are never removed in any mode. Interactive mode asks
    ``confirm`` before each item; a falsy answer keeps the item. A
    failure on one item is recorded and the queue carries on.

    Events reported through ``on_event``: ``would_delete``,
    ``skip_ide``, ``skipped``, ``deleted`` and ``failed`` (with the
    reason as detail).
    """

    def __init__(
        self,
        confirm: ConfirmCallback | None = None,
        on_event: EventCallback | None = None,
        remover: Remover = remove_path,
    ) -> None:
        self.confirm = confirm
        self.on_event = on_event
        self.remover = remover

    def execute(self, findings: Iterable[Finding], mode: CleanupMode) -> CleanupResult:
        if mode is CleanupMode.INTERACTIVE and self.confirm is None:
            raise ValueError("Interactive cleanup needs a confirm callback")

        result = CleanupResult(mode=mode.value)
        for finding in findings:
            if finding.is_ide:
                result.skipped_ide.append(finding.path)
                self._emit(finding, "skip_ide")
                continue

            if mode is CleanupMode.DRY_RUN:
                result.would_delete.append(finding.path)
                self._emit(finding, "would_delete")
                continue

            if mode is CleanupMode.INTERACTIVE and not self.confirm(finding):
                result.skipped.append(finding.path)
                self._emit(finding, "skipped")
                continue

            self._delete(finding, result)

        log.info(
            "Cleanup (%s): %d deleted, %d bytes freed, %d failed",
            mode.value,
            result.deleted_count,
            result.deleted_bytes,
            len(result.failed),
        )
        return result

    def _delete(self, finding: Finding, result: CleanupResult) -> None:
        try:
            self.remover(finding.path)
        except OSError as e:
            reason = e.strerror or str(e)
            log.warning("Failed to delete %s: %s", finding.path, reason)
            result.failed.append((finding.path, reason))
            self._emit(finding, "failed", reason)
            return
        result.deleted.append(finding.path)
        result.deleted_count += 1
        result.deleted_bytes += finding.size_bytes
        self._emit(finding, "deleted")

    def _emit(self, finding: Finding, status: str, detail: str = "") -> None:
        if self.on_event:
            self.on_event(finding, status, detail)
