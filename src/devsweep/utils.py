"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import shutil
from pathlib import Path

log = logging.getLogger(__name__)

_MB = 1024 * 1024


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def home_dir() -> Path | None:
    """Return the user's home directory from the environment, or None."""
    home = os.environ.get("HOME") or os.environ.get("USERPROFILE")
    return Path(home) if home else None


def size_of(path: Path | str, is_directory: bool) -> int:
    """Calculate the byte size of a file or of a whole directory tree.

    Directory trees are summed without any depth limit. Symlinks are
    counted as leaves using their own ``lstat`` size and never
    followed. Any entry that cannot be listed or stat'ed contributes 0
    and does not affect its siblings.
    """
    if not is_directory:
        try:
            return os.lstat(path).st_size
        except OSError:
            log.debug("Cannot stat: %s", path)
            return 0

    total = 0
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                        else:
                            total += entry.stat(follow_symlinks=False).st_size
                    except OSError:
                        log.debug("Cannot stat: %s", entry.path)
        except OSError:
            log.debug("Cannot list: %s", current)
    return total


def remove_path(path: Path) -> None:
    """Remove a file or a directory tree.

    A target that is already gone, wholly or partly, is not an error.
    Other ``OSError`` failures propagate to the caller.
    """
    for attempt in range(2):
        try:
            if path.is_dir() and not path.is_symlink():
                shutil.rmtree(path)
            else:
                path.unlink()
            return
        except FileNotFoundError:
            if not os.path.lexists(path):
                return
            if attempt:
                raise
            log.debug("Entries vanished while removing %s, retrying", path)


def bytes_to_mb(size_bytes: int) -> float:
    return size_bytes / _MB


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"

    units = ("B", "KB", "MB", "GB", "TB")
    value = float(size_bytes)
    for unit in units[:-1]:
        if abs(value) < 1024:
            return f"{value:.1f} {unit}" if unit != "B" else f"{int(value)} B"
        value /= 1024
    return f"{value:.1f} {units[-1]}"
