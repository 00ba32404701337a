"""Saved scan defaults read from a JSON file."""

from __future__ import annotations

import json
import logging
import math
from pathlib import Path
from typing import Any

from devsweep.config import ConfigError
from devsweep.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "devsweep"
_SETTINGS_FILE = "settings.json"


class Settings:
    """User defaults for scan options, edited by hand.

    Example ``settings.json``::

        {"scan": {"max_depth": 8, "min_size": 50, "sort": "type", "profile": "safe"}}

    Keys are addressed with dots (``scan.max_depth``). The typed
    accessors return None for a missing key and raise
    :class:`ConfigError` for a value of the wrong type.
    """

    _instance: Settings | None = None

    def __init__(self, path: Path | None = None) -> None:
        self.path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data = self._read()

    @classmethod
    def instance(cls) -> Settings:
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    def get(self, key: str, default: Any = None) -> Any:
        node: Any = self._data
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return default
            node = node[part]
        return node

    def get_int(self, key: str) -> int | None:
        value = self.get(key)
        if value is None:
            return None
        # bool is an int subclass; JSON true/false is not a depth
        if isinstance(value, bool) or not isinstance(value, int):
            raise self._invalid(key, value, "a whole number")
        return value

    def get_float(self, key: str) -> float | None:
        value = self.get(key)
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
            raise self._invalid(key, value, "a finite number")
        return float(value)

    def get_str(self, key: str) -> str | None:
        value = self.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            raise self._invalid(key, value, "a string")
        return value

    def _invalid(self, key: str, value: Any, expected: str) -> ConfigError:
        return ConfigError(f"Invalid value for setting '{key}' in {self.path}: {value!r} (expected {expected})")

    def _read(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.warning("Ignoring settings file %s: expected a JSON object", self.path)
            return {}
        return data
