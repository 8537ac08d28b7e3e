"""JSON-backed presentation settings."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from compactor.utils import xdg_config_home

log = logging.getLogger(__name__)

_SETTINGS_DIR = "compactor"
_SETTINGS_FILE = "settings.json"

DEFAULTS: dict[str, Any] = {
    "output": {"indent": None},
    "summary": {"top": 10},
}


def is_count(value: Any) -> bool:
    """Whether ``value`` is a usable non-negative integer setting."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


class Settings:
    """How compactor presents reports: JSON indentation and summary length.

    Only presentation lives here; what counts as compressible is fixed.
    Values are addressed by dot-notation keys (``"summary.top"``) and any
    key absent from the file resolves to ``DEFAULTS``. The file is only
    written by ``set``, typically through ``compactor config set``.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or (xdg_config_home() / _SETTINGS_DIR / _SETTINGS_FILE)
        self._data: dict[str, Any] = {}
        self._load()

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-notation key."""
        missing = object()
        value = _lookup(self._data, key, missing)
        if value is missing:
            value = _lookup(DEFAULTS, key, default)
        return value

    def get_count(self, key: str, *, nullable: bool = False) -> int | None:
        """Get a non-negative integer setting, falling back to its default.

        ``None`` is accepted only when ``nullable`` is set.
        """
        value = self.get(key)
        if is_count(value) or (nullable and value is None):
            return value
        fallback = _lookup(DEFAULTS, key, None)
        log.warning("Ignoring invalid %s in %s: %r (using %r)", key, self._path, value, fallback)
        return fallback

    def set(self, key: str, value: Any) -> None:
        """Set a value by dot-notation key and persist to disk."""
        parts = key.split(".")
        node = self._data
        for part in parts[:-1]:
            if part not in node or not isinstance(node[part], dict):
                node[part] = {}
            node = node[part]
        node[parts[-1]] = value
        self._save()

    def _load(self) -> None:
        """Load settings from disk, gracefully handling errors."""
        if not self._path.exists():
            return
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, OSError) as e:
            log.warning("Could not load settings from %s: %s", self._path, e)
            return
        if not isinstance(data, dict):
            log.warning("Ignoring settings in %s: expected a JSON object", self._path)
            return
        self._data = data

    def _save(self) -> None:
        """Persist settings to disk."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(
                json.dumps(self._data, indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            log.warning("Could not save settings to %s: %s", self._path, e)


def _lookup(data: dict[str, Any], key: str, default: Any) -> Any:
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return default
        node = node[part]
    return node
