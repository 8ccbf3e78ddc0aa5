"""Local configuration manager for the catalog API and UI settings.

Values are read from an optional `config.json` file and deep-merged over
built-in defaults. The file is never created implicitly: the app keeps no
state on disk, so a missing file simply means "use the defaults".
"""

from __future__ import annotations

import copy
import json
import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any

# Plain stdlib logger: `logger.get_logger` reads its level from this module.
_log = logging.getLogger("artic_studio.config")

DEFAULT_CONFIG_JSON: dict[str, Any] = {
    "paths": {
        "logs_dir": "data/local/logs",
    },
    "settings": {
        "api": {
            "base_url": "https://api.artic.edu/api/v1",
            "request_timeout": 20,
            "fields": [
                "id",
                "title",
                "place_of_origin",
                "artist_display",
                "inscriptions",
                "date_start",
                "date_end",
            ],
            "user_agent": "artic-table-studio/0.1 (+https://api.artic.edu/docs/)",
        },
        "ui": {
            "rows_per_page_options": [12, 24, 48],
            "default_rows_per_page": 12,
            "toast_duration": 3000,
            "theme_preset": "rosewater",
        },
        "logging": {
            "level": "INFO",
            "file_enabled": False,
        },
        "server": {
            "port": 8000,
            "max_sessions": 500,
        },
        "security": {
            "session_secret": "",
        },
    },
}


def _merge_into(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """Recursively overlay `overrides` on `base` (in place); nested dicts are merged, not replaced."""
    for key, value in (overrides or {}).items():
        current = base.get(key)
        base[key] = _merge_into(current, value) if isinstance(value, dict) and isinstance(current, dict) else value
    return base


def default_config_path() -> Path:
    """`./config.json` when present, otherwise `~/.artic-studio/config.json`."""
    local = Path.cwd() / "config.json"
    return local if local.exists() else Path.home() / ".artic-studio" / "config.json"


def _read_overrides(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        parsed = json.loads(path.read_text(encoding="utf-8") or "{}")
    except (OSError, json.JSONDecodeError) as exc:
        _log.warning("Ignoring unreadable config file %s: %s", path, exc)
        return {}
    if not isinstance(parsed, dict):
        _log.warning("Ignoring config file %s: top level is not an object", path)
        return {}
    return parsed


@dataclass
class ConfigManager:
    """Built-in defaults overlaid with the optional config.json, addressed by dotted paths."""

    path: Path
    _data: dict[str, Any]

    @classmethod
    def load(cls, path: Path | None = None) -> ConfigManager:
        cfg_path = path or default_config_path()
        merged = _merge_into(copy.deepcopy(DEFAULT_CONFIG_JSON), _read_overrides(cfg_path))
        return cls(path=cfg_path, _data=merged)

    def get_setting(self, dotted_path: str, default: Any = None) -> Any:
        """Look up `settings.<dotted_path>`; missing keys and null values yield `default`.

        Example: `get_setting("api.base_url", "https://api.artic.edu/api/v1")`.
        """
        node: Any = self._data.get("settings") or {}
        for key in filter(None, (dotted_path or "").split(".")):
            if not isinstance(node, dict) or key not in node:
                return default
            node = node[key]
        return default if node is None else node

    def set_logs_dir(self, value: str) -> None:
        self._data.setdefault("paths", {})["logs_dir"] = (value or "").strip() or "data/local/logs"

    def get_logs_dir(self) -> Path:
        """Absolute logs directory; relative values are anchored at the working directory."""
        raw = (self._data.get("paths") or {}).get("logs_dir") or "data/local/logs"
        logs_dir = Path(str(raw)).expanduser()
        return logs_dir if logs_dir.is_absolute() else (Path.cwd() / logs_dir).resolve()

    def get_rows_per_page_options(self) -> list[int]:
        """Allowed page sizes: positive ints, sorted, de-duplicated; [12, 24, 48] if none survive."""
        raw = self.get_setting("ui.rows_per_page_options", [])
        options = set()
        for item in raw if isinstance(raw, list) else []:
            try:
                size = int(item)
            except (TypeError, ValueError):
                continue
            if size > 0:
                options.add(size)
        return sorted(options) or [12, 24, 48]

    def get_default_rows_per_page(self) -> int:
        options = self.get_rows_per_page_options()
        try:
            value = int(self.get_setting("ui.default_rows_per_page", options[0]))
        except (TypeError, ValueError):
            return options[0]
        return value if value in options else options[0]


@lru_cache(maxsize=1)
def get_config_manager() -> ConfigManager:
    """Process-wide ConfigManager, loaded on first call."""
    return ConfigManager.load()
