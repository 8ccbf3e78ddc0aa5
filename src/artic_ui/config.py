"""UI-side accessors for the shared configuration."""

from typing import Any

from artic_core.config_manager import get_config_manager


def get_setting(dotted_path: str, default: Any = None) -> Any:
    """Read a value from `settings` in config.json (see `ConfigManager.get_setting`)."""
    return get_config_manager().get_setting(dotted_path, default)
