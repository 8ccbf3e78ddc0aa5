import logging
import sys
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path
from typing import Any

APP_LOGGER_NAME = "artic_studio"


def _logging_setting(key: str, default: Any) -> Any:
    # Imported lazily: config_manager is importable before logging is set up.
    try:
        from .config_manager import get_config_manager

        return get_config_manager().get_setting(f"logging.{key}", default)
    except (ImportError, OSError, ValueError, RuntimeError):
        return default


def _configured_logs_dir() -> Path:
    try:
        from .config_manager import get_config_manager

        return get_config_manager().get_logs_dir()
    except (ImportError, OSError, ValueError, RuntimeError):
        return Path("logs")


# Only created when file logging is switched on.
LOG_BASE_DIR = _configured_logs_dir()

CONSOLE_FORMAT = logging.Formatter("%(levelname)s | %(name)s | %(message)s")
FILE_FORMAT = logging.Formatter(
    "%(asctime)s %(levelname)-7s %(name)s:%(funcName)s | %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

app_logger = logging.getLogger(APP_LOGGER_NAME)
app_logger.propagate = True


def _level_from_config() -> tuple[str, int]:
    name = str(_logging_setting("level", "INFO") or "INFO").upper()
    return name, getattr(logging, name, logging.INFO)


def _open_log_file(level: int) -> Path | None:
    """Attach a midnight-rotated `app.log` handler; returns the file or None on failure."""
    global LOG_BASE_DIR

    for candidate in (LOG_BASE_DIR, Path("logs")):
        try:
            candidate.mkdir(parents=True, exist_ok=True)
            handler = TimedRotatingFileHandler(
                candidate / "app.log", when="midnight", backupCount=30, encoding="utf-8"
            )
        except OSError as exc:
            sys.stderr.write(f"Cannot write logs to {candidate}: {exc}\n")
            continue
        LOG_BASE_DIR = candidate
        handler.setFormatter(FILE_FORMAT)
        handler.setLevel(level)
        app_logger.addHandler(handler)
        return candidate / "app.log"
    return None


def setup_logging():
    """Configure the 'artic_studio' logger once: console always, a rotating file if enabled."""
    level_name, level = _level_from_config()

    if app_logger.handlers:
        # Already configured; only follow level changes.
        if app_logger.level != level:
            app_logger.setLevel(level)
            for handler in app_logger.handlers:
                handler.setLevel(level)
        return

    app_logger.setLevel(level)
    console = logging.StreamHandler(sys.stdout)
    console.setFormatter(CONSOLE_FORMAT)
    console.setLevel(level)
    app_logger.addHandler(console)

    log_file = _open_log_file(level) if _logging_setting("file_enabled", False) else None
    app_logger.info("Logging initialized (Level: %s) -> %s", level_name, log_file or "console")


def summarize_for_debug(data: str, max_chars: int = 200) -> str:
    """Shorten a response body before it goes into a debug line."""
    if not data or len(data) <= max_chars:
        return data
    return f"{data[:max_chars]}... [{len(data) - max_chars} more chars, {len(data)} chars total]"


def get_logger(name: str) -> logging.Logger:
    """Return a child of the 'artic_studio' logger (configuring it on first use)."""
    setup_logging()
    if name != APP_LOGGER_NAME and not name.startswith(f"{APP_LOGGER_NAME}."):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)
