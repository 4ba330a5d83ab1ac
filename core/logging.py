"""Logging configuration for the sleep challenge engine.

Console output is always enabled; a daily-rotated log file is added when
``SLEEP_LOG_DIR`` is set. Levels come from ``SLEEP_LOG_LEVEL`` with optional
per-handler overrides (``SLEEP_LOG_CONSOLE_LEVEL``, ``SLEEP_LOG_FILE_LEVEL``).
"""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
from typing import Any

from core.utils.env import get_env, get_int_env

# Trimmed from ``pathname`` so log lines show package-relative locations
_PATH_TRIM_PREFIXES = ("/app/", "/srv/sleep/")
_QUIET_LOGGERS = ("aiomysql", "asyncpg", "aiosqlite", "sqlalchemy.engine", "sqlalchemy.pool")
_DEFAULT_LOG_FILE = "sleep-engine.log"

_base_record_factory = logging.getLogRecordFactory()
_record_factory_installed = False
_configured = False


def _level(env_key: str, default: str) -> str:
    value = (get_env(env_key) or "").strip().upper()
    if value and isinstance(logging.getLevelName(value), int):
        return value
    return default


def _flag(env_key: str) -> bool:
    return (get_env(env_key) or "").strip().lower() in {"1", "true", "yes", "on"}


def _install_record_factory() -> None:
    """Expose ``shortpathname`` on every record for the log format."""

    global _record_factory_installed
    if _record_factory_installed:
        return

    def factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
        record = _base_record_factory(*args, **kwargs)
        pathname = record.pathname or ""
        record.shortpathname = next(
            (pathname[len(prefix):] for prefix in _PATH_TRIM_PREFIXES if pathname.startswith(prefix)),
            pathname,
        )
        return record

    logging.setLogRecordFactory(factory)
    _record_factory_installed = True


def _format() -> str:
    timestamp = "%(asctime)s.%(msecs)03d" if _flag("SLEEP_LOG_TIME_MS") else "%(asctime)s"
    return f"{timestamp} %(levelname)s [%(shortpathname)s:%(lineno)d] - %(message)s"


def _handlers(root_level: str) -> dict[str, dict[str, Any]]:
    handlers: dict[str, dict[str, Any]] = {
        "console": {
            "class": "logging.StreamHandler",
            "level": _level("SLEEP_LOG_CONSOLE_LEVEL", root_level),
            "formatter": "standard",
            "stream": "ext://sys.stdout",
        },
    }

    log_dir = get_env("SLEEP_LOG_DIR")
    if log_dir:
        path = Path(log_dir)
        path.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.handlers.TimedRotatingFileHandler",
            "level": _level("SLEEP_LOG_FILE_LEVEL", root_level),
            "formatter": "standard",
            "filename": str(path / (get_env("SLEEP_LOG_FILE") or _DEFAULT_LOG_FILE)),
            "when": "midnight",
            "backupCount": get_int_env("SLEEP_LOG_RETENTION", 7),
            "encoding": "utf-8",
        }
    return handlers


def setup_logging(force: bool = False) -> None:
    """Configure the root logger; repeated calls are no-ops unless ``force`` is set."""

    global _configured
    if _configured and not force:
        return

    _install_record_factory()

    root_level = _level("SLEEP_LOG_LEVEL", "INFO")
    handlers = _handlers(root_level)
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {"standard": {"format": _format(), "datefmt": "%Y-%m-%d %H:%M:%S"}},
            "handlers": handlers,
            "root": {"level": root_level, "handlers": list(handlers)},
        }
    )
    logging.captureWarnings(True)

    # Driver and pool chatter stays at WARNING even when the engine logs at DEBUG
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _configured = True


__all__ = ["setup_logging"]
