"""
Shared logging configuration helpers.

Uses the `config.yaml` logging section and optional environment overrides
to configure the root logger with a console handler and, optionally,
a file handler.
"""

from __future__ import annotations

import logging
import logging.config
import os
from pathlib import Path
from typing import Any, Dict

from .config import DEFAULT_CONFIG_PATH, load_config

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Path enumeration logs per query at DEBUG; kept at INFO unless config.yaml lowers it
DEFAULT_LOGGER_LEVELS = {
    "sophia_graph.graph.paths": "INFO",
}


def _logger_levels(overrides: Any) -> Dict[str, Any]:
    """
    Per-logger levels for the engine modules.

    `logging.loggers` in config.yaml maps logger names to levels and is
    merged over DEFAULT_LOGGER_LEVELS. Records still propagate to the root
    handlers.
    """
    if overrides is not None and not isinstance(overrides, dict):
        raise ValueError(f"logging.loggers must be a mapping, got {overrides!r}")
    levels = dict(DEFAULT_LOGGER_LEVELS)
    levels.update(overrides or {})
    return {name: {"level": str(level).upper()} for name, level in levels.items()}


def build_logging_config(logging_cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate the `logging` section of config.yaml into a dictConfig mapping.

    The LOG_LEVEL environment variable takes precedence over the configured
    root level. Per-logger levels come from `logging.loggers`.
    """
    env_level = os.getenv("LOG_LEVEL")
    level_name = (env_level or logging_cfg.get("level") or "INFO").upper()

    log_format = logging_cfg.get("format", DEFAULT_LOG_FORMAT)
    log_file = logging_cfg.get("file")

    handlers: Dict[str, Any] = {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
            "level": level_name,
        },
    }
    root_handlers = ["console"]

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers["file"] = {
            "class": "logging.FileHandler",
            "formatter": "standard",
            "level": level_name,
            "filename": log_file,
            "encoding": "utf-8",
        }
        root_handlers.append("file")

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "standard": {
                "format": log_format,
            },
        },
        "handlers": handlers,
        "loggers": _logger_levels(logging_cfg.get("loggers")),
        "root": {
            "level": level_name,
            "handlers": root_handlers,
        },
    }


def setup_logging(config_path: str = DEFAULT_CONFIG_PATH) -> None:
    """
    Initialize application-wide logging configuration.

    - Reads `logging.level`, `logging.format`, and `logging.file` from config.yaml.
    - Allows overriding the log level via LOG_LEVEL environment variable.
    - Configures both console and file handlers (if a file path is provided).
    """
    config = load_config(config_path)
    logging_cfg = config.get("logging", {}) if isinstance(config, dict) else {}
    logging.config.dictConfig(build_logging_config(logging_cfg or {}))
