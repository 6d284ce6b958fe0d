# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Runtime bootstrap helpers for the Discord bot."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import pytz

from services.config.config_service import TrackerConfig, load_config
from utils.logging_utils import refresh_debug_status, setup_logger

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_main_configuration() -> TrackerConfig:
    """Load the tracker configuration (file and environment)."""

    return load_config()


def initialize_logging(name: str, level: int = logging.INFO) -> logging.Logger:
    """Create the primary logger for the bot."""

    logger = setup_logger(name, level=level)
    refresh_debug_status()
    return logger


def resolve_timezone(
    config: Optional[TrackerConfig],
    *,
    default: str = "America/Los_Angeles",
    logger: Optional[logging.Logger] = None,
) -> pytz.BaseTzInfo:
    """Resolve the timezone defined in the configuration.

    Falls back to UTC when the configured timezone is unknown.
    """

    active_logger = logger or logging.getLogger("tracker.bootstrap")
    timezone_str = config.timezone if config is not None else default

    try:
        tz = pytz.timezone(timezone_str)
        active_logger.info("Using timezone '%s'", timezone_str)
        return tz
    except pytz.exceptions.UnknownTimeZoneError:
        active_logger.warning(
            "Unknown timezone '%s'. Falling back to UTC for this session.", timezone_str
        )

    return pytz.timezone("UTC")


def _has_file_handler(logger: logging.Logger, path: Path) -> bool:
    return any(
        isinstance(handler, logging.FileHandler)
        and getattr(handler, "baseFilename", "") == str(path)
        for handler in logger.handlers
    )


def ensure_log_files(logger: logging.Logger, logs_dir: Path) -> None:
    """Attach the ``discord.log`` (INFO+) and ``bot_error.log`` (ERROR+) handlers if missing."""

    logs_dir.mkdir(parents=True, exist_ok=True)

    for filename, level in (("discord.log", logging.INFO), ("bot_error.log", logging.ERROR)):
        path = logs_dir / filename
        if _has_file_handler(logger, path):
            continue
        handler = logging.FileHandler(path, encoding="utf-8")
        handler.setLevel(level)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)

    logger.info(
        "Bot file loggers initialized: discord.log (INFO+), bot_error.log (ERROR+)"
    )
