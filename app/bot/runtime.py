# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Runtime state helpers for the Discord bot."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

import pytz

from app.bootstrap import ensure_log_files, initialize_logging, resolve_timezone
from services.config.config_service import TrackerConfig


@dataclass(frozen=True)
class BotRuntime:
    """Aggregated state required by the bot entrypoint and event handlers."""

    config: TrackerConfig
    logger: logging.Logger
    timezone: pytz.BaseTzInfo
    logs_dir: Path


def build_runtime(config: TrackerConfig, logs_dir: Path | None = None) -> BotRuntime:
    """Construct the runtime container for the bot."""

    logger = initialize_logging("tracker.bot", level=logging.INFO)
    timezone = resolve_timezone(config, logger=logger)

    logs_dir = logs_dir or Path(__file__).resolve().parents[2] / "logs"
    ensure_log_files(logger, logs_dir)

    logger.info("Final effective timezone for logging and operations: %s", timezone)

    return BotRuntime(
        config=config,
        logger=logger,
        timezone=timezone,
        logs_dir=logs_dir,
    )
