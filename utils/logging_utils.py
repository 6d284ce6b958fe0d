# -*- coding: utf-8 -*-
import logging
import os
import sys
from datetime import datetime
from typing import Optional

import pytz

# Constants for logging
DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DEBUG_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s [%(filename)s:%(lineno)d]'

# Cached debug status, refreshed via refresh_debug_status()
_debug_mode_enabled = None


def is_debug_mode_enabled() -> bool:
    """
    Checks if debug mode is enabled.

    ``TRACKER_DEBUG`` in the environment wins; otherwise the ``debug_mode``
    flag of the loaded configuration is used.

    Returns:
        bool: True if debug mode is enabled, otherwise False
    """
    global _debug_mode_enabled

    env_value = os.environ.get('TRACKER_DEBUG')
    if env_value is not None:
        return env_value.strip().lower() in ('1', 'true', 'yes', 'on')

    if _debug_mode_enabled is None:
        try:
            from services.config.config_service import load_config
            _debug_mode_enabled = bool(load_config().debug_mode)
        except (ImportError, AttributeError, RuntimeError) as e:
            print(f"Error loading debug status: {e}")
            _debug_mode_enabled = False

    return _debug_mode_enabled


def refresh_debug_status() -> bool:
    """
    Refreshes the cached debug status.
    Should be called when the configuration changes.
    """
    global _debug_mode_enabled
    _debug_mode_enabled = None
    debug_enabled = is_debug_mode_enabled()

    logger = logging.getLogger('tracker.config')
    if debug_enabled:
        logger.info("Debug mode has been ENABLED - DEBUG messages will be displayed")
    else:
        logger.info("Debug mode has been DISABLED - DEBUG messages will be suppressed")
    return debug_enabled


# A filter that only allows DEBUG logs when debug mode is enabled
class DebugModeFilter(logging.Filter):
    """
    Filter that only allows DEBUG messages when debug mode is enabled.
    INFO and higher levels are always allowed.
    """
    def filter(self, record):
        if record.levelno < logging.INFO:
            return is_debug_mode_enabled()
        return True


# A custom formatter class that uses the configured timezone
class TimezoneFormatter(logging.Formatter):
    """
    A custom formatter that uses the challenge timezone for timestamps in logs.
    """
    def __init__(self, fmt=None, datefmt=None, tz=None):
        super().__init__(fmt, datefmt)
        self.tz = tz

    def _resolve_timezone(self):
        if self.tz is not None:
            return self.tz
        try:
            from services.config.config_service import load_config
            return pytz.timezone(load_config().timezone)
        except (ImportError, AttributeError, pytz.exceptions.UnknownTimeZoneError):
            return pytz.UTC

    def formatTime(self, record, datefmt=None):
        """
        Overrides the formatTime method to use the configured timezone.
        """
        if datefmt is None:
            datefmt = self.datefmt or '%Y-%m-%d %H:%M:%S'

        tz = self._resolve_timezone()
        dt = datetime.fromtimestamp(record.created, tz)
        return dt.strftime(datefmt) + f" {dt.tzname()}"


def setup_logger(name: str, level=logging.INFO, log_to_console=True, custom_formatter=None) -> logging.Logger:
    """
    Creates a logger with the specified name and logging level.

    Args:
        name: Logger name
        level: Logging level (default: INFO)
        log_to_console: Whether to output logs to console
        custom_formatter: Optional custom formatter for the logs

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid duplicate handlers in case of re-initialization
    if logger.handlers:
        return logger

    if custom_formatter is None:
        if level <= logging.DEBUG:
            formatter = TimezoneFormatter(DEBUG_LOG_FORMAT)
        else:
            formatter = TimezoneFormatter(DEFAULT_LOG_FORMAT)
    else:
        formatter = custom_formatter

    if log_to_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        console_handler.addFilter(DebugModeFilter())
        logger.addHandler(console_handler)

    return logger


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Central logger factory with consistent configuration.

    Args:
        name: Logger name (e.g. 'tracker.module_name')
        level: Optional log level override

    Returns:
        Configured logger
    """
    if level is None:
        level = logging.DEBUG if is_debug_mode_enabled() else logging.INFO

    return setup_logger(name, level=level)


def get_module_logger(module_name: str) -> logging.Logger:
    """Creates a logger for modules with the tracker. prefix"""
    return get_logger(f'tracker.{module_name}')
