# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
import textwrap
from datetime import datetime, timezone
from typing import List, Optional

import pytz

from utils.logging_utils import setup_logger

logger = setup_logger('tracker.time_utils')


def get_timezone(tz_name: Optional[str]):
    """
    Returns the pytz timezone for *tz_name*, falling back to UTC.

    Args:
        tz_name: Name of the timezone (e.g. 'America/Los_Angeles'), None for UTC
    """
    if not tz_name:
        return pytz.UTC
    try:
        return pytz.timezone(tz_name)
    except (pytz.exceptions.UnknownTimeZoneError, AttributeError, TypeError) as e:
        logger.warning(f"Invalid timezone '{tz_name}', falling back to UTC: {e}")
        return pytz.UTC


def ensure_aware(dt: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def to_timezone(dt: datetime, tz_name: Optional[str]) -> datetime:
    """Converts *dt* to the named timezone."""
    return ensure_aware(dt).astimezone(get_timezone(tz_name))


def format_panel_timestamp(dt: datetime) -> str:
    """
    Formats a timezone-aware datetime for the status panel footer.

    Example: ``Saturday, October 18 2025 at 09:05 AM PDT``
    """
    return f"{dt.strftime('%A, %B')} {dt.day} {dt.year} at {dt.strftime('%I:%M %p')} {dt.tzname()}"


def wrap_footer(text: str, width: int) -> List[str]:
    """Splits a footer into lines of at most *width* characters on word boundaries."""
    return textwrap.wrap(text, width) or [""]
