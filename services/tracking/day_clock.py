# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #
"""Wall-clock helpers anchored to the challenge start date and timezone."""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Optional

from utils.time_utils import get_timezone, to_timezone


class DayClock:
    """Pure functions of an instant: the challenge day index and date tags.

    Every method accepts an optional ``now``; naive datetimes are read as UTC.
    """

    def __init__(self, campaign_start: date, timezone_name: str) -> None:
        self.campaign_start = campaign_start
        self.timezone_name = timezone_name
        self.tz = get_timezone(timezone_name)

    def local_now(self, now: Optional[datetime] = None) -> datetime:
        return to_timezone(now or datetime.now(timezone.utc), self.timezone_name)

    def today(self, now: Optional[datetime] = None) -> date:
        return self.local_now(now).date()

    def current_day_index(self, now: Optional[datetime] = None) -> int:
        """1-based day of the challenge; never less than 1."""
        return max(1, (self.today(now) - self.campaign_start).days + 1)

    def date_tag(self, now: Optional[datetime] = None) -> str:
        """``MM-DD-YY`` tag used in thread names."""
        return self.today(now).strftime("%m-%d-%y")

    def iso_tag(self, now: Optional[datetime] = None) -> str:
        """``YYYY-MM-DD`` tag used for the daily reset marker."""
        return self.today(now).isoformat()

    def clock_reading(self, now: Optional[datetime] = None) -> str:
        """Local ``HH:MM`` reading."""
        return self.local_now(now).strftime("%H:%M")
