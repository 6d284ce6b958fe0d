# -*- coding: utf-8 -*-
# ============================================================================ #
# Hard75 Tracker                                                               #
# Copyright (c) 2025 Hard75 Tracker contributors                               #
# Licensed under the MIT License                                               #
# ============================================================================ #

"""
Tracking Services - daily status and 75-day history reconstruction
"""

from .day_clock import DayClock
from .models import (
    CHALLENGE_DAYS,
    DailyResource,
    DayState,
    DayStatus,
    GuildMember,
    Participant,
    day_state_character,
    default_history,
)
from .progress_store import ProgressStore
from .rendering import render_history_panel, render_status_panel
from .tracker_service import TrackerService

__all__ = [
    'CHALLENGE_DAYS', 'DailyResource', 'DayState', 'DayStatus', 'GuildMember', 'Participant',
    'day_state_character', 'default_history',
    'DayClock', 'ProgressStore', 'TrackerService',
    'render_history_panel', 'render_status_panel',
]
